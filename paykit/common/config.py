"""Central environment-driven settings shared by the library and its scripts.

Loaded once on import. Everything has a default so the payment and shipping
components work without any environment (see `.env.example`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "paykit"
    log_level: str = "INFO"
    carrier_api_url: str | None = None
    carrier_api_key: str | None = None
    carrier_timeout_seconds: float = 5.0
    carrier_simulated_delay_seconds: float = 0.5
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = CommonSettings()
