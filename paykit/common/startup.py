"""Startup-time helpers for safe config logging."""

from paykit.common.config import CommonSettings
from paykit.common.logging import logger


def _safe_value(name: str, value) -> str:
    """Return a printable value with simple redaction for secret-like names."""

    if value is None:
        return "<unset>"
    if any(secret in name.upper() for secret in ["KEY", "SECRET", "PASSWORD", "TOKEN"]):
        return "<redacted>"
    return str(value)


def log_startup_config(config: CommonSettings, keys: list[str]) -> dict[str, str]:
    """Log selected settings for quick troubleshooting and return what was logged."""

    logged = {"service": config.service_name}
    for key in keys:
        logged[key] = _safe_value(key, getattr(config, key, None))
    logger.info("startup_config=%s", logged)
    return logged
