"""Carrier rate lookups used by express shipping.

`SimulatedCarrierClient` stands in for a carrier with fixed rates and a fixed
latency. `HttpCarrierClient` calls a real rate endpoint with a request timeout.
"""

import time
from decimal import Decimal
from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from paykit.common.config import CommonSettings, settings
from paykit.common.errors import CarrierRateError
from paykit.common.logging import logger
from paykit.common.metrics import carrier_rate_seconds


class CarrierRate(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_cost: Decimal = Field(ge=0)
    per_kg_cost: Decimal = Field(ge=0)


class CarrierClient(Protocol):
    def get_express_rate(self, weight: Decimal) -> CarrierRate:
        ...


class SimulatedCarrierClient:
    """Fixed 15 + 2/kg express rate after `delay_seconds` of pretend network time."""

    def __init__(
        self,
        delay_seconds: float = 0.5,
        base_cost: Decimal = Decimal("15"),
        per_kg_cost: Decimal = Decimal("2"),
    ) -> None:
        self.delay_seconds = delay_seconds
        self.rate = CarrierRate(base_cost=base_cost, per_kg_cost=per_kg_cost)

    def get_express_rate(self, weight: Decimal) -> CarrierRate:
        logger.info("fetching express rate weight_kg=%s client=simulated", weight)
        with carrier_rate_seconds.labels(client="simulated").time():
            if self.delay_seconds > 0:
                time.sleep(self.delay_seconds)
        return self.rate


class HttpCarrierClient:
    """Reads `GET {base_url}/rates/express?weight=..` as `{"base_cost", "per_kg_cost"}`.

    The timeout is the deadline for the whole lookup. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"x-api-key": api_key} if api_key else {}
        self.client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    def get_express_rate(self, weight: Decimal) -> CarrierRate:
        logger.info("fetching express rate weight_kg=%s client=http", weight)
        with carrier_rate_seconds.labels(client="http").time():
            try:
                resp = self.client.get("/rates/express", params={"weight": str(weight)})
            except httpx.TimeoutException as exc:
                raise CarrierRateError(f"carrier rate lookup timed out: {exc}") from exc
            except httpx.HTTPError as exc:
                raise CarrierRateError(f"carrier rate lookup failed: {exc}") from exc
        if resp.status_code >= 400:
            raise CarrierRateError(f"carrier rate lookup failed (status={resp.status_code})")
        try:
            return CarrierRate.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise CarrierRateError("carrier rate response malformed") from exc

    def close(self) -> None:
        self.client.close()


def carrier_client_from_settings(config: CommonSettings = settings) -> CarrierClient:
    """HTTP client when `CARRIER_API_URL` is set, otherwise the simulated carrier."""

    if config.carrier_api_url:
        return HttpCarrierClient(
            config.carrier_api_url,
            api_key=config.carrier_api_key,
            timeout_seconds=config.carrier_timeout_seconds,
        )
    return SimulatedCarrierClient(delay_seconds=config.carrier_simulated_delay_seconds)
