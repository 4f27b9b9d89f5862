"""Shared fixtures: deterministic ids and a default payer."""

import itertools

import pytest

from paykit.services.payments.models import PaymentDetails
from paykit.services.shipping.carrier import SimulatedCarrierClient


@pytest.fixture
def ids():
    """Id generator producing `<prefix>_0001`, `<prefix>_0002`, ..."""

    counter = itertools.count(1)
    return lambda prefix: f"{prefix}_{next(counter):04d}"


@pytest.fixture
def details() -> PaymentDetails:
    return PaymentDetails(
        customer_id="cust-42",
        customer_email="john.doe@example.com",
        customer_name="John Doe",
    )


@pytest.fixture
def declined_details() -> PaymentDetails:
    return PaymentDetails(customer_id="force-decline-7", customer_email="nope@example.com")


@pytest.fixture
def carrier() -> SimulatedCarrierClient:
    return SimulatedCarrierClient(delay_seconds=0)
