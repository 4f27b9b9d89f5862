"""Provider registry lookup and family consistency."""

import pytest

from paykit.common.errors import DuplicateProviderError, FamilyMismatchError, UnknownProviderError
from paykit.services.payments.models import Provider
from paykit.services.payments.providers import (
    PayPalReceiptGenerator,
    ProviderFamily,
    stripe_family,
)
from paykit.services.payments.registry import ProviderRegistry, build_default_registry


def test_default_registry_lists_providers(ids):
    """Built-in families are registered in a stable order."""

    registry = build_default_registry(ids)
    assert registry.providers() == ["Stripe", "PayPal", "BankTransfer"]
    assert len(registry) == 3


@pytest.mark.parametrize("name", ["Stripe", "PayPal", "BankTransfer"])
def test_family_members_share_provider_identity(ids, name):
    """Every member of a resolved family reports the family's provider."""

    family = build_default_registry(ids).resolve(name)
    assert family.name == name
    assert family.processor.provider == name
    assert family.generator.provider == name
    assert family.handler.provider == name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("stripe", "Stripe"),
        ("STRIPE", "Stripe"),
        ("  Stripe ", "Stripe"),
        ("paypal", "PayPal"),
        ("banktransfer", "BankTransfer"),
        (Provider.PAYPAL, "PayPal"),
    ],
)
def test_resolve_ignores_case(ids, name, expected):
    """Case variants of a registered name resolve to the same family."""

    registry = build_default_registry(ids)
    assert registry.resolve(name) is registry.resolve(expected)
    assert registry.resolve(name).name == expected
    assert name in registry


@pytest.mark.parametrize("name", ["unknown-provider", "", "Venmo", "Stripe2"])
def test_resolve_unknown_provider(ids, name):
    """Unregistered names fail with UnknownProviderError."""

    with pytest.raises(UnknownProviderError):
        build_default_registry(ids).resolve(name)


def test_register_duplicate_is_case_insensitive(ids):
    """Registering the same name twice fails whatever the case."""

    registry = ProviderRegistry()
    registry.register("Stripe", stripe_family(ids))
    with pytest.raises(DuplicateProviderError):
        registry.register("stripe", stripe_family(ids))


def test_family_rejects_mixed_components(ids):
    """A family cannot be assembled from two providers."""

    stripe = stripe_family(ids)
    with pytest.raises(FamilyMismatchError):
        ProviderFamily(
            name="Stripe",
            processor=stripe.processor,
            generator=PayPalReceiptGenerator(ids),
            handler=stripe.handler,
        )


def test_unknown_provider_is_a_lookup_error(ids):
    """Callers catching LookupError still see unknown providers."""

    with pytest.raises(LookupError):
        ProviderRegistry().resolve("Stripe")


def test_register_rejects_family_under_another_name(ids):
    """A family can only be registered under its own provider name."""

    registry = ProviderRegistry()
    with pytest.raises(FamilyMismatchError):
        registry.register("PayPal", stripe_family(ids))
    assert "PayPal" not in registry
    assert registry.providers() == []


def test_resolve_none_is_unknown(ids):
    """A missing name fails like any other unknown name."""

    with pytest.raises(UnknownProviderError):
        build_default_registry(ids).resolve(None)
