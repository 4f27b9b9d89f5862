"""Case-insensitive provider name -> `ProviderFamily` lookup."""

from paykit.common.errors import DuplicateProviderError, FamilyMismatchError, UnknownProviderError
from paykit.common.ids import IdGenerator, random_id
from paykit.common.logging import logger
from paykit.services.payments.models import Provider
from paykit.services.payments.providers import FAMILY_FACTORIES, ProviderFamily


def _normalize(name: str | Provider | None) -> str:
    if isinstance(name, Provider):
        name = name.value
    return (name or "").strip().casefold()


class ProviderRegistry:
    """Populated once at startup and only read afterwards.

    Families are stateless, so one instance per provider serves every transaction.
    Entries cannot be removed.
    """

    def __init__(self) -> None:
        self._families: dict[str, ProviderFamily] = {}

    def register(self, name: str | Provider, family: ProviderFamily) -> None:
        key = _normalize(name)
        if key != _normalize(family.name):
            raise FamilyMismatchError(f"Cannot register the {family.name} family as {name}")
        if key in self._families:
            raise DuplicateProviderError(f"Provider already registered: {name}")
        self._families[key] = family
        logger.info("registered provider family name=%s", family.name)

    def resolve(self, name: str | Provider) -> ProviderFamily:
        family = self._families.get(_normalize(name))
        if family is None:
            raise UnknownProviderError(
                f"No factory found for provider: {name}. Available providers: {self.providers()}"
            )
        return family

    def providers(self) -> list[str]:
        return [family.name for family in self._families.values()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, (str, Provider)) and _normalize(name) in self._families

    def __len__(self) -> int:
        return len(self._families)


def build_default_registry(ids: IdGenerator = random_id) -> ProviderRegistry:
    """Registry holding the Stripe, PayPal and BankTransfer families."""

    registry = ProviderRegistry()
    for provider, factory in FAMILY_FACTORIES.items():
        registry.register(provider, factory(ids))
    return registry
