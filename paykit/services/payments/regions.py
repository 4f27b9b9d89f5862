"""Regional processor factories.

Every region decides for itself which payment methods exist and which processor
serves each one. A new region is a subclass plus one `RegionSelector` entry.
"""

from paykit.common.errors import UnknownProviderError
from paykit.common.ids import IdGenerator, random_id
from paykit.services.payments.methods import ALIPAY, INTERAC, PAYPAL, SOFORT, STRIPE_CARD, VENMO
from paykit.services.payments.models import PaymentDetails, PaymentResult
from paykit.services.payments.providers import FeeScheduleProcessor, PaymentProcessor, RateCard


class RegionalProcessorFactory:
    """Creates processors for one region's payment methods.

    Subclasses declare `region` and `rate_cards`; override `create_processor` when a
    method needs more than a rate card.
    """

    region: str
    rate_cards: dict[str, RateCard]

    def __init__(self, ids: IdGenerator = random_id) -> None:
        self.ids = ids

    def create_processor(self, payment_method: str) -> PaymentProcessor:
        for name, card in self.rate_cards.items():
            if name.casefold() == (payment_method or "").strip().casefold():
                return FeeScheduleProcessor(card, self.ids)
        raise UnknownProviderError(
            f"Payment method '{payment_method}' is not supported in {self.region}."
        )

    def supported_methods(self) -> list[str]:
        return list(self.rate_cards)

    def process_payment(self, payment_method: str, amount, details: PaymentDetails) -> PaymentResult:
        processor = self.create_processor(payment_method)
        return processor.process(amount, details)


class USProcessorFactory(RegionalProcessorFactory):
    region = "the US"
    rate_cards = {"CreditCard": STRIPE_CARD, "PayPal": PAYPAL, "Venmo": VENMO}


class EUProcessorFactory(RegionalProcessorFactory):
    region = "the EU"
    rate_cards = {"CreditCard": STRIPE_CARD, "PayPal": PAYPAL, "Sofort": SOFORT}


class AsiaProcessorFactory(RegionalProcessorFactory):
    region = "Asia"
    rate_cards = {"CreditCard": STRIPE_CARD, "PayPal": PAYPAL, "Alipay": ALIPAY}


class CanadaProcessorFactory(RegionalProcessorFactory):
    region = "Canada"
    rate_cards = {"CreditCard": STRIPE_CARD, "Interac": INTERAC}


class RegionSelector:
    """Picks the regional factory by region name, ignoring case."""

    def __init__(self, ids: IdGenerator = random_id) -> None:
        self._factories: dict[str, RegionalProcessorFactory] = {
            "us": USProcessorFactory(ids),
            "eu": EUProcessorFactory(ids),
            "asia": AsiaProcessorFactory(ids),
            "canada": CanadaProcessorFactory(ids),
        }

    def get(self, region: str) -> RegionalProcessorFactory:
        factory = self._factories.get((region or "").strip().casefold())
        if factory is None:
            raise UnknownProviderError(f"Region '{region}' is not supported.")
        return factory

    def regions(self) -> list[str]:
        return ["US", "EU", "Asia", "Canada"]
