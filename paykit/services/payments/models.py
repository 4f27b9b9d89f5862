"""Immutable value objects passed between processors, generators and handlers."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Provider(str, Enum):
    """Providers that ship with a built-in family."""

    STRIPE = "Stripe"
    PAYPAL = "PayPal"
    BANK_TRANSFER = "BankTransfer"


class ReceiptFormat(str, Enum):
    STRUCTURED_MARKUP = "structured-markup"
    PLAIN_TEXT = "plain-text"
    TAGGED_DATA = "tagged-data"


class PaymentDetails(BaseModel):
    """Who is paying. Metadata is free-form and never interpreted."""

    model_config = ConfigDict(frozen=True)

    customer_id: str = ""
    customer_email: str = ""
    customer_name: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class PaymentResult(BaseModel):
    """Outcome of one processing call."""

    model_config = ConfigDict(frozen=True)

    success: bool
    provider: str
    transaction_id: str
    amount: Decimal
    fee: Decimal
    message: str


class Receipt(BaseModel):
    """Rendered receipt for exactly one successful payment."""

    model_config = ConfigDict(frozen=True)

    receipt_id: str
    provider: str
    transaction_id: str
    format: ReceiptFormat
    content: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RefundResult(BaseModel):
    """Outcome of one refund call."""

    model_config = ConfigDict(frozen=True)

    success: bool
    provider: str
    refund_id: str
    transaction_id: str
    refunded_amount: Decimal
    message: str
