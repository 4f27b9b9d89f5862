"""Error kinds raised by payment and shipping components.

Each maps to one human-readable message. None of them is retried; callers handle
them at the boundary where text is rendered for a user.
"""


class PaykitError(Exception):
    """Base class for every error this package raises on purpose."""


class UnknownProviderError(PaykitError, LookupError):
    """A provider, payment method, region or shipping type name is not registered."""


class DuplicateProviderError(PaykitError):
    """A name is registered twice (names compare case-insensitively)."""


class InvalidAmountError(PaykitError, ValueError):
    """A monetary amount is outside its domain (must be positive)."""


class InvalidInputError(PaykitError, ValueError):
    """A numeric input such as weight or order value is outside its domain."""


class UnsupportedOperationError(PaykitError, RuntimeError):
    """The selected variant cannot serve this request, e.g. too heavy for same-day."""


class FamilyMismatchError(PaykitError):
    """Components from different provider families were combined."""


class InvalidTransitionError(PaykitError, ValueError):
    """A transaction was asked to move to a state it cannot reach."""


class CarrierRateError(PaykitError):
    """The carrier rate lookup failed or returned something unusable."""
