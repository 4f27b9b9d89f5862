"""Transaction state machine transitions enforced by the coordinator."""

from enum import Enum

from paykit.common.errors import InvalidTransitionError


class TransactionState(str, Enum):
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    RECEIPT_GENERATED = "RECEIPT_GENERATED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


ALLOWED_TRANSITIONS: dict[TransactionState, set[TransactionState]] = {
    TransactionState.IDLE: {TransactionState.PROCESSING},
    TransactionState.PROCESSING: {TransactionState.RECEIPT_GENERATED, TransactionState.FAILED},
    TransactionState.RECEIPT_GENERATED: {TransactionState.REFUNDED},
    TransactionState.FAILED: set(),
    TransactionState.REFUNDED: set(),
}


def validate_transition(current: TransactionState, new: TransactionState) -> None:
    """Raise when a transition is not allowed by the state machine."""

    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidTransitionError(f"Invalid transition: {current.value} -> {new.value}")


def is_terminal(state: TransactionState) -> bool:
    return not ALLOWED_TRANSITIONS[state]
