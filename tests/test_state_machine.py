"""Unit tests for transaction state-machine guardrails."""

import pytest

from paykit.common.errors import InvalidTransitionError
from paykit.common.state_machine import TransactionState, is_terminal, validate_transition


def test_valid_transition():
    """Sanity check: a legal transition should pass."""

    validate_transition(TransactionState.IDLE, TransactionState.PROCESSING)
    validate_transition(TransactionState.RECEIPT_GENERATED, TransactionState.REFUNDED)


def test_invalid_transition():
    """Illegal transition must raise to protect coordination correctness."""

    with pytest.raises(InvalidTransitionError):
        validate_transition(TransactionState.IDLE, TransactionState.REFUNDED)


def test_failed_cannot_be_refunded():
    """A declined payment never reaches the refund step."""

    with pytest.raises(InvalidTransitionError, match="FAILED -> REFUNDED"):
        validate_transition(TransactionState.FAILED, TransactionState.REFUNDED)


def test_terminal_states():
    """FAILED and REFUNDED end a transaction; nothing else does."""

    terminal = {state for state in TransactionState if is_terminal(state)}
    assert terminal == {TransactionState.FAILED, TransactionState.REFUNDED}


def test_invalid_transition_is_a_value_error():
    """Callers catching ValueError still see transition errors."""

    with pytest.raises(ValueError):
        validate_transition(TransactionState.PROCESSING, TransactionState.IDLE)
