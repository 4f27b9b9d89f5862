"""Identifier generation for transactions, receipts and refunds.

Components take an `IdGenerator` so tests can pass a deterministic one.
"""

from typing import Callable
from uuid import uuid4

IdGenerator = Callable[[str], str]


def random_id(prefix: str) -> str:
    """`<prefix>_<32 hex chars>`; collisions are possible but negligible."""

    return f"{prefix}_{uuid4().hex}"
