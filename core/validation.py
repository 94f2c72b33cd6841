"""Per-field validation for the Add form."""

from enum import Enum
from typing import Final

CONFIRM_YES: Final[frozenset[str]] = frozenset({"y", "yes"})
CONFIRM_NO: Final[frozenset[str]] = frozenset({"n", "no"})
# Largest value that fits a SQLite INTEGER column.
MAX_UNSIGNED: Final[int] = 2**63 - 1


class FieldKind(Enum):
    UNSIGNED_INTEGER = "uint"
    PERCENTAGE = "percentage"
    CONFIRMATION = "confirm"
    FREE_TEXT = "text"


def _is_digits(token: str) -> bool:
    return bool(token) and token.isascii() and token.isdigit()


def validate(kind: FieldKind, raw_text: str) -> bool:
    """Return True when `raw_text` is acceptable for a field of `kind`.

    Surrounding whitespace is ignored. Numbers must be plain ASCII digits:
    signs, decimals and values above MAX_UNSIGNED (100 for percentages) are
    rejected, never clamped.
    Confirmation accepts yes/no (or y/n) in any letter case.
    """
    token = (raw_text or "").strip()
    if kind is FieldKind.FREE_TEXT:
        return bool(token)
    if kind is FieldKind.UNSIGNED_INTEGER:
        return _is_digits(token) and int(token) <= MAX_UNSIGNED
    if kind is FieldKind.PERCENTAGE:
        return _is_digits(token) and 0 <= int(token) <= 100
    if kind is FieldKind.CONFIRMATION:
        low = token.lower()
        return low in CONFIRM_YES or low in CONFIRM_NO
    raise ValueError(f"Unknown field kind: {kind!r}")


def parse_confirmation(raw_text: str) -> bool:
    """Convert a valid confirmation token to a flag."""
    low = (raw_text or "").strip().lower()
    if low in CONFIRM_YES:
        return True
    if low in CONFIRM_NO:
        return False
    raise ValueError(f"Invalid confirmation: {raw_text!r}")


__all__ = ["FieldKind", "validate", "parse_confirmation", "CONFIRM_YES", "CONFIRM_NO", "MAX_UNSIGNED"]
