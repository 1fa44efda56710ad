"""Shared text helpers used across scheduling and assignment modules."""

import re
from typing import Optional

UNKNOWN_CUSTOMER = "Unknown Customer"


def norm(value: Optional[str]) -> str:
    """Lowercase, trim, and collapse internal whitespace.

    Examples:
        >>> norm("  Quezon   City ")
        'quezon city'
        >>> norm(None)
        ''
    """
    return re.sub(r"\s+", " ", (value or "").strip().lower())


def join_name(*parts: Optional[str]) -> str:
    """Join name parts with single spaces, skipping blanks.

    Examples:
        >>> join_name("Maria", None, "Santos")
        'Maria Santos'
        >>> join_name("", "  ")
        ''
    """
    return " ".join(p.strip() for p in parts if p and p.strip())


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()
