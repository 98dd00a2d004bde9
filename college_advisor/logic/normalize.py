"""
Normalization Utilities

Canonicalizes free-text and numeric inputs (money, rank, grade, category, text)
into comparable forms. Every function is total: bad input yields an empty or
None result, never an exception.
"""

import math
import re
from typing import Any, Optional

from .constants import (
    CATEGORY_ALIASES,
    NAAC_GRADE_SCALE,
    RANK_BAND_MAP,
    Category,
)


_WHITESPACE_RE = re.compile(r"\s+")
_NON_DIGIT_RE = re.compile(r"\D")
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def normalize_text(value: Any) -> str:
    """Trim, lowercase and collapse whitespace runs. None -> ""."""
    if value is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(value).strip().lower())


def parse_money(value: Any) -> Optional[int]:
    """
    Parse a currency amount by keeping only its digits.

    Accepts strings like "₹60,000", "?60,000" or "60000".

    Returns:
        Non-negative integer, or None when no digits are present
    """
    if value is None or isinstance(value, bool):
        return None
    digits = _NON_DIGIT_RE.sub("", str(value))
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        # over the interpreter's int conversion digit limit
        return None


def parse_rank(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a rank value.

    Returns:
        Positive integer, or None for blank, non-numeric or non-positive input
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if isinstance(value, int):
        return value if value > 0 else None

    match = _LEADING_INT_RE.match(str(value).strip())
    if not match:
        return None
    try:
        n = int(match.group(0))
    except ValueError:
        return None
    return n if n > 0 else None


def rank_from_band(band: Any) -> Optional[int]:
    """Resolve a rank band label to its conservative upper bound."""
    if not band:
        return None
    return RANK_BAND_MAP.get(str(band).strip())


def normalize_category(category: Any) -> str:
    """
    Uppercase a category label and resolve legacy aliases.

    Returns:
        A Category code such as "OC" or "BC-B", or "" when blank or unknown
    """
    c = str(category or "").strip().upper()
    if not c:
        return ""
    if c in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[c].value
    try:
        return Category(c).value
    except ValueError:
        return ""


def grade_score(grade: Any) -> Optional[int]:
    """Ordinal NAAC score (A++=5 ... B=0), or None when unrecognized."""
    g = normalize_text(grade).upper()
    return NAAC_GRADE_SCALE.get(g)


def min_required_grade_score(min_grade: Any) -> Optional[int]:
    """Ordinal score of a requested minimum NAAC grade; None when not requested."""
    g = "".join(str(min_grade or "").split()).upper()
    if not g:
        return None
    if g == "B++":
        return NAAC_GRADE_SCALE["B++"]
    return grade_score(g)


def safe_website(url: Any) -> str:
    """Prefix a scheme-less website with https://."""
    raw = str(url or "").strip()
    if not raw:
        return ""
    if raw.startswith("http://") or raw.startswith("https://"):
        return raw
    return f"https://{raw}"


def format_inr(amount: int) -> str:
    """
    Group digits the Indian way (last three, then pairs).

    format_inr(120000) -> "1,20,000"
    """
    sign = "-" if amount < 0 else ""
    digits = str(abs(int(amount)))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])
