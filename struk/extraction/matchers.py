"""Ordered field matchers.

Each field is described by a list of matcher functions ``text -> value``.
The list is tried in order and the first non-empty value wins; a later
alternative is only consulted when every earlier one missed.
"""

import re
from typing import Callable, Iterable, Optional

Matcher = Callable[[str], Optional[str]]

# Optional separator and currency mark, then a printed amount
AMOUNT = r"\s*[:\-]?\s*(?:Rp\.?)?\s*(\d[\d.,]*)"

ORDER_NUMBER = r"(?:No\.?\s*Pesanan|Nomor\s+Pesanan)\s*[:\-]?\s*([A-Z0-9]+)"


def pattern(regex: str, flags: int = re.IGNORECASE, group: int = 1) -> Matcher:
    """Build a matcher returning ``group`` of the first regex hit."""
    compiled = re.compile(regex, flags)

    def match(text: str) -> Optional[str]:
        found = compiled.search(text)
        if not found:
            return None
        if compiled.groups < group:
            return found.group(0)
        # An optional group that did not take part comes back as None
        return found.group(group)

    match.__name__ = f"pattern({regex!r})"
    return match


def refine(matcher: Matcher, transform: Callable[[str], Optional[str]]) -> Matcher:
    """Post-process a matcher's hit; an empty result counts as a miss."""

    def match(text: str) -> Optional[str]:
        value = matcher(text)
        if not value:
            return None
        return transform(value) or None

    match.__name__ = f"refine({matcher.__name__})"
    return match


def first_match(text: str, matchers: Iterable[Matcher]) -> Optional[str]:
    """Run ``matchers`` in order and return the first non-empty value."""
    if not text:
        return None
    for matcher in matchers:
        value = matcher(text)
        if value:
            return value
    return None
