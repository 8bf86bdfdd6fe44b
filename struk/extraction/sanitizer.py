"""Label stripping and character cleanup shared by every extracted field."""

import re
from typing import Any, Dict, Iterable, Pattern, Sequence

from .catalog import LABEL_PREFIXES

_WHITESPACE = re.compile(r"\s+")
_NON_DIGIT = re.compile(r"\D")


def clean(value: Any, labels: Sequence[Pattern[str]] = LABEL_PREFIXES) -> str:
    """
    Normalize whitespace and drop a restated field label from ``value``.

    Labels are only removed at the start of the string. The label table is
    walked once, in order, so ``"T Nama: BUDI"`` loses both ``T`` and
    ``Nama:`` but nothing is stripped a second time.

    Args:
        value: Captured text, may be None or empty
        labels: Anchored label patterns, applied in order

    Returns:
        Cleaned string, ``""`` for empty input
    """
    if not value:
        return ""

    text = _WHITESPACE.sub(" ", str(value)).strip()
    for label in labels:
        text = label.sub("", text, count=1)
    return text.strip()


def digits_only(value: Any) -> str:
    """Strip everything that is not a digit."""
    if not value:
        return ""
    return _NON_DIGIT.sub("", str(value))


def sanitize_fields(
    values: Dict[str, str],
    exclude: Iterable[str] = ("raw",),
    labels: Sequence[Pattern[str]] = LABEL_PREFIXES,
) -> Dict[str, str]:
    """Run :func:`clean` over every populated field not in ``exclude``."""
    skipped = set(exclude)
    return {
        key: value if key in skipped or not value else clean(value, labels)
        for key, value in values.items()
    }
