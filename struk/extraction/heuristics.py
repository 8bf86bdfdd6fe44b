"""Numeric heuristics and display formatting for receipt values."""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Sequence, Tuple

from .catalog import MONTH_NAMES, PLN_DENOMINATIONS, SNAP_TOLERANCE_PERCENT
from .sanitizer import digits_only

_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")
_CENTS = re.compile(r"[.,]\d{2}$")

TOKEN_PLACEHOLDER = "---- ---- ---- ---- ----"
SPLIT_TOKEN_PLACEHOLDER = "---- ---- ---- ----\n---- ----"


def snap_denomination(
    value: Any,
    denominations: Sequence[int] = PLN_DENOMINATIONS,
    tolerance_percent: int = SNAP_TOLERANCE_PERCENT,
) -> Any:
    """
    Correct an OCR-read token amount to a known denomination.

    Denominations are scanned in ascending order and the first one whose
    relative distance to the value is within tolerance wins, so a value
    close to two denominations goes to the lower one.

    Args:
        value: Integer string, e.g. "42000"
        denominations: Catalog of valid face values
        tolerance_percent: Maximum distance, in percent of the denomination

    Returns:
        The denomination as a string, or ``value`` unchanged when it is not
        an integer or no denomination is close enough
    """
    try:
        amount = int(str(value).strip())
    except (TypeError, ValueError):
        return value

    for denomination in sorted(denominations):
        if abs(amount - denomination) * 100 <= denomination * tolerance_percent:
            return str(denomination)
    return value


def _one_decimal(number: Decimal) -> str:
    return str(number.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _leading_number(value: Any) -> Optional[Tuple[Decimal, str]]:
    # Keep digits and separators, first comma is the decimal mark
    cleaned = re.sub(r"[^0-9,.]", "", str(value)).replace(",", ".", 1)
    found = _LEADING_NUMBER.match(cleaned)
    if not found:
        return None
    return Decimal(found.group(0)), cleaned


def format_kwh_digits(value: Any) -> str:
    """
    Rebuild an energy quantity whose decimal separator OCR dropped.

    "46" -> "46,0", "3530" -> "35,3", "14090" -> "140,9". One-digit runs are
    returned as they are.
    """
    digits = digits_only(value)
    if len(digits) == 2:
        return f"{digits},0"
    if len(digits) >= 3:
        return _one_decimal(Decimal(int(digits)) / 100).replace(".", ",")
    return digits


def format_kwh_display(value: Any) -> str:
    """Render a kWh value for the printed receipt, e.g. "35.3KWH"."""
    if not value:
        return "0,0"
    parsed = _leading_number(value)
    if parsed is None:
        return value
    number, cleaned = parsed
    if "." not in cleaned and number > 1000:
        number = number / 100
    return f"{_one_decimal(number)}KWH"


def format_rp(value: Any) -> str:
    """Thousands-separated rupiah amount: "1234567" -> "1.234.567"."""
    if not value:
        return "0"
    return _THOUSANDS.sub(".", str(value))


def format_rp_decimal(value: Any) -> str:
    """Two-decimal rupiah amount with a comma: "1.5" -> "1,50"."""
    if not value:
        return "0,00"
    parsed = _leading_number(value)
    if parsed is None:
        return value
    number, _ = parsed
    return str(number.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)).replace(".", ",")


def amount_to_digits(value: Any) -> str:
    """Integer rupiah string from a printed amount, dropping a cents group."""
    if not value:
        return ""
    return digits_only(_CENTS.sub("", str(value).strip()))


def month_name(code: Any, names: Dict[int, str] = MONTH_NAMES) -> Any:
    """Translate a month number ("01".."12") to its Indonesian name."""
    text = str(code).strip() if code is not None else ""
    if re.fullmatch(r"\d{1,2}", text) and int(text) in names:
        return names[int(text)]
    return code


def format_token(token: Optional[str]) -> str:
    """Group a 20-digit token in runs of four: "1234 5678 ..."."""
    if not token:
        return TOKEN_PLACEHOLDER
    return re.sub(r"(\d{4})", r"\1 ", token).strip()


def split_token(token: Optional[str]) -> str:
    """Two-line printer rendering of a token, 3 + 2 groups joined by hyphens."""
    if not token or len(token) != 20:
        return SPLIT_TOKEN_PLACEHOLDER
    line1 = f"{token[0:4]}-{token[4:8]}-{token[8:12]}"
    line2 = f"{token[12:16]}-{token[16:20]}"
    return f"{line1}\n{line2}\n"
