"""Constant tables used by the extractors.

Every literal catalog the rules depend on (denominations, label fragments,
month names, noise words) lives here so an extractor can be handed an
alternate :class:`ExtractionCatalog` in tests or for a different market.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Pattern, Tuple

# PLN prepaid token face values, ascending
PLN_DENOMINATIONS: Tuple[int, ...] = (20000, 50000, 100000, 200000, 500000, 1000000)

# Relative distance (in percent of the denomination) still treated as an
# OCR misread of that denomination. 42000 sits 16% under 50000.
SNAP_TOLERANCE_PERCENT = 16

# Label fragments stripped from the start of a captured value, applied once
# each, in this order.
LABEL_PREFIXES: Tuple[Pattern[str], ...] = (
    re.compile(r"^T\s+"),
    re.compile(r"^Nama\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Tarif\s*/\s*Daya\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Tarif\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Daya\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^IDPEL\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Nomor\s+Pelanggan\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Nomor\s+Meter\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^No\.\s*Ref\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^No\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Ref\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Stroom\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^Token\b\s*[:\-.]?\s*", re.IGNORECASE),
    re.compile(r"^R[Pp]\.?\s*(?=\d)"),
)

MONTH_NAMES: Dict[int, str] = {
    1: "Januari",
    2: "Februari",
    3: "Maret",
    4: "April",
    5: "Mei",
    6: "Juni",
    7: "Juli",
    8: "Agustus",
    9: "September",
    10: "Oktober",
    11: "November",
    12: "Desember",
}

# Abbreviations seen on printed bills, Indonesian first, then English
MONTH_ABBREVIATIONS: Dict[str, int] = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MEI": 5, "JUN": 6,
    "JUL": 7, "AGU": 8, "AGS": 8, "AGT": 8, "SEP": 9, "OKT": 10,
    "NOV": 11, "DES": 12,
    "MAY": 5, "AUG": 8, "OCT": 10, "DEC": 12,
}

# Words that end a payment-mode location
LOCATION_NOISE: Tuple[str, ...] = ("No", "Nomor", "Pelanggan")

# Words that end a label-based billing period
PERIOD_NOISE: Tuple[str, ...] = ("Meter", "Lalu", "Kini", "Stand", "Total", "Tagihan")

# Field markers that end a payment-mode customer name
NAME_STOP_MARKERS: Tuple[str, ...] = (
    "NO.PEL",
    "ID PEL",
    "NO SAMB",
    "PERIODE",
    "ALAMAT",
    "TOTAL",
    "TAGIHAN",
)

# Words that end a tariff/power class captured after its label
TARIFF_GARBAGE: Tuple[str, ...] = (
    "No", "Ref", "Nomor", "Jam", "Nama", "IDPEL",
    "Jumlah", "Jml", "Total", "Biaya", "Stroom", "Token", "KWH",
)


@dataclass(frozen=True)
class ExtractionCatalog:
    """Bundle of tables injected into the extractors."""

    denominations: Tuple[int, ...] = PLN_DENOMINATIONS
    snap_tolerance_percent: int = SNAP_TOLERANCE_PERCENT
    label_prefixes: Tuple[Pattern[str], ...] = LABEL_PREFIXES
    month_names: Dict[int, str] = field(default_factory=lambda: dict(MONTH_NAMES))
    month_abbreviations: Dict[str, int] = field(
        default_factory=lambda: dict(MONTH_ABBREVIATIONS)
    )
    location_noise: Tuple[str, ...] = LOCATION_NOISE
    period_noise: Tuple[str, ...] = PERIOD_NOISE
    name_stop_markers: Tuple[str, ...] = NAME_STOP_MARKERS
    tariff_garbage: Tuple[str, ...] = TARIFF_GARBAGE


DEFAULT_CATALOG = ExtractionCatalog()
