"""Rule-based extraction for bill payment receipts (PDAM and similar)."""

import re
from typing import Dict, Optional

from loguru import logger

from ..models.receipt import PaymentReceipt
from .catalog import DEFAULT_CATALOG, ExtractionCatalog
from .heuristics import amount_to_digits, month_name
from .matchers import AMOUNT, ORDER_NUMBER, first_match, pattern, refine
from .sanitizer import digits_only, sanitize_fields

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_NAME_LABEL = re.compile(r"^(?:Nama\s+Pelanggan|Nama)\s*[:\-.]?\s*", re.IGNORECASE)
_YEAR_MONTH = re.compile(r"(\d{4})\s*[/\-]?\s*(0[1-9]|1[0-2])")
_MONTH_YEAR = re.compile(r"(0?[1-9]|1[0-2])\s*[/\-]\s*(\d{4})")

_PERIOD_LABELS = (
    r"Periode\s+Tagihan",
    r"Periode",
    r"Bulan",
    r"Thn\.?\s*Bln",
    r"Rek[eo]ning\s+Bulan",
)

_BILL_LABEL = re.compile(r"Tagihan" + AMOUNT, re.IGNORECASE)
# "Tagihan" right after one of these is a period or reference label
_NOT_A_BILL = re.compile(rf"\b(?:{'|'.join(_PERIOD_LABELS)}|No\.?)\s+$", re.IGNORECASE)


def _words(words) -> str:
    return "|".join(re.escape(word) for word in words)


class PaymentExtractor:
    """
    Turn OCR text of a bill payment receipt into a :class:`PaymentReceipt`.

    Money amounts cross-default: when only one of ``tagihan``/``total`` is
    found, the other gets the same value.
    """

    def __init__(self, catalog: ExtractionCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

        self._location_noise = re.compile(
            rf"(?:^|\s+)(?:{_words(catalog.location_noise)})(?![a-z]).*$", re.IGNORECASE
        )
        self._period_noise = re.compile(
            rf"\s*\b(?:{_words(catalog.period_noise)})\b.*$", re.IGNORECASE
        )
        self._name_stop = re.compile(
            rf"(?:^|(?<=\s))(?:{_words(catalog.name_stop_markers)})", re.IGNORECASE
        )

        months = {name.upper(): number for number, name in catalog.month_names.items()}
        months.update(catalog.month_abbreviations)
        self._months = months
        # Longest first so "JUNI" wins over "JUN"
        month_alternatives = "|".join(sorted(months, key=len, reverse=True))
        self._month_year = re.compile(
            rf"\b({month_alternatives})\.?[\s\-/]*(\d{{2,4}})\b", re.IGNORECASE
        )

        self.location_matchers = [
            refine(
                pattern(r"\b(?:PDAM|PERUMDA|TIRTA)\b[ \t.:\-]*([^\n\r]+)"),
                self._trim_location,
            ),
            refine(
                pattern(r"\b((?:KAB\.|KABUPATEN\b|KOTA\b)[^\n\r]*)"),
                self._trim_location,
            ),
            refine(self._first_text_line, self._trim_location),
        ]
        self.name_matchers = [
            refine(
                pattern(r"(?:Nama\s+Pelanggan|Nama)\s*[:\-.]?\s*([^\n\r]+)"),
                self._prune_name,
            ),
        ]
        self.idpel_matchers = [
            refine(
                pattern(
                    r"(?:No\.?\s*Pel(?:anggan)?|ID\s*Pel(?:anggan)?|IDPEL"
                    r"|No\.?\s*Samb(?:ungan)?|Nomor\s+(?:Pelanggan|Sambungan)"
                    r"|No\.?\s*Rek(?:ening)?)\s*[:\-.]?\s*(\d[\d\-]*)"
                ),
                digits_only,
            ),
            pattern(r"\b(\d{6,12})\b", flags=0),
        ]
        self.period_matchers = [
            refine(pattern(label + r"\s*[:\-.]?\s*([^\n\r]+)"), self._accept_labelled_period)
            for label in _PERIOD_LABELS
        ] + [self._month_name_period, self._numeric_period]

        self.tagihan_matchers = [
            self._bill_amount,
            pattern(r"Total\s+Air" + AMOUNT),
            pattern(r"Biaya\s+Air" + AMOUNT),
        ]
        self.admin_matchers = [
            pattern(r"Biaya\s+Admin" + AMOUNT),
            pattern(r"Admin" + AMOUNT),
            pattern(r"\bAdm\b\.?" + AMOUNT),
        ]
        self.total_matchers = [
            pattern(r"Total\s+Bayar" + AMOUNT),
            pattern(r"\bTotal" + AMOUNT),
        ]
        self.stand_matchers = [
            pattern(
                r"Stand\s*(?:Meter)?\s*(?:\(?\s*Lalu\s*[-/]\s*Kini\s*\)?)?"
                r"\s*[:\-]?\s*(\d+(?:\s*[-/]\s*\d+)?)"
            ),
        ]
        self.denda_matchers = [pattern(r"Denda" + AMOUNT)]
        self.order_matchers = [pattern(ORDER_NUMBER)]

    # -- location -----------------------------------------------------------

    @staticmethod
    def _first_text_line(text: str) -> Optional[str]:
        for line in text.splitlines():
            candidate = line.strip()
            if len(candidate) > 3 and not _ISO_DATE.match(candidate):
                return candidate
        return None

    def _trim_location(self, value: str) -> str:
        return self._location_noise.sub("", value).strip()

    # -- name ---------------------------------------------------------------

    def _prune_name(self, value: str) -> str:
        stop = self._name_stop.search(value)
        if stop:
            value = value[:stop.start()]
        return _NAME_LABEL.sub("", value.strip()).strip()

    # -- period -------------------------------------------------------------

    def _accept_labelled_period(self, value: str) -> Optional[str]:
        value = self._period_noise.sub("", value).strip(" :-.")
        if len(value) >= 20:
            return None
        if re.search(r"\d{4}", value) or re.search(r"[A-Za-z]{3,}", value):
            return value
        return None

    def _month_year_text(self, month: int, year: str) -> str:
        if len(year) == 2:
            year = f"20{year}"
        return f"{self.catalog.month_names[month]} {year}"

    def _month_name_period(self, text: str) -> Optional[str]:
        found = self._month_year.search(text)
        if not found:
            return None
        return self._month_year_text(self._months[found.group(1).upper()], found.group(2))

    def _numeric_period(self, text: str) -> Optional[str]:
        found = re.search(r"\b(0?[1-9]|1[0-2])\s*[/\-]\s*(\d{4})\b", text)
        if not found:
            return None
        return f"{month_name(found.group(1).zfill(2), self.catalog.month_names)} {found.group(2)}"

    def normalize_period(self, value: str) -> str:
        """Spell the month out and upper-case the period: "202512" -> "DESEMBER 2025"."""
        compact = value.strip()

        found = _YEAR_MONTH.fullmatch(compact)
        if found:
            return self._month_year_text(int(found.group(2)), found.group(1)).upper()

        found = _MONTH_YEAR.fullmatch(compact)
        if found:
            return self._month_year_text(int(found.group(1)), found.group(2)).upper()

        found = self._month_year.fullmatch(compact)
        if found:
            month = self._months[found.group(1).upper()]
            return self._month_year_text(month, found.group(2)).upper()

        return compact.upper()

    # -- amounts ------------------------------------------------------------

    @staticmethod
    def _bill_amount(text: str) -> Optional[str]:
        """Amount after a "Tagihan" label that is not part of "Periode Tagihan" and the like."""
        for found in _BILL_LABEL.finditer(text):
            line_start = text.rfind("\n", 0, found.start()) + 1
            if _NOT_A_BILL.search(text[line_start:found.start()]):
                continue
            return found.group(1)
        return None

    # -- extraction ---------------------------------------------------------

    def extract(self, text: Optional[str]) -> PaymentReceipt:
        """Extract every payment-receipt field from ``text``."""
        text = text or ""
        values: Dict[str, str] = {
            "lokasi": first_match(text, self.location_matchers) or "",
            "nama": first_match(text, self.name_matchers) or "",
            "idpel": first_match(text, self.idpel_matchers) or "",
            "periode": "",
            "stand": "",
            "tagihan": amount_to_digits(first_match(text, self.tagihan_matchers)),
            "admin": amount_to_digits(first_match(text, self.admin_matchers)),
            "total": amount_to_digits(first_match(text, self.total_matchers)),
            "denda": amount_to_digits(first_match(text, self.denda_matchers)),
            "no_pesanan": first_match(text, self.order_matchers) or "",
        }

        periode = first_match(text, self.period_matchers)
        if periode:
            values["periode"] = self.normalize_period(periode)

        stand = first_match(text, self.stand_matchers)
        if stand:
            values["stand"] = re.sub(r"\s*[-/]\s*", " - ", stand)

        if values["tagihan"] and not values["total"]:
            values["total"] = values["tagihan"]
        elif values["total"] and not values["tagihan"]:
            values["tagihan"] = values["total"]

        missing = [key for key, value in values.items() if not value]
        if missing:
            logger.debug(f"Payment receipt fields not found: {', '.join(missing)}")

        values = sanitize_fields(
            values, exclude=("raw", "mode", "nama"), labels=self.catalog.label_prefixes
        )
        return PaymentReceipt(**values, raw=text)


def extract_payment_receipt(
    text: Optional[str],
    catalog: ExtractionCatalog = DEFAULT_CATALOG,
) -> PaymentReceipt:
    """Convenience wrapper around :class:`PaymentExtractor`."""
    return PaymentExtractor(catalog).extract(text)
