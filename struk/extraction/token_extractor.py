"""Rule-based extraction for PLN prepaid token receipts."""

import re
from typing import Dict, Optional

from loguru import logger

from ..models.receipt import TokenReceipt
from .catalog import DEFAULT_CATALOG, ExtractionCatalog
from .heuristics import amount_to_digits, format_kwh_digits, snap_denomination
from .matchers import AMOUNT, ORDER_NUMBER, first_match, pattern, refine
from .sanitizer import digits_only, sanitize_fields

_TOKEN_GROUPS = r"(\d{4}\s?\d{4}\s?\d{4}\s?\d{4}\s?\d{4})"

# Labels that end a name captured after "Nama"
_NAME_BOUNDARY = (
    r"Tarif\s*/\s*Daya|Tarif\s+Daya|IDPEL|Nomor|Stroom|Total"
    r"|No\.\s*Pesanan|No\.\s*Meter"
)

_WHITESPACE = re.compile(r"\s+")
_TARIFF_LABEL = re.compile(r"^(?:Tarif\s*/\s*Daya|Tarif\s+Daya|Tarif|Daya)\s*:?\s*", re.IGNORECASE)


class TokenExtractor:
    """
    Turn OCR text of a token purchase receipt into a :class:`TokenReceipt`.

    Each field owns an ordered list of matchers; the first hit wins. Every
    populated field except ``raw`` goes through the sanitizer afterwards.
    """

    def __init__(self, catalog: ExtractionCatalog = DEFAULT_CATALOG):
        self.catalog = catalog
        garbage = "|".join(re.escape(word) for word in catalog.tariff_garbage)
        self._tariff_garbage = re.compile(rf"\s(?:{garbage})(?![a-z]).*$", re.IGNORECASE)
        denominations = "|".join(str(value) for value in sorted(catalog.denominations))
        self._bare_denomination = re.compile(rf"\b({denominations})\b")

        self.token_matchers = [
            pattern(r"Stroom\s*/\s*Nomor\s+Token\s*:?\s*" + _TOKEN_GROUPS),
            pattern(r"TOKEN\s*:\s*" + _TOKEN_GROUPS),
            pattern(r"(\d{4}\s\d{4}\s\d{4}\s\d{4}\s\d{4})", flags=0),
        ]
        self.idpel_matchers = [
            pattern(r"Nomor\s+Pelanggan\s*:?\s*(\d{11,12})"),
            pattern(r"IDPEL\s*:?\s*(\d{11,12})"),
            pattern(r"ID\s*PEL\s*:?\s*(\d{11,12})"),
        ]
        self.name_matchers = [
            pattern(
                rf"Nama\s*:?\s*([^\n\r]+?)(?=\s*(?:{_NAME_BOUNDARY})|\s*$)",
                flags=re.IGNORECASE | re.MULTILINE,
            ),
        ]
        self.tariff_matchers = [
            refine(pattern(r"(R[\dA-Z]+\s*/\s*\d+(?:[.,]\d+)?\s*VA)"), self._normalize_tariff),
            refine(
                pattern(r"(?:Tarif\s*/\s*Daya|Tarif\s+Daya|Daya)\s*:?\s*([A-Z0-9/\-. \t]+)"),
                self._normalize_tariff,
            ),
        ]
        self.kwh_matchers = [
            refine(
                pattern(r"(?:Jumlah|Jml|Total)\s*\.?\s*K\s*W\s*H\s*[:.]?\s*(\d[\d,.]*)"),
                format_kwh_digits,
            ),
            refine(pattern(r"(\d[\d,.]*)\s*K\s*W\s*H"), format_kwh_digits),
        ]
        self.nominal_matchers = [
            pattern(
                r"(?:Rp\s*Stroom\s*/\s*Token|Stroom\s*/\s*Token|Nilai\s+Token)"
                r"\s*:?\s*(?:Rp\.?)?[\s.]*(\d[\d,.]*)"
            ),
            pattern(r"NOMINAL\s*:?\s*(?:Rp\.?)?[\s.]*(\d[\d,.]*)"),
        ]
        self.admin_matchers = [
            pattern(r"Biaya\s+Admin" + AMOUNT),
            pattern(r"ADMIN\s*:" + AMOUNT),
        ]
        self.total_matchers = [
            pattern(r"Total\s+Tagihan" + AMOUNT),
            pattern(r"TOTAL\s*:" + AMOUNT),
            pattern(r"Total\s+Bayar" + AMOUNT),
        ]
        self.ppn_matchers = [pattern(r"PPn" + AMOUNT)]
        self.angsuran_matchers = [pattern(r"Angsuran" + AMOUNT)]
        self.materai_matchers = [pattern(r"M[ae]terai" + AMOUNT)]
        self.order_matchers = [pattern(ORDER_NUMBER)]

    def _normalize_tariff(self, raw: str) -> Optional[str]:
        value = _WHITESPACE.sub(" ", raw).strip()
        value = _TARIFF_LABEL.sub("", value)
        value = self._tariff_garbage.sub("", value).strip().rstrip(" -:")
        if value and "VA" not in value.upper() and re.search(r"\d", value):
            value += " VA"
        return value

    def _nominal(self, text: str) -> str:
        found = first_match(text, self.nominal_matchers)
        if found is None:
            # No label: look for a bare, unformatted denomination anywhere
            bare = self._bare_denomination.search(re.sub(r"[^0-9\s]", " ", text))
            if not bare:
                return ""
            found = bare.group(1)
        return snap_denomination(
            amount_to_digits(found),
            self.catalog.denominations,
            self.catalog.snap_tolerance_percent,
        )

    def extract(self, text: Optional[str]) -> TokenReceipt:
        """Extract every token-receipt field from ``text``."""
        text = text or ""
        values: Dict[str, str] = {
            "token": "",
            "idpel": "",
            "nama": "",
            "tarif": "",
            "kwh": "",
            "nominal": "",
            "admin": "",
            "total": "",
            "ppn": "0",
            "angsmat": "0,00/0,00",
            "no_pesanan": "",
        }

        token = first_match(text, self.token_matchers)
        if token:
            values["token"] = digits_only(token)

        values["idpel"] = first_match(text, self.idpel_matchers) or ""

        nama = first_match(text, self.name_matchers)
        if nama:
            values["nama"] = nama.strip()

        values["tarif"] = first_match(text, self.tariff_matchers) or ""
        values["kwh"] = first_match(text, self.kwh_matchers) or ""
        values["nominal"] = self._nominal(text)
        values["admin"] = amount_to_digits(first_match(text, self.admin_matchers))
        values["total"] = amount_to_digits(first_match(text, self.total_matchers))

        ppn = first_match(text, self.ppn_matchers)
        if ppn:
            values["ppn"] = ppn.replace(" ", "")

        angsuran = first_match(text, self.angsuran_matchers)
        materai = first_match(text, self.materai_matchers)
        if angsuran and materai:
            values["angsmat"] = f"{angsuran}/{materai}"

        values["no_pesanan"] = first_match(text, self.order_matchers) or ""

        missing = [key for key, value in values.items() if not value]
        if missing:
            logger.debug(f"Token receipt fields not found: {', '.join(missing)}")

        values = sanitize_fields(values, exclude=("raw",), labels=self.catalog.label_prefixes)
        return TokenReceipt(**values, raw=text)


def extract_token_receipt(
    text: Optional[str],
    catalog: ExtractionCatalog = DEFAULT_CATALOG,
) -> TokenReceipt:
    """Convenience wrapper around :class:`TokenExtractor`."""
    return TokenExtractor(catalog).extract(text)
