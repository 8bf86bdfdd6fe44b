"""Image/PDF to receipt record pipeline and caller-side receipt policies."""

import asyncio
from typing import Callable, Optional, Union

from loguru import logger

from ..config import settings
from ..extraction.orchestrator import AIReceiptParser, ReceiptExtractor
from ..models.receipt import PaymentReceipt, ReceiptMode, TokenReceipt
from ..ocr.pdf_renderer import render_first_page
from ..ocr.tesseract_client import TesseractOCR

Receipt = Union[TokenReceipt, PaymentReceipt]


def is_recognized(record: Receipt) -> bool:
    """A token receipt needs its token; a payment receipt needs an amount."""
    if isinstance(record, PaymentReceipt):
        return bool(record.tagihan or record.total)
    return bool(record.token)


def _to_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def apply_admin_fee(record: Receipt, admin_fee: int) -> Receipt:
    """
    Replace the printed admin fee with the outlet's own fee.

    The total is recomputed as the base amount (token face value or bill
    amount) plus the fee. Returns a new record; the input is unchanged.
    """
    base = record.tagihan if isinstance(record, PaymentReceipt) else record.nominal
    total = _to_int(base) + admin_fee
    return record.model_copy(update={"admin": str(admin_fee), "total": str(total)})


class ReceiptService:
    """OCR a receipt image (or PDF page 1) and extract its record."""

    def __init__(
        self,
        ocr: Optional[TesseractOCR] = None,
        ai_parser: Optional[AIReceiptParser] = None,
        pdf_renderer: Callable[[bytes, float], bytes] = render_first_page,
    ):
        self.ocr = ocr or TesseractOCR()
        self.extractor = ReceiptExtractor(ai_parser=ai_parser)
        self.pdf_renderer = pdf_renderer

        logger.info(
            f"Receipt service initialized (AI parser: {'on' if ai_parser else 'off'})"
        )

    async def process_image(
        self,
        image_bytes: bytes,
        mode: Union[ReceiptMode, str] = ReceiptMode.TOKEN,
    ) -> Receipt:
        """OCR the image, then extract. OCR errors propagate to the caller."""
        ocr_result = await asyncio.to_thread(self.ocr.recognize, image_bytes)
        return await self.extractor.extract(ocr_result.text, mode, image=image_bytes)

    async def process_pdf(
        self,
        pdf_bytes: bytes,
        mode: Union[ReceiptMode, str] = ReceiptMode.TOKEN,
    ) -> Receipt:
        """Rasterize the first PDF page and process it as an image."""
        image_bytes = await asyncio.to_thread(
            self.pdf_renderer, pdf_bytes, settings.pdf_render_scale
        )
        return await self.process_image(image_bytes, mode)
