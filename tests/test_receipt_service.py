"""Tests for the image/PDF pipeline and the admin fee policy."""

import asyncio

import pytest

from struk.models import PaymentReceipt, TokenReceipt
from struk.ocr import OcrResult
from struk.services import ReceiptService, apply_admin_fee, is_recognized


class FakeOCR:
    """OCR double returning fixed text and remembering its input."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.seen = []

    def recognize(self, image_bytes):
        self.seen.append(image_bytes)
        if self.error:
            raise self.error
        return OcrResult(text=self.text, confidence=0.9)


def test_process_image_token(token_text):
    ocr = FakeOCR(token_text)
    service = ReceiptService(ocr=ocr)

    record = asyncio.run(service.process_image(b"jpeg-bytes", "token"))

    assert ocr.seen == [b"jpeg-bytes"]
    assert record.token == "12345678901234567890"
    assert record.raw == token_text


def test_process_pdf_renders_first_page(payment_text):
    rendered = []

    def fake_renderer(pdf_bytes, scale):
        rendered.append((pdf_bytes, scale))
        return b"png-page-1"

    ocr = FakeOCR(payment_text)
    service = ReceiptService(ocr=ocr, pdf_renderer=fake_renderer)

    record = asyncio.run(service.process_pdf(b"%PDF-1.4", "payment"))

    assert rendered[0][0] == b"%PDF-1.4"
    assert rendered[0][1] > 0
    assert ocr.seen == [b"png-page-1"]
    assert isinstance(record, PaymentReceipt)
    assert record.tagihan == "85000"


def test_ocr_failure_propagates():
    service = ReceiptService(ocr=FakeOCR(error=OSError("cannot identify image file")))

    with pytest.raises(OSError):
        asyncio.run(service.process_image(b"garbage"))


def test_is_recognized():
    assert is_recognized(TokenReceipt(token="12345678901234567890"))
    assert not is_recognized(TokenReceipt(nominal="50000"))
    assert is_recognized(PaymentReceipt(total="50000"))
    assert not is_recognized(PaymentReceipt(nama="AGUS"))


def test_apply_admin_fee_token():
    record = TokenReceipt(nominal="50000", admin="2500", total="52500")

    adjusted = apply_admin_fee(record, 3000)

    assert adjusted.admin == "3000"
    assert adjusted.total == "53000"
    assert record.admin == "2500"


def test_apply_admin_fee_payment_without_amount():
    adjusted = apply_admin_fee(PaymentReceipt(), 2000)

    assert adjusted.admin == "2000"
    assert adjusted.total == "2000"
