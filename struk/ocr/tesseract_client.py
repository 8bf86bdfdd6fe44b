"""Tesseract OCR client tuned for Indonesian receipts."""

from dataclasses import dataclass
from io import BytesIO
from typing import Optional

import pytesseract
from PIL import Image, ImageOps
from loguru import logger

from ..config import settings

# Gray levels below this become black when binarizing
BINARIZE_THRESHOLD = 128


@dataclass
class OcrResult:
    """Recognized text and mean word confidence (0.0 to 1.0)."""

    text: str
    confidence: float = 0.0


class TesseractOCR:
    """OCR collaborator: image bytes in, recognized text out."""

    def __init__(
        self,
        language: Optional[str] = None,
        binarize: Optional[bool] = None,
        tesseract_cmd: Optional[str] = None,
    ):
        self.language = language or settings.ocr_language
        self.binarize = settings.ocr_binarize if binarize is None else binarize

        cmd = tesseract_cmd or settings.tesseract_cmd
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

        logger.info(f"Tesseract OCR ready (lang: {self.language}, binarize: {self.binarize})")

    def preprocess_image(self, image_bytes: bytes) -> Image.Image:
        """Upright grayscale image, optionally thresholded for contrast."""
        img = Image.open(BytesIO(image_bytes))
        img = ImageOps.exif_transpose(img)
        img = img.convert("L")

        if self.binarize:
            img = img.point(lambda value: 0 if value < BINARIZE_THRESHOLD else 255)

        return img

    def recognize(self, image_bytes: bytes) -> OcrResult:
        """
        Run OCR on a receipt image.

        Raises:
            pytesseract.TesseractError, OSError: OCR engine or image failure
        """
        try:
            img = self.preprocess_image(image_bytes)

            text = pytesseract.image_to_string(img, lang=self.language)
            data = pytesseract.image_to_data(
                img, lang=self.language, output_type=pytesseract.Output.DICT
            )

            # Tesseract reports -1 for non-word boxes
            scores = [float(conf) for conf in data.get("conf", []) if float(conf) >= 0]
            confidence = sum(scores) / len(scores) / 100 if scores else 0.0

            logger.info(f"OCR finished: {len(text)} chars (confidence: {confidence:.2f})")
            logger.debug(f"Raw OCR text: {text}")

            return OcrResult(text=text, confidence=confidence)

        except Exception as e:
            logger.error(f"OCR failed: {e}")
            raise
