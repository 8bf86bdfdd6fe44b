"""OCR and PDF rasterization collaborators."""

from .pdf_renderer import render_first_page
from .tesseract_client import OcrResult, TesseractOCR

__all__ = ["OcrResult", "TesseractOCR", "render_first_page"]
