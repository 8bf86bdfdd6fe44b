"""Render the first page of a PDF receipt into an image for OCR."""

from io import BytesIO

from pdf2image import convert_from_bytes
from loguru import logger

from ..config import settings

PDF_BASE_DPI = 72


def render_first_page(pdf_bytes: bytes, scale: float = None) -> bytes:
    """
    Rasterize page 1 of a PDF.

    Args:
        pdf_bytes: PDF file content
        scale: Zoom factor over 72 dpi; higher helps OCR on small print

    Returns:
        PNG image bytes

    Raises:
        ValueError: If the PDF has no pages
    """
    scale = scale or settings.pdf_render_scale
    dpi = int(PDF_BASE_DPI * scale)

    try:
        pages = convert_from_bytes(pdf_bytes, dpi=dpi, first_page=1, last_page=1)
    except Exception as e:
        logger.error(f"Failed to render PDF: {e}")
        raise

    if not pages:
        raise ValueError("PDF has no pages to render")

    output = BytesIO()
    pages[0].save(output, format="PNG")
    logger.info(f"Rendered PDF page 1 at {dpi} dpi ({pages[0].size[0]}x{pages[0].size[1]})")
    return output.getvalue()
