"""Struk: turn OCR text from PLN token and bill payment receipts into records."""

__version__ = "1.0.0"
