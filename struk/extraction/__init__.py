"""Receipt field extraction engine."""

from .catalog import DEFAULT_CATALOG, ExtractionCatalog
from .orchestrator import AIReceiptParser, ExtractionState, ReceiptExtractor
from .payment_extractor import PaymentExtractor, extract_payment_receipt
from .sanitizer import clean
from .token_extractor import TokenExtractor, extract_token_receipt

__all__ = [
    "DEFAULT_CATALOG",
    "ExtractionCatalog",
    "AIReceiptParser",
    "ExtractionState",
    "ReceiptExtractor",
    "PaymentExtractor",
    "TokenExtractor",
    "clean",
    "extract_payment_receipt",
    "extract_token_receipt",
]
