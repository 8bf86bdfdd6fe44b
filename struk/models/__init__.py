"""Data models for receipt extraction."""

from .receipt import (
    PaymentReceipt,
    ReceiptBase,
    ReceiptMode,
    ReceiptRecord,
    TokenReceipt,
)

__all__ = [
    "PaymentReceipt",
    "ReceiptBase",
    "ReceiptMode",
    "ReceiptRecord",
    "TokenReceipt",
]
