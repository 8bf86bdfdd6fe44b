"""Receipt processing services."""

from .receipt_service import ReceiptService, apply_admin_fee, is_recognized

__all__ = ["ReceiptService", "apply_admin_fee", "is_recognized"]
