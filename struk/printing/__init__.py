"""Receipt printing: ESC/POS rendering and RawBT hand-off."""

from .escpos import build_receipt_commands
from .rawbt import build_intent_url

__all__ = ["build_receipt_commands", "build_intent_url"]
