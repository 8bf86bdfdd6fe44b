#!/usr/bin/env python3
"""
Run the rule-based extractor on saved OCR text.

Handy when tuning patterns: dump the raw OCR text of a problem receipt to a
file and check what each field comes out as.

Usage:
    python scripts/parse_text.py receipt.txt --mode token
    python scripts/parse_text.py bill.txt --mode payment
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from struk.extraction import ReceiptExtractor  # noqa: E402
from struk.models import ReceiptMode  # noqa: E402


def main():
    """Print the extracted record as JSON."""
    parser = argparse.ArgumentParser(description="Parse saved receipt OCR text")
    parser.add_argument("path", help="Text file with raw OCR output")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ReceiptMode],
        default=ReceiptMode.TOKEN.value,
        help="Receipt type: token (PLN prabayar) or payment (PDAM/tagihan)"
    )
    args = parser.parse_args()

    path = Path(args.path)
    if not path.exists():
        print(f"❌ File not found: {path}")
        sys.exit(1)

    text = path.read_text(encoding="utf-8")
    record = ReceiptExtractor().extract_rule_based(text, args.mode)

    data = record.to_dict()
    data.pop("raw")
    print(json.dumps(data, indent=2, ensure_ascii=False))

    empty = [key for key, value in data.items() if not value]
    if empty:
        print(f"\n⚠️  Empty fields: {', '.join(empty)}")


if __name__ == "__main__":
    main()
