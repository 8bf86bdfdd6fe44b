"""Tests for ESC/POS rendering and the RawBT intent URL."""

import base64
from datetime import datetime

from struk.models import PaymentReceipt, TokenReceipt
from struk.printing import build_intent_url, build_receipt_commands
from struk.printing.escpos import INIT, format_row, format_timestamp

PRINTED_AT = datetime(2026, 1, 5, 14, 3, 9)


def test_format_row_pads_label():
    assert format_row("PPN", ": RP. 0,00") == "   PPN           : RP. 0,00\n"


def test_format_timestamp():
    assert format_timestamp(PRINTED_AT) == "5/1/2026 14:03:09"


def test_token_receipt_commands():
    record = TokenReceipt(
        idpel="530123456789",
        nama="BUDI SANTOSO",
        tarif="R1M/900 VA",
        kwh="3530",
        nominal="50000",
        admin="3000",
        total="53000",
        token="12345678901234567890",
    )

    commands = build_receipt_commands(record, "sa cell", PRINTED_AT)

    assert commands.startswith(INIT)
    assert b"** SA CELL **\n" in commands
    assert b"5/1/2026 14:03:09 (CU)\n" in commands
    assert b": RP. 50.000" in commands
    assert b": 35.3KWH" in commands
    assert b": RP. 0,00\n" in commands
    assert b": RP. 0,00/0,00" in commands
    assert b"1234-5678-9012\n3456-7890\n" in commands
    assert b"TOTAL BAYAR   : RP. 53.000" in commands


def test_token_receipt_without_token_prints_placeholder():
    commands = build_receipt_commands(TokenReceipt(), "SA CELL", PRINTED_AT)
    assert b"---- ---- ---- ----\n---- ----" in commands


def test_payment_receipt_commands():
    record = PaymentReceipt(
        idpel="01122334",
        nama="AGUS SALIM",
        lokasi="KAB. BOGOR",
        periode="DESEMBER 2025",
        tagihan="85000",
        admin="3000",
        total="88000",
    )

    commands = build_receipt_commands(record, "SA CELL", PRINTED_AT)

    assert b"JENIS TAGIHAN : PDAM" in commands
    assert b"LOKASI        : KAB.BOGOR" in commands
    assert b": RP.85.000" in commands
    assert b"NO. PESANAN   : -" in commands
    assert b"TOKEN" not in commands


def test_intent_url():
    url = build_intent_url(b"\x1b@", fallback_url="https://x.test/a b")

    assert url == (
        "intent:base64,G0A=#Intent;scheme=rawbt;package=ru.a402d.rawbtprinter;"
        "S.browser_fallback_url=https%3A%2F%2Fx.test%2Fa%20b;end;"
    )


def test_intent_url_round_trips_commands():
    commands = build_receipt_commands(TokenReceipt(nominal="20000"), "SA CELL", PRINTED_AT)
    url = build_intent_url(commands, fallback_url="")

    payload = url[len("intent:base64,"):url.index("#Intent")]
    assert base64.b64decode(payload) == commands
