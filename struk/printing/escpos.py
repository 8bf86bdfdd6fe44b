"""ESC/POS command stream for 58mm thermal receipt printers."""

from datetime import datetime
from typing import Optional, Union

from ..config import settings
from ..extraction.heuristics import format_kwh_display, format_rp, format_rp_decimal, split_token
from ..models.receipt import PaymentReceipt, TokenReceipt

ESC = 0x1B
GS = 0x1D
LF = 0x0A

INIT = bytes([ESC, 0x40])
ALIGN_LEFT = bytes([ESC, 0x61, 0x00])
ALIGN_CENTER = bytes([ESC, 0x61, 0x01])
BOLD_ON = bytes([ESC, 0x45, 0x01])
BOLD_OFF = bytes([ESC, 0x45, 0x00])
DOUBLE_SIZE = bytes([GS, 0x21, 0x11])
NORMAL_SIZE = bytes([GS, 0x21, 0x00])

LABEL_WIDTH = 14


def format_row(label: str, value: str, width: int = LABEL_WIDTH) -> str:
    """Left-margin row with the label padded to a fixed column."""
    return f"   {label.ljust(width)}{value}\n"


def format_timestamp(printed_at: datetime) -> str:
    """Indonesian short date and 24h time, e.g. "5/1/2026 14:03:09"."""
    return f"{printed_at.day}/{printed_at.month}/{printed_at.year} {printed_at:%H:%M:%S}"


class _Commands:
    def __init__(self):
        self.buffer = bytearray()

    def raw(self, *chunks: bytes) -> "_Commands":
        for chunk in chunks:
            self.buffer += chunk
        return self

    def text(self, *lines: str) -> "_Commands":
        for line in lines:
            self.buffer += line.encode("utf-8")
        return self

    def feed(self, count: int = 1) -> "_Commands":
        self.buffer += bytes([LF] * count)
        return self


def _payment_body(commands: _Commands, record: PaymentReceipt) -> None:
    lokasi = (record.lokasi or "-").replace(". ", ".")
    commands.text("STRUK PEMBAYARAN\n", "TAGIHAN\n").feed()
    commands.raw(ALIGN_LEFT).text(
        format_row("IDPEL", f": {record.idpel or '-'}"),
        format_row("NAMA", f": {record.nama or '-'}"),
        format_row("JENIS TAGIHAN", ": PDAM"),
        format_row("LOKASI", f": {lokasi}"),
        format_row("PERIODE", f": {record.periode or '-'}"),
        format_row("TAGIHAN", f": RP.{format_rp(record.tagihan)}"),
        format_row("NO. PESANAN", f": {record.no_pesanan or '-'}"),
        format_row("BIAYA ADM", f": RP.{format_rp(record.admin)}"),
    )
    commands.raw(BOLD_ON).text(format_row("TOTAL BAYAR", f": RP.{format_rp(record.total)}"))
    commands.raw(BOLD_OFF).feed(2)
    commands.raw(ALIGN_CENTER).text(
        "Simpan Struk Ini\n",
        "Sebagai Bukti Pembayaran Yang Sah\n",
    ).feed().text("-- Terima Kasih --\n").feed()


def _token_body(commands: _Commands, record: TokenReceipt) -> None:
    commands.text("STRUK PEMBELIAN LISTRIK\n", "PRABAYAR\n").feed()
    commands.raw(ALIGN_LEFT).text(
        format_row("IDPEL", f": {record.idpel}"),
        format_row("NAMA", f": {record.nama}"),
        format_row("TRF/DAYA", f": {record.tarif}"),
        format_row("NOMINAL", f": RP. {format_rp(record.nominal)}"),
        format_row("PPN", f": RP. {format_rp_decimal(record.ppn)}"),
        format_row("ANGS/MAT", f": RP. {record.angsmat or '0,00/0,00'}"),
        format_row("RP TOKEN", f": RP. {format_rp(record.nominal)}"),
        format_row("JML KWH", f": {format_kwh_display(record.kwh)}"),
        format_row("BIAYA ADM", f": RP. {format_rp(record.admin)}"),
    )
    commands.raw(BOLD_ON).text(format_row("TOTAL BAYAR", f": RP. {format_rp(record.total)}"))
    commands.raw(BOLD_OFF).feed(2)
    commands.raw(ALIGN_CENTER).text("-- TOKEN --\n")
    commands.raw(BOLD_ON, DOUBLE_SIZE).text(split_token(record.token))
    commands.raw(NORMAL_SIZE, BOLD_OFF).feed()
    commands.raw(ALIGN_CENTER).text(
        "Info Hubungi Call Center 123\n",
        "Atau Hubungi PLN Terdekat\n",
    ).feed()


def build_receipt_commands(
    record: Union[TokenReceipt, PaymentReceipt],
    store_name: Optional[str] = None,
    printed_at: Optional[datetime] = None,
) -> bytes:
    """
    Render a receipt record as an ESC/POS byte stream.

    Args:
        record: Extracted (and possibly admin-adjusted) receipt
        store_name: Header line, defaults to the configured store
        printed_at: Timestamp printed under the header, defaults to now

    Returns:
        Printer command bytes
    """
    store_name = store_name or settings.store_name
    printed_at = printed_at or datetime.now()

    commands = _Commands().raw(INIT, ALIGN_CENTER).text(
        f"** {store_name.upper()} **\n",
        f"{format_timestamp(printed_at)} (CU)\n",
    ).feed()

    if isinstance(record, PaymentReceipt):
        _payment_body(commands, record)
    else:
        _token_body(commands, record)

    return bytes(commands.buffer)
