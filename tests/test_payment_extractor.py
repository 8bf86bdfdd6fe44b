"""Tests for the bill payment (PDAM) receipt extractor."""

import pytest

from struk.extraction import PaymentExtractor, extract_payment_receipt
from struk.models import PaymentReceipt


def test_full_pdam_receipt(payment_text):
    record = extract_payment_receipt(payment_text)

    assert isinstance(record, PaymentReceipt)
    assert record.mode == "payment"
    assert record.lokasi == "TIRTA PAKUAN KOTA BOGOR"
    assert record.nama == "AGUS SALIM"
    assert record.idpel == "01122334"
    assert record.periode == "DESEMBER 2025"
    assert record.stand == "1200 - 1250"
    assert record.tagihan == "85000"
    assert record.denda == "5000"
    assert record.admin == "2500"
    assert record.total == "92500"
    assert record.no_pesanan == "INV12345AB"
    assert record.raw == payment_text


def test_tagihan_fills_missing_total():
    record = extract_payment_receipt("Tagihan Rp50.000")

    assert record.tagihan == "50000"
    assert record.total == "50000"


def test_total_fills_missing_tagihan():
    record = extract_payment_receipt("PDAM KAB. BOGOR\nRekening: DES 2025\nTotal : Rp 50.000")

    assert record.lokasi == "KAB. BOGOR"
    assert record.periode == "DESEMBER 2025"
    assert record.total == "50000"
    assert record.tagihan == "50000"
    assert record.idpel == ""


def test_numeric_period():
    record = extract_payment_receipt("Pembayaran air 11/2025\nTotal Rp 20.000")
    assert record.periode == "NOVEMBER 2025"


def test_labelled_period_is_cut_at_noise():
    record = extract_payment_receipt("Periode : DES 2025 Stand Meter 1200")
    assert record.periode == "DESEMBER 2025"


def test_location_from_first_text_line():
    record = extract_payment_receipt("2025-12-01 08:00\nAIR MINUM SEHAT No. 12\nTagihan 20.000")

    assert record.lokasi == "AIR MINUM SEHAT"
    assert record.tagihan == "20000"


def test_name_keeps_punctuation():
    record = extract_payment_receipt("Nama Pelanggan : O'NEIL, JR.\nTagihan 20.000")
    assert record.nama == "O'NEIL, JR."


def test_name_drops_restated_label():
    record = extract_payment_receipt("Nama : Nama BUDI\nTagihan 20.000")
    assert record.nama == "BUDI"


def test_name_starting_with_stop_marker_is_empty():
    record = extract_payment_receipt("Nama : PERIODE 202512")
    assert record.nama == ""


def test_empty_text():
    record = extract_payment_receipt(None)

    assert record.mode == "payment"
    assert record.lokasi == ""
    assert record.tagihan == ""
    assert record.total == ""


@pytest.mark.parametrize("value, expected", [
    ("202512", "DESEMBER 2025"),
    ("2025/01", "JANUARI 2025"),
    ("03/2026", "MARET 2026"),
    ("3-2026", "MARET 2026"),
    ("AGS 25", "AGUSTUS 2025"),
    ("Juni 2025", "JUNI 2025"),
    ("tahun lalu", "TAHUN LALU"),
])
def test_normalize_period(value, expected):
    assert PaymentExtractor().normalize_period(value) == expected


def test_period_label_with_double_space_is_not_the_bill():
    record = extract_payment_receipt("Periode  Tagihan : 202512\nTagihan : Rp 85.000")

    assert record.periode == "DESEMBER 2025"
    assert record.tagihan == "85000"
    assert record.total == "85000"


def test_month_label_before_tagihan_is_not_the_bill():
    record = extract_payment_receipt("Bulan Tagihan : 12/2025\nTotal Bayar : Rp 50.000")

    assert record.periode == "DESEMBER 2025"
    assert record.total == "50000"
    assert record.tagihan == "50000"


def test_jml_tagihan_label():
    record = extract_payment_receipt("Jml Tagihan : Rp 64.500\nAdm : 2.500")

    assert record.tagihan == "64500"
    assert record.admin == "2500"


def test_long_labelled_period_falls_back_to_month_name():
    record = extract_payment_receipt("Periode : PEMAKAIAN AIR MINUM RUMAH DES 2025")
    assert record.periode == "DESEMBER 2025"


def test_labelled_period_without_year_falls_back_to_numeric():
    record = extract_payment_receipt("Periode : 12\nPemakaian 11/2025")
    assert record.periode == "NOVEMBER 2025"
