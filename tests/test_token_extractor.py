"""Tests for the PLN token receipt extractor."""

from struk.extraction import ExtractionCatalog, TokenExtractor, extract_token_receipt
from struk.models import TokenReceipt


def test_full_pln_receipt(token_text):
    record = extract_token_receipt(token_text)

    assert isinstance(record, TokenReceipt)
    assert record.mode == "token"
    assert record.token == "12345678901234567890"
    assert record.idpel == "531234567890"
    assert record.nama == "SITI AMINAH"
    assert record.tarif == "R1 / 1300 VA"
    assert record.kwh == "140,9"
    assert record.nominal == "100000"
    assert record.admin == "3000"
    assert record.total == "103000"
    assert record.ppn == "0,00"
    assert record.angsmat == "0,00/0,00"
    assert record.raw == token_text


def test_partial_receipt_snaps_nominal(minimal_token_text):
    record = extract_token_receipt(minimal_token_text)

    assert record.idpel == "530123456789"
    assert record.nama == "BUDI SANTOSO"
    assert record.tarif == "R1M/900 VA"
    assert record.kwh == "35,3"
    assert record.nominal == "50000"
    assert record.admin == "2500"
    assert record.token == ""
    assert record.total == ""
    assert record.ppn == "0"
    assert record.angsmat == "0,00/0,00"


def test_empty_text_gives_defaults():
    record = extract_token_receipt("")

    assert record.token == ""
    assert record.nominal == ""
    assert record.ppn == "0"
    assert record.angsmat == "0,00/0,00"
    assert record.raw == ""


def test_token_after_label():
    record = extract_token_receipt("TOKEN : 1111 2222 3333 4444 5555")
    assert record.token == "11112222333344445555"


def test_bare_token_groups():
    record = extract_token_receipt("STRUK\n0101 2020 3030 4040 5050\nTERIMA KASIH")
    assert record.token == "01012020303040405050"


def test_tariff_from_label_gets_va_suffix():
    record = extract_token_receipt("Tarif/Daya : R1M/900\nNo Ref: 123")
    assert record.tarif == "R1M/900 VA"


def test_tariff_drops_trailing_garbage():
    record = extract_token_receipt("Tarif/Daya R1/2200 No Ref 123")
    assert record.tarif == "R1/2200 VA"


def test_kwh_with_spaced_label():
    record = extract_token_receipt("Jml K W H : 3530")
    assert record.kwh == "35,3"


def test_kwh_before_unit():
    record = extract_token_receipt("Energi 46 kWh")
    assert record.kwh == "46,0"


def test_nominal_from_bare_denomination():
    record = extract_token_receipt("PLN PRABAYAR 50000\nIDPEL 530123456789")

    assert record.nominal == "50000"
    assert record.idpel == "530123456789"


def test_order_number():
    record = extract_token_receipt("No. Pesanan : INV98765\nStroom/Token Rp 20.000")

    assert record.no_pesanan == "INV98765"
    assert record.nominal == "20000"
    assert record.to_dict()["noPesanan"] == "INV98765"


def test_name_restated_label_is_cleaned():
    record = extract_token_receipt("Nama : Nama: ANI\nIDPEL 530123456789")
    assert record.nama == "ANI"


def test_custom_catalog_denominations():
    extractor = TokenExtractor(ExtractionCatalog(denominations=(25000,)))
    record = extractor.extract("Stroom/Token Rp 24.000")
    assert record.nominal == "25000"


def test_amounts_drop_cents_group():
    record = extract_token_receipt("Biaya Admin : Rp 2.500,00\nTotal Tagihan : Rp 52.500,00")

    assert record.admin == "2500"
    assert record.total == "52500"
