"""Sample OCR texts shared by the test suite."""

import pytest

PLN_TOKEN_TEXT = """STRUK PEMBELIAN LISTRIK PRABAYAR
No. Meter      : 14123456789
IDPEL          : 531234567890
Nama           : SITI AMINAH
Tarif/Daya     : R1 / 1300 VA
No. Ref        : 0ABC1234
Rp Stroom/Token: Rp 100.000
Jumlah KWH     : 14090
PPn            : Rp 0,00
Angsuran       : Rp 0,00
Materai        : Rp 0,00
Biaya Admin    : Rp 3.000
Total tagihan  : Rp 103.000
Stroom/Nomor Token
1234 5678 9012 3456 7890
"""

PDAM_PAYMENT_TEXT = """PERUMDA TIRTA PAKUAN KOTA BOGOR
2025-12-05 10:21:33
Nama Pelanggan : AGUS SALIM ALAMAT JL. MAWAR 5
No. Pelanggan : 01122334
Periode Tagihan : 202512
Stand Meter : 1200 - 1250
Tagihan : Rp 85.000
Denda : Rp 5.000
Biaya Admin : Rp 2.500
Total Bayar : Rp 92.500
No. Pesanan : INV12345AB
"""


@pytest.fixture
def token_text():
    return PLN_TOKEN_TEXT


@pytest.fixture
def payment_text():
    return PDAM_PAYMENT_TEXT


@pytest.fixture
def minimal_token_text():
    """Lines from a badly photographed receipt, no TOKEN block."""
    return "\n".join([
        "Nomor Pelanggan 530123456789",
        "Nama: BUDI SANTOSO",
        "R1M/900 VA",
        "Jumlah KWH 3530",
        "Stroom/Token Rp42000",
        "Biaya Admin Rp2500",
    ])
