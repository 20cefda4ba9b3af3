import fitz
import pytest


def build_pdf(pages, **save_kwargs) -> bytes:
    """Render each page's lines top to bottom and return the PDF bytes."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        for i, line in enumerate(lines):
            page.insert_text((50, 72 + 16 * i), line, fontsize=10)
    data = doc.tobytes(**save_kwargs)
    doc.close()
    return data


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def bni_lines():
    return [
        "PT Bank Negara Indonesia (Persero) Tbk",
        "Laporan Mutasi Rekening",
        "Periode: 1 - 30 November 2025",
        "Tanggal & Waktu Rincian Transaksi Nominal Saldo",
        "10 Nov 2025 Transfer",
        "08:37:35 WIB MANDIRI BUDI +10,000",
        "128,090",
        "1 dari 2",
        "12 Nov 2025 Pembelian Pulsa",
        "14:02:11 WIB -5,000 123,090",
        "Saldo Akhir 123,090",
        "Informasi Lainnya",
        "15 Nov 2025 Not a transaction +1 2",
    ]
