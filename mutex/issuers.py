"""
Statement formats the converter understands.

Each issuer is described by an ``IssuerProfile``: the literal phrases that
identify its statements, the markers that bound the transaction table, the
lines to throw away, and the regular expressions used to pull fields out of a
transaction block. Adding a bank means adding a profile, not touching the
parsing code.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Pattern, Tuple

from mutex.currency import SeparatorPolicy


class IssuerVariant(str, Enum):
    BNI = "BNI"
    BRI = "BRI"
    BLU = "BLU"
    BCA = "BCA"
    MANDIRI = "MANDIRI"
    JENIUS = "JENIUS"


class AmountStrategy(Enum):
    SIGNED_PAIR = "signed_pair"        # +/-amount followed by balance
    TRIPLE_COLUMN = "triple_column"    # debit credit balance
    BALANCE_DELTA = "balance_delta"    # amount from running-balance change
    SIGNED_AMOUNT = "signed_amount"    # +/-amount, no balance column


@dataclass(frozen=True)
class IssuerProfile:
    variant: IssuerVariant
    fingerprints: Tuple[str, ...]
    date_anchor: Pattern
    amount_pattern: Pattern
    strategy: AmountStrategy
    start_markers: Tuple[Pattern, ...] = ()
    end_markers: Tuple[Pattern, ...] = ()
    noise_markers: Tuple[str, ...] = ()
    noise_patterns: Tuple[Pattern, ...] = ()
    strip_patterns: Tuple[Pattern, ...] = ()
    amount_in_first_line: bool = False
    opening_balance: Optional[Pattern] = None
    debit_marker: Optional[Pattern] = None
    policy: SeparatorPolicy = SeparatorPolicy.GROUPS_OF_THREE
    newest_first: bool = False

    def matches(self, line: str) -> bool:
        return any(phrase in line for phrase in self.fingerprints)


# "1 dari 3", "Halaman 2 dari 5", "Page 1 of 4"
PAGE_NUMBER = re.compile(r"^(?:Halaman|Page)?\s*\d+\s*(?:dari|of)\s*\d+$", re.IGNORECASE)

ID_MONTHS = r"(?:Jan|Feb|Mar|Apr|Mei|Jun|Jul|Ags|Agu|Sep|Okt|Nov|Des)"
MIXED_MONTHS = r"(?:Jan|Feb|Mar|Apr|May|Mei|Jun|Jul|Aug|Ags|Agu|Sep|Oct|Okt|Nov|Dec|Des)"
EN_MONTHS = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"

# 1.234.567,89
ID_NUMBER = r"\d[\d.]*,\d{2}"
# 1,234,567.89
US_NUMBER = r"\d{1,3}(?:,\d{3})*\.\d{2}"

TIME_WIB = re.compile(r"\d{2}:\d{2}(?::\d{2})?\s*WIB")
TIME = re.compile(r"\d{2}:\d{2}(?::\d{2})?")

OJK_NOTICE = "berizin dan diawasi oleh Otoritas Jasa Keuangan"
LPS_NOTICE = "peserta penjaminan Lembaga Penjamin Simpanan"


def heading(*labels: str) -> Pattern:
    """Match a line that starts with one of ``labels`` as a whole word."""
    alternatives = "|".join(re.escape(label) for label in labels)
    return re.compile(rf"^(?:{alternatives})(?!\w)")


BNI = IssuerProfile(
    variant=IssuerVariant.BNI,
    fingerprints=("PT Bank Negara Indonesia",),
    date_anchor=re.compile(rf"^(\d{{2}} {ID_MONTHS} \d{{4}})"),
    amount_pattern=re.compile(r"(?P<amount>[+-]\d[\d.,]*)\s+(?P<balance>\d[\d.,]*)$"),
    strategy=AmountStrategy.SIGNED_PAIR,
    end_markers=(re.compile(r"^Saldo Akhir"), re.compile(r"^Informasi Lainnya")),
    noise_markers=(
        "PT Bank Negara Indonesia",
        "Laporan Mutasi Rekening",
        OJK_NOTICE,
        LPS_NOTICE,
    ),
    noise_patterns=(heading("Periode:", "Tanggal & Waktu"),),
    strip_patterns=(TIME_WIB,),
)

BRI = IssuerProfile(
    variant=IssuerVariant.BRI,
    fingerprints=("LAPORAN TRANSAKSI FINANSIAL",),
    date_anchor=re.compile(r"^(\d{2}/\d{2}/\d{2})"),
    amount_pattern=re.compile(
        r"(?P<debit>\d[\d.,]*)\s+(?P<credit>\d[\d.,]*)\s+(?P<balance>\d[\d.,]*)$"
    ),
    strategy=AmountStrategy.TRIPLE_COLUMN,
    start_markers=(re.compile(r"^Transaction Date"),),
    end_markers=(re.compile(r"^Opening Balance"),),
    strip_patterns=(
        TIME,
        # teller id
        re.compile(r"(?<!\S)\d{7}(?!\S)"),
    ),
    amount_in_first_line=True,
)

BLU = IssuerProfile(
    variant=IssuerVariant.BLU,
    fingerprints=("bluAccount", "bluSaving", "BCA Digital"),
    date_anchor=re.compile(rf"^(\d{{2}} {MIXED_MONTHS} \d{{4}})"),
    # balance and time are often glued together: "188.144,3806:59"
    amount_pattern=re.compile(
        rf"(?P<amount>[+-]?\s*{ID_NUMBER})\s+(?P<balance>{ID_NUMBER})(?=\d{{2}}:\d{{2}}|\s|$)"
    ),
    strategy=AmountStrategy.SIGNED_PAIR,
    start_markers=(re.compile(r"^Detail Transaksi"),),
    noise_markers=("bluAccount", "BCA Digital", "haloblu"),
    noise_patterns=(
        heading(
            "Tanggal",
            "Halaman",
            "Periode / Period",
            "Mata Uang",
            "Total Pemasukan",
            "Total Pengeluaran",
            "Saldo Awal",
            "Saldo Akhir",
        ),
    ),
    strip_patterns=(TIME,),
    policy=SeparatorPolicy.COMMA_DECIMAL,
    # assumed: not yet confirmed against a real blu statement
    newest_first=True,
)

BCA = IssuerProfile(
    variant=IssuerVariant.BCA,
    fingerprints=("REKENING TAHAPAN", "PT BANK CENTRAL ASIA", "PT. Bank Central Asia"),
    date_anchor=re.compile(r"^(\d{2}/\d{2})(?!/)"),
    amount_pattern=re.compile(US_NUMBER),
    strategy=AmountStrategy.BALANCE_DELTA,
    start_markers=(re.compile(r"SALDO AWAL"),),
    end_markers=(re.compile(r"SALDO AKHIR"),),
    noise_markers=("REKENING TAHAPAN",),
    noise_patterns=(
        heading("NO. REKENING", "HALAMAN", "CATATAN", "Bersambung", "PERIODE", "MATA UANG"),
        re.compile(r"^TANGGAL.*KETERANGAN"),
        re.compile(r"^KCU\s+[A-Z]+"),
        re.compile(r"^MUTASI\s+(?:CR|DB)"),
        # disclaimer paragraph
        re.compile(r"^(?!\d{2}/\d{2}).*(?:APABILA|BERHAK|SEGALA DATA|UANG ANDA)", re.IGNORECASE),
    ),
    strip_patterns=(re.compile(r"\b(?:DB|CR)\b"),),
    opening_balance=re.compile(rf"SALDO AWAL\s*:?\s*(?P<balance>{US_NUMBER})"),
    debit_marker=re.compile(r"\bDB\b"),
)

MANDIRI = IssuerProfile(
    variant=IssuerVariant.MANDIRI,
    fingerprints=("PT Bank Mandiri", "Tabungan NOW", "Mandiri Call"),
    # rows may be prefixed with a running number
    date_anchor=re.compile(rf"^(?:\d{{1,4}}\s+)?(\d{{2}} {MIXED_MONTHS} \d{{4}})"),
    amount_pattern=re.compile(rf"(?P<amount>[+-]\s*{ID_NUMBER})\s+(?P<balance>{ID_NUMBER})"),
    strategy=AmountStrategy.SIGNED_PAIR,
    end_markers=(re.compile(r"^Ini adalah batas akhir transaksi"),),
    noise_markers=(OJK_NOTICE, LPS_NOTICE),
    noise_patterns=(
        heading(
            "Nomor Rekening",
            "Account Number",
            "Cabang",
            "Mata Uang",
            "Saldo Awal",
            "Saldo Akhir",
            "Dana Masuk",
            "Dana Keluar",
        ),
        # statement period "01 Nov 2025 - 30 Nov 2025"
        re.compile(rf"^\d{{2}} {MIXED_MONTHS} \d{{4}}\s*-\s*\d{{2}} {MIXED_MONTHS} \d{{4}}$"),
        re.compile(r"^No\b.*Tanggal"),
    ),
    strip_patterns=(TIME_WIB,),
    policy=SeparatorPolicy.COMMA_DECIMAL,
)

JENIUS = IssuerProfile(
    variant=IssuerVariant.JENIUS,
    fingerprints=("PT Bank SMBC Indonesia", "Jenius"),
    date_anchor=re.compile(rf"^(\d{{1,2}} {EN_MONTHS} \d{{4}})"),
    amount_pattern=re.compile(r"(?P<amount>[+-]\s*(?:IDR\s*)?\d[\d.,]*)$"),
    strategy=AmountStrategy.SIGNED_AMOUNT,
    end_markers=(re.compile(r"^Disclaimer"),),
    noise_markers=("PT Bank SMBC Indonesia", OJK_NOTICE, LPS_NOTICE),
    noise_patterns=(re.compile(r"^(?:Date & Time|Tanggal & Waktu)"),),
    strip_patterns=(TIME,),
)


# Classification priority: the first profile whose fingerprint is found wins.
PROFILES = (BNI, BRI, BLU, BCA, MANDIRI, JENIUS)

_BY_VARIANT = {profile.variant: profile for profile in PROFILES}


def get_profile(variant: IssuerVariant) -> IssuerProfile:
    return _BY_VARIANT[IssuerVariant(variant)]
