"""Spreadsheet export of extracted transactions."""

import io
from typing import Iterable, List

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

DEFAULT_FILENAME = "Mutex_Report.xlsx"

# record field -> column header
COLUMNS = (
    ("date", "Tanggal"),
    ("description", "Transaksi"),
    ("credit", "Pemasukan"),
    ("debit", "Pengeluaran"),
    ("balance", "Saldo"),
)

MONEY_FIELDS = {"credit", "debit", "balance"}


def build_workbook(records: Iterable[dict], sheet_title: str = "Mutasi") -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    ws.append([label for _, label in COLUMNS])
    widths = [len(label) for _, label in COLUMNS]

    for record in records:
        row = [record.get(field, "") for field, _ in COLUMNS]
        ws.append(row)
        widths = [max(w, len(str(v))) for w, v in zip(widths, row)]

    for col_idx, (field, _) in enumerate(COLUMNS, start=1):
        if field in MONEY_FIELDS:
            for (cell,) in ws.iter_rows(min_row=2, min_col=col_idx, max_col=col_idx):
                cell.number_format = "#,##0.00"

    for col_idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width

    return wb


def workbook_bytes(records: List[dict]) -> bytes:
    buffer = io.BytesIO()
    build_workbook(records).save(buffer)
    return buffer.getvalue()
