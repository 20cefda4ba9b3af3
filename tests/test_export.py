import io

from openpyxl import load_workbook

from mutex.export import COLUMNS, build_workbook, workbook_bytes

RECORDS = [
    {"date": "01 Jan 2024", "description": "TRANSFER OUT", "credit": 1000.0, "debit": 0.0, "balance": 5000.0},
    {"date": "02 Jan 2024", "description": "FEE", "credit": 0.0, "debit": 2500.0, "balance": 2500.0},
]


class TestBuildWorkbook:

    def test_header_and_rows(self):
        ws = build_workbook(RECORDS).active
        assert ws.title == "Mutasi"
        assert [c.value for c in ws[1]] == [label for _, label in COLUMNS]
        assert [c.value for c in ws[2]] == ["01 Jan 2024", "TRANSFER OUT", 1000.0, 0.0, 5000.0]
        assert ws.max_row == 3

    def test_column_widths_fit_longest_value(self):
        ws = build_workbook(RECORDS).active
        assert ws.column_dimensions["A"].width == len("01 Jan 2024")
        assert ws.column_dimensions["B"].width == len("TRANSFER OUT")
        assert ws.column_dimensions["D"].width == len("Pengeluaran")

    def test_money_columns_are_formatted(self):
        ws = build_workbook(RECORDS).active
        assert ws["C2"].number_format == "#,##0.00"
        assert ws["A2"].number_format == "General"

    def test_empty_records_still_have_header(self):
        ws = build_workbook([]).active
        assert ws.max_row == 1
        assert ws["A1"].value == "Tanggal"


def test_workbook_bytes_round_trip():
    wb = load_workbook(io.BytesIO(workbook_bytes(RECORDS)))
    ws = wb["Mutasi"]
    assert ws["B3"].value == "FEE"
    assert ws["D3"].value == 2500
