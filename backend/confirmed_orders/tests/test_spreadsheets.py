import io

from django.test import SimpleTestCase
from openpyxl import Workbook

from confirmed_orders.services.spreadsheets import (
    SpreadsheetError,
    UnsupportedFileError,
    parse_file,
)


def _xlsx_bytes(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


class ParseFileTests(SimpleTestCase):
    def test_csv_with_bom_and_blank_lines(self):
        content = "\ufeffSeller Name,Net Weight in MT\n Ramesh ,25.5\n,\nSuresh,10\n".encode("utf-8")
        rows = parse_file(content, "gate.csv")
        self.assertEqual(rows, [
            {"Seller Name": "Ramesh", "Net Weight in MT": "25.5"},
            {"Seller Name": "Suresh", "Net Weight in MT": "10"},
        ])

    def test_xlsx_first_sheet(self):
        content = _xlsx_bytes([
            ["Seller Name", "Net Weight in MT", None],
            ["Ramesh", 25.5, None],
            [None, None, None],
            ["Suresh", 10, None],
        ])
        rows = parse_file(content, "GATE.XLSX")
        self.assertEqual(rows, [
            {"Seller Name": "Ramesh", "Net Weight in MT": 25.5},
            {"Seller Name": "Suresh", "Net Weight in MT": 10},
        ])

    def test_header_only_sheet_is_empty(self):
        self.assertEqual(parse_file(_xlsx_bytes([["Seller Name"]]), "a.xlsx"), [])

    def test_unsupported_extension(self):
        with self.assertRaises(UnsupportedFileError):
            parse_file(b"x", "orders.pdf")
        with self.assertRaises(UnsupportedFileError):
            parse_file(b"x", "orders.xls")

    def test_corrupt_workbook(self):
        with self.assertRaises(SpreadsheetError):
            parse_file(b"not a zip", "orders.xlsx")
