"""Tests for CSV export of the filtered and sorted view."""

import csv
import io
from datetime import date

from trade_console.models.core import ExportColumn
from trade_console.services.export import export_filename, export_rows, header_row, write_csv

SPEC = [
    ExportColumn("Transaction ID", "transactionId"),
    ExportColumn("Email", "userId.email"),
    ExportColumn("Amount", "amount"),
]

DEPOSITS = [
    {"transactionId": "T1", "userId": {"email": "a@x.com"}, "amount": "10.00"},
    {"transactionId": "T2", "amount": 2.5},
]


def test_header_row() -> None:
    assert header_row(SPEC) == ["Transaction ID", "Email", "Amount"]


def test_export_rows_flattens_nested_and_blanks_missing() -> None:
    assert export_rows(DEPOSITS, SPEC) == [["T1", "a@x.com", "10.00"], ["T2", "", "2.5"]]


def test_write_csv_includes_header_and_counts_rows() -> None:
    buf = io.StringIO()
    assert write_csv(buf, SPEC, DEPOSITS) == 2
    rows = list(csv.reader(io.StringIO(buf.getvalue())))
    assert rows[0] == ["Transaction ID", "Email", "Amount"]
    assert rows[1] == ["T1", "a@x.com", "10.00"]


def test_write_csv_quotes_commas() -> None:
    buf = io.StringIO()
    write_csv(buf, [ExportColumn("Name", "name")], [{"name": "Smith, Ann"}])
    assert '"Smith, Ann"' in buf.getvalue()


def test_export_filename() -> None:
    assert export_filename("deposits", date(2024, 5, 1)) == "deposits-2024-05-01.csv"
