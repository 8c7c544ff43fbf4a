"""Tests for CSV export."""

import csv
import io
from datetime import datetime

import pytest

from reportit.domain.entities import Category, TransactionType
from reportit.domain.errors import ExportError
from reportit.domain.export import CSV_HEADER, CSVExportService, default_export_filename

from helpers import CREATED, make_account, make_trn


@pytest.fixture
def exporter():
    accounts = (make_account(1, "Checking"), make_account(2, "Euro", currency="EUR"))
    categories = (Category(id=7, name="Food", created_at=CREATED),)
    return CSVExportService(accounts, categories, "USD")


def test_default_filename():
    assert default_export_filename(datetime(2024, 3, 15, 9, 5)) == "Report (2024-03-15 09-05).csv"


def test_row_for_categorized_expense(exporter):
    trn = make_trn(
        1,
        TransactionType.EXPENSE,
        "42.1",
        category_id=7,
        title="Grocery run",
        date_time=datetime(2024, 3, 2, 10, 30),
    )
    assert exporter.to_row(trn) == [
        "1",
        "2024-03-02 10:30:00",
        "",
        "expense",
        "Grocery run",
        "",
        "Food",
        "Checking",
        "42.10",
        "USD",
        "",
        "",
        "",
    ]


def test_row_for_transfer_defaults_received_amount(exporter):
    trn = make_trn(2, TransactionType.TRANSFER, 10, to_account_id=2, due_date=datetime(2024, 4, 1))
    row = dict(zip(CSV_HEADER, exporter.to_row(trn)))
    assert row["Category"] == "Unspecified"
    assert row["Due Date"] == "2024-04-01 00:00:00"
    assert row["To Account"] == "Euro"
    assert row["To Amount"] == "10.00"
    assert row["To Currency"] == "EUR"


def test_export_to_handle(exporter):
    handle = io.StringIO()
    trns = [make_trn(i, TransactionType.INCOME, i, date_time=datetime(2024, 3, i)) for i in (1, 2)]
    assert exporter.export(lambda: trns, handle) == 2

    rows = list(csv.reader(io.StringIO(handle.getvalue())))
    assert rows[0] == CSV_HEADER
    assert [r[0] for r in rows[1:]] == ["1", "2"]


def test_export_to_unwritable_path(exporter, tmp_path):
    destination = tmp_path / "missing-dir" / "report.csv"
    with pytest.raises(ExportError, match="Could not write"):
        exporter.export(lambda: [], destination)
