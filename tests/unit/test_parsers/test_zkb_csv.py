from datetime import date

from ledger.categorization.rules import SAVINGS_TRANSFER, UNCATEGORIZED, Categorizer, CategoryRule
from ledger.models.transaction import Transaction
from ledger.parsers.zkb_csv import (
    COLUMNS,
    decode_upload,
    normalize_row,
    parse_statement,
    read_rows,
)


def _row(**overrides) -> dict:
    row = {column: "" for column in COLUMNS}
    row.update(overrides)
    return row


class TestDecodeUpload:
    def test_strips_bom(self):
        assert decode_upload("\ufeffDate;X".encode("utf-8")) == "Date;X"

    def test_without_bom(self):
        assert decode_upload(b"Date;X") == "Date;X"

    def test_invalid_utf8_is_replaced(self):
        assert "\ufffd" in decode_upload(b"Date;\xff")


class TestReadRows:
    def test_header_keys_and_trimmed_cells(self):
        rows = list(read_rows(" Date ; Booking text \n 15.03.2024 ; Coop \n"))
        assert rows == [{"Date": "15.03.2024", "Booking text": "Coop"}]

    def test_blank_lines_are_skipped(self):
        rows = list(read_rows("\n\nDate;Curr\n\n01.01.2024;CHF\n;\n"))
        assert rows == [{"Date": "01.01.2024", "Curr": "CHF"}]

    def test_short_rows_are_padded(self):
        rows = list(read_rows("Date;Curr;Details\n01.01.2024\n"))
        assert rows == [{"Date": "01.01.2024", "Curr": "", "Details": ""}]

    def test_quoted_delimiter(self):
        rows = list(read_rows('Date;Details\n01.01.2024;"a;b"\n'))
        assert rows[0]["Details"] == "a;b"


class TestNormalizeRow:
    def test_debit_row(self):
        txn = normalize_row(
            _row(
                **{
                    "Date": "15.03.2024",
                    "Booking text": "MIGROS FILIALE 123",
                    "Curr": "CHF",
                    "ZKB reference": "Z001",
                    "Debit CHF": "1'045,50",
                    "Value date": "16.03.2024",
                    "Balance CHF": "2'000,00",
                }
            )
        )
        assert txn is not None
        assert txn.date == date(2024, 3, 15)
        assert txn.value_date == date(2024, 3, 16)
        assert txn.type == "debit"
        assert txn.amount == 1045.5
        assert txn.debit_amount == 1045.5
        assert txn.credit_amount == 0.0
        assert txn.balance_after == 2000.0
        assert txn.external_reference == "Z001"
        assert txn.category == "Groceries"
        assert txn.category_manual is False
        assert (txn.year_key, txn.month_key, txn.day_key) == ("2024", "2024-03", "2024-03-15")

    def test_credit_row_is_uncategorized(self):
        txn = normalize_row(_row(**{"Date": "01.03.2024", "Booking text": "Migros refund", "Credit CHF": "20,00"}))
        assert txn.type == "credit"
        assert txn.amount == 20.0
        assert txn.category == UNCATEGORIZED

    def test_missing_amounts_default_to_debit_zero(self):
        txn = normalize_row(_row(**{"Date": "01.03.2024"}))
        assert txn.type == "debit"
        assert txn.amount == 0.0

    def test_missing_currency_defaults_to_chf(self):
        assert normalize_row(_row(**{"Date": "01.03.2024"})).currency == "CHF"

    def test_row_without_date_is_dropped(self):
        assert normalize_row(_row(**{"Booking text": "Total", "Debit CHF": "10,00"})) is None

    def test_unparseable_value_date_is_none(self):
        txn = normalize_row(_row(**{"Date": "01.03.2024", "Value date": "soon"}))
        assert txn.value_date is None

    def test_savings_transfer_with_user_name(self):
        txn = normalize_row(
            _row(**{"Date": "01.03.2024", "Booking text": "Account transfer: Jane Doe", "Credit CHF": "500"}),
            user_full_name="Jane Doe",
        )
        assert txn.category == SAVINGS_TRANSFER

    def test_custom_categorizer(self):
        categorizer = Categorizer([CategoryRule("Education", ("LIBRARY",))])
        txn = normalize_row(_row(**{"Date": "01.03.2024", "Booking text": "City Library"}), categorizer)
        assert txn.category == "Education"


def test_parse_statement(sample_csv):
    transactions = parse_statement(sample_csv, user_full_name="Jane Doe")
    assert len(transactions) == 3
    assert [t.external_reference for t in transactions] == ["Z001", "Z002", "Z003"]
    assert [t.category for t in transactions] == ["Groceries", UNCATEGORIZED, SAVINGS_TRANSFER]


def test_parse_statement_without_rows(csv_factory):
    assert parse_statement(csv_factory()) == []


def test_parse_statement_empty_bytes():
    assert parse_statement(b"") == []


def test_migros_example_row():
    txn = normalize_row(_row(**{"Date": "15.03.2024", "Booking text": "MIGROS FILIALE 123", "Debit CHF": "45,90"}))
    assert txn.debit_amount == 45.9
    assert txn.month_key == "2024-03"
    assert txn.day_key == "2024-03-15"
    assert txn.category == "Groceries"


def test_amount_is_the_nonzero_side(sample_csv):
    for txn in parse_statement(sample_csv):
        assert txn.amount == max(txn.debit_amount, txn.credit_amount)
        assert (txn.debit_amount == 0) != (txn.credit_amount == 0)
        assert txn.day_key.startswith(txn.month_key)
        assert txn.month_key.startswith(txn.year_key)


def test_long_currency_cell_fits_the_stored_column():
    txn = normalize_row(_row(**{"Date": "01.03.2024", "Curr": "SWISS FRANCS (CHF) ACCOUNT"}))
    assert len(txn.currency) <= Transaction.__table__.c.currency.type.length
    assert txn.currency.startswith("SWISS FRANCS")
