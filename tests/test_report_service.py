"""
Tests for CSV rendering of report rows.
"""
from app.services.report_service import to_csv


def test_header_from_first_row():
    assert to_csv([{"a": 1, "b": "x,y"}]) == 'a,b\n1,"x,y"\n'


def test_empty_rows():
    assert to_csv([]) == ""


def test_none_becomes_empty_field():
    assert to_csv([{"id": 1, "resume": None}]) == "id,resume\n1,\n"


def test_quotes_are_doubled():
    assert to_csv([{"title": 'Senior "Rockstar" Dev'}]) == 'title\n"Senior ""Rockstar"" Dev"\n'


def test_newlines_are_quoted():
    assert to_csv([{"description": "line one\nline two"}]) == 'description\n"line one\nline two"\n'


def test_later_rows_follow_first_row_columns():
    rows = [
        {"id": 1, "name": "Ann"},
        {"name": "Bob", "id": 2, "extra": "ignored"},
        {"id": 3},
    ]

    assert to_csv(rows) == "id,name\n1,Ann\n2,Bob\n3,\n"
