from __future__ import annotations

from io import BytesIO

import pytest
import xlwt
from openpyxl import Workbook

from bachatbox.errors import DecodeError, UnsupportedFileType
from bachatbox.ingest.decoder import decode, file_kind_for, headers_of
from bachatbox.ingest.roles import detect_roles


def _xlsx_bytes(rows: list[list[object]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    for r in rows:
        ws.append(r)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_csv_headers_lowercased_and_cells_trimmed():
    text = "Date, Amount ,Description\n 2024-06-01 , 450 ,  Lunch  \n"
    rows = decode(text, "csv")
    assert rows == [{"date": "2024-06-01", "amount": "450", "description": "Lunch"}]


def test_csv_crlf_bom_and_blank_lines():
    content = "\ufeffDate,Amount\r\n\r\n2024-06-01,10\r\n   \r\n2024-06-02,20\r\n".encode()
    rows = decode(content, "csv")
    assert [r["amount"] for r in rows] == ["10", "20"]
    assert headers_of(rows) == ["date", "amount"]


def test_csv_short_rows_padded_and_long_rows_truncated():
    rows = decode("a,b,c\n1\n1,2,3,4\n", "csv")
    assert rows[0] == {"a": "1", "b": "", "c": ""}
    assert rows[1] == {"a": "1", "b": "2", "c": "3"}


@pytest.mark.parametrize("content", ["", b"", "   \n\n", "Date,Amount\n"])
def test_empty_or_header_only_decodes_to_no_rows(content):
    assert decode(content, "csv") == []


def test_csv_invalid_utf8_raises_decode_error():
    with pytest.raises(DecodeError) as exc:
        decode(b"date,amount\n\xff\xfe,1\n", "csv")
    assert exc.value.file_kind == "csv"


def test_xlsx_first_sheet_read_as_text():
    content = _xlsx_bytes(
        [
            ["Date", "Amount", "Description", "Notes"],
            ["15/03/2024", "450", "Lunch", None],
            [None, None, None, None],
            ["16/03/2024", "1,200.50", "Groceries", "weekly"],
        ]
    )
    rows = decode(content, "xlsx")
    assert headers_of(rows) == ["date", "amount", "description", "notes"]
    assert rows == [
        {"date": "15/03/2024", "amount": "450", "description": "Lunch", "notes": ""},
        {"date": "16/03/2024", "amount": "1,200.50", "description": "Groceries", "notes": "weekly"},
    ]


def test_corrupt_workbook_raises_decode_error():
    with pytest.raises(DecodeError) as exc:
        decode(b"this is not a zip archive", "xlsx")
    assert exc.value.file_kind == "xlsx"


def test_unknown_kind_raises_decode_error():
    with pytest.raises(DecodeError):
        decode("a,b\n1,2\n", "pdf")


@pytest.mark.parametrize(
    ("name", "kind"),
    [("statement.csv", "csv"), ("Export.XLSX", "xlsx"), ("old.xls", "xls")],
)
def test_file_kind_for_known_extensions(name, kind):
    assert file_kind_for(name) == kind


@pytest.mark.parametrize("name", ["statement.pdf", "notes.txt", "README"])
def test_file_kind_for_rejects_other_extensions(name):
    with pytest.raises(UnsupportedFileType):
        file_kind_for(name)


def _xls_bytes(rows: list[list[object]]) -> bytes:
    wb = xlwt.Workbook()
    ws = wb.add_sheet("Statement")
    for r, values in enumerate(rows):
        for c, value in enumerate(values):
            if value is not None:
                ws.write(r, c, value)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_xls_first_sheet_read_as_text():
    content = _xls_bytes(
        [
            ["Date", "Amount", "Description"],
            ["15/03/2024", "450", "Lunch"],
            ["16/03/2024", "1,200.50", "Groceries"],
        ]
    )
    rows = decode(content, "xls")
    assert headers_of(rows) == ["date", "amount", "description"]
    assert rows == [
        {"date": "15/03/2024", "amount": "450", "description": "Lunch"},
        {"date": "16/03/2024", "amount": "1,200.50", "description": "Groceries"},
    ]


@pytest.mark.parametrize("declared", ["xls", "csv"])
def test_xlsx_content_declared_as_other_kind_raises(declared):
    content = _xlsx_bytes([["Date", "Amount"], ["15/03/2024", "450"]])
    with pytest.raises(DecodeError) as exc:
        decode(content, declared)
    assert exc.value.file_kind == declared


def test_blank_spreadsheet_header_claims_no_role():
    content = _xlsx_bytes(
        [
            ["Date", "Amount", None, "Description", "Name"],
            ["15/03/2024", "450", "x", "Lunch", "Asha"],
        ]
    )
    rows = decode(content, "xlsx")
    assert headers_of(rows) == ["date", "amount", "", "description", "name"]
    roles = detect_roles(headers_of(rows))
    assert roles["name"] == "name"
    assert "" not in roles.values()
