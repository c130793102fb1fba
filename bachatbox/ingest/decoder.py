"""Tabular decoding: file content -> ``RawRow`` dicts.

Two paths share one output shape (lower-cased, trimmed header -> trimmed cell):

- CSV: a plain line/comma split. The first non-empty line is the header; later
  non-empty lines are zipped against it positionally. Quoted commas and
  embedded newlines are not supported; exports from the supported payment
  apps do not use them.
- Spreadsheets (``.xlsx``/``.xls``): the first sheet is read with pandas
  (``openpyxl``/``xlrd`` engines) with every cell kept as text.

Decoding is stateless; re-running ``decode`` is the only way to restart.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from io import BytesIO
from pathlib import PurePath

import pandas as pd

from ..errors import DecodeError, UnsupportedFileType
from ..logging_setup import get_logger
from ..models import RawRow

logger = get_logger(__name__)

FILE_KINDS: tuple[str, ...] = ("csv", "xlsx", "xls")

_EXCEL_ENGINES: dict[str, str] = {"xlsx": "openpyxl", "xls": "xlrd"}

_UNNAMED = re.compile(r"unnamed: \d+(\.\d+)?")


def _normalize_kind(file_kind: str) -> str:
    kind = (file_kind or "").strip().lower().lstrip(".")
    if kind not in FILE_KINDS:
        raise DecodeError(f"unsupported file kind: {file_kind!r}", file_kind=file_kind)
    return kind


def file_kind_for(filename: str | PurePath) -> str:
    """Return the decoder kind for a file name based on its extension."""

    suffix = PurePath(filename).suffix.lower().lstrip(".")
    if suffix not in FILE_KINDS:
        raise UnsupportedFileType(
            f"Please upload a CSV or Excel file (.csv, .xlsx, .xls); got {str(filename)!r}",
            file_kind=suffix or None,
        )
    return suffix


def _as_text(content: bytes | str) -> str:
    if isinstance(content, str):
        return content
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError("CSV content is not valid UTF-8", file_kind="csv") from exc
    # Workbook containers are binary; NULs never occur in a text export.
    if "\x00" in text:
        raise DecodeError("CSV content is binary (is it a workbook?)", file_kind="csv")
    return text


def _decode_csv(content: bytes | str) -> list[RawRow]:
    text = _as_text(content)
    lines = [line.rstrip("\r") for line in text.split("\n")]

    headers: list[str] | None = None
    rows: list[RawRow] = []
    for line in lines:
        if not line.strip():
            continue
        if headers is None:
            headers = [h.strip().lower() for h in line.split(",")]
            continue
        values = line.split(",")
        rows.append(
            {
                h: (values[i].strip() if i < len(values) else "")
                for i, h in enumerate(headers)
            }
        )
    return rows


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def _header_text(column: object) -> str:
    # pandas names blank header cells "Unnamed: <n>"; they carry no role.
    text = _cell_text(column).lower()
    if _UNNAMED.fullmatch(text):
        return ""
    return text


def _decode_spreadsheet(content: bytes | str, kind: str) -> list[RawRow]:
    if isinstance(content, str):
        raise DecodeError(f"{kind} content must be bytes, not text", file_kind=kind)
    try:
        df = pd.read_excel(
            BytesIO(content),
            sheet_name=0,
            dtype=str,
            keep_default_na=False,
            engine=_EXCEL_ENGINES[kind],
        )
    except Exception as exc:
        raise DecodeError(f"could not read {kind} workbook: {exc}", file_kind=kind) from exc

    headers = [_header_text(c) for c in df.columns]
    rows: list[RawRow] = []
    for values in df.itertuples(index=False, name=None):
        row = {h: _cell_text(v) for h, v in zip(headers, values, strict=False)}
        if all(v == "" for v in row.values()):
            continue
        rows.append(row)
    return rows


def decode(content: bytes | str, file_kind: str) -> list[RawRow]:
    """Decode ``content`` of the declared ``file_kind`` into rows in file order.

    Empty content decodes to ``[]``. Content that cannot be read as
    ``file_kind`` raises :class:`~bachatbox.errors.DecodeError`.
    """

    kind = _normalize_kind(file_kind)
    if not content or (isinstance(content, str) and not content.strip()):
        return []
    if kind == "csv":
        rows = _decode_csv(content)
    else:
        rows = _decode_spreadsheet(content, kind)
    logger.debug("decoded %d %s rows", len(rows), kind)
    return rows


def headers_of(rows: Sequence[RawRow]) -> list[str]:
    """Header set of a decoded file, taken from its first row."""

    if not rows:
        return []
    return list(rows[0].keys())


__all__ = ["FILE_KINDS", "decode", "file_kind_for", "headers_of"]
