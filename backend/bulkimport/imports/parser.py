"""
CSV text parser for bulk imports.

Turns untrusted CSV text into header names plus one ``{field: value}`` mapping
per data row. The parser knows nothing about entities; it only enforces the
structural and content-safety rules every import shares:

* input must be UTF-8 text (a leading byte-order mark is ignored)
* blank lines are dropped, so row numbers count non-blank lines
* header names must be non-empty and unique
* every data row must have exactly as many cells as the header
* a cell starting with ``=``, ``+``, ``-`` or ``@`` is rejected unless it is a
  plain signed decimal number, which blocks spreadsheet formula injection
* header width and row count are capped, and the row cap is checked as rows
  are read

Quoted fields may contain commas and doubled quotes (``""``). Newlines inside
quoted fields are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

from bulkimport.imports.errors import CSVImportError

DEFAULT_MAX_ROWS = 5000
DEFAULT_MAX_COLUMNS = 50

FORMULA_PREFIXES: tuple[str, ...] = ("=", "+", "-", "@")

_LINE_BREAK = re.compile(r"\r?\n")
_SIGNED_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_BOM = "\ufeff"


@dataclass(frozen=True)
class ParsedCsv:
    """Header names and trimmed data rows, in file order."""

    fields: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)


def parse_csv(
    content: str | bytes,
    *,
    max_rows: int = DEFAULT_MAX_ROWS,
    max_columns: int = DEFAULT_MAX_COLUMNS,
) -> ParsedCsv:
    """
    Parse CSV text into a ParsedCsv.

    Args:
        content:     Raw CSV body. ``bytes`` are decoded strictly as UTF-8.
        max_rows:    Maximum number of data rows (header excluded).
        max_columns: Maximum number of header columns.

    Raises:
        CSVImportError: the file cannot be trusted as a whole.
    """

    text = _decode(content)
    lines = _non_blank_lines(text)

    header_line = next(lines, None)
    if header_line is None:
        raise CSVImportError("CSV content is empty.")

    fields = _split_line(header_line, row_number=1)
    if not any(fields):
        raise CSVImportError("CSV header row is empty.")
    if len(fields) > max_columns:
        raise CSVImportError(
            f"CSV has {len(fields)} columns; the maximum is {max_columns}."
        )
    seen: set[str] = set()
    for position, name in enumerate(fields, start=1):
        if not name:
            raise CSVImportError(f"Column {position} has an empty header.")
        if name in seen:
            raise CSVImportError(f"Column {position} repeats the header '{name}'.")
        seen.add(name)
        _reject_formula(name, row_number=1, column=name)

    rows: list[dict[str, str]] = []
    for row_number, line in enumerate(lines, start=2):
        if len(rows) >= max_rows:
            raise CSVImportError(
                f"CSV exceeds the maximum of {max_rows} data rows."
            )

        cells = _split_line(line, row_number=row_number)
        if len(cells) != len(fields):
            raise CSVImportError(
                f"Row {row_number} has {len(cells)} columns but expected {len(fields)}."
            )
        for column, cell in zip(fields, cells):
            _reject_formula(cell, row_number=row_number, column=column)

        rows.append(dict(zip(fields, cells)))

    return ParsedCsv(fields=fields, rows=rows)


def _decode(content: str | bytes) -> str:
    if isinstance(content, (bytes, bytearray)):
        try:
            text = bytes(content).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CSVImportError("CSV must be UTF-8 encoded.") from exc
    elif isinstance(content, str):
        # Lone surrogates (e.g. from a lossy upstream decode) do not survive
        # a UTF-8 round trip.
        try:
            content.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise CSVImportError("CSV must be UTF-8 encoded.") from exc
        text = content
    else:
        raise CSVImportError("CSV content must be text.")

    if text.startswith(_BOM):
        text = text[len(_BOM):]
    if not text.strip():
        raise CSVImportError("CSV content is empty.")
    return text


def _non_blank_lines(text: str) -> Iterator[str]:
    for raw_line in _LINE_BREAK.split(text):
        line = raw_line.strip()
        if line:
            yield line


def _split_line(line: str, *, row_number: int) -> list[str]:
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if in_quotes:
            if char == '"':
                if index + 1 < length and line[index + 1] == '"':
                    current.append('"')
                    index += 2
                    continue
                in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1

    if in_quotes:
        raise CSVImportError(f"Row {row_number} has an unterminated quoted field.")

    cells.append("".join(current).strip())
    return cells


def _reject_formula(value: str, *, row_number: int, column: str) -> None:
    if not value.startswith(FORMULA_PREFIXES):
        return
    if _SIGNED_DECIMAL.fullmatch(value):
        return
    raise CSVImportError(
        f"Row {row_number}, column '{column}': values starting with '{value[0]}' "
        "are not allowed (possible formula injection)."
    )
