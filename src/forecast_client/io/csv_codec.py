"""CSV codec for exogenous templates, imports and pasted text.

Parsing is a single-pass scanner with an explicit in-quotes flag:
- a delimiter or newline inside quotes is literal
- a doubled quote inside a quoted field is a literal quote
- \\r\\n, \\n and bare \\r are equivalent row terminators
- trailing rows whose cells are all empty are dropped
- the first row is always the header row

Malformed input is recovered permissively by default: an unterminated quote
is closed at end of input. Pass ``strict=True`` to get a CsvParseError instead.

Serialization always produces a rectangular document whose header is the
union of record keys in first-seen order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from pathlib import Path
from typing import Any, Iterable, Mapping

import numpy as np

logger = logging.getLogger(__name__)


class CsvParseError(ValueError):
    def __init__(self, message: str, line: int):
        super().__init__(f"{message} (line {line})")
        self.line = line


@dataclass
class CsvDocument:
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.headers or not self.rows

    def column_index(self) -> dict[str, int]:
        """Header name (trimmed) -> position; the last duplicate wins."""
        return {h.strip(): i for i, h in enumerate(self.headers)}

    def records(self) -> list[dict[str, str]]:
        """Header-keyed records. Short rows pad with "", extra fields are ignored."""
        out = []
        for row in self.rows:
            out.append({h: (row[i] if i < len(row) else "") for i, h in enumerate(self.headers)})
        return out


def parse_csv(text: str, delimiter: str = ",", strict: bool = False) -> CsvDocument:
    """Parse CSV text into headers and (possibly ragged) data rows.

    Args:
        text: Raw CSV text (file content or pasted text).
        delimiter: Single-character field separator.
        strict: Raise CsvParseError on an unterminated quote instead of
            closing it at end of input.

    Returns:
        CsvDocument. Empty or header-only input gives an empty document.
    """
    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    in_quotes = False
    line = 1
    quote_line = 1

    def push_cell() -> None:
        row.append("".join(cell))
        cell.clear()

    def push_row() -> None:
        nonlocal row
        rows.append(row)
        row = []

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            if in_quotes and i + 1 < n and text[i + 1] == '"':
                cell.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
                if in_quotes:
                    quote_line = line
        elif ch == delimiter and not in_quotes:
            push_cell()
        elif ch in "\r\n" and not in_quotes:
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            push_cell()
            push_row()
            line += 1
        else:
            if ch == "\n" or (ch == "\r" and not (i + 1 < n and text[i + 1] == "\n")):
                line += 1
            cell.append(ch)
        i += 1

    if in_quotes:
        if strict:
            raise CsvParseError("Unterminated quoted field", quote_line)
        logger.warning(f"Unterminated quote opened on line {quote_line}; closing it at end of input")

    push_cell()
    push_row()

    while rows and all(c == "" for c in rows[-1]):
        rows.pop()

    if len(rows) < 2:
        return CsvDocument()

    return CsvDocument(headers=rows[0], rows=rows[1:])


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Real) and not isinstance(value, int):
        number = float(value)
        if not math.isfinite(number):
            return ""
        # Plain decimal, no exponent or thousands separators: 3.0 -> "3", 1e-7 -> "0.0000001"
        return np.format_float_positional(number, trim="-")
    return str(value)


def _escape(text: str, delimiter: str) -> str:
    if delimiter in text or any(c in text for c in '"\r\n'):
        return '"' + text.replace('"', '""') + '"'
    return text


def serialize_csv(rows: Iterable[Mapping[str, Any]], delimiter: str = ",") -> str:
    """Serialize records to CSV text.

    The header is the union of keys across all records in first-seen order.
    Missing keys and None serialize to empty cells. Lines are joined with \\n
    and there is no trailing newline. No records gives "".
    """
    records = list(rows)
    if not records:
        return ""

    headers: list[str] = []
    seen: set[str] = set()
    for record in records:
        for key in record:
            if key not in seen:
                seen.add(key)
                headers.append(key)

    lines = [delimiter.join(_escape(str(h), delimiter) for h in headers)]
    for record in records:
        lines.append(delimiter.join(_escape(_format_value(record.get(h)), delimiter) for h in headers))
    return "\n".join(lines)


def read_csv_file(path: str | Path, delimiter: str = ",", strict: bool = False) -> CsvDocument:
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_csv(text, delimiter=delimiter, strict=strict)


def write_csv_file(path: str | Path, rows: Iterable[Mapping[str, Any]], delimiter: str = ",") -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_csv(rows, delimiter=delimiter), encoding="utf-8")
    logger.info(f"Wrote CSV to {path}")
    return path
