"""Exogenous driver alignment between the editable map and the wire matrix.

Two shapes exist for the same data:
  - map:    {column: [v_0, ..., v_{h-1}]}, keyed by name, order irrelevant
  - matrix: {columns: [...], rows: [[...], ...]} in the server-declared order

The remote model is order-sensitive and unaware of names, so the matrix
column order always follows ``columns`` (from /api/debug/exog), never the
map's own key order.

Nothing here raises: unknown or missing values resolve to 0 because the model
needs a dense rectangular input. Shape repairs are reported through
AlignmentReport and logged at debug level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from forecast_client.coercion import to_number_or_zero
from forecast_client.io.csv_codec import CsvDocument
from forecast_client.schemas import ExogMatrix

logger = logging.getLogger(__name__)

ExogMap = dict[str, list[float]]


@dataclass
class AlignmentReport:
    """Non-fatal diagnostics of a map -> declared-columns alignment."""

    dropped_columns: list[str] = field(default_factory=list)
    zero_filled_columns: list[str] = field(default_factory=list)
    padded_cells: int = 0
    truncated_cells: int = 0

    @property
    def is_clean(self) -> bool:
        return not (self.dropped_columns or self.zero_filled_columns or self.padded_cells or self.truncated_cells)


def _horizon(horizon: int) -> int:
    return max(0, int(horizon))


def _cell(values: Sequence[Any] | None, index: int) -> float:
    if values is None or index >= len(values):
        return 0.0
    return to_number_or_zero(values[index])


def align_report(exog: Mapping[str, Sequence[Any]], columns: Sequence[str], horizon: int) -> AlignmentReport:
    h = _horizon(horizon)
    declared = set(columns)
    report = AlignmentReport(dropped_columns=[c for c in exog if c not in declared])

    for name in columns:
        values = exog.get(name)
        if values is None:
            report.zero_filled_columns.append(name)
            continue
        if len(values) < h:
            report.padded_cells += h - len(values)
        elif len(values) > h:
            report.truncated_cells += len(values) - h
    return report


def _log_report(report: AlignmentReport, where: str) -> None:
    if report.is_clean:
        return
    logger.debug(
        f"{where}: dropped={report.dropped_columns} zero_filled={report.zero_filled_columns} "
        f"padded_cells={report.padded_cells} truncated_cells={report.truncated_cells}"
    )


def map_to_matrix(exog: Mapping[str, Sequence[Any]], columns: Sequence[str], horizon: int) -> ExogMatrix:
    """Convert a map to a dense matrix in the server-declared column order.

    Example:
        map_to_matrix({"ADR": [1, 2, 3]}, ["ADR", "RoomNights"], 3)
        -> columns ["ADR", "RoomNights"], rows [[1, 0], [2, 0], [3, 0]]
    """
    h = _horizon(horizon)
    cols = list(columns)
    _log_report(align_report(exog, cols, h), "map_to_matrix")

    rows = [[0.0] * len(cols) for _ in range(h)]
    for c, name in enumerate(cols):
        values = exog.get(name)
        for r in range(h):
            rows[r][c] = _cell(values, r)
    return ExogMatrix(columns=cols, rows=rows)


def resize_map(exog: Mapping[str, Sequence[Any]], columns: Sequence[str], horizon: int) -> ExogMap:
    """Give every declared column exactly ``horizon`` numbers.

    Existing values are copied by index, new positions are zero-filled and
    positions beyond ``horizon`` are dropped. Undeclared columns are dropped.
    """
    h = _horizon(horizon)
    _log_report(align_report(exog, columns, h), "resize_map")
    return {name: [_cell(exog.get(name), r) for r in range(h)] for name in columns}


def matrix_to_map(matrix: ExogMatrix | Mapping[str, Any], horizon: int | None = None) -> ExogMap:
    """Inverse of map_to_matrix, used to load a matrix back into the grid."""
    if not isinstance(matrix, ExogMatrix):
        matrix = ExogMatrix.model_validate(matrix)
    h = len(matrix.rows) if horizon is None else _horizon(horizon)
    out: ExogMap = {}
    for c, name in enumerate(matrix.columns):
        column = [row[c] if c < len(row) else None for row in matrix.rows]
        out[name] = [_cell(column, r) for r in range(h)]
    return out


def empty_map(columns: Sequence[str], horizon: int) -> ExogMap:
    return resize_map({}, columns, horizon)


def fill_column(exog: Mapping[str, Sequence[Any]], column: str, value: Any, horizon: int) -> ExogMap:
    """Return a copy of ``exog`` with ``column`` set to ``value`` for every period."""
    out: ExogMap = {k: list(v) for k, v in exog.items()}
    if not column:
        return out
    out[column] = [to_number_or_zero(value)] * _horizon(horizon)
    return out


def set_cell(exog: Mapping[str, Sequence[Any]], column: str, row: int, raw: Any, horizon: int) -> ExogMap:
    """Return a copy of ``exog`` with one grid cell replaced by the parsed ``raw``."""
    out: ExogMap = {k: list(v) for k, v in exog.items()}
    h = _horizon(horizon)
    values = [_cell(out.get(column), r) for r in range(h)]
    if 0 <= row < h:
        values[row] = to_number_or_zero(raw)
    out[column] = values
    return out


def map_from_csv(document: CsvDocument, columns: Sequence[str], horizon: int) -> ExogMap:
    """Align an imported/pasted CSV to the declared columns.

    Headers are matched by trimmed name. A declared column without a header
    and rows missing from the file both resolve to zeros; CSV rows beyond
    ``horizon`` are ignored.
    """
    h = _horizon(horizon)
    index = document.column_index()
    missing = [name for name in columns if name not in index]
    extra = [name for name in index if name not in set(columns)]
    if missing or extra or len(document.rows) != h:
        logger.debug(
            f"map_from_csv: missing={missing} ignored={extra} rows={len(document.rows)} horizon={h}"
        )

    out: ExogMap = {}
    for name in columns:
        idx = index.get(name)
        values = []
        for r in range(h):
            src = document.rows[r] if r < len(document.rows) else []
            raw = src[idx] if idx is not None and idx < len(src) else ""
            values.append(to_number_or_zero(raw))
        out[name] = values
    return out


def template_rows(columns: Sequence[str], horizon: int) -> list[dict[str, float]]:
    """All-zero records for the downloadable template (one per period)."""
    return [{name: 0.0 for name in columns} for _ in range(_horizon(horizon))]
