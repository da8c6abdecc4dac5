from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Mapping

import numpy as np

from forecast_client.coercion import to_number_optional

HistogramMode = Literal["residual", "absolute"]

MIN_BINS = 5
MAX_BINS = 60


@dataclass(frozen=True)
class HistogramBin:
    x0: float
    x1: float
    center: float
    count: int


def clamp_bins(bins: float, lo: int = MIN_BINS, hi: int = MAX_BINS) -> int:
    # round half up, then clamp; +inf gives hi, -inf and NaN give lo
    if isinstance(bins, int):
        return max(lo, min(hi, bins))
    if math.isnan(bins):
        return lo
    if math.isinf(bins):
        return hi if bins > 0 else lo
    return int(max(lo, min(hi, math.floor(bins + 0.5))))


def sturges(n: int) -> int:
    """Default bin count for ``n`` samples (Sturges' rule, clamped to 5..40)."""
    if not n or n <= 0:
        return 20
    return clamp_bins(math.ceil(math.log2(n) + 1), MIN_BINS, 40)


def bin_values(
    values: Iterable[float],
    bins: float,
    mode: HistogramMode = "residual",
    *,
    min_bins: int = MIN_BINS,
    max_bins: int = MAX_BINS,
) -> list[HistogramBin]:
    """Bucket an error sample into ``bins`` contiguous bins.

    Domain rules:
      - residual: symmetric [-a, a] with a = max(|min|, |max|), so zero sits on
        a bin boundary and over/under-prediction are visually comparable
      - absolute: [max(0, min), max(lo, max)], never negative

    Non-finite values are dropped first. A value equal to the domain maximum
    goes to the last bin; values outside the domain are dropped, not clipped.
    With a zero-width domain the bin width falls back to 1.

    Returns:
        list of HistogramBin (empty when no finite values remain).
    """
    numbers = (to_number_optional(v) for v in values)
    clean = np.asarray([x for x in numbers if x is not None], dtype=float)
    if clean.size == 0:
        return []

    lo = float(clean.min())
    hi = float(clean.max())
    if mode == "residual":
        a = max(abs(lo), abs(hi))
        lo, hi = -a, a
    elif mode == "absolute":
        lo = max(0.0, lo)
        hi = max(lo, hi)
    else:
        raise ValueError(f"Unknown histogram mode: {mode!r}")

    k = clamp_bins(bins, min_bins, max_bins)
    width = (hi - lo) / k or 1.0

    edges = [lo + i * width for i in range(k + 1)]
    counts = np.zeros(k, dtype=int)

    inside = clean[(clean >= lo) & (clean <= hi)]
    idx = np.floor((inside - lo) / width).astype(int)
    idx = np.clip(idx, 0, k - 1)
    np.add.at(counts, idx, 1)

    return [
        HistogramBin(x0=edges[i], x1=edges[i + 1], center=(edges[i] + edges[i + 1]) / 2, count=int(counts[i]))
        for i in range(k)
    ]


def _row_value(row: Any, name: str) -> float | None:
    raw = row.get(name) if isinstance(row, Mapping) else getattr(row, name, None)
    return to_number_optional(raw)


def error_values(rows: Iterable[Any], mode: HistogramMode = "residual") -> list[float]:
    """Histogram sample from /metrics by-period rows.

    residual = y - yhat (positive means underprediction), missing sides as 0.
    absolute prefers the server's abs_err (floored at 0) over |y - yhat|.
    """
    out = []
    for row in rows:
        y = _row_value(row, "y") or 0.0
        yhat = _row_value(row, "yhat") or 0.0
        if mode == "absolute":
            abs_err = _row_value(row, "abs_err")
            out.append(max(0.0, abs_err) if abs_err is not None else abs(y - yhat))
        else:
            out.append(y - yhat)
    return out
