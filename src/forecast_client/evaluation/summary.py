from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd

from forecast_client.coercion import to_number_optional, to_number_required
from forecast_client.schemas import MetricsByPeriodRow, MetricsResponse


@dataclass(frozen=True)
class MetricsKpis:
    """Display-ready KPI values of a /metrics response."""

    mae: int
    rmse: int
    mape_pct: float
    smape_pct: float
    bias: int
    bias_trend: Literal["up", "down", "flat"]
    coverage_pct: float | None = None


def summarize_metrics(response: MetricsResponse | None) -> MetricsKpis:
    """Round the summary for KPI tiles; an empty window yields zeros."""
    m = response.metrics if response is not None else None

    def value(name: str) -> float:
        return to_number_required(getattr(m, name, None), 0.0)

    bias = value("bias_me")
    coverage = to_number_optional(getattr(m, "coverage_95", None))
    return MetricsKpis(
        mae=round(value("mae")),
        rmse=round(value("rmse")),
        mape_pct=value("mape") * 100,
        smape_pct=value("smape") * 100,
        bias=round(bias),
        bias_trend="flat" if bias == 0 else ("up" if bias > 0 else "down"),
        coverage_pct=None if coverage is None else coverage * 100,
    )


def by_period_frame(rows: list[MetricsByPeriodRow]) -> pd.DataFrame:
    """Table-ready by-period frame with residual and abs_err columns.

    abs_err keeps the server value when present, otherwise |y - yhat|.
    """
    df = pd.DataFrame(
        [r.model_dump() for r in rows],
        columns=["ds", "y", "yhat", "lower", "upper", "abs_err"],
    )
    df["ds"] = pd.to_datetime(df["ds"], errors="coerce").dt.strftime("%Y-%m-%d").fillna(df["ds"])
    y = pd.to_numeric(df["y"], errors="coerce").fillna(0.0)
    yhat = pd.to_numeric(df["yhat"], errors="coerce").fillna(0.0)
    df["residual"] = y - yhat
    df["abs_err"] = pd.to_numeric(df["abs_err"], errors="coerce").fillna((y - yhat).abs())
    return df[["ds", "y", "yhat", "lower", "upper", "residual", "abs_err"]]
