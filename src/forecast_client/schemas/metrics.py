from __future__ import annotations

from pydantic import BaseModel, Field


class EvalWindow(BaseModel):
    start: str
    end: str
    n: int = 0


class MetricsSummary(BaseModel):
    mae: float | None = None
    rmse: float | None = None
    mape: float | None = None  # 0..1
    smape: float | None = None  # 0..1
    bias_me: float | None = None
    coverage_95: float | None = None  # 0..1


class MetricsByPeriodRow(BaseModel):
    ds: str
    y: float | None = None
    yhat: float | None = None
    lower: float | None = None
    upper: float | None = None
    abs_err: float | None = None


class ExogInfo(BaseModel):
    expected: list[str] = Field(default_factory=list)
    missing_in_test: list[str] = Field(default_factory=list)
    used_columns: list[str] = Field(default_factory=list)


class MetricsResponse(BaseModel):
    eval_window: EvalWindow
    # None when the evaluation window is empty
    metrics: MetricsSummary | None = None
    by_period: list[MetricsByPeriodRow] = Field(default_factory=list)
    exog_info: ExogInfo | None = None
    warnings: list[str] = Field(default_factory=list)
