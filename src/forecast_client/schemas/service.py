"""Discovery, health and admin payloads of the forecast service."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TrainRange(BaseModel):
    start: str
    end: str


class HealthzResponse(BaseModel):
    status: str


class ReadyzResponse(BaseModel):
    ready: bool
    mongo: dict[str, Any] | None = None
    gridfs_model: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None
    config: dict[str, Any] | None = None


class MetaResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    default_freq: str = "D"
    date_col: str = ""
    target_col: str = ""
    exog_columns: list[str] = Field(default_factory=list)
    # Raw model columns, may contain "const"
    exog_columns_from_model: list[str] = Field(default_factory=list)
    train_range: TrainRange | None = None
    model_order: list[int] = Field(default_factory=list)
    model_seasonal_order: list[int] = Field(default_factory=list)


class DebugExog(BaseModel):
    """Column order the model was fitted with.

    ``expected_exog_used_by_forecast`` (no "const") is the order every manual
    exogenous payload has to follow.
    """

    expected_exog_from_model_raw: list[str] = Field(default_factory=list)
    expected_exog_used_by_forecast: list[str] = Field(default_factory=list)
    len_raw: int | None = None
    len_used: int | None = None
    freq: str | None = None
    train_range: TrainRange | None = None


class DebugVersions(BaseModel):
    model_config = ConfigDict(extra="allow")

    python: str | None = None
    numpy: str | None = None
    pandas: str | None = None
    statsmodels: str | None = None


class AdminReloadResponse(BaseModel):
    reloaded: bool
    gridfs_model: dict[str, Any] | None = None


ErrorDetailItem = str | dict[str, Any]


class ApiErrorResponse(BaseModel):
    """FastAPI-style error envelope."""

    detail: ErrorDetailItem | list[ErrorDetailItem] | None = None
