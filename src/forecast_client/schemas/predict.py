from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Frequency = Literal["D", "W", "M"]
ExogStrategy = Literal["zeros", "smart"]


class PredictFlags(BaseModel):
    """Auto-exog switches sent with an auto request.

    ``clip_non_negative`` and ``floor`` are display clamps; the server echoes
    them but the client applies them (see ``normalization.apply_clip``).
    """

    use_auto_exog: bool | None = None
    exog_strategy: ExogStrategy | None = None
    clip_non_negative: bool | None = None
    floor: float | None = None


class ExogMatrix(BaseModel):
    columns: list[str]
    rows: list[list[float | None]]


class AutoPredictRequest(BaseModel):
    kind: Literal["auto"] = "auto"
    horizon: int | None = None
    frequency: Frequency | None = None
    alpha: float | None = None
    flags: PredictFlags = Field(default_factory=PredictFlags)


class ManualMapPredictRequest(BaseModel):
    kind: Literal["manual_map"] = "manual_map"
    horizon: int
    frequency: Frequency
    alpha: float | None = None
    exog: dict[str, list[float | None]]


class ManualMatrixPredictRequest(BaseModel):
    kind: Literal["manual_matrix"] = "manual_matrix"
    horizon: int
    frequency: Frequency
    alpha: float | None = None
    exog: ExogMatrix


# ``kind`` is the single discriminant; it never goes over the wire.
PredictRequest = Annotated[
    AutoPredictRequest | ManualMapPredictRequest | ManualMatrixPredictRequest,
    Field(discriminator="kind"),
]


class ForecastPointRaw(BaseModel):
    """Forecast point as received; numerics may be strings or null."""

    model_config = ConfigDict(frozen=True)

    ds: str
    yhat: Any = None
    yhat_lower: Any = None
    yhat_upper: Any = None


class ForecastPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    ds: str
    yhat: float
    yhat_lower: float | None = None
    yhat_upper: float | None = None


class PredictResponseRaw(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str = ""
    generated_at: str = ""
    horizon: int = 0
    freq: str = ""
    exog_mode: str = "none"
    exog_summary: dict[str, Any] | None = None
    forecasts: list[ForecastPointRaw] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class PredictResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str = ""
    generated_at: str = ""
    horizon: int = 0
    freq: str = ""
    exog_mode: str = "none"
    exog_summary: dict[str, Any] | None = None
    forecasts: list[ForecastPoint] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ChatForecastRequest(BaseModel):
    # Free text, e.g. "forecast 15 days smart exog no negatives floor=0"
    message: str
    alpha: float | None = None
