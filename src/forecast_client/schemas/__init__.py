"""Pydantic models for the forecast service wire format."""

from .metrics import (  # noqa
    EvalWindow,
    ExogInfo,
    MetricsByPeriodRow,
    MetricsResponse,
    MetricsSummary,
)
from .predict import (  # noqa
    AutoPredictRequest,
    ChatForecastRequest,
    ExogMatrix,
    ExogStrategy,
    ForecastPoint,
    ForecastPointRaw,
    Frequency,
    ManualMapPredictRequest,
    ManualMatrixPredictRequest,
    PredictFlags,
    PredictRequest,
    PredictResponse,
    PredictResponseRaw,
)
from .service import (  # noqa
    AdminReloadResponse,
    ApiErrorResponse,
    DebugExog,
    DebugVersions,
    HealthzResponse,
    MetaResponse,
    ReadyzResponse,
    TrainRange,
)

__all__ = [
    "AdminReloadResponse",
    "ApiErrorResponse",
    "AutoPredictRequest",
    "ChatForecastRequest",
    "DebugExog",
    "DebugVersions",
    "EvalWindow",
    "ExogInfo",
    "ExogMatrix",
    "ExogStrategy",
    "ForecastPoint",
    "ForecastPointRaw",
    "Frequency",
    "HealthzResponse",
    "ManualMapPredictRequest",
    "ManualMatrixPredictRequest",
    "MetaResponse",
    "MetricsByPeriodRow",
    "MetricsResponse",
    "MetricsSummary",
    "PredictFlags",
    "PredictRequest",
    "PredictResponse",
    "PredictResponseRaw",
    "ReadyzResponse",
    "TrainRange",
]
