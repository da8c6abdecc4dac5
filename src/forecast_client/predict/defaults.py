"""Canonical predict request bodies.

A body without exogenous data is always sent as a fully specified auto
request (``use_auto_exog=True`` plus strategy/clip/floor), so the service
never has to infer intent from a partial body. Bodies that carry exogenous
data (map or matrix) are passed through unchanged.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import TypeAdapter

from forecast_client.config import PredictDefaults
from forecast_client.schemas import (
    AutoPredictRequest,
    ManualMapPredictRequest,
    ManualMatrixPredictRequest,
    PredictFlags,
    PredictRequest,
)

AnyPredictRequest = AutoPredictRequest | ManualMapPredictRequest | ManualMatrixPredictRequest

_REQUEST_ADAPTER: TypeAdapter = TypeAdapter(PredictRequest)


def _is_matrix(exog: Any) -> bool:
    return isinstance(exog, Mapping) and set(exog) == {"columns", "rows"} and isinstance(exog["rows"], list)


def coerce_request(body: AnyPredictRequest | Mapping[str, Any]) -> AnyPredictRequest:
    """Turn a plain dict into the matching request model.

    Dicts without ``kind`` are discriminated by their ``exog`` payload:
    none -> auto, {columns, rows} -> matrix, anything else -> map.
    """
    if isinstance(body, (AutoPredictRequest, ManualMapPredictRequest, ManualMatrixPredictRequest)):
        return body

    data = dict(body)
    if "kind" not in data:
        exog = data.get("exog")
        if exog is None:
            data.pop("exog", None)
            data["kind"] = "auto"
        elif _is_matrix(exog):
            data["kind"] = "manual_matrix"
        else:
            data["kind"] = "manual_map"
    return _REQUEST_ADAPTER.validate_python(data)


def apply_defaults(
    body: AnyPredictRequest | Mapping[str, Any],
    defaults: PredictDefaults | None = None,
) -> AnyPredictRequest:
    """Fill a predict body so the outbound payload is fully specified.

    Example:
        apply_defaults({"horizon": 14, "frequency": "D"})
        -> AutoPredictRequest(horizon=14, frequency="D", alpha=0.05,
               flags=PredictFlags(use_auto_exog=True, exog_strategy="smart",
                                  clip_non_negative=True, floor=0.0))
    """
    defaults = defaults or PredictDefaults()
    request = coerce_request(body)

    if isinstance(request, (ManualMapPredictRequest, ManualMatrixPredictRequest)):
        return request
    if not isinstance(request, AutoPredictRequest):
        raise TypeError(f"Unsupported predict request: {type(request).__name__}")

    flags = request.flags
    return AutoPredictRequest(
        horizon=request.horizon if request.horizon is not None else defaults.horizon,
        frequency=request.frequency or defaults.frequency,
        alpha=request.alpha if request.alpha is not None else defaults.alpha,
        flags=PredictFlags(
            use_auto_exog=True,
            exog_strategy=flags.exog_strategy or defaults.exog_strategy,
            clip_non_negative=(
                flags.clip_non_negative if flags.clip_non_negative is not None else defaults.clip_non_negative
            ),
            floor=flags.floor if flags.floor is not None else defaults.floor,
        ),
    )


def to_wire(body: AnyPredictRequest | Mapping[str, Any]) -> dict[str, Any]:
    """JSON payload for POST /api/predict (no ``kind``, no unset optionals)."""
    request = coerce_request(body)
    return request.model_dump(exclude={"kind"}, exclude_none=True)
