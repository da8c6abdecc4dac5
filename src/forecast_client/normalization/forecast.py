from __future__ import annotations

from typing import Any, Iterable, Mapping

import pandas as pd

from forecast_client.coercion import to_number_optional, to_number_required
from forecast_client.schemas import ForecastPoint, PredictResponse, PredictResponseRaw


def _get(point: Any, name: str) -> Any:
    if isinstance(point, Mapping):
        return point.get(name)
    return getattr(point, name, None)


def normalize_forecast_point(point: Any) -> ForecastPoint:
    return ForecastPoint(
        ds=str(_get(point, "ds") or ""),
        yhat=to_number_required(_get(point, "yhat"), 0.0),
        yhat_lower=to_number_optional(_get(point, "yhat_lower")),
        yhat_upper=to_number_optional(_get(point, "yhat_upper")),
    )


def normalize_forecast_points(raw: Iterable[Any] | None) -> list[ForecastPoint]:
    """Map raw forecast points to points with guaranteed numeric fields.

    Total and 1:1: output length and order always equal the input. A bad
    ``yhat`` becomes 0.0, a bad bound becomes None (never NaN).

    Args:
        raw: ForecastPointRaw models or plain dicts as decoded from JSON.
            None is treated as an empty list.
    """
    if raw is None:
        return []
    return [normalize_forecast_point(p) for p in raw]


def normalize_predict_response(raw: PredictResponseRaw | Mapping[str, Any]) -> PredictResponse:
    """Normalize a whole /predict response, keeping every non-forecast field."""
    if not isinstance(raw, PredictResponseRaw):
        raw = PredictResponseRaw.model_validate(raw)

    data = raw.model_dump(exclude={"forecasts"})
    return PredictResponse(**data, forecasts=normalize_forecast_points(raw.forecasts))


def apply_clip(
    points: Iterable[ForecastPoint],
    clip_non_negative: bool = False,
    floor: float | None = None,
) -> list[ForecastPoint]:
    """Display-level clamp of yhat and its bounds.

    Negative values go to 0 when ``clip_non_negative``; anything under
    ``floor`` is raised to ``floor``. Missing bounds stay missing.
    """

    def clamp(x: float | None) -> float | None:
        if x is None:
            return None
        if clip_non_negative and x < 0:
            x = 0.0
        if floor is not None and x < floor:
            x = float(floor)
        return x

    return [
        p.model_copy(
            update={
                "yhat": clamp(p.yhat),
                "yhat_lower": clamp(p.yhat_lower),
                "yhat_upper": clamp(p.yhat_upper),
            }
        )
        for p in points
    ]


def forecast_to_frame(points: Iterable[ForecastPoint]) -> pd.DataFrame:
    """Chart/table-ready frame: ds, date (parsed), yhat, yhat_lower, yhat_upper."""
    records = [p.model_dump() for p in points]
    df = pd.DataFrame(records, columns=["ds", "yhat", "yhat_lower", "yhat_upper"])
    df.insert(1, "date", pd.to_datetime(df["ds"], errors="coerce"))
    return df


def forecast_csv_rows(points: Iterable[ForecastPoint]) -> list[dict[str, Any]]:
    """Export records for the forecast CSV; missing bounds export as empty cells."""
    return [
        {
            "ds": p.ds,
            "yhat": p.yhat,
            "yhat_lower": "" if p.yhat_lower is None else p.yhat_lower,
            "yhat_upper": "" if p.yhat_upper is None else p.yhat_upper,
        }
        for p in points
    ]
