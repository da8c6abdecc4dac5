from .forecast import (  # noqa
    apply_clip,
    forecast_csv_rows,
    forecast_to_frame,
    normalize_forecast_point,
    normalize_forecast_points,
    normalize_predict_response,
)

__all__ = [
    "apply_clip",
    "forecast_csv_rows",
    "forecast_to_frame",
    "normalize_forecast_point",
    "normalize_forecast_points",
    "normalize_predict_response",
]
