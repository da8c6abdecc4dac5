from __future__ import annotations

from datetime import date, datetime

import pandas as pd

from forecast_client.config import API_DATE_FMT

DateLike = str | date | datetime | pd.Timestamp


def parse_date(value: DateLike) -> pd.Timestamp | None:
    # ISO first (YYYY-MM-DD and similar), then pandas' parser; None if neither works.
    if isinstance(value, (date, datetime, pd.Timestamp)):
        return pd.Timestamp(value)
    try:
        return pd.Timestamp(datetime.fromisoformat(value))
    except (TypeError, ValueError):
        ts = pd.to_datetime(value, errors="coerce")
        return None if pd.isna(ts) else pd.Timestamp(ts)


def format_date(value: DateLike, fmt: str = API_DATE_FMT) -> str:
    """Format for the API ("%Y-%m-%d" by default); unparsable input comes back as str."""
    ts = parse_date(value)
    return str(value) if ts is None else ts.strftime(fmt)


def build_metrics_params(
    start: DateLike,
    end: DateLike,
    alpha: float | None = None,
) -> dict[str, str | float]:
    """Query params for GET /api/metrics."""
    params: dict[str, str | float] = {
        "eval_start": format_date(start),
        "eval_end": format_date(end),
    }
    if alpha is not None:
        params["alpha"] = float(alpha)
    return params
