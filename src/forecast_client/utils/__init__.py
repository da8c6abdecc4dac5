from .dates import build_metrics_params, format_date, parse_date  # noqa

__all__ = ["build_metrics_params", "format_date", "parse_date"]
