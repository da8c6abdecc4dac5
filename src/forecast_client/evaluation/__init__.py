from .histogram import HistogramBin, HistogramMode, bin_values, clamp_bins, error_values, sturges  # noqa
from .summary import MetricsKpis, by_period_frame, summarize_metrics  # noqa

__all__ = [
    "HistogramBin",
    "HistogramMode",
    "MetricsKpis",
    "bin_values",
    "by_period_frame",
    "clamp_bins",
    "error_values",
    "sturges",
    "summarize_metrics",
]
