"""Client-side data contracts for a remote time-series forecast service.

Coerces untrusted numerics, normalizes forecasts, aligns exogenous driver
grids to the model's column order, reads/writes the exogenous CSV format,
builds deterministic request keys and bins forecast errors for display.
"""

from .config import ClientConfig, PredictDefaults, load_config  # noqa

__all__ = ["ClientConfig", "PredictDefaults", "load_config"]
