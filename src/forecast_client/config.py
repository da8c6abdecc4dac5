from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import BaseModel, Field

from forecast_client.schemas import ExogStrategy, Frequency

DEFAULT_API_BASE = "http://localhost:8000"
API_BASE_ENV = "FORECAST_API_BASE"

# Date format used in API query params
API_DATE_FMT = "%Y-%m-%d"


class PredictDefaults(BaseModel):
    """Values used when a predict request leaves them unset."""

    horizon: int = Field(14, ge=1)
    frequency: Frequency = "D"
    alpha: float = Field(0.05, gt=0, lt=1)  # 0.05 -> 95% interval
    exog_strategy: ExogStrategy = "smart"
    clip_non_negative: bool = True
    floor: float = 0.0


class ClientConfig(BaseModel):
    api_base: str = DEFAULT_API_BASE
    timeout_sec: float = Field(30.0, gt=0)
    request_source: str = "forecast-client"
    defaults: PredictDefaults = PredictDefaults()


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Build the client configuration.

    The YAML file (optional) is validated by pydantic; ``FORECAST_API_BASE``
    in the environment overrides ``api_base``. The resulting object is passed
    explicitly to ForecastApiClient; there is no process-wide override.
    """
    data: dict = {}
    if path is not None:
        path = Path(path)
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

    env = os.environ if env is None else env
    api_base = env.get(API_BASE_ENV)
    if api_base:
        data["api_base"] = api_base

    return ClientConfig.model_validate(data)
