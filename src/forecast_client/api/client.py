"""HTTP transport for the forecast service.

Configuration is passed in explicitly (ClientConfig); there is no global base
URL override. Every transport failure surfaces as ForecastApiError with a
short message; nothing is retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import requests

from forecast_client.api.errors import ForecastApiError, to_api_error
from forecast_client.cache import InFlightRegistry, hash_object
from forecast_client.config import ClientConfig
from forecast_client.normalization import normalize_predict_response
from forecast_client.predict import AnyPredictRequest, apply_defaults, to_wire
from forecast_client.schemas import (
    AdminReloadResponse,
    ChatForecastRequest,
    DebugExog,
    DebugVersions,
    HealthzResponse,
    MetaResponse,
    MetricsResponse,
    PredictResponse,
    ReadyzResponse,
)
from forecast_client.utils import build_metrics_params
from forecast_client.utils.dates import DateLike

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "healthz": "/api/healthz",
    "readyz": "/api/readyz",
    "meta": "/api/meta",
    "debug_exog": "/api/debug/exog",
    "debug_versions": "/api/debug/versions",
    "predict": "/api/predict",
    "chat_forecast": "/api/chat/forecast",
    "metrics": "/api/metrics",
    "admin_reload": "/api/admin/reload",
}


@dataclass
class ForecastApiClient:
    """Typed access to the forecast service endpoints.

    Attributes:
        config: Base URL, timeout and predict defaults.
        session: requests.Session to use (injected in tests).
    """

    config: ClientConfig = field(default_factory=ClientConfig)
    session: requests.Session | None = None
    _inflight: InFlightRegistry = field(default_factory=InFlightRegistry, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "X-Requested-With": "XMLHttpRequest",
                "X-Request-Source": self.config.request_source,
            }
        )

    def _url(self, path: str) -> str:
        return f"{self.config.api_base.rstrip('/')}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        logger.info(f"{method} {url}")
        try:
            resp = self.session.request(method, url, timeout=self.config.timeout_sec, **kwargs)
            resp.raise_for_status()
        except requests.exceptions.RequestException as exc:
            error = to_api_error(exc)
            logger.warning(f"{method} {url} failed ({error.kind}): {error.message}")
            raise error from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise ForecastApiError("Invalid JSON in response", kind="other", status_code=resp.status_code) from exc

    def get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=dict(params) if params else None)

    def post_json(self, path: str, body: Any | None = None) -> Any:
        return self._request("POST", path, json=body if body is not None else {})

    def healthz(self) -> HealthzResponse:
        return HealthzResponse.model_validate(self.get_json(ENDPOINTS["healthz"]))

    def readyz(self) -> ReadyzResponse:
        return ReadyzResponse.model_validate(self.get_json(ENDPOINTS["readyz"]))

    def meta(self) -> MetaResponse:
        return MetaResponse.model_validate(self.get_json(ENDPOINTS["meta"]))

    def debug_exog(self) -> DebugExog:
        return DebugExog.model_validate(self.get_json(ENDPOINTS["debug_exog"]))

    def debug_versions(self) -> DebugVersions:
        return DebugVersions.model_validate(self.get_json(ENDPOINTS["debug_versions"]))

    def predict(self, body: AnyPredictRequest | Mapping[str, Any]) -> PredictResponse:
        """POST /api/predict with defaults applied; returns the normalized response.

        Concurrent calls with an identical (defaulted) body share one request.
        """
        payload = to_wire(apply_defaults(body, self.config.defaults))
        key = hash_object(payload)
        raw = self._inflight.run(key, lambda: self.post_json(ENDPOINTS["predict"], payload))
        return normalize_predict_response(raw)

    def chat_forecast(self, message: str, alpha: float | None = None) -> PredictResponse:
        request = ChatForecastRequest(message=message, alpha=alpha)
        raw = self.post_json(ENDPOINTS["chat_forecast"], request.model_dump(exclude_none=True))
        return normalize_predict_response(raw)

    def metrics(
        self,
        start: DateLike,
        end: DateLike,
        alpha: float | None = None,
    ) -> MetricsResponse:
        params = build_metrics_params(start, end, alpha)
        return MetricsResponse.model_validate(self.get_json(ENDPOINTS["metrics"], params))

    def admin_reload(self) -> AdminReloadResponse:
        return AdminReloadResponse.model_validate(self.post_json(ENDPOINTS["admin_reload"], {}))
