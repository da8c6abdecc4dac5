"""Reduce failed calls to one short, user-presentable message.

Timeouts, unreachable hosts and server-reported validation errors each get a
distinct message. The FastAPI envelope ``{"detail": ...}`` may carry a
string, an object ``{msg, type, loc}`` or a list of either; the first
element's ``msg`` wins, then its ``type``.
"""

from __future__ import annotations

import json
from typing import Any, Literal

import requests
from pydantic import ValidationError

from forecast_client.schemas import ApiErrorResponse

ErrorKind = Literal["timeout", "network", "http", "other"]

TIMEOUT_MESSAGE = "Request timeout. Please try again."
NETWORK_MESSAGE = "Network error. Check your internet connection."
FALLBACK_MESSAGE = "Request failed"


class ForecastApiError(RuntimeError):
    """A transport failure, already reduced to a readable message."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = "other",
        status_code: int | None = None,
        detail: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.detail = detail


def message_from_detail(detail: Any) -> str | None:
    """Message carried by an envelope ``detail``, or None if it has none."""
    if isinstance(detail, list):
        detail = detail[0] if detail else None
    if isinstance(detail, str):
        return detail or None
    if isinstance(detail, dict):
        msg = detail.get("msg")
        if isinstance(msg, str) and msg:
            return msg
        kind = detail.get("type")
        if isinstance(kind, str) and kind:
            return kind
    return None


def envelope_detail(response: requests.Response) -> Any:
    """``detail`` of a FastAPI error body, or None when the body is not an envelope."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    try:
        return ApiErrorResponse.model_validate(payload).detail
    except ValidationError:
        return None


def describe_response(response: requests.Response) -> str:
    detail = envelope_detail(response)
    reason = response.reason or ""
    if detail:
        return message_from_detail(detail) or reason or FALLBACK_MESSAGE
    if response.status_code:
        return f"{response.status_code} {reason or FALLBACK_MESSAGE}"
    return reason or FALLBACK_MESSAGE


def to_api_error(exc: BaseException) -> ForecastApiError:
    """Classify ``exc`` into a ForecastApiError (no retries are attempted)."""
    if isinstance(exc, ForecastApiError):
        return exc
    # ConnectTimeout is both a Timeout and a ConnectionError; timeout wins.
    if isinstance(exc, requests.exceptions.Timeout):
        return ForecastApiError(TIMEOUT_MESSAGE, kind="timeout")
    if isinstance(exc, requests.exceptions.ConnectionError):
        return ForecastApiError(NETWORK_MESSAGE, kind="network")

    response = getattr(exc, "response", None)
    if isinstance(exc, requests.exceptions.HTTPError) and response is not None:
        return ForecastApiError(
            describe_response(response),
            kind="http",
            status_code=response.status_code,
            detail=envelope_detail(response),
        )

    return ForecastApiError(str(exc) or FALLBACK_MESSAGE, kind="other")


def describe_error(err: Any, fallback: str = FALLBACK_MESSAGE) -> str:
    """Readable message for any error-like value."""
    if not err:
        return fallback
    if isinstance(err, str):
        return err
    if isinstance(err, requests.exceptions.RequestException):
        api_error = to_api_error(err)
        if api_error.kind != "other":
            return api_error.message
    if isinstance(err, BaseException):
        return str(err) or fallback
    try:
        return json.dumps(err)
    except (TypeError, ValueError):
        return fallback
