"""Deterministic cache / dedupe keys for outbound requests.

stable_stringify is lossy on purpose: a container reached a second time is
written as a hole (dropped from objects, null in arrays) instead of raising.
That is acceptable for cache keys only; never use it where an exact
serialization is needed.
"""

from __future__ import annotations

import json
import logging
import math
import threading
from concurrent.futures import Future
from typing import Any, Callable, Iterator, Mapping, TypeVar

from pydantic import BaseModel

from forecast_client.predict import apply_defaults, to_wire

logger = logging.getLogger(__name__)

T = TypeVar("T")

_HOLE = object()


def _sorted_value(value: Any, seen: dict[int, Any]) -> Any:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # 1.0 and 1 (also -0.0 and 0) must render alike
        return int(value) if value.is_integer() else value
    if value is None or isinstance(value, (str, int, bool)):
        return value

    if isinstance(value, (Mapping, list, tuple)):
        if id(value) in seen:
            return _HOLE
        # value kept alive so its id stays unique
        seen[id(value)] = value

        if isinstance(value, Mapping):
            out = {}
            for key in sorted(str(k) for k in value):
                item = _sorted_value(_lookup(value, key), seen)
                if item is not _HOLE:
                    out[key] = item
            return out
        return [None if item is _HOLE else item for item in (_sorted_value(v, seen) for v in value)]

    return str(value)


def _lookup(mapping: Mapping, key: str) -> Any:
    if key in mapping:
        return mapping[key]
    # non-string keys were stringified for sorting
    for k, v in mapping.items():
        if str(k) == key:
            return v
    return None


def stable_stringify(value: Any) -> str:
    """Compact JSON with recursively sorted keys; array order is preserved."""
    sorted_value = _sorted_value(value, {})
    if sorted_value is _HOLE:
        sorted_value = None
    return json.dumps(sorted_value, separators=(",", ":"), ensure_ascii=False)


def _utf16_units(text: str) -> Iterator[int]:
    for ch in text:
        code = ord(ch)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def hash_string(text: str) -> str:
    """djb2-xor over UTF-16 code units, 32-bit, as lowercase hex.

    Fast and non-cryptographic; equal inputs give equal hashes, nothing more.
    """
    h = 5381
    for unit in _utf16_units(text):
        h = ((h * 33) ^ unit) & 0xFFFFFFFF
    return format(h, "x")


def hash_object(value: Any) -> str:
    return hash_string(stable_stringify(value))


def hash_predict_body(body: Any, defaults: Any = None) -> str:
    """Cache key of a predict body, computed on the defaulted wire payload."""
    return hash_object(to_wire(apply_defaults(body, defaults)))


def hash_chat_message(request: Any) -> str:
    return hash_object(request)


class InFlightRegistry:
    """At most one in-flight call per key.

    Callers that arrive with a key whose call is still running wait for it
    and receive the same result (or the same exception). Once the call
    finishes the key is released; nothing is cached beyond that.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, Future] = {}

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._calls)

    def run(self, key: str, fn: Callable[[], T]) -> T:
        with self._lock:
            future = self._calls.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._calls[key] = future

        if not owner:
            logger.debug(f"Joining in-flight call for key {key}")
            return future.result()

        try:
            result = fn()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._calls.pop(key, None)
