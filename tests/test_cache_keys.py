import threading
import time

import pytest

from forecast_client.cache import (
    InFlightRegistry,
    hash_chat_message,
    hash_object,
    hash_predict_body,
    hash_string,
    stable_stringify,
)
from forecast_client.schemas import AutoPredictRequest, ChatForecastRequest


def test_stable_stringify_sorts_keys_recursively():
    assert stable_stringify({"b": 2, "a": {"d": [3, 1], "c": None}}) == '{"a":{"c":null,"d":[3,1]},"b":2}'


def test_key_order_does_not_change_hash():
    assert hash_object({"a": 1, "b": 2}) == hash_object({"b": 2, "a": 1})
    assert hash_object([1, 2]) != hash_object([2, 1])


def test_equal_numbers_hash_alike():
    assert hash_object({"h": 1}) == hash_object({"h": 1.0})
    assert hash_object({"floor": 0.0}) == hash_object({"floor": -0.0})
    assert hash_object([14, 2.0]) == hash_object([14.0, 2])
    assert stable_stringify({"alpha": 0.05, "h": 14.0}) == '{"alpha":0.05,"h":14}'


def test_non_finite_numbers_become_null():
    assert stable_stringify({"x": float("nan"), "y": float("inf")}) == '{"x":null,"y":null}'


def test_cycles_become_holes():
    obj = {"name": "root"}
    obj["self"] = obj
    items = [1]
    items.append(items)
    assert stable_stringify(obj) == '{"name":"root"}'
    assert stable_stringify(items) == "[1,null]"


def test_models_hash_like_their_json():
    body = AutoPredictRequest(horizon=3)
    assert stable_stringify(body) == stable_stringify(body.model_dump(mode="json"))


def test_hash_string_known_values():
    assert hash_string("") == "1505"  # 5381
    assert hash_string("a") == format(((5381 * 33) ^ 97) & 0xFFFFFFFF, "x")
    assert hash_string("abc") == hash_string("abc")
    assert hash_string("abc") != hash_string("abd")


def test_hash_string_uses_utf16_units():
    # U+1F600 is a surrogate pair in UTF-16
    h = 5381
    for unit in (0xD83D, 0xDE00):
        h = ((h * 33) ^ unit) & 0xFFFFFFFF
    assert hash_string("\U0001F600") == format(h, "x")


def test_predict_hash_uses_defaulted_body():
    explicit = {
        "horizon": 14,
        "frequency": "D",
        "alpha": 0.05,
        "flags": {"use_auto_exog": True, "exog_strategy": "smart", "clip_non_negative": True, "floor": 0.0},
    }
    assert hash_predict_body({"horizon": 14, "frequency": "D"}) == hash_predict_body(explicit)
    assert hash_predict_body(AutoPredictRequest(horizon=14)) == hash_predict_body(explicit)
    assert hash_predict_body({"horizon": 7}) != hash_predict_body({"horizon": 14})


def test_chat_hash_is_stable():
    assert hash_chat_message(ChatForecastRequest(message="next week")) == hash_chat_message(
        {"alpha": None, "message": "next week"}
    )


def test_inflight_shares_one_call():
    registry = InFlightRegistry()
    started = threading.Event()
    release = threading.Event()
    calls = []
    results = []

    def slow():
        calls.append(1)
        started.set()
        release.wait(5)
        return {"value": 42}

    def worker():
        results.append(registry.run("k", slow))

    first = threading.Thread(target=worker)
    first.start()
    assert started.wait(5)

    others = [threading.Thread(target=worker) for _ in range(3)]
    for t in others:
        t.start()
    time.sleep(0.2)
    release.set()
    for t in [first, *others]:
        t.join(5)

    assert len(calls) == 1
    assert len(results) == 4
    assert all(r is results[0] for r in results)
    assert registry.pending == 0


def test_inflight_releases_key_after_completion():
    registry = InFlightRegistry()
    assert registry.run("k", lambda: 1) == 1
    assert registry.run("k", lambda: 2) == 2
    assert registry.pending == 0


def test_inflight_propagates_errors_and_releases():
    registry = InFlightRegistry()

    def boom():
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError, match="nope"):
        registry.run("k", boom)
    assert registry.pending == 0
    assert registry.run("k", lambda: "ok") == "ok"
