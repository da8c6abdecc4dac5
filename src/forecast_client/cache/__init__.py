from .keys import (  # noqa
    InFlightRegistry,
    hash_chat_message,
    hash_object,
    hash_predict_body,
    hash_string,
    stable_stringify,
)

__all__ = [
    "InFlightRegistry",
    "hash_chat_message",
    "hash_object",
    "hash_predict_body",
    "hash_string",
    "stable_stringify",
]
