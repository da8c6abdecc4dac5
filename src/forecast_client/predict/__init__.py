from .defaults import AnyPredictRequest, apply_defaults, coerce_request, to_wire  # noqa

__all__ = ["AnyPredictRequest", "apply_defaults", "coerce_request", "to_wire"]
