from .client import ENDPOINTS, ForecastApiClient  # noqa
from .errors import ForecastApiError, describe_error, describe_response, message_from_detail, to_api_error  # noqa

__all__ = [
    "ENDPOINTS",
    "ForecastApiClient",
    "ForecastApiError",
    "describe_error",
    "describe_response",
    "message_from_detail",
    "to_api_error",
]
