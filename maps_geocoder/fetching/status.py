from enum import Enum
from typing import Optional

class GeocodeStatus(str, Enum):
    OK = 'OK'
    ZERO_RESULTS = 'ZERO_RESULTS'
    OVER_QUERY_LIMIT = 'OVER_QUERY_LIMIT'
    REQUEST_DENIED = 'REQUEST_DENIED'
    INVALID_REQUEST = 'INVALID_REQUEST'
    UNKNOWN_ERROR = 'UNKNOWN_ERROR'

_STATUS_BY_NAME: dict[str, GeocodeStatus] = {status.value: status for status in GeocodeStatus}

def status_from_string(value: Optional[str]) -> GeocodeStatus:
    """Unknown, empty or missing status text maps to UNKNOWN_ERROR."""
    if not value:
        return GeocodeStatus.UNKNOWN_ERROR
    return _STATUS_BY_NAME.get(value, GeocodeStatus.UNKNOWN_ERROR)
