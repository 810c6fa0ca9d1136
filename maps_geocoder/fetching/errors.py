from enum import Enum
from typing import Optional
import requests
from .status import GeocodeStatus

class ErrorKind(str, Enum):
    MALFORMED_RESPONSE = 'malformed_response'
    STATUS = 'status'
    NETWORK_ERROR = 'network_error'
    QUOTA_EXCEEDED = 'quota_exceeded'

class GeocodeError(Exception):
    """Raised for every geocoding failure except bad caller input.

    The server supplied ``error_message`` and the ``status`` are kept when the
    failure comes from a non-OK response; the original exception, if any, is
    available as ``__cause__``.
    """

    def __init__(self, kind: ErrorKind, message: str = '', *,
                 status: Optional[GeocodeStatus] = None,
                 error_message: Optional[str] = None):
        super().__init__(message or kind.value)
        self.kind: ErrorKind = kind
        self.status: Optional[GeocodeStatus] = status
        self.error_message: Optional[str] = error_message

    @classmethod
    def for_status(cls, status: GeocodeStatus, error_message: Optional[str] = None) -> 'GeocodeError':
        return cls(ErrorKind.STATUS, status.value, status=status, error_message=error_message)

    @classmethod
    def malformed(cls, message: str) -> 'GeocodeError':
        return cls(ErrorKind.MALFORMED_RESPONSE, message)

    @property
    def is_caused_by_network_error(self) -> bool:
        return isinstance(self.__cause__, (requests.RequestException, OSError))

    def __str__(self) -> str:
        if self.error_message:
            return self.error_message
        if self.status is not None:
            return self.status.value
        if self.__cause__ is not None:
            return f'{super().__str__()}: {self.__cause__}'
        return super().__str__()

class QuotaExceeded(GeocodeError):
    def __init__(self, message: str = 'Geocoding quota exceeded', *,
                 status: Optional[GeocodeStatus] = None,
                 error_message: Optional[str] = None):
        super().__init__(ErrorKind.QUOTA_EXCEEDED, message, status=status, error_message=error_message)

    def __str__(self) -> str:
        if self.error_message:
            return self.error_message
        return self.args[0]

class InvalidArgument(ValueError):
    pass
