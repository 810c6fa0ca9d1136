import requests, os, locale, logging, time
from threading import Event
from typing import Callable, Optional
from .errors import ErrorKind, GeocodeError, InvalidArgument, QuotaExceeded
from .models.address import Address
from .quota import AllowedDateStore, FileAllowedDateStore, InMemoryAllowedDateStore
from .status import GeocodeStatus
from ..parsing.response import ResponseParser

logger = logging.getLogger(__name__)

class GoogleMapsGeocoder(requests.Session):
    """Forward and reverse geocoding against the Google Geocoding API.

    A server side OVER_QUERY_LIMIT on an address lookup is retried once after
    ``RETRY_DELAY_S``; when the retry is rejected as well, requests are refused
    locally for ``QUOTA_WINDOW_MS`` and ``QuotaExceeded`` is raised.
    """
    BASE_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    REQUEST_TIMEOUT_S: float = 10.0
    RETRY_DELAY_S: float = 2.0
    QUOTA_WINDOW_MS: int = 24 * 60 * 60 * 1000
    DEFAULT_LANGUAGE: str = 'en'

    def __init__(self,
                 api_key: Optional[str] = None,
                 language: Optional[str] = None,
                 allowed_date_store: Optional[AllowedDateStore] = None,
                 parser: Optional[ResponseParser] = None,
                 clock: Callable[[], float] = time.time,
                 timeout: Optional[float] = None):
        super().__init__()
        self.api_key: Optional[str] = api_key or os.getenv("GOOGLE_MAPS_API_KEY")
        self.language: str = language or os.getenv("GEOCODER_LANGUAGE") or self._system_language()
        self.timeout: float = timeout if timeout is not None else self.REQUEST_TIMEOUT_S
        self.parser: ResponseParser = parser or ResponseParser()
        self.clock: Callable[[], float] = clock

        if allowed_date_store is None:
            quota_file = os.getenv("GEOCODER_QUOTA_FILE")
            allowed_date_store = FileAllowedDateStore(quota_file) if quota_file else InMemoryAllowedDateStore()
        self.allowed_date_store: AllowedDateStore = allowed_date_store
        self.__allowed_date: Optional[int] = None

    def geocode_address(self, location_name: str, max_results: int,
                        parse_address_components: bool = True,
                        cancel_event: Optional[Event] = None) -> list[Address]:
        if location_name is None:
            raise InvalidArgument("location_name == None")
        self._validate_max_results(max_results)
        self.__check_quota()

        params = self.__build_params(sensor='false', address=location_name)
        try:
            return self.__fetch_geocode(params, max_results, parse_address_components)
        except GeocodeError as e:
            if e.status is not GeocodeStatus.OVER_QUERY_LIMIT:
                raise
            logger.warning(f"Query limit hit for '{location_name}', retrying in {self.RETRY_DELAY_S}s")

        # could be a per-second limit, a second rejection means the daily quota is used up
        waiter = cancel_event if cancel_event is not None else Event()
        if waiter.wait(self.RETRY_DELAY_S):
            logger.info(f"Geocoding of '{location_name}' cancelled while waiting to retry")
            return []

        try:
            return self.__fetch_geocode(params, max_results, parse_address_components)
        except GeocodeError as e:
            if e.status is not GeocodeStatus.OVER_QUERY_LIMIT:
                raise
            allowed_date = self._now_ms() + self.QUOTA_WINDOW_MS
            self.__set_allowed_date(allowed_date)
            logger.warning(f"Query limit hit again for '{location_name}', requests blocked until {allowed_date}")
            raise QuotaExceeded(status=e.status, error_message=e.error_message) from e

    def geocode_location(self, latitude: float, longitude: float, max_results: int,
                         parse_address_components: bool = True) -> list[Address]:
        if latitude is None or latitude < -90.0 or latitude > 90.0:
            raise InvalidArgument(f"latitude == {latitude}")
        if longitude is None or longitude < -180.0 or longitude > 180.0:
            raise InvalidArgument(f"longitude == {longitude}")
        self._validate_max_results(max_results)
        self.__check_quota()

        params = self.__build_params(sensor='true', latlng=f"{latitude},{longitude}")
        return self.__fetch_geocode(params, max_results, parse_address_components)

    def is_limit_exceeded(self) -> bool:
        return self._now_ms() < self.__get_allowed_date()

    def __check_quota(self) -> None:
        if self.is_limit_exceeded():
            raise QuotaExceeded(f"Geocoding not allowed before {self.__get_allowed_date()}")

    def __build_params(self, sensor: str, **query: str) -> dict[str, str]:
        params = {
            "sensor": sensor,
            "language": self.language,
            **query,
        }
        if self.api_key:
            params["key"] = self.api_key
        return params

    def __fetch_geocode(self, params: dict[str, str], max_results: int,
                        parse_address_components: bool) -> list[Address]:
        data = self.__download(params)
        return self.parser.parse(data, max_results, parse_address_components)

    def __download(self, params: dict[str, str]) -> bytes:
        logger.debug(f"Requesting {self.BASE_URL} with {self.__loggable(params)}")
        try:
            response = self.get(self.BASE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Geocoding request failed: {e}")
            raise GeocodeError(ErrorKind.NETWORK_ERROR, "Geocoding request failed") from e
        return response.content

    def __get_allowed_date(self) -> int:
        if self.__allowed_date is None:
            self.__allowed_date = self.allowed_date_store.get()
        return self.__allowed_date

    def __set_allowed_date(self, value: int) -> None:
        self.__allowed_date = value
        self.allowed_date_store.set(value)

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    @staticmethod
    def __loggable(params: dict[str, str]) -> dict[str, str]:
        return {key: ('***' if key == 'key' else value) for key, value in params.items()}

    @staticmethod
    def _validate_max_results(max_results: int) -> None:
        if max_results is None or max_results < 1:
            raise InvalidArgument(f"max_results == {max_results}")

    @classmethod
    def _system_language(cls) -> str:
        language_code, _ = locale.getlocale()
        if not language_code or language_code in ('C', 'POSIX'):
            return cls.DEFAULT_LANGUAGE
        return language_code.split('_')[0]
