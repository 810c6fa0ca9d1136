import json, logging
from typing import Optional
from pydantic import ValidationError
from ..fetching.errors import GeocodeError, InvalidArgument
from ..fetching.models.address import Address, Bounds, Location, Viewport
from ..fetching.models.google_maps_geocoding_response import GMGeolocator, Result
from ..fetching.models import google_maps_geocoding_response as raw
from ..fetching.status import GeocodeStatus, status_from_string
from .components import apply_address_components

logger = logging.getLogger(__name__)

class ResponseParser:
    """Turns a Geocoding API response body into ``Address`` records.

    Any failure aborts the whole call with a ``GeocodeError``; a partially
    parsed list is never returned.
    """
    ENCODING: str = 'utf-8'

    def parse(self, data: bytes, max_results: int, parse_address_components: bool = True) -> list[Address]:
        if max_results < 0:
            raise InvalidArgument(f'max_results == {max_results}')

        response = self.__load_response(data)

        if response.status is None:
            raise GeocodeError.malformed('No "status" field')

        status = status_from_string(response.status)
        if status is GeocodeStatus.OK:
            if response.results is None:
                return []
            if not isinstance(response.results, list):
                raise GeocodeError.malformed(f'Expected "results" to be a list, got {type(response.results).__name__}')
            return self.__parse_results(response.results[:max_results], parse_address_components)

        if status is GeocodeStatus.ZERO_RESULTS:
            return []

        error_message = response.error_message if isinstance(response.error_message, str) else None
        logger.debug(f"Geocoding request failed with status {status.value}: {error_message}")
        raise GeocodeError.for_status(status, error_message)

    def __load_response(self, data: bytes) -> GMGeolocator:
        try:
            document = json.loads(data.decode(self.ENCODING))
        except (UnicodeDecodeError, ValueError) as e:
            raise GeocodeError.malformed('Response is not valid JSON') from e

        if not isinstance(document, dict):
            raise GeocodeError.malformed(f'Expected a JSON object, got {type(document).__name__}')

        try:
            return GMGeolocator.model_validate(document)
        except ValidationError as e:
            raise GeocodeError.malformed('Unexpected response layout') from e

    def __parse_results(self, results: list, parse_address_components: bool) -> list[Address]:
        addresses = []
        for index, item in enumerate(results):
            try:
                result = Result.model_validate(item)
            except ValidationError as e:
                raise GeocodeError.malformed(f'Malformed result at index {index}') from e
            addresses.append(self.__to_address(result, parse_address_components))
        return addresses

    def __to_address(self, result: Result, parse_address_components: bool) -> Address:
        address = Address(formatted_address=result.formatted_address)

        geometry = result.geometry
        if geometry is not None:
            address.location_type = geometry.location_type
            address.location = self._location(geometry.location)
            address.viewport = self._rectangle(geometry.viewport, Viewport)
            address.bounds = self._rectangle(geometry.bounds, Bounds)

        if parse_address_components and result.address_components is not None:
            apply_address_components(address, result.address_components)

        return address

    @staticmethod
    def _location(location: Optional[raw.Location]) -> Optional[Location]:
        if location is None:
            return None
        return Location(latitude=location.lat, longitude=location.lng)

    @staticmethod
    def _rectangle(viewport: Optional[raw.Viewport], model: type[Viewport]) -> Optional[Viewport]:
        if viewport is None or viewport.southwest is None or viewport.northeast is None:
            return None
        return model(
            southwest=ResponseParser._location(viewport.southwest),
            northeast=ResponseParser._location(viewport.northeast),
        )

_default_parser = ResponseParser()

def parse_json(data: bytes, max_results: int, parse_address_components: bool = True) -> list[Address]:
    return _default_parser.parse(data, max_results, parse_address_components)
