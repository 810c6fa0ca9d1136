from pydantic import BaseModel, ConfigDict
from typing import ClassVar, Literal, Optional

LocationType = Literal['ROOFTOP', 'RANGE_INTERPOLATED', 'GEOMETRIC_CENTER', 'APPROXIMATE']

class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

class Viewport(BaseModel):
    """Recommended display rectangle of a result."""
    model_config = ConfigDict(frozen=True)

    southwest: Location
    northeast: Location

class Bounds(Viewport):
    """Rectangle fully containing a result."""

class Address(BaseModel):
    """One geocoding result.

    Every field stays ``None`` unless the response carried it, so an address
    with nothing set is still valid (for instance when address components
    were not requested and the result had no geometry).

    ``location_type`` is one of the ``LocationType`` values for the current
    API, other strings are kept as returned.
    """
    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    formatted_address: Optional[str] = None
    location_type: Optional[str] = None
    location: Optional[Location] = None
    viewport: Optional[Viewport] = None
    bounds: Optional[Bounds] = None

    street_address: Optional[str] = None
    street_number: Optional[str] = None
    route: Optional[str] = None
    intersection: Optional[str] = None
    political: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    administrative_area_level_1: Optional[str] = None
    administrative_area_level_2: Optional[str] = None
    administrative_area_level_3: Optional[str] = None
    administrative_area_level_4: Optional[str] = None
    administrative_area_level_5: Optional[str] = None
    colloquial_area: Optional[str] = None
    locality: Optional[str] = None
    ward: Optional[str] = None
    sublocality: Optional[str] = None
    sublocality_level_1: Optional[str] = None
    sublocality_level_2: Optional[str] = None
    sublocality_level_3: Optional[str] = None
    sublocality_level_4: Optional[str] = None
    sublocality_level_5: Optional[str] = None
    neighborhood: Optional[str] = None
    premise: Optional[str] = None
    subpremise: Optional[str] = None
    postal_code: Optional[str] = None
    natural_feature: Optional[str] = None
    airport: Optional[str] = None
    park: Optional[str] = None
    point_of_interest: Optional[str] = None
    floor: Optional[str] = None
    establishment: Optional[str] = None
    parking: Optional[str] = None
    post_box: Optional[str] = None
    postal_town: Optional[str] = None
    room: Optional[str] = None
    bus_station: Optional[str] = None
    train_station: Optional[str] = None
    transit_station: Optional[str] = None

    NON_COMPONENT_FIELDS: ClassVar[tuple[str, ...]] = ('formatted_address', 'location_type', 'location', 'viewport', 'bounds',)

    def populated_fields(self) -> list[str]:
        return [
            name for name in type(self).model_fields
            if name not in self.NON_COMPONENT_FIELDS and getattr(self, name) is not None
        ]
