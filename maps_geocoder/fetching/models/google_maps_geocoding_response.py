from pydantic import BaseModel, ConfigDict
from typing import Any, Optional

class Location(BaseModel):
    model_config = ConfigDict(extra='ignore')

    lat: float
    lng: float

class Viewport(BaseModel):
    model_config = ConfigDict(extra='ignore')

    northeast: Optional[Location] = None
    southwest: Optional[Location] = None

class Geometry(BaseModel):
    model_config = ConfigDict(extra='ignore')

    location: Optional[Location] = None
    location_type: Optional[str] = None
    viewport: Optional[Viewport] = None
    bounds: Optional[Viewport] = None

class AddressComponent(BaseModel):
    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    long_name: Optional[str] = None
    short_name: Optional[str] = None
    types: Optional[list[str]] = None

class Result(BaseModel):
    model_config = ConfigDict(extra='ignore')

    # each component is validated on its own, a broken one is skipped
    address_components: Optional[list[Any]] = None
    formatted_address: Optional[str] = None
    geometry: Optional[Geometry] = None
    place_id: Optional[str] = None
    types: Optional[list[str]] = None

class GMGeolocator(BaseModel):
    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    status: Optional[str] = None
    # only the status is checked up front, the rest depends on it
    error_message: Any = None
    results: Any = None
