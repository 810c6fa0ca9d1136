import logging
from typing import Any, Optional
from pydantic import ValidationError
from ..fetching.models.address import Address
from ..fetching.models.google_maps_geocoding_response import AddressComponent

logger = logging.getLogger(__name__)

ADDRESS_COMPONENT_FIELDS: dict[str, str] = {
    'street_address': 'street_address',
    'street_number': 'street_number',
    'route': 'route',
    'intersection': 'intersection',
    'political': 'political',
    'country': 'country',
    'administrative_area_level_1': 'administrative_area_level_1',
    'administrative_area_level_2': 'administrative_area_level_2',
    'administrative_area_level_3': 'administrative_area_level_3',
    'administrative_area_level_4': 'administrative_area_level_4',
    'administrative_area_level_5': 'administrative_area_level_5',
    'colloquial_area': 'colloquial_area',
    'locality': 'locality',
    'ward': 'ward',
    'sublocality': 'sublocality',
    'sublocality_level_1': 'sublocality_level_1',
    'sublocality_level_2': 'sublocality_level_2',
    'sublocality_level_3': 'sublocality_level_3',
    'sublocality_level_4': 'sublocality_level_4',
    'sublocality_level_5': 'sublocality_level_5',
    'neighborhood': 'neighborhood',
    'premise': 'premise',
    'subpremise': 'subpremise',
    'postal_code': 'postal_code',
    'natural_feature': 'natural_feature',
    'airport': 'airport',
    'park': 'park',
    'point_of_interest': 'point_of_interest',
    'floor': 'floor',
    'establishment': 'establishment',
    'parking': 'parking',
    'post_box': 'post_box',
    'postal_town': 'postal_town',
    'room': 'room',
    'bus_station': 'bus_station',
    'train_station': 'train_station',
    'transit_station': 'transit_station',
}

COUNTRY_TYPE: str = 'country'
COUNTRY_CODE_FIELD: str = 'country_code'

def component_value(component: AddressComponent) -> Optional[str]:
    return component.long_name or component.short_name or None

def apply_address_components(address: Address, components: list[Any]) -> None:
    # later components overwrite earlier ones for the same field
    for index, item in enumerate(components):
        try:
            component = AddressComponent.model_validate(item)
        except ValidationError as e:
            logger.debug(f"Skipping malformed address component at index {index}: {e}")
            continue
        if not component.types:
            continue
        value = component_value(component)
        if value is None:
            continue

        for component_type in component.types:
            field_name = ADDRESS_COMPONENT_FIELDS.get(component_type)
            if field_name is None:
                continue
            setattr(address, field_name, value)

        if COUNTRY_TYPE in component.types and component.short_name:
            setattr(address, COUNTRY_CODE_FIELD, component.short_name)
