"""Address geocoding."""

from doc_assist_ai.location.geocoder import (
    LocationResolver,
    build_geocoding_prompt,
    extract_coordinates,
    extract_map_uri,
)

__all__ = [
    "LocationResolver",
    "build_geocoding_prompt",
    "extract_coordinates",
    "extract_map_uri",
]
