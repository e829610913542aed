"""
Best-effort geocoding of addresses found in documents.

Coordinates are read from the model's free text; the map link comes from the
grounding references attached to the response. Nothing here raises.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from doc_assist_ai.llm.base import GroundingReference, LLMProvider
from doc_assist_ai.models import LocationInfo

logger = logging.getLogger(__name__)

_LAT_PATTERN = re.compile(r"LAT:\s*(-?\d+(\.\d+)?)", re.IGNORECASE)
_LNG_PATTERN = re.compile(r"LNG:\s*(-?\d+(\.\d+)?)", re.IGNORECASE)


def build_geocoding_prompt(address: str) -> str:
    return (
        f'Get the precise latitude and longitude coordinates for this address: "{address}". \n'
        'Format your response exactly like this: "LAT: 12.3456, LNG: 67.8901".'
    )


def extract_coordinates(text: str) -> tuple[float | None, float | None]:
    """
    Extract a ``LAT:``/``LNG:`` coordinate pair from free text.

    Both markers must match; a lone coordinate is discarded.
    """
    lat_match = _LAT_PATTERN.search(text or "")
    lng_match = _LNG_PATTERN.search(text or "")

    if lat_match and lng_match:
        return float(lat_match.group(1)), float(lng_match.group(1))
    return None, None


def extract_map_uri(references: Iterable[GroundingReference] | None) -> str | None:
    """Return the web URI of the first grounding reference that has one."""
    for reference in references or ():
        if reference.web_uri:
            return reference.web_uri
    return None


class LocationResolver:
    """Resolves an address to coordinates and a map link."""

    def __init__(self, provider: LLMProvider):
        self._provider = provider

    async def resolve_coordinates(self, address: str) -> dict[str, Any]:
        """
        Look up coordinates and a map link for an address.

        Returns:
            Dict with ``latitude``, ``longitude`` and ``map_uri`` keys for the
            values found; ``{}`` if the lookup failed.
        """
        try:
            response = await self._provider.generate_grounded(build_geocoding_prompt(address))
            latitude, longitude = extract_coordinates(response.content)
            map_uri = extract_map_uri(response.grounding)
        except Exception as e:
            logger.warning("Location resolution error: %s", e, exc_info=True)
            return {}

        found: dict[str, Any] = {}
        if latitude is not None and longitude is not None:
            found["latitude"] = latitude
            found["longitude"] = longitude
        if map_uri:
            found["map_uri"] = map_uri
        return found

    async def resolve(self, address: str) -> LocationInfo:
        """Resolve an address into a LocationInfo (address only on failure)."""
        return LocationInfo(address=address, **await self.resolve_coordinates(address))
