"""
Geocoding extraction tests
"""

import pytest

from doc_assist_ai.llm.base import GroundingReference
from doc_assist_ai.location import (
    LocationResolver,
    build_geocoding_prompt,
    extract_coordinates,
    extract_map_uri,
)

from conftest import FakeProvider


class TestExtractCoordinates:
    """LAT/LNG parsing"""

    def test_pair(self):
        assert extract_coordinates("LAT: 12.9716, LNG: 77.5946") == (12.9716, 77.5946)

    def test_case_insensitive_and_negative(self):
        text = "Here you go: lat:-33.8688 lng:   151.2093"

        assert extract_coordinates(text) == (-33.8688, 151.2093)

    def test_integers(self):
        assert extract_coordinates("LAT: 12, LNG: 77") == (12.0, 77.0)

    @pytest.mark.parametrize(
        "text",
        ["LAT: 12.34", "LNG: 77.59", "I could not find that address.", "", "LAT: north, LNG: 77.5"],
    )
    def test_requires_both(self, text):
        assert extract_coordinates(text) == (None, None)


class TestExtractMapUri:
    """First grounding reference with a web URI"""

    def test_first_web_uri(self):
        references = [
            GroundingReference(title="No link"),
            GroundingReference(web_uri="", title="Empty link"),
            GroundingReference(web_uri="https://maps.example/a"),
            GroundingReference(web_uri="https://maps.example/b"),
        ]

        assert extract_map_uri(references) == "https://maps.example/a"

    def test_none_available(self):
        assert extract_map_uri([GroundingReference(title="x")]) is None
        assert extract_map_uri([]) is None
        assert extract_map_uri(None) is None


class TestLocationResolver:
    """Resolver never raises"""

    async def test_resolve(self, provider):
        resolver = LocationResolver(provider)

        location = await resolver.resolve("MG Road, Bengaluru")

        assert location.address == "MG Road, Bengaluru"
        assert location.latitude == 12.9716
        assert location.longitude == 77.5946
        assert location.map_uri == "https://maps.google.com/?cid=123"
        assert provider.prompts == [build_geocoding_prompt("MG Road, Bengaluru")]

    async def test_prompt_requests_literal_format(self):
        prompt = build_geocoding_prompt("Anna Salai, Chennai")

        assert '"Anna Salai, Chennai"' in prompt
        assert "LAT: 12.3456, LNG: 67.8901" in prompt

    async def test_failure_yields_empty(self, provider):
        provider.grounded_error = TimeoutError("deadline exceeded")
        resolver = LocationResolver(provider)

        assert await resolver.resolve_coordinates("MG Road") == {}

        location = await resolver.resolve("MG Road")
        assert location.address == "MG Road"
        assert location.latitude is None
        assert location.longitude is None
        assert location.map_uri is None

    async def test_map_uri_without_coordinates(self):
        provider = FakeProvider(
            grounded_text="LAT: 12.97 only",
            grounding=[GroundingReference(web_uri="https://maps.example/place")],
        )

        found = await LocationResolver(provider).resolve_coordinates("Somewhere")

        assert found == {"map_uri": "https://maps.example/place"}
