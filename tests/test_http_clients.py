"""Tests pour les clients de géocodage.

Les appels Nominatim passent par `httpx.MockTransport`: aucun accès réseau.
"""

from __future__ import annotations

import httpx
import pytest

from backend.domain.entities import Coordinates
from backend.domain.errors import GeocodingUnavailable, LocationNotFound
from backend.infra.http_clients import NominatimGeoClient, StaticGeoClient


def _client(handler) -> NominatimGeoClient:
    return NominatimGeoClient(
        base_url="https://geo.test/",
        user_agent="test-agent/1.0",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_nominatim_success() -> None:
    """Teste la première correspondance et les paramètres envoyés."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"lat": "48.8566", "lon": "2.3522"}])

    client = _client(handler)
    try:
        coords = await client.geocode("Paris, France")
    finally:
        await client.aclose()

    assert coords == Coordinates(latitude=48.8566, longitude=2.3522)
    req = seen[0]
    assert req.url.path == "/search"
    assert req.url.params["q"] == "Paris, France"
    assert req.url.params["format"] == "json"
    assert req.url.params["limit"] == "1"
    assert req.headers["User-Agent"] == "test-agent/1.0"


@pytest.mark.asyncio
async def test_nominatim_empty_result_is_not_found() -> None:
    client = _client(lambda request: httpx.Response(200, json=[]))
    try:
        with pytest.raises(LocationNotFound) as exc:
            await client.geocode("Atlantis")
    finally:
        await client.aclose()
    assert exc.value.place_name == "Atlantis"


@pytest.mark.asyncio
async def test_nominatim_server_error_is_unavailable() -> None:
    """Une réponse non-2xx devient `GeocodingUnavailable`."""
    client = _client(lambda request: httpx.Response(503, text="busy"))
    try:
        with pytest.raises(GeocodingUnavailable) as exc:
            await client.geocode("Paris")
    finally:
        await client.aclose()
    assert exc.value.status_code == 503


@pytest.mark.asyncio
async def test_nominatim_timeout_is_unavailable() -> None:
    """Un timeout réseau devient `GeocodingUnavailable`."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = _client(handler)
    try:
        with pytest.raises(GeocodingUnavailable) as exc:
            await client.geocode("Paris")
    finally:
        await client.aclose()
    assert exc.value.status_code is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"lat": "1", "lon": "2"}),
        httpx.Response(200, json=[{"display_name": "Paris"}]),
        httpx.Response(200, json=[{"lat": "95.0", "lon": "2.0"}]),
    ],
)
async def test_nominatim_malformed_payload_is_unavailable(response: httpx.Response) -> None:
    client = _client(lambda request: response)
    try:
        with pytest.raises(GeocodingUnavailable):
            await client.geocode("Paris")
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_static_geocoder_lookup_ignores_case_and_spaces() -> None:
    """Teste la table statique."""
    geocoder = StaticGeoClient({"Paris, France": (48.8566, 2.3522)})
    coords = await geocoder.geocode("  paris, FRANCE ")
    assert coords.latitude == pytest.approx(48.8566)
    with pytest.raises(LocationNotFound):
        await geocoder.geocode("Lyon")
    await geocoder.aclose()
