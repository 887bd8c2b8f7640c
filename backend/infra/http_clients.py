"""Clients HTTP externes (géocodage).

Objectif du module
------------------
- Encapsuler la résolution « nom de lieu → coordonnées » derrière une interface unique.
- Traduire les échecs réseau en erreurs du domaine (`LocationNotFound`, `GeocodingUnavailable`).
- Aucune politique de retry ici: elle appartient à l'appelant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

import httpx
import structlog
from pydantic import ValidationError

from backend.domain.entities import Coordinates
from backend.domain.errors import GeocodingUnavailable, LocationNotFound

DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = "AstrotApp/1.0"


class GeoClient(ABC):
    """Client de géocodage: nom de lieu libre → coordonnées."""

    name: str = "abstract"

    @abstractmethod
    async def geocode(self, place_name: str) -> Coordinates:
        """Résout un nom de lieu.

        Raises:
            LocationNotFound: Aucun résultat pour ce lieu.
            GeocodingUnavailable: Service injoignable ou réponse invalide.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Libère les ressources réseau éventuelles."""
        return None


class NominatimGeoClient(GeoClient):
    """Client de géocodage OpenStreetMap Nominatim via `httpx.AsyncClient`."""

    name = "nominatim"

    def __init__(
        self,
        base_url: str = DEFAULT_NOMINATIM_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_s: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Nominatim client with a reusable HTTP connection pool.

        Args:
            base_url: URL racine du service (sans `/search`).
            user_agent: En-tête User-Agent exigé par la politique d'usage Nominatim.
            timeout_s: Timeout global des requêtes, en secondes.
            transport: Transport httpx alternatif (tests).
        """
        self.base_url = base_url.rstrip("/")
        self._log = structlog.get_logger(__name__).bind(component="nominatim")
        timeout = httpx.Timeout(timeout_s)
        limits = httpx.Limits(max_keepalive_connections=10, max_connections=20)
        self._client = httpx.AsyncClient(
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            timeout=timeout,
            limits=limits,
            transport=transport,
        )

    async def geocode(self, place_name: str) -> Coordinates:
        """Résout `place_name` avec la première correspondance Nominatim."""
        params = {"q": place_name, "format": "json", "limit": 1}
        self._log.debug("geocode_request", place=place_name)
        try:
            resp = await self._client.get(f"{self.base_url}/search", params=params)
            resp.raise_for_status()
            results = resp.json()
        except httpx.HTTPStatusError as exc:
            code = exc.response.status_code
            self._log.warning("geocode_failed", place=place_name, status_code=code)
            raise GeocodingUnavailable(
                place_name, f"geocoding service returned HTTP {code}", status_code=code
            ) from exc
        except httpx.HTTPError as exc:
            self._log.warning("geocode_failed", place=place_name, error=type(exc).__name__)
            raise GeocodingUnavailable(place_name, f"geocoding request failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodingUnavailable(place_name, "geocoding response is not JSON") from exc

        if not isinstance(results, list):
            raise GeocodingUnavailable(place_name, "unexpected geocoding payload")
        if not results:
            raise LocationNotFound(place_name)

        first = results[0]
        try:
            coords = Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise GeocodingUnavailable(place_name, "malformed geocoding result") from exc
        self._log.debug(
            "geocode_resolved", place=place_name, lat=coords.latitude, lon=coords.longitude
        )
        return coords

    async def aclose(self) -> None:
        """Ferme le pool de connexions HTTP."""
        await self._client.aclose()


class StaticGeoClient(GeoClient):
    """Géocodeur en mémoire (développement hors ligne, tests).

    Les clés sont comparées sans tenir compte de la casse ni des espaces de bord.
    """

    name = "static"

    def __init__(self, places: Mapping[str, Coordinates | tuple[float, float]] | None = None):
        """Initialise le géocodeur avec une table `lieu → coordonnées`."""
        self._places: dict[str, Coordinates] = {}
        for key, value in (places or {}).items():
            if not isinstance(value, Coordinates):
                value = Coordinates(latitude=value[0], longitude=value[1])
            self._places[self._key(key)] = value

    @staticmethod
    def _key(place_name: str) -> str:
        return place_name.strip().casefold()

    async def geocode(self, place_name: str) -> Coordinates:
        """Retourne les coordonnées connues, sinon `LocationNotFound`."""
        try:
            return self._places[self._key(place_name)]
        except KeyError as err:
            raise LocationNotFound(place_name) from err
