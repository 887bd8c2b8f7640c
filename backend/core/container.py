"""
Conteneur d'injection de dépendances et configuration application.

Instancie explicitement les composants centraux (settings, géocodeur, fournisseur de positions,
assembleur de thème, service de transits). Le conteneur est construit une fois au démarrage par
l'application et passé aux routes; il ne garde aucun résultat de calcul.
"""

import json

from backend.core.settings import Settings, get_settings
from backend.domain.chart_assembler import ChartAssembler
from backend.domain.services import TransitService
from backend.infra.astro.analytical import AnalyticalPositionProvider
from backend.infra.astro.base import BodyPositionProvider
from backend.infra.astro.fake_deterministic import FakeDeterministicProvider
from backend.infra.http_clients import GeoClient, NominatimGeoClient, StaticGeoClient


def build_provider(settings: Settings) -> BodyPositionProvider:
    """Sélectionne le fournisseur de positions selon `ASTRO_PROVIDER`."""
    name = settings.ASTRO_PROVIDER.strip().lower()
    if name == "analytical":
        return AnalyticalPositionProvider()
    if name == "fake":
        return FakeDeterministicProvider()
    raise ValueError(f"unknown ASTRO_PROVIDER: {settings.ASTRO_PROVIDER!r}")


def build_geocoder(settings: Settings) -> GeoClient:
    """Sélectionne le géocodeur selon `GEOCODER_BACKEND`."""
    name = settings.GEOCODER_BACKEND.strip().lower()
    if name == "nominatim":
        return NominatimGeoClient(
            base_url=settings.GEOCODER_URL,
            user_agent=settings.GEOCODER_USER_AGENT,
            timeout_s=settings.GEOCODER_TIMEOUT_S,
        )
    if name == "static":
        try:
            raw = json.loads(settings.GEOCODER_STATIC_PLACES_JSON or "{}")
        except json.JSONDecodeError as err:
            raise ValueError("GEOCODER_STATIC_PLACES_JSON is not valid JSON") from err
        if not isinstance(raw, dict):
            raise ValueError("GEOCODER_STATIC_PLACES_JSON must be a JSON object")
        return StaticGeoClient({k: (float(v[0]), float(v[1])) for k, v in raw.items()})
    raise ValueError(f"unknown GEOCODER_BACKEND: {settings.GEOCODER_BACKEND!r}")


class Container:
    def __init__(
        self,
        settings: Settings | None = None,
        geocoder: GeoClient | None = None,
        provider: BodyPositionProvider | None = None,
    ):
        self.settings = settings or get_settings()
        self.provider = provider or build_provider(self.settings)
        self.geocoder = geocoder or build_geocoder(self.settings)
        self.assembler = ChartAssembler(self.geocoder, self.provider)
        self.transits = TransitService(self.provider)

    async def aclose(self) -> None:
        """Libère les ressources réseau (pool HTTP du géocodeur)."""
        await self.geocoder.aclose()
