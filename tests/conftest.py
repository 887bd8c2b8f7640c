"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports backend en ajoutant la racine du projet au
sys.path, et fournit des collaborateurs hors ligne (géocodeur statique, fournisseur factice).
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from backend...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from backend.core.container import Container  # noqa: E402
from backend.core.settings import Settings  # noqa: E402
from backend.infra.astro.analytical import AnalyticalPositionProvider  # noqa: E402
from backend.infra.astro.fake_deterministic import FakeDeterministicProvider  # noqa: E402
from backend.infra.http_clients import StaticGeoClient  # noqa: E402

TEST_PLACES = {
    "Paris, France": (48.8566, 2.3522),
    "London, UK": (51.5074, -0.1278),
    "New York, USA": (40.7128, -74.0060),
    "Tokyo, Japan": (35.6762, 139.6503),
}


@pytest.fixture
def static_geocoder() -> StaticGeoClient:
    """Géocodeur hors ligne avec quelques villes connues."""
    return StaticGeoClient(TEST_PLACES)


@pytest.fixture
def fake_provider() -> FakeDeterministicProvider:
    """Fournisseur à longitudes fixes (Bélier, Taureau, Cancer, Balance, Sagittaire, Gémeaux)."""
    return FakeDeterministicProvider()


@pytest.fixture
def analytical_provider() -> AnalyticalPositionProvider:
    return AnalyticalPositionProvider()


@pytest.fixture
def test_settings() -> Settings:
    """Paramètres isolés de l'environnement local (pas de réseau)."""
    return Settings(
        _env_file=None,
        APP_NAME="test_app",
        LOG_LEVEL="DEBUG",
        ASTRO_PROVIDER="analytical",
        GEOCODER_BACKEND="static",
    )


@pytest.fixture
def container(test_settings, static_geocoder, analytical_provider) -> Container:
    return Container(
        settings=test_settings, geocoder=static_geocoder, provider=analytical_provider
    )


@pytest.fixture
def client(container):
    """Client HTTP de test sur une application neuve."""
    from fastapi.testclient import TestClient

    from backend.app.main import create_app

    with TestClient(create_app(container)) as c:
        yield c
