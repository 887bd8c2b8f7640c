"""Tests pour l'endpoint de santé de l'application."""

from fastapi.testclient import TestClient

from backend.core.http_constants import HTTP_OK


def test_health(client: TestClient) -> None:
    """Teste que l'endpoint de santé retourne un statut OK et les backends actifs."""
    r = client.get("/health")
    assert r.status_code == HTTP_OK
    assert r.json() == {"status": "ok", "astro_provider": "analytical", "geocoder": "static"}
    assert "X-Process-Time-ms" in r.headers
    assert r.headers["X-Request-ID"]


def test_app_module_builds_nothing_at_import(container) -> None:
    """Le module n'expose qu'une fabrique; aucune application ni client HTTP à l'import."""
    import importlib

    main = importlib.import_module("backend.app.main")
    assert not hasattr(main, "app")
    app = main.create_app(container)
    assert app.state.container is container
