"""
Application principale FastAPI.

Ce module assemble les composants du moteur de thèmes natals : middlewares,
routes, gestionnaires d'erreurs et conteneur de dépendances.

Responsabilités du module:
- Initialiser le logging structuré au niveau configuré
- Construire l'application FastAPI avec son titre/debug
- Attacher le conteneur à `app.state` et le fermer à l'arrêt
- Ajouter les middlewares (request id, timing)
- Monter les routers (santé et thèmes)

Aucune application n'est construite à l'import: lancer avec
`uvicorn --factory backend.app.main:create_app`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.api.errors import register_error_handlers
from backend.api.routes_charts import router as charts_router
from backend.api.routes_health import router as health_router
from backend.core.container import Container
from backend.core.logging import setup_logging
from backend.middlewares.request_id import RequestIDMiddleware
from backend.middlewares.timing import TimingMiddleware


def create_app(container: Container | None = None) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Construit le conteneur (sauf s'il est fourni, cas des tests)
    - Configure le logging structuré (structlog)
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes de santé et de thèmes
    """
    container = container or Container()
    settings = container.settings
    setup_logging(settings.LOG_LEVEL, json_logs=settings.APP_ENV not in {"dev", "test"})

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await container.aclose()

    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG, lifespan=lifespan)
    app.state.container = container
    register_error_handlers(app)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.include_router(health_router)
    app.include_router(charts_router)
    return app

