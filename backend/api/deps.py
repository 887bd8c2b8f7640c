"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Exposer aux endpoints les composants construits au démarrage (assembleur de thème, service de
  transits) sans état global de module: le conteneur vit dans `app.state`.
"""

from fastapi import Request

from backend.core.container import Container
from backend.domain.chart_assembler import ChartAssembler
from backend.domain.services import TransitService


def get_container(request: Request) -> Container:
    """Retourne le conteneur attaché à l'application."""
    return request.app.state.container


def get_assembler(request: Request) -> ChartAssembler:
    """Assembleur de thème natal de l'application."""
    return get_container(request).assembler


def get_transit_service(request: Request) -> TransitService:
    """Service de transits de l'application."""
    return get_container(request).transits
