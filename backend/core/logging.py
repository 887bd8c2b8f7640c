"""Configuration de logging basée sur structlog.

Objectif du module
------------------
- Fournir une configuration de logs structurés lisibles en développement, JSON ailleurs.
- Propager le contexte de requête (`request_id`) lié par le middleware dans chaque événement.
"""

import logging
import sys

import structlog


def _level_number(level: str | None) -> int:
    value = logging.getLevelName(level.upper()) if level else logging.DEBUG
    return value if isinstance(value, int) else logging.DEBUG


def setup_logging(level: str = "DEBUG", json_logs: bool = False):
    """Configure structlog pour produire des logs détaillés et filtrables.

    Args:
        level: Niveau minimal (nom `logging`, ex: "INFO"); inconnu -> DEBUG.
        json_logs: Rendu JSON (une ligne par événement) au lieu de la console colorée.
    """
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
