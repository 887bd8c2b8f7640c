"""Traduction des erreurs du moteur en réponses HTTP normalisées.

Ce module fournit une enveloppe d'erreur unique (`code`, `message`, `trace_id`) et associe chaque
erreur du domaine à un code HTTP. Le choix d'un message de repli côté utilisateur reste à la
charge du client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.core.http_constants import (
    HTTP_BAD_GATEWAY,
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
)
from backend.domain.errors import (
    ChartEngineError,
    EssentialBodyMissing,
    GeocodingUnavailable,
    InvalidBirthInput,
    InvalidPeriod,
    LocationNotFound,
)

log = structlog.get_logger(__name__)


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


class ErrorCodes:
    """Codes d'erreur exposés par l'API."""

    INVALID_BIRTH_INPUT = "INVALID_BIRTH_INPUT"
    INVALID_PERIOD = "INVALID_PERIOD"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    GEOCODING_UNAVAILABLE = "GEOCODING_UNAVAILABLE"
    ESSENTIAL_BODY_MISSING = "ESSENTIAL_BODY_MISSING"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Ordre significatif: première classe correspondante retenue
_ERROR_MAP: tuple[tuple[type[ChartEngineError], int, str], ...] = (
    (InvalidBirthInput, HTTP_BAD_REQUEST, ErrorCodes.INVALID_BIRTH_INPUT),
    (InvalidPeriod, HTTP_BAD_REQUEST, ErrorCodes.INVALID_PERIOD),
    (LocationNotFound, HTTP_NOT_FOUND, ErrorCodes.LOCATION_NOT_FOUND),
    (GeocodingUnavailable, HTTP_BAD_GATEWAY, ErrorCodes.GEOCODING_UNAVAILABLE),
    (EssentialBodyMissing, HTTP_INTERNAL_SERVER_ERROR, ErrorCodes.ESSENTIAL_BODY_MISSING),
)


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request state (set with X-Request-ID), else the X-Trace-ID header."""
    trace_id = getattr(request.state, "trace_id", None)
    if trace_id:
        return trace_id
    return request.headers.get("X-Trace-ID")


def classify(exc: ChartEngineError) -> tuple[int, str]:
    """Retourne (statut HTTP, code d'erreur) pour une erreur du moteur."""
    for cls, status, code in _ERROR_MAP:
        if isinstance(exc, cls):
            return status, code
    return HTTP_INTERNAL_SERVER_ERROR, ErrorCodes.INTERNAL_ERROR


def _details(exc: ChartEngineError) -> dict[str, Any] | None:
    if isinstance(exc, LocationNotFound | GeocodingUnavailable):
        return {"place_name": exc.place_name}
    if isinstance(exc, InvalidBirthInput):
        return {"field": exc.field}
    if isinstance(exc, EssentialBodyMissing):
        return {"body": exc.body}
    return None


async def handle_chart_engine_error(request: Request, exc: ChartEngineError) -> JSONResponse:
    """Handle domain errors with the standard envelope."""
    status, code = classify(exc)
    trace_id = extract_trace_id(request)
    log.warning("chart_engine_error", code=code, status_code=status, trace_id=trace_id)
    return create_error_response(status, code, str(exc), trace_id, _details(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les gestionnaires d'erreurs du domaine sur l'application."""
    app.add_exception_handler(ChartEngineError, handle_chart_engine_error)
