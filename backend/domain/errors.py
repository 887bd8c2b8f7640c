"""Erreurs du moteur de thème natal.

Objectif du module
------------------
- Définir la taxonomie d'erreurs remontée à l'appelant de `compute_natal_chart`.
- Chaque erreur transporte le contexte utile (lieu, corps céleste) pour un message actionnable.
"""

from __future__ import annotations


class ChartEngineError(Exception):
    """Erreur de base pour tous les échecs du moteur de thème."""


class InvalidBirthInput(ChartEngineError, ValueError):
    """Date ou heure de naissance impossible à interpréter."""

    def __init__(self, field: str, value: str | None, message: str | None = None) -> None:
        """Initialize invalid birth input error."""
        self.field = field
        self.value = value
        super().__init__(message or f"invalid {field}: {value!r}")


class LocationNotFound(ChartEngineError):
    """Le géocodeur n'a trouvé aucun résultat pour le lieu demandé."""

    def __init__(self, place_name: str) -> None:
        """Initialize location not found error."""
        self.place_name = place_name
        super().__init__(f"Location not found: {place_name}")


class GeocodingUnavailable(ChartEngineError):
    """Erreur réseau, timeout ou réponse non-2xx du service de géocodage."""

    def __init__(
        self, place_name: str, message: str | None = None, status_code: int | None = None
    ) -> None:
        """Initialize geocoding unavailable error."""
        self.place_name = place_name
        self.status_code = status_code
        super().__init__(message or f"geocoding unavailable for {place_name}")


class EssentialBodyMissing(ChartEngineError):
    """Un corps essentiel n'a pas produit de longitude finie."""

    def __init__(self, body: str) -> None:
        """Initialize essential body missing error."""
        self.body = body
        super().__init__(f"Failed to calculate essential body: {body}")


class InvalidPeriod(ChartEngineError, ValueError):
    """Période de transits incohérente (fin avant début)."""
