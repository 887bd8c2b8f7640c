"""Moteur de positions déterministe pour les tests et le développement.

Ce module implémente un fournisseur factice qui renvoie des longitudes fixes, indépendantes de la
date et du lieu, pour produire des thèmes prévisibles sans calcul réel.
"""

from collections.abc import Mapping

from backend.domain.zodiac import Body
from backend.infra.astro.base import BodyPositionProvider

DEFAULT_LONGITUDES: dict[Body, float] = {
    Body.SUN: 15.0,  # Aries
    Body.MOON: 45.0,  # Taurus
    Body.MERCURY: 100.0,  # Cancer
    Body.VENUS: 200.0,  # Libra
    Body.MARS: 250.0,  # Sagittarius
    Body.ASCENDANT: 75.0,  # Gemini
}


class FakeDeterministicProvider(BodyPositionProvider):
    """Fournisseur factice à longitudes fixes.

    Produit des positions prévisibles pour les tests; les longitudes par défaut peuvent être
    surchargées corps par corps.
    """

    name = "fake"

    def __init__(self, longitudes: Mapping[Body, float] | None = None) -> None:
        """Initialise le fournisseur avec des longitudes optionnelles.

        Args:
            longitudes: Surcharges par corps (les autres gardent `DEFAULT_LONGITUDES`).
        """
        self._longitudes = {**DEFAULT_LONGITUDES, **(longitudes or {})}

    def sun(self, jd: float) -> float:
        return self._longitudes[Body.SUN]

    def moon(self, jd: float) -> float:
        return self._longitudes[Body.MOON]

    def mercury(self, jd: float) -> float:
        return self._longitudes[Body.MERCURY]

    def venus(self, jd: float) -> float:
        return self._longitudes[Body.VENUS]

    def mars(self, jd: float) -> float:
        return self._longitudes[Body.MARS]

    def ascendant(self, jd: float, latitude: float, longitude: float) -> float:
        return self._longitudes[Body.ASCENDANT]
