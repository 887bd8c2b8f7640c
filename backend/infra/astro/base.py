"""Interface de base pour les fournisseurs de positions célestes.

Ce module définit l'interface abstraite que doivent implémenter les moteurs de positions
(analytique approché, déterministe de test, ou futur moteur haute précision).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from backend.domain.entities import Coordinates
from backend.domain.zodiac import Body


class BodyPositionProvider(ABC):
    """Interface abstraite: longitude écliptique (non normalisée) d'un corps à un Jour Julien."""

    name: str = "abstract"

    @abstractmethod
    def sun(self, jd: float) -> float:
        """Longitude écliptique du Soleil."""
        raise NotImplementedError

    @abstractmethod
    def moon(self, jd: float) -> float:
        """Longitude écliptique de la Lune."""
        raise NotImplementedError

    @abstractmethod
    def mercury(self, jd: float) -> float:
        """Longitude écliptique de Mercure."""
        raise NotImplementedError

    @abstractmethod
    def venus(self, jd: float) -> float:
        """Longitude écliptique de Vénus."""
        raise NotImplementedError

    @abstractmethod
    def mars(self, jd: float) -> float:
        """Longitude écliptique de Mars."""
        raise NotImplementedError

    @abstractmethod
    def ascendant(self, jd: float, latitude: float, longitude: float) -> float:
        """Longitude écliptique de l'Ascendant pour un lieu donné."""
        raise NotImplementedError

    def longitude(self, body: Body, jd: float, coordinates: Coordinates | None = None) -> float:
        """Dispatch to the per-body model.

        Args:
            body: Corps à calculer (Soleil..Mars, Ascendant).
            jd: Jour Julien UTC.
            coordinates: Lieu, requis uniquement pour l'Ascendant.

        Returns:
            float: Longitude brute, à normaliser par l'appelant.

        Raises:
            ValueError: Corps non suivi, ou Ascendant sans coordonnées.
        """
        if body is Body.ASCENDANT:
            if coordinates is None:
                raise ValueError("ascendant requires coordinates")
            return self.ascendant(jd, coordinates.latitude, coordinates.longitude)
        models = {
            Body.SUN: self.sun,
            Body.MOON: self.moon,
            Body.MERCURY: self.mercury,
            Body.VENUS: self.venus,
            Body.MARS: self.mars,
        }
        try:
            model = models[body]
        except KeyError as err:
            raise ValueError(f"untracked body: {body.value}") from err
        return model(jd)
