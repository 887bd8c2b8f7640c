"""
Moteur de positions analytique (éléments moyens).

Ce module implémente des séries analytiques d'ordre faible pour le Soleil, la Lune, Mercure,
Vénus, Mars et l'Ascendant. Précision de l'ordre du degré pour les planètes intérieures:
suffisant pour un usage de divertissement, pas pour un usage scientifique.
"""

import math

from backend.domain.timeconv import J2000, centuries_since_j2000
from backend.infra.astro.base import BodyPositionProvider


def _sin_deg(x: float) -> float:
    return math.sin(math.radians(x))


class AnalyticalPositionProvider(BodyPositionProvider):
    """
    Fournisseur de positions par formules fermées.

    Sans état: une même instance peut être partagée entre calculs concurrents.
    """

    name = "analytical"

    def sun(self, jd: float) -> float:
        """
        Longitude moyenne + équation du centre (trois harmoniques de l'anomalie moyenne).

        Args:
            jd: Jour Julien UTC.

        Returns:
            float: Longitude géométrique approchée du Soleil, en degrés.
        """
        t = centuries_since_j2000(jd)
        l0 = 280.46646 + 36000.76983 * t + 0.0003032 * t * t
        m = 357.52911 + 35999.05029 * t - 0.0001537 * t * t
        c = (
            (1.914602 - 0.004817 * t - 0.000014 * t * t) * _sin_deg(m)
            + (0.019993 - 0.000101 * t) * _sin_deg(2 * m)
            + 0.000289 * _sin_deg(3 * m)
        )
        return l0 + c

    def moon(self, jd: float) -> float:
        """
        Théorie lunaire tronquée: longitude moyenne + quatre termes périodiques.

        Précision de l'ordre de 0.2° au mieux.

        Args:
            jd: Jour Julien UTC.

        Returns:
            float: Longitude approchée de la Lune, en degrés.
        """
        t = centuries_since_j2000(jd)
        l0 = 218.3164477 + 481267.88123421 * t - 0.0015786 * t * t
        d = 297.8501921 + 445267.1114034 * t - 0.0018819 * t * t
        m = 357.5291092 + 35999.0502909 * t - 0.0001536 * t * t
        return (
            l0
            + 6.288774 * _sin_deg(d)
            + 1.274027 * _sin_deg(2 * d - m)
            + 0.658314 * _sin_deg(2 * d)
            + 0.213618 * _sin_deg(2 * m)
        )

    def moon_argument_of_latitude(self, jd: float) -> float:
        """Argument de latitude F de la Lune (non utilisé par les termes retenus)."""
        t = centuries_since_j2000(jd)
        return 93.2720950 + 483202.0175233 * t - 0.0036539 * t * t

    # Planètes: longitude moyenne seule, sans excentricité ni perturbations
    def mercury(self, jd: float) -> float:
        return 252.250906 + 149472.6746358 * centuries_since_j2000(jd)

    def venus(self, jd: float) -> float:
        return 181.979801 + 58517.8156760 * centuries_since_j2000(jd)

    def mars(self, jd: float) -> float:
        return 355.433275 + 19140.2993313 * centuries_since_j2000(jd)

    @staticmethod
    def greenwich_mean_sidereal_time(jd: float) -> float:
        """Temps sidéral moyen de Greenwich, en degrés (non normalisé)."""
        t = centuries_since_j2000(jd)
        return (
            280.46061837
            + 360.98564736629 * (jd - J2000)
            + 0.000387933 * t * t
            - t * t * t / 38710000.0
        )

    @staticmethod
    def obliquity(jd: float) -> float:
        """Obliquité moyenne de l'écliptique, en degrés."""
        return 23.439291 - 0.0130042 * centuries_since_j2000(jd)

    def ascendant(self, jd: float, latitude: float, longitude: float) -> float:
        """
        Ascendant simplifié: temps sidéral local + demi-latitude.

        Ce n'est pas la solution de trigonométrie sphérique: l'obliquité n'est pas appliquée.
        La formule est conservée telle quelle pour la compatibilité des résultats.

        Args:
            jd: Jour Julien UTC.
            latitude: Latitude géographique (degrés, nord positif).
            longitude: Longitude géographique (degrés, est positif).

        Returns:
            float: Longitude approchée de l'Ascendant, en degrés.
        """
        lmst = self.greenwich_mean_sidereal_time(jd) + longitude
        return lmst + latitude * 0.5
