"""Normalisation d'angles et décomposition signe/degré.

Objectif du module
------------------
- Ramener toute longitude réelle (négative ou > 360) dans [0, 360).
- Dériver le signe zodiacal et le degré dans le signe à partir de la seule longitude.
"""

from __future__ import annotations

import math

from backend.domain.zodiac import ZODIAC_SIGNS, ZodiacSign

FULL_CIRCLE = 360.0
SIGN_WIDTH = 30.0


def normalize_degrees(x: float) -> float:
    """Reduce an angle to the canonical [0, 360) range.

    Args:
        x: Angle en degrés, non borné.

    Returns:
        float: Angle équivalent dans [0, 360).
    """
    r = math.fmod(math.fmod(float(x), FULL_CIRCLE) + FULL_CIRCLE, FULL_CIRCLE)
    # -1e-15 + 360 arrondit à 360.0 en flottant
    if r >= FULL_CIRCLE:
        r = 0.0
    return r


def sign_index(degree: float) -> int:
    """Index (0-11) du signe contenant la longitude donnée."""
    idx = int(math.floor(normalize_degrees(degree) / SIGN_WIDTH))
    return min(idx, len(ZODIAC_SIGNS) - 1)


def sign_of(degree: float) -> ZodiacSign:
    """Retourne le signe zodiacal d'une longitude écliptique."""
    return ZODIAC_SIGNS[sign_index(degree)]


def degree_in_sign(degree: float) -> float:
    """Retourne le degré dans le signe, dans [0, 30)."""
    return math.fmod(normalize_degrees(degree), SIGN_WIDTH)
