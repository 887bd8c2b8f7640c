"""Tables zodiacales statiques.

Ce module centralise l'ordre des signes, leurs éléments et leurs maîtres, ainsi qu'une estimation
calendaire du signe solaire utilisée uniquement comme contrôle de cohérence.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class ZodiacSign(str, Enum):
    """Les 12 signes du zodiaque tropical, dans l'ordre à partir du Bélier."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"


class Element(str, Enum):
    """Éléments classiques; l'ordre de déclaration sert de départage."""

    FIRE = "Fire"
    EARTH = "Earth"
    AIR = "Air"
    WATER = "Water"


class Body(str, Enum):
    """Corps et points suivis par le moteur, plus les maîtres lents des signes."""

    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    ASCENDANT = "Ascendant"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"


CHART_BODIES: tuple[Body, ...] = (
    Body.SUN,
    Body.MOON,
    Body.MERCURY,
    Body.VENUS,
    Body.MARS,
    Body.ASCENDANT,
)

ZODIAC_SIGNS: tuple[ZodiacSign, ...] = (
    ZodiacSign.ARIES,
    ZodiacSign.TAURUS,
    ZodiacSign.GEMINI,
    ZodiacSign.CANCER,
    ZodiacSign.LEO,
    ZodiacSign.VIRGO,
    ZodiacSign.LIBRA,
    ZodiacSign.SCORPIO,
    ZodiacSign.SAGITTARIUS,
    ZodiacSign.CAPRICORN,
    ZodiacSign.AQUARIUS,
    ZodiacSign.PISCES,
)

SIGN_ELEMENTS = MappingProxyType(
    {
        ZodiacSign.ARIES: Element.FIRE,
        ZodiacSign.TAURUS: Element.EARTH,
        ZodiacSign.GEMINI: Element.AIR,
        ZodiacSign.CANCER: Element.WATER,
        ZodiacSign.LEO: Element.FIRE,
        ZodiacSign.VIRGO: Element.EARTH,
        ZodiacSign.LIBRA: Element.AIR,
        ZodiacSign.SCORPIO: Element.WATER,
        ZodiacSign.SAGITTARIUS: Element.FIRE,
        ZodiacSign.CAPRICORN: Element.EARTH,
        ZodiacSign.AQUARIUS: Element.AIR,
        ZodiacSign.PISCES: Element.WATER,
    }
)

SIGN_RULERS = MappingProxyType(
    {
        ZodiacSign.ARIES: Body.MARS,
        ZodiacSign.TAURUS: Body.VENUS,
        ZodiacSign.GEMINI: Body.MERCURY,
        ZodiacSign.CANCER: Body.MOON,
        ZodiacSign.LEO: Body.SUN,
        ZodiacSign.VIRGO: Body.MERCURY,
        ZodiacSign.LIBRA: Body.VENUS,
        ZodiacSign.SCORPIO: Body.PLUTO,
        ZodiacSign.SAGITTARIUS: Body.JUPITER,
        ZodiacSign.CAPRICORN: Body.SATURN,
        ZodiacSign.AQUARIUS: Body.URANUS,
        ZodiacSign.PISCES: Body.NEPTUNE,
    }
)

# (mois, jour) de début de chaque signe, dans l'ordre de ZODIAC_SIGNS
_SUN_SIGN_STARTS: tuple[tuple[int, int], ...] = (
    (3, 21),
    (4, 20),
    (5, 21),
    (6, 21),
    (7, 23),
    (8, 23),
    (9, 23),
    (10, 23),
    (11, 22),
    (12, 22),
    (1, 20),
    (2, 19),
)


def element_of(sign: ZodiacSign) -> Element:
    """Retourne l'élément associé à un signe."""
    return SIGN_ELEMENTS[sign]


def ruler_of(sign: ZodiacSign) -> Body:
    """Retourne le maître traditionnel/moderne d'un signe."""
    return SIGN_RULERS[sign]


def approximate_sun_sign(month: int, day: int) -> ZodiacSign:
    """Estimate the Sun sign from calendar ranges only.

    Les dates d'ingrès varient de 1 à 2 jours selon l'année; le signe réel doit toujours venir
    de la longitude écliptique calculée.

    Args:
        month: Mois (1-12).
        day: Jour du mois.

    Returns:
        ZodiacSign: Signe solaire approximatif.
    """
    key = (month, day)
    # Le signe courant est le dernier début atteint; avant le 20 janvier on est encore en Capricorne
    current = ZodiacSign.CAPRICORN
    best: tuple[int, int] | None = None
    for sign, start in zip(ZODIAC_SIGNS, _SUN_SIGN_STARTS, strict=True):
        if start <= key and (best is None or start > best):
            best = start
            current = sign
    return current


def neighbours(sign: ZodiacSign) -> tuple[ZodiacSign, ZodiacSign]:
    """Retourne les signes précédent et suivant dans l'ordre zodiacal."""
    idx = ZODIAC_SIGNS.index(sign)
    return ZODIAC_SIGNS[(idx - 1) % 12], ZODIAC_SIGNS[(idx + 1) % 12]
