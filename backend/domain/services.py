import math
from datetime import date as _date

import structlog

from backend.domain.angles import normalize_degrees
from backend.domain.entities import BodyPosition, MoonPhase, PeriodTransits, Transits
from backend.domain.errors import EssentialBodyMissing, InvalidPeriod
from backend.domain.timeconv import to_julian_day
from backend.domain.zodiac import Body
from backend.infra.astro.base import BodyPositionProvider

# Midi UTC: les transits sont calculés pour Greenwich
TRANSIT_UTC_HOUR = 12.0

_PHASES = tuple(MoonPhase)
_TRANSIT_BODIES = (Body.SUN, Body.MOON, Body.MERCURY, Body.VENUS, Body.MARS)


def moon_phase(sun_longitude: float, moon_longitude: float) -> MoonPhase:
    """Phase lunaire à partir de l'élongation Lune - Soleil (8 secteurs de 45°)."""
    elongation = normalize_degrees(moon_longitude - sun_longitude)
    return _PHASES[min(int(elongation // 45.0), len(_PHASES) - 1)]


class TransitService:
    """Service métier pour les transits du jour et d'une période.

    Responsabilités:
    - Calculer les positions courantes à 12:00 UTC à Greenwich via `provider`
      (pas de géocodage: le lieu est fixe).
    - Déduire la phase lunaire et un résumé de période.
    """

    def __init__(self, provider: BodyPositionProvider):
        """Initialise le service avec le fournisseur de positions.

        Paramètres:
        - provider: composant réalisant les calculs de longitudes.
        """
        self.provider = provider
        self._log = structlog.get_logger(__name__).bind(component="transits")

    def compute_transits(self, day: _date) -> Transits:
        """Produit les transits d'une journée.

        Paramètres:
        - day: date civile (UTC) des transits.

        Retour: `Transits` avec positions Soleil..Mars, phase lunaire et résumé.

        Raises:
            EssentialBodyMissing: Longitude non finie pour un corps.
        """
        jd = to_julian_day(day.year, day.month, day.day, TRANSIT_UTC_HOUR)
        positions: dict[Body, BodyPosition] = {}
        for body in _TRANSIT_BODIES:
            lon = self.provider.longitude(body, jd)
            if not math.isfinite(lon):
                raise EssentialBodyMissing(body.value)
            positions[body] = BodyPosition.from_longitude(body, lon)
        sun, moon = positions[Body.SUN], positions[Body.MOON]
        phase = moon_phase(sun.ecliptic_longitude, moon.ecliptic_longitude)
        self._log.debug("transits_computed", day=day.isoformat(), phase=phase.value)
        return Transits(
            date=day,
            julian_day=jd,
            sun=sun,
            moon=moon,
            mercury=positions[Body.MERCURY],
            venus=positions[Body.VENUS],
            mars=positions[Body.MARS],
            moon_phase=phase,
            summary=(
                f"Current astrological influences for {day.isoformat()}: "
                f"Sun in {sun.sign.value}, Moon in {moon.sign.value} ({phase.value})."
            ),
        )

    def compute_period(self, start: _date, end: _date) -> PeriodTransits:
        """Transits aux deux bornes d'une période (horoscope hebdo/mensuel).

        Raises:
            InvalidPeriod: si `end` précède `start`.
        """
        if end < start:
            raise InvalidPeriod(f"period end {end.isoformat()} precedes start {start.isoformat()}")
        first = self.compute_transits(start)
        last = self.compute_transits(end)
        moves = "" if first.sun.sign == last.sun.sign else f" into {last.sun.sign.value}"
        return PeriodTransits(
            start=first,
            end=last,
            summary=(
                f"Period from {start.isoformat()} to {end.isoformat()}. "
                f"The Sun moves through {first.sun.sign.value}{moves}."
            ),
        )
