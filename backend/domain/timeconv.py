"""Conversion du temps civil vers le Jour Julien.

Objectif du module
------------------
- Interpréter les chaînes de date/heure de naissance (`YYYY-MM-DD`, `HH:MM`).
- Corriger l'heure locale vers UTC via un décalage approché dérivé de la longitude
  (`longitude / 15`), sans règles de fuseau ni d'heure d'été.
- Convertir une date grégorienne + heure UTC décimale en Jour Julien.
"""

from __future__ import annotations

import calendar
import math
import re
from dataclasses import dataclass
from datetime import date

from backend.domain.errors import InvalidBirthInput

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
DEFAULT_HOUR = 12
DEFAULT_MINUTE = 0
MIN_BIRTH_YEAR = 1900
_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*$")
_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{1,2})(?::\d{1,2})?\s*$")


@dataclass(frozen=True)
class UtcMoment:
    """Date civile UTC (éventuellement décalée d'un jour) et heure décimale."""

    year: int
    month: int
    day: int
    hour: float


def to_julian_day(year: int, month: int, day: int, utc_hour_decimal: float) -> float:
    """Convert a Gregorian calendar date and UTC hour to a Julian Day.

    Args:
        year: Année grégorienne.
        month: Mois (1-12).
        day: Jour du mois.
        utc_hour_decimal: Heure UTC décimale dans [0, 24).

    Returns:
        float: Jour Julien (2451545.0 pour 2000-01-01 12:00 UTC).
    """
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + b
        - 1524.5
        + utc_hour_decimal / 24.0
    )


def centuries_since_j2000(jd: float) -> float:
    """Siècles juliens écoulés depuis J2000.0."""
    return (jd - J2000) / DAYS_PER_CENTURY


def days_in_month(year: int, month: int) -> int:
    """Nombre de jours du mois, années bissextiles grégoriennes comprises."""
    if month == 2:
        return 29 if calendar.isleap(year) else 28
    return _MONTH_LENGTHS[month - 1]


def longitude_offset_hours(longitude: float) -> float:
    """Décalage horaire approché (heures) à l'est de Greenwich."""
    return longitude / 15.0


def _previous_day(year: int, month: int, day: int) -> tuple[int, int, int]:
    if day > 1:
        return year, month, day - 1
    if month > 1:
        return year, month - 1, days_in_month(year, month - 1)
    return year - 1, 12, 31


def _next_day(year: int, month: int, day: int) -> tuple[int, int, int]:
    if day < days_in_month(year, month):
        return year, month, day + 1
    if month < 12:
        return year, month + 1, 1
    return year + 1, 1, 1


def local_to_utc(
    year: int, month: int, day: int, hour: int, minute: int, longitude: float
) -> UtcMoment:
    """Convert local clock time to UTC using the longitude-derived offset.

    La date est reculée ou avancée d'un jour quand l'heure UTC sort de [0, 24).

    Args:
        year: Année locale.
        month: Mois local.
        day: Jour local.
        hour: Heure locale (0-23).
        minute: Minute locale (0-59).
        longitude: Longitude géographique en degrés (est positif).

    Returns:
        UtcMoment: Date UTC ajustée et heure décimale dans [0, 24).
    """
    utc_hour = hour + minute / 60.0 - longitude_offset_hours(longitude)
    while utc_hour < 0:
        utc_hour += 24.0
        year, month, day = _previous_day(year, month, day)
    while utc_hour >= 24.0:
        utc_hour -= 24.0
        year, month, day = _next_day(year, month, day)
    return UtcMoment(year=year, month=month, day=day, hour=utc_hour)


def parse_birth_date(value: str, today: date | None = None) -> tuple[int, int, int]:
    """Parse a `YYYY-MM-DD` birth date; the date must exist in the Gregorian calendar.

    La date doit être comprise entre le 1er janvier 1900 et `today` (date du jour par défaut).

    Raises:
        InvalidBirthInput: Format invalide, date inexistante (ex: 2023-02-29) ou hors plage.
    """
    if not isinstance(value, str):
        raise InvalidBirthInput("birth_date", repr(value), "Date must be in format YYYY-MM-DD")
    m = _DATE_RE.match(value)
    if not m:
        raise InvalidBirthInput("birth_date", value, "Date must be in format YYYY-MM-DD")
    year, month, day = (int(g) for g in m.groups())
    if not 1 <= month <= 12 or not 1 <= day <= days_in_month(year, month):
        raise InvalidBirthInput("birth_date", value, f"Invalid date: {value}")
    if year < MIN_BIRTH_YEAR:
        raise InvalidBirthInput("birth_date", value, "Date cannot be before 1900")
    # comparaison de tuples: pas de limite d'année liée à `datetime`
    limit = today or date.today()
    if (year, month, day) > (limit.year, limit.month, limit.day):
        raise InvalidBirthInput("birth_date", value, "Date cannot be in the future")
    return year, month, day


def parse_birth_time(value: str | None) -> tuple[int, int]:
    """Parse an optional `HH:MM` birth time.

    Une heure absente, ou lisible mais hors bornes (heure 0-23, minute 0-59), vaut midi.
    Une chaîne illisible est rejetée.

    Raises:
        InvalidBirthInput: Chaîne non vide qui ne suit pas le format `HH:MM`.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_HOUR, DEFAULT_MINUTE
    if not isinstance(value, str):
        raise InvalidBirthInput("birth_time", repr(value), "Time must be in format HH:MM")
    m = _TIME_RE.match(value)
    if not m:
        raise InvalidBirthInput("birth_time", value, "Time must be in format HH:MM")
    hour, minute = int(m.group(1)), int(m.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return DEFAULT_HOUR, DEFAULT_MINUTE
    return hour, minute
