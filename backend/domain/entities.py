"""
Entités du domaine métier.

Ce module définit les modèles de données du moteur de positions: données de naissance,
coordonnées, positions des corps et thème natal assemblé. Tous les modèles sont immuables.
"""

from __future__ import annotations

import math
from datetime import date as _date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.domain.angles import degree_in_sign, normalize_degrees, sign_of
from backend.domain.timeconv import (
    DEFAULT_HOUR,
    DEFAULT_MINUTE,
    days_in_month,
    parse_birth_date,
    parse_birth_time,
)
from backend.domain.zodiac import Body, Element, ZodiacSign


class BirthInput(BaseModel):
    """Données de naissance pour le calcul astrologique."""

    model_config = ConfigDict(frozen=True)

    name: str
    year: int
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    hour: int = DEFAULT_HOUR
    minute: int = DEFAULT_MINUTE
    place_name: str

    @model_validator(mode="before")
    @classmethod
    def _default_invalid_time_to_noon(cls, data: Any) -> Any:
        # Heure hors bornes -> midi, la date et le lieu restent stricts
        if isinstance(data, dict):
            hour = data.get("hour", DEFAULT_HOUR)
            minute = data.get("minute", DEFAULT_MINUTE)
            if hour is None or minute is None:
                return {**data, "hour": DEFAULT_HOUR, "minute": DEFAULT_MINUTE}
            if (
                isinstance(hour, int)
                and isinstance(minute, int)
                and not (0 <= hour <= 23 and 0 <= minute <= 59)
            ):
                data = {**data, "hour": DEFAULT_HOUR, "minute": DEFAULT_MINUTE}
        return data

    @model_validator(mode="after")
    def _check_calendar_date(self) -> BirthInput:
        if self.day > days_in_month(self.year, self.month):
            raise ValueError(f"invalid date {self.year:04d}-{self.month:02d}-{self.day:02d}")
        return self

    @classmethod
    def from_strings(
        cls, name: str, birth_date: str, birth_time: str | None, place_name: str
    ) -> BirthInput:
        """Build a `BirthInput` from the `YYYY-MM-DD` / `HH:MM` strings of the API.

        Raises:
            InvalidBirthInput: Date ou heure illisible.
        """
        year, month, day = parse_birth_date(birth_date)
        hour, minute = parse_birth_time(birth_time)
        return cls(
            name=name,
            year=year,
            month=month,
            day=day,
            hour=hour,
            minute=minute,
            place_name=place_name,
        )

    @property
    def birth_date(self) -> str:
        """Date au format `YYYY-MM-DD`."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @property
    def birth_time(self) -> str:
        """Heure au format `HH:MM`."""
        return f"{self.hour:02d}:{self.minute:02d}"


class Coordinates(BaseModel):
    """Latitude/longitude géographiques en degrés décimaux."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class BodyPosition(BaseModel):
    """Position écliptique d'un corps; signe et degré dérivent de la longitude."""

    model_config = ConfigDict(frozen=True)

    body: Body
    ecliptic_longitude: float = Field(ge=0.0, lt=360.0)
    sign: ZodiacSign
    degree_in_sign: float = Field(ge=0.0, lt=30.0)

    @model_validator(mode="after")
    def _check_derived_fields(self) -> BodyPosition:
        if self.sign != sign_of(self.ecliptic_longitude) or not math.isclose(
            self.degree_in_sign, degree_in_sign(self.ecliptic_longitude), abs_tol=1e-9
        ):
            raise ValueError("sign/degree_in_sign must derive from ecliptic_longitude")
        return self

    @classmethod
    def from_longitude(cls, body: Body, longitude: float) -> BodyPosition:
        """Normalise une longitude brute et la décompose en signe + degré."""
        lon = normalize_degrees(longitude)
        return cls(
            body=body,
            ecliptic_longitude=lon,
            sign=sign_of(lon),
            degree_in_sign=degree_in_sign(lon),
        )


class NatalChart(BaseModel):
    """Thème natal assemblé, jamais modifié après construction."""

    model_config = ConfigDict(frozen=True)

    name: str
    birth_date: str
    birth_time: str
    place_name: str
    coordinates: Coordinates
    julian_day: float
    sun: BodyPosition
    moon: BodyPosition
    mercury: BodyPosition
    venus: BodyPosition
    mars: BodyPosition
    ascendant: BodyPosition
    dominant_element: Element
    ruling_body: Body
    summary: str

    def positions(self) -> list[BodyPosition]:
        """Positions dans l'ordre Soleil, Lune, Mercure, Vénus, Mars, Ascendant."""
        return [self.sun, self.moon, self.mercury, self.venus, self.mars, self.ascendant]


class MoonPhase(str, Enum):
    """Huit phases lunaires, par secteurs de 45° d'élongation Lune - Soleil."""

    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"


class Transits(BaseModel):
    """Positions du jour (12:00 UTC, Greenwich) et phase lunaire."""

    model_config = ConfigDict(frozen=True)

    date: _date
    julian_day: float
    sun: BodyPosition
    moon: BodyPosition
    mercury: BodyPosition
    venus: BodyPosition
    mars: BodyPosition
    moon_phase: MoonPhase
    summary: str


class PeriodTransits(BaseModel):
    """Transits aux bornes d'une période (semaine, mois)."""

    model_config = ConfigDict(frozen=True)

    start: Transits
    end: Transits
    summary: str
