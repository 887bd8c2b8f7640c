"""Tests pour la conversion temps civil → Jour Julien."""

from __future__ import annotations

from datetime import date

import pytest

from backend.domain.errors import InvalidBirthInput
from backend.domain.timeconv import (
    J2000,
    UtcMoment,
    centuries_since_j2000,
    days_in_month,
    local_to_utc,
    parse_birth_date,
    parse_birth_time,
    to_julian_day,
)


def test_julian_day_j2000() -> None:
    """2000-01-01 12:00 UTC correspond à J2000.0."""
    assert to_julian_day(2000, 1, 1, 12.0) == J2000
    assert centuries_since_j2000(J2000) == 0.0


def test_julian_day_known_dates() -> None:
    """Teste quelques Jours Juliens de référence."""
    assert to_julian_day(1999, 12, 31, 0.0) == pytest.approx(2451543.5)
    assert to_julian_day(1987, 1, 27, 0.0) == pytest.approx(2446822.5)
    assert to_julian_day(1957, 10, 4, 19.44) == pytest.approx(2436116.31, abs=1e-6)


def test_julian_day_is_monotonic_in_hour() -> None:
    """Une heure de plus = 1/24 de jour."""
    assert to_julian_day(2024, 6, 1, 13.0) - to_julian_day(2024, 6, 1, 12.0) == pytest.approx(
        1 / 24
    )


def test_days_in_month_leap_years() -> None:
    """Teste les années bissextiles grégoriennes."""
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29
    assert days_in_month(2023, 4) == 30


def test_local_to_utc_same_day() -> None:
    """Longitude est: l'heure UTC recule sans changer de date."""
    utc = local_to_utc(1990, 4, 5, 14, 30, 15.0)
    assert utc == UtcMoment(1990, 4, 5, 13.5)


def test_local_to_utc_rolls_back_across_year() -> None:
    """Une heure UTC négative recule la date, y compris au passage d'année."""
    utc = local_to_utc(2000, 1, 1, 0, 30, 15.0)
    assert (utc.year, utc.month, utc.day) == (1999, 12, 31)
    assert utc.hour == pytest.approx(23.5)


def test_local_to_utc_rolls_back_into_leap_february() -> None:
    """Le 1er mars recule au 29 février les années bissextiles."""
    leap = local_to_utc(2024, 3, 1, 1, 0, 30.0)
    assert (leap.year, leap.month, leap.day) == (2024, 2, 29)
    plain = local_to_utc(2023, 3, 1, 1, 0, 30.0)
    assert (plain.year, plain.month, plain.day) == (2023, 2, 28)


def test_local_to_utc_rolls_forward() -> None:
    """Longitude ouest: l'heure UTC dépasse 24h et la date avance."""
    utc = local_to_utc(1999, 12, 31, 23, 0, -30.0)
    assert (utc.year, utc.month, utc.day) == (2000, 1, 1)
    assert utc.hour == pytest.approx(1.0)
    assert 0.0 <= utc.hour < 24.0


def test_local_to_utc_date_line() -> None:
    """À -180°, midi local donne minuit UTC le lendemain."""
    utc = local_to_utc(2023, 12, 31, 12, 0, -180.0)
    assert utc == UtcMoment(2024, 1, 1, 0.0)


def test_parse_birth_date() -> None:
    """Teste l'interprétation des dates valides."""
    assert parse_birth_date("1990-05-15") == (1990, 5, 15)
    assert parse_birth_date("2024-02-29") == (2024, 2, 29)


@pytest.mark.parametrize("value", ["15/05/1990", "1990-5", "", "yesterday"])
def test_parse_birth_date_bad_format(value: str) -> None:
    """Teste le rejet des formats invalides."""
    with pytest.raises(InvalidBirthInput) as exc:
        parse_birth_date(value)
    assert exc.value.field == "birth_date"
    assert str(exc.value) == "Date must be in format YYYY-MM-DD"


@pytest.mark.parametrize("value", ["2023-02-29", "2023-13-01", "2023-04-31", "2023-01-00"])
def test_parse_birth_date_impossible(value: str) -> None:
    """Teste le rejet des dates inexistantes."""
    with pytest.raises(InvalidBirthInput, match="Invalid date"):
        parse_birth_date(value)


def test_parse_birth_time() -> None:
    """Heure absente ou hors bornes → midi; heure valide conservée."""
    assert parse_birth_time(None) == (12, 0)
    assert parse_birth_time("  ") == (12, 0)
    assert parse_birth_time("14:30") == (14, 30)
    assert parse_birth_time("07:05:59") == (7, 5)
    assert parse_birth_time("25:00") == (12, 0)
    assert parse_birth_time("10:75") == (12, 0)


def test_parse_birth_time_unreadable() -> None:
    """Teste le rejet d'une heure illisible."""
    with pytest.raises(InvalidBirthInput) as exc:
        parse_birth_time("noon")
    assert exc.value.field == "birth_time"


def test_parse_birth_date_range_bounds() -> None:
    """Les bornes 1900-01-01 et la date du jour sont acceptées."""
    today = date(2024, 6, 1)
    assert parse_birth_date("1900-01-01", today=today) == (1900, 1, 1)
    assert parse_birth_date("2024-06-01", today=today) == (2024, 6, 1)


@pytest.mark.parametrize("value", ["1899-12-31", "0001-01-01", "0000-02-29"])
def test_parse_birth_date_before_1900(value: str) -> None:
    """Teste le rejet des dates antérieures à 1900."""
    with pytest.raises(InvalidBirthInput) as exc:
        parse_birth_date(value)
    assert exc.value.field == "birth_date"
    assert str(exc.value) == "Date cannot be before 1900"


@pytest.mark.parametrize("value", ["2024-06-02", "2999-01-01"])
def test_parse_birth_date_in_future(value: str) -> None:
    """Teste le rejet des dates postérieures au jour courant."""
    with pytest.raises(InvalidBirthInput, match="Date cannot be in the future"):
        parse_birth_date(value, today=date(2024, 6, 1))
