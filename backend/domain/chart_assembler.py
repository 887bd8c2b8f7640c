"""
Assemblage du thème natal.

Objectif: à partir des données de naissance, orchestrer géocodage, correction UTC, Jour Julien,
positions des corps, puis dériver l'élément dominant, le maître du thème et un résumé textuel.

Le calcul échoue proprement ou renvoie un thème complet: jamais de thème partiel, jamais de
lieu ou de contenu de repli.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import structlog

from backend.domain.entities import BirthInput, BodyPosition, Coordinates, NatalChart
from backend.domain.errors import EssentialBodyMissing
from backend.domain.timeconv import local_to_utc, to_julian_day
from backend.domain.zodiac import (
    CHART_BODIES,
    Body,
    Element,
    ZodiacSign,
    approximate_sun_sign,
    element_of,
    neighbours,
    ruler_of,
)
from backend.infra.astro.base import BodyPositionProvider
from backend.infra.http_clients import GeoClient

log = structlog.get_logger(__name__)


def dominant_element(signs: Iterable[ZodiacSign]) -> Element:
    """
    Élément le plus représenté parmi les signes donnés.

    Égalités départagées par l'ordre Feu, Terre, Air, Eau (le Feu gagne toutes les égalités).
    """
    counts = {element: 0 for element in Element}
    for sign in signs:
        counts[element_of(sign)] += 1
    best, best_count = Element.FIRE, 0
    for element, count in counts.items():
        if count > best_count:
            best, best_count = element, count
    return best


def ruling_body(sun_sign: ZodiacSign) -> Body:
    """Maître du thème: maître du signe solaire."""
    return ruler_of(sun_sign)


def build_summary(
    name: str,
    birth_date: str,
    birth_time: str,
    place_name: str,
    element: Element,
    sun: ZodiacSign,
    moon: ZodiacSign,
    ascendant: ZodiacSign,
) -> str:
    """Phrase de synthèse déterministe (pas de génération IA à ce niveau)."""
    return (
        f"Natal chart for {name}, born on {birth_date} at {birth_time} in {place_name}. "
        f"Your chart reveals a {element.value} dominant personality with {sun.value} Sun, "
        f"{moon.value} Moon, and {ascendant.value} Rising."
    )


class ChartAssembler:
    """Orchestrateur du calcul de thème natal.

    Responsabilités:
    - Résoudre le lieu de naissance via `geocoder`.
    - Calculer les longitudes via `provider` (analytique, factice...).
    - Assembler un `NatalChart` immuable.

    L'instance ne conserve aucun état entre deux calculs.
    """

    def __init__(self, geocoder: GeoClient, provider: BodyPositionProvider):
        """Initialise l'assembleur avec ses collaborateurs.

        Paramètres:
        - geocoder: résolution nom de lieu → coordonnées.
        - provider: modèles de positions des corps.
        """
        self.geocoder = geocoder
        self.provider = provider

    async def compute_natal_chart(
        self, name: str, birth_date: str, birth_time: str | None, birth_place: str
    ) -> NatalChart:
        """Point d'entrée public: chaînes brutes → thème natal.

        Les chaînes sont interprétées avant tout appel réseau (échec immédiat).

        Raises:
            InvalidBirthInput: Date ou heure illisible.
            LocationNotFound: Lieu inconnu du géocodeur.
            GeocodingUnavailable: Géocodeur injoignable.
            EssentialBodyMissing: Longitude non finie pour un corps.
        """
        birth = BirthInput.from_strings(name, birth_date, birth_time, birth_place)
        return await self.compute_chart(birth)

    async def compute_chart(self, birth: BirthInput) -> NatalChart:
        """Calcule le thème natal complet pour des données de naissance validées."""
        coords = await self.geocoder.geocode(birth.place_name)
        return self.assemble(birth, coords)

    def assemble(self, birth: BirthInput, coords: Coordinates) -> NatalChart:
        """Partie purement calculatoire, une fois les coordonnées connues."""
        utc = local_to_utc(
            birth.year, birth.month, birth.day, birth.hour, birth.minute, coords.longitude
        )
        jd = to_julian_day(utc.year, utc.month, utc.day, utc.hour)
        log.debug("julian_day", jd=jd, utc_date=(utc.year, utc.month, utc.day), utc_hour=utc.hour)

        positions = self.compute_positions(jd, coords)
        sun = positions[Body.SUN]
        moon = positions[Body.MOON]
        asc = positions[Body.ASCENDANT]

        element = dominant_element(p.sign for p in positions.values())
        ruler = ruling_body(sun.sign)
        self._check_sun_sign(birth, sun.sign)

        chart = NatalChart(
            name=birth.name,
            birth_date=birth.birth_date,
            birth_time=birth.birth_time,
            place_name=birth.place_name,
            coordinates=coords,
            julian_day=jd,
            sun=sun,
            moon=moon,
            mercury=positions[Body.MERCURY],
            venus=positions[Body.VENUS],
            mars=positions[Body.MARS],
            ascendant=asc,
            dominant_element=element,
            ruling_body=ruler,
            summary=build_summary(
                birth.name,
                birth.birth_date,
                birth.birth_time,
                birth.place_name,
                element,
                sun.sign,
                moon.sign,
                asc.sign,
            ),
        )
        log.debug(
            "chart_computed",
            provider=self.provider.name,
            sun=f"{sun.sign.value} {sun.degree_in_sign:.2f}",
            moon=f"{moon.sign.value} {moon.degree_in_sign:.2f}",
            rising=f"{asc.sign.value} {asc.degree_in_sign:.2f}",
            element=element.value,
        )
        return chart

    def compute_positions(
        self, jd: float, coords: Coordinates | None, bodies: Iterable[Body] = CHART_BODIES
    ) -> dict[Body, BodyPosition]:
        """Longitudes normalisées et décomposées, dans l'ordre de `bodies`.

        Raises:
            EssentialBodyMissing: Longitude non finie (NaN, inf) pour un corps demandé.
        """
        out: dict[Body, BodyPosition] = {}
        for body in bodies:
            lon = self.provider.longitude(body, jd, coords)
            if not math.isfinite(lon):
                # pas de thème partiel: toute longitude non finie est fatale
                raise EssentialBodyMissing(body.value)
            out[body] = BodyPosition.from_longitude(body, lon)
        return out

    def _check_sun_sign(self, birth: BirthInput, computed: ZodiacSign) -> None:
        expected = approximate_sun_sign(birth.month, birth.day)
        if computed != expected and computed not in neighbours(expected):
            log.warning(
                "sun_sign_mismatch",
                provider=self.provider.name,
                computed=computed.value,
                expected=expected.value,
                birth_date=birth.birth_date,
            )
