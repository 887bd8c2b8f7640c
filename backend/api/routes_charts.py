"""Routes liées au calcul des thèmes natals et des transits.

Objectif du module
------------------
- Offrir un endpoint REST pour calculer un thème natal à partir de données de naissance.
- Exposer les transits du jour (ou d'une date donnée) et d'une période.
- Aucune persistance: le thème calculé est renvoyé tel quel, avec un cache navigateur long.
"""

from datetime import date

from fastapi import APIRouter, Depends, Response

from backend.api.deps import get_assembler, get_transit_service
from backend.api.schemas import NatalChartRequest
from backend.core.http_constants import NATAL_CHART_CACHE_CONTROL
from backend.domain.chart_assembler import ChartAssembler
from backend.domain.entities import NatalChart, PeriodTransits, Transits
from backend.domain.services import TransitService

router = APIRouter(prefix="/charts", tags=["charts"])
assembler_dep = Depends(get_assembler)
transits_dep = Depends(get_transit_service)


@router.post("/natal", response_model=NatalChart)
async def create_natal(
    payload: NatalChartRequest, response: Response, assembler: ChartAssembler = assembler_dep
):
    """
    Calcule un thème natal.

    Paramètres:
    - payload: `NatalChartRequest` (nom, date, heure optionnelle, lieu).

    Retour:
    - `NatalChart` (positions, élément dominant, maître, résumé).
    """
    chart = await assembler.compute_natal_chart(
        payload.name, payload.birth_date, payload.birth_time, payload.birth_place
    )
    response.headers["Cache-Control"] = NATAL_CHART_CACHE_CONTROL
    return chart


@router.get("/transits", response_model=Transits)
def get_transits(day: date | None = None, service: TransitService = transits_dep):
    """Transits à 12:00 UTC pour `day` (aujourd'hui par défaut)."""
    return service.compute_transits(day or date.today())


@router.get("/transits/period", response_model=PeriodTransits)
def get_period_transits(start: date, end: date, service: TransitService = transits_dep):
    """Transits aux bornes de la période [start, end]; 400 si `end` précède `start`."""
    return service.compute_period(start, end)
