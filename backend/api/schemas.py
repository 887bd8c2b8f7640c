# Schémas Pydantic exposés par l'API (requêtes).

from pydantic import BaseModel, Field, field_validator


class NatalChartRequest(BaseModel):
    """Modèle de requête pour calculer un thème natal.

    Champs:
    - name: str (2 à 100 caractères)
    - birth_date: str (YYYY-MM-DD)
    - birth_time: str | None (HH:MM ou None; heure hors bornes -> midi)
    - birth_place: str (nom de lieu libre, 2 à 200 caractères)
    """

    name: str = Field(min_length=2, max_length=100)
    birth_date: str
    birth_time: str | None = None
    birth_place: str = Field(min_length=2, max_length=200)

    @field_validator("name", "birth_place")
    @classmethod
    def _strip_and_require(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("must contain at least 2 non-blank characters")
        return v
