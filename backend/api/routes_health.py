"""
Endpoint de santé pour vérifier la disponibilité de l'API et de ses collaborateurs.

Expose `/health` pour signaler l'état général et les backends configurés.
"""


from fastapi import APIRouter, Depends

from backend.api.deps import get_container
from backend.core.container import Container

router = APIRouter(tags=["health"])
container_dep = Depends(get_container)


@router.get("/health")
def health(container: Container = container_dep):
    """Vérifie la disponibilité de l'API et indique moteur et géocodeur actifs."""
    return {
        "status": "ok",
        "astro_provider": container.provider.name,
        "geocoder": container.geocoder.name,
    }
