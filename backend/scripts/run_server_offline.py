"""
Script de serveur de développement hors ligne.

Ce script lance l'API avec le géocodeur statique (quelques villes connues) pour travailler en local
sans dépendre de Nominatim. Le fournisseur de positions reste celui de la configuration.
"""

import json
import os

# Ensure offline-friendly defaults BEFORE importing app/modules
os.environ.setdefault("GEOCODER_BACKEND", "static")
os.environ.setdefault(
    "GEOCODER_STATIC_PLACES_JSON",
    json.dumps(
        {
            "Paris, France": [48.8566, 2.3522],
            "London, UK": [51.5074, -0.1278],
            "New York, USA": [40.7128, -74.0060],
            "Tokyo, Japan": [35.6762, 139.6503],
        }
    ),
)

import uvicorn

from backend.app.main import create_app
from backend.core.container import Container


def main():
    """
    Point d'entrée principal pour le serveur hors ligne.

    Lance l'application FastAPI sur `APP_HOST`/`APP_PORT` (ou `PORT` s'il est défini).
    """
    container = Container()
    settings = container.settings
    port = int(os.environ.get("PORT", settings.APP_PORT))
    uvicorn.run(create_app(container), host=settings.APP_HOST, port=port, reload=False)


if __name__ == "__main__":
    main()
