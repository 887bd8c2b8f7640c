"""Constantes HTTP pour éviter les valeurs magiques dans le code.

Ce module définit les codes de statut HTTP utilisés par l'API et les tests pour améliorer la
lisibilité et éviter les valeurs magiques.
"""

# Codes de statut HTTP courants
HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
HTTP_UNPROCESSABLE_ENTITY = 422
HTTP_INTERNAL_SERVER_ERROR = 500
HTTP_BAD_GATEWAY = 502

# Cache navigateur: la géométrie d'un thème natal ne change jamais pour une naissance donnée
NATAL_CHART_CACHE_CONTROL = "private, max-age=31536000, immutable"
