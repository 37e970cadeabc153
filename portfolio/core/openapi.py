"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec les conventions
de l'API portfolio (format des erreurs, authentification, casse des champs).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API du portfolio : projets, commentaires, réactions, actualités, contact.\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Les champs JSON sont en camelCase (`imageUrl`, `userId`...).\n"
            "- Les erreurs sont renvoyées sous la forme `{\"error\": \"...\"}`.\n"
            "- Authentification : cookie de session ou header `Authorization: Bearer <token>`.\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
