"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

logs (structlog), middlewares (X-Request-ID, log des requêtes, CORS)

gestion des erreurs (format unique {"error": ...})

titre, version, tags, schéma OpenAPI personnalisé

Construit les collaborateurs externes (fournisseur d'identité, SMTP) une seule fois
et les expose via app.state.

Inclut les routers (ex : /api/v1/projects).

Initialise la base au démarrage (lifespan).

Point unique d’exécution : uvicorn portfolio.main:app --reload.
"""

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from portfolio.core.config import settings
from portfolio.core.exceptions import register_exception_handlers
from portfolio.core.logging import configure_logging
from portfolio.core.middleware import setup_middleware
from portfolio.core.openapi import custom_openapi
from portfolio.db.session import init_db
from portfolio.features.authentication.identity import build_identity_provider
from portfolio.features.contact.mailer import SmtpMailer

from portfolio.api.v1.routers import (
    authentication,
    comments,
    contact,
    news,
    projects,
    reactions,
    users,
)

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting portfolio API", env=settings.ENV)
    init_db()
    yield
    logger.info("Shutting down portfolio API")


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Inscription, connexion, session"},
        {"name": "users", "description": "Recherche et création d'utilisateurs"},
        {"name": "projects", "description": "Projets du portfolio"},
        {"name": "comments", "description": "Commentaires (et réponses) des projets"},
        {"name": "reactions", "description": "Likes des projets"},
        {"name": "news", "description": "Fil d'actualités"},
        {"name": "contact", "description": "Formulaire de contact"},
    ],
)

# Collaborateurs externes : construits ici, injectés par les dépendances
app.state.identity_provider = build_identity_provider(
    base_url=settings.IDENTITY_PROVIDER_URL,
    anon_key=settings.IDENTITY_PROVIDER_ANON_KEY,
    redirect_url=settings.EMAIL_REDIRECT_URL,
    timeout=settings.IDENTITY_PROVIDER_TIMEOUT,
)
app.state.mailer = SmtpMailer(
    host=settings.SMTP_HOST,
    port=settings.SMTP_PORT,
    username=settings.SMTP_USERNAME,
    password=settings.SMTP_PASSWORD,
    use_tls=settings.SMTP_USE_TLS,
    timeout=settings.SMTP_TIMEOUT,
    sender_name=settings.CONTACT_SENDER_NAME,
)

setup_middleware(app)
register_exception_handlers(app)

# Routers
app.include_router(authentication.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(projects.router, prefix="/api/v1")
app.include_router(comments.router, prefix="/api/v1")
app.include_router(reactions.router, prefix="/api/v1")
app.include_router(news.router, prefix="/api/v1")
app.include_router(contact.router, prefix="/api/v1")


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


# Génération du schéma OpenAPI custom
app.openapi = lambda: custom_openapi(app)

if __name__ == "__main__":
    uvicorn.run("portfolio.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
