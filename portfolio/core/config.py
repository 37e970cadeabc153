"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, secrets, SMTP, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from portfolio.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from datetime import timedelta
from typing import List, Optional

from pydantic_settings import BaseSettings
from portfolio.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Portfolio-Back"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "portfolio.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # JWT / Session
    # -----------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    JWT_ISSUER: str = "portfolio-api"
    JWT_ALGORITHM: str = "HS256"

    ACCESS_TTL_MINUTES: int = 60 * 24 * 7  # session d'une semaine

    # Cookie de session (porte le JWT)
    AUTH_COOKIE_NAME: str = "session_token"
    AUTH_COOKIE_SAMESITE: str = "lax"     # "lax" | "strict" | "none"
    AUTH_COOKIE_PATH: str = "/"
    AUTH_COOKIE_SECURE: Optional[bool] = None   # auto selon ENV si None
    AUTH_COOKIE_MAX_AGE: Optional[int] = None   # auto depuis ACCESS_TTL si None

    # -----------------------------
    # Fournisseur d'identité (API REST type GoTrue / Supabase)
    # -----------------------------
    # Vide => fournisseur local (génère seulement les identifiants)
    IDENTITY_PROVIDER_URL: str = ""
    IDENTITY_PROVIDER_ANON_KEY: str = ""
    IDENTITY_PROVIDER_TIMEOUT: float = 10.0
    EMAIL_REDIRECT_URL: Optional[str] = None

    # -----------------------------
    # SMTP (formulaire de contact)
    # -----------------------------
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: float = 10.0
    CONTACT_RECIPIENT: str = "contact@example.com"
    CONTACT_SENDER_NAME: str = "Portfolio"

    # -----------------------------
    # Seed
    # -----------------------------
    SEED_ADMIN_EMAIL: Optional[str] = None
    SEED_ADMIN_PSEUDO: Optional[str] = None
    SEED_ADMIN_PASSWORD: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Cookie secure auto: true en prod si non spécifié
        if self.AUTH_COOKIE_SECURE is None:
            object.__setattr__(self, "AUTH_COOKIE_SECURE", self.ENV == "prod")

        # max_age auto depuis ACCESS_TTL
        if self.AUTH_COOKIE_MAX_AGE is None:
            object.__setattr__(self, "AUTH_COOKIE_MAX_AGE", self.ACCESS_TTL_MINUTES * 60)


# Instance globale importable partout
settings = Settings()

# Objet JWT prêt à l'emploi pour les services
jwt_settings = JWTSettings(
    secret=settings.JWT_SECRET_KEY,
    issuer=settings.JWT_ISSUER,
    algorithm=settings.JWT_ALGORITHM,
    access_ttl=timedelta(minutes=settings.ACCESS_TTL_MINUTES),
)
