"""
➡️ But : Encapsuler le fournisseur d'identité externe (API REST type GoTrue / Supabase Auth).

Le fournisseur enregistre les identifiants et envoie l'email de confirmation ;
il renvoie l'identifiant du compte, repris tel quel par la table User.

Le client est construit une seule fois (main.py) et injecté : pas d'objet global.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


class IdentityProviderError(Exception):
    """Refus ou panne du fournisseur d'identité."""


@dataclass(frozen=True)
class IdentityAccount:
    id: str
    email: str
    # le fournisseur a envoyé un email de confirmation
    confirmation_sent: bool = False


class IdentityProvider:
    """Interface minimale attendue par AuthService."""

    def sign_up(self, *, email: str, password: str, pseudo: str) -> IdentityAccount:
        raise NotImplementedError


class LocalIdentityProvider(IdentityProvider):
    """Sans fournisseur configuré : génère seulement l'identifiant (dev / tests)."""

    def sign_up(self, *, email: str, password: str, pseudo: str) -> IdentityAccount:
        account = IdentityAccount(id=str(uuid.uuid4()), email=email)
        logger.info("Local identity created", user_id=account.id)
        return account


class GoTrueIdentityProvider(IdentityProvider):
    """
    Client HTTP du endpoint `POST {base_url}/auth/v1/signup`.
    - `apikey` + `Authorization: Bearer <anon key>` en headers,
    - `redirect_to` (query) : page vers laquelle pointe le lien de confirmation.
    """

    def __init__(
        self,
        *,
        base_url: str,
        anon_key: str,
        redirect_url: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.redirect_url = redirect_url
        self.headers = {
            "apikey": anon_key,
            "Authorization": f"Bearer {anon_key}",
            "Content-Type": "application/json",
        }
        self.client = client or httpx.Client(timeout=timeout)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        for key in ("msg", "error_description", "message", "error"):
            if isinstance(data, dict) and data.get(key):
                return str(data[key])
        return f"HTTP {response.status_code}"

    @staticmethod
    def _extract_user(data: Dict[str, Any]) -> Dict[str, Any]:
        # Selon la config (confirmation email ou non), l'utilisateur est à la racine ou sous "user"
        if isinstance(data.get("user"), dict):
            return data["user"]
        return data

    def sign_up(self, *, email: str, password: str, pseudo: str) -> IdentityAccount:
        params = {"redirect_to": self.redirect_url} if self.redirect_url else None
        payload = {"email": email, "password": password, "data": {"pseudo": pseudo}}
        try:
            response = self.client.post(
                f"{self.base_url}/auth/v1/signup",
                json=payload,
                params=params,
                headers=self.headers,
            )
        except httpx.HTTPError as e:
            logger.warning("Identity provider unreachable", error=str(e))
            raise IdentityProviderError("Identity provider unreachable") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning("Identity provider refused sign-up", status_code=response.status_code, error=message)
            raise IdentityProviderError(message)

        user = self._extract_user(response.json())
        if not user.get("id"):
            raise IdentityProviderError("Identity provider returned no user")
        return IdentityAccount(
            id=str(user["id"]),
            email=str(user.get("email") or email),
            confirmation_sent=bool(user.get("confirmation_sent_at")),
        )


def build_identity_provider(*, base_url: str, anon_key: str, redirect_url: Optional[str], timeout: float) -> IdentityProvider:
    if not base_url:
        return LocalIdentityProvider()
    return GoTrueIdentityProvider(
        base_url=base_url,
        anon_key=anon_key,
        redirect_url=redirect_url,
        timeout=timeout,
    )
