"""
➡️ But : Contenir la logique métier des utilisateurs : recherche par email, création.

Lève les exceptions applicatives (portfolio.core.exceptions), traduites en JSON par main.py.
"""

import structlog

from portfolio.core.exceptions import BadRequestError, ConflictError, NotFoundError
from portfolio.db.models.users import ROLE_USER, User
from portfolio.db.repositories.users import UserRepository
from portfolio.features.users.schemas import UserCreate
from portfolio.security.password import hash_password

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def get_by_email(self, email: str) -> User:
        if not email:
            raise BadRequestError("email is required.")
        user = self.repo.get_by_email(email)
        if not user:
            raise NotFoundError("User not found.")
        return user

    def create(self, payload: UserCreate) -> User:
        if not payload.email or not payload.pseudo or not payload.password:
            raise BadRequestError("email, pseudo and password are required.")
        return self.register(
            email=payload.email,
            pseudo=payload.pseudo,
            password=payload.password,
            user_id=payload.id,
        )

    def ensure_available(self, *, email: str, pseudo: str) -> None:
        if self.repo.get_by_email_or_pseudo(email, pseudo):
            raise ConflictError("Email or pseudo already in use.")

    def register(self, *, email: str, pseudo: str, password: str, user_id: str | None = None, role: str = ROLE_USER) -> User:
        """Crée l'enregistrement local (mot de passe haché). L'unicité email/pseudo est vérifiée."""
        self.ensure_available(email=email, pseudo=pseudo)
        fields = {
            "email": email,
            "pseudo": pseudo,
            "hashed_password": hash_password(password),
            "role": role,
        }
        if user_id:
            if self.repo.get(user_id):
                raise ConflictError("User id already in use.")
            fields["id"] = user_id
        user = self.repo.create(**fields)
        logger.info("User created", user_id=user.id, role=user.role)
        return user
