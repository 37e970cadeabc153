from typing import Optional

import structlog
from jose import JWTError

from portfolio.core.exceptions import BadRequestError, ForbiddenError, UnauthorizedError
from portfolio.db.models.users import User
from portfolio.db.repositories.users import UserRepository
from portfolio.features.authentication.identity import IdentityProvider, IdentityProviderError
from portfolio.features.authentication.schemas import SessionOut, SignInIn, SignUpIn, SignUpOut
from portfolio.features.users.services import UserService
from portfolio.security.password import verify_password
from portfolio.security.tokens import JWTSettings, create_access_token, decode_token

logger = structlog.get_logger(__name__)


class AuthService:
    """
    Service d'authentification : fournisseur d'identité + miroir local + JWT de session.
    Le rôle n'est jamais lu depuis le corps d'une requête : il vient de l'utilisateur
    de la session, relu en base.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        identity_provider: IdentityProvider,
        jwt_settings: JWTSettings,
    ):
        self.user_repo = user_repo
        self.users = UserService(user_repo)
        self.identity = identity_provider
        self.jwt = jwt_settings

    # ---------- Sign up ----------
    def sign_up(self, payload: SignUpIn) -> SignUpOut:
        # Vérifie localement avant de solliciter le fournisseur
        self.users.ensure_available(email=payload.email, pseudo=payload.pseudo)

        try:
            account = self.identity.sign_up(
                email=payload.email,
                password=payload.password,
                pseudo=payload.pseudo,
            )
        except IdentityProviderError as e:
            raise BadRequestError(str(e) or "Sign-up failed.")

        user = self.users.register(
            email=account.email,
            pseudo=payload.pseudo,
            password=payload.password,
            user_id=account.id,
        )
        return SignUpOut(
            id=user.id,
            email=user.email,
            pseudo=user.pseudo,
            role=user.role,
            confirmation_sent=account.confirmation_sent,
            message="A confirmation email has been sent." if account.confirmation_sent else "Account created.",
        )

    # ---------- Sign in ----------
    def sign_in(self, payload: SignInIn) -> SessionOut:
        user = self.user_repo.get_by_email(payload.email)
        if not user or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            logger.info("Sign-in refused")
            raise UnauthorizedError("Invalid credentials")

        return self.open_session(user)

    def open_session(self, user: User) -> SessionOut:
        token = create_access_token(user_id=user.id, email=user.email, role=user.role, settings=self.jwt)
        logger.info("Session opened", user_id=user.id, role=user.role)
        return SessionOut(
            access_token=token,
            expires_in=int(self.jwt.access_ttl.total_seconds()),
            user_id=user.id,
            role=user.role,
        )

    # ---------- Current user ----------
    def get_current_user(self, *, access_token: Optional[str]) -> User:
        if not access_token:
            raise UnauthorizedError("Not authenticated")
        try:
            decoded = decode_token(access_token, self.jwt)
        except JWTError:
            raise UnauthorizedError("Invalid token")

        if decoded.get("typ") != "access" or not decoded.get("sub"):
            raise UnauthorizedError("Invalid token type")

        user = self.user_repo.get(decoded["sub"])
        if not user:
            raise UnauthorizedError("User not found")
        return user

    @staticmethod
    def resolve_acting_user_id(user: User, claimed_user_id: Optional[str]) -> str:
        """
        L'identité qui agit est celle de la session. Un `userId` envoyé dans le corps
        est toléré s'il désigne la même personne, refusé sinon.
        """
        if claimed_user_id and claimed_user_id != user.id:
            raise ForbiddenError("userId does not match the authenticated user.")
        return user.id
