"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_comment_service() : crée un CommentService à partir d’une session DB.

get_current_user() / require_admin() : identité et rôle tirés de la session.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()) et à remplacer en test
(app.dependency_overrides).
"""

from typing import Optional

from fastapi import Cookie, Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from portfolio.core.config import settings, jwt_settings
from portfolio.core.exceptions import ForbiddenError
from portfolio.db.session import get_session
from portfolio.db.models.users import User

from portfolio.db.repositories.users import UserRepository
from portfolio.db.repositories.projects import ProjectRepository
from portfolio.db.repositories.news import NewsRepository
from portfolio.db.repositories.comments import CommentRepository
from portfolio.db.repositories.reactions import ReactionRepository

from portfolio.features.users.services import UserService
from portfolio.features.authentication.identity import IdentityProvider
from portfolio.features.authentication.services import AuthService
from portfolio.features.projects.services import ProjectService
from portfolio.features.news.services import NewsService
from portfolio.features.comments.services import CommentService
from portfolio.features.reactions.services import ReactionService
from portfolio.features.contact.mailer import Mailer
from portfolio.features.contact.services import ContactService


# -----------------------------
# Collaborateurs externes (construits dans main.py, portés par app.state)
# -----------------------------
def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider

def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


# -----------------------------
# Repositories
# -----------------------------
def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)

def get_project_repository(session: Session = Depends(get_session)) -> ProjectRepository:
    return ProjectRepository(session)

def get_news_repository(session: Session = Depends(get_session)) -> NewsRepository:
    return NewsRepository(session)

def get_comment_repository(session: Session = Depends(get_session)) -> CommentRepository:
    return CommentRepository(session)

def get_reaction_repository(session: Session = Depends(get_session)) -> ReactionRepository:
    return ReactionRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_user_service(user_repo: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(user_repo)

def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthService:
    return AuthService(
        user_repo=user_repo,
        identity_provider=identity_provider,
        jwt_settings=jwt_settings,
    )

def get_project_service(
    project_repo: ProjectRepository = Depends(get_project_repository),
    comment_repo: CommentRepository = Depends(get_comment_repository),
    reaction_repo: ReactionRepository = Depends(get_reaction_repository),
) -> ProjectService:
    return ProjectService(project_repo, comment_repo, reaction_repo)

def get_news_service(news_repo: NewsRepository = Depends(get_news_repository)) -> NewsService:
    return NewsService(news_repo)

def get_comment_service(
    comment_repo: CommentRepository = Depends(get_comment_repository),
    project_repo: ProjectRepository = Depends(get_project_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> CommentService:
    return CommentService(comment_repo=comment_repo, project_repo=project_repo, user_repo=user_repo)

def get_reaction_service(
    reaction_repo: ReactionRepository = Depends(get_reaction_repository),
    project_repo: ProjectRepository = Depends(get_project_repository),
) -> ReactionService:
    return ReactionService(reaction_repo=reaction_repo, project_repo=project_repo)

def get_contact_service(mailer: Mailer = Depends(get_mailer)) -> ContactService:
    return ContactService(mailer=mailer, recipient=settings.CONTACT_RECIPIENT)


# -----------------------------
# Authentication data
# -----------------------------
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    session_cookie: Optional[str] = Cookie(default=None, alias=settings.AUTH_COOKIE_NAME),
) -> Optional[str]:
    """Header `Authorization: Bearer` en priorité, sinon le cookie de session."""
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return session_cookie

def get_current_user(
    access_token: Optional[str] = Depends(get_access_token),
    auth_svc: AuthService = Depends(get_auth_service),
) -> User:
    return auth_svc.get_current_user(access_token=access_token)

def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError("Admin role required.")
    return user
