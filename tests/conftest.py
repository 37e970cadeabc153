import os

# Avant tout import de portfolio : settings lus à l'import
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("CONTACT_RECIPIENT", "owner@example.com")

from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from portfolio.api.v1.dependencies import get_identity_provider, get_mailer
from portfolio.core.config import jwt_settings
from portfolio.db.models.projects import Project
from portfolio.db.models.users import ROLE_ADMIN, ROLE_USER, User
from portfolio.db.session import get_session
from portfolio.features.authentication.identity import IdentityAccount, IdentityProvider, IdentityProviderError
from portfolio.features.contact.mailer import MailDeliveryError, Mailer, OutgoingMail
from portfolio.main import app
from portfolio.security.tokens import create_access_token


# -----------------------------
# Doublures des collaborateurs externes
# -----------------------------
class FakeIdentityProvider(IdentityProvider):
    def __init__(self):
        self.accounts: List[IdentityAccount] = []
        self.fail_with: str | None = None

    def sign_up(self, *, email: str, password: str, pseudo: str) -> IdentityAccount:
        if self.fail_with:
            raise IdentityProviderError(self.fail_with)
        account = IdentityAccount(id=f"idp-{len(self.accounts) + 1}", email=email, confirmation_sent=True)
        self.accounts.append(account)
        return account


class FakeMailer(Mailer):
    def __init__(self):
        self.sent: List[OutgoingMail] = []
        self.fail_with: str | None = None

    def send(self, mail: OutgoingMail) -> None:
        if self.fail_with:
            raise MailDeliveryError(self.fail_with)
        self.sent.append(mail)


# -----------------------------
# DB
# -----------------------------
@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # FK appliquées comme sur une vraie base (SQLite les ignore par défaut)
    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(session, identity_provider, mailer):
    def _get_session():
        yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


# -----------------------------
# Données
# -----------------------------
def make_user(session: Session, user_id: str, pseudo: str, *, role: str = ROLE_USER) -> User:
    user = User(
        id=user_id,
        email=f"{pseudo}@example.com",
        pseudo=pseudo,
        hashed_password="not-a-real-hash",
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    token = create_access_token(user_id=user.id, email=user.email, role=user.role, settings=jwt_settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(session) -> User:
    return make_user(session, "u1", "alice")


@pytest.fixture
def bob(session) -> User:
    return make_user(session, "u2", "bob")


@pytest.fixture
def admin(session) -> User:
    return make_user(session, "a1", "root", role=ROLE_ADMIN)


@pytest.fixture
def project(session) -> Project:
    project = Project(title="Portfolio", description="Ce site", image_url="https://x/y.png")
    session.add(project)
    session.commit()
    session.refresh(project)
    return project
