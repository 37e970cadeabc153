"""
➡️ But : Remplir une base vide à partir d'un fichier YAML (users, projects, news).

Idempotent : un enregistrement déjà présent (même email / même titre) n'est pas réinséré.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
import yaml
from sqlmodel import Session, select

from portfolio.db.models.news import News
from portfolio.db.models.projects import Project
from portfolio.db.models.users import ROLE_ADMIN, ROLE_USER, User
from portfolio.security.password import hash_password

logger = structlog.get_logger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("The seed YAML must contain a root mapping.")
    return data


# ------------------------------------------------------------
# Seed Users
# ------------------------------------------------------------
def seed_users(session: Session, data: Dict[str, Any], admin: Optional[Dict[str, str]] = None) -> int:
    users: List[Dict[str, Any]] = list(data.get("users", []))
    if admin and admin.get("email") and admin.get("password"):
        users.append({**admin, "role": ROLE_ADMIN})

    inserted = 0
    for u in users:
        exists = session.exec(
            select(User).where((User.email == u["email"]) | (User.pseudo == u["pseudo"]))
        ).first()
        if exists:
            continue
        session.add(
            User(
                email=u["email"],
                pseudo=u["pseudo"],
                hashed_password=hash_password(u["password"]),
                role=u.get("role", ROLE_USER),
            )
        )
        inserted += 1
    session.commit()
    logger.info("Users seeded", inserted=inserted, skipped=len(users) - inserted)
    return inserted


# ------------------------------------------------------------
# Seed Projects
# ------------------------------------------------------------
def seed_projects(session: Session, data: Dict[str, Any]) -> int:
    inserted = 0
    for p in data.get("projects", []):
        if session.exec(select(Project).where(Project.title == p["title"])).first():
            continue
        session.add(
            Project(
                title=p["title"],
                description=p["description"],
                image_url=p["image_url"],
                more_url=p.get("more_url"),
                deployment_url=p.get("deployment_url"),
            )
        )
        inserted += 1
    session.commit()
    logger.info("Projects seeded", inserted=inserted)
    return inserted


# ------------------------------------------------------------
# Seed News
# ------------------------------------------------------------
def seed_news(session: Session, data: Dict[str, Any]) -> int:
    inserted = 0
    for n in data.get("news", []):
        if session.exec(select(News).where(News.title == n["title"])).first():
            continue
        session.add(
            News(
                title=n["title"],
                content=n["content"],
                image_url=n["image_url"],
                more_url=n.get("more_url"),
            )
        )
        inserted += 1
    session.commit()
    logger.info("News seeded", inserted=inserted)
    return inserted


def seed_all(session: Session, seed_path: str | Path, admin: Optional[Dict[str, str]] = None) -> Dict[str, int]:
    data = load_seed_yaml(seed_path)
    return {
        "users": seed_users(session, data, admin=admin),
        "projects": seed_projects(session, data),
        "news": seed_news(session, data),
    }
