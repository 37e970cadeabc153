"""
➡️ But : Encapsuler toutes les opérations de base de données.

UserRepository : CRUD (create, read, update, delete) sur la table User.

Ne contient aucune logique métier, juste de la persistance.

🔹 Avantages :

Réutilisable (les services n’ont pas à savoir comment la DB fonctionne).

Testable indépendamment (mock du repo sans base réelle).
"""

from __future__ import annotations

from typing import Optional
from sqlmodel import select, or_

from portfolio.db.repositories.base import BaseRepository
from portfolio.db.models.users import User

class UserRepository(BaseRepository[User]):
    """
    Repository pour la table User.
    Hérite du CRUD générique de BaseRepository.
    Contient uniquement les requêtes spécifiques à User.
    """
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        """Retourne un utilisateur par son email."""
        return self.session.exec(
            select(self.model).where(self.model.email == email)
        ).first()

    def get_by_email_or_pseudo(self, email: str, pseudo: str) -> Optional[User]:
        """Premier utilisateur ayant cet email OU ce pseudo (contrôle d'unicité)."""
        return self.session.exec(
            select(self.model).where(or_(self.model.email == email, self.model.pseudo == pseudo))
        ).first()
