"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les objets persistés. Ici on représente la table des utilisateurs,
miroir local des comptes créés chez le fournisseur d'identité.
"""

from sqlmodel import Field

from .base import BaseModelDB

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(BaseModelDB, table=True):
    email: str = Field(index=True, unique=True)
    pseudo: str = Field(index=True, unique=True)
    hashed_password: str
    role: str = Field(default=ROLE_USER)  # "user" | "admin"

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
