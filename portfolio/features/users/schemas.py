"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

UserCreate → corps de requête POST /user

UserOut → réponse de l’API

Empêche d’exposer par erreur des infos sensibles (ex: hash de mot de passe).
"""

from datetime import datetime
from typing import Optional

from portfolio.core.schemas import CamelModel


class UserCreate(CamelModel):
    # id fourni par le fournisseur d'identité (optionnel)
    id: Optional[str] = None
    email: Optional[str] = None
    pseudo: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    id: str
    email: str
    pseudo: str
    role: str
    created_at: Optional[datetime] = None
