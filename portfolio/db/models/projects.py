from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Project(BaseModelDB, table=True):
    """Projets présentés sur le portfolio (gérés par les admins)."""

    title: str = Field(index=True)
    description: str
    image_url: str
    more_url: Optional[str] = Field(default=None, description="Lien externe (ex: dépôt)")
    deployment_url: Optional[str] = Field(default=None, description="Lien de la version déployée")
