from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Comment(BaseModelDB, table=True):
    """
    Commentaire d'un projet. Les réponses référencent leur parent (parent_id),
    l'arbre est reconstruit à la lecture.
    """
    __tablename__ = "message"

    content: str
    user_id: str = Field(foreign_key="user.id", index=True, nullable=False)
    project_id: str = Field(foreign_key="project.id", index=True, nullable=False)
    parent_id: Optional[str] = Field(default=None, foreign_key="message.id", index=True)
