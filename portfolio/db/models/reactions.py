from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from .base import BaseModelDB


class Reaction(BaseModelDB, table=True):
    """Un "like" : au plus un par (user, project), garanti par la contrainte."""
    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="uq_reaction_user_project"),
    )

    user_id: str = Field(foreign_key="user.id", index=True, nullable=False)
    project_id: str = Field(foreign_key="project.id", index=True, nullable=False)
