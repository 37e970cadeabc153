from datetime import datetime
from typing import Optional

from portfolio.core.schemas import CamelModel


class ReactionAddIn(CamelModel):
    user_id: Optional[str] = None


class ReactionRemoveIn(CamelModel):
    user_id: Optional[str] = None
    project_id: Optional[str] = None


class ReactionUserOut(CamelModel):
    pseudo: Optional[str] = None


class ReactionOut(CamelModel):
    id: str
    user_id: str
    project_id: str
    created_at: Optional[datetime] = None
    user: Optional[ReactionUserOut] = None


class ReactionToggleOut(CamelModel):
    liked: bool
    count: int
