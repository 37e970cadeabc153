from datetime import datetime
from typing import List, Optional

from portfolio.core.schemas import CamelModel


# ---------- IN ----------
# Champs optionnels : l'absence d'un champ requis est signalée par le service (400)

class CommentCreateIn(CamelModel):
    content: Optional[str] = None
    user_id: Optional[str] = None
    parent_id: Optional[str] = None


class CommentUpdateIn(CamelModel):
    comment_id: Optional[str] = None
    content: Optional[str] = None
    user_id: Optional[str] = None


class CommentDeleteIn(CamelModel):
    comment_id: Optional[str] = None
    user_id: Optional[str] = None


# ---------- OUT ----------

class CommentAuthorOut(CamelModel):
    pseudo: Optional[str] = None


class CommentOut(CamelModel):
    id: str
    content: str
    user_id: str
    project_id: str
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: CommentAuthorOut
    replies: List["CommentOut"] = []


CommentOut.model_rebuild()
