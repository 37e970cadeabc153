from datetime import datetime
from typing import Optional

from portfolio.core.schemas import CamelModel


class NewsCreateIn(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    more_url: Optional[str] = None


class NewsUpdateIn(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    more_url: Optional[str] = None


class NewsBodyUpdateIn(NewsUpdateIn):
    """PUT /news : l'identifiant voyage dans le corps."""
    id: Optional[str] = None


class NewsBodyDeleteIn(CamelModel):
    id: Optional[str] = None


class NewsOut(CamelModel):
    id: str
    title: str
    content: str
    image_url: str
    more_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
