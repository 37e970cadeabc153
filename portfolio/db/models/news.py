from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class News(BaseModelDB, table=True):
    """Actualités du fil d'info (gérées par les admins)."""

    title: str = Field(index=True)
    content: str
    image_url: str
    more_url: Optional[str] = Field(default=None)
