from datetime import datetime
from typing import Optional

from portfolio.core.schemas import CamelModel


# ---------- IN / UPDATE ----------

class ProjectCreateIn(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    more_url: Optional[str] = None
    deployment_url: Optional[str] = None


class ProjectUpdateIn(CamelModel):
    # Seuls les champs présents dans le corps sont écrits
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    more_url: Optional[str] = None
    deployment_url: Optional[str] = None


# ---------- OUT ----------

class ProjectOut(CamelModel):
    id: str
    title: str
    description: str
    image_url: str
    more_url: Optional[str] = None
    deployment_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
