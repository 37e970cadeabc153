from typing import Optional

from pydantic import Field

from portfolio.core.schemas import CamelModel


class ContactIn(CamelModel):
    # "from" est un mot réservé en Python
    sender: Optional[str] = Field(None, alias="from")
    subject: Optional[str] = None
    message: Optional[str] = None
