from typing import Optional

from pydantic import Field

from portfolio.core.schemas import CamelModel

# ---------- Inputs ----------

class SignUpIn(CamelModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=8, max_length=72)
    pseudo: str = Field(min_length=2, max_length=64)

class SignInIn(CamelModel):
    email: str
    password: str


# ---------- Outputs ----------

class SessionOut(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes
    user_id: str
    role: str


class SignUpOut(CamelModel):
    id: str
    email: str
    pseudo: str
    role: str
    # faux avec le fournisseur local : aucun email envoyé
    confirmation_sent: bool = False
    message: Optional[str] = None
