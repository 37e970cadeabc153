from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from portfolio.api.v1.dependencies import get_user_service
from portfolio.features.users.schemas import UserCreate, UserOut
from portfolio.features.users.services import UserService

router = APIRouter(
    prefix="/user",
    tags=["users"],
    responses={404: {"description": "Not Found"}},
)

@router.get(
    "",
    summary="Récupérer un utilisateur par email",
    response_model=UserOut,
)
def get_user_by_email(
    email: Optional[str] = Query(None, examples=["jane@example.com"]),
    svc: UserService = Depends(get_user_service),
):
    return svc.get_by_email(email)

@router.post(
    "",
    summary="Créer un utilisateur",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={409: {"description": "Email ou pseudo déjà utilisé"}},
)
def create_user(payload: UserCreate, svc: UserService = Depends(get_user_service)):
    return svc.create(payload)
