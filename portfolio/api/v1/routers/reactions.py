from typing import List

from fastapi import APIRouter, Depends, status

from portfolio.api.v1.dependencies import get_current_user, get_reaction_service
from portfolio.core.exceptions import BadRequestError
from portfolio.core.schemas import MessageOut
from portfolio.db.models.users import User
from portfolio.features.authentication.services import AuthService
from portfolio.features.reactions.schemas import (
    ReactionAddIn,
    ReactionOut,
    ReactionRemoveIn,
    ReactionToggleOut,
)
from portfolio.features.reactions.services import ReactionService

router = APIRouter(
    prefix="/projects/{project_id}/reactions",
    tags=["reactions"],
    responses={404: {"description": "Not Found"}},
)


@router.get(
    "",
    summary="Lister les réactions d'un projet",
    response_model=List[ReactionOut],
)
def list_reactions(project_id: str, svc: ReactionService = Depends(get_reaction_service)):
    return svc.list(project_id)


@router.post(
    "",
    summary="Ajouter un like",
    response_model=ReactionOut,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Réaction déjà enregistrée"}},
)
def add_reaction(
    project_id: str,
    payload: ReactionAddIn,
    user: User = Depends(get_current_user),
    svc: ReactionService = Depends(get_reaction_service),
):
    user_id = AuthService.resolve_acting_user_id(user, payload.user_id)
    return svc.add(project_id, user_id=user_id)


@router.delete(
    "",
    summary="Retirer son like",
    response_model=MessageOut,
)
def remove_reaction(
    project_id: str,
    payload: ReactionRemoveIn,
    user: User = Depends(get_current_user),
    svc: ReactionService = Depends(get_reaction_service),
):
    user_id = AuthService.resolve_acting_user_id(user, payload.user_id)
    if payload.project_id and payload.project_id != project_id:
        raise BadRequestError("projectId does not match the URL.")
    svc.remove(project_id, user_id=user_id)
    return MessageOut(message="Reaction deleted")


@router.post(
    "/toggle",
    summary="Basculer son like (ajout ou retrait en un appel)",
    response_model=ReactionToggleOut,
)
def toggle_reaction(
    project_id: str,
    user: User = Depends(get_current_user),
    svc: ReactionService = Depends(get_reaction_service),
):
    return svc.toggle(project_id, user_id=user.id)
