from typing import List

from fastapi import APIRouter, Depends, Query, status

from portfolio.api.v1.dependencies import get_comment_service, get_current_user
from portfolio.core.schemas import MessageOut
from portfolio.db.models.users import User
from portfolio.features.authentication.services import AuthService
from portfolio.features.comments.schemas import (
    CommentCreateIn,
    CommentDeleteIn,
    CommentOut,
    CommentUpdateIn,
)
from portfolio.features.comments.services import CommentService

router = APIRouter(
    prefix="/projects/{project_id}/comments",
    tags=["comments"],
    responses={404: {"description": "Not Found"}},
)


@router.get(
    "",
    summary="Lister les commentaires d'un projet",
    description=(
        "Plus récents d'abord. Par défaut chaque commentaire porte ses réponses directes ; "
        "avec `threaded=true`, seules les racines sont renvoyées, réponses imbriquées."
    ),
    response_model=List[CommentOut],
)
def list_comments(
    project_id: str,
    threaded: bool = Query(False),
    svc: CommentService = Depends(get_comment_service),
):
    return svc.list(project_id, threaded=threaded)


@router.post(
    "",
    summary="Ajouter un commentaire (ou une réponse via parentId)",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    project_id: str,
    payload: CommentCreateIn,
    user: User = Depends(get_current_user),
    svc: CommentService = Depends(get_comment_service),
):
    payload.user_id = AuthService.resolve_acting_user_id(user, payload.user_id)
    return svc.create(project_id, payload)


@router.put(
    "",
    summary="Modifier un commentaire (auteur uniquement)",
    response_model=CommentOut,
)
def update_comment(
    project_id: str,
    payload: CommentUpdateIn,
    user: User = Depends(get_current_user),
    svc: CommentService = Depends(get_comment_service),
):
    payload.user_id = AuthService.resolve_acting_user_id(user, payload.user_id)
    return svc.update(project_id, payload)


@router.delete(
    "",
    summary="Supprimer un commentaire (auteur ou admin)",
    description="Le rôle admin est lu depuis la session ; un éventuel `isAdmin` du corps est ignoré.",
    response_model=MessageOut,
)
def delete_comment(
    project_id: str,
    payload: CommentDeleteIn,
    user: User = Depends(get_current_user),
    svc: CommentService = Depends(get_comment_service),
):
    payload.user_id = AuthService.resolve_acting_user_id(user, payload.user_id)
    svc.delete(project_id, payload, is_admin=user.is_admin)
    return MessageOut(message="Comment deleted")
