"""
➡️ But : Définir les endpoints de l’API.

Réceptionne les requêtes HTTP, appelle le service correspondant,
retourne les schémas de sortie (response_model).

Les routes ne contiennent ni SQL ni logique métier.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from portfolio.api.v1.dependencies import get_project_service, require_admin
from portfolio.core.schemas import MessageOut
from portfolio.db.models.users import User
from portfolio.features.projects.schemas import ProjectCreateIn, ProjectOut, ProjectUpdateIn
from portfolio.features.projects.services import ProjectService

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
    responses={404: {"description": "Not Found"}},
)


@router.get(
    "",
    summary="Lister les projets",
    response_model=List[ProjectOut],
)
def list_projects(svc: ProjectService = Depends(get_project_service)):
    return svc.list()


@router.post(
    "",
    summary="Créer un projet (admin)",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectOut,
    responses={400: {"description": "Champs requis manquants"}, 403: {"description": "Admin requis"}},
)
def create_project(
    payload: ProjectCreateIn,
    _: User = Depends(require_admin),
    svc: ProjectService = Depends(get_project_service),
):
    return svc.create(payload)


@router.get(
    "/{project_id}",
    summary="Récupérer un projet",
    response_model=ProjectOut,
)
def get_project(project_id: str, svc: ProjectService = Depends(get_project_service)):
    return svc.get(project_id)


@router.put(
    "/{project_id}",
    summary="Mettre à jour un projet (admin)",
    description="Seuls les champs présents dans le corps sont modifiés.",
    response_model=ProjectOut,
)
def update_project(
    project_id: str,
    payload: ProjectUpdateIn,
    _: User = Depends(require_admin),
    svc: ProjectService = Depends(get_project_service),
):
    return svc.update(project_id, payload)


@router.delete(
    "/{project_id}",
    summary="Supprimer un projet (admin)",
    description="Supprime aussi ses commentaires et réactions.",
    response_model=MessageOut,
)
def delete_project(
    project_id: str,
    _: User = Depends(require_admin),
    svc: ProjectService = Depends(get_project_service),
):
    svc.delete(project_id)
    return MessageOut(message="Project deleted")
