from typing import Sequence

import structlog

from portfolio.core.exceptions import BadRequestError, NotFoundError
from portfolio.db.models.base import utcnow
from portfolio.db.models.projects import Project
from portfolio.db.repositories.comments import CommentRepository
from portfolio.db.repositories.projects import ProjectRepository
from portfolio.db.repositories.reactions import ReactionRepository
from portfolio.features.comments.tree import children_first
from portfolio.features.projects.schemas import ProjectCreateIn, ProjectUpdateIn

logger = structlog.get_logger(__name__)

# Champs obligatoires : ne peuvent être ni absents à la création, ni vidés à la mise à jour
REQUIRED_FIELDS = ("title", "description", "image_url")


class ProjectService:
    """
    CRUD des projets. Le contrôle "admin uniquement" des écritures est fait par la route
    (dépendance require_admin) ; ici : validations + cascade à la suppression.
    """

    def __init__(
        self,
        repo: ProjectRepository,
        comment_repo: CommentRepository,
        reaction_repo: ReactionRepository,
    ):
        self.repo = repo
        self.comment_repo = comment_repo
        self.reaction_repo = reaction_repo

    # -------- Reads --------

    def list(self) -> Sequence[Project]:
        return self.repo.list(newest_first=True)

    def get(self, project_id: str) -> Project:
        project = self.repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.")
        return project

    # -------- Writes --------

    def create(self, payload: ProjectCreateIn) -> Project:
        if not payload.title or not payload.description or not payload.image_url:
            raise BadRequestError("title, description and imageUrl are required.")

        project = self.repo.create(
            title=payload.title,
            description=payload.description,
            image_url=payload.image_url,
            more_url=payload.more_url or None,
            deployment_url=payload.deployment_url or None,
        )
        logger.info("Project created", project_id=project.id)
        return project

    def update(self, project_id: str, payload: ProjectUpdateIn) -> Project:
        project = self.get(project_id)

        changes = payload.model_dump(exclude_unset=True)
        for field in REQUIRED_FIELDS:
            if field in changes and not changes[field]:
                raise BadRequestError(f"{field} cannot be empty.")
        if not changes:
            return project

        changes["updated_at"] = utcnow()
        updated = self.repo.update(project, **changes)
        logger.info("Project updated", project_id=project_id, fields=sorted(changes))
        return updated

    def delete(self, project_id: str) -> None:
        project = self.get(project_id)
        # Une seule transaction : commentaires, réactions puis le projet
        thread = {c.id: c for c in self.comment_repo.list_by_project(project_id)}
        parent_of = {c.id: c.parent_id for c in thread.values()}
        comments = self.comment_repo.delete_many([thread[cid] for cid in children_first(parent_of)], commit=False)
        reactions = self.reaction_repo.delete_by_project(project_id, commit=False)
        self.repo.delete(project)
        logger.info("Project deleted", project_id=project_id, comments=comments, reactions=reactions)
