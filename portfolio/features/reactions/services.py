from typing import List

import structlog

from portfolio.core.exceptions import BadRequestError, ConflictError, NotFoundError
from portfolio.db.repositories.projects import ProjectRepository
from portfolio.db.repositories.reactions import ReactionRepository
from portfolio.features.reactions.schemas import (
    ReactionOut,
    ReactionToggleOut,
    ReactionUserOut,
)

logger = structlog.get_logger(__name__)


class ReactionService:
    """
    "Likes" des projets : au plus un par (user, project).
    L'unicité repose sur la contrainte en base, pas sur une vérification préalable,
    donc deux ajouts concurrents ne peuvent pas créer deux lignes.
    """

    def __init__(self, *, reaction_repo: ReactionRepository, project_repo: ProjectRepository):
        self.reactions = reaction_repo
        self.projects = project_repo

    def _ensure_project_exists(self, project_id: str) -> None:
        if not self.projects.get(project_id):
            raise NotFoundError("Project not found.")

    # --------------- Queries ---------------
    def list(self, project_id: str) -> List[ReactionOut]:
        self._ensure_project_exists(project_id)
        return [
            ReactionOut(
                id=reaction.id,
                user_id=reaction.user_id,
                project_id=reaction.project_id,
                created_at=reaction.created_at,
                user=ReactionUserOut(pseudo=pseudo),
            )
            for reaction, pseudo in self.reactions.list_by_project_with_user(project_id)
        ]

    # --------------- Commands ---------------
    def add(self, project_id: str, *, user_id: str) -> ReactionOut:
        if not user_id:
            raise BadRequestError("userId is required.")
        self._ensure_project_exists(project_id)

        reaction = self.reactions.insert_unique(user_id=user_id, project_id=project_id)
        if reaction is None:
            raise ConflictError("Reaction already recorded.")
        logger.info("Reaction added", project_id=project_id, user_id=user_id)
        return ReactionOut.model_validate(reaction)

    def remove(self, project_id: str, *, user_id: str) -> None:
        if not user_id or not project_id:
            raise BadRequestError("userId and projectId are required.")
        reaction = self.reactions.get_by_user_and_project(user_id, project_id)
        if not reaction:
            raise NotFoundError("Reaction not found.")
        self.reactions.delete(reaction)
        logger.info("Reaction removed", project_id=project_id, user_id=user_id)

    def toggle(self, project_id: str, *, user_id: str) -> ReactionToggleOut:
        """
        Ajoute la réaction si absente, la retire sinon, en un seul appel.
        Si un ajout concurrent gagne la course à l'insertion, l'état final est "liked".
        """
        if not user_id:
            raise BadRequestError("userId is required.")
        self._ensure_project_exists(project_id)

        existing = self.reactions.get_by_user_and_project(user_id, project_id)
        if existing:
            self.reactions.delete(existing)
            liked = False
        else:
            self.reactions.insert_unique(user_id=user_id, project_id=project_id)
            liked = True

        count = self.reactions.count_by_project(project_id)
        logger.info("Reaction toggled", project_id=project_id, user_id=user_id, liked=liked)
        return ReactionToggleOut(liked=liked, count=count)
