from typing import List, Optional

import structlog

from portfolio.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from portfolio.db.models.comments import Comment
from portfolio.db.models.users import User
from portfolio.db.repositories.comments import CommentRepository
from portfolio.db.repositories.projects import ProjectRepository
from portfolio.db.repositories.users import UserRepository
from portfolio.db.models.base import utcnow
from portfolio.features.comments.schemas import (
    CommentAuthorOut,
    CommentCreateIn,
    CommentDeleteIn,
    CommentOut,
    CommentUpdateIn,
)
from portfolio.features.comments.tree import attach_direct_replies, build_thread, children_first, descendant_ids

logger = structlog.get_logger(__name__)


class CommentService:
    """
    Commentaires d'un projet (toutes les opérations sont scopées par project_id).
    - Lecture publique, plus récents d'abord.
    - Création : tout utilisateur connecté, réponse possible via parent_id (même projet).
    - Modification : l'auteur uniquement (pas de passe-droit admin).
    - Suppression : l'auteur ou un admin ; les réponses partent avec leur parent.
    """

    def __init__(
        self,
        *,
        comment_repo: CommentRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
    ):
        self.comments = comment_repo
        self.projects = project_repo
        self.users = user_repo

    # --------------- Helpers ---------------
    def _ensure_project_exists(self, project_id: str) -> None:
        if not self.projects.get(project_id):
            raise NotFoundError("Project not found.")

    def _get_in_project(self, comment_id: str, project_id: str) -> Comment:
        comment = self.comments.get_in_project(comment_id, project_id)
        if not comment:
            raise NotFoundError("Comment not found.")
        return comment

    @staticmethod
    def _to_out(entity: Comment, pseudo: Optional[str]) -> CommentOut:
        return CommentOut(
            id=entity.id,
            content=entity.content,
            user_id=entity.user_id,
            project_id=entity.project_id,
            parent_id=entity.parent_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            user=CommentAuthorOut(pseudo=pseudo),
        )

    # --------------- Queries ---------------
    def list(self, project_id: str, *, threaded: bool = False) -> List[CommentOut]:
        self._ensure_project_exists(project_id)
        rows = [self._to_out(c, pseudo) for c, pseudo in self.comments.list_by_project_with_author(project_id)]
        if threaded:
            return build_thread(rows)
        return attach_direct_replies(rows)

    # --------------- Commands ---------------
    def create(self, project_id: str, payload: CommentCreateIn) -> CommentOut:
        if not payload.content or not payload.user_id:
            raise BadRequestError("content and userId are required.")
        self._ensure_project_exists(project_id)

        author: Optional[User] = self.users.get(payload.user_id)
        if not author:
            raise NotFoundError("User not found.")

        parent_id = payload.parent_id or None
        if parent_id and not self.comments.get_in_project(parent_id, project_id):
            raise BadRequestError("Parent comment not found in this project.")

        entity = self.comments.create(
            content=payload.content,
            user_id=author.id,
            project_id=project_id,
            parent_id=parent_id,
        )
        logger.info("Comment created", comment_id=entity.id, project_id=project_id, reply=parent_id is not None)
        return self._to_out(entity, author.pseudo)

    def update(self, project_id: str, payload: CommentUpdateIn) -> CommentOut:
        if not payload.comment_id or not payload.content or not payload.user_id:
            raise BadRequestError("commentId, content and userId are required.")

        entity = self._get_in_project(payload.comment_id, project_id)
        if entity.user_id != payload.user_id:
            raise ForbiddenError("You are not allowed to edit this comment.")

        updated = self.comments.update(entity, content=payload.content, updated_at=utcnow())
        logger.info("Comment updated", comment_id=updated.id, project_id=project_id)
        return self._to_out(updated, self.comments.get_author_pseudo(updated))

    def delete(self, project_id: str, payload: CommentDeleteIn, *, is_admin: bool) -> int:
        """Retourne le nombre de commentaires supprimés (le commentaire + ses réponses)."""
        if not payload.comment_id or not payload.user_id:
            raise BadRequestError("commentId and userId are required.")

        entity = self._get_in_project(payload.comment_id, project_id)
        if entity.user_id != payload.user_id and not is_admin:
            raise ForbiddenError("You are not allowed to delete this comment.")

        thread = {c.id: c for c in self.comments.list_by_project(project_id)}
        parent_of = {c.id: c.parent_id for c in thread.values()}
        doomed = descendant_ids(entity.id, parent_of)
        doomed.add(entity.id)
        ordered = [thread[cid] for cid in children_first(parent_of) if cid in doomed]
        deleted = self.comments.delete_many(ordered)
        logger.info("Comment deleted", comment_id=entity.id, project_id=project_id, deleted=deleted, by_admin=is_admin)
        return deleted
