from typing import Iterable, Optional, Sequence, Tuple

from sqlmodel import select

from portfolio.db.repositories.base import BaseRepository
from portfolio.db.models.comments import Comment
from portfolio.db.models.users import User


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def get_in_project(self, comment_id: str, project_id: str) -> Optional[Comment]:
        if not comment_id:
            return None
        stmt = select(Comment).where(Comment.id == comment_id, Comment.project_id == project_id)
        return self.session.exec(stmt).first()

    def list_by_project(self, project_id: str) -> Sequence[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.project_id == project_id)
            .order_by(Comment.created_at.desc())
        )
        return self.session.exec(stmt).all()

    def list_by_project_with_author(self, project_id: str) -> Sequence[Tuple[Comment, Optional[str]]]:
        """Tous les commentaires d'un projet (racines + réponses), plus récents d'abord, avec le pseudo de l'auteur."""
        stmt = (
            select(Comment, User.pseudo.label("pseudo"))
            .join(User, User.id == Comment.user_id, isouter=True)
            .where(Comment.project_id == project_id)
            .order_by(Comment.created_at.desc())
        )
        return self.session.exec(stmt).all()

    def get_author_pseudo(self, comment: Comment) -> Optional[str]:
        return self.session.exec(select(User.pseudo).where(User.id == comment.user_id)).first()

    def delete_many(self, comments: Iterable[Comment], *, commit: bool = True) -> int:
        count = 0
        for comment in comments:
            self.session.delete(comment)
            # flush unitaire : l'appelant fournit les enfants avant leur parent (FK message.parent_id)
            self.session.flush()
            count += 1
        if commit:
            self.session.commit()
        return count
