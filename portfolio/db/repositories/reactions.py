from typing import Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func

from portfolio.db.repositories.base import BaseRepository
from portfolio.db.models.reactions import Reaction
from portfolio.db.models.users import User


class ReactionRepository(BaseRepository[Reaction]):
    model = Reaction

    def get_by_user_and_project(self, user_id: str, project_id: str) -> Optional[Reaction]:
        stmt = select(Reaction).where(
            Reaction.user_id == user_id,
            Reaction.project_id == project_id,
        )
        return self.session.exec(stmt).first()

    def list_by_project_with_user(self, project_id: str) -> Sequence[Tuple[Reaction, Optional[str]]]:
        stmt = (
            select(Reaction, User.pseudo.label("pseudo"))
            .join(User, User.id == Reaction.user_id, isouter=True)
            .where(Reaction.project_id == project_id)
            .order_by(Reaction.created_at.asc())
        )
        return self.session.exec(stmt).all()

    def count_by_project(self, project_id: str) -> int:
        stmt = select(func.count(Reaction.id)).where(Reaction.project_id == project_id)
        return int(self.session.exec(stmt).one())

    def insert_unique(self, *, user_id: str, project_id: str) -> Optional[Reaction]:
        """
        Insère la réaction en s'appuyant sur la contrainte unique (user_id, project_id).
        Retourne None si elle existe déjà (la transaction est annulée).
        Toute autre violation d'intégrité (FK user/project) est propagée.
        """
        try:
            return self.create(user_id=user_id, project_id=project_id)
        except IntegrityError:
            self.session.rollback()
            if self.get_by_user_and_project(user_id, project_id) is None:
                raise
            return None

    def delete_by_project(self, project_id: str, *, commit: bool = True) -> int:
        reactions = self.session.exec(select(Reaction).where(Reaction.project_id == project_id)).all()
        for reaction in reactions:
            self.session.delete(reaction)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return len(reactions)
