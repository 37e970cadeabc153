from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from sqlmodel import SQLModel, Session, select, func

# Type générique pour le modèle (User, Project, Comment, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, delete, count, list.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    👉 `commit=False` permet au service de regrouper plusieurs écritures
       dans une seule transaction (puis d'appeler `commit()`).
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def list(self, *, newest_first: bool = True) -> Sequence[ModelT]:
        """Retourne tous les enregistrements, triés par date de création."""
        order = self.model.created_at.desc() if newest_first else self.model.created_at.asc()
        return self.session.exec(select(self.model).order_by(order)).all()

    def count(self) -> int:
        """Retourne le nombre total d’enregistrements."""
        return self.session.exec(select(func.count(self.model.id))).one()

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        if not id_:
            return None
        return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def create(self, *, commit: bool = True, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        self._flush_or_commit(entity, commit)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, *, commit: bool = True, **changes) -> ModelT:
        """Applique les changements (champ par champ) à un enregistrement existant."""
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self._flush_or_commit(entity, commit)
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT, *, commit: bool = True) -> None:
        """Supprime un enregistrement."""
        self.session.delete(entity)
        if commit:
            self.session.commit()
        else:
            self.session.flush()

    # ---------- TRANSACTION ----------

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def _flush_or_commit(self, entity: ModelT, commit: bool) -> None:
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            # flush pour obtenir les valeurs par défaut sans commit
            self.session.flush()
