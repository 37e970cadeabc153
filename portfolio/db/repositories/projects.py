from portfolio.db.repositories.base import BaseRepository
from portfolio.db.models.projects import Project


class ProjectRepository(BaseRepository[Project]):
    """CRUD Projects (le CRUD générique suffit)."""
    model = Project
