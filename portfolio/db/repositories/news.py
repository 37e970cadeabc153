from portfolio.db.repositories.base import BaseRepository
from portfolio.db.models.news import News


class NewsRepository(BaseRepository[News]):
    """CRUD News (le CRUD générique suffit)."""
    model = News
