from typing import Sequence

import structlog

from portfolio.core.exceptions import BadRequestError, NotFoundError
from portfolio.db.models.base import utcnow
from portfolio.db.models.news import News
from portfolio.db.repositories.news import NewsRepository
from portfolio.features.news.schemas import NewsCreateIn, NewsUpdateIn

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("title", "content", "image_url")


class NewsService:
    def __init__(self, repo: NewsRepository):
        self.repo = repo

    def list(self) -> Sequence[News]:
        return self.repo.list(newest_first=True)

    def get(self, news_id: str) -> News:
        news = self.repo.get(news_id)
        if not news:
            raise NotFoundError("News not found.")
        return news

    def create(self, payload: NewsCreateIn) -> News:
        if not payload.title or not payload.content or not payload.image_url:
            raise BadRequestError("title, content and imageUrl are required.")
        news = self.repo.create(
            title=payload.title,
            content=payload.content,
            image_url=payload.image_url,
            more_url=payload.more_url or None,
        )
        logger.info("News created", news_id=news.id)
        return news

    def update(self, news_id: str, payload: NewsUpdateIn) -> News:
        if not news_id:
            raise BadRequestError("id is required.")
        news = self.get(news_id)

        changes = payload.model_dump(exclude_unset=True, exclude={"id"})
        for field in REQUIRED_FIELDS:
            if field in changes and not changes[field]:
                raise BadRequestError(f"{field} cannot be empty.")
        if not changes:
            return news

        changes["updated_at"] = utcnow()
        updated = self.repo.update(news, **changes)
        logger.info("News updated", news_id=news_id, fields=sorted(changes))
        return updated

    def delete(self, news_id: str) -> None:
        if not news_id:
            raise BadRequestError("id is required.")
        news = self.get(news_id)
        self.repo.delete(news)
        logger.info("News deleted", news_id=news_id)
