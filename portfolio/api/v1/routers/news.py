from typing import List

from fastapi import APIRouter, Depends, status

from portfolio.api.v1.dependencies import get_news_service, require_admin
from portfolio.core.schemas import MessageOut
from portfolio.db.models.users import User
from portfolio.features.news.schemas import (
    NewsBodyDeleteIn,
    NewsBodyUpdateIn,
    NewsCreateIn,
    NewsOut,
    NewsUpdateIn,
)
from portfolio.features.news.services import NewsService

router = APIRouter(
    prefix="/news",
    tags=["news"],
    responses={404: {"description": "Not Found"}},
)


@router.get("", summary="Lister les actualités", response_model=List[NewsOut])
def list_news(svc: NewsService = Depends(get_news_service)):
    return svc.list()


@router.post(
    "",
    summary="Publier une actualité (admin)",
    status_code=status.HTTP_201_CREATED,
    response_model=NewsOut,
)
def create_news(
    payload: NewsCreateIn,
    _: User = Depends(require_admin),
    svc: NewsService = Depends(get_news_service),
):
    return svc.create(payload)


@router.put("", summary="Modifier une actualité, id dans le corps (admin)", response_model=NewsOut)
def update_news_by_body(
    payload: NewsBodyUpdateIn,
    _: User = Depends(require_admin),
    svc: NewsService = Depends(get_news_service),
):
    return svc.update(payload.id, payload)


@router.delete("", summary="Supprimer une actualité, id dans le corps (admin)", response_model=MessageOut)
def delete_news_by_body(
    payload: NewsBodyDeleteIn,
    _: User = Depends(require_admin),
    svc: NewsService = Depends(get_news_service),
):
    svc.delete(payload.id)
    return MessageOut(message="News deleted")


@router.get("/{news_id}", summary="Récupérer une actualité", response_model=NewsOut)
def get_news(news_id: str, svc: NewsService = Depends(get_news_service)):
    return svc.get(news_id)


@router.put("/{news_id}", summary="Modifier une actualité (admin)", response_model=NewsOut)
def update_news(
    news_id: str,
    payload: NewsUpdateIn,
    _: User = Depends(require_admin),
    svc: NewsService = Depends(get_news_service),
):
    return svc.update(news_id, payload)


@router.delete("/{news_id}", summary="Supprimer une actualité (admin)", response_model=MessageOut)
def delete_news(
    news_id: str,
    _: User = Depends(require_admin),
    svc: NewsService = Depends(get_news_service),
):
    svc.delete(news_id)
    return MessageOut(message="News deleted")
