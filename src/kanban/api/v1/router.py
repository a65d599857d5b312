from fastapi import APIRouter

from src.kanban.api.v1 import card_content, cards, columns, labels, projects, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(columns.router)
api_router.include_router(cards.router)
api_router.include_router(labels.router)
api_router.include_router(card_content.router)
