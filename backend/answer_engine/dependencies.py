from fastapi import Depends, Request
from .config import Settings
from .services.answer_service import AnswerService
from .services.rate_limiter import RateLimitStore
from .services.search_service import SearchService


def get_settings(request: Request) -> Settings:
    """Настройки, созданные при старте приложения"""
    return request.app.state.settings


def get_rate_limiter(request: Request) -> RateLimitStore:
    return request.app.state.rate_limiter


def get_search_service(settings: Settings = Depends(get_settings)) -> SearchService:
    return SearchService(settings)


def get_answer_service(settings: Settings = Depends(get_settings)) -> AnswerService:
    return AnswerService(settings)
