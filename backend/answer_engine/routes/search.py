"""
Роуты поиска с генерацией ответа
"""
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from typing import Any
import logging
from ..config import Settings
from ..dependencies import get_answer_service, get_rate_limiter, get_search_service, get_settings
from ..errors import METHOD_NOT_ALLOWED_MESSAGE, InvalidRequest, RateLimited, SearchAPIError
from ..schemas.search import ErrorResponse, SearchResponse
from ..services.answer_service import AnswerService
from ..services.rate_limiter import RateLimitStore, client_identifier
from ..services.request_validator import validate_search_request
from ..services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise InvalidRequest("Invalid request body")


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)
async def search(
    request: Request,
    settings: Settings = Depends(get_settings),
    rate_limiter: RateLimitStore = Depends(get_rate_limiter),
    search_service: SearchService = Depends(get_search_service),
    answer_service: AnswerService = Depends(get_answer_service)
):
    """
    Поиск в интернете с ответом от LLM

    Проверяет конфигурацию и лимит запросов, валидирует запрос,
    ищет источники через SerpAPI и генерирует по ним ответ.
    """
    try:
        settings.require_api_keys()

        client_id = client_identifier(request.headers)
        if not rate_limiter.check(client_id):
            raise RateLimited()

        body = await _read_body(request)
        search_request = validate_search_request(body, settings.MAX_QUERY_LENGTH)

        sources = await search_service.search(search_request.query, search_request.location)
        logger.info(f"🔍 Найдено {len(sources)} источников для запроса: {search_request.query}")

        answer = await answer_service.generate(search_request.query, sources)

        return SearchResponse(answer=answer, sources=sources)

    except SearchAPIError:
        raise
    except Exception as e:
        logger.exception(f"❌ Непредвиденная ошибка поиска: {e}")
        raise SearchAPIError(str(e)) from e


@router.api_route("/search", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"], include_in_schema=False)
async def search_method_not_allowed():
    """Поддерживается только POST"""
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": METHOD_NOT_ALLOWED_MESSAGE},
        headers={"Allow": "POST"}
    )
