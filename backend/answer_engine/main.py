from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging
from .config import Settings, load_settings
from .errors import ErrorKind, SearchAPIError
from .routes import search
from .services.rate_limiter import InMemoryRateLimiter
from .utils.security_headers import add_security_headers

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def configure_logging(level: str) -> None:
    """Настройка логирования"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logging.getLogger("answer_engine").setLevel(level)
    logging.getLogger("uvicorn").setLevel(level)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Создает приложение FastAPI

    Настройки создаются один раз и хранятся в app.state вместе
    с хранилищем лимитов запросов.
    """
    if settings is None:
        settings = load_settings()

    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Answer Engine API",
        description="Поиск в интернете с ответами от LLM и ссылками на источники",
        version=VERSION
    )

    app.state.settings = settings
    app.state.rate_limiter = InMemoryRateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS
    )

    missing = settings.missing_api_keys()
    if missing:
        logger.warning(f"⚠️ Не заданы ключи API: {', '.join(missing)}. Поиск будет недоступен.")

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers_middleware(request: Request, call_next):
        response = await call_next(request)
        return add_security_headers(response)

    @app.exception_handler(SearchAPIError)
    async def search_api_error_handler(request: Request, exc: SearchAPIError):
        if exc.kind == ErrorKind.INVALID_REQUEST:
            logger.info(f"Некорректный запрос: {exc.message}")
        elif exc.kind != ErrorKind.RATE_LIMITED:
            logger.error(f"❌ Ошибка Search API ({exc.kind.value}): {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.public_message}
        )

    # Подключение роутов
    app.include_router(search.router)

    @app.get("/")
    async def root():
        """Корневой endpoint"""
        return {"message": "Answer Engine API", "version": VERSION}

    @app.get("/health")
    async def health_check():
        """Проверка здоровья сервера"""
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "answer_engine.main:app",
        host=app.state.settings.HOST,
        port=app.state.settings.PORT,
        reload=True
    )
