from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List

from .errors import ConfigurationError


class Settings(BaseSettings):
    # SerpAPI (поиск Google)
    SERPAPI_API_KEY: str = ""
    SERPAPI_URL: str = "https://serpapi.com/search.json"
    MAX_SEARCH_RESULTS: int = 8
    MAX_QUERY_LENGTH: int = 500
    SEARCH_TIMEOUT_MS: int = 10 * 1000

    # OpenAI (генерация ответа)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    AI_MODEL: str = "gpt-3.5-turbo"
    AI_MAX_TOKENS: int = 1000
    AI_TEMPERATURE: float = 0.7

    # Rate limiting
    RATE_LIMIT_WINDOW_MS: int = 60 * 1000  # 1 минута
    RATE_LIMIT_MAX_REQUESTS: int = 10

    # Server
    PORT: int = 5000
    HOST: str = "0.0.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @field_validator("AI_TEMPERATURE")
    @classmethod
    def check_temperature(cls, value: float) -> float:
        if value < 0 or value > 1:
            raise ValueError("AI_TEMPERATURE must be between 0.0 and 1.0")
        return value

    @field_validator("AI_MAX_TOKENS", "RATE_LIMIT_WINDOW_MS", "RATE_LIMIT_MAX_REQUESTS", "SEARCH_TIMEOUT_MS")
    @classmethod
    def check_positive(cls, value: int, info) -> int:
        if value <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return value

    @field_validator("MAX_SEARCH_RESULTS")
    @classmethod
    def check_max_results(cls, value: int) -> int:
        if value <= 0 or value > 20:
            raise ValueError("MAX_SEARCH_RESULTS must be between 1 and 20")
        return value

    @field_validator("MAX_QUERY_LENGTH")
    @classmethod
    def check_query_length(cls, value: int) -> int:
        if value <= 0 or value > 1000:
            raise ValueError("MAX_QUERY_LENGTH must be between 1 and 1000")
        return value

    @property
    def cors_origins_list(self) -> List[str]:
        """Преобразует строку CORS_ORIGINS в список"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def rate_limit_window_seconds(self) -> float:
        return self.RATE_LIMIT_WINDOW_MS / 1000

    @property
    def search_timeout_seconds(self) -> float:
        return self.SEARCH_TIMEOUT_MS / 1000

    def missing_api_keys(self) -> List[str]:
        """Возвращает имена обязательных ключей, которые не заданы"""
        required = {
            "SERPAPI_API_KEY": self.SERPAPI_API_KEY,
            "OPENAI_API_KEY": self.OPENAI_API_KEY,
        }
        return [name for name, value in required.items() if not value]

    def require_api_keys(self) -> None:
        """Проверяет наличие ключей API, иначе ConfigurationError"""
        missing = self.missing_api_keys()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


def load_settings(**overrides) -> Settings:
    """
    Создает настройки один раз при старте процесса

    Значения берутся из окружения и .env, overrides имеют приоритет.
    Некорректные числовые значения приводят к ValidationError сразу.
    """
    return Settings(**overrides)
