"""
Типизированные ошибки обработки поискового запроса
"""
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Виды ошибок обработки запроса"""
    INVALID_REQUEST = "invalid_request"
    RATE_LIMITED = "rate_limited"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"


STATUS_CODES = {
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.UPSTREAM: 500,
}


RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
CONFIGURATION_MESSAGE = "Service configuration error"
INTERNAL_ERROR_MESSAGE = "Internal server error"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


class SearchAPIError(Exception):
    """
    Базовая ошибка с тегом вида

    message - текст для логов (для INVALID_REQUEST он же уходит клиенту),
    public_message - то, что увидит клиент.
    """
    kind: ErrorKind = ErrorKind.UPSTREAM
    default_public_message: Optional[str] = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @property
    def public_message(self) -> str:
        if self.default_public_message is None:
            return self.message
        return self.default_public_message


class InvalidRequest(SearchAPIError):
    kind = ErrorKind.INVALID_REQUEST
    default_public_message = None


class RateLimited(SearchAPIError):
    kind = ErrorKind.RATE_LIMITED
    default_public_message = RATE_LIMIT_MESSAGE

    def __init__(self, message: str = RATE_LIMIT_MESSAGE):
        super().__init__(message)


class ConfigurationError(SearchAPIError):
    kind = ErrorKind.CONFIGURATION
    default_public_message = CONFIGURATION_MESSAGE


class UpstreamError(SearchAPIError):
    kind = ErrorKind.UPSTREAM
    default_public_message = INTERNAL_ERROR_MESSAGE
