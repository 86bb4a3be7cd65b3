"""
Проверка и очистка входящего поискового запроса
"""
import re
from typing import Any

from ..errors import InvalidRequest
from ..schemas.search import SearchRequest

MAX_LOCATION_LENGTH = 100
DEFAULT_MAX_QUERY_LENGTH = 500

# Простой denylist, не полноценное экранирование HTML
_UNSAFE_CHARS = re.compile(r"[<>\"'&]")


def sanitize(value: str) -> str:
    """Удаляет символы < > " ' & из строки"""
    return _UNSAFE_CHARS.sub("", value)


def validate_search_request(body: Any, max_query_length: int = DEFAULT_MAX_QUERY_LENGTH) -> SearchRequest:
    """
    Проверяет тело запроса и строит SearchRequest

    Args:
        body: Декодированное JSON тело запроса
        max_query_length: Максимальная длина запроса после trim

    Returns:
        SearchRequest с очищенными query и location

    Raises:
        InvalidRequest: если запрос некорректен
    """
    if not isinstance(body, dict):
        raise InvalidRequest("Invalid request body")

    query = body.get("query")
    if not query or not isinstance(query, str):
        raise InvalidRequest("Query is required and must be a string")

    trimmed_query = query.strip()
    if not trimmed_query:
        raise InvalidRequest("Query cannot be empty")

    if len(trimmed_query) > max_query_length:
        raise InvalidRequest(f"Query is too long (max {max_query_length} characters)")

    sanitized_query = sanitize(trimmed_query)
    if not sanitized_query:
        raise InvalidRequest("Query contains only invalid characters")

    location = body.get("location")
    sanitized_location = None
    if location and isinstance(location, str):
        trimmed_location = location.strip()
        if 0 < len(trimmed_location) <= MAX_LOCATION_LENGTH:
            sanitized_location = sanitize(trimmed_location) or None

    return SearchRequest(query=sanitized_query, location=sanitized_location)
