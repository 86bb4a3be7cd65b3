"""
Сервис для работы с SerpAPI (поиск Google)
"""
from typing import Dict, List, Optional
from urllib.parse import urlparse
import httpx
import logging
from ..config import Settings
from ..errors import UpstreamError
from ..schemas.search import SearchSource

logger = logging.getLogger(__name__)

FAVICON_SERVICE_URL = "https://www.google.com/s2/favicons?domain={hostname}&sz=32"


def _text(item: Dict, key: str) -> Optional[str]:
    """Строковое поле результата; нестроковые значения считаются отсутствующими"""
    value = item.get(key)
    if isinstance(value, str):
        return value
    return None


class SearchService:
    """Сервис для выполнения поиска в интернете через SerpAPI"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Инициализация сервиса поиска

        Args:
            settings: Настройки приложения
            transport: Транспорт httpx (подменяется в тестах)
        """
        self.api_key = settings.SERPAPI_API_KEY
        self.url = settings.SERPAPI_URL
        self.max_results = settings.MAX_SEARCH_RESULTS
        self.timeout = settings.search_timeout_seconds
        self.transport = transport

    async def search(self, query: str, location: Optional[str] = None) -> List[SearchSource]:
        """
        Выполняет поиск по запросу

        Args:
            query: Очищенный поисковый запрос
            location: Необязательное местоположение для SerpAPI

        Returns:
            Список источников в порядке выдачи

        Raises:
            UpstreamError: если поиск не удался
        """
        params = {
            "engine": "google",
            "q": query,
            "api_key": self.api_key,
            "num": self.max_results,
        }
        if location:
            params["location"] = location

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, params=params)

                if response.is_error:
                    raise UpstreamError(
                        f"SerpAPI error: {response.status_code} {response.reason_phrase}"
                    )

                data = response.json()

            if data.get("error"):
                raise UpstreamError(f"SerpAPI error: {data['error']}")

            return self._format_results(data)

        except Exception as e:
            logger.error(f"❌ Ошибка SerpAPI для запроса '{query}': {e}")
            raise UpstreamError("Failed to perform web search") from e

    def _format_results(self, data: Dict) -> List[SearchSource]:
        """
        Преобразует organic_results SerpAPI в список SearchSource

        Результаты без ссылки отбрасываются, id сохраняет позицию
        в исходной выдаче.
        """
        results = data.get("organic_results")
        if not isinstance(results, list):
            return []

        sources = []
        for index, item in enumerate(results, 1):
            if not isinstance(item, dict):
                continue

            link = item.get("link")
            if not link or not isinstance(link, str):
                continue

            sources.append(SearchSource(
                id=f"serp-{index}",
                title=_text(item, "title") or "No title",
                url=link,
                description=_text(item, "snippet") or "No description available",
                favicon=_text(item, "favicon") or self._favicon_for(link),
            ))

        return sources

    @staticmethod
    def _favicon_for(link: str) -> Optional[str]:
        """Строит URL иконки сайта по hostname ссылки"""
        try:
            hostname = urlparse(link).hostname
        except ValueError:
            return None
        if not hostname:
            return None
        return FAVICON_SERVICE_URL.format(hostname=hostname)
