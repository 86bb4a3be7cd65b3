"""
Сервис генерации ответа по результатам поиска через OpenAI
"""
import httpx
import logging
from typing import List, Optional
from ..config import Settings
from ..errors import UpstreamError
from ..schemas.search import SearchSource

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that provides accurate, well-researched answers "
    "based on search results. Always be factual and acknowledge when information is limited."
)

USER_PROMPT_TEMPLATE = """Based on the following search results, provide a comprehensive and accurate answer to the question: "{query}"

Search Results:
{context}

Please provide a well-structured, informative answer that synthesizes information from the search results. Be factual and cite relevant information naturally. If the search results don't contain enough information to answer the question completely, acknowledge this limitation.

Answer:"""

FALLBACK_ANSWER = "Unable to generate answer at this time."

LLM_TIMEOUT = 60.0  # секунд


def build_source_context(sources: List[SearchSource]) -> str:
    """Формирует контекст: "[i] title: description" через пустую строку"""
    return "\n\n".join(
        f"[{i}] {source.title}: {source.description}"
        for i, source in enumerate(sources, 1)
    )


def build_messages(query: str, sources: List[SearchSource]) -> List[dict]:
    return [
        {
            "role": "system",
            "content": SYSTEM_PROMPT
        },
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(query=query, context=build_source_context(sources))
        }
    ]


class AnswerService:
    """Сервис для генерации ответа через OpenAI Chat Completions API"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Инициализация сервиса"""
        self.api_key = settings.OPENAI_API_KEY
        self.base_url = settings.OPENAI_BASE_URL.rstrip("/")
        self.model = settings.AI_MODEL
        self.max_tokens = settings.AI_MAX_TOKENS
        self.temperature = settings.AI_TEMPERATURE
        self.transport = transport

    async def generate(self, query: str, sources: List[SearchSource]) -> str:
        """
        Генерирует ответ на вопрос по найденным источникам

        Args:
            query: Очищенный поисковый запрос
            sources: Источники в порядке выдачи (может быть пустым)

        Returns:
            Текст ответа или FALLBACK_ANSWER, если модель ничего не вернула

        Raises:
            UpstreamError: если запрос к OpenAI не удался
        """
        payload = {
            "model": self.model,
            "messages": build_messages(query, sources),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "stream": False
        }

        try:
            async with httpx.AsyncClient(timeout=LLM_TIMEOUT, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"}
                )

                if response.status_code != 200:
                    raise UpstreamError(f"OpenAI error: {response.status_code} {response.text}")

                result = response.json()

            choices = result.get("choices") or []
            content = None
            if choices:
                content = (choices[0].get("message") or {}).get("content")

            return content or FALLBACK_ANSWER

        except Exception as e:
            logger.error(f"❌ Ошибка OpenAI API: {e}")
            raise UpstreamError("Failed to generate answer") from e
