"""
Ограничение частоты запросов по фиксированному окну
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


@dataclass
class RateLimitEntry:
    """Счетчик запросов клиента в текущем окне"""
    count: int
    reset_time: float


class RateLimitStore(Protocol):
    """Хранилище лимитов: check() решает, пропустить ли запрос"""

    def check(self, client_id: str, now: Optional[float] = None) -> bool:
        ...


class InMemoryRateLimiter:
    """
    Фиксированное окно в памяти процесса

    Записи не удаляются: таблица растет вместе с числом клиентов
    за время жизни процесса.
    """

    def __init__(self, window_seconds: float, max_requests: int):
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def check(self, client_id: str, now: Optional[float] = None) -> bool:
        """Возвращает True, если запрос разрешен, и обновляет счетчик"""
        if now is None:
            now = time.time()

        with self._lock:
            entry = self._entries.get(client_id)

            if entry is None or now > entry.reset_time:
                self._entries[client_id] = RateLimitEntry(count=1, reset_time=now + self.window_seconds)
                return True

            if entry.count >= self.max_requests:
                logger.warning(f"⚠️ Превышен лимит запросов для клиента {client_id}")
                return False

            entry.count += 1
            return True

    def get_entry(self, client_id: str) -> Optional[RateLimitEntry]:
        return self._entries.get(client_id)


def client_identifier(headers: Mapping[str, str]) -> str:
    """
    Определяет клиента по заголовкам прокси

    Клиенты без X-Forwarded-For / X-Real-IP попадают в общий
    бакет "unknown".
    """
    return headers.get("x-forwarded-for") or headers.get("x-real-ip") or UNKNOWN_CLIENT
