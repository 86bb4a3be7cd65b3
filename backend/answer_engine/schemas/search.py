"""
Схемы данных для поиска
"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class SearchRequest(BaseModel):
    """Проверенный и очищенный поисковый запрос"""
    model_config = ConfigDict(frozen=True)

    query: str
    location: Optional[str] = None


class SearchSource(BaseModel):
    """Источник, найденный поиском"""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    url: str
    description: str
    favicon: Optional[str] = None


class SearchResponse(BaseModel):
    """Ответ со ссылками на источники"""
    answer: str
    sources: List[SearchSource]


class ErrorResponse(BaseModel):
    error: str
