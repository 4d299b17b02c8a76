from __future__ import annotations

from functools import lru_cache

from src.core.config import get_settings
from src.repositories.tourism_repository import TourismRepository
from src.services.analytics_service import AnalyticsService


@lru_cache
def get_tourism_repository() -> TourismRepository:
    return TourismRepository(row_limit=get_settings().analytics_fetch_row_limit)


def get_analytics_service() -> AnalyticsService:
    return AnalyticsService(repository=get_tourism_repository())
