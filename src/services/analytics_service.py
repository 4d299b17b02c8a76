from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, Tuple

from src.analytics.snapshot import build_analytics_snapshot, build_dashboard_stats
from src.core.config import get_settings
from src.models.tourism import DistrictRecord, PlaceRecord, TripRecord
from src.repositories.tourism_repository import TourismRepository
from src.schemas.analytics import AnalyticsSnapshot, DashboardStats, DateRange


logger = logging.getLogger(__name__)

Datasets = Tuple[List[TripRecord], List[PlaceRecord], List[DistrictRecord]]


class AnalyticsService:
    def __init__(self, repository: TourismRepository) -> None:
        self.repository = repository
        self.settings = get_settings()

    def get_snapshot(
        self,
        requested: Optional[DateRange] = None,
        top_limit: Optional[int] = None,
        recent_limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> AnalyticsSnapshot:
        trips, places, districts = self.load_datasets()
        return build_analytics_snapshot(
            trips,
            places,
            districts,
            requested,
            now=now,
            top_limit=top_limit or self.settings.analytics_top_places_limit,
            recent_limit=recent_limit or self.settings.analytics_recent_activity_limit,
            default_window_months=self.settings.analytics_default_window_months,
            daily_trend_max_days=self.settings.analytics_daily_trend_max_days,
            currency_symbol=self.settings.currency_symbol,
        )

    def get_dashboard_stats(self) -> DashboardStats:
        trips, places, districts = self.load_datasets()
        return build_dashboard_stats(trips, places, districts)

    def load_datasets(self) -> Datasets:
        """Fetch trips, places and districts concurrently; any failure aborts the call."""
        loaders: Sequence[Callable[[], List[Any]]] = (
            self.repository.list_trips,
            self.repository.list_places,
            self.repository.list_districts,
        )
        started = time.perf_counter()
        executor = ThreadPoolExecutor(max_workers=len(loaders), thread_name_prefix="analytics-fetch")
        futures: List[Future[List[Any]]] = [executor.submit(loader) for loader in loaders]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        failed = next((future for future in futures if future in done and future.exception() is not None), None)
        if failed is not None:
            # In-flight fetches are abandoned, not awaited.
            executor.shutdown(wait=False, cancel_futures=True)
            error = failed.exception()
            logger.warning("Analytics data acquisition failed: %s", error)
            raise error
        executor.shutdown(wait=True)
        trips, places, districts = (future.result() for future in futures)

        logger.info(
            "Loaded %d trips, %d places, %d districts in %.0fms",
            len(trips),
            len(places),
            len(districts),
            (time.perf_counter() - started) * 1000,
        )
        return trips, places, districts
