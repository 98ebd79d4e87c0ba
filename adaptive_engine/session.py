"""Async refresh loop around the synchronous engines.

The engines are pure; this module owns the only suspension point, the
analytics/stats fetch. Each refresh is tagged with a generation number and
its state snapshot so a slow fetch for an old state can never overwrite the
output for a newer one.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from adaptive_engine.config import EngineConfig
from adaptive_engine.insights import build_insights
from adaptive_engine.recommender import as_catalog, recommend
from adaptive_engine.schema import Insight, ProductivityState, Recommendation, fallback_state, validate_catalog

logger = logging.getLogger(__name__)

AnalyticsFetcher = Callable[[int], Awaitable[Any]]
StatsFetcher = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class EngineResult:
    state: ProductivityState
    recommendations: tuple[Recommendation, ...]
    insights: tuple[Insight, ...]
    generation: int
    degraded: bool = False

    def to_dict(self) -> dict:
        return {
            "state": self.state.to_dict(),
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "insights": [insight.to_dict() for insight in self.insights],
            "generation": self.generation,
            "degraded": self.degraded,
        }


class AdaptiveSession:
    """Keeps the latest engine output for a stream of productivity states."""

    def __init__(
        self,
        catalog,
        fetch_analytics: Optional[AnalyticsFetcher] = None,
        fetch_stats: Optional[StatsFetcher] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or EngineConfig()
        self._catalog = validate_catalog(as_catalog(catalog))
        self._fetch_analytics = fetch_analytics
        self._fetch_stats = fetch_stats
        self._generation = 0
        self._current_state: Optional[ProductivityState] = None
        self.latest: Optional[EngineResult] = None

    @property
    def catalog(self):
        return self._catalog

    @property
    def generation(self) -> int:
        return self._generation

    def set_catalog(self, catalog) -> None:
        """Swap the catalog snapshot; in-flight refreshes become stale."""

        self._catalog = validate_catalog(as_catalog(catalog))
        self._generation += 1

    def is_current(self, generation: int, state: ProductivityState) -> bool:
        return generation == self._generation and state == self._current_state

    async def _fetch(self, fetcher, *args):
        if fetcher is None:
            return None
        result = fetcher(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def refresh(self, state=None) -> Optional[EngineResult]:
        """Recompute recommendations and insights for ``state``.

        Returns ``None`` when a newer refresh started while this one was
        waiting on upstream data.
        """

        state = ProductivityState.coerce(state) if state is not None else fallback_state()
        self._generation += 1
        generation = self._generation
        self._current_state = state
        catalog = self._catalog

        recommendations = recommend(state, catalog, self.config.recommendation_cap)

        analytics, stats = await asyncio.gather(
            self._fetch(self._fetch_analytics, self.config.analytics_limit),
            self._fetch(self._fetch_stats),
            return_exceptions=True,
        )

        degraded = False
        if isinstance(analytics, BaseException):
            logger.warning("Analytics fetch failed, continuing without it: %s", analytics)
            analytics, degraded = None, True
        if isinstance(stats, BaseException):
            logger.warning("Stats fetch failed, continuing without it: %s", stats)
            stats, degraded = None, True

        if not self.is_current(generation, state):
            logger.info(
                "Discarding stale refresh %d for state %s (current generation %d)",
                generation,
                state.current_state.value,
                self._generation,
            )
            return None

        insights = build_insights(state, analytics, stats, self.config.insight_cap)
        result = EngineResult(
            state=state,
            recommendations=tuple(recommendations),
            insights=tuple(insights),
            generation=generation,
            degraded=degraded,
        )
        self.latest = result
        return result
