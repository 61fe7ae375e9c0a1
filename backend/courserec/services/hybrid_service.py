# services/hybrid_service.py
"""
Hybrid aggregation of the four recommendation strategies
"""
import asyncio
from typing import Dict, List
import logging

from .interfaces.strategy_service import RecommendationStrategyInterface
from ..models.recommendation import RecommendationReason, RecommendationResult

logger = logging.getLogger(__name__)

COLLABORATIVE_WEIGHT = 0.4
CONTENT_WEIGHT = 0.4
TRENDING_WEIGHT = 0.2
PERSONALIZED_BOOST = 0.2


class _Entry:
    __slots__ = ("score", "reason")

    def __init__(self, score: float, reason: RecommendationReason):
        self.score = score
        self.reason = reason


class HybridRecommendationService:
    """Fan out to every strategy, then merge in a fixed, order-sensitive sequence.

    The merge rules differ per source and later passes read what earlier
    ones wrote, so they stay four explicit passes:

    1. collaborative: weighted score replaces a lower existing score
    2. content: weighted score is added, creating the entry if missing
    3. trending: same as content
    4. personalized: multiplies existing entries only, never creates one

    By default an exception raised by any strategy fails the whole call.
    With ``isolate_failures`` the failing strategy contributes nothing instead.
    """

    def __init__(
        self,
        collaborative: RecommendationStrategyInterface,
        content: RecommendationStrategyInterface,
        trending: RecommendationStrategyInterface,
        personalized: RecommendationStrategyInterface,
        strategy_limit: int = 10,
        isolate_failures: bool = False,
    ):
        self.collaborative = collaborative
        self.content = content
        self.trending = trending
        self.personalized = personalized
        self.strategy_limit = strategy_limit
        self.isolate_failures = isolate_failures

    async def _run_strategies(self, user_id: str) -> List[List[RecommendationResult]]:
        strategies = [self.collaborative, self.content, self.trending, self.personalized]
        tasks = [
            asyncio.ensure_future(s.recommend(user_id, self.strategy_limit))
            for s in strategies
        ]

        if not self.isolate_failures:
            try:
                return list(await asyncio.gather(*tasks))
            except BaseException:
                for task in tasks:
                    task.cancel()
                # Collect the cancelled and failed siblings so none go unretrieved
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        results = await asyncio.gather(*tasks, return_exceptions=True)

        merged_inputs = []
        for strategy, result in zip(strategies, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    f"{strategy.reason.value} strategy failed for user {user_id}, "
                    f"continuing without it: {result}"
                )
                result = []
            merged_inputs.append(result)
        return merged_inputs

    @staticmethod
    def _merge_collaborative(
        scores: Dict[str, _Entry], recommendations: List[RecommendationResult]
    ):
        for rec in recommendations:
            weighted = rec.score * COLLABORATIVE_WEIGHT
            current = scores.get(rec.course_id)
            if current is None or weighted > current.score:
                scores[rec.course_id] = _Entry(weighted, rec.reason)

    @staticmethod
    def _merge_additive(
        scores: Dict[str, _Entry],
        recommendations: List[RecommendationResult],
        weight: float,
    ):
        for rec in recommendations:
            weighted = rec.score * weight
            current = scores.get(rec.course_id)
            if current is None:
                scores[rec.course_id] = _Entry(weighted, rec.reason)
            else:
                current.score += weighted

    @staticmethod
    def _apply_personalized_boost(
        scores: Dict[str, _Entry], recommendations: List[RecommendationResult]
    ):
        for rec in recommendations:
            current = scores.get(rec.course_id)
            if current is not None:
                current.score *= 1 + rec.score * PERSONALIZED_BOOST

    async def recommend(
        self, user_id: str, limit: int = 20
    ) -> List[RecommendationResult]:
        collaborative, content, trending, personalized = await self._run_strategies(
            user_id
        )

        scores: Dict[str, _Entry] = {}
        self._merge_collaborative(scores, collaborative)
        self._merge_additive(scores, content, CONTENT_WEIGHT)
        self._merge_additive(scores, trending, TRENDING_WEIGHT)
        self._apply_personalized_boost(scores, personalized)

        results = [
            RecommendationResult(course_id=course_id, score=entry.score, reason=entry.reason)
            for course_id, entry in scores.items()
        ]
        results.sort(key=lambda r: r.score, reverse=True)
        return results[:limit]
