import pytest

from courserec.models.recommendation import (
    RecommendationReason,
    RecommendationResult,
    RecommendationType,
)
from courserec.models.user import User
from courserec.repositories.memory_dataset import MemoryDataset
from courserec.services.memory_cache_service import MemoryCacheService
from courserec.services.recommendation_service import (
    RecommendationService,
    recommendation_cache_key,
)


class CountingStrategy:
    def __init__(self, course_id, reason):
        self.course_id = course_id
        self.reason = reason
        self.calls = []

    async def recommend(self, key, limit=10):
        self.calls.append((key, limit))
        return [RecommendationResult(course_id=self.course_id, score=0.5, reason=self.reason)]


ACTIVE_USER = User(id="u1", email="C110151101@nkust.edu.tw")
NEW_USER = User(id="u2", email="C111156203@nkust.edu.tw")


@pytest.fixture
def strategies():
    return {
        "collaborative": CountingStrategy("collab", RecommendationReason.COLLABORATIVE),
        "content": CountingStrategy("content", RecommendationReason.CONTENT),
        "trending": CountingStrategy("trend", RecommendationReason.TRENDING),
        "personalized": CountingStrategy("personal", RecommendationReason.PERSONALIZED),
        "hybrid": CountingStrategy("hybrid", RecommendationReason.COLLABORATIVE),
        "cold_start": CountingStrategy("cold", RecommendationReason.CONTENT),
    }


@pytest.fixture
def service(strategies, settings, make_course, make_interactions, build_repositories):
    dataset = MemoryDataset(
        users=[ACTIVE_USER, NEW_USER],
        courses=[make_course("c1")],
        interactions=make_interactions("u1", ["c1"]),
    )
    repos = build_repositories(dataset)
    return RecommendationService(
        interaction_repository=repos.interactions,
        cache_service=MemoryCacheService(settings),
        settings=settings,
        **strategies,
    )


def test_cache_key_format():
    key = recommendation_cache_key("u1", RecommendationType.TRENDING, 15)

    assert key == "user:u1:recommendations:trending:15"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "recommendation_type, strategy, course_id",
    [
        (RecommendationType.ALL, "hybrid", "hybrid"),
        (RecommendationType.COLLABORATIVE, "collaborative", "collab"),
        (RecommendationType.CONTENT, "content", "content"),
        (RecommendationType.TRENDING, "trending", "trend"),
        (RecommendationType.PERSONALIZED, "personalized", "personal"),
    ],
)
async def test_dispatches_by_type(service, strategies, recommendation_type, strategy, course_id):
    results, cold_start = await service.recommend_for_user(
        ACTIVE_USER, recommendation_type, limit=5, use_cache=False
    )

    assert cold_start is False
    assert [r.course_id for r in results] == [course_id]
    assert strategies[strategy].calls == [("u1", 5)]


@pytest.mark.asyncio
async def test_user_without_interactions_gets_cold_start(service, strategies):
    results, cold_start = await service.recommend_for_user(
        NEW_USER, RecommendationType.COLLABORATIVE, limit=8, use_cache=False
    )

    assert cold_start is True
    assert [r.course_id for r in results] == ["cold"]
    assert strategies["cold_start"].calls == [(NEW_USER.email, 8)]
    assert strategies["collaborative"].calls == []


@pytest.mark.asyncio
async def test_cached_results_are_reused(service, strategies):
    first = await service.recommend_for_user(ACTIVE_USER, limit=5)
    second = await service.recommend_for_user(ACTIVE_USER, limit=5)

    assert first == second
    assert len(strategies["hybrid"].calls) == 1
    assert isinstance(second[0][0], RecommendationResult)


@pytest.mark.asyncio
async def test_cold_start_flag_survives_the_cache(service):
    await service.recommend_for_user(NEW_USER, limit=5)
    _, cold_start = await service.recommend_for_user(NEW_USER, limit=5)

    assert cold_start is True


@pytest.mark.asyncio
async def test_bypassing_the_cache_recomputes(service, strategies):
    await service.recommend_for_user(ACTIVE_USER, limit=5)
    await service.recommend_for_user(ACTIVE_USER, limit=5, use_cache=False)

    assert len(strategies["hybrid"].calls) == 2


@pytest.mark.asyncio
async def test_cache_entries_are_keyed_by_type_and_limit(service, strategies):
    await service.recommend_for_user(ACTIVE_USER, RecommendationType.ALL, limit=5)
    await service.recommend_for_user(ACTIVE_USER, RecommendationType.ALL, limit=6)
    await service.recommend_for_user(ACTIVE_USER, RecommendationType.TRENDING, limit=5)

    assert len(strategies["hybrid"].calls) == 2
    assert len(strategies["trending"].calls) == 1


@pytest.mark.asyncio
async def test_limit_is_clamped(service, strategies):
    await service.recommend_for_user(ACTIVE_USER, limit=500, use_cache=False)
    await service.recommend_for_user(ACTIVE_USER, limit=0, use_cache=False)

    assert strategies["hybrid"].calls == [("u1", 50), ("u1", 1)]


@pytest.mark.asyncio
async def test_direct_operations_pass_through(service, strategies):
    assert await service.get_trending_recommendations("", 3)
    assert await service.get_cold_start_recommendations("x@y.z", 4)

    assert strategies["trending"].calls == [("", 3)]
    assert strategies["cold_start"].calls == [("x@y.z", 4)]
