import pytest

from courserec.models.course import Favorite, Review, ReviewStatus
from courserec.models.recommendation import RecommendationReason
from courserec.repositories.memory_dataset import MemoryDataset
from courserec.services.content_service import ContentBasedService


@pytest.fixture
def catalog(make_course, build_repositories):
    courses = [
        make_course("c1", department="CS", instructor_ids=["i1"], tag_ids=["t1", "t2"]),
        make_course("c2", department="EE", instructor_ids=["i2"], tag_ids=["t3"]),
        make_course("c3", department="CS", instructor_ids=["i1"], tag_ids=["t1", "t2", "t3"]),
        make_course("c4", department="EE"),
        make_course("c5", department="ME", tag_ids=["t3"]),
        make_course("c6", department="ME"),
        make_course("c7", department="Art"),
        make_course("c8", department="Art"),
        make_course("c9", department="ME", instructor_ids=["i9"]),
    ]
    reviews = [
        Review(id="r1", user_id="u1", course_id="c1", coolness=5),
        Review(id="r2", user_id="u1", course_id="c9", coolness=3),
        Review(id="r3", user_id="u1", course_id="c7", coolness=5, status=ReviewStatus.HIDDEN),
    ]
    favorites = [Favorite(user_id="u1", course_id="c2")]
    dataset = MemoryDataset(courses=courses, reviews=reviews, favorites=favorites)
    return build_repositories(dataset)


@pytest.mark.asyncio
async def test_scores_department_instructor_and_tag_overlap(catalog):
    service = ContentBasedService(catalog.courses, catalog.reviews)

    recs = await service.recommend("u1")

    assert [r.course_id for r in recs] == ["c3", "c4", "c5"]
    assert recs[0].score == pytest.approx(1.3)
    assert recs[1].score == pytest.approx(0.3)
    assert recs[2].score == pytest.approx(0.2)
    assert all(r.reason == RecommendationReason.CONTENT for r in recs)


@pytest.mark.asyncio
async def test_low_rated_and_hidden_reviews_are_not_liked(catalog):
    service = ContentBasedService(catalog.courses, catalog.reviews)

    recs = await service.recommend("u1")
    ids = {r.course_id for r in recs}

    # c9's instructor and c7's department would only match if those were liked
    assert "c8" not in ids
    assert "c9" not in ids
    assert "c1" not in ids and "c2" not in ids


@pytest.mark.asyncio
async def test_candidate_pool_is_twice_the_limit(catalog):
    service = ContentBasedService(catalog.courses, catalog.reviews)

    recs = await service.recommend("u1", limit=1)

    assert [r.course_id for r in recs] == ["c3"]


@pytest.mark.asyncio
async def test_scores_stay_within_bounds(catalog):
    service = ContentBasedService(catalog.courses, catalog.reviews)

    for rec in await service.recommend("u1", limit=20):
        assert 0 < rec.score <= 1.3 + 1e-9


@pytest.mark.asyncio
async def test_no_liked_courses_returns_empty(catalog):
    service = ContentBasedService(catalog.courses, catalog.reviews)

    assert await service.recommend("someone-else") == []


@pytest.mark.asyncio
async def test_data_access_errors_degrade_to_empty(catalog, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("query failed")

    monkeypatch.setattr(catalog.courses, "find_related_courses", broken)
    service = ContentBasedService(catalog.courses, catalog.reviews)

    assert await service.recommend("u1") == []
