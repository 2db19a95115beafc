from datetime import timedelta

import pytest

from recruit.repositories.position_repository import PositionRepository, PositionScope
from recruit.schemas.position import PositionSearchParams
from recruit.services.position_search import PositionSearch
from recruit.services.position_service import PositionService
from recruit.utils.time import utc_now
from tests.factories import create_position, create_team

pytestmark = pytest.mark.db


async def _catalog(db_session):
    now = utc_now()
    outreach = await create_team(db_session, "Outreach")
    kitchen = await create_team(db_session, "Kitchen")
    await create_position(
        db_session,
        team=outreach,
        title="Marketing Monkey",
        short_description="Social media posts",
        published_at=now - timedelta(days=3),
    )
    await create_position(
        db_session,
        team=kitchen,
        title="Head Chef",
        short_description="Runs the soup kitchen",
        paid=True,
        paid_description="Stipend",
        time_commitment="ongoing",
        published_at=now - timedelta(days=1),
    )
    await create_position(
        db_session,
        team=kitchen,
        title="Dishwasher",
        short_description="Keeps the kitchen clean",
        published_at=now - timedelta(days=2),
    )
    await create_position(
        db_session,
        team=kitchen,
        title="Kitchen Porter",
        short_description="Not open yet",
        published_at=now + timedelta(days=2),
    )
    return outreach, kitchen


async def _search(db_session, **options):
    return [p.title for p in await PositionService(db_session).search(PositionSearchParams(**options)).results(db_session)]


@pytest.mark.asyncio
async def test_search_lists_viewable_newest_first(db_session):
    await _catalog(db_session)

    assert await _search(db_session) == ["Head Chef", "Dishwasher", "Marketing Monkey"]


@pytest.mark.asyncio
async def test_search_text_matches_title_or_description(db_session):
    await _catalog(db_session)

    assert await _search(db_session, q="KITCHEN") == ["Head Chef", "Dishwasher"]
    assert await _search(db_session, q="monkey") == ["Marketing Monkey"]
    assert await _search(db_session, q="   ") == ["Head Chef", "Dishwasher", "Marketing Monkey"]


@pytest.mark.asyncio
async def test_search_filters(db_session):
    outreach, kitchen = await _catalog(db_session)

    assert await _search(db_session, team_id=outreach.id) == ["Marketing Monkey"]
    assert await _search(db_session, paid=True) == ["Head Chef"]
    assert await _search(db_session, paid=False, team_id=kitchen.id) == ["Dishwasher"]
    assert await _search(db_session, time_commitment="ongoing") == ["Head Chef"]


@pytest.mark.asyncio
async def test_search_paging(db_session):
    await _catalog(db_session)

    assert await _search(db_session, limit=1, offset=1) == ["Dishwasher"]


@pytest.mark.asyncio
async def test_search_ignores_unknown_options(db_session):
    await _catalog(db_session)
    base = PositionRepository(db_session).scoped_query(PositionScope.VIEWABLE)

    results = await PositionSearch(base, q="chef", colour="blue").results(db_session)

    assert [p.title for p in results] == ["Head Chef"]
