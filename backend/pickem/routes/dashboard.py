from fastapi import APIRouter, Query

from pickem.config import config
from pickem.logic.dashboard import (
    find_eligible_matches,
    get_dashboard_stats,
    get_pending_predictions_by_tournament,
    get_recent_activity,
)
from pickem.routes.models import (
    DashboardStatsResponse,
    PendingMatchesByTournamentResponse,
    PendingMatchesResponse,
    RecentActivityResponse,
)
from pickem.utils.id_types import UserId

router = APIRouter(prefix=config.api_prefix)


@router.get("/users/{user_id}/dashboard/pending", response_model=PendingMatchesResponse)
async def get_pending_matches(user_id: UserId) -> PendingMatchesResponse:
    return PendingMatchesResponse(data=await find_eligible_matches(user_id))


@router.get(
    "/users/{user_id}/dashboard/pending_by_tournament",
    response_model=PendingMatchesByTournamentResponse,
)
async def get_pending_matches_by_tournament(user_id: UserId) -> PendingMatchesByTournamentResponse:
    return PendingMatchesByTournamentResponse(
        data=await get_pending_predictions_by_tournament(user_id)
    )


@router.get("/users/{user_id}/dashboard/recent_activity", response_model=RecentActivityResponse)
async def get_recent_activity_of_user(
    user_id: UserId, limit: int | None = Query(default=None, ge=1, le=100)
) -> RecentActivityResponse:
    return RecentActivityResponse(data=await get_recent_activity(user_id, limit))


@router.get("/users/{user_id}/dashboard/stats", response_model=DashboardStatsResponse)
async def get_stats(user_id: UserId) -> DashboardStatsResponse:
    return DashboardStatsResponse(data=await get_dashboard_stats(user_id))
