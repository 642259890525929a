from heliclockter import datetime_utc

from pickem.config import config
from pickem.logic.activity import build_activity_feed
from pickem.logic.eligibility import (
    filter_eligible_matches,
    group_by_tournament,
    merge_visible_tournament_ids,
    remove_already_predicted,
)
from pickem.logic.stats import aggregate_dashboard_stats
from pickem.models.dashboard import ActivityItem, DashboardStats, TournamentPendingMatches
from pickem.models.db.match import MatchWithTournament
from pickem.models.db.tournament import TournamentStatus
from pickem.sql.matches import get_open_matches_in_tournaments
from pickem.sql.participants import (
    count_participations_of_user,
    get_total_points_of_user,
    get_tournament_ids_for_participant,
)
from pickem.sql.predictions import (
    count_predictions_of_user,
    get_predicted_match_ids,
    get_resolved_predictions_of_user,
)
from pickem.sql.tournaments import (
    count_tournaments_organized_by_user,
    get_tournament_ids_administered_by_user,
)
from pickem.utils.id_types import TournamentId, UserId


async def get_visible_tournament_ids(user_id: UserId) -> list[TournamentId]:
    participant_tournament_ids = await get_tournament_ids_for_participant(user_id)
    administered_tournament_ids = await get_tournament_ids_administered_by_user(
        user_id, excluded_status=TournamentStatus.DRAFT
    )
    return merge_visible_tournament_ids(participant_tournament_ids, administered_tournament_ids)


async def find_eligible_matches(
    user_id: UserId, *, now: datetime_utc | None = None
) -> list[MatchWithTournament]:
    """
    Matches the user can still predict, earliest start first.

    This runs in two phases: the open matches are fetched for the visible tournaments, then the
    matches the user already predicted are removed client-side. The evaluation time is sampled
    once and used for every time comparison of the call.
    """
    now = datetime_utc.now() if now is None else now
    limit = config.pending_predictions_limit

    tournament_ids = await get_visible_tournament_ids(user_id)
    if len(tournament_ids) < 1:
        return []

    predicted_match_ids = await get_predicted_match_ids(user_id)
    candidates = await get_open_matches_in_tournaments(tournament_ids, now, limit)

    eligible = filter_eligible_matches(candidates, now, limit)
    return remove_already_predicted(eligible, predicted_match_ids)


async def get_pending_predictions_by_tournament(
    user_id: UserId, *, now: datetime_utc | None = None
) -> list[TournamentPendingMatches]:
    return group_by_tournament(await find_eligible_matches(user_id, now=now))


async def get_recent_activity(user_id: UserId, limit: int | None = None) -> list[ActivityItem]:
    limit = config.recent_activity_limit if limit is None else limit
    rows = await get_resolved_predictions_of_user(user_id, limit)
    return build_activity_feed(rows, limit)


async def get_dashboard_stats(user_id: UserId) -> DashboardStats:
    # Independent queries, the first one that fails aborts the whole aggregate.
    organized_count = await count_tournaments_organized_by_user(user_id)
    joined_count = await count_participations_of_user(user_id)
    prediction_count = await count_predictions_of_user(user_id)
    participant_points = await get_total_points_of_user(user_id)

    return aggregate_dashboard_stats(
        organized_count=organized_count,
        joined_count=joined_count,
        prediction_count=prediction_count,
        participant_points=participant_points,
    )
