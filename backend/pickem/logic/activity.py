from collections.abc import Iterable

from pickem.models.dashboard import (
    ActivityItem,
    ActivityPrediction,
    ActivityTournament,
    ResolvedPrediction,
)
from pickem.models.db.tournament import TournamentStatus


def is_winning_prediction(points_earned: int | None) -> bool:
    # TODO: tell "not scored yet" (None) apart from "scored zero" once product decides on it.
    return points_earned is not None and points_earned > 0


def to_activity_item(row: ResolvedPrediction) -> ActivityItem:
    return ActivityItem(
        match_id=row.match_id,
        tournament=ActivityTournament(id=row.tournament_id, name=row.tournament_name),
        team_a=row.team_a,
        team_b=row.team_b,
        result=row.result,
        played_at=row.played_at,
        prediction=ActivityPrediction(
            predicted_winner=row.predicted_winner,
            predicted_score=row.predicted_score,
            points_earned=row.points_earned,
        ),
        is_win=is_winning_prediction(row.points_earned),
    )


def build_activity_feed(rows: Iterable[ResolvedPrediction], limit: int) -> list[ActivityItem]:
    """Most recently played first, predictions on matches without a played time last."""
    resolved = [row for row in rows if row.tournament_status is not TournamentStatus.DRAFT]
    played = [row for row in resolved if row.played_at is not None]
    unplayed = [row for row in resolved if row.played_at is None]
    played.sort(key=lambda row: row.played_at, reverse=True)  # type: ignore[arg-type,return-value]
    return [to_activity_item(row) for row in [*played, *unplayed][:limit]]
