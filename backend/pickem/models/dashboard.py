from typing import Any

from heliclockter import datetime_utc
from pydantic import BaseModel, field_validator

from pickem.models.db.match import MatchResult, MatchWithTournament
from pickem.models.db.shared import BaseModelORM, parse_json_column
from pickem.models.db.tournament import TournamentStatus, TournamentSummary
from pickem.utils.id_types import MatchId, TournamentId


class TournamentPendingMatches(BaseModel):
    tournament: TournamentSummary
    matches: list[MatchWithTournament]


class ResolvedPrediction(BaseModelORM):
    """A prediction of the user joined with its resolved match and the match's tournament."""

    match_id: MatchId
    tournament_id: TournamentId
    tournament_name: str
    tournament_status: TournamentStatus
    team_a: str
    team_b: str
    result: MatchResult
    played_at: datetime_utc | None = None
    predicted_winner: str
    predicted_score: str
    points_earned: int | None = None

    @field_validator("result", mode="before")
    @classmethod
    def parse_result(cls, value: Any) -> Any:
        return parse_json_column(value)


class ActivityTournament(BaseModel):
    id: TournamentId
    name: str


class ActivityPrediction(BaseModel):
    predicted_winner: str
    predicted_score: str
    points_earned: int | None = None


class ActivityItem(BaseModel):
    match_id: MatchId
    tournament: ActivityTournament
    team_a: str
    team_b: str
    result: MatchResult
    played_at: datetime_utc | None = None
    prediction: ActivityPrediction
    # Unscored (null) and zero points both count as a non-win.
    is_win: bool


class DashboardStats(BaseModel):
    organized_count: int
    joined_count: int
    matches_with_predictions: int
    total_points: int
