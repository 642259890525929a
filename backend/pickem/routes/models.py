from pydantic import BaseModel

from pickem.models.dashboard import ActivityItem, DashboardStats, TournamentPendingMatches
from pickem.models.db.match import Match, MatchWithTournament
from pickem.models.db.participant import LeaderboardEntry, Participant
from pickem.models.db.prediction import Prediction
from pickem.models.db.tournament import TournamentSummary


class TournamentInvitation(BaseModel):
    tournament: TournamentSummary
    is_participant: bool


class SuccessResponse(BaseModel):
    success: bool = True


class DataResponse[DataT](BaseModel):
    data: DataT


class PendingMatchesResponse(DataResponse[list[MatchWithTournament]]):
    pass


class PendingMatchesByTournamentResponse(DataResponse[list[TournamentPendingMatches]]):
    pass


class RecentActivityResponse(DataResponse[list[ActivityItem]]):
    pass


class DashboardStatsResponse(DataResponse[DashboardStats]):
    pass


class ParticipantResponse(DataResponse[Participant]):
    pass


class TournamentInvitationResponse(DataResponse[TournamentInvitation | None]):
    pass


class LeaderboardResponse(DataResponse[list[LeaderboardEntry]]):
    pass


class PredictionResponse(DataResponse[Prediction | None]):
    pass


class SingleMatchResponse(DataResponse[Match]):
    pass


class PredictionsResponse(DataResponse[list[Prediction]]):
    pass
