from heliclockter import datetime_utc

from pickem.models.db.shared import BaseModelORM
from pickem.utils.id_types import ParticipantId, TournamentId, UserId


class ParticipantInsertable(BaseModelORM):
    tournament_id: TournamentId
    user_id: UserId
    total_points: int | None = 0
    bonus_points: int = 0
    rank: int | None = None
    joined_at: datetime_utc


class Participant(ParticipantInsertable):
    id: ParticipantId


class LeaderboardEntry(Participant):
    username: str
    avatar_url: str | None = None
