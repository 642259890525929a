from enum import auto
from typing import Any

from heliclockter import datetime_utc
from pydantic import BaseModel, field_validator

from pickem.models.db.shared import BaseModelORM, parse_json_column
from pickem.models.db.tournament import TournamentSummary
from pickem.utils.id_types import MatchId, TournamentId
from pickem.utils.types import EnumAutoStr

PLACEHOLDER_TEAM = "TBD"
BYE_TEAM = "BYE"


class MatchFormat(EnumAutoStr):
    BO1 = auto()
    BO3 = auto()
    BO5 = auto()
    BO7 = auto()


class MatchResult(BaseModel):
    winner: str
    score: str


class MatchBase(BaseModelORM):
    tournament_id: TournamentId
    round: int = 1
    team_a: str
    team_b: str
    match_format: MatchFormat = MatchFormat.BO1
    start_time: datetime_utc | None = None
    locked_at: datetime_utc | None = None
    played_at: datetime_utc | None = None
    result: MatchResult | None = None
    is_bye: bool = False

    @field_validator("result", mode="before")
    @classmethod
    def parse_result(cls, value: Any) -> Any:
        return parse_json_column(value)

    @property
    def has_placeholder_team(self) -> bool:
        return self.is_bye or any(
            team in (PLACEHOLDER_TEAM, BYE_TEAM) for team in (self.team_a, self.team_b)
        )


class Match(MatchBase):
    id: MatchId
    created: datetime_utc


class MatchWithTournament(Match):
    tournament: TournamentSummary


class MatchResultBody(BaseModel):
    winner: str
    score: str
