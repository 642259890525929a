from enum import auto
from typing import Any

from heliclockter import datetime_utc
from pydantic import BaseModel, Field, field_validator

from pickem.models.db.shared import BaseModelORM, parse_json_column
from pickem.utils.id_types import TournamentId, UserId
from pickem.utils.types import EnumAutoStr


class TournamentStatus(EnumAutoStr):
    DRAFT = auto()
    ACTIVE = auto()
    COMPLETED = auto()


class TournamentFormat(EnumAutoStr):
    LEAGUE = auto()
    SWISS = auto()
    SINGLE_ELIMINATION = auto()
    DOUBLE_ELIMINATION = auto()


class Team(BaseModel):
    name: str
    logo: str | None = None


class ScoringRules(BaseModel):
    correct_winner_points: int = 1
    exact_score_bonus: int = 2


def normalize_teams(value: Any) -> list[Any]:
    """Accept both the legacy list of names and the list of `{name, logo}` objects."""
    value = parse_json_column(value)
    if value is None:
        return []

    teams: list[Any] = []
    for team in value:
        if isinstance(team, str):
            if team.startswith("{"):
                try:
                    team = parse_json_column(team)
                except ValueError:
                    team = {"name": team}
            else:
                team = {"name": team}
        teams.append(team)
    return teams


class TournamentSummary(BaseModelORM):
    id: TournamentId
    name: str
    status: TournamentStatus
    teams: list[Team] = Field(default_factory=list)

    @field_validator("teams", mode="before")
    @classmethod
    def parse_teams(cls, value: Any) -> list[Any]:
        return normalize_teams(value)


class TournamentInsertable(BaseModelORM):
    name: str
    admin_id: UserId
    status: TournamentStatus = TournamentStatus.DRAFT
    format: TournamentFormat = TournamentFormat.LEAGUE
    invite_code: str
    teams: list[Team] = Field(default_factory=list)
    scoring_rules: ScoringRules = Field(default_factory=ScoringRules)
    home_and_away: bool = False
    created: datetime_utc

    @field_validator("teams", mode="before")
    @classmethod
    def parse_teams(cls, value: Any) -> list[Any]:
        return normalize_teams(value)

    @field_validator("scoring_rules", mode="before")
    @classmethod
    def parse_scoring_rules(cls, value: Any) -> Any:
        return parse_json_column(value)


class Tournament(TournamentInsertable):
    id: TournamentId

    def summary(self) -> TournamentSummary:
        return TournamentSummary(id=self.id, name=self.name, status=self.status, teams=self.teams)


class TournamentJoinBody(BaseModel):
    invite_code: str = Field(min_length=1)
