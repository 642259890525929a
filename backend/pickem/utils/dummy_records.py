from zoneinfo import ZoneInfo

from heliclockter import datetime_utc

from pickem.models.db.match import MatchResult, MatchWithTournament
from pickem.models.db.tournament import Team, Tournament, TournamentStatus, TournamentSummary
from pickem.utils.id_types import MatchId, TournamentId, UserId

DUMMY_MOCK_TIME = datetime_utc(2022, 1, 11, 4, 32, 11, tzinfo=ZoneInfo("UTC"))

DUMMY_TOURNAMENT = TournamentSummary(
    id=TournamentId(1),
    name="Spring Cup",
    status=TournamentStatus.ACTIVE,
    teams=[Team(name="Lions"), Team(name="Tigers", logo="tigers.png"), Team(name="Bears")],
)

DUMMY_TOURNAMENT2 = TournamentSummary(
    id=TournamentId(2),
    name="Autumn League",
    status=TournamentStatus.ACTIVE,
    teams=[Team(name="Hawks"), Team(name="Eagles")],
)

DUMMY_DRAFT_TOURNAMENT = TournamentSummary(
    id=TournamentId(3),
    name="Winter Draft",
    status=TournamentStatus.DRAFT,
    teams=[],
)


def dummy_tournament_record(
    summary: TournamentSummary = DUMMY_TOURNAMENT, *, admin_id: UserId = UserId(1)
) -> Tournament:
    return Tournament(
        id=summary.id,
        name=summary.name,
        admin_id=admin_id,
        status=summary.status,
        invite_code=f"invite-{summary.id}",
        teams=summary.teams,
        created=DUMMY_MOCK_TIME,
    )


def dummy_match(
    match_id: int,
    *,
    tournament: TournamentSummary = DUMMY_TOURNAMENT,
    team_a: str = "Lions",
    team_b: str = "Tigers",
    start_time: datetime_utc | None = None,
    locked_at: datetime_utc | None = None,
    played_at: datetime_utc | None = None,
    result: MatchResult | None = None,
    is_bye: bool = False,
) -> MatchWithTournament:
    return MatchWithTournament(
        id=MatchId(match_id),
        created=DUMMY_MOCK_TIME,
        tournament_id=tournament.id,
        tournament=tournament,
        team_a=team_a,
        team_b=team_b,
        start_time=start_time,
        locked_at=locked_at,
        played_at=played_at,
        result=result,
        is_bye=is_bye,
    )
