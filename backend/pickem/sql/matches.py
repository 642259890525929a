from collections.abc import Sequence
from typing import Any

from heliclockter import datetime_utc

from pickem.database import database
from pickem.models.db.match import (
    BYE_TEAM,
    PLACEHOLDER_TEAM,
    Match,
    MatchResultBody,
    MatchWithTournament,
)
from pickem.models.db.tournament import TournamentStatus, TournamentSummary
from pickem.utils.db import fetch_one_parsed
from pickem.utils.errors import translate_store_errors
from pickem.utils.id_types import MatchId, TournamentId


def _match_with_tournament(row: dict[str, Any]) -> MatchWithTournament:
    tournament = TournamentSummary(
        id=row["tournament_id"],
        name=row.pop("tournament_name"),
        status=row.pop("tournament_status"),
        teams=row.pop("tournament_teams"),
    )
    return MatchWithTournament.model_validate({**row, "tournament": tournament})


async def sql_get_match(match_id: MatchId) -> Match | None:
    query = """
        SELECT *
        FROM matches
        WHERE id = :match_id
        """
    return await fetch_one_parsed(database, Match, query, {"match_id": match_id})


async def get_open_matches_in_tournaments(
    tournament_ids: Sequence[TournamentId], now: datetime_utc, limit: int
) -> list[MatchWithTournament]:
    """
    Fetch the matches of the given tournaments that are still open for prediction at `now`.

    The same `now` is used for the lock check and the schedule check. Whether the user already
    predicted a match is not part of this query: predictions are fetched separately and
    subtracted afterwards, see `remove_already_predicted`.
    """
    query = """
        SELECT
            m.*,
            t.name AS tournament_name,
            t.status AS tournament_status,
            t.teams AS tournament_teams
        FROM matches m
        JOIN tournaments t ON t.id = m.tournament_id
        WHERE m.tournament_id = any(:tournament_ids)
          AND t.status != CAST(:draft_status AS tournament_status)
          AND m.result IS NULL
          AND (m.locked_at IS NULL OR m.locked_at > :now)
          AND (m.start_time IS NULL OR m.start_time > :now)
          AND m.team_a NOT IN (:placeholder_team, :bye_team)
          AND m.team_b NOT IN (:placeholder_team, :bye_team)
          AND m.is_bye IS FALSE
        ORDER BY m.start_time ASC NULLS LAST, m.id ASC
        LIMIT :limit
        """
    with translate_store_errors():
        result = await database.fetch_all(
            query=query,
            values={
                "tournament_ids": list(tournament_ids),
                "draft_status": TournamentStatus.DRAFT.value,
                "now": now,
                "placeholder_team": PLACEHOLDER_TEAM,
                "bye_team": BYE_TEAM,
                "limit": limit,
            },
        )

    return [_match_with_tournament(dict(x._mapping)) for x in result]


async def sql_set_match_result(
    match_id: MatchId, result: MatchResultBody, played_at: datetime_utc
) -> Match | None:
    """Store the result, a correction keeps the time the match was first reported as played."""
    query = """
        UPDATE matches
        SET
            result = :result,
            played_at = COALESCE(played_at, :played_at)
        WHERE id = :match_id
        RETURNING *
        """
    return await fetch_one_parsed(
        database,
        Match,
        query,
        {"match_id": match_id, "result": result.model_dump_json(), "played_at": played_at},
    )
