from heliclockter import datetime_utc

from pickem.database import database
from pickem.models.db.participant import LeaderboardEntry, Participant
from pickem.utils.db import fetch_all_parsed, fetch_column, fetch_count, fetch_one_parsed
from pickem.utils.errors import translate_store_errors
from pickem.utils.id_types import TournamentId, UserId
from pickem.utils.types import assert_some


async def get_tournament_ids_for_participant(user_id: UserId) -> list[TournamentId]:
    query = """
        SELECT tournament_id
        FROM participants
        WHERE user_id = :user_id
        ORDER BY joined_at, tournament_id
        """
    rows = await fetch_column(database, "tournament_id", query, {"user_id": user_id})
    return [TournamentId(x) for x in rows]


async def sql_is_user_participant(tournament_id: TournamentId, user_id: UserId) -> bool:
    query = """
        SELECT count(*)
        FROM participants
        WHERE tournament_id = :tournament_id
        AND user_id = :user_id
        """
    values = {"tournament_id": tournament_id, "user_id": user_id}
    return await fetch_count(database, query, values) > 0


async def sql_create_participant(tournament_id: TournamentId, user_id: UserId) -> Participant:
    """Insert a participant, raises `ConstraintViolation` if the user already joined."""
    query = """
        INSERT INTO participants (tournament_id, user_id, total_points, bonus_points, joined_at)
        VALUES (:tournament_id, :user_id, 0, 0, :joined_at)
        RETURNING *
        """
    return assert_some(
        await fetch_one_parsed(
            database,
            Participant,
            query,
            {"tournament_id": tournament_id, "user_id": user_id, "joined_at": datetime_utc.now()},
        )
    )


async def sql_delete_participant_and_predictions(
    tournament_id: TournamentId, user_id: UserId
) -> None:
    values = {"tournament_id": tournament_id, "user_id": user_id}
    with translate_store_errors():
        async with database.transaction():
            await database.execute(
                """
                DELETE FROM predictions p
                USING matches m
                WHERE m.id = p.match_id
                  AND m.tournament_id = :tournament_id
                  AND p.user_id = :user_id
                """,
                values=values,
            )
            await database.execute(
                """
                DELETE FROM participants
                WHERE tournament_id = :tournament_id
                  AND user_id = :user_id
                """,
                values=values,
            )


async def count_participations_of_user(user_id: UserId) -> int:
    query = """
        SELECT count(*)
        FROM participants
        WHERE user_id = :user_id
        """
    return await fetch_count(database, query, {"user_id": user_id})


async def get_total_points_of_user(user_id: UserId) -> list[int | None]:
    query = """
        SELECT total_points
        FROM participants
        WHERE user_id = :user_id
        """
    return await fetch_column(database, "total_points", query, {"user_id": user_id})


async def get_leaderboard_entries(tournament_id: TournamentId) -> list[LeaderboardEntry]:
    query = """
        SELECT p.*, u.username, u.avatar_url
        FROM participants p
        JOIN users u ON u.id = p.user_id
        WHERE p.tournament_id = :tournament_id
        ORDER BY p.total_points DESC NULLS LAST, p.joined_at ASC
        """
    return await fetch_all_parsed(
        database, LeaderboardEntry, query, {"tournament_id": tournament_id}
    )
