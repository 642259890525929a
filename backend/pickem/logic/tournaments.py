from pickem.models.db.participant import LeaderboardEntry, Participant
from pickem.sql.participants import (
    get_leaderboard_entries,
    sql_create_participant,
    sql_delete_participant_and_predictions,
)
from pickem.utils.id_types import TournamentId, UserId
from pickem.utils.logging import logger


async def join_tournament(tournament_id: TournamentId, user_id: UserId) -> Participant:
    """Raises `ConstraintViolation` when the user already joined, joining twice never succeeds."""
    participant = await sql_create_participant(tournament_id, user_id)
    logger.info(f"User {user_id} joined tournament {tournament_id}")
    return participant


async def remove_participant(tournament_id: TournamentId, user_id: UserId) -> None:
    await sql_delete_participant_and_predictions(tournament_id, user_id)
    logger.info(f"User {user_id} was removed from tournament {tournament_id}")


def rank_leaderboard(entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """Entries come ordered by points then join date; ranks follow that order."""
    return [entry.model_copy(update={"rank": index}) for index, entry in enumerate(entries, 1)]


async def get_leaderboard(tournament_id: TournamentId) -> list[LeaderboardEntry]:
    return rank_leaderboard(await get_leaderboard_entries(tournament_id))
