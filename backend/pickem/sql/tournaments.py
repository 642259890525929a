from pickem.database import database
from pickem.models.db.tournament import Tournament, TournamentStatus
from pickem.utils.db import fetch_column, fetch_count, fetch_one_parsed
from pickem.utils.id_types import TournamentId, UserId


async def sql_get_tournament(tournament_id: TournamentId) -> Tournament | None:
    query = """
        SELECT *
        FROM tournaments
        WHERE id = :tournament_id
        """
    return await fetch_one_parsed(database, Tournament, query, {"tournament_id": tournament_id})


def normalize_invite_code(invite_code: str) -> str:
    return invite_code.strip().lower()


async def sql_get_tournament_by_invite_code(invite_code: str) -> Tournament | None:
    query = """
        SELECT *
        FROM tournaments
        WHERE invite_code = :invite_code
        """
    return await fetch_one_parsed(
        database, Tournament, query, {"invite_code": normalize_invite_code(invite_code)}
    )


async def get_tournament_ids_administered_by_user(
    user_id: UserId, *, excluded_status: TournamentStatus | None = None
) -> list[TournamentId]:
    status_filter = (
        "AND status != CAST(:excluded_status AS tournament_status)"
        if excluded_status is not None
        else ""
    )
    query = f"""
        SELECT id
        FROM tournaments
        WHERE admin_id = :user_id
        {status_filter}
        ORDER BY id
        """
    values: dict[str, object] = {"user_id": user_id}
    if excluded_status is not None:
        values["excluded_status"] = excluded_status.value

    return [TournamentId(x) for x in await fetch_column(database, "id", query, values)]


async def count_tournaments_organized_by_user(user_id: UserId) -> int:
    query = """
        SELECT count(*)
        FROM tournaments
        WHERE admin_id = :user_id
        """
    return await fetch_count(database, query, {"user_id": user_id})

