from typing import Any

import pytest
from asyncpg.exceptions import UniqueViolationError

from pickem.logic import tournaments as tournaments_logic
from pickem.models.db.participant import LeaderboardEntry
from pickem.sql import participants as participants_sql
from pickem.utils.dummy_records import DUMMY_MOCK_TIME
from pickem.utils.errors import ConstraintViolation, UniqueIndex
from pickem.utils.id_types import ParticipantId, TournamentId, UserId


class _FakeRecord:
    def __init__(self, mapping: dict[str, Any]) -> None:
        self._mapping = mapping


class _DummyTransaction:
    async def __aenter__(self) -> "_DummyTransaction":
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> bool:
        return False


def _leaderboard_entry(user_id: int, total_points: int | None) -> LeaderboardEntry:
    return LeaderboardEntry(
        id=ParticipantId(user_id),
        tournament_id=TournamentId(1),
        user_id=UserId(user_id),
        total_points=total_points,
        joined_at=DUMMY_MOCK_TIME,
        username=f"player{user_id}",
    )


@pytest.mark.asyncio
async def test_joining_twice_raises_constraint_violation(monkeypatch: pytest.MonkeyPatch) -> None:
    joined: set[tuple[int, int]] = set()

    async def fake_fetch_one(query: str, values: dict[str, Any]) -> _FakeRecord:
        key = (values["tournament_id"], values["user_id"])
        if key in joined:
            exc = UniqueViolationError("duplicate key value violates unique constraint")
            exc.constraint_name = "participants_tournament_id_user_id_key"  # type: ignore[misc]
            raise exc

        joined.add(key)
        return _FakeRecord({"id": 1, "total_points": 0, "bonus_points": 0, "rank": None, **values})

    monkeypatch.setattr(participants_sql.database, "fetch_one", fake_fetch_one)

    participant = await tournaments_logic.join_tournament(TournamentId(4), UserId(8))
    assert participant.tournament_id == TournamentId(4)
    assert participant.user_id == UserId(8)

    with pytest.raises(ConstraintViolation) as exc_info:
        await tournaments_logic.join_tournament(TournamentId(4), UserId(8))

    assert exc_info.value.constraint is UniqueIndex.participants_tournament_id_user_id_key
    assert exc_info.value.message == "You already joined this tournament"


@pytest.mark.asyncio
async def test_remove_participant_deletes_predictions_and_membership(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    executed: list[tuple[str, dict[str, Any]]] = []

    async def fake_execute(query: str, values: dict[str, Any]) -> None:
        executed.append((query, values))

    monkeypatch.setattr(participants_sql.database, "execute", fake_execute)
    monkeypatch.setattr(participants_sql.database, "transaction", lambda: _DummyTransaction())

    await tournaments_logic.remove_participant(TournamentId(4), UserId(8))

    assert len(executed) == 2
    assert "DELETE FROM predictions" in executed[0][0]
    assert "DELETE FROM participants" in executed[1][0]
    assert all(values == {"tournament_id": 4, "user_id": 8} for _, values in executed)


@pytest.mark.asyncio
async def test_leaderboard_ranks_follow_store_order(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_entries(_: TournamentId) -> list[LeaderboardEntry]:
        return [_leaderboard_entry(3, 12), _leaderboard_entry(1, 9), _leaderboard_entry(2, None)]

    monkeypatch.setattr(tournaments_logic, "get_leaderboard_entries", fake_entries)

    leaderboard = await tournaments_logic.get_leaderboard(TournamentId(1))

    assert [(entry.user_id, entry.rank) for entry in leaderboard] == [
        (UserId(3), 1),
        (UserId(1), 2),
        (UserId(2), 3),
    ]
