from typing import Any

import pytest
from asyncpg.exceptions import InterfaceError, UniqueViolationError

from pickem.sql import predictions as predictions_sql
from pickem.sql import tournaments as tournaments_sql
from pickem.utils.errors import (
    ConstraintViolation,
    StoreQueryFailure,
    UniqueIndex,
    translate_store_errors,
)
from pickem.utils.id_types import UserId


def _unique_violation(constraint_name: str) -> UniqueViolationError:
    exc = UniqueViolationError("duplicate key value violates unique constraint")
    exc.constraint_name = constraint_name  # type: ignore[misc]
    return exc


def test_unique_violation_is_translated_to_constraint_violation() -> None:
    with pytest.raises(ConstraintViolation) as exc_info:
        with translate_store_errors():
            raise _unique_violation("predictions_match_id_user_id_key")

    assert exc_info.value.constraint is UniqueIndex.predictions_match_id_user_id_key
    assert exc_info.value.message == "You already predicted this match"
    assert isinstance(exc_info.value.__cause__, UniqueViolationError)


def test_unknown_unique_violation_still_is_a_constraint_violation() -> None:
    with pytest.raises(ConstraintViolation) as exc_info:
        with translate_store_errors():
            raise _unique_violation("some_other_key")

    assert exc_info.value.constraint is None
    assert exc_info.value.message == "This record already exists"


def test_driver_failure_is_translated_to_store_query_failure() -> None:
    with pytest.raises(StoreQueryFailure, match="connection was closed") as exc_info:
        with translate_store_errors():
            raise InterfaceError("connection was closed in the middle of operation")

    assert not isinstance(exc_info.value, ConstraintViolation)


def test_unrelated_exceptions_propagate_untouched() -> None:
    with pytest.raises(KeyError):
        with translate_store_errors():
            raise KeyError("missing")


@pytest.mark.asyncio
async def test_failing_count_query_surfaces_store_message(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_fetch_val(*_: Any, **__: Any) -> int:
        raise InterfaceError("server closed the connection unexpectedly")

    monkeypatch.setattr(predictions_sql.database, "fetch_val", fake_fetch_val)

    with pytest.raises(StoreQueryFailure, match="server closed the connection unexpectedly"):
        await predictions_sql.count_predictions_of_user(UserId(1))


@pytest.mark.asyncio
async def test_unknown_invite_code_resolves_to_none(monkeypatch: pytest.MonkeyPatch) -> None:
    queried_values = []

    async def fake_fetch_one(query: str, values: dict[str, Any]) -> None:
        queried_values.append(values)
        return None

    monkeypatch.setattr(tournaments_sql.database, "fetch_one", fake_fetch_one)

    assert await tournaments_sql.sql_get_tournament_by_invite_code("  AbC-123 ") is None
    assert queried_values == [{"invite_code": "abc-123"}]
