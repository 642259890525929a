from collections.abc import Iterator
from contextlib import contextmanager
from enum import auto

from asyncpg.exceptions import InterfaceError, PostgresError, UniqueViolationError

from pickem.utils.logging import logger
from pickem.utils.types import EnumAutoStr


class UniqueIndex(EnumAutoStr):
    participants_tournament_id_user_id_key = auto()
    predictions_match_id_user_id_key = auto()
    tournaments_invite_code_key = auto()
    users_email_key = auto()


unique_index_violation_error_lookup = {
    UniqueIndex.participants_tournament_id_user_id_key: "You already joined this tournament",
    UniqueIndex.predictions_match_id_user_id_key: "You already predicted this match",
    UniqueIndex.tournaments_invite_code_key: "This invite code is already in use",
    UniqueIndex.users_email_key: "This email is already taken",
}


class PickemError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreQueryFailure(PickemError):
    """A query against the record store failed; carries the store's message."""


class ConstraintViolation(PickemError):
    def __init__(self, message: str, constraint: UniqueIndex | None = None) -> None:
        super().__init__(message)
        self.constraint = constraint


class PredictionLocked(PickemError):
    pass


class PredictionNotAllowed(PickemError):
    """The user is not a member of the match's tournament, or the tournament is a draft."""


def _lookup_unique_index(constraint_name: str | None) -> UniqueIndex | None:
    try:
        return UniqueIndex(constraint_name)
    except ValueError:
        return None


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """
    Translate driver exceptions raised inside the block into the engine's error taxonomy.

    Unique violations become a `ConstraintViolation` carrying a user-facing message, every other
    driver or connection failure becomes a `StoreQueryFailure`. Nothing is retried.
    """
    try:
        yield
    except UniqueViolationError as exc:
        constraint = _lookup_unique_index(getattr(exc, "constraint_name", None))
        message = (
            unique_index_violation_error_lookup[constraint]
            if constraint is not None
            else "This record already exists"
        )
        raise ConstraintViolation(message, constraint) from exc
    except (PostgresError, InterfaceError, OSError) as exc:
        logger.warning(f"Store query failed: {exc}")
        raise StoreQueryFailure(str(exc)) from exc
