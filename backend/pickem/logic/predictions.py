from heliclockter import datetime_utc

from pickem.models.db.match import Match, MatchResultBody
from pickem.models.db.prediction import Prediction, PredictionBody, PredictionInsertable
from pickem.models.db.tournament import TournamentStatus
from pickem.sql.matches import sql_set_match_result
from pickem.sql.participants import sql_is_user_participant
from pickem.sql.predictions import (
    sql_create_prediction,
    sql_delete_prediction,
    sql_get_user_prediction,
    sql_update_prediction,
)
from pickem.sql.tournaments import sql_get_tournament
from pickem.utils.errors import PredictionLocked, PredictionNotAllowed
from pickem.utils.id_types import MatchId, UserId
from pickem.utils.logging import logger
from pickem.utils.types import assert_some


def is_match_locked(match: Match, now: datetime_utc) -> bool:
    """A match is locked once it has a result or once its manual lock time has passed."""
    if match.result is not None:
        return True

    return match.locked_at is not None and match.locked_at <= now


def check_match_accepts_predictions(match: Match, now: datetime_utc) -> None:
    if is_match_locked(match, now) or (match.start_time is not None and match.start_time <= now):
        raise PredictionLocked("Predictions for this match are closed")

    if match.has_placeholder_team:
        raise PredictionLocked("The teams of this match are not known yet")


async def check_user_can_predict(match: Match, user_id: UserId) -> None:
    """
    Only members of a non-draft tournament may predict its matches.

    Members are the participants plus the tournament admin, the same users the pending
    predictions list is computed for.
    """
    tournament = await sql_get_tournament(match.tournament_id)
    if tournament is None or tournament.status is TournamentStatus.DRAFT:
        raise PredictionNotAllowed("This match is not open to predictions")

    if tournament.admin_id == user_id:
        return

    if not await sql_is_user_participant(tournament.id, user_id):
        raise PredictionNotAllowed("You are not a participant of this tournament")


async def submit_prediction(
    match: Match,
    user_id: UserId,
    body: PredictionBody,
    *,
    now: datetime_utc | None = None,
) -> Prediction:
    """
    Create the user's prediction for a match, or update it while the match is still open.

    A concurrent duplicate insert surfaces as `ConstraintViolation`.
    """
    now = datetime_utc.now() if now is None else now
    check_match_accepts_predictions(match, now)
    await check_user_can_predict(match, user_id)

    existing = await sql_get_user_prediction(match.id, user_id)
    if existing is not None:
        return assert_some(await sql_update_prediction(existing.id, body))

    return await sql_create_prediction(
        PredictionInsertable(
            match_id=match.id,
            user_id=user_id,
            predicted_winner=body.predicted_winner,
            predicted_score=body.predicted_score,
            created=now,
        )
    )


async def withdraw_prediction(
    match: Match, user_id: UserId, *, now: datetime_utc | None = None
) -> bool:
    """Delete the user's prediction while the match is open, returns whether one existed."""
    now = datetime_utc.now() if now is None else now
    check_match_accepts_predictions(match, now)
    await check_user_can_predict(match, user_id)

    existing = await sql_get_user_prediction(match.id, user_id)
    if existing is None:
        return False

    await sql_delete_prediction(existing.id, user_id)
    return True


async def enter_match_result(match_id: MatchId, result: MatchResultBody) -> Match | None:
    match = await sql_set_match_result(match_id, result, datetime_utc.now())
    if match is not None:
        logger.info(f"Result entered for match {match_id}: {result.winner} ({result.score})")
    return match
