from typing import Any

import pytest
from heliclockter import timedelta

from pickem.logic import predictions as predictions_logic
from pickem.logic.predictions import is_match_locked, submit_prediction, withdraw_prediction
from pickem.models.db.match import MatchResult, MatchResultBody
from pickem.models.db.prediction import Prediction, PredictionBody, PredictionInsertable
from pickem.models.db.tournament import Tournament
from pickem.utils.dummy_records import (
    DUMMY_DRAFT_TOURNAMENT,
    DUMMY_MOCK_TIME,
    DUMMY_TOURNAMENT,
    dummy_match,
    dummy_tournament_record,
)
from pickem.utils.errors import PredictionLocked, PredictionNotAllowed
from pickem.utils.id_types import MatchId, PredictionId, TournamentId, UserId

NOW = DUMMY_MOCK_TIME
BODY = PredictionBody(predicted_winner="Lions", predicted_score="2-1")


def _prediction(prediction_id: int, body: PredictionBody = BODY) -> Prediction:
    return Prediction(
        id=PredictionId(prediction_id),
        match_id=MatchId(1),
        user_id=UserId(7),
        predicted_winner=body.predicted_winner,
        predicted_score=body.predicted_score,
        created=NOW,
    )


def _patch_membership(
    monkeypatch: pytest.MonkeyPatch,
    tournament: Tournament | None = None,
    participant_ids: tuple[UserId, ...] = (UserId(7),),
) -> None:
    tournament = dummy_tournament_record() if tournament is None else tournament

    async def fake_get_tournament(_: TournamentId) -> Tournament:
        return tournament

    async def fake_is_user_participant(_: TournamentId, user_id: UserId) -> bool:
        return user_id in participant_ids

    monkeypatch.setattr(predictions_logic, "sql_get_tournament", fake_get_tournament)
    monkeypatch.setattr(predictions_logic, "sql_is_user_participant", fake_is_user_participant)


def test_is_match_locked() -> None:
    assert is_match_locked(dummy_match(1), NOW) is False
    assert is_match_locked(dummy_match(1, locked_at=NOW + timedelta(minutes=1)), NOW) is False
    assert is_match_locked(dummy_match(1, locked_at=NOW), NOW) is True
    assert is_match_locked(dummy_match(1, locked_at=NOW - timedelta(minutes=1)), NOW) is True
    assert is_match_locked(dummy_match(1, result=MatchResult(winner="Lions", score="1-0")), NOW)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "match",
    [
        dummy_match(1, locked_at=NOW - timedelta(minutes=1)),
        dummy_match(1, start_time=NOW - timedelta(minutes=1)),
        dummy_match(1, result=MatchResult(winner="Tigers", score="0-3")),
        dummy_match(1, team_b="TBD"),
        dummy_match(1, is_bye=True),
    ],
)
async def test_submit_prediction_refuses_closed_matches(match: Any) -> None:
    with pytest.raises(PredictionLocked):
        await submit_prediction(match, UserId(7), BODY, now=NOW)


@pytest.mark.asyncio
async def test_submit_prediction_creates_new_prediction(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[PredictionInsertable] = []

    async def fake_get_user_prediction(_: MatchId, __: UserId) -> None:
        return None

    async def fake_create(prediction: PredictionInsertable) -> Prediction:
        created.append(prediction)
        return _prediction(10)

    _patch_membership(monkeypatch)
    monkeypatch.setattr(predictions_logic, "sql_get_user_prediction", fake_get_user_prediction)
    monkeypatch.setattr(predictions_logic, "sql_create_prediction", fake_create)

    match = dummy_match(1, start_time=NOW + timedelta(hours=1))
    prediction = await submit_prediction(match, UserId(7), BODY, now=NOW)

    assert prediction.id == PredictionId(10)
    assert created[0].match_id == MatchId(1)
    assert created[0].points_earned is None
    assert created[0].created == NOW


@pytest.mark.asyncio
async def test_submit_prediction_updates_existing_prediction(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    updated: list[tuple[PredictionId, PredictionBody]] = []
    new_body = PredictionBody(predicted_winner="Tigers", predicted_score="0-2")

    async def fake_get_user_prediction(_: MatchId, __: UserId) -> Prediction:
        return _prediction(10)

    async def fake_update(prediction_id: PredictionId, body: PredictionBody) -> Prediction:
        updated.append((prediction_id, body))
        return _prediction(prediction_id, body)

    async def fake_create(_: PredictionInsertable) -> Prediction:
        raise AssertionError("should update the existing prediction")

    _patch_membership(monkeypatch)
    monkeypatch.setattr(predictions_logic, "sql_get_user_prediction", fake_get_user_prediction)
    monkeypatch.setattr(predictions_logic, "sql_update_prediction", fake_update)
    monkeypatch.setattr(predictions_logic, "sql_create_prediction", fake_create)

    prediction = await submit_prediction(dummy_match(1), UserId(7), new_body, now=NOW)

    assert updated == [(PredictionId(10), new_body)]
    assert prediction.predicted_winner == "Tigers"


@pytest.mark.asyncio
async def test_enter_match_result_stamps_played_time(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    async def fake_set_result(match_id: MatchId, result: MatchResultBody, played_at: Any) -> None:
        calls.append((match_id, result, played_at))
        return None

    monkeypatch.setattr(predictions_logic, "sql_set_match_result", fake_set_result)

    result = MatchResultBody(winner="Lions", score="3-1")
    assert await predictions_logic.enter_match_result(MatchId(99), result) is None
    assert calls[0][0] == MatchId(99)
    assert calls[0][1] == result
    assert calls[0][2] is not None


@pytest.mark.asyncio
async def test_withdraw_prediction_deletes_existing(monkeypatch: pytest.MonkeyPatch) -> None:
    deleted: list[tuple[PredictionId, UserId]] = []

    async def fake_get_user_prediction(_: MatchId, __: UserId) -> Prediction:
        return _prediction(4)

    async def fake_delete(prediction_id: PredictionId, user_id: UserId) -> None:
        deleted.append((prediction_id, user_id))

    _patch_membership(monkeypatch)
    monkeypatch.setattr(predictions_logic, "sql_get_user_prediction", fake_get_user_prediction)
    monkeypatch.setattr(predictions_logic, "sql_delete_prediction", fake_delete)

    match = dummy_match(1, start_time=NOW + timedelta(hours=1))
    assert await withdraw_prediction(match, UserId(7), now=NOW) is True
    assert deleted == [(PredictionId(4), UserId(7))]


@pytest.mark.asyncio
async def test_withdraw_prediction_without_prediction(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_get_user_prediction(_: MatchId, __: UserId) -> None:
        return None

    _patch_membership(monkeypatch)
    monkeypatch.setattr(predictions_logic, "sql_get_user_prediction", fake_get_user_prediction)

    match = dummy_match(1, start_time=NOW + timedelta(hours=1))
    assert await withdraw_prediction(match, UserId(7), now=NOW) is False


@pytest.mark.asyncio
async def test_withdraw_prediction_refuses_locked_match() -> None:
    match = dummy_match(1, locked_at=NOW - timedelta(minutes=5))
    with pytest.raises(PredictionLocked):
        await withdraw_prediction(match, UserId(7), now=NOW)


@pytest.mark.asyncio
async def test_submit_prediction_refuses_non_member(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_membership(monkeypatch, participant_ids=(UserId(7),))

    async def fake_create(_: PredictionInsertable) -> Prediction:
        raise AssertionError("non members cannot predict")

    monkeypatch.setattr(predictions_logic, "sql_create_prediction", fake_create)

    match = dummy_match(1, start_time=NOW + timedelta(hours=1))
    with pytest.raises(PredictionNotAllowed):
        await submit_prediction(match, UserId(99), BODY, now=NOW)


@pytest.mark.asyncio
async def test_submit_prediction_refuses_draft_tournament_even_for_participant(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _patch_membership(monkeypatch, dummy_tournament_record(DUMMY_DRAFT_TOURNAMENT))

    match = dummy_match(1, tournament=DUMMY_DRAFT_TOURNAMENT, start_time=NOW + timedelta(hours=1))
    with pytest.raises(PredictionNotAllowed):
        await submit_prediction(match, UserId(7), BODY, now=NOW)


@pytest.mark.asyncio
async def test_submit_prediction_allows_admin_of_active_tournament(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    created: list[PredictionInsertable] = []
    _patch_membership(
        monkeypatch, dummy_tournament_record(DUMMY_TOURNAMENT, admin_id=UserId(42)), ()
    )

    async def fake_get_user_prediction(_: MatchId, __: UserId) -> None:
        return None

    async def fake_create(prediction: PredictionInsertable) -> Prediction:
        created.append(prediction)
        return _prediction(11)

    monkeypatch.setattr(predictions_logic, "sql_get_user_prediction", fake_get_user_prediction)
    monkeypatch.setattr(predictions_logic, "sql_create_prediction", fake_create)

    match = dummy_match(1, start_time=NOW + timedelta(hours=1))
    await submit_prediction(match, UserId(42), BODY, now=NOW)

    assert [prediction.user_id for prediction in created] == [UserId(42)]


@pytest.mark.asyncio
async def test_withdraw_prediction_refuses_non_member(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_membership(monkeypatch, participant_ids=())

    match = dummy_match(1, start_time=NOW + timedelta(hours=1))
    with pytest.raises(PredictionNotAllowed):
        await withdraw_prediction(match, UserId(7), now=NOW)
