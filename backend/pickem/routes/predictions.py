from fastapi import APIRouter, HTTPException
from starlette import status

from pickem.config import config
from pickem.logic.predictions import enter_match_result, submit_prediction, withdraw_prediction
from pickem.models.db.match import Match, MatchResultBody
from pickem.models.db.prediction import PredictionBody
from pickem.routes.models import (
    PredictionResponse,
    PredictionsResponse,
    SingleMatchResponse,
    SuccessResponse,
)
from pickem.sql.matches import sql_get_match
from pickem.sql.predictions import (
    get_user_predictions_for_tournament,
    sql_get_user_prediction,
)
from pickem.utils.id_types import MatchId, TournamentId, UserId

router = APIRouter(prefix=config.api_prefix)


async def _get_match_or_404(match_id: MatchId) -> Match:
    match = await sql_get_match(match_id)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return match


@router.get("/users/{user_id}/matches/{match_id}/prediction", response_model=PredictionResponse)
async def get_prediction(user_id: UserId, match_id: MatchId) -> PredictionResponse:
    return PredictionResponse(data=await sql_get_user_prediction(match_id, user_id))


@router.put("/users/{user_id}/matches/{match_id}/prediction", response_model=PredictionResponse)
async def put_prediction(
    user_id: UserId, match_id: MatchId, body: PredictionBody
) -> PredictionResponse:
    match = await _get_match_or_404(match_id)
    return PredictionResponse(data=await submit_prediction(match, user_id, body))


@router.delete("/users/{user_id}/matches/{match_id}/prediction", response_model=SuccessResponse)
async def delete_prediction(user_id: UserId, match_id: MatchId) -> SuccessResponse:
    match = await _get_match_or_404(match_id)
    if not await withdraw_prediction(match, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prediction not found")
    return SuccessResponse()


@router.get(
    "/tournaments/{tournament_id}/users/{user_id}/predictions",
    response_model=PredictionsResponse,
)
async def get_tournament_predictions(
    tournament_id: TournamentId, user_id: UserId
) -> PredictionsResponse:
    return PredictionsResponse(
        data=await get_user_predictions_for_tournament(tournament_id, user_id)
    )


@router.put("/matches/{match_id}/result", response_model=SingleMatchResponse)
async def put_match_result(match_id: MatchId, body: MatchResultBody) -> SingleMatchResponse:
    match = await enter_match_result(match_id, body)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return SingleMatchResponse(data=match)
