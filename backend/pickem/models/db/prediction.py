from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from pickem.models.db.shared import BaseModelORM
from pickem.utils.id_types import MatchId, PredictionId, UserId


class PredictionBody(BaseModel):
    predicted_winner: str = Field(min_length=1)
    predicted_score: str = Field(min_length=1)


class PredictionInsertable(BaseModelORM):
    match_id: MatchId
    user_id: UserId
    predicted_winner: str
    predicted_score: str
    points_earned: int | None = None
    created: datetime_utc


class Prediction(PredictionInsertable):
    id: PredictionId
