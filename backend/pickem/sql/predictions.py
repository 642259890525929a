from pickem.database import database
from pickem.models.dashboard import ResolvedPrediction
from pickem.models.db.prediction import Prediction, PredictionBody, PredictionInsertable
from pickem.models.db.tournament import TournamentStatus
from pickem.utils.db import fetch_all_parsed, fetch_column, fetch_count, fetch_one_parsed
from pickem.utils.errors import translate_store_errors
from pickem.utils.id_types import MatchId, PredictionId, TournamentId, UserId
from pickem.utils.types import assert_some


async def get_predicted_match_ids(user_id: UserId) -> set[MatchId]:
    query = """
        SELECT match_id
        FROM predictions
        WHERE user_id = :user_id
        """
    return {MatchId(x) for x in await fetch_column(database, "match_id", query, {"user_id": user_id})}


async def get_resolved_predictions_of_user(user_id: UserId, limit: int) -> list[ResolvedPrediction]:
    query = """
        SELECT
            p.match_id,
            p.predicted_winner,
            p.predicted_score,
            p.points_earned,
            m.tournament_id,
            m.team_a,
            m.team_b,
            m.result,
            m.played_at,
            t.name AS tournament_name,
            t.status AS tournament_status
        FROM predictions p
        JOIN matches m ON m.id = p.match_id
        JOIN tournaments t ON t.id = m.tournament_id
        WHERE p.user_id = :user_id
          AND m.result IS NOT NULL
          AND t.status != CAST(:draft_status AS tournament_status)
        ORDER BY m.played_at DESC NULLS LAST, p.match_id DESC
        LIMIT :limit
        """
    return await fetch_all_parsed(
        database,
        ResolvedPrediction,
        query,
        {"user_id": user_id, "draft_status": TournamentStatus.DRAFT.value, "limit": limit},
    )


async def count_predictions_of_user(user_id: UserId) -> int:
    query = """
        SELECT count(*)
        FROM predictions
        WHERE user_id = :user_id
        """
    return await fetch_count(database, query, {"user_id": user_id})


async def sql_get_user_prediction(match_id: MatchId, user_id: UserId) -> Prediction | None:
    query = """
        SELECT *
        FROM predictions
        WHERE match_id = :match_id
        AND user_id = :user_id
        """
    return await fetch_one_parsed(
        database, Prediction, query, {"match_id": match_id, "user_id": user_id}
    )


async def get_user_predictions_for_tournament(
    tournament_id: TournamentId, user_id: UserId
) -> list[Prediction]:
    query = """
        SELECT p.*
        FROM predictions p
        JOIN matches m ON m.id = p.match_id
        WHERE m.tournament_id = :tournament_id
        AND p.user_id = :user_id
        ORDER BY m.round, m.id
        """
    return await fetch_all_parsed(
        database, Prediction, query, {"tournament_id": tournament_id, "user_id": user_id}
    )


async def sql_create_prediction(prediction: PredictionInsertable) -> Prediction:
    """Insert a prediction, raises `ConstraintViolation` if the user already predicted the match."""
    query = """
        INSERT INTO predictions (
            match_id,
            user_id,
            predicted_winner,
            predicted_score,
            points_earned,
            created
        )
        VALUES (
            :match_id,
            :user_id,
            :predicted_winner,
            :predicted_score,
            :points_earned,
            :created
        )
        RETURNING *
        """
    return assert_some(
        await fetch_one_parsed(database, Prediction, query, prediction.model_dump())
    )


async def sql_update_prediction(
    prediction_id: PredictionId, body: PredictionBody
) -> Prediction | None:
    query = """
        UPDATE predictions
        SET
            predicted_winner = :predicted_winner,
            predicted_score = :predicted_score
        WHERE id = :prediction_id
        RETURNING *
        """
    return await fetch_one_parsed(
        database, Prediction, query, {"prediction_id": prediction_id, **body.model_dump()}
    )


async def sql_delete_prediction(prediction_id: PredictionId, user_id: UserId) -> None:
    query = """
        DELETE FROM predictions
        WHERE id = :prediction_id
        AND user_id = :user_id
        """
    with translate_store_errors():
        await database.execute(
            query=query, values={"prediction_id": prediction_id, "user_id": user_id}
        )
