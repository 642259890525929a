from fastapi import APIRouter, HTTPException
from starlette import status

from pickem.config import config
from pickem.logic.tournaments import get_leaderboard, join_tournament, remove_participant
from pickem.models.db.tournament import TournamentJoinBody
from pickem.routes.models import (
    LeaderboardResponse,
    ParticipantResponse,
    SuccessResponse,
    TournamentInvitation,
    TournamentInvitationResponse,
)
from pickem.sql.participants import sql_is_user_participant
from pickem.sql.tournaments import sql_get_tournament, sql_get_tournament_by_invite_code
from pickem.utils.id_types import TournamentId, UserId

router = APIRouter(prefix=config.api_prefix)


@router.get(
    "/users/{user_id}/tournaments/invitations/{invite_code}",
    response_model=TournamentInvitationResponse,
)
async def get_tournament_invitation(user_id: UserId, invite_code: str) -> TournamentInvitationResponse:
    tournament = await sql_get_tournament_by_invite_code(invite_code)
    if tournament is None:
        return TournamentInvitationResponse(data=None)

    return TournamentInvitationResponse(
        data=TournamentInvitation(
            tournament=tournament.summary(),
            is_participant=await sql_is_user_participant(tournament.id, user_id),
        )
    )


@router.post("/users/{user_id}/tournaments/join", response_model=ParticipantResponse)
async def join_tournament_by_invite_code(
    user_id: UserId, body: TournamentJoinBody
) -> ParticipantResponse:
    tournament = await sql_get_tournament_by_invite_code(body.invite_code)
    if tournament is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No tournament found for this invite code",
        )

    return ParticipantResponse(data=await join_tournament(tournament.id, user_id))


@router.delete(
    "/tournaments/{tournament_id}/participants/{user_id}", response_model=SuccessResponse
)
async def delete_participant(tournament_id: TournamentId, user_id: UserId) -> SuccessResponse:
    await remove_participant(tournament_id, user_id)
    return SuccessResponse()


@router.get("/tournaments/{tournament_id}/leaderboard", response_model=LeaderboardResponse)
async def get_tournament_leaderboard(tournament_id: TournamentId) -> LeaderboardResponse:
    if await sql_get_tournament(tournament_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found"
        )

    return LeaderboardResponse(data=await get_leaderboard(tournament_id))
