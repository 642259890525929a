from typing import NewType

UserId = NewType("UserId", int)
TournamentId = NewType("TournamentId", int)
MatchId = NewType("MatchId", int)
ParticipantId = NewType("ParticipantId", int)
PredictionId = NewType("PredictionId", int)
