from collections.abc import Collection, Iterable

from heliclockter import datetime_utc

from pickem.models.dashboard import TournamentPendingMatches
from pickem.models.db.match import Match, MatchWithTournament
from pickem.models.db.tournament import TournamentStatus
from pickem.utils.id_types import MatchId, TournamentId


def merge_visible_tournament_ids(
    participant_tournament_ids: Iterable[TournamentId],
    administered_tournament_ids: Iterable[TournamentId],
) -> list[TournamentId]:
    """
    Tournaments a user can see: the ones they joined plus the non-draft ones they administer.

    The administered ids are expected to be pre-filtered on status by the store query.
    """
    return list(dict.fromkeys([*participant_tournament_ids, *administered_tournament_ids]))


def is_match_open_for_prediction(match: Match, now: datetime_utc) -> bool:
    if match.result is not None:
        return False

    if match.locked_at is not None and match.locked_at <= now:
        return False

    if match.start_time is not None and match.start_time <= now:
        return False

    return not match.has_placeholder_team


def _start_time_sort_key(match: Match) -> tuple[bool, datetime_utc | None]:
    # Matches without a start time go last.
    return match.start_time is None, match.start_time


def filter_eligible_matches(
    matches: Iterable[MatchWithTournament], now: datetime_utc, limit: int
) -> list[MatchWithTournament]:
    """
    Keep the matches open for prediction at `now`, ordered by start time and capped at `limit`.

    The cap only bounds what is displayed: when more matches are eligible, the earliest
    starting ones are kept.
    """
    eligible = [
        match
        for match in matches
        if match.tournament.status is not TournamentStatus.DRAFT
        and is_match_open_for_prediction(match, now)
    ]
    eligible.sort(key=_start_time_sort_key)
    return eligible[:limit]


def remove_already_predicted(
    matches: Iterable[MatchWithTournament], predicted_match_ids: Collection[MatchId]
) -> list[MatchWithTournament]:
    """
    Drop the matches the user already predicted.

    The store cannot express "not in this user's predictions" as a filter on the open matches
    query, so both are fetched independently and reconciled here.
    """
    predicted = set(predicted_match_ids)
    return [match for match in matches if match.id not in predicted]


def group_by_tournament(matches: Iterable[MatchWithTournament]) -> list[TournamentPendingMatches]:
    """Group matches per tournament, in order of first appearance, keeping the input order."""
    groups: dict[TournamentId, TournamentPendingMatches] = {}
    for match in matches:
        if match.tournament_id not in groups:
            groups[match.tournament_id] = TournamentPendingMatches(
                tournament=match.tournament, matches=[]
            )
        groups[match.tournament_id].matches.append(match)

    return list(groups.values())
