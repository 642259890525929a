from collections.abc import Iterable

from pickem.models.dashboard import DashboardStats


def aggregate_dashboard_stats(
    *,
    organized_count: int,
    joined_count: int,
    prediction_count: int,
    participant_points: Iterable[int | None],
) -> DashboardStats:
    # Counters may overlap: an admin that also joined a tournament counts in both.
    return DashboardStats(
        organized_count=organized_count,
        joined_count=joined_count,
        matches_with_predictions=prediction_count,
        total_points=sum(points or 0 for points in participant_points),
    )
