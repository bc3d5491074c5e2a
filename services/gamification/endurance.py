"""Long-term trend series: trailing moving averages over chronological activities."""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Sequence

from .constants import ENDURANCE_WINDOW
from .models import Activity, EnduranceSeries


def trailing_average(values: Sequence[float], window: int) -> List[Optional[float]]:
    """Unweighted mean of the last ``window`` points; None until the window fills."""
    out: List[Optional[float]] = []
    if window <= 0:
        return [None] * len(values)
    queue: Deque[float] = deque(maxlen=window)
    for v in values:
        queue.append(v)
        out.append(sum(queue) / window if len(queue) == window else None)
    return out


def build_series(activities: Sequence[Activity], window: int = ENDURANCE_WINDOW) -> EnduranceSeries:
    # sorted() is stable and leaves the caller's list alone.
    chrono = sorted(activities, key=lambda a: a.started_at)
    return EnduranceSeries(
        dates=[a.started_at.date().isoformat() for a in chrono],
        distance=trailing_average([a.distance_km for a in chrono], window),
        elevation=trailing_average([a.total_elevation_gain or 0.0 for a in chrono], window),
        time=trailing_average([a.hours for a in chrono], window),
    )


def build_endurance_stats(
    activities: Sequence[Activity], window: int = ENDURANCE_WINDOW
) -> Dict[str, EnduranceSeries]:
    return {
        "all": build_series(activities, window),
        "run": build_series([a for a in activities if a.discipline == "run"], window),
        "ride": build_series([a for a in activities if a.discipline == "ride"], window),
    }
