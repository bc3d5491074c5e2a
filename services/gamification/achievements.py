"""Premium achievements: yearly and lifetime milestones, grouped by family."""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from .models import Activity, PremiumAchievement

YEAR_DISTANCE_KM = 10000
YEAR_ELEVATION_M = 200000
YEAR_HOURS = 365
LIFETIME_ACTIVITIES = 1000

FAMILIES: Dict[str, PremiumAchievement] = {
    "10k_year": PremiumAchievement(
        id="10k_year", label="10,000 km Year", description="Covered 10k km in a year", emoji="🚀"
    ),
    "200k_climb": PremiumAchievement(
        id="200k_climb", label="200k Climber", description="200,000m elevation in a year", emoji="🗻"
    ),
    "365_hours": PremiumAchievement(
        id="365_hours", label="365 Hour Year", description="Averaged 1 hour per day", emoji="⏱️"
    ),
    "1k_activities": PremiumAchievement(
        id="1k_activities", label="1,000 Activities", description="Lifetime club member", emoji="📈"
    ),
}


def qualifying_milestones(activities: Sequence[Activity]) -> List[str]:
    """Family id for every qualifying year (and once for lifetime milestones)."""
    by_year: Dict[int, List[Activity]] = defaultdict(list)
    for activity in activities:
        by_year[activity.started_at.year].append(activity)

    hits: List[str] = []
    for _, year_acts in by_year.items():
        distance_km = sum(a.distance or 0.0 for a in year_acts) / 1000
        elevation_m = sum(a.total_elevation_gain or 0.0 for a in year_acts)
        hours = sum(a.moving_time or 0.0 for a in year_acts) / 3600
        if distance_km >= YEAR_DISTANCE_KM:
            hits.append("10k_year")
        if elevation_m >= YEAR_ELEVATION_M:
            hits.append("200k_climb")
        if hours >= YEAR_HOURS:
            hits.append("365_hours")

    if len(activities) >= LIFETIME_ACTIVITIES:
        hits.append("1k_activities")
    return hits


def premium_achievements(activities: Sequence[Activity]) -> List[PremiumAchievement]:
    counts: Dict[str, int] = {}
    for family in qualifying_milestones(activities):
        counts[family] = counts.get(family, 0) + 1

    grouped = [
        PremiumAchievement(
            id=family,
            label=FAMILIES[family].label,
            description=FAMILIES[family].description,
            emoji=FAMILIES[family].emoji,
            count=count,
        )
        for family, count in counts.items()
    ]
    # stable: ties keep first-qualified order
    return sorted(grouped, key=lambda a: a.count, reverse=True)
