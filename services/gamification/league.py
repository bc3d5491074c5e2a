"""League classification: one archetype per athlete, first matching rule wins."""
from __future__ import annotations

from typing import Sequence, Tuple

from .models import Activity, LeagueClass, Totals

LEGEND = LeagueClass(
    name="Il Re Ritornato",
    description="Legendary endurance across all fields.",
    emoji="👑",
    reasons=("300+ Hours",),
    tier="tier1",
)
MOUNTAIN_GUARDIAN = LeagueClass(
    name="Il Guardiano della Montagna",
    description="Master of high altitudes and steep climbs.",
    emoji="🏔️",
    reasons=("Single climb > 2000m",),
    tier="tier2",
)
ENDURANCE_CYCLIST = LeagueClass(
    name="Il Cavaliere del Marchio",
    description="Long distance endurance cyclist.",
    emoji="🏇",
    reasons=("Ride > 150km",),
    tier="tier2",
)
ULTRA_RUNNER = LeagueClass(
    name="Il Ramingo del Nord",
    description="Ultra-distance runner and trail expert.",
    emoji="🏹",
    reasons=("Run > 30km",),
    tier="tier2",
)
SENTINEL = LeagueClass(
    name="La Sentinella",
    description="Consistent activity day in and day out.",
    emoji="🛡️",
    reasons=("100+ Activities",),
    tier="tier3",
)
BEGINNER = LeagueClass(
    name="Il Cittadino della Contea",
    description="Enjoying the journey, one step at a time.",
    emoji="🏡",
    reasons=("Beginner",),
    tier="tier5",
)


def peak_stats(activities: Sequence[Activity]) -> Tuple[float, float, float]:
    """(max run km, max ride km, max elevation m) over single activities."""
    max_run = max([a.distance_km for a in activities if a.discipline == "run"], default=0.0)
    max_ride = max([a.distance_km for a in activities if a.discipline == "ride"], default=0.0)
    max_elev = max([a.total_elevation_gain or 0.0 for a in activities], default=0.0)
    return max(0.0, max_run), max(0.0, max_ride), max(0.0, max_elev)


def determine_league_class(totals: Totals, activities: Sequence[Activity]) -> LeagueClass:
    max_run, max_ride, max_elev = peak_stats(activities)
    if totals.hours > 300:
        return LEGEND
    if max_elev > 2000:
        return MOUNTAIN_GUARDIAN
    if max_ride > 150:
        return ENDURANCE_CYCLIST
    if max_run > 30:
        return ULTRA_RUNNER
    if totals.activities > 100:
        return SENTINEL
    return BEGINNER
