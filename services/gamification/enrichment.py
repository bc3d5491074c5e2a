"""Per-activity enrichment: calories, coins, medals and monetary value."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from .constants import (
    CALORIE_SCALE_FACTOR,
    CALORIE_TIERS_KCAL,
    COIN_VALUES,
    ELEVATION_TIERS_M,
    KCAL_PER_HOUR,
    KCAL_PER_KILOJOULE,
    RIDE_DISTANCE_TIERS_KM,
    RUN_DISTANCE_TIERS_KM,
)
from .medals import matching_definitions
from .models import Activity, Medal


def estimate_calories(activity: Activity) -> float:
    # First match wins: reported kcal, then kilojoules, then a time estimate.
    if activity.calories:
        return float(activity.calories)
    if activity.kilojoules:
        return activity.kilojoules * KCAL_PER_KILOJOULE
    return activity.hours * KCAL_PER_HOUR * CALORIE_SCALE_FACTOR


def _first_tier(value: float, tiers: Tuple[Tuple[float, str], ...]) -> Optional[str]:
    for threshold, symbol in tiers:
        if value >= threshold:
            return symbol
    return None


def award_coins(activity: Activity, calories: float) -> List[str]:
    """Distance, elevation and calorie coins, at most one per category."""
    distance_tiers = {
        "run": RUN_DISTANCE_TIERS_KM,
        "ride": RIDE_DISTANCE_TIERS_KM,
    }.get(activity.discipline)

    candidates = [
        _first_tier(activity.distance_km, distance_tiers) if distance_tiers else None,
        _first_tier(activity.total_elevation_gain or 0.0, ELEVATION_TIERS_M),
        _first_tier(calories, CALORIE_TIERS_KCAL),
    ]
    return [symbol for symbol in candidates if symbol is not None]


def coins_value(coins: Iterable[str]) -> int:
    return sum(COIN_VALUES[symbol] for symbol in coins)


def medals_value(medals: Iterable[Medal]) -> int:
    return sum(medal.value for medal in medals)


def enrich_activity(activity: Activity) -> Activity:
    """Return an annotated copy; the input record is left untouched."""
    calories = estimate_calories(activity)
    coins = award_coins(activity, calories)
    resolved = replace(activity, calories=calories)
    medals = [definition.new_medal(count=1) for definition in matching_definitions(resolved)]
    return replace(
        resolved,
        earned_coins=coins,
        earned_medals=medals,
        earned_value=coins_value(coins) + medals_value(medals),
    )
