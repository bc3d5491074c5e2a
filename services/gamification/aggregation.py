"""Running aggregators and the derived-metrics pass."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from .constants import (
    COIN_VALUES,
    DISCIPLINES,
    EARTH_CIRCUMFERENCE_KM,
    EVEREST_HEIGHT_M,
    HEATMAP_DAYS,
    INTENSITY_BREAKPOINTS,
    PIZZA_KCAL,
)
from .enrichment import coins_value, medals_value
from .models import (
    Activity,
    DisciplineStats,
    HeatmapDay,
    Medal,
    MonthlyStats,
    Totals,
)


def month_key(activity: Activity) -> str:
    return activity.started_at.strftime("%Y-%m")


def month_label(activity: Activity) -> str:
    return activity.started_at.strftime("%B %Y")


def day_key(activity: Activity) -> str:
    return activity.started_at.date().isoformat()


def intensity_for(value: float) -> int:
    for lower_bound, intensity in INTENSITY_BREAKPOINTS:
        if value > lower_bound:
            return intensity
    return 0


def empty_heatmap(today: date, days: int = HEATMAP_DAYS) -> Dict[str, HeatmapDay]:
    """One zeroed day per calendar date, ending today, oldest first."""
    start = today - timedelta(days=days - 1)
    out: Dict[str, HeatmapDay] = {}
    for offset in range(days):
        key = (start + timedelta(days=offset)).isoformat()
        out[key] = HeatmapDay(date=key)
    return out


def empty_discipline_stats() -> Dict[str, DisciplineStats]:
    return {discipline: DisciplineStats() for discipline in DISCIPLINES}


def add_to_totals(totals: Totals, activity: Activity) -> None:
    totals.distance += activity.distance or 0.0
    totals.elevation += activity.total_elevation_gain or 0.0
    totals.hours += activity.hours
    totals.calories += activity.calories or 0.0
    totals.activities += 1
    totals.likes += activity.kudos_count or 0


def add_to_discipline(stats: Dict[str, DisciplineStats], activity: Activity) -> bool:
    """Route into run/ride/swim. Returns False when no bucket matches."""
    bucket = stats.get(activity.discipline or "")
    if bucket is None:
        return False
    bucket.count += 1
    bucket.distance_km += activity.distance_km
    bucket.elevation_m += activity.total_elevation_gain or 0.0
    bucket.time_seconds += activity.moving_time or 0.0
    return True


def merge_medals(target: List[Medal], awarded: Iterable[Medal]) -> None:
    """Merge per-activity awards into a month-local list keyed by medal id."""
    by_id = {medal.id: medal for medal in target}
    for medal in awarded:
        existing = by_id.get(medal.id)
        if existing is not None:
            existing.count += 1
            continue
        local = Medal(
            id=medal.id,
            name=medal.name,
            emoji=medal.emoji,
            description=medal.description,
            rarity=medal.rarity,
            category=medal.category,
            value=medal.value,
            count=1,
        )
        target.append(local)
        by_id[local.id] = local


def add_to_month(months: Dict[str, MonthlyStats], activity: Activity) -> MonthlyStats:
    key = month_key(activity)
    stats = months.get(key)
    if stats is None:
        stats = MonthlyStats(month_key=key, label=month_label(activity))
        months[key] = stats

    coin_part = coins_value(activity.earned_coins)
    medal_part = medals_value(activity.earned_medals)

    stats.distance += activity.distance or 0.0
    stats.elevation += activity.total_elevation_gain or 0.0
    stats.hours += activity.hours
    stats.coins_value += coin_part
    stats.medals_value += medal_part
    stats.total_value += coin_part + medal_part
    stats.activity_count += 1
    stats.activities.append(activity)
    for symbol in activity.earned_coins:
        stats.coins_breakdown[symbol] += 1
    merge_medals(stats.medals_earned, activity.earned_medals)
    return stats


def add_to_heatmap(days: Dict[str, HeatmapDay], activity: Activity) -> bool:
    """Fold into its day. Returns False when the day is outside the window."""
    day = days.get(day_key(activity))
    if day is None:
        return False
    day.activities.append(activity)
    day.value += activity.earned_value
    day.coins.extend(activity.earned_coins)
    if activity.earned_medals:
        day.has_medal = True
        day.medals.extend(activity.earned_medals)
    day.intensity = intensity_for(day.value)
    return True


def finalize_totals(totals: Totals) -> Totals:
    totals.pizzas = totals.calories / PIZZA_KCAL
    totals.everests = totals.elevation / EVEREST_HEIGHT_M
    totals.world_trips = (totals.distance / 1000) / EARTH_CIRCUMFERENCE_KM
    return totals


def _ratio(numerator: float, denominator: float) -> Optional[float]:
    if not denominator:
        return None
    return numerator / denominator


def finalize_discipline_stats(stats: Dict[str, DisciplineStats]) -> Dict[str, DisciplineStats]:
    """Averages stay None whenever their denominator is zero."""
    for bucket in stats.values():
        if bucket.count > 0:
            bucket.avg_dist = bucket.distance_km / bucket.count

    run = stats["run"]
    if run.count > 0:
        # pace, minutes per km
        run.avg_speed = _ratio(run.time_seconds / 60, run.distance_km)
    ride = stats["ride"]
    if ride.count > 0:
        # km/h
        ride.avg_speed = _ratio(ride.distance_km, ride.time_seconds / 3600)
    return stats


def wallet_value(wallet: Dict[str, int], medals: Iterable[Medal]) -> float:
    coin_total = sum(COIN_VALUES[symbol] * count for symbol, count in wallet.items())
    medal_total = sum(medal.count * medal.value for medal in medals)
    return coin_total + medal_total
