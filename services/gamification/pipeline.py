"""Derive the full gamification state for one athlete from their activity history."""
from __future__ import annotations

import logging
import time
import uuid
from dataclasses import asdict, fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from packages.metrics import inc, observe
from packages.request_context import pipeline_run_context

from .achievements import premium_achievements
from .aggregation import (
    add_to_discipline,
    add_to_heatmap,
    add_to_month,
    add_to_totals,
    empty_discipline_stats,
    empty_heatmap,
    finalize_discipline_stats,
    finalize_totals,
    wallet_value,
)
from .constants import COIN_VALUES
from .endurance import build_endurance_stats
from .enrichment import enrich_activity
from .league import determine_league_class
from .models import Activity, Medal, MonthlyStats, Totals, UserData, empty_wallet
from .ranks import rank_for_hours

logger = logging.getLogger("fitness.gamification")

REQUIRED_FIELDS = (
    "id",
    "name",
    "distance",
    "moving_time",
    "elapsed_time",
    "total_elevation_gain",
    "type",
    "start_date",
    "start_date_local",
    "average_speed",
    "kudos_count",
)
NUMERIC_FIELDS = {
    "distance",
    "moving_time",
    "elapsed_time",
    "total_elevation_gain",
    "average_speed",
    "kudos_count",
}
_ACTIVITY_FIELDS = {f.name for f in fields(Activity)} - {"earned_coins", "earned_medals", "earned_value"}


class ActivityParseError(ValueError):
    pass


def load_activity(raw: Mapping[str, Any], index: int = 0) -> Activity:
    missing = [key for key in REQUIRED_FIELDS if key not in raw]
    if missing:
        raise ActivityParseError(
            f"Activity record {index}: missing required fields: {', '.join(missing)}"
        )
    values = {key: raw[key] for key in _ACTIVITY_FIELDS if key in raw}
    for key in NUMERIC_FIELDS:
        if values.get(key) is None:
            values[key] = 0
    return Activity(**values)


def load_activities(records: Iterable[Mapping[str, Any]]) -> List[Activity]:
    return [load_activity(raw, idx) for idx, raw in enumerate(records)]


def _sorted_medals(medal_map: Dict[str, Medal]) -> List[Medal]:
    # value desc, then count desc; ties keep first-earned order
    return sorted(medal_map.values(), key=lambda m: (-m.value, -m.count))


def process_user_data(
    athlete: Optional[Mapping[str, Any]],
    activities: Iterable[Activity],
    now: Optional[datetime] = None,
) -> UserData:
    """Compute wallet, medals, rank, monthly stats, heatmap and trends.

    Pure with respect to the caller: input activities are never mutated, the
    returned activities are enriched copies ordered newest first. ``now`` is
    read once to anchor the heatmap window (defaults to the current UTC time).
    """
    now = now or datetime.now(timezone.utc)
    started = time.perf_counter()
    run_id = uuid.uuid4().hex

    with pipeline_run_context(run_id):
        raw = list(activities)
        ordered = sorted(raw, key=lambda a: a.started_at, reverse=True)
        enriched = [enrich_activity(a) for a in ordered]

        wallet = empty_wallet()
        medal_map: Dict[str, Medal] = {}
        totals = Totals()
        discipline_stats = empty_discipline_stats()
        months: Dict[str, MonthlyStats] = {}
        heatmap_today = now.astimezone(timezone.utc).date() if now.tzinfo else now.date()
        days = empty_heatmap(heatmap_today)

        outside_window = 0
        for act in enriched:
            add_to_totals(totals, act)
            if not add_to_discipline(discipline_stats, act):
                logger.debug("activity %s type=%r has no discipline bucket", act.id, act.type)

            for symbol in act.earned_coins:
                wallet[symbol] += 1
            for award in act.earned_medals:
                medal = medal_map.get(award.id)
                if medal is None:
                    medal = replace(award, count=0)
                    medal_map[award.id] = medal
                medal.count += 1

            add_to_month(months, act)
            if not add_to_heatmap(days, act):
                outside_window += 1

        finalize_totals(totals)
        finalize_discipline_stats(discipline_stats)
        rank, level, next_rank, next_rank_progress = rank_for_hours(totals.hours)
        medals = _sorted_medals(medal_map)

        result = UserData(
            athlete=dict(athlete or {}),
            activities=enriched,
            wallet=wallet,
            medals=medals,
            premium_achievements=premium_achievements(enriched),
            totals=totals,
            level=level,
            rank=rank,
            next_rank=next_rank,
            next_rank_progress=next_rank_progress,
            wallet_value=wallet_value(wallet, medals),
            monthly_stats=sorted(months.values(), key=lambda m: m.month_key, reverse=True),
            league_class=determine_league_class(totals, enriched),
            discipline_stats=discipline_stats,
            heatmap=list(days.values()),
            endurance_stats=build_endurance_stats(raw),
        )

        duration = time.perf_counter() - started
        inc("gamification_runs_total")
        inc("gamification_activities_total", len(enriched))
        observe("gamification_run_duration_seconds", duration)
        if outside_window:
            logger.debug("%d activities outside the heatmap window", outside_window)
        logger.info(
            "gamification run activities=%d wallet_value=%.0f rank=%s league=%s %.1fms",
            len(enriched),
            result.wallet_value,
            rank.name,
            result.league_class.name,
            duration * 1000,
        )
    return result


def wallet_breakdown(data: UserData) -> Dict[str, float]:
    coins = sum(COIN_VALUES[symbol] * count for symbol, count in data.wallet.items())
    medals = sum(m.count * m.value for m in data.medals)
    return {"coins": coins, "medals": medals, "total": coins + medals}


def to_dict(data: UserData) -> Dict[str, Any]:
    return asdict(data)
