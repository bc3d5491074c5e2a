"""Cumulative-hours rank ladder (6 tiers x 10 sub-levels, 100 h apart)."""
from __future__ import annotations

from typing import Optional, Tuple

from .models import RankConfig

HOURS_PER_RANK = 100
LEVELS_PER_TIER = 10
TIERS: Tuple[Tuple[str, str], ...] = (
    ("Wood", "🪵"),
    ("Metal", "⚙️"),
    ("Bronze", "🥉"),
    ("Silver", "🥈"),
    ("Gold", "🥇"),
    ("Platinum", "💎"),
)


def _build_ladder() -> Tuple[RankConfig, ...]:
    ranks = []
    hours = 0
    for tier, emoji in TIERS:
        for level in range(1, LEVELS_PER_TIER + 1):
            ranks.append(RankConfig(name=f"{tier} {level}", emoji=emoji, min_hours=hours, tier=tier))
            hours += HOURS_PER_RANK
    return tuple(ranks)


RANK_LADDER: Tuple[RankConfig, ...] = _build_ladder()


def rank_for_hours(
    hours: float, ladder: Tuple[RankConfig, ...] = RANK_LADDER
) -> Tuple[RankConfig, int, Optional[RankConfig], float]:
    """Return (rank, level, next_rank, next_rank_progress) for lifetime hours.

    level is the 1-based ladder position. next_rank is None at the top, where
    progress is reported as 100.
    """
    index = 0
    for i, rank in enumerate(ladder):
        if hours >= rank.min_hours:
            index = i
        else:
            break
    rank = ladder[index]
    next_rank = ladder[index + 1] if index + 1 < len(ladder) else None

    progress = 100.0
    if next_rank is not None:
        band = next_rank.min_hours - rank.min_hours
        if band > 0:
            progress = ((hours - rank.min_hours) / band) * 100
        progress = min(100.0, max(0.0, progress))
    return rank, index + 1, next_rank, progress
