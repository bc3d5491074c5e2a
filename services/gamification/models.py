"""Data structures produced and consumed by the gamification engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .constants import COIN_ORDER, DISCIPLINES


def parse_dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def empty_wallet() -> Dict[str, int]:
    return {symbol: 0 for symbol in COIN_ORDER}


def discipline_of(activity_type: Optional[str]) -> Optional[str]:
    """Map a raw type onto run/ride/swim by substring, or None."""
    lowered = (activity_type or "").lower()
    for discipline in DISCIPLINES:
        if discipline in lowered:
            return discipline
    return None


@dataclass
class Medal:
    id: str
    name: str
    emoji: str
    description: str
    rarity: str
    category: str
    value: int
    count: int = 0


@dataclass
class Activity:
    id: int
    name: str
    distance: float
    moving_time: float
    elapsed_time: float
    total_elevation_gain: float
    type: str
    start_date: str
    start_date_local: str
    average_speed: float
    kudos_count: int
    sport_type: Optional[str] = None
    max_speed: Optional[float] = None
    calories: Optional[float] = None
    kilojoules: Optional[float] = None
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    # Filled in by enrichment
    earned_coins: List[str] = field(default_factory=list)
    earned_medals: List[Medal] = field(default_factory=list)
    earned_value: float = 0

    @property
    def discipline(self) -> Optional[str]:
        return discipline_of(self.type)

    @property
    def started_at(self) -> datetime:
        """UTC start; unparseable timestamps sort as the epoch."""
        parsed = parse_dt(self.start_date)
        if parsed is None:
            return datetime.fromtimestamp(0, tz=timezone.utc)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    @property
    def started_at_local(self) -> datetime:
        """Wall-clock start in the athlete's timezone, tz stripped."""
        parsed = parse_dt(self.start_date_local)
        if parsed is None:
            return self.started_at.replace(tzinfo=None)
        return parsed.replace(tzinfo=None)

    @property
    def distance_km(self) -> float:
        return (self.distance or 0.0) / 1000

    @property
    def hours(self) -> float:
        return (self.moving_time or 0.0) / 3600


@dataclass
class Totals:
    distance: float = 0.0
    elevation: float = 0.0
    hours: float = 0.0
    calories: float = 0.0
    activities: int = 0
    likes: int = 0
    pizzas: float = 0.0
    everests: float = 0.0
    world_trips: float = 0.0


@dataclass
class DisciplineStats:
    count: int = 0
    distance_km: float = 0.0
    elevation_m: float = 0.0
    time_seconds: float = 0.0
    avg_speed: Optional[float] = None
    avg_dist: Optional[float] = None


@dataclass
class MonthlyStats:
    month_key: str
    label: str
    distance: float = 0.0
    elevation: float = 0.0
    hours: float = 0.0
    coins_value: float = 0.0
    medals_value: float = 0.0
    total_value: float = 0.0
    activity_count: int = 0
    activities: List[Activity] = field(default_factory=list)
    coins_breakdown: Dict[str, int] = field(default_factory=empty_wallet)
    medals_earned: List[Medal] = field(default_factory=list)


@dataclass
class HeatmapDay:
    date: str
    intensity: int = 0
    value: float = 0.0
    has_medal: bool = False
    activities: List[Activity] = field(default_factory=list)
    coins: List[str] = field(default_factory=list)
    medals: List[Medal] = field(default_factory=list)


@dataclass(frozen=True)
class RankConfig:
    name: str
    emoji: str
    min_hours: float
    tier: str


@dataclass(frozen=True)
class LeagueClass:
    name: str
    description: str
    emoji: str
    reasons: Tuple[str, ...]
    tier: str


@dataclass
class EnduranceSeries:
    dates: List[str] = field(default_factory=list)
    distance: List[Optional[float]] = field(default_factory=list)
    elevation: List[Optional[float]] = field(default_factory=list)
    time: List[Optional[float]] = field(default_factory=list)


@dataclass
class PremiumAchievement:
    id: str
    label: str
    description: str
    emoji: str
    count: int = 1


@dataclass
class UserData:
    athlete: Dict[str, Any]
    activities: List[Activity]
    wallet: Dict[str, int]
    medals: List[Medal]
    premium_achievements: List[PremiumAchievement]
    totals: Totals
    level: int
    rank: RankConfig
    next_rank: Optional[RankConfig]
    next_rank_progress: float
    wallet_value: float
    monthly_stats: List[MonthlyStats]
    league_class: LeagueClass
    discipline_stats: Dict[str, DisciplineStats]
    heatmap: List[HeatmapDay]
    endurance_stats: Dict[str, EnduranceSeries]
