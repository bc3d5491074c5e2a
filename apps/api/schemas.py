from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: Optional[str] = None
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str
    version: Optional[str] = None


# --- Request ---


class ActivityIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

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


class GamificationRequest(BaseModel):
    athlete: Dict[str, Any] = Field(default_factory=dict)
    activities: List[ActivityIn] = Field(default_factory=list)


# --- Response ---


class MedalOut(CamelModel):
    id: str
    name: str
    emoji: str
    description: str
    rarity: str
    category: Optional[str] = None
    count: int
    value: int


class ActivityOut(ActivityIn):
    earned_coins: List[str] = Field(default_factory=list)
    earned_medals: List[MedalOut] = Field(default_factory=list)
    earned_value: float = 0


class PremiumAchievementOut(CamelModel):
    id: str
    label: str
    description: str
    emoji: str
    count: int


class RankOut(CamelModel):
    name: str
    emoji: str
    min_hours: float
    tier: str


class TotalsOut(CamelModel):
    distance: float
    elevation: float
    hours: float
    calories: float
    activities: int
    likes: int
    pizzas: float
    everests: float
    world_trips: float


class MonthlyStatsOut(CamelModel):
    month_key: str
    label: str
    distance: float
    elevation: float
    hours: float
    coins_value: float
    medals_value: float
    total_value: float
    activity_count: int
    activities: List[ActivityOut] = Field(default_factory=list)
    coins_breakdown: Dict[str, int] = Field(default_factory=dict)
    medals_earned: List[MedalOut] = Field(default_factory=list)


class LeagueClassOut(CamelModel):
    name: str
    description: str
    emoji: str
    reasons: List[str]
    tier: str


class DisciplineStatsOut(CamelModel):
    count: int
    distance_km: float
    elevation_m: float
    time_seconds: float
    avg_speed: Optional[float] = None
    avg_dist: Optional[float] = None


class DisciplineStatsGroup(CamelModel):
    run: DisciplineStatsOut
    ride: DisciplineStatsOut
    swim: DisciplineStatsOut


class HeatmapDayOut(CamelModel):
    date: str
    intensity: int
    value: float
    has_medal: bool
    activities: List[ActivityOut] = Field(default_factory=list)
    coins: List[str] = Field(default_factory=list)
    medals: List[MedalOut] = Field(default_factory=list)


class EnduranceSeriesOut(CamelModel):
    dates: List[str] = Field(default_factory=list)
    distance: List[Optional[float]] = Field(default_factory=list)
    elevation: List[Optional[float]] = Field(default_factory=list)
    time: List[Optional[float]] = Field(default_factory=list)


class EnduranceStatsGroup(CamelModel):
    all: EnduranceSeriesOut
    run: EnduranceSeriesOut
    ride: EnduranceSeriesOut


class UserDataResponse(CamelModel):
    athlete: Dict[str, Any] = Field(default_factory=dict)
    activities: List[ActivityOut] = Field(default_factory=list)
    wallet: Dict[str, int]
    medals: List[MedalOut] = Field(default_factory=list)
    premium_achievements: List[PremiumAchievementOut] = Field(default_factory=list)
    totals: TotalsOut
    level: int
    rank: RankOut
    next_rank: Optional[RankOut] = None
    next_rank_progress: float
    wallet_value: float
    monthly_stats: List[MonthlyStatsOut] = Field(default_factory=list)
    league_class: LeagueClassOut
    discipline_stats: DisciplineStatsGroup
    heatmap: List[HeatmapDayOut] = Field(default_factory=list)
    endurance_stats: EnduranceStatsGroup


class RanksResponse(BaseModel):
    ranks: List[RankOut] = Field(default_factory=list)


class MedalCatalogEntry(BaseModel):
    id: str
    name: str
    emoji: str
    description: str
    rarity: str
    category: str
    value: int


class MedalCatalogResponse(BaseModel):
    medals: List[MedalCatalogEntry] = Field(default_factory=list)
