"""Medal registry: named per-activity criteria with a rarity and fixed value."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Tuple

from .constants import RARITY_VALUES
from .models import Activity, Medal


@dataclass(frozen=True)
class MedalDefinition:
    id: str
    name: str
    emoji: str
    description: str
    rarity: str
    category: str
    criteria: Callable[[Activity], bool]

    @property
    def value(self) -> int:
        return RARITY_VALUES[self.rarity]

    def new_medal(self, count: int = 0) -> Medal:
        return Medal(
            id=self.id,
            name=self.name,
            emoji=self.emoji,
            description=self.description,
            rarity=self.rarity,
            category=self.category,
            value=self.value,
            count=count,
        )


def _is_run(a: Activity) -> bool:
    return a.discipline == "run"


def _is_ride(a: Activity) -> bool:
    return a.discipline == "ride"


def _local_hour(a: Activity) -> int:
    return a.started_at_local.hour


def _on_local_day(month: int, day: int) -> Callable[[Activity], bool]:
    def check(a: Activity) -> bool:
        local = a.started_at_local
        return local.month == month and local.day == day

    return check


MEDAL_DEFINITIONS: Tuple[MedalDefinition, ...] = (
    MedalDefinition("marathon_finisher", "Marathon Finisher", "🏃", "Completed a marathon",
                    "obsidian", "Volume", lambda a: _is_run(a) and a.distance >= 42195),
    MedalDefinition("ultra_runner", "Ultra Runner", "🏃‍♂️💨", "50km+ Run",
                    "obsidian", "Best in Class", lambda a: _is_run(a) and a.distance >= 50000),
    MedalDefinition("ultra_voyager", "Ultra Voyager", "🧭", "200km+ Ride",
                    "obsidian", "Best in Class", lambda a: _is_ride(a) and a.distance >= 200000),
    MedalDefinition("century_ride", "Century Ride", "💯", "100km+ Ride",
                    "auric", "Volume", lambda a: _is_ride(a) and a.distance >= 100000),
    # A marathon is not also counted as a half.
    MedalDefinition("half_marathon", "Half Marathon", "👟", "21km+ Run",
                    "cerulean", "Volume", lambda a: _is_run(a) and 21097 <= a.distance < 42195),
    # Enrichment resolves calories before criteria run.
    MedalDefinition("peak_fueler", "Peak Fueler", "🍲", "Burned 4000+ kcal",
                    "auric", "Volume", lambda a: (a.calories or 0) >= 4000),
    MedalDefinition("skyward", "Skyward Cyclist", "🚵‍♀️", "3000m+ Elevation",
                    "obsidian", "Volume", lambda a: a.total_elevation_gain >= 3000),
    MedalDefinition("alpine_sprinter", "Alpine Sprinter", "🧊", "1500m+ gain in <60km ride",
                    "amethyst", "Performance",
                    lambda a: _is_ride(a) and a.total_elevation_gain >= 1500 and a.distance < 60000),
    MedalDefinition("crowd_pleaser", "Crowd Pleaser", "👏", "50+ Kudos",
                    "auric", "Social", lambda a: a.kudos_count >= 50),
    MedalDefinition("community_star", "Community Star", "🌟", "100+ Kudos",
                    "obsidian", "Social", lambda a: a.kudos_count >= 100),
    MedalDefinition("early_riser", "Early Riser", "🌅", "Activity before 6 AM",
                    "verdant", "Special", lambda a: _local_hour(a) < 6),
    MedalDefinition("night_owl", "Night Owl", "🦉", "Activity after 9 PM",
                    "verdant", "Special", lambda a: _local_hour(a) >= 21),
    MedalDefinition("christmas", "Christmas Champion", "🎄", "Activity on Dec 25",
                    "cerulean", "Special", _on_local_day(12, 25)),
    MedalDefinition("new_year", "New Year Hero", "🎆", "Activity on Jan 1",
                    "cerulean", "Special", _on_local_day(1, 1)),
    MedalDefinition("urban_ladder", "Urban Ladder", "🏙️", "500m+ gain in <10km run",
                    "amethyst", "Performance",
                    lambda a: _is_run(a) and a.total_elevation_gain >= 500 and a.distance <= 10000),
    MedalDefinition("volcanic", "Volcanic Vertical", "🌋", "4000m+ Elevation gain",
                    "obsidian", "Best in Class", lambda a: a.total_elevation_gain >= 4000),
    MedalDefinition("tempo_trailblazer", "Tempo Trailblazer", "🚀", "Run 15km+ at <4:30/km (approx)",
                    "amethyst", "Performance",
                    lambda a: _is_run(a) and a.distance >= 15000 and (a.average_speed or 0) > 3.7),
)


def matching_definitions(activity: Activity) -> List[MedalDefinition]:
    return [definition for definition in MEDAL_DEFINITIONS if definition.criteria(activity)]


def catalog() -> List[dict]:
    return [
        {
            "id": d.id,
            "name": d.name,
            "emoji": d.emoji,
            "description": d.description,
            "rarity": d.rarity,
            "category": d.category,
            "value": d.value,
        }
        for d in MEDAL_DEFINITIONS
    ]
