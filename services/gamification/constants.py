"""Fixed business tables for the gamification engine.

Every table here is built once at import time and exposed read-only
(``MappingProxyType`` / tuples). Nothing in the engine mutates them.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

# Coin symbols, ascending value.
STANDARD = "💲"
BAG = "💰"
GOLD_BAR = "🧈"
DIAMOND = "💎"
CROWN = "👑"

COIN_VALUES: Mapping[str, int] = MappingProxyType(
    {
        STANDARD: 200,
        BAG: 1000,
        GOLD_BAR: 5000,
        DIAMOND: 10000,
        CROWN: 50000,
    }
)
COIN_ORDER: Tuple[str, ...] = tuple(COIN_VALUES)

RARITY_VALUES: Mapping[str, int] = MappingProxyType(
    {
        "verdant": 1000,
        "cerulean": 5000,
        "amethyst": 10000,
        "auric": 20000,
        "star": 25000,
        "obsidian": 50000,
    }
)

# Coin tiers, highest first. Within a category only the first match awards.
RUN_DISTANCE_TIERS_KM: Tuple[Tuple[float, str], ...] = (
    (65.0, CROWN),
    (42.2, DIAMOND),
    (21.1, GOLD_BAR),
    (15.0, BAG),
    (10.0, STANDARD),
)
RIDE_DISTANCE_TIERS_KM: Tuple[Tuple[float, str], ...] = (
    (200.0, CROWN),
    (150.0, DIAMOND),
    (100.0, GOLD_BAR),
    (80.0, BAG),
    (50.0, STANDARD),
)
ELEVATION_TIERS_M: Tuple[Tuple[float, str], ...] = (
    (3000.0, CROWN),
    (2000.0, DIAMOND),
    (1000.0, GOLD_BAR),
)
CALORIE_TIERS_KCAL: Tuple[Tuple[float, str], ...] = (
    (4000.0, DIAMOND),
    (2000.0, BAG),
)

# Calorie estimate
KCAL_PER_KILOJOULE = 1 / 4.184
KCAL_PER_HOUR = 600.0
CALORIE_SCALE_FACTOR = 0.85

# Novelty conversions
PIZZA_KCAL = 800.0
EVEREST_HEIGHT_M = 8849.0
EARTH_CIRCUMFERENCE_KM = 40075.0

# Heatmap
HEATMAP_DAYS = 366
# (exclusive lower bound, intensity), highest first
INTENSITY_BREAKPOINTS: Tuple[Tuple[float, int], ...] = (
    (5000.0, 4),
    (1000.0, 3),
    (200.0, 2),
    (0.0, 1),
)

# Endurance series
ENDURANCE_WINDOW = 50

# Discipline buckets, checked in this order against the lowercased type.
DISCIPLINES: Tuple[str, ...] = ("run", "ride", "swim")
