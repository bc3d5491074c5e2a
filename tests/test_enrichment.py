from datetime import datetime, timezone

import pytest

from services.gamification.constants import BAG, CROWN, DIAMOND, GOLD_BAR, STANDARD
from services.gamification.enrichment import award_coins, enrich_activity, estimate_calories
from tests.fixtures.build_fixture_activities import make_activity


def test_calories_prefer_reported_value():
    act = make_activity(calories=500.0, kilojoules=4184.0)
    assert estimate_calories(act) == 500.0


def test_calories_fall_back_to_kilojoules():
    act = make_activity(calories=None, kilojoules=4184.0)
    assert estimate_calories(act) == pytest.approx(1000.0)


def test_calories_fall_back_to_moving_time():
    act = make_activity(calories=None, kilojoules=None, moving_time=3600)
    assert estimate_calories(act) == pytest.approx(510.0)


def test_run_marathon_earns_diamond_distance_coin():
    act = make_activity(distance=42300.0)
    assert award_coins(act, 1500.0) == [DIAMOND]


def test_ride_120km_earns_gold_bar_only():
    act = make_activity(type="Ride", distance=120000.0, total_elevation_gain=900.0)
    assert award_coins(act, 1800.0) == [GOLD_BAR]


def test_categories_stack_but_tiers_do_not():
    act = make_activity(distance=70000.0, total_elevation_gain=3100.0)
    assert award_coins(act, 4500.0) == [CROWN, CROWN, DIAMOND]


def test_swim_earns_no_distance_coin():
    act = make_activity(type="Swim", distance=5000.0, total_elevation_gain=0.0)
    assert award_coins(act, 2500.0) == [BAG]


def test_distance_tier_boundaries_are_inclusive():
    assert award_coins(make_activity(distance=10000.0), 0) == [STANDARD]
    assert award_coins(make_activity(distance=9999.0), 0) == []
    assert award_coins(make_activity(type="VirtualRide", distance=50000.0), 0) == [STANDARD]


def test_marathon_activity_value():
    act = enrich_activity(make_activity(distance=42300.0, moving_time=12600, calories=1500.0))
    assert act.earned_coins == [DIAMOND]
    assert [m.id for m in act.earned_medals] == ["marathon_finisher"]
    assert act.earned_medals[0].rarity == "obsidian"
    assert act.earned_value == 60000


def test_enrichment_returns_copy():
    original = make_activity(distance=42300.0, calories=None)
    enriched = enrich_activity(original)
    assert enriched is not original
    assert original.earned_coins == []
    assert original.earned_medals == []
    assert original.earned_value == 0
    assert original.calories is None
    assert enriched.calories == pytest.approx(255.0)


def test_time_of_day_medals_use_local_wall_clock():
    early = make_activity(
        start_date="2026-03-14T12:30:00Z",
        start_date_local="2026-03-14T05:30:00Z",
    )
    late = make_activity(start_date_local="2026-03-14T21:05:00")
    assert [m.id for m in enrich_activity(early).earned_medals] == ["early_riser"]
    assert [m.id for m in enrich_activity(late).earned_medals] == ["night_owl"]


def test_calendar_medals():
    christmas = make_activity(start_date_local="2025-12-25T10:00:00Z")
    new_year = make_activity(start_date_local="2026-01-01T10:00:00Z")
    assert [m.id for m in enrich_activity(christmas).earned_medals] == ["christmas"]
    assert [m.id for m in enrich_activity(new_year).earned_medals] == ["new_year"]


def test_estimated_calories_feed_peak_fueler():
    act = enrich_activity(make_activity(type="Ride", distance=30000.0, calories=None, kilojoules=17000.0))
    assert "peak_fueler" in [m.id for m in act.earned_medals]
    assert DIAMOND in act.earned_coins


def test_earned_value_is_sum_of_coins_and_medals():
    act = enrich_activity(
        make_activity(
            type="Ride",
            distance=55000.0,
            total_elevation_gain=2100.0,
            calories=None,
            kilojoules=9000.0,
        )
    )
    assert act.earned_coins == [STANDARD, DIAMOND, BAG]
    assert [m.id for m in act.earned_medals] == ["alpine_sprinter"]
    assert act.earned_value == 200 + 10000 + 1000 + 10000


def test_snapshot_medals_count_once_per_activity():
    act = enrich_activity(make_activity(kudos_count=120, start=datetime(2026, 3, 1, 12, tzinfo=timezone.utc)))
    ids = [m.id for m in act.earned_medals]
    assert ids == ["crowd_pleaser", "community_star"]
    assert all(m.count == 1 for m in act.earned_medals)


def test_half_marathon_stops_at_marathon_distance():
    half = enrich_activity(make_activity(distance=21097.0))
    just_short = enrich_activity(make_activity(distance=42194.0))
    full = enrich_activity(make_activity(distance=42195.0))
    assert "half_marathon" in [m.id for m in half.earned_medals]
    assert "half_marathon" in [m.id for m in just_short.earned_medals]
    assert [m.id for m in full.earned_medals] == ["marathon_finisher"]


def test_medal_disciplines_match_type_variants():
    virtual = enrich_activity(make_activity(type="VirtualRide", distance=200000.0))
    assert [m.id for m in virtual.earned_medals] == ["ultra_voyager", "century_ride"]
