from datetime import timedelta

import pytest

from packages import metrics
from services.gamification import league
from services.gamification.constants import BAG, COIN_VALUES, CROWN, DIAMOND, GOLD_BAR, STANDARD
from services.gamification.pipeline import (
    ActivityParseError,
    load_activities,
    process_user_data,
    to_dict,
    wallet_breakdown,
)
from tests.fixtures.build_fixture_activities import NOW, fixture_activities, make_activity, raw_activity


@pytest.fixture()
def result():
    return process_user_data({"id": 42, "username": "demo"}, fixture_activities(), now=NOW)


def test_empty_history():
    data = process_user_data({}, [], now=NOW)
    assert data.totals.activities == 0
    assert data.totals.distance == 0
    assert data.rank.name == "Wood 1"
    assert data.level == 1
    assert data.next_rank_progress == 0
    assert data.league_class is league.BEGINNER
    assert data.medals == []
    assert data.premium_achievements == []
    assert data.monthly_stats == []
    assert data.wallet == {STANDARD: 0, BAG: 0, GOLD_BAR: 0, DIAMOND: 0, CROWN: 0}
    assert data.wallet_value == 0
    assert len(data.heatmap) == 366
    assert all(day.intensity == 0 for day in data.heatmap)
    assert all(s.avg_speed is None and s.avg_dist is None for s in data.discipline_stats.values())
    assert data.endurance_stats["all"].dates == []


def test_athlete_is_passed_through(result):
    assert result.athlete == {"id": 42, "username": "demo"}


def test_activities_newest_first(result):
    assert [a.id for a in result.activities] == [1, 2, 3, 4, 5, 6, 7]


def test_wallet_and_medals(result):
    assert result.wallet == {STANDARD: 2, BAG: 2, GOLD_BAR: 2, DIAMOND: 2, CROWN: 0}
    assert [m.id for m in result.medals] == [
        "marathon_finisher",
        "century_ride",
        "crowd_pleaser",
        "alpine_sprinter",
    ]
    assert result.wallet_value == 132400
    assert wallet_breakdown(result) == {"coins": 32400, "medals": 100000, "total": 132400}


def test_equal_value_medals_sort_by_count():
    activities = [
        make_activity(id=1, type="Ride", distance=120000.0, start=NOW - timedelta(days=1)),
        make_activity(id=2, kudos_count=60, start=NOW - timedelta(days=2)),
        make_activity(id=3, kudos_count=75, start=NOW - timedelta(days=3)),
    ]
    data = process_user_data({}, activities, now=NOW)
    assert [(m.id, m.count) for m in data.medals] == [("crowd_pleaser", 2), ("century_ride", 1)]
    assert data.medals[0].value == data.medals[1].value


def test_wallet_value_matches_holdings(result):
    coins = sum(COIN_VALUES[symbol] * count for symbol, count in result.wallet.items())
    medals = sum(m.count * m.value for m in result.medals)
    assert result.wallet_value == coins + medals


def test_activity_values_match_awards(result):
    for act in result.activities:
        expected = sum(COIN_VALUES[c] for c in act.earned_coins) + sum(m.value for m in act.earned_medals)
        assert act.earned_value == expected


def test_monthly_totals_reconcile(result):
    assert [m.month_key for m in result.monthly_stats] == ["2026-03", "2026-02", "2026-01", "2024-01"]
    for month in result.monthly_stats:
        assert month.coins_value + month.medals_value == month.total_value
        assert month.activity_count == len(month.activities)
    assert sum(m.total_value for m in result.monthly_stats) == sum(a.earned_value for a in result.activities)
    march = result.monthly_stats[0]
    assert [a.id for a in march.activities] == [1, 2]


def test_totals_and_disciplines(result):
    assert result.totals.activities == 7
    assert result.totals.hours == pytest.approx(16.25)
    assert result.totals.likes == 2 * 6 + 55
    assert result.totals.everests == pytest.approx(result.totals.elevation / 8849)
    assert result.totals.pizzas == pytest.approx(result.totals.calories / 800)
    assert result.totals.world_trips == pytest.approx(result.totals.distance / 1000 / 40075)

    run = result.discipline_stats["run"]
    assert run.count == 3
    assert run.distance_km == pytest.approx(57.3)
    assert run.avg_speed == pytest.approx((1800 + 12600 + 1800) / 60 / 57.3)
    assert result.discipline_stats["ride"].count == 2
    assert result.discipline_stats["swim"].count == 1
    assert result.discipline_stats["swim"].avg_dist == pytest.approx(2.0)


def test_rank_and_league(result):
    assert result.rank.name == "Wood 1"
    assert result.next_rank.name == "Wood 2"
    assert result.next_rank_progress == pytest.approx(16.25)
    assert result.league_class is league.MOUNTAIN_GUARDIAN


def test_heatmap_window(result):
    assert len(result.heatmap) == 366
    assert result.heatmap[0].date == "2025-03-15"
    assert result.heatmap[-1].date == "2026-03-15"
    by_date = {d.date: d for d in result.heatmap}
    marathon_day = by_date["2026-03-05"]
    assert marathon_day.value == 60000
    assert marathon_day.intensity == 4
    assert marathon_day.has_medal
    in_window = sum(len(d.activities) for d in result.heatmap)
    assert in_window == 6


def test_endurance_series_present(result):
    series = result.endurance_stats["all"]
    assert len(series.dates) == 7
    assert series.distance == [None] * 7
    assert len(result.endurance_stats["run"].dates) == 3


def test_input_is_not_mutated():
    activities = fixture_activities()
    process_user_data({}, activities, now=NOW)
    assert [a.id for a in activities] == [1, 2, 3, 4, 5, 6, 7]
    assert all(a.earned_coins == [] and a.earned_value == 0 for a in activities)
    assert activities[3].calories is None


def test_repeated_runs_are_identical():
    first = to_dict(process_user_data({}, fixture_activities(), now=NOW))
    second = to_dict(process_user_data({}, fixture_activities(), now=NOW))
    assert first == second


def test_long_history_is_legendary():
    activities = [
        make_activity(id=i, type="Walk", moving_time=3 * 3600, start=NOW - timedelta(days=2 * i))
        for i in range(150)
    ]
    data = process_user_data({}, activities, now=NOW)
    assert data.totals.hours == pytest.approx(450)
    assert data.league_class is league.LEGEND
    assert data.rank.name == "Wood 5"
    assert data.level == 5
    assert data.next_rank_progress == pytest.approx(50)
    assert len(data.endurance_stats["all"].distance) == 150
    assert data.endurance_stats["all"].distance[:49] == [None] * 49
    assert data.endurance_stats["all"].distance[49] == pytest.approx(5.0)


def test_pipeline_records_metrics():
    metrics.reset()
    process_user_data({}, fixture_activities(), now=NOW)
    counters, durations = metrics.snapshot()
    assert counters["gamification_runs_total"] == 1
    assert counters["gamification_activities_total"] == 7
    assert durations["gamification_run_duration_seconds"] >= 0


def test_load_activities_from_raw():
    activities = load_activities([raw_activity(id=5, calories=321.0, extra_field="ignored")])
    assert activities[0].id == 5
    assert activities[0].calories == 321.0
    assert activities[0].kilojoules is None


def test_load_activities_nulls_become_zero():
    activities = load_activities([raw_activity(total_elevation_gain=None)])
    assert activities[0].total_elevation_gain == 0


def test_load_activities_reports_missing_fields():
    raw = raw_activity()
    del raw["start_date"]
    del raw["kudos_count"]
    with pytest.raises(ActivityParseError) as exc:
        load_activities([raw_activity(), raw])
    assert "Activity record 1" in str(exc.value)
    assert "start_date" in str(exc.value)
    assert "kudos_count" in str(exc.value)
