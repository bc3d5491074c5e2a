from datetime import datetime, timedelta, timezone
from typing import List

from services.gamification.models import Activity


NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def make_activity(**overrides) -> Activity:
    """A plain 5 km mid-morning run that earns nothing on its own."""
    start = overrides.pop("start", NOW - timedelta(days=1))
    values = {
        "id": 1,
        "name": "Easy Run",
        "distance": 5000.0,
        "moving_time": 1800,
        "elapsed_time": 1900,
        "total_elevation_gain": 20.0,
        "type": "Run",
        "start_date": iso(start),
        "start_date_local": iso(start),
        "average_speed": 2.8,
        "kudos_count": 2,
        "calories": 400.0,
    }
    values.update(overrides)
    return Activity(**values)


def raw_activity(**overrides) -> dict:
    start = overrides.pop("start", NOW - timedelta(days=1))
    values = {
        "id": 1,
        "name": "Easy Run",
        "distance": 5000.0,
        "moving_time": 1800,
        "elapsed_time": 1900,
        "total_elevation_gain": 20.0,
        "type": "Run",
        "start_date": iso(start),
        "start_date_local": iso(start),
        "average_speed": 2.8,
        "kudos_count": 2,
    }
    values.update(overrides)
    return values


def fixture_activities() -> List[Activity]:
    """A small mixed history: runs, rides, a swim and a hike over three months."""
    return [
        make_activity(id=1, start=NOW - timedelta(days=2)),
        make_activity(
            id=2,
            name="Marathon",
            distance=42300.0,
            moving_time=12600,
            calories=1500.0,
            start=NOW - timedelta(days=10),
        ),
        make_activity(
            id=3,
            name="Long Ride",
            type="Ride",
            distance=120000.0,
            moving_time=14400,
            total_elevation_gain=900.0,
            average_speed=8.3,
            calories=1800.0,
            start=NOW - timedelta(days=20),
        ),
        make_activity(
            id=4,
            name="Mountain Day",
            type="Ride",
            distance=55000.0,
            moving_time=10800,
            total_elevation_gain=2100.0,
            calories=None,
            kilojoules=9000.0,
            start=NOW - timedelta(days=40),
        ),
        make_activity(
            id=5,
            name="Pool",
            type="Swim",
            distance=2000.0,
            moving_time=2700,
            total_elevation_gain=0.0,
            calories=None,
            start=NOW - timedelta(days=41),
        ),
        make_activity(
            id=6,
            name="Hike",
            type="Hike",
            distance=12000.0,
            moving_time=14400,
            total_elevation_gain=1100.0,
            calories=None,
            kudos_count=55,
            start=NOW - timedelta(days=70),
        ),
        make_activity(
            id=7,
            name="Old Run",
            distance=10000.0,
            start=NOW - timedelta(days=800),
        ),
    ]
