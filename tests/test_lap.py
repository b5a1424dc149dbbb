import xml.etree.ElementTree as ET
from datetime import UTC, datetime

import pytest

from fitlog2tcx.lap import Lap
from fitlog2tcx.trackpoint import TrackPoint
from fitlog2tcx.xmlfields import ParseError


def test_parse_lap():
    node = ET.fromstring(
        '<Lap StartTime="2020-01-01T08:00:00Z" DurationSeconds="90.7">'
        '<Calories TotalCal="12.9" /><Intensity Value="Active" /></Lap>'
    )
    lap = Lap.parse(node)
    assert lap.start_time == datetime(2020, 1, 1, 8, 0, tzinfo=UTC)
    assert lap.duration == 90.7
    assert lap.calories == 12.9
    assert lap.start_distance == 0.0
    assert lap.track == []


def test_parse_lap_defaults():
    lap = Lap.parse(ET.fromstring('<Lap StartTime="2020-01-01T08:00:00Z" />'))
    assert lap.duration == 0.0
    assert lap.calories == 0.0


def test_calories_without_total_defaults_to_zero():
    lap = Lap.parse(ET.fromstring('<Lap StartTime="2020-01-01T08:00:00Z"><Calories /></Lap>'))
    assert lap.calories == 0.0


def test_missing_start_time_fails():
    with pytest.raises(ParseError):
        Lap.parse(ET.fromstring('<Lap DurationSeconds="60" />'))


def test_namespaced_calories_child():
    node = ET.fromstring(
        '<Lap xmlns="http://www.zonefivesoftware.com/xmlschemas/FitLogArchive/v1" '
        'StartTime="2020-01-01T08:00:00Z"><Calories TotalCal="40" /></Lap>'
    )
    assert Lap.parse(node).calories == 40.0


def test_write_truncates_duration_and_calories():
    lap = Lap(start_time=datetime(2020, 1, 1, 8, 0, tzinfo=UTC), duration=90.7, calories=12.9)
    parent = ET.Element("Activity")
    elem = lap.write(parent)

    assert parent.find("Lap") is elem
    assert elem.get("StartTime") == "2020-01-01T08:00:00Z"
    assert [child.tag for child in elem] == ["TotalTimeSeconds", "Calories"]
    assert elem.find("TotalTimeSeconds").text == "90"
    assert elem.find("Calories").text == "12"


def test_write_without_track_has_no_track_element():
    lap = Lap(start_time=datetime(2020, 1, 1, 8, 0, tzinfo=UTC))
    elem = lap.write(ET.Element("Activity"))
    assert elem.find("Track") is None


def test_write_with_track_emits_empty_track_wrapper():
    start = datetime(2020, 1, 1, 8, 0, tzinfo=UTC)
    lap = Lap(start_time=start, track=[TrackPoint(time=start), TrackPoint(time=start)])
    elem = lap.write(ET.Element("Activity"))
    track = elem.find("Track")
    assert track is not None
    assert len(track) == 0


def test_update_is_a_no_op():
    lap = Lap(start_time=datetime(2020, 1, 1, 8, 0, tzinfo=UTC), duration=60.0, calories=5.0)
    lap.update()
    assert (lap.duration, lap.calories, lap.track) == (60.0, 5.0, [])
