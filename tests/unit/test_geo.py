from datetime import datetime

import pytest

from museum_nav.core import geo


def test_distance_is_zero_for_identical_points():
    assert geo.calculate_distance(40.761, -73.978, 40.761, -73.978) == 0


def test_distance_is_symmetric():
    a = geo.calculate_distance(40.7610, -73.9780, 40.7618, -73.9772)
    b = geo.calculate_distance(40.7618, -73.9772, 40.7610, -73.9780)
    assert a == pytest.approx(b)
    assert 100 < a < 120


def test_one_degree_of_latitude():
    assert geo.calculate_distance(0, 0, 1, 0) == pytest.approx(111194.9, abs=1)


def test_estimated_time_default_speed():
    # 5 km/h is ~1.39 m/s
    assert geo.calculate_estimated_time(1000) == 720
    assert geo.calculate_estimated_time(0) == 0


def test_estimated_time_rounds_halves_up():
    # 3.6 km/h is exactly 1 m/s
    assert geo.calculate_estimated_time(2.5, 3.6) == 3
    assert geo.calculate_estimated_time(2.4, 3.6) == 2


@pytest.mark.parametrize("speed", [0, -1])
def test_estimated_time_rejects_non_positive_speed(speed):
    with pytest.raises(ValueError):
        geo.calculate_estimated_time(100, speed)


def test_arrival_time_format():
    now = datetime(2024, 1, 1, 15, 0)
    assert geo.calculate_arrival_time(300, now=now) == "03:05 PM"
    assert geo.calculate_arrival_time(0, now=datetime(2024, 1, 1, 9, 7)) == "09:07 AM"


def test_generate_path_interpolates_inclusive():
    start = {"lat": 0.0, "lng": 0.0}
    end = {"lat": 3.0, "lng": -3.0}
    path = geo.generate_path(start, end)

    assert len(path) == 4
    assert path[0] == start
    assert path[-1] == end
    assert path[1]["lat"] == pytest.approx(1.0)
    assert path[2]["lng"] == pytest.approx(-2.0)


def test_instructions_long_route():
    assert geo.generate_instructions(150) == [
        "Start from your current location",
        "Walk straight for 75 meters",
        "Continue following the path",
        "You have arrived at your destination",
    ]


def test_instructions_short_route():
    assert geo.generate_instructions(100) == [
        "Start from your current location",
        "Walk 100 meters to your destination",
        "You have arrived at your destination",
    ]


def test_deviation_empty_path_is_never_deviated():
    assert geo.is_route_deviated({"lat": 10.0, "lng": 10.0}, [], 50) is False


def test_deviation_uses_nearest_path_point():
    path = geo.generate_path({"lat": 40.7610, "lng": -73.9780}, {"lat": 40.7618, "lng": -73.9772})
    assert geo.is_route_deviated({"lat": 40.7614, "lng": -73.9776}, path, 50) is False
    assert geo.is_route_deviated({"lat": 40.7700, "lng": -73.9700}, path, 50) is True


def test_path_point_string_format():
    assert geo.format_path_point({"lat": 40.761, "lng": -73.978}) == "40.761,-73.978"
    assert geo.parse_path_point("40.761,-73.978") == {"lat": 40.761, "lng": -73.978}


def test_round_half_up():
    assert geo.round_half_up(0.5) == 1
    assert geo.round_half_up(55.84, 1) == pytest.approx(55.8)
    assert geo.round_half_up(0.25, 1) == pytest.approx(0.3)
