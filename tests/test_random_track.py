import numpy as np
import pytest

from random_track import (
    generate_random_track,
    generate_random_tracks,
    get_default_settings,
)
from series import build_series
from stops import StopSegment, find_stop_segments


def test_generate_random_track():
    track = generate_random_track()
    n = len(track["latitude"])
    assert len(track["longitude"]) == n
    assert len(track["time"]) == n
    assert len(track["elapsed"]) == n
    assert np.all(np.diff(track["elapsed"]) > 0)
    assert np.all(np.diff(track["time"]) > np.timedelta64(0, "ns"))

    # Starts at the origin.
    lat0, lon0 = get_default_settings()["origin"]
    assert track["latitude"][0] == pytest.approx(lat0)
    assert track["longitude"][0] == pytest.approx(lon0)
    assert track["time"][0] == np.datetime64(get_default_settings()["start_time"])


def test_generate_random_track_is_reproducible():
    first = generate_random_track()
    second = generate_random_track()
    np.testing.assert_array_equal(first["latitude"], second["latitude"])
    np.testing.assert_array_equal(first["time"], second["time"])
    assert first["stops"] == second["stops"]


def test_generate_random_track_without_stops():
    settings = get_default_settings()
    settings["stops"]["P_stop"] = 0
    assert generate_random_track(settings)["stops"] == []


def test_generate_random_track_leg_count():
    settings = get_default_settings()
    settings["legs"]["count"] = (1, 1)
    settings["legs"]["duration"] = (100, 100)
    track = generate_random_track(settings)
    assert track["stops"] == []
    assert len(track["latitude"]) == 101


def test_generated_stops_are_detected():
    tracks = generate_random_tracks(5)
    N_stops = 0
    for track in tracks:
        series = build_series(track["latitude"], track["longitude"], track["time"])
        found = find_stop_segments(series["t"], series["s"], 0.5, 30)
        assert found == [StopSegment(a, b) for a, b in track["stops"]]
        N_stops += len(found)
    assert N_stops > 0


def test_generate_random_tracks_differ():
    first, second = generate_random_tracks(2)
    assert len(first["latitude"]) != len(second["latitude"]) or not np.array_equal(
        first["latitude"], second["latitude"]
    )


def test_generate_random_tracks_progress():
    with pytest.raises(ValueError):
        generate_random_tracks(1, progress="fancy")
