from datetime import datetime

import numpy as np
import pytest

from series import build_series, elapsed_seconds, select_rows

# Length of 0.001 degrees of latitude at the equator on the WGS84 ellipsoid.
MILLIDEGREE = 110.574


def test_elapsed_seconds_numeric():
    np.testing.assert_allclose(elapsed_seconds([10, 12.5, 20]), [0, 2.5, 10])


def test_elapsed_seconds_strings():
    secs = elapsed_seconds(["2024-05-04T08:00:00", "2024-05-04T08:00:10.5"])
    np.testing.assert_allclose(secs, [0, 10.5])


def test_elapsed_seconds_datetimes():
    secs = elapsed_seconds([datetime(2024, 5, 4, 8), datetime(2024, 5, 4, 9)])
    np.testing.assert_allclose(secs, [0, 3600])


def test_elapsed_seconds_missing():
    secs = elapsed_seconds(["2024-05-04T08:00:00", "NaT", "2024-05-04T08:01:00"])
    assert secs[0] == 0
    assert np.isnan(secs[1])
    assert secs[2] == 60


def test_build_series():
    series = build_series([0, 0.001, 0.002], [0, 0, 0], [0, 10, 20])
    np.testing.assert_allclose(series["t"], [0, 10, 20])
    np.testing.assert_allclose(series["dt"], [0, 10, 10])
    np.testing.assert_allclose(
        series["ds"], [0, MILLIDEGREE, MILLIDEGREE], rtol=1e-4
    )
    np.testing.assert_allclose(
        series["s"], [0, MILLIDEGREE, 2 * MILLIDEGREE], rtol=1e-4
    )
    assert series["rows"].tolist() == [0, 1, 2]


def test_build_series_stationary():
    series = build_series([54.3, 54.3, 54.3], [10.1, 10.1, 10.1], [0, 5, 9])
    assert series["s"].tolist() == [0, 0, 0]


def test_build_series_drops_missing_positions():
    series = build_series([0, np.nan, 0.001, 0.002], [0, 0, np.inf, 0], [0, 5, 10, 20])
    assert series["rows"].tolist() == [0, 3]
    np.testing.assert_allclose(series["t"], [0, 20])
    np.testing.assert_allclose(series["s"], [0, 2 * MILLIDEGREE], rtol=1e-4)


def test_build_series_missing_time():
    series = build_series([0, 0.001, 0.002], [0, 0, 0], [0, np.nan, 20])
    np.testing.assert_allclose(series["t"], [0, 0, 20])
    np.testing.assert_allclose(series["dt"], [0, 0, 0])


def test_build_series_distance_filter():
    lat = [0, 0.00001, 0.00002, 0.001, 0.002]
    series = build_series(lat, [0] * 5, [0, 1, 2, 3, 4], min_distance=5)
    assert series["rows"].tolist() == [0, 2, 3, 4]
    assert series["ds"][1] == pytest.approx(0.02 * MILLIDEGREE, rel=1e-3)


def test_build_series_time_filter():
    lat = [0, 0.001, 0.002, 0.003, 0.004]
    series = build_series(lat, [0] * 5, [0, 0.5, 1, 10, 20], min_interval=1)
    assert series["rows"].tolist() == [0, 2, 3, 4]
    np.testing.assert_allclose(series["dt"], [0, 1, 9, 10])


def test_build_series_filter_keeps_ends():
    series = build_series([0, 0, 0], [0, 0, 0], [0, 0, 0], min_distance=5, min_interval=1)
    assert series["rows"].tolist() == [0, 2]


def test_build_series_invalid():
    with pytest.raises(ValueError):
        build_series([0, 1], [0, 1], [0])


def test_select_rows():
    rows = ["a", "b", "c", "d"]
    assert select_rows(rows, [0, 2, 3]) == ["a", "c", "d"]

    array = np.arange(8).reshape(4, 2)
    np.testing.assert_array_equal(select_rows(array, [1, 3]), [[2, 3], [6, 7]])
