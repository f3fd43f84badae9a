# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

import logging

import numpy as np
from pyproj import Geod

logger = logging.getLogger(__name__)


def elapsed_seconds(timestamps):
    """Convert timestamps to seconds relative to the first one.

    Parameters
    ----------
    timestamps : array-like
        Either numbers (taken as seconds) or values numpy can convert to
        ``datetime64``, such as ISO 8601 strings or `datetime.datetime` instances.

    Returns
    -------
    numpy.ndarray
        Float seconds since the first timestamp. Missing values are NaN.

    """
    timestamps = np.asarray(timestamps)
    if timestamps.dtype.kind in "biuf":
        seconds = timestamps.astype(float)
    else:
        stamps = timestamps.astype("datetime64[ns]")
        seconds = (stamps - stamps[0]) / np.timedelta64(1, "s")
    return seconds - seconds[0]


def _neighbour_deltas(geod, lat, lon, secs):
    """Distance and time difference of each point to its predecessor."""
    ds = np.zeros(len(lat), dtype=float)
    dt = np.zeros(len(lat), dtype=float)
    if len(lat) > 1:
        ds[1:] = geod.inv(lon[:-1], lat[:-1], lon[1:], lat[1:])[2]
        dt[1:] = np.diff(secs)
    return ds, dt


def build_series(
    latitude,
    longitude,
    timestamps,
    min_distance=0.0,
    min_interval=0.0,
    ellps="WGS84",
):
    """Build the elapsed time and cumulative distance series of a track.

    Points with a non-finite latitude or longitude are dropped. Optionally, interior
    points crowding both of their neighbours are dropped as well: a point goes when
    the distances to both neighbours are below ``min_distance`` or the time gaps to
    both neighbours are below ``min_interval``. The first and last points always stay.
    The deltas of the remaining points are then recomputed from scratch.

    Parameters
    ----------
    latitude, longitude : array-like
        Position of each point in degrees.
    timestamps : array-like
        Time of each point, see `elapsed_seconds`.
    min_distance : float
        Distance threshold (m) of the crowding filter. Zero disables it.
    min_interval : float
        Time threshold (s) of the crowding filter. Zero disables it.
    ellps : str
        Ellipsoid used by `pyproj.Geod` for the distance between points.

    Returns
    -------
    series : dict
        * t: elapsed time (s) of each point since the first one. Points without a
            usable time get zero.
        * s: cumulative geodesic distance (m) along the track.
        * dt, ds: time (s) and distance (m) to the previous point; zero for the first
            point and for times which are missing.
        * rows: indices of the input points the series entries came from.

    """
    lat = np.asarray(latitude, dtype=float)
    lon = np.asarray(longitude, dtype=float)
    timestamps = np.asarray(timestamps)
    secs = elapsed_seconds(timestamps) if timestamps.size else np.empty(0)
    if not (lat.shape == lon.shape == secs.shape) or lat.ndim != 1:
        raise ValueError(
            "latitude, longitude and timestamps must be 1d arrays of equal length"
        )

    geod = Geod(ellps=ellps)

    # Only keep points with a position.
    rows = np.flatnonzero(np.isfinite(lat) & np.isfinite(lon))
    if len(rows) < len(lat):
        logger.debug("dropped %d points without a position", len(lat) - len(rows))

    # Drop points crowding both of their neighbours.
    if len(rows) > 2 and (min_distance > 0 or min_interval > 0):
        ds, dt = _neighbour_deltas(geod, lat[rows], lon[rows], secs[rows])

        # Missing times never satisfy the time criterion.
        dt = np.where(np.isfinite(dt), np.maximum(dt, 0), np.inf)

        crowded = np.zeros(len(rows), dtype=bool)
        crowded[1:-1] = (
            (ds[1:-1] < min_distance) & (ds[2:] < min_distance)
        ) | ((dt[1:-1] < min_interval) & (dt[2:] < min_interval))
        if crowded.any():
            logger.debug("dropped %d crowded points", crowded.sum())
        rows = rows[~crowded]

    lat = lat[rows]
    lon = lon[rows]
    if len(rows):
        secs = elapsed_seconds(timestamps[rows])
    else:
        secs = np.empty(0)

    ds, dt = _neighbour_deltas(geod, lat, lon, secs)
    t = np.where(np.isfinite(secs), secs, 0.0)
    dt = np.where(np.isfinite(dt), dt, 0.0)

    return {
        "t": t,
        "s": np.cumsum(ds),
        "dt": dt,
        "ds": ds,
        "rows": rows,
    }


def select_rows(rows, indices):
    """Select the rows at the given indices.

    Parameters
    ----------
    rows : sequence or numpy.ndarray
        The rows of a track. Numpy arrays are indexed along the first axis.
    indices : sequence of int
        The indices to select, as returned by the reducers in `simplification`.

    Returns
    -------
    numpy.ndarray or list
        The selected rows, an array for array input and a list otherwise.

    """
    if isinstance(rows, np.ndarray):
        return rows[np.asarray(indices, dtype=int)]
    return [rows[i] for i in indices]
