# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

"""Stop detection on the elapsed time / cumulative distance projection of a track.

A stop is a run of consecutive samples whose instantaneous velocity stays below a
threshold for at least a minimum duration. The first and last sample of a stop are
mandatory points which every reduction must keep, while the samples inside a stop are
never kept. The first and last samples of the track are always mandatory too.

"""

import logging
from collections import namedtuple

import numpy as np

logger = logging.getLogger(__name__)

# Floor for time differences so velocities stay finite.
MIN_TIME_DELTA = 1e-9

StopSegment = namedtuple("StopSegment", ["start", "end"])
StopSegment.__doc__ = """Closed index interval [start, end] of a detected stop."""


def as_series(t, s):
    """Convert elapsed time and cumulative distance to validated float arrays.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.

    Returns
    -------
    t, s : numpy.ndarray
        One-dimensional float arrays of equal length.

    """
    t = np.asarray(t, dtype=float)
    s = np.asarray(s, dtype=float)
    if t.ndim != 1 or s.ndim != 1:
        raise ValueError("time and distance must be one dimensional")
    if t.shape != s.shape:
        raise ValueError(
            f"time and distance lengths differ ({len(t)} != {len(s)})"
        )
    if len(t) == 0:
        raise ValueError("at least one sample is required")
    return t, s


def velocities(t, s):
    """Instantaneous velocity between each sample and its predecessor.

    Time differences which are not finite or smaller than `MIN_TIME_DELTA` are floored
    to it, and distance differences which are negative or not finite count as zero, so
    the result is always finite.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.

    Returns
    -------
    v : numpy.ndarray
        Velocity (m/s) of each sample. The first entry has no predecessor and is zero.

    """
    t, s = as_series(t, s)

    dt = np.diff(t)
    dt = np.where(np.isfinite(dt) & (dt > MIN_TIME_DELTA), dt, MIN_TIME_DELTA)
    ds = np.diff(s)
    ds = np.where(np.isfinite(ds) & (ds > 0), ds, 0.0)

    v = np.zeros(len(t), dtype=float)
    v[1:] = ds / dt
    return v


def find_stop_segments(t, s, velocity_threshold, stop_duration):
    """Find the stops in a track.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.
    velocity_threshold : float
        Samples reached with a velocity (m/s) strictly below this are stationary.
    stop_duration : float
        Minimum time (s) between the first and last sample of a stop.

    Returns
    -------
    stops : list of StopSegment
        The stops, disjoint and ordered by start index.

    """
    t, s = as_series(t, s)
    n = len(t)
    if n < 2:
        return []

    # Mark the slow samples. Sample 0 has no velocity and is never slow itself, but it
    # can start a stop if sample 1 is slow.
    slow = velocities(t, s) < velocity_threshold
    slow[0] = False

    # Rising and falling edges of the mask give the first and one-past-the-last index
    # of each run of slow samples.
    edges = np.diff(np.concatenate([slow, [False]]).astype(int))
    starts = np.flatnonzero(edges == 1) + 1
    ends = np.flatnonzero(edges == -1)

    stops = []
    for first, last in zip(starts, ends):
        # A run over samples first..last spans the samples first-1..last.
        a, b = int(first) - 1, int(last)
        if t[b] - t[a] >= stop_duration:
            stops.append(StopSegment(a, b))

    logger.debug(
        "found %d stops in %d samples (velocity < %g, duration >= %g)",
        len(stops),
        n,
        velocity_threshold,
        stop_duration,
    )
    return stops


def mandatory_indices(n, stops):
    """The sorted indices every reduction must keep.

    Parameters
    ----------
    n : int
        Number of samples in the track.
    stops : list of StopSegment
        The stops found by `find_stop_segments`.

    Returns
    -------
    list of int

    """
    if n <= 2:
        return list(range(n))
    keep = {0, n - 1}
    for a, b in stops:
        keep.update((a, b))
    return sorted(keep)


def count_mandatory(t, s, velocity_threshold, stop_duration):
    """Count the points any reduction of a track must keep.

    Callers use this as the lower bound for the target count of
    `simplification.reduce_to_count`.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.
    velocity_threshold, stop_duration : float
        Stop detection thresholds, see `find_stop_segments`.

    Returns
    -------
    int

    """
    t, s = as_series(t, s)
    n = len(t)
    if n <= 2:
        return n
    stops = find_stop_segments(t, s, velocity_threshold, stop_duration)
    return len(mandatory_indices(n, stops))


def count_retainable(n, stops):
    """Count the points which are not strictly inside a stop."""
    inside = sum(max(b - a - 1, 0) for a, b in stops)
    return n - inside


def partition(n, stops):
    """Split a track into consecutive intervals at its mandatory points.

    Parameters
    ----------
    n : int
        Number of samples in the track.
    stops : list of StopSegment
        The stops found by `find_stop_segments`.

    Returns
    -------
    intervals : list of (int, int, bool)
        The (first, last, is_stop) triplet of each interval. Consecutive intervals
        share their boundary index. An interval is a stop when it is exactly one of
        the given stop segments.

    """
    bounds = mandatory_indices(n, stops)
    stop_set = {(a, b) for a, b in stops}
    return [
        (first, last, (first, last) in stop_set)
        for first, last in zip(bounds[:-1], bounds[1:])
    ]
