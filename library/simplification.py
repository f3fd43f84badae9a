# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

"""Stop-preserving reduction of tracks.

Both reducers work on the elapsed time / cumulative distance projection of a track.
The track is first split at its mandatory points (the first and last sample and the
boundaries of each stop, see `stops.find_stop_segments`). Intervals which are stops
keep only their boundaries. The remaining movement intervals are simplified using the
perpendicular distance of each sample from the chord of its enclosing interval in the
plane (t * time_scale, s), either until no sample deviates by more than a given
distance or until a given number of samples has been selected.

"""

import heapq
import logging

import numpy as np

from metrics import max_deviation, project
from parameters import DEFAULT_TIME_SCALE, clamp_to_bounds
from stops import (
    as_series,
    count_retainable,
    find_stop_segments,
    mandatory_indices,
    partition,
)

logger = logging.getLogger(__name__)


def reduce_by_deviation(
    t,
    s,
    velocity_threshold,
    stop_duration,
    deviation,
    time_scale=DEFAULT_TIME_SCALE,
):
    """Reduce a track so no discarded sample deviates more than a given distance.

    Each movement interval is simplified with the Douglas-Peucker scheme: the sample
    with the largest deviation from the chord is kept if its deviation exceeds the
    allowed one, and the two halves are then processed the same way. Pending halves
    are held on an explicit stack rather than the call stack.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.
    velocity_threshold, stop_duration : float
        Stop detection thresholds, see `stops.find_stop_segments`.
    deviation : float
        Maximum allowed deviation (m) in the time/distance plane.
    time_scale : float
        Factor (m/s) converting elapsed time into distance.

    Returns
    -------
    list of int
        Strictly increasing indices of the samples to keep.

    """
    t, s = as_series(t, s)
    n = len(t)
    if n <= 2:
        return list(range(n))

    stops = find_stop_segments(t, s, velocity_threshold, stop_duration)
    keep = np.zeros(n, dtype=bool)
    keep[mandatory_indices(n, stops)] = True

    points = project(t, s, time_scale)
    for first, last, is_stop in partition(n, stops):
        if is_stop:
            continue

        pending = [(first, last)]
        while pending:
            a, b = pending.pop()
            idx, d = max_deviation(points, a, b)
            if idx >= 0 and d > deviation:
                keep[idx] = True
                pending.append((a, idx))
                pending.append((idx, b))

    return np.flatnonzero(keep).tolist()


def _push_candidate(heap, points, first, last):
    # Entries sort by largest deviation, then lowest interval start, then lowest
    # candidate index.
    idx, d = max_deviation(points, first, last)
    if idx >= 0 and d > 0:
        heapq.heappush(heap, (-d, first, idx, last))


def reduce_to_count(
    t,
    s,
    target_count,
    velocity_threshold,
    stop_duration,
    time_scale=DEFAULT_TIME_SCALE,
):
    """Reduce a track to an exact number of samples.

    Starting from the mandatory points, the sample with the largest deviation from the
    chord of its interval over the whole track is added repeatedly, splitting that
    interval in two, until the target count is reached. Candidates are held in a
    binary max-heap ordered by deviation; ties go to the interval with the lowest start
    index and then to the lowest candidate index. An entry whose candidate has already
    been kept is discarded when it is popped and its two halves are pushed instead.

    If the candidates run out first (which only happens on collinear or fully
    subdivided intervals), the remaining samples are chosen by `fill_gaps`.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.
    target_count : int
        Number of samples to keep. This is clamped to the range given by
        `parameters.target_count_bounds` with `parameters.clamp_to_bounds`.
    velocity_threshold, stop_duration : float
        Stop detection thresholds, see `stops.find_stop_segments`.
    time_scale : float
        Factor (m/s) converting elapsed time into distance.

    Returns
    -------
    list of int
        Strictly increasing indices of the samples to keep.

    """
    t, s = as_series(t, s)
    n = len(t)
    if n <= 2:
        return list(range(n))

    stops = find_stop_segments(t, s, velocity_threshold, stop_duration)
    mandatory = mandatory_indices(n, stops)
    keep = np.zeros(n, dtype=bool)
    keep[mandatory] = True
    count = len(mandatory)

    target = clamp_to_bounds(target_count, count, count_retainable(n, stops))

    # Seed the heap with every movement interval.
    points = project(t, s, time_scale)
    heap = []
    for first, last, is_stop in partition(n, stops):
        if not is_stop:
            _push_candidate(heap, points, first, last)

    # Greedily refine the interval with the largest deviation.
    while count < target and heap:
        _, first, idx, last = heapq.heappop(heap)
        if not keep[idx]:
            keep[idx] = True
            count += 1
        _push_candidate(heap, points, first, idx)
        _push_candidate(heap, points, idx, last)

    if count < target:
        fill_gaps(keep, target, stops)

    return np.flatnonzero(keep).tolist()


def fill_gaps(keep, target_count, stops):
    """Keep the midpoints of the widest gaps until a target count is reached.

    The widest gap between consecutive kept samples is split at its midpoint (rounded
    down); among equally wide gaps the first one is used. Gaps which are a stop are
    never split. This stops early when no gap spans more than one step.

    Parameters
    ----------
    keep : numpy.ndarray
        Boolean mask of the samples currently kept. This is updated in place.
    target_count : int
        The desired number of kept samples.
    stops : list of StopSegment
        The stops of the track.

    Returns
    -------
    int
        The number of kept samples afterwards.

    """
    stop_starts = np.array([a for a, _ in stops], dtype=int)
    idx = np.flatnonzero(keep)
    added = 0
    while len(idx) < target_count:
        # The sample after a kept stop start is always its end.
        gaps = np.diff(idx)
        gaps[np.isin(idx[:-1], stop_starts)] = 0
        if len(gaps) == 0:
            break

        j = int(np.argmax(gaps))
        if gaps[j] <= 1:
            break

        mid = (idx[j] + idx[j + 1]) // 2
        keep[mid] = True
        idx = np.insert(idx, j + 1, mid)
        added += 1

    if added:
        logger.debug("gap filling kept %d additional samples", added)
    return len(idx)
