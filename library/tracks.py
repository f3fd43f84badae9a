# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

import logging
import random
import time

import numpy as np

from parameters import get_default_settings
from progress import get_progress_class
from series import build_series
from simplification import reduce_by_deviation, reduce_to_count

logger = logging.getLogger(__name__)


def reduce_track(
    latitude,
    longitude,
    timestamps,
    target_count=None,
    deviation=None,
    settings=None,
    min_distance=0.0,
    min_interval=0.0,
):
    """Reduce a GPS track.

    Parameters
    ----------
    latitude, longitude : array-like
        Position of each point in degrees.
    timestamps : array-like
        Time of each point, see `series.elapsed_seconds`.
    target_count : int, optional
        If given, reduce the track to this many points with
        `simplification.reduce_to_count` (clamped to the feasible range). If not given,
        reduce it with `simplification.reduce_by_deviation` instead.
    deviation : float, optional
        Maximum allowed deviation (m) when reducing by deviation. This overrides the
        "deviation" setting. It cannot be combined with a target count.
    settings : dict, optional
        Reduction settings in the format returned by
        `parameters.get_default_settings`. If not given, the defaults for this track
        are used.
    min_distance, min_interval : float
        Thresholds of the crowding filter applied before the reduction, see
        `series.build_series`.

    Returns
    -------
    list of int
        Strictly increasing indices of the input points to keep.

    """
    if target_count is not None and deviation is not None:
        raise ValueError("give either a target count or a deviation, not both")

    series = build_series(
        latitude,
        longitude,
        timestamps,
        min_distance=min_distance,
        min_interval=min_interval,
    )
    t, s = series["t"], series["s"]
    if len(t) == 0:
        raise ValueError("track has no points with a valid position")

    if settings is None:
        settings = get_default_settings(t, s)
    settings = dict(settings)

    if target_count is None:
        if deviation is not None:
            settings["deviation"] = deviation
        keep = reduce_by_deviation(t, s, **settings)
    else:
        settings.pop("deviation", None)
        keep = reduce_to_count(t, s, target_count, **settings)

    logger.debug("reduced track from %d to %d points", len(series["rows"]), len(keep))
    return series["rows"][keep].tolist()


def reduce_tracks(tracks, target_count=None, settings=None, progress=None):
    """Reduce several tracks.

    Parameters
    ----------
    tracks : list of dict
        Each track has its point positions under the keys "latitude" and "longitude"
        and timestamps under "time", as returned by
        `random_track.generate_random_track`.
    target_count : int, optional
        Target count for every track, see `reduce_track`.
    settings : dict, optional
        Reduction settings for every track. If not given, each track uses its own
        defaults.
    progress : {None, "terminal", "notebook"}
        Whether to hide the progress bar, or to show one optimised for use in a terminal
        or a Jupyter notebook.

    Returns
    -------
    list of list of int
        The indices of the points to keep in each track.

    """
    progress_cls = get_progress_class(progress)

    results = []
    with progress_cls(desc="Tracks reduced", total=len(tracks)) as progress_bar:
        for track in tracks:
            results.append(
                reduce_track(
                    track["latitude"],
                    track["longitude"],
                    track["time"],
                    target_count=target_count,
                    settings=settings,
                )
            )
            progress_bar.update()

    return results


def measure_runtime(tracks, N_trials, target_count=None):
    """Measure the runtime of `reduce_track`.

    Each trial reduces a randomly selected track (with replacement), so the same track
    may be timed on multiple trials. A non-recorded warmup trial is performed first so
    any extra startup overhead is not included in the results.

    Parameters
    ----------
    tracks : list of dict
        The tracks to choose from, in the format taken by `reduce_tracks`.
    N_trials : int
        The number of trials to perform.
    target_count : int, optional
        Target count for each reduction, see `reduce_track`.

    Returns
    -------
    trials : numpy.ndarray
        An Nx4 integer array with one row per trial. The columns are the index of the
        track, its number of points, the time in ns it took for `reduce_track` to
        complete and the number of points kept.

    """
    results = np.empty((N_trials, 4), dtype=int)
    for i in range(-1, N_trials):
        index = random.randrange(len(tracks))
        track = tracks[index]
        start = time.perf_counter_ns()
        keep = reduce_track(
            track["latitude"],
            track["longitude"],
            track["time"],
            target_count=target_count,
        )
        stop = time.perf_counter_ns()

        # Don't try to store the warmup.
        if i == -1:
            continue
        results[i] = [index, len(track["latitude"]), stop - start, len(keep)]

    return results
