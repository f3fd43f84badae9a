# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

import logging

import numpy as np

from stops import (
    as_series,
    count_retainable,
    find_stop_segments,
    mandatory_indices,
    velocities,
)

logger = logging.getLogger(__name__)

# Default factor converting elapsed time (s) to distance (m) for the deviation
# geometry.
DEFAULT_TIME_SCALE = 0.1

# Fraction of the samples kept when the caller has no target count in mind.
DEFAULT_KEEP_FRACTION = 0.1


def estimate_defaults(t, s):
    """Estimate baseline threshold magnitudes from the data.

    Each anchor is 1% of a characteristic scale of the track: the maximum velocity,
    the total duration and the total distance respectively.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.

    Returns
    -------
    dict
        The anchors under the keys "velocity" (m/s), "duration" (s) and "deviation"
        (m).

    """
    t, s = as_series(t, s)
    vmax = float(np.max(velocities(t, s)))
    return {
        "velocity": 0.01 * vmax,
        "duration": 0.01 * float(t[-1] - t[0]),
        "deviation": 0.01 * float(s[-1] - s[0]),
    }


def get_default_settings(
    t,
    s,
    velocity_factor=1.0,
    duration_factor=1.0,
    deviation_factor=1.0,
    time_scale=DEFAULT_TIME_SCALE,
):
    """Get reduction settings scaled from the anchors of `estimate_defaults`.

    The returned dictionary can be passed as keyword parameters to
    `simplification.reduce_by_deviation`, and without "deviation" to
    `simplification.reduce_to_count`:

    * velocity_threshold: samples reached with a velocity (m/s) below this are
        stationary.

    * stop_duration: minimum duration (s) of a stop whose boundaries must be kept.

    * deviation: maximum allowed deviation (m) of a discarded sample from the
        simplified track. Only used by `simplification.reduce_by_deviation`.

    * time_scale: factor (m/s) converting elapsed time to distance so both axes of the
        time/distance plane share a unit.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.
    velocity_factor, duration_factor, deviation_factor : float
        Multipliers applied to the velocity, duration and deviation anchors.
    time_scale : float
        Value of the "time_scale" setting.

    Returns
    -------
    dict

    """
    anchors = estimate_defaults(t, s)
    return {
        "velocity_threshold": anchors["velocity"] * velocity_factor,
        "stop_duration": anchors["duration"] * duration_factor,
        "deviation": anchors["deviation"] * deviation_factor,
        "time_scale": time_scale,
    }


def target_count_bounds(t, s, velocity_threshold, stop_duration):
    """Range of target counts `simplification.reduce_to_count` can produce.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.
    velocity_threshold, stop_duration : float
        Stop detection thresholds, see `stops.find_stop_segments`.

    Returns
    -------
    lower, upper : int
        The number of mandatory points, and the number of points outside the interior
        of any stop. Without stops the upper bound is the number of samples.

    """
    t, s = as_series(t, s)
    n = len(t)
    if n <= 2:
        return n, n
    stops = find_stop_segments(t, s, velocity_threshold, stop_duration)
    return len(mandatory_indices(n, stops)), count_retainable(n, stops)


def clamp_target_count(target_count, t, s, velocity_threshold, stop_duration):
    """Clamp a requested target count to the range of `target_count_bounds`."""
    lower, upper = target_count_bounds(t, s, velocity_threshold, stop_duration)
    return clamp_to_bounds(target_count, lower, upper)


def clamp_to_bounds(target_count, lower, upper):
    """Clamp a requested target count to already computed bounds.

    Parameters
    ----------
    target_count : int
        The requested number of samples.
    lower, upper : int
        The bounds, as returned by `target_count_bounds`.

    Returns
    -------
    int

    """
    clamped = max(lower, min(upper, int(target_count)))
    if clamped != target_count:
        logger.debug(
            "target count %s clamped to %d (bounds %d to %d)",
            target_count,
            clamped,
            lower,
            upper,
        )
    return clamped


def suggest_target_count(t, s, velocity_threshold, stop_duration):
    """A starting target count of about 10% of the samples, clamped to the bounds."""
    t, s = as_series(t, s)
    wanted = int(np.floor(DEFAULT_KEEP_FRACTION * len(t) + 0.5))
    return clamp_target_count(wanted, t, s, velocity_threshold, stop_duration)
