# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

import numpy as np


def project(t, s, time_scale):
    """Project samples into the time/distance plane.

    Parameters
    ----------
    t, s : array-like
        The elapsed time (s) and cumulative distance (m) of each sample.
    time_scale : float
        Factor (m/s) converting elapsed time into distance.

    Returns
    -------
    points : numpy.ndarray
        An (N, 2) array with the scaled time as the first and the distance as the
        second coordinate.

    """
    t = np.asarray(t, dtype=float)
    s = np.asarray(s, dtype=float)
    return np.stack([t * time_scale, s], axis=-1)


def chord_deviations(points, first, last):
    """Distance of the samples between two indices from the chord joining them.

    This is the perpendicular distance to the infinite line through the two end
    points; the foot of the perpendicular is not limited to lie between them. If both
    end points coincide, it is the Euclidean distance to that point instead.

    Parameters
    ----------
    points : numpy.ndarray
        An (N, 2) array of projected samples as returned by `project`.
    first, last : int
        Indices of the end points of the chord.

    Returns
    -------
    d : numpy.ndarray
        The distance of each of the samples ``first + 1`` to ``last - 1``. This is
        empty if there are no samples between the end points.

    """
    start = points[first]
    interior = points[first + 1 : last]

    dirvec = points[last] - start
    offvec = interior - start
    length2 = np.sum(dirvec**2)

    # Degenerate chord.
    if length2 == 0:
        return np.linalg.norm(offvec, axis=-1)

    # Cross product with the chord over its length. Only relative vectors are used, so
    # intervals of the same shape give identical deviations wherever they lie.
    cross = dirvec[0] * offvec[:, 1] - dirvec[1] * offvec[:, 0]
    return np.abs(cross) / np.sqrt(length2)


def max_deviation(points, first, last):
    """Find the sample deviating most from the chord between two indices.

    Parameters
    ----------
    points : numpy.ndarray
        An (N, 2) array of projected samples as returned by `project`.
    first, last : int
        Indices of the end points of the chord.

    Returns
    -------
    index : int
        Index of the sample with the largest deviation. Ties go to the lowest index. If
        there are no samples between the end points, this is -1.
    deviation : float
        The deviation of that sample, or 0 if there is none.

    """
    if last - first < 2:
        return -1, 0.0
    d = chord_deviations(points, first, last)
    i = int(np.argmax(d))
    return first + 1 + i, float(d[i])
