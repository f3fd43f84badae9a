# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

"""Functions to generate random GPS tracks.

A track is a sequence of straight-ish legs, each travelled at a constant speed, with
an optional stop after each leg where the receiver keeps logging the same position.
The track is generated in a local transverse Mercator projection around a chosen origin
and converted to latitude and longitude. The sample ranges of the stops are returned as
well, so the output can be used to check the stop detection.

In most cases, you want to get a dictionary of default generation settings from
`get_default_settings`, modify it as desired and then call `generate_random_track` or
`generate_random_tracks`.

"""

from datetime import datetime

import numpy as np
from pyproj import CRS, Transformer

from progress import get_progress_class


def get_default_settings():
    """Get the default settings for the track generator.

    * seed: positive integer giving the seed for the pseudo-random number generator.

    * origin: (latitude, longitude) pair in degrees of the start of the track. This is
        also the centre of the local projection used for the generation.

    * start_time: `datetime.datetime` of the first sample.

    * sampling: a dictionary with information about the sample times:
        * interval: the nominal time in seconds between samples.
        * jitter: the maximum deviation in seconds of each interval from the nominal
            value. Intervals are drawn from a uniform distribution.

    * legs: a dictionary with information about the legs:
        * count: the (minimum, maximum) number of legs in a track.
        * duration: the (minimum, maximum) duration of a leg in seconds.
        * speed: the (minimum, maximum) speed of a leg in metres per second.
        * turn_std: the standard deviation in radians of the zero-mean normal
            distribution of the heading change between legs.
        * position_std: the standard deviation in metres of the positional noise
            added to the samples of a leg.

    * stops: a dictionary with information about the stops:
        * P_stop: the probability of a stop after each leg except the last.
        * duration: the (minimum, maximum) duration of a stop in seconds.

    Returns
    -------
    dict

    """
    return {
        "seed": 171716,
        "origin": (54.3233, 10.1228),
        "start_time": datetime(2024, 5, 4, 8, 30, 0),
        "sampling": {
            "interval": 1.0,
            "jitter": 0.1,
        },
        "legs": {
            "count": (3, 8),
            "duration": (60, 600),
            "speed": (1.5, 8.0),
            "turn_std": 0.6,
            "position_std": 0.1,
        },
        "stops": {
            "P_stop": 0.5,
            "duration": (60, 300),
        },
    }


def generate_random_track(settings=None, rng=None):
    """Generate a random track.

    Parameters
    ----------
    settings : dict
        Generation settings in the format returned by `get_default_settings`. If None,
        the default settings will be used.
    rng : numpy.random.Generator
        The pseudo-random number generator to use. If None, one is created from the
        seed in the settings.

    Returns
    -------
    track : dict
        * latitude, longitude: numpy arrays of the position of each sample in degrees.
        * time: numpy array of the ``datetime64`` time of each sample.
        * elapsed: numpy array of the time of each sample in seconds since the first.
        * stops: list of (first, last) sample indices of each stop. The first index is
            the last moving sample before the stop and the last index is the final
            sample logged during the stop.

    """
    if settings is None:
        settings = get_default_settings()
    if rng is None:
        rng = np.random.default_rng(settings["seed"])

    legs = settings["legs"]
    sampling = settings["sampling"]

    # Choose the number of legs.
    N_legs = int(rng.integers(legs["count"][0], legs["count"][1], endpoint=True))

    # The track starts at the origin, at rest, heading in a random direction.
    east = [0.0]
    north = [0.0]
    elapsed = [0.0]
    heading = rng.uniform(0, 2 * np.pi)
    stops = []

    def _intervals(duration):
        # Sample intervals covering the given duration.
        N = max(int(np.ceil(duration / sampling["interval"])), 1)
        jitter = rng.uniform(-sampling["jitter"], sampling["jitter"], N)
        return sampling["interval"] + jitter

    for i in range(N_legs):
        # Pick the leg parameters.
        heading += rng.normal(0, legs["turn_std"])
        speed = rng.uniform(*legs["speed"])
        dt = _intervals(rng.uniform(*legs["duration"]))

        # Travel along the heading (measured from north towards east) with a little
        # positional noise.
        travel = speed * np.cumsum(dt)
        noise = rng.normal(0, legs["position_std"], (2, len(dt)))
        east.extend(east[-1] + travel * np.sin(heading) + noise[0])
        north.extend(north[-1] + travel * np.cos(heading) + noise[1])
        elapsed.extend(elapsed[-1] + np.cumsum(dt))

        # Possibly stop before the next leg. The position is held exactly.
        if i < N_legs - 1 and rng.uniform(0, 1) < settings["stops"]["P_stop"]:
            first = len(elapsed) - 1
            dt = _intervals(rng.uniform(*settings["stops"]["duration"]))
            east.extend([east[-1]] * len(dt))
            north.extend([north[-1]] * len(dt))
            elapsed.extend(elapsed[-1] + np.cumsum(dt))
            stops.append((first, len(elapsed) - 1))

    # Convert from the local projection to latitude and longitude.
    lat0, lon0 = settings["origin"]
    local_crs = CRS(f"+proj=tmerc +lat_0={lat0} +lon_0={lon0} +ellps=WGS84")
    transformer = Transformer.from_crs(local_crs, 4326, always_xy=True)
    lon, lat = transformer.transform(np.array(east), np.array(north))

    elapsed = np.array(elapsed)
    start = np.datetime64(settings["start_time"], "ns")
    time = start + np.round(elapsed * 1e9).astype(np.int64).astype("timedelta64[ns]")

    return {
        "latitude": np.asarray(lat),
        "longitude": np.asarray(lon),
        "time": time,
        "elapsed": elapsed,
        "stops": stops,
    }


def generate_random_tracks(N_tracks, settings=None, progress=None):
    """Generate several random tracks from one generator.

    Parameters
    ----------
    N_tracks : int
        The number of tracks to generate.
    settings : dict
        Generation settings in the format returned by `get_default_settings`. If None,
        the default settings will be used.
    progress : {None, "terminal", "notebook"}
        Whether to hide the progress bar, or to show one optimised for use in a terminal
        or a Jupyter notebook.

    Returns
    -------
    list of dict
        The tracks in the format returned by `generate_random_track`.

    """
    progress_cls = get_progress_class(progress)
    if settings is None:
        settings = get_default_settings()
    rng = np.random.default_rng(settings["seed"])

    tracks = []
    with progress_cls(desc="Tracks generated", total=N_tracks) as progress_bar:
        for _ in range(N_tracks):
            tracks.append(generate_random_track(settings, rng))
            progress_bar.update()

    return tracks
