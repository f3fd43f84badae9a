# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

import sys
from pathlib import Path

import numpy as np

# Library path, relative to the directory containing this file.
libdir = Path(__file__).parent.parent.resolve() / "library"

sys.path.insert(0, str(libdir))

# Import the library functions to generate tracks and measure the reduction runtime.
from random_track import generate_random_tracks, get_default_settings
from tracks import measure_runtime

# Results are saved in the same directory as this file.
benchmark_dir = Path(__file__).parent.resolve()

# Short tracks with the default settings, and long ones with more and longer legs.
short_settings = get_default_settings()
long_settings = get_default_settings()
long_settings["legs"]["count"] = (20, 40)
long_settings["legs"]["duration"] = (600, 3600)

all_runs = [
    ("short", short_settings, None),
    ("short", short_settings, 100),
    ("long", long_settings, None),
    ("long", long_settings, 1000),
]

# Generate the tracks for each run and benchmark both reduction modes.
for name, settings, target_count in all_runs:
    mode = "deviation" if target_count is None else f"count{target_count}"
    print("Benchmarking", name, "tracks,", mode)
    tracks = generate_random_tracks(50, settings, progress="terminal")

    results = measure_runtime(tracks, 500, target_count=target_count)
    np.save(benchmark_dir / f"reduction_{name}_{mode}.npy", results)
