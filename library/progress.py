# SPDX-FileCopyrightText: SAS research group, HFT, Helmut Schmidt University
# SPDX-License-Identifier: CC0-1.0
# https://github.com/hsu-sonar/icua24-geopackage

from tqdm import tqdm as terminal_tqdm
from tqdm.notebook import tqdm as notebook_tqdm


class dummy_tqdm:
    """Progress bar with the TQDM interface which shows nothing.

    Lets batch functions update a progress bar unconditionally.

    """

    def __init__(self, *args, **kwargs):
        pass

    def update(self, *args, **kwargs):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, tb):
        pass


def get_progress_class(progress):
    """Get the progress bar class for a progress setting.

    Parameters
    ----------
    progress : {None, "terminal", "notebook"}
        Whether to hide the progress bar, or to show one optimised for use in a terminal
        or a Jupyter notebook.

    Returns
    -------
    type
        A class with the `tqdm.tqdm` interface.

    """
    if progress is None:
        return dummy_tqdm
    if progress == "terminal":
        return terminal_tqdm
    if progress == "notebook":
        return notebook_tqdm
    raise ValueError(f"unknown value for progress '{progress}'")
