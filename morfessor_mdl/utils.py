"""Data structures and functions of general utility,
shared between different modules."""

from tqdm import tqdm

show_progress_bar = True


def _progress(iter_func, desc=None):
    """Wrap an iterable in a progress bar when iterating through it.

    The bar is only shown if show_progress_bar is set; the CLI turns it
    off when the standard error stream is not a terminal.
    """
    if not show_progress_bar:
        return iter_func
    return tqdm(iter_func, desc=desc, unit=" morphs", leave=False)
