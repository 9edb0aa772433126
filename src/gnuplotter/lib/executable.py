# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
import shutil
import threading
from typing import Final, cast

from gnuplotter.lib.errors import GnuplotNotFoundError
from gnuplotter.lib.types import ExecutablePath

__all__: Final = ["DEFAULT_EXECUTABLE", "resolve_gnuplot", "reset_gnuplot_cache"]

DEFAULT_EXECUTABLE: Final[str] = "gnuplot"

_logger = logging.getLogger("GnuplotExecutable")
_lock = threading.Lock()

# name -> resolved path, or the lookup failure
_resolved: dict[str, ExecutablePath | GnuplotNotFoundError] = {}


def resolve_gnuplot(name: str = DEFAULT_EXECUTABLE) -> ExecutablePath:
    """
    Locate the gnuplot executable on the search path, once per process.

    The first call for a given ``name`` runs the lookup; every later call
    returns the cached path, or re-raises the cached failure.

    Raises:
        GnuplotNotFoundError: when ``name`` cannot be found.
    """
    with _lock:
        cached = _resolved.get(name)
        if cached is None:
            found = shutil.which(name)
            if found is None:
                cached = GnuplotNotFoundError(f"could not find path to '{name}'")
                _logger.error("Could not find path to '%s'", name)
            else:
                cached = cast(ExecutablePath, found)
                _logger.debug("Found gnuplot command: %s", found)
            _resolved[name] = cached

    if isinstance(cached, GnuplotNotFoundError):
        raise GnuplotNotFoundError(str(cached))
    return cached


def reset_gnuplot_cache() -> None:
    """Forget every cached lookup so the next call searches the PATH again."""
    with _lock:
        _resolved.clear()
