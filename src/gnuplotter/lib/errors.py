# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from typing import Final

__all__: Final = [
    "PlotterError",
    "SpawnError",
    "GnuplotNotFoundError",
    "WriteError",
    "StagingError",
    "InvalidDimensionError",
    "InvalidStyleError",
    "InvalidPlotCommandError",
    "CloseError",
]


class PlotterError(Exception):
    """Base class for every failure raised by a gnuplot session."""


class SpawnError(PlotterError):
    """
    The gnuplot subprocess could not be started.

    Raised when the process fails to launch or its stdin pipe cannot be opened.
    Not retried.
    """


class GnuplotNotFoundError(SpawnError):
    """
    The gnuplot executable is not on the search path.

    The lookup result is cached for the process lifetime, so once raised every
    later session creation raises it again.
    """


class WriteError(PlotterError):
    """Writing a command line to the gnuplot stdin failed."""


class StagingError(PlotterError, OSError):
    """A temporary data file could not be created or written."""


class InvalidDimensionError(PlotterError, ValueError):
    """Wrong number of data series or axis labels (must be 1 to 3)."""

    def __init__(self, ndims: int) -> None:
        super().__init__(f"invalid number of dims '{ndims}'")
        self.ndims = ndims


class InvalidStyleError(PlotterError, ValueError):
    """
    Unknown plotting style.

    The session style has already been forced to ``points`` when this is
    raised.
    """

    def __init__(self, style: str) -> None:
        super().__init__(f"invalid style '{style}'")
        self.style = style


class InvalidPlotCommandError(PlotterError, ValueError):
    """Plot verb other than ``plot`` or ``splot``."""

    def __init__(self, cmd: str) -> None:
        super().__init__(f"invalid plot cmd [{cmd}]")
        self.cmd = cmd


class CloseError(PlotterError):
    """The gnuplot subprocess exited abnormally."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
