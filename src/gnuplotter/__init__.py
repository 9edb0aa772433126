# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from gnuplotter.lib.errors import (
    CloseError,
    GnuplotNotFoundError,
    InvalidDimensionError,
    InvalidPlotCommandError,
    InvalidStyleError,
    PlotterError,
    SpawnError,
    StagingError,
    WriteError,
)
from gnuplotter.lib.styles import PlotStyle, PlotVerb
from gnuplotter.plotter import Plotter, PlotterOptions
from gnuplotter.version import __version__

__all__ = [
    "__version__",
    "Plotter", "PlotterOptions",
    "PlotStyle", "PlotVerb",
    "PlotterError", "SpawnError", "GnuplotNotFoundError", "WriteError", "StagingError",
    "InvalidDimensionError", "InvalidStyleError", "InvalidPlotCommandError", "CloseError",
]
