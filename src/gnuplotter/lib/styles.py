# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from typing import Final

from gnuplotter.lib.types import StringEnum

__all__: Final = ["PlotStyle", "PlotVerb", "DEFAULT_STYLE", "DEFAULT_VERB"]


class PlotStyle(StringEnum):
    """Rendering styles gnuplot accepts after ``with``."""
    LINES           = "lines"
    POINTS          = "points"
    LINESPOINTS     = "linespoints"
    IMPULSES        = "impulses"
    DOTS            = "dots"
    STEPS           = "steps"
    ERRORBARS       = "errorbars"
    BOXES           = "boxes"
    BOXERRORBARS    = "boxerrorbars"
    PM3D            = "pm3d"

    @classmethod
    def names(cls) -> list[str]:
        return [s.value for s in cls]

    @classmethod
    def parse(cls, value: str | PlotStyle) -> PlotStyle | None:
        """Return the matching style, or None when ``value`` is not recognized."""
        try:
            return cls(value)
        except ValueError:
            return None


class PlotVerb(StringEnum):
    """
    Command keywords that start a plot statement.

    ``PLOT`` and ``SPLOT`` are the only verbs a session may be configured with;
    ``REPLOT`` is chosen automatically once a session already holds a plot.
    """
    PLOT    = "plot"
    SPLOT   = "splot"
    REPLOT  = "replot"

    @classmethod
    def configurable(cls) -> tuple[PlotVerb, PlotVerb]:
        return (cls.PLOT, cls.SPLOT)


DEFAULT_STYLE: Final[PlotStyle] = PlotStyle.POINTS
DEFAULT_VERB: Final[PlotVerb]   = PlotVerb.PLOT
