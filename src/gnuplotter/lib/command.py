# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from gnuplotter.lib.styles import PlotStyle, PlotVerb

__all__: Final = ["Axis", "PlotCommand", "select_verb", "axis_label_command"]

Axis = Literal["x", "y", "z"]

AXES: Final[tuple[Axis, Axis, Axis]] = ("x", "y", "z")


class PlotCommand(BaseModel):
    """One gnuplot plot statement referencing a staged data file."""
    model_config = ConfigDict(frozen=True)

    verb: PlotVerb  = Field(..., description="plot, splot or replot")
    path: str       = Field(..., description="Staged data file quoted in the statement")
    style: PlotStyle = Field(..., description="Style applied after 'with'")
    title: str      = Field(default="", description="Series title; empty omits the clause")

    def render(self) -> str:
        """
        Render the statement text.

        ``<verb> "<path>" [title "<title>"] with <style>``; the title clause is
        left out entirely when ``title`` is empty.
        """
        if self.title == "":
            return f'{self.verb.value} "{self.path}" with {self.style.value}'
        return f'{self.verb.value} "{self.path}" title "{self.title}" with {self.style.value}'

    def __str__(self) -> str:
        return self.render()


def select_verb(configured: PlotVerb, nplots: int, *, three_d: bool = False) -> PlotVerb:
    """
    Choose the verb for the next plot of a session.

    Any plot after the first one uses ``replot`` so that series accumulate.
    The first plot uses ``splot`` for 3-d data, the configured verb otherwise.
    """
    if nplots > 0:
        return PlotVerb.REPLOT
    if three_d:
        return PlotVerb.SPLOT
    return configured


def axis_label_command(axis: Axis, text: str) -> str:
    # text goes through verbatim, quoting is up to the caller
    return f"set {axis}label '{text}'"
