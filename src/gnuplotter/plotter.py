# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Final

import numpy as np
from pydantic import BaseModel, Field

from gnuplotter.config.plotter_config_settings import PlotterConfigSettings
from gnuplotter.lib.command import AXES, Axis, PlotCommand, axis_label_command, select_verb
from gnuplotter.lib.errors import (
    InvalidDimensionError,
    InvalidPlotCommandError,
    InvalidStyleError,
    PlotterError,
)
from gnuplotter.lib.process import PlotterProcess
from gnuplotter.lib.staging import DEFAULT_TMP_PREFIX, TempFileStaging
from gnuplotter.lib.styles import DEFAULT_STYLE, DEFAULT_VERB, PlotStyle, PlotVerb
from gnuplotter.lib.types import ArrayLikeF64, DebugSink, PlotFunc, TmpFilePath

__all__: Final = ["Plotter", "PlotterOptions"]

MAX_DIMS: Final[int] = 3


class PlotterOptions(BaseModel):
    """Construction parameters of a :class:`Plotter` session."""
    fname: str                  = Field(default="", description="Reserved command-file name; must be empty")
    persist: bool               = Field(default=False, description="Run gnuplot with -persist")
    debug: bool                 = Field(default=False, description="Echo every command sent to gnuplot")
    executable: str | None      = Field(default=None, description="gnuplot program name or path")
    tmp_prefix: str             = Field(default=DEFAULT_TMP_PREFIX, min_length=1, description="Temp data file name prefix")
    style: PlotStyle            = Field(default=DEFAULT_STYLE, description="Initial plotting style")


class Plotter:
    """
    Handle to a gnuplot subprocess, forwarding commands via its stdin.

    A session owns the process, the temp files staged for its plots, and a
    small amount of state: the configured plot verb, the current style and
    the number of plots issued since the last reset. The first plot of a
    session uses the configured verb; later plots use ``replot`` so series
    accumulate on the same graph.

    Not thread safe: callers must serialize access to one session.

    Example::

        with Plotter(persist=True) as p:
            p.set_labels("time", "value")
            p.plot_x([10, 20, 30], "my title")
    """

    def __init__(self, fname: str = "", persist: bool = False, debug: bool = False,
                 *, sink: DebugSink = print, **options: Any) -> None:
        """
        Spawn gnuplot and set up a new session.

        Args:
            fname: name of a file holding commands. Reserved, must be empty.
            persist: run gnuplot with ``-persist`` so windows stay open.
            debug: echo every command sent (and its size) to ``sink``.
            sink: receiver of the debug echo, ``print`` by default.
            **options: further :class:`PlotterOptions` fields
                (``executable``, ``tmp_prefix``, ``style``).

        Raises:
            NotImplementedError: ``fname`` is not empty.
            SpawnError: gnuplot could not be located or started.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.options = PlotterOptions(fname=fname, persist=persist, debug=debug, **options)

        if self.options.fname != "":
            raise NotImplementedError("Plotter with fname is not yet supported")

        self._plot_cmd: PlotVerb    = DEFAULT_VERB
        self._style: PlotStyle      = self.options.style
        self._nplots: int           = 0
        self._staging               = TempFileStaging(prefix=self.options.tmp_prefix)
        self._proc: PlotterProcess  = PlotterProcess.start(
            self.options.persist,
            executable=self.options.executable,
            debug=self.options.debug,
            sink=sink,
        )
        self.logger.debug("Started gnuplot session [pid %s]", self._proc.pid)

    @classmethod
    def from_settings(cls, *, sink: DebugSink = print) -> Plotter:
        """Create a session using the values of :class:`PlotterConfigSettings`."""
        return cls(
            persist=PlotterConfigSettings.persist(),
            debug=PlotterConfigSettings.debug(),
            sink=sink,
            executable=PlotterConfigSettings.executable(),
            tmp_prefix=PlotterConfigSettings.tmp_prefix(),
            style=PlotterConfigSettings.default_style(),
        )

    def __enter__(self) -> Plotter:
        return self

    def __exit__(self,
                 exc_type: type[BaseException] | None,
                 exc: BaseException | None,
                 tb: TracebackType | None) -> None:
        self.close()

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(plot_cmd={self._plot_cmd.value!r}, "
                f"style={self._style.value!r}, nplots={self._nplots})")

    # ──────────────────────────────────────────────────────────────────────
    # State
    # ──────────────────────────────────────────────────────────────────────
    @property
    def plot_cmd(self) -> PlotVerb:
        return self._plot_cmd

    @property
    def style(self) -> PlotStyle:
        return self._style

    @property
    def nplots(self) -> int:
        """Number of plots issued since the last reset."""
        return self._nplots

    @property
    def debug(self) -> bool:
        return self.options.debug

    @property
    def tmpfiles(self) -> tuple[TmpFilePath, ...]:
        """Temp data files staged and not yet cleaned."""
        return self._staging.paths

    # ──────────────────────────────────────────────────────────────────────
    # Raw commands
    # ──────────────────────────────────────────────────────────────────────
    def cmd(self, fmt: str, *args: Any) -> None:
        """
        Send a command to the gnuplot subprocess.

        ``fmt`` is expanded with the ``%`` operator when ``args`` are given.
        Without ``args`` it is sent verbatim, so ``%%`` is not collapsed and a
        lone ``%`` (as in ``set xrange [0:100%]``) needs no escaping. A
        single tuple argument is formatted as one value, not unpacked.

        Example::

            p.cmd("plot %f*x", 23.0)

        Raises:
            TypeError: ``fmt`` and ``args`` do not match.
            WriteError: the command could not be written.
        """
        line = fmt % args if args else fmt
        self._proc.send(line)

    def checked_cmd(self, fmt: str, *args: Any) -> None:
        """
        Fail-fast variant of :meth:`cmd` for scripts and demos.

        Any error terminates the program with ``SystemExit`` instead of being
        returned to the caller.
        """
        try:
            self.cmd(fmt, *args)
        except PlotterError as exc:
            self.logger.critical("** err: %s", exc)
            raise SystemExit(f"** err: {exc}") from exc

    # ──────────────────────────────────────────────────────────────────────
    # Plotting
    # ──────────────────────────────────────────────────────────────────────
    def _plot_file(self, path: TmpFilePath, title: str, *, three_d: bool = False) -> None:
        verb = select_verb(self._plot_cmd, self._nplots, three_d=three_d)
        command = PlotCommand(verb=verb, path=path, style=self._style, title=title)
        self._proc.send(command.render())
        self._nplots += 1

    def plot_nd(self, title: str, *data: ArrayLikeF64) -> None:
        """
        Create an n-dimensional plot (up to 3) titled ``title``.

        Example::

            p.plot_nd("test Nd plot", [0, 1, 2, 3], [0, 1, 2, 3], [0, 1, 2, 3])

        Raises:
            InvalidDimensionError: zero or more than three series, checked
                before anything is staged.
        """
        ndims = len(data)
        if ndims == 1:
            self.plot_x(data[0], title)
        elif ndims == 2:
            self.plot_xy(data[0], data[1], title)
        elif ndims == 3:
            self.plot_xyz(data[0], data[1], data[2], title)
        else:
            raise InvalidDimensionError(ndims)

    def plot_x(self, data: ArrayLikeF64, title: str = "") -> None:
        """
        Create a 2-d plot of ``data`` against its indices.

        gnuplot uses the line number of each value as its x-coordinate.
        """
        values = np.asarray(data, dtype=np.float64).ravel()
        path = self._staging.stage((float(v),) for v in values)
        self._plot_file(path, title)

    def plot_xy(self, x: ArrayLikeF64, y: ArrayLikeF64, title: str = "") -> None:
        """
        Create a 2-d plot of the pairs ``(x[i], y[i])``.

        When the lengths differ only the first ``min(len(x), len(y))`` points
        are plotted.
        """
        path = self._staging.stage_columns(x, y)
        self._plot_file(path, title)

    def plot_xyz(self, x: ArrayLikeF64, y: ArrayLikeF64, z: ArrayLikeF64, title: str = "") -> None:
        """
        Create a 3-d plot of the triplets ``(x[i], y[i], z[i])``.

        The first plot of a session always uses ``splot`` here, whatever the
        configured verb. Points run up to the shortest of the three series.
        """
        path = self._staging.stage_columns(x, y, z)
        self._plot_file(path, title, three_d=True)

    def plot_func(self, data: ArrayLikeF64, fct: PlotFunc, title: str = "") -> None:
        """
        Create a 2-d plot of ``(x, fct(x))`` for every x in ``data``.

        Example::

            p.plot_func([0, 1, 2, 3, 4, 5], lambda x: math.exp(x + 2.0), "my title")
        """
        xs = np.asarray(data, dtype=np.float64).ravel()
        path = self._staging.stage((float(x), float(fct(float(x)))) for x in xs)
        self._plot_file(path, title)

    # ──────────────────────────────────────────────────────────────────────
    # Settings
    # ──────────────────────────────────────────────────────────────────────
    def set_plot_cmd(self, cmd: str | PlotVerb) -> None:
        """
        Change the verb used for the first plot: ``plot`` or ``splot``.

        Raises:
            InvalidPlotCommandError: any other value; the verb is unchanged.
        """
        if cmd not in PlotVerb.configurable():
            raise InvalidPlotCommandError(str(cmd))
        self._plot_cmd = PlotVerb(cmd)

    def set_style(self, style: str | PlotStyle) -> None:
        """
        Change the plotting style.

        Only the :class:`PlotStyle` names are accepted. On an unknown name the
        style falls back to ``points`` before the error is raised, so the
        session always holds a usable style.

        Raises:
            InvalidStyleError: ``style`` is not recognized.
        """
        parsed = PlotStyle.parse(style)
        if parsed is None:
            self.logger.warning("Style '%s' not in allowed list %s, default to '%s'",
                                style, PlotStyle.names(), DEFAULT_STYLE.value)
            self._style = DEFAULT_STYLE
            raise InvalidStyleError(str(style))
        self._style = parsed

    def set_axis_label(self, axis: Axis, label: str) -> None:
        self.cmd(axis_label_command(axis, label))

    def set_xlabel(self, label: str) -> None:
        """Change the label of the x-axis."""
        self.set_axis_label("x", label)

    def set_ylabel(self, label: str) -> None:
        """Change the label of the y-axis."""
        self.set_axis_label("y", label)

    def set_zlabel(self, label: str) -> None:
        """Change the label of the z-axis."""
        self.set_axis_label("z", label)

    def set_labels(self, *labels: str) -> None:
        """
        Label the x, y and z axes in one go, in that order.

        Stops at the first failing label; labels already sent stay applied.

        Raises:
            InvalidDimensionError: zero or more than three labels.
        """
        ndims = len(labels)
        if ndims <= 0 or ndims > MAX_DIMS:
            raise InvalidDimensionError(ndims)
        for axis, label in zip(AXES, labels):
            self.set_axis_label(axis, label)

    # ──────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ──────────────────────────────────────────────────────────────────────
    def reset_plot(self) -> list[Exception]:
        """
        Clear all plots: remove every staged temp file and zero the plot count.

        The plot verb and style are kept. Cleanup failures do not stop the
        reset; they are collected and returned.
        """
        errors = self._staging.cleanup()
        self._nplots = 0
        return errors

    def close(self) -> None:
        """
        Reclaim every resource used by the session.

        Closes gnuplot's stdin and waits for it to exit, then resets the
        session. The reset runs even when the process exited abnormally.

        Raises:
            CloseError: gnuplot exited with a non-zero status.
        """
        try:
            self._proc.close()
        finally:
            errors = self.reset_plot()
            for err in errors:
                self.logger.warning("Temp file cleanup failed: %s", err)

