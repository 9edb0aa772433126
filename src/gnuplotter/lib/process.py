# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
import subprocess
from typing import IO, cast

from gnuplotter.lib.errors import CloseError, SpawnError, WriteError
from gnuplotter.lib.executable import DEFAULT_EXECUTABLE, resolve_gnuplot
from gnuplotter.lib.types import DebugSink, ExitCode

PERSIST_ARG: str = "-persist"


class PlotterProcess:
    """
    Owns one gnuplot subprocess and the text pipe to its standard input.

    Commands are fire-and-forget: nothing is read back from gnuplot, whose
    stdout and stderr are inherited from the calling process.
    """

    def __init__(self, handle: subprocess.Popen[str], *,
                 debug: bool = False, sink: DebugSink = print) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.handle = handle
        if handle.stdin is None:
            raise SpawnError("gnuplot process has no stdin pipe")
        self.stdin: IO[str] = handle.stdin
        self.debug = debug
        self._sink = sink
        self._closed = False

    @classmethod
    def start(cls, persist: bool = False, *,
              executable: str | None = None,
              debug: bool = False,
              sink: DebugSink = print) -> PlotterProcess:
        """
        Launch gnuplot and open a write-only pipe to it.

        Args:
            persist: pass ``-persist`` so plot windows outlive the process.
            executable: program name or path; defaults to ``gnuplot`` on PATH.
            debug: echo every command sent to ``sink``.
            sink: callable receiving the debug echo lines.

        Raises:
            GnuplotNotFoundError: executable not on the search path.
            SpawnError: the process could not be started.
        """
        cmd_path = resolve_gnuplot(executable or DEFAULT_EXECUTABLE)

        args: list[str] = [cmd_path]
        if persist:
            args.append(PERSIST_ARG)

        logger = logging.getLogger(cls.__name__)
        logger.debug("--> [%s] %s", cmd_path, args[1:])

        try:
            handle = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                text=True,
                encoding="utf-8",
            )
        except OSError as exc:
            raise SpawnError(f"failed to start gnuplot [{cmd_path}]: {exc}") from exc

        return cls(handle, debug=debug, sink=sink)

    @property
    def pid(self) -> int:
        return self.handle.pid

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, line: str) -> int:
        """
        Write ``line`` followed by a newline and flush it.

        Returns:
            Number of bytes written, in the pipe encoding.

        Raises:
            WriteError: stdin is closed or the write failed.
        """
        if self._closed:
            raise WriteError("gnuplot process is closed")

        payload = line + "\n"
        try:
            self.stdin.write(payload)
            self.stdin.flush()
        except (OSError, ValueError) as exc:
            raise WriteError(f"failed to send command to gnuplot: {exc}") from exc

        n = len(payload.encode(getattr(self.stdin, "encoding", None) or "utf-8"))
        if self.debug:
            self._sink(f"cmd> {line}")
            self._sink(f"res> {n}")
        return n

    def close(self) -> ExitCode:
        """
        Close stdin and wait for gnuplot to exit.

        Blocks until the process terminates. A second call returns the
        recorded exit code without waiting again.

        Raises:
            CloseError: the process exited with a non-zero status or a signal.
        """
        if self._closed:
            return cast(ExitCode, self.handle.returncode or 0)
        self._closed = True

        try:
            self.stdin.close()
        except OSError as exc:
            self.logger.debug("Ignoring error on stdin close: %s", exc)

        rc = self.handle.wait()
        self.logger.debug("gnuplot [pid %s] exited with %s", self.handle.pid, rc)
        if rc < 0:
            raise CloseError(f"gnuplot terminated by signal {-rc}", returncode=rc)
        if rc != 0:
            raise CloseError(f"gnuplot exited with status {rc}", returncode=rc)
        return cast(ExitCode, rc)
