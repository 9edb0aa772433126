# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from gnuplotter.lib import executable

FAKE_GNUPLOT_PATH = "/usr/bin/gnuplot"


class FakeStdin:
    """Text pipe stand-in that keeps everything written to it."""

    encoding = "utf-8"

    def __init__(self) -> None:
        self.buffer = ""
        self.closed = False
        self.fail_writes = False

    def write(self, text: str) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        if self.fail_writes:
            raise BrokenPipeError(32, "Broken pipe")
        self.buffer += text
        return len(text)

    def flush(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")

    def close(self) -> None:
        self.closed = True

    @property
    def lines(self) -> list[str]:
        return self.buffer.splitlines()


class FakePopen:
    """Records how gnuplot would have been launched; never runs anything."""

    exit_code: int = 0
    instances: list[FakePopen] = []

    def __init__(self, args: list[str], **kwargs: Any) -> None:
        self.args = args
        self.kwargs = kwargs
        self.stdin = FakeStdin()
        self.pid = 4242
        self.returncode: int | None = None
        self.wait_calls = 0
        FakePopen.instances.append(self)

    def wait(self, timeout: float | None = None) -> int:
        self.wait_calls += 1
        self.returncode = type(self).exit_code
        return self.returncode


@pytest.fixture(autouse=True)
def _clean_executable_cache() -> Iterator[None]:
    executable.reset_gnuplot_cache()
    yield
    executable.reset_gnuplot_cache()


@pytest.fixture()
def fake_gnuplot(monkeypatch: pytest.MonkeyPatch) -> type[FakePopen]:
    """
    Pretend gnuplot is installed and capture every process started.

    Returns the FakePopen class; ``FakePopen.instances`` lists the spawned
    processes in order and ``FakePopen.exit_code`` sets their exit status.
    """
    FakePopen.instances = []
    FakePopen.exit_code = 0
    monkeypatch.setattr("gnuplotter.lib.executable.shutil.which",
                        lambda name: FAKE_GNUPLOT_PATH if name == "gnuplot" else None)
    monkeypatch.setattr("gnuplotter.lib.process.subprocess.Popen", FakePopen)
    return FakePopen


@pytest.fixture()
def echo() -> list[str]:
    """Collects the debug echo of a session."""
    return []
