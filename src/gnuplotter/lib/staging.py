# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import logging
import math
import os
import tempfile
from collections.abc import Iterable
from typing import IO, cast

import numpy as np

from gnuplotter.lib.errors import StagingError
from gnuplotter.lib.types import ArrayLikeF64, DataRow, NDArrayF64, Number, TmpFilePath

DEFAULT_TMP_PREFIX: str = "py-gnuplot-"

# Largest magnitude still printed in plain integer notation
_INT_NOTATION_LIMIT: float = 1e21


def format_number(value: Number) -> str:
    """
    Render one data value for a gnuplot data file.

    Integral values drop the fractional part (``10`` rather than ``10.0``);
    everything else uses the shortest round-tripping ``repr``. The result
    does not depend on the process locale.
    """
    f = float(value)
    if math.isfinite(f) and f.is_integer() and abs(f) < _INT_NOTATION_LIMIT:
        return str(int(f))
    return repr(f)


def format_row(row: Iterable[Number]) -> str:
    return " ".join(format_number(v) for v in row)


def align_columns(*series: ArrayLikeF64) -> list[DataRow]:
    """
    Zip independently sized series into rows.

    Only the first N rows are produced, N being the shortest series length;
    the tail of longer series is dropped.
    """
    columns: list[NDArrayF64] = [np.asarray(s, dtype=np.float64).ravel() for s in series]
    if not columns:
        return []
    npoints = min(c.size for c in columns)
    return [tuple(float(c[i]) for c in columns) for i in range(npoints)]


class TempFileStaging:
    """
    Writes numeric rows to temporary text files gnuplot can plot directly.

    Every file created is tracked until :meth:`cleanup` removes it. Files
    live in the system temp directory and carry a fixed name prefix.
    """

    def __init__(self, prefix: str = DEFAULT_TMP_PREFIX, directory: str | None = None) -> None:
        self.logger     = logging.getLogger(self.__class__.__name__)
        self.prefix     = prefix
        self.directory  = directory or tempfile.gettempdir()
        self._files: dict[TmpFilePath, IO[str]] = {}

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        return path in self._files

    @property
    def paths(self) -> tuple[TmpFilePath, ...]:
        return tuple(self._files)

    def stage(self, rows: Iterable[Iterable[Number]]) -> TmpFilePath:
        """
        Write ``rows`` to a fresh temp file, one space-separated line per row.

        The path is registered before any row is written, so a failed write
        still leaves the file to :meth:`cleanup`. The file is closed when this
        returns.

        Raises:
            StagingError: the file could not be created or written.
        """
        try:
            fh = tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                prefix=self.prefix,
                dir=self.directory,
                delete=False,
            )
        except OSError as exc:
            raise StagingError(f"cannot create temp file in {self.directory}: {exc}") from exc

        path = cast(TmpFilePath, fh.name)
        self._files[path] = fh

        count = 0
        try:
            with fh:
                for row in rows:
                    fh.write(format_row(row) + "\n")
                    count += 1
        except OSError as exc:
            raise StagingError(f"cannot write temp file {path}: {exc}") from exc

        self.logger.debug("Staged %d rows to %s", count, path)
        return path

    def stage_columns(self, *series: ArrayLikeF64) -> TmpFilePath:
        """Stage parallel series as rows, truncated to the shortest one."""
        return self.stage(align_columns(*series))

    def cleanup(self) -> list[Exception]:
        """
        Close and delete every tracked file.

        Every entry is visited even when some fail; the failures are returned
        rather than raised. A file already gone from disk counts as removed.
        """
        errors: list[Exception] = []
        for path, fh in self._files.items():
            try:
                fh.close()
            except OSError as exc:
                errors.append(exc)
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError as exc:
                self.logger.debug("Failed to remove %s: %s", path, exc)
                errors.append(exc)

        self.logger.debug("Cleaned %d temp files (%d errors)", len(self._files), len(errors))
        self._files.clear()
        return errors
