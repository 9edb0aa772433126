# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from typing import NewType, TypeAlias

import numpy as np
from numpy.typing import NDArray


# Enum String Type
class StringEnum(str, Enum):
    """Py3.10-compatible StrEnum shim."""

    def __str__(self) -> str:
        return str(self.value)

# ────────────────────────────────────────────────────────────────────────────────
# Core numerics
# ────────────────────────────────────────────────────────────────────────────────
Number       = int | float | np.number

NDArrayF64: TypeAlias   = NDArray[np.float64]

# Anything we accept as one series of a plot: python sequence or numpy array
ArrayLikeF64 = Sequence[float] | NDArray[np.generic]

# One staged data point (x | x,y | x,y,z)
DataRow: TypeAlias          = tuple[float, ...]

# 1-d function sampled by Plotter.plot_func
PlotFunc: TypeAlias         = Callable[[float], float]

# ────────────────────────────────────────────────────────────────────────────────
# Paths / filesystem
# ────────────────────────────────────────────────────────────────────────────────
PathLike    = str | Path
FileNameStr = NewType("FileNameStr", str)
TmpFilePath = NewType("TmpFilePath", str)

# ────────────────────────────────────────────────────────────────────────────────
# Subprocess
# ────────────────────────────────────────────────────────────────────────────────
ExitCode        = NewType("ExitCode", int)
ExecutablePath  = NewType("ExecutablePath", str)

# Receives the debug echo of each command sent to gnuplot
DebugSink: TypeAlias = Callable[[str], None]

# ────────────────────────────────────────────────────────────────────────────────
# Explicit public surface
# ────────────────────────────────────────────────────────────────────────────────
__all__ = [
    # enums
    "StringEnum",
    # numerics
    "Number", "NDArrayF64", "ArrayLikeF64", "DataRow", "PlotFunc",
    # paths
    "PathLike", "FileNameStr", "TmpFilePath",
    # subprocess
    "ExitCode", "ExecutablePath", "DebugSink",
]
