#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# This file is part of pyMolSurf.
# Copyright (C) 2025 The pyMolSurf Project and contributors.
#
# pyMolSurf is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# pyMolSurf is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with pyMolSurf. If not, see <https://www.gnu.org/licenses/>.


"""
Global runtime settings of pymolsurf: numerical precision, verbosity and
Numba-compatible conditional printing.

It defines:
- `PRECISION`: the precision (single or double) of the occupancy grids.
- `msurf_int`, `msurf_real`, `msurf_bool`: NumPy data types derived from `PRECISION`.
  Modules bind these names at import, so `set_precision()` must be called before
  the computational modules are imported.
- `print_if_verbose` (`vprint`) and `nprint_cpu_if_verbose` (`nprint_cpu`) for
  level-gated printing from Python and from njit kernels respectively.
"""

import numpy as np
from numba import njit

from pymolsurf.foundation.enums import Precision, VerbosityLevel
import pymolsurf.config.logging_config as logging_config
from pymolsurf.config.logging_config import VerbosityLevelValue

PRECISION = Precision.DOUBLE

msurf_int: type = None
msurf_real: type = None
msurf_bool = np.uint8  # uint8 regardless of precision


def _initialize_data_types():
    """Sets `msurf_int` and `msurf_real` from the current `PRECISION`."""
    global msurf_int, msurf_real

    if PRECISION == Precision.SINGLE:
        msurf_int = np.int32
        msurf_real = np.float32
    elif PRECISION == Precision.DOUBLE:
        msurf_int = np.int64
        msurf_real = np.float64
    else:
        raise ValueError(f"Invalid precision: {PRECISION}")


def set_precision(prec: Precision):
    """Sets the precision level and re-initializes data types.

    Args:
        prec: The desired precision level (Precision enum member).
    """
    global PRECISION
    PRECISION = prec
    _initialize_data_types()


def set_verbosity_level(level: VerbosityLevel):
    """
    Sets the global verbosity level. This function delegates to logging_config.

    Args:
        level: The desired verbosity level (VerbosityLevel enum member).
    """
    logging_config.set_global_verbosity_level(level.int_value)
    print_if_verbose(
        logging_config.DEBUG,
        logging_config.get_effective_verbosity(__name__),
        f"Configured global verbosity level to: {level.name} (value: {level.int_value})",
    )


def print_if_verbose(
    message_level: VerbosityLevelValue,
    configured_verbosity_level: VerbosityLevelValue,
    *args,
    sep=" ",
    end="\n",
    file=None,
    flush=False,
):
    """
    Prints a message if its level is greater than or equal to the configured
    verbosity level.

    Args:
        message_level: The level of the message (e.g., logging_config.DEBUG).
        configured_verbosity_level: The effective verbosity of the calling module.
        *args: The message arguments (like the standard print function).
        sep, end, file, flush: Same as the standard print function.
    """
    if message_level >= configured_verbosity_level:
        print(*args, sep=sep, end=end, file=file, flush=flush)


@njit(cache=True)
def nprint_cpu_if_verbose(
    message_level: VerbosityLevelValue,
    configured_verbosity_level: VerbosityLevelValue,
    *args,
):
    """
    Numba-friendly print for CPU kernels, with the same filtering rule as
    `print_if_verbose`.
    """
    if message_level >= configured_verbosity_level:
        print(*args)


vprint = print_if_verbose
nprint_cpu = nprint_cpu_if_verbose


_initialize_data_types()

logging_config.set_global_verbosity_level(VerbosityLevel.INFO.int_value)
