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
Module defining the enumeration classes of pymolsurf configuration.

    - Calculation precision (Precision)
    - Verbosity levels (VerbosityLevel)
    - Molecular surface types (SurfaceType)
    - Parameter types (ParamType)
    - Area/volume measurement modes (MeasureMode)

This module is intentionally kept lightweight and avoids dependencies
on libraries that are not essential for defining configuration enums.
"""

from pymolsurf.foundation.enumbase import BaseInfoEnum


class Precision(BaseInfoEnum):
    """Enumerates all supported options for setting precision in pyMolSurf calculations."""

    SINGLE = 1, "Use single precision (4-byte) for real numbers."
    DOUBLE = 2, "Use double precision (8-byte) for real numbers."


class VerbosityLevel(BaseInfoEnum):
    """Enumerates all supported verbosity levels for logging in pyMolSurf."""

    CRITICAL = (
        50,
        "Log only critical failures or mandatory final results.",
    )
    ERROR = (
        40,
        "Log errors preventing an operation from completing (e.g., invalid atoms or settings).",
    )
    NOTICE = (
        35,
        "Log final results, excluding warnings, timings, and progress details.",
    )
    WARNING = (
        30,
        "Log warnings for potential issues or unexpected conditions.",
    )
    INFO = (
        20,
        "Log general progress: grid geometry summaries, stage timings and mesh sizes.",
    )
    DEBUG = (
        10,
        "Enable debug messages, including grid parameters and degenerate closure squares.",
    )
    TRACE = (
        5,
        "Enable extremely fine-grained tracing such as per-layer sweep statistics.",
    )


class SurfaceType(BaseInfoEnum):
    """Enumerates the molecular surface definitions that can be meshed."""

    CONNOLLY = (
        0,
        "Solvent excluded surface: the envelope traced by the inner side of a rolling probe.",
    )
    LEE_RICHARDS = (
        1,
        "Solvent accessible surface: atom spheres inflated by the probe radius.",
    )

    @property
    def display_name(self):
        return {0: "Connolly", 1: "Lee-Richards"}[self.value]


class ParamType(BaseInfoEnum):
    """Enumerates parameter types used in input configuration."""

    STATEMENT = 1, "Simple parameter like 'param=value'."


class MeasureMode(BaseInfoEnum):
    """Enumerates what the surface area and volume calculator computes."""

    AREA = 1, "Triangulate the surface and sum the triangle areas."
    VOLUME = 2, "Estimate the enclosed volume from the occupancy grid only."
    AREA_AND_VOLUME = 3, "Compute both the surface area and the enclosed volume."

    def includes(self, other):
        """True if this mode covers everything `other` asks for."""
        return (self.value & other.value) == other.value
