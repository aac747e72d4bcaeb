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
Centralized module for managing global and module-specific verbosity levels.

Modules resolve their threshold once at import time with
``get_effective_verbosity(__name__)``; a message is printed when its level is at
or above that threshold (higher value means more severe, less output).
"""

from typing import TypeAlias

from pymolsurf.foundation.enums import VerbosityLevel as _VL

# Integer value of one of the VerbosityLevel members.
VerbosityLevelValue: TypeAlias = int

CRITICAL = _VL.CRITICAL.int_value  # 50
ERROR = _VL.ERROR.int_value  # 40
NOTICE = _VL.NOTICE.int_value  # 35
WARNING = _VL.WARNING.int_value  # 30
INFO = _VL.INFO.int_value  # 20
DEBUG = _VL.DEBUG.int_value  # 10
TRACE = _VL.TRACE.int_value  # 5

_VALID_VERBOSITY_VALUES = frozenset(level.int_value for level in _VL)

# Keys are module names as seen by ``__name__``.
_MODULE_VERBOSITY_SETTINGS = {
    # config
    "pymolsurf.config.global_runtime": NOTICE,
    # foundation
    "pymolsurf.foundation.settings": NOTICE,
    # space
    "pymolsurf.space.field": NOTICE,
    "pymolsurf.space.surface": INFO,
    "pymolsurf.space.core.rasterizer": NOTICE,
    "pymolsurf.space.core.eroder": NOTICE,
    "pymolsurf.space.core.occupancy": NOTICE,
    # mesh
    "pymolsurf.mesh.builders": NOTICE,
    "pymolsurf.mesh.corner_joiner": NOTICE,
    "pymolsurf.mesh.edge_interpolator": NOTICE,
    "pymolsurf.mesh.marching_cubes": NOTICE,
    "pymolsurf.mesh.measures": NOTICE,
    "pymolsurf.mesh.triangulator": NOTICE,
    # utils
    "pymolsurf.utils.utils": NOTICE,
}


_GLOBAL_VERBOSITY_LEVEL = INFO


def _check_level_value(level_value, what):
    if not isinstance(level_value, int) or level_value not in _VALID_VERBOSITY_VALUES:
        raise ValueError(
            f"Invalid {what} verbosity level_value: {level_value}. "
            f"Must be one of {sorted(_VALID_VERBOSITY_VALUES)}."
        )


def set_global_verbosity_level(level_value: VerbosityLevelValue):
    """
    Sets the global verbosity level.
    Raises ValueError if `level_value` is not a valid VerbosityLevel integer.
    """
    global _GLOBAL_VERBOSITY_LEVEL
    _check_level_value(level_value, "global")
    _GLOBAL_VERBOSITY_LEVEL = level_value


def get_global_verbosity_level() -> VerbosityLevelValue:
    """Returns the current global verbosity level (integer value)."""
    return _GLOBAL_VERBOSITY_LEVEL


def set_module_verbosity(module_name: str, level_value: VerbosityLevelValue):
    """
    Sets the specific verbosity level for a given module.

    Only modules imported after this call pick the new level up, since each
    module caches its effective verbosity at import time.
    """
    _check_level_value(level_value, f"module ({module_name})")
    _MODULE_VERBOSITY_SETTINGS[module_name] = level_value


def get_module_verbosity(module_name: str) -> VerbosityLevelValue:
    """
    Returns the configured verbosity level for a module, or the global level
    when the module has no entry of its own.
    """
    return _MODULE_VERBOSITY_SETTINGS.get(module_name, _GLOBAL_VERBOSITY_LEVEL)


def get_effective_verbosity(module_name: str) -> VerbosityLevelValue:
    """
    Determines the effective verbosity level for a given module.

    The most restrictive (highest value) of the global and the module level wins.
    """
    return max(get_global_verbosity_level(), get_module_verbosity(module_name))
