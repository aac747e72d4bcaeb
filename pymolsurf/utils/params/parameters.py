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
Parameter definition primitives of pymolsurf.

- `param_typecheck`: casts and range-checks a single parameter value.
- `Parameter`, `ParamStatement`: a named, typed, documented parameter with its
  full, long and short aliases.
- `ParameterGroup`: a named collection of parameters.
"""

import inspect
import math
import textwrap
from enum import Enum

from pymolsurf.config.global_runtime import (
    msurf_bool,
    msurf_int,
    msurf_real,
)
from pymolsurf.foundation.enumbase import BaseInfoEnum
from pymolsurf.foundation.enums import ParamType


def _check_range(prm_name, value_obj, min_value, max_value, override):
    if min_value is not None and value_obj < min_value:
        if not override:
            raise ValueError(f"`{prm_name}` must be >= {min_value}, got {value_obj}.")
        value_obj = type(value_obj)(min_value)
    if max_value is not None and value_obj > max_value:
        if not override:
            raise ValueError(f"`{prm_name}` must be <= {max_value}, got {value_obj}.")
        value_obj = type(value_obj)(max_value)
    return value_obj


def param_typecheck(
    prm_name, value, dtype, min_value=None, max_value=None, override=False
):
    """
    Checks and validates a parameter value against a data type and an optional range.

    Args:
        prm_name (str): The name of the parameter being validated, used in error messages.
        value: The value to be validated; it is cast to `dtype`.
        dtype (type or Enum): int, float, bool, str or an Enum class.
        min_value (optional): Inclusive lower bound for numeric types.
        max_value (optional): Inclusive upper bound for numeric types.
        override (bool, optional): Clip out-of-range numeric values to the nearest
            bound instead of raising.

    Returns:
        The validated value, cast to `dtype`.

    Raises:
        ValueError: If the value cannot be cast, is not finite, is out of range
            (and `override` is False), or names no member of an Enum `dtype`.
        TypeError: If an unsupported `dtype` is provided.
    """
    if dtype in (int, msurf_int):
        if isinstance(value, bool):
            raise ValueError(f"Invalid value for `{prm_name}`. Expected an integer, got {value!r}.")
        try:
            value_obj = int(value)
        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid value for `{prm_name}`. Expected an integer in the range {min_value} to {max_value}."
            ) from None
        return _check_range(prm_name, value_obj, min_value, max_value, override)

    if dtype in (float, msurf_real):
        if isinstance(value, bool):
            raise ValueError(f"Invalid value for `{prm_name}`. Expected a float, got {value!r}.")
        try:
            value_obj = float(value)
        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid value for `{prm_name}`. Expected a float in the range {min_value} to {max_value}."
            ) from None
        if not math.isfinite(value_obj):
            raise ValueError(f"`{prm_name}` must be finite, got {value_obj}.")
        return _check_range(prm_name, value_obj, min_value, max_value, override)

    if dtype in (bool, msurf_bool):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ["yes", "1", "true", "on"]

    if inspect.isclass(dtype) and issubclass(dtype, Enum):
        if isinstance(value, dtype):
            return value
        try:
            if isinstance(value, int) and issubclass(dtype, BaseInfoEnum):
                return dtype.from_int(value)
            value_str = str(value).strip().upper().replace("-", "_").split(".")[-1]
            return dtype[value_str]
        except (KeyError, ValueError):
            raise ValueError(
                f"Invalid choice `{value}` for `{prm_name}`. Options are: {', '.join([e.name for e in dtype])}."
            ) from None

    if dtype == str:
        return str(value)

    raise TypeError(f"Unexpected data type `{dtype}` for `{prm_name}`.")


class Parameter:
    """
    Base class of a named pymolsurf parameter.

    Attributes:
        full_name (str): Full descriptive name (e.g., "voxel_size").
        long_name (str): Long alias (e.g., "voxelsize").
        short_name (str): Short alias (e.g., "vox").
        partype (ParamType): Kind of the parameter.
        description_short (str): One-line description.
        description_long (str): Detailed description.
        required (bool): Whether the parameter must be supplied.
    """

    def __init__(self):
        self.full_name = None
        self.long_name = None
        self.short_name = None
        self.partype = None
        self.description_short = None
        self.description_long = None
        self.required = None

    @property
    def names(self):
        return (self.full_name, self.long_name, self.short_name)


class ParamStatement(Parameter):
    """
    A simple parameter with one typed value, a default and an optional range.

    Attributes (in addition to those of Parameter):
        units (str): Unit of measurement (e.g., "Angstrom").
        dtype (type or Enum): Data type of the value.
        default: Default value.
        min_value, max_value: Inclusive value range, None when unbounded.
        override (bool): Clip out-of-range values instead of rejecting them.
    """

    def __init__(
        self,
        full_name,
        long_name,
        short_name,
        units,
        dtype,
        default,
        min_value,
        max_value,
        desc_short="",
        desc_long="",
        override=False,
        required=False,
    ):
        super().__init__()
        self.partype = ParamType.STATEMENT
        self.full_name = full_name
        self.long_name = long_name
        self.short_name = short_name
        self.units = units
        self.dtype = dtype
        self.default = default
        self.min_value = min_value
        self.max_value = max_value
        self.description_short = desc_short
        self.description_long = desc_long
        self.override = override
        self.required = required

    def validate(self, value):
        """Returns `value` cast and range-checked against this definition."""
        return param_typecheck(
            self.full_name,
            value,
            self.dtype,
            min_value=self.min_value,
            max_value=self.max_value,
            override=self.override,
        )

    def help(self, detailed=False, indent=0, fieldwidth=12, linewidth=90):
        """
        Returns the help text of the parameter: aliases, units, type (with the
        options of enum types), default and description.
        """
        pad = f"{'':{indent}s}"
        outs = [
            f"{pad}{'full_name:':{fieldwidth}s} {self.full_name}",
            f"{pad}{'long_name:':{fieldwidth}s} {self.long_name}",
            f"{pad}{'short_name:':{fieldwidth}s} {self.short_name}",
        ]
        if self.units:
            outs.append(f"{pad}{'unit:':{fieldwidth}s} {self.units}")

        if inspect.isclass(self.dtype) and issubclass(self.dtype, BaseInfoEnum):
            outs.append(f"{pad}{'data_type:':{fieldwidth}s} {self.dtype.__name__}")
            outs.append(f"{pad}{'options:':{fieldwidth}s}")
            option_indent = " " * (indent + fieldwidth + 4)
            for option_line in self.dtype.help():
                outs.append(
                    textwrap.fill(
                        option_line,
                        width=linewidth,
                        initial_indent=option_indent,
                        subsequent_indent=option_indent + "    ",
                        break_long_words=False,
                    )
                )
        else:
            dtype_name = self.dtype.__name__ if inspect.isclass(self.dtype) else str(self.dtype)
            outs.append(f"{pad}{'data_type:':{fieldwidth}s} {dtype_name}")
            if self.min_value is not None or self.max_value is not None:
                outs.append(
                    f"{pad}{'range:':{fieldwidth}s} [{self.min_value}, {self.max_value}]"
                )

        outs.append(f"{pad}{'default:':{fieldwidth}s} {self.default}")
        description = self.description_long if detailed else self.description_short
        outs.append(
            textwrap.fill(
                description,
                width=linewidth,
                initial_indent=f"{pad}{'description:':{fieldwidth}s} ",
                subsequent_indent=" " * (indent + fieldwidth + 1),
            )
        )
        return "\n".join(outs) + "\n"


class ParameterGroup:
    """
    A named group of parameters, with members keyed by their
    (full_name, long_name, short_name) tuple.
    """

    def __init__(self, name, desc_short, desc_long):
        self.name = name
        self.description_short = desc_short
        self.description_long = desc_long
        self.members = {}

    def add_member(self, member):
        """Adds `member` unless a parameter with the same names is already present."""
        if member.names not in self.members:
            self.members[member.names] = member

    def find(self, name):
        """
        Returns the member known under `name` (any of its aliases, case-insensitive).

        Raises:
            KeyError: If no member is known under `name`.
        """
        key = name.strip().lower()
        for names, member in self.members.items():
            if key in names:
                return member
        raise KeyError(f"Unknown parameter `{name}` in group `{self.name}`.")

    def help(self, detailed=False):
        outs = [f"[{self.name}] {self.description_short}", ""]
        for member in self.members.values():
            outs.append(member.help(detailed=detailed, indent=4))
        return "\n".join(outs)
