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


from enum import Enum


class BaseInfoEnum(Enum):
    """
    Base class for pyMolSurf option enums carrying an integer value and a
    descriptive info string.

    Every member is declared as ``NAME = int_value, "description"``. The integer
    is what numba kernels and serialized settings see; the description feeds the
    parameter help texts and log messages.

    - `info`: the human-readable description of the member.
    - `int_value`: the primitive integer of the member.
    - `list()`: names of all public members, e.g. for input validation.
    - `help()`: ``'<NAME>: <description>'`` lines for all public members.
    - `from_int()`: member lookup by integer value, with a readable error.
    """

    def __new__(cls, int_value, info):
        obj = object.__new__(cls)
        obj._value_ = int_value
        obj._info = info
        return obj

    @property
    def info(self):
        """Returns the descriptive string associated with the enum member."""
        return self._info

    @property
    def int_value(self):
        """Returns the underlying primitive integer value of the enum member."""
        return self.value

    @classmethod
    def list(cls):
        """Returns the names of all public members of the enum."""
        return [c.name for c in cls if not c.name.startswith("_")]

    @classmethod
    def help(cls):
        """Returns one '<NAME>: <description>' entry per public member."""
        return [f"{c.name}: {c.info}" for c in cls if not c.name.startswith("_")]

    @classmethod
    def from_int(cls, int_value):
        """
        Returns the member whose integer value is `int_value`.

        Raises:
            ValueError: If no member carries this integer value.
        """
        for c in cls:
            if c.value == int_value:
                return c
        raise ValueError(
            f"{int_value} is not a valid {cls.__name__}. Options are: {', '.join(cls.list())}."
        )
