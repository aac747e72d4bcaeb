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
Cube classification: the 8-bit code of a lattice cell.

Bit i of the code is set when the value at cube corner i (ordered as
`CUBE_CORNER_OFFSETS`) is below the iso-level.
"""

import numpy as np

from pymolsurf.constants import EDGE_TABLE

_EDGE_TABLE_ARRAY = np.array(EDGE_TABLE, dtype=np.int32)
_EDGE_TABLE_ARRAY.setflags(write=False)


def classify_cube(samples, iso_level):
    """
    Returns the cube code of 8 corner samples.

    Args:
        samples: 8 values in `CUBE_CORNER_OFFSETS` order.
        iso_level (float): The surface threshold.
    """
    code = 0
    for bit, value in enumerate(samples):
        if value < iso_level:
            code |= 1 << bit
    return code


def classify_layer(lower_layer, upper_layer, iso_level):
    """
    Returns the codes of all cells between two adjacent x-layers.

    Args:
        lower_layer (np.ndarray): (sy, sz) values of layer ix - 1.
        upper_layer (np.ndarray): (sy, sz) values of layer ix.
        iso_level (float): The surface threshold.

    Returns:
        np.ndarray: (sy - 1, sz - 1) codes; entry [iy - 1, iz - 1] is the cell whose
        highest corner is (ix, iy, iz).
    """
    lo = (lower_layer < iso_level).astype(np.int32)
    hi = (upper_layer < iso_level).astype(np.int32)
    codes = lo[:-1, :-1].copy()
    codes |= hi[:-1, :-1] << 1
    codes |= hi[:-1, 1:] << 2
    codes |= lo[:-1, 1:] << 3
    codes |= lo[1:, :-1] << 4
    codes |= hi[1:, :-1] << 5
    codes |= hi[1:, 1:] << 6
    codes |= lo[1:, 1:] << 7
    return codes


def active_cells(codes):
    """
    Returns (rows, cols, codes) of the cells crossed by the surface, in row-major
    order, from an array produced by `classify_layer`.
    """
    crossed = _EDGE_TABLE_ARRAY[codes] != 0
    rows, cols = np.nonzero(crossed)
    return rows, cols, codes[rows, cols]
