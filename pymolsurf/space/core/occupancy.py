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
Quantities read directly off an occupancy field, without triangulation, and a
synthetic field covering every cube configuration.
"""

import numpy as np
from numba import njit, prange

from pymolsurf.config.global_runtime import msurf_real
from pymolsurf.constants import ConstSurfaceFloats, CUBE_CORNER_OFFSETS
from pymolsurf.space.field import ScalarField

ISO_LEVEL = ConstSurfaceFloats.IsoLevel.value
VOLUME_HALF_ISO_OFFSET = ConstSurfaceFloats.VolumeHalfIsoOffset.value


@njit(nogil=True, boundscheck=False, cache=True, parallel=True)
def _sum_fractional_occupancy(grid_1d, threshold):
    """Sum over all lattice points of `clamp(value - threshold, 0, 1)`."""
    total = 0.0
    for i in prange(grid_1d.size):
        v = grid_1d[i] - threshold
        if v > 0.0:
            total += min(v, 1.0)
    return total


def calculate_volume(field):
    """
    Estimates the volume (cubic angstrom) enclosed by the ISO surface of `field`.

    Each lattice point counts as one voxel when at least half a voxel inside the
    surface, as nothing when half a voxel outside, and linearly in between. The
    estimate over-shoots by roughly 0.5 % for 0.2 A voxels, 2 % for 0.4 A and 4 %
    for 0.6 A.
    """
    threshold = field.iso_level - VOLUME_HALF_ISO_OFFSET
    voxel_count = _sum_fractional_occupancy(field.values, threshold)
    return float(voxel_count) * field.voxel_size**3


def build_all_cubes_field(seed=1, iso_level=ISO_LEVEL, voxel_size=1.0):
    """
    Builds a field containing each of the 256 cube codes once.

    Cube code `16 * j + k` occupies the cell whose lowest corner is lattice
    (2, 3 * j + 2, 3 * k + 2); its corners lie in `(iso_level - 1, iso_level)` where
    the code has the corner's bit set and in `(iso_level, iso_level + 1)` where not,
    with random distances drawn from `seed`. All other lattice points are 0, so
    cubes never share corners with each other.

    Returns:
        tuple: (ScalarField, dict mapping cube code -> (ix, iy, iz) of the cell's
        lowest corner)
    """
    rng = np.random.default_rng(seed)
    shape = (5, 50, 50)
    values = np.zeros(shape, dtype=msurf_real)
    cells = {}
    for code in range(256):
        j, k = divmod(code, 16)
        base = (2, 3 * j + 2, 3 * k + 2)
        # keep the corners strictly off the iso-level
        distances = rng.uniform(0.05, 0.95, size=8)
        for bit in range(8):
            dx, dy, dz = CUBE_CORNER_OFFSETS[bit]
            below = (code >> bit) & 1
            values[base[0] + dx, base[1] + dy, base[2] + dz] = (
                iso_level - distances[bit] if below else iso_level + distances[bit]
            )
        cells[code] = base
    offset = -0.5 * voxel_size * np.array(shape, dtype=np.float64)
    return ScalarField(values, shape, voxel_size, offset, iso_level), cells
