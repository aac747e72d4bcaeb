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
Probe erosion: turns the solvent accessible occupancy field into the solvent
excluded (Connolly) one.

The ISO crossing of the accessible field is where the probe center can go. Every
crossing found on a lattice edge is treated as a probe center and a sphere of the
probe radius around it is carved out of a copy of the field by lowering values to
`distance - probe_radius + ISO`. What remains occupied is the volume the probe
sphere cannot reach.
"""

import numpy as np
from numba import njit

from pymolsurf.config.global_runtime import nprint_cpu
from pymolsurf.constants import ConstSurfaceFloats
from pymolsurf.config.logging_config import (
    TRACE,
    get_effective_verbosity,
)
from pymolsurf.space.field import ScalarField

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)

ISO_LEVEL = ConstSurfaceFloats.IsoLevel.value
RADIUS_SURPLUS = ConstSurfaceFloats.RadiusSurplus.value


@njit(nogil=True, boundscheck=False, cache=True)
def _remove_probe_volume(out_grid_1d, grid_shape, r, x, y, z):
    """Lowers `out_grid_1d` to the carved probe sphere centered at lattice (x, y, z)."""
    sx, sy, sz = grid_shape[0], grid_shape[1], grid_shape[2]
    x_stride = sy * sz
    floor_value = ISO_LEVEL - RADIUS_SURPLUS

    x1 = max(0, int(x - r))
    x2 = min(sx - 1, int(x + r + 1.0))
    y1 = max(0, int(y - r))
    y2 = min(sy - 1, int(y + r + 1.0))
    z1 = max(0, int(z - r))
    z2 = min(sz - 1, int(z + r + 1.0))

    for xi in range(x1, x2 + 1):
        dx = x - xi
        for yi in range(y1, y2 + 1):
            dy = y - yi
            row_start = xi * x_stride + yi * sz
            for zi in range(z1, z2 + 1):
                i = row_start + zi
                if out_grid_1d[i] > floor_value:
                    dz = z - zi
                    d = np.sqrt(dx * dx + dy * dy + dz * dz) - r + ISO_LEVEL
                    if out_grid_1d[i] > d:
                        out_grid_1d[i] = d


@njit(nogil=True, boundscheck=False, cache=True)
def erode_probe_accessible_volume(in_grid_1d, grid_shape, probe_radius_lattice):
    """
    Returns an eroded copy of `in_grid_1d`.

    Crossings are detected on the un-eroded input (one endpoint `<= ISO`, the
    other above) along +x, +y and +z from every lattice point that has all three
    forward neighbors; erosion is applied to the copy only.

    Args:
        in_grid_1d (np.ndarray): Flat accessible occupancy field.
        grid_shape (np.ndarray): (sx, sy, sz).
        probe_radius_lattice (float): Probe radius in lattice units.

    Returns:
        np.ndarray: The eroded field; never above `in_grid_1d` anywhere.
    """
    sx, sy, sz = grid_shape[0], grid_shape[1], grid_shape[2]
    x_stride = sy * sz
    out_grid_1d = in_grid_1d.copy()
    crossing_count = 0

    for ix in range(sx - 1):
        for iy in range(sy - 1):
            row_start = ix * x_stride + iy * sz
            for iz in range(sz - 1):
                i = row_start + iz
                value = in_grid_1d[i]
                is_smaller = value <= ISO_LEVEL

                neighbor = in_grid_1d[i + x_stride]
                if is_smaller != (neighbor <= ISO_LEVEL):
                    pos = (ISO_LEVEL - value) / (neighbor - value)
                    _remove_probe_volume(
                        out_grid_1d, grid_shape, probe_radius_lattice, ix + pos, iy, iz
                    )
                    crossing_count += 1

                neighbor = in_grid_1d[i + sz]
                if is_smaller != (neighbor <= ISO_LEVEL):
                    pos = (ISO_LEVEL - value) / (neighbor - value)
                    _remove_probe_volume(
                        out_grid_1d, grid_shape, probe_radius_lattice, ix, iy + pos, iz
                    )
                    crossing_count += 1

                neighbor = in_grid_1d[i + 1]
                if is_smaller != (neighbor <= ISO_LEVEL):
                    pos = (ISO_LEVEL - value) / (neighbor - value)
                    _remove_probe_volume(
                        out_grid_1d, grid_shape, probe_radius_lattice, ix, iy, iz + pos
                    )
                    crossing_count += 1

    nprint_cpu(TRACE, _VERBOSITY, "probe erosion: crossings carved =", crossing_count)
    return out_grid_1d


def erode_field(field, probe_size):
    """
    Returns the solvent excluded field for an accessible `field` built with
    `probe_size` (angstrom). A zero probe returns an unchanged copy.
    """
    if probe_size == 0.0:
        return field.copy()
    grid_shape = np.array(field.shape, dtype=np.int64)
    eroded = erode_probe_accessible_volume(
        field.values, grid_shape, probe_size / field.voxel_size
    )
    return ScalarField(eroded, field.shape, field.voxel_size, field.offset.copy(), field.iso_level)
