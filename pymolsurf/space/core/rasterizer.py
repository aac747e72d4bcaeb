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
Rasterization of atoms into the occupancy grid.

1.  **Grid geometry (`calculate_grid_geometry`)**: the bounding box of the atom
    spheres, padded by the probe radius on every side, is sampled with
    `int(extent / voxel_size + 3)` lattice points per axis; the offset centers
    the padded box in the lattice.
2.  **Occupancy accumulation (`_accumulate_atom_occupancy`)**: every atom raises
    the lattice points within its influence radius `(probe + vdW) / voxel_size`
    (lattice units) to `radius - distance + ISO`, keeping the maximum over atoms.
    The ISO crossing of the resulting field lies on the union of the inflated
    spheres; points already above `ISO + RADIUS_SURPLUS` are not updated further.

Uses Numba for JIT compilation of the lattice loops.
"""

import numpy as np
from numba import njit

from pymolsurf.config.global_runtime import (
    msurf_int,
    msurf_real,
    vprint,
)
from pymolsurf.constants import (
    ATOMFIELD_X,
    ATOMFIELD_CRD_END,
    ATOMFIELD_RADIUS,
    ConstSurfaceFloats,
    ConstSurfaceInts,
)
from pymolsurf.config.logging_config import (
    DEBUG,
    get_effective_verbosity,
)
from pymolsurf.space.field import ScalarField

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)

ISO_LEVEL = ConstSurfaceFloats.IsoLevel.value
RADIUS_SURPLUS = ConstSurfaceFloats.RadiusSurplus.value
GRID_MARGIN_VOXELS = ConstSurfaceInts.GridMarginVoxels.value


def calculate_grid_geometry(atoms_data, probe_size, voxel_size):
    """
    Determines the lattice shape and world-space offset for a set of atoms.

    Args:
        atoms_data (np.ndarray): (N, LEN_ATOMFIELDS) atom array.
        probe_size (float): Solvent probe radius in angstrom.
        voxel_size (float): Lattice spacing in angstrom.

    Returns:
        tuple: (grid_shape (np.ndarray of 3 ints), grid_offset (np.ndarray of 3 floats))
    """
    coords = atoms_data[:, ATOMFIELD_X:ATOMFIELD_CRD_END].astype(np.float64)
    radii = atoms_data[:, ATOMFIELD_RADIUS].astype(np.float64)

    coords_min = np.min(coords - radii[:, None], axis=0)
    coords_max = np.max(coords + radii[:, None], axis=0)
    extent = coords_max - coords_min + 2.0 * probe_size

    grid_shape = np.empty(3, dtype=msurf_int)
    grid_shape[:] = (extent / voxel_size + GRID_MARGIN_VOXELS).astype(msurf_int)

    grid_offset = coords_min - probe_size - ((grid_shape - 1) * voxel_size - extent) / 2.0

    vprint(
        DEBUG,
        _VERBOSITY,
        f"grid geometry: extent={np.round(extent, 3)}, shape={tuple(grid_shape)}, "
        f"offset={np.round(grid_offset, 3)}",
    )
    return grid_shape, grid_offset


@njit(nogil=True, boundscheck=False, cache=True)
def _accumulate_atom_occupancy(
    grid_1d,
    grid_shape,
    atoms_lattice_xyz,
    influence_radii,
):
    """
    Raises `grid_1d` in place to the per-atom occupancy maximum.

    Args:
        grid_1d (np.ndarray): Flat lattice, z least significant.
        grid_shape (np.ndarray): (sx, sy, sz).
        atoms_lattice_xyz (np.ndarray): (N, 3) atom centers in lattice units.
        influence_radii (np.ndarray): (N,) influence radii in lattice units.
    """
    sx, sy, sz = grid_shape[0], grid_shape[1], grid_shape[2]
    x_stride = sy * sz
    saturation = ISO_LEVEL + RADIUS_SURPLUS

    for atom_index in range(atoms_lattice_xyz.shape[0]):
        x = atoms_lattice_xyz[atom_index, 0]
        y = atoms_lattice_xyz[atom_index, 1]
        z = atoms_lattice_xyz[atom_index, 2]
        r = influence_radii[atom_index]

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
                    if grid_1d[i] < saturation:
                        dz = z - zi
                        d = r - np.sqrt(dx * dx + dy * dy + dz * dz) + ISO_LEVEL
                        if grid_1d[i] < d:
                            grid_1d[i] = d


def rasterize_atoms(atoms_data, probe_size, voxel_size, dtype=None):
    """
    Builds the occupancy field of a set of atoms.

    The ISO crossing of the returned field is the union of the atom spheres with
    radii inflated by `probe_size` (the Lee-Richards surface; the van der Waals
    hull for a zero probe).

    Args:
        atoms_data (np.ndarray): (N, LEN_ATOMFIELDS) atom array.
        probe_size (float): Solvent probe radius in angstrom.
        voxel_size (float): Lattice spacing in angstrom.
        dtype: Floating point type of the grid (defaults to msurf_real).

    Returns:
        ScalarField: The populated field with its shape and offset.
    """
    dtype = msurf_real if dtype is None else dtype
    grid_shape, grid_offset = calculate_grid_geometry(atoms_data, probe_size, voxel_size)

    coords = atoms_data[:, ATOMFIELD_X:ATOMFIELD_CRD_END].astype(np.float64)
    atoms_lattice_xyz = np.ascontiguousarray((coords - grid_offset) / voxel_size)
    influence_radii = (
        probe_size + atoms_data[:, ATOMFIELD_RADIUS].astype(np.float64)
    ) / voxel_size

    grid_1d = np.zeros(int(np.prod(grid_shape)), dtype=dtype)
    _accumulate_atom_occupancy(grid_1d, grid_shape, atoms_lattice_xyz, influence_radii)

    return ScalarField(grid_1d, grid_shape, voxel_size, grid_offset, ISO_LEVEL)
