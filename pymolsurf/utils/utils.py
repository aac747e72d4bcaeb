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
Helpers shared by the grid and mesh modules: construction and validation of the
atoms_data array, and small Numba geometry utilities.
"""

import math

import numpy as np
from numba import njit

from pymolsurf.config.global_runtime import msurf_real, vprint
from pymolsurf.config.logging_config import DEBUG, get_effective_verbosity
from pymolsurf.constants import (
    ATOMFIELD_X,
    ATOMFIELD_CRD_END,
    ATOMFIELD_RADIUS,
    ATOMFIELD_ATOMIC_NUMBER,
    LEN_ATOMFIELDS,
    get_vdw_radius_by_atomic_number,
)

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)


def build_atoms_data(coords, radii=None, atomic_numbers=None, dtype=None):
    """
    Builds the (N, LEN_ATOMFIELDS) atoms_data array consumed by the rasterizer.

    Args:
        coords: (N, 3) array-like of atom centers in angstrom.
        radii: (N,) van der Waals radii in angstrom. When omitted, radii are
            looked up from `atomic_numbers`.
        atomic_numbers: (N,) atomic numbers, stored for reference and used for
            the radius lookup when `radii` is None.
        dtype: Floating point type of the array (defaults to msurf_real).

    Returns:
        np.ndarray: atoms_data with columns as in `AtomFields`.

    Raises:
        ValueError: On empty or malformed input, non-finite coordinates,
            non-positive radii, or atomic numbers without a tabulated radius.
    """
    dtype = msurf_real if dtype is None else dtype
    coords = np.asarray(coords, dtype=np.float64)
    if coords.ndim != 2 or coords.shape[1] != 3:
        raise ValueError(f"`coords` must have shape (N, 3), got {coords.shape}.")
    num_atoms = coords.shape[0]
    if num_atoms == 0:
        raise ValueError("At least one atom is required to build a molecular surface.")
    if not np.all(np.isfinite(coords)):
        raise ValueError("`coords` contains non-finite values.")

    if atomic_numbers is not None:
        atomic_numbers = np.asarray(atomic_numbers)
        if atomic_numbers.shape != (num_atoms,):
            raise ValueError(
                f"`atomic_numbers` must have shape ({num_atoms},), got {atomic_numbers.shape}."
            )

    if radii is None:
        if atomic_numbers is None:
            raise ValueError("Either `radii` or `atomic_numbers` must be given.")
        radii = np.array(
            [get_vdw_radius_by_atomic_number(z) for z in atomic_numbers],
            dtype=np.float64,
        )
    else:
        radii = np.asarray(radii, dtype=np.float64)
        if radii.shape != (num_atoms,):
            raise ValueError(f"`radii` must have shape ({num_atoms},), got {radii.shape}.")
    if not np.all(np.isfinite(radii)) or np.any(radii <= 0.0):
        raise ValueError("Atom radii must be finite and positive.")

    atoms_data = np.zeros((num_atoms, LEN_ATOMFIELDS), dtype=dtype)
    atoms_data[:, ATOMFIELD_X:ATOMFIELD_CRD_END] = coords
    atoms_data[:, ATOMFIELD_RADIUS] = radii
    if atomic_numbers is not None:
        atoms_data[:, ATOMFIELD_ATOMIC_NUMBER] = atomic_numbers
    vprint(DEBUG, _VERBOSITY, f"Built atoms_data for {num_atoms} atoms.")
    return atoms_data


def check_atoms_data(atoms_data):
    """
    Validates an atoms_data array built elsewhere.

    Raises:
        ValueError: If the array is empty, has the wrong width, or holds
            non-finite coordinates or non-positive radii.
    """
    if atoms_data.ndim != 2 or atoms_data.shape[1] < LEN_ATOMFIELDS:
        raise ValueError(
            f"`atoms_data` must have shape (N, {LEN_ATOMFIELDS}), got {atoms_data.shape}."
        )
    if atoms_data.shape[0] == 0:
        raise ValueError("At least one atom is required to build a molecular surface.")
    if not np.all(np.isfinite(atoms_data[:, ATOMFIELD_X:ATOMFIELD_CRD_END])):
        raise ValueError("`atoms_data` contains non-finite coordinates.")
    radii = atoms_data[:, ATOMFIELD_RADIUS]
    if not np.all(np.isfinite(radii)) or np.any(radii <= 0.0):
        raise ValueError("Atom radii must be finite and positive.")


def sphere_volume(radius):
    return 4.0 / 3.0 * math.pi * radius**3


@njit(nogil=True, cache=True)
def squared_distance(x1, y1, z1, x2, y2, z2):
    dx = x2 - x1
    dy = y2 - y1
    dz = z2 - z1
    return dx * dx + dy * dy + dz * dz


@njit(nogil=True, cache=True)
def triangle_size_measure(p0, p1, p2):
    """
    Returns 4 a^2 b^2 - (a^2 + b^2 - c^2)^2 of the triangle (p0, p1, p2), which
    equals 16 times its squared area; a, b are the sides at p0 and c the opposite.
    """
    a_sq = squared_distance(p0[0], p0[1], p0[2], p1[0], p1[1], p1[2])
    b_sq = squared_distance(p0[0], p0[1], p0[2], p2[0], p2[1], p2[2])
    c_sq = squared_distance(p1[0], p1[1], p1[2], p2[0], p2[1], p2[2])
    t = a_sq + b_sq - c_sq
    return 4.0 * a_sq * b_sq - t * t


@njit(nogil=True, cache=True)
def triangle_area(p0, p1, p2):
    """Area of a triangle from the side lengths; tiny negative roundoff gives 0."""
    size = triangle_size_measure(p0, p1, p2)
    if size <= 0.0:
        return 0.0
    return 0.25 * math.sqrt(size)
