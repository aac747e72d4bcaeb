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
ScalarField: a sampled 3D scalar lattice placed in world space.

Values are stored flat (z least significant, `x_stride = sy * sz`,
`y_stride = sz`) which is the layout the Numba kernels and the marching cubes
sweep index into; `values_3d` is a reshaped view for numpy slicing.
"""

import numpy as np

from pymolsurf.constants import ConstSurfaceFloats

ISO_LEVEL = ConstSurfaceFloats.IsoLevel.value


class ScalarField:
    """
    Scalar lattice with an isotropic voxel size and a world-space offset.

    Attributes:
        values (np.ndarray): flat array of sx * sy * sz samples.
        shape (tuple[int, int, int]): lattice dimensions (sx, sy, sz).
        voxel_size (float): lattice spacing in angstrom.
        offset (np.ndarray): world coordinates of lattice index (0, 0, 0).
        iso_level (float): surface threshold; values below it are outside.
    """

    def __init__(self, values, shape, voxel_size, offset, iso_level=ISO_LEVEL):
        shape = tuple(int(s) for s in shape)
        if len(shape) != 3 or min(shape) < 1:
            raise ValueError(f"A scalar field needs three positive dimensions, got {shape}.")
        values = np.ascontiguousarray(values).reshape(-1)
        if values.size != shape[0] * shape[1] * shape[2]:
            raise ValueError(
                f"Field of shape {shape} needs {shape[0] * shape[1] * shape[2]} values, got {values.size}."
            )
        if voxel_size <= 0.0:
            raise ValueError("`voxel_size` must be positive.")
        self.values = values
        self.shape = shape
        self.voxel_size = float(voxel_size)
        self.offset = np.asarray(offset, dtype=np.float64).reshape(3)
        self.iso_level = float(iso_level)

    @property
    def values_3d(self):
        return self.values.reshape(self.shape)

    @property
    def x_stride(self):
        return self.shape[1] * self.shape[2]

    @property
    def y_stride(self):
        return self.shape[2]

    def linear_index(self, ix, iy, iz):
        return ix * self.x_stride + iy * self.y_stride + iz

    def world_coordinates(self, ix, iy, iz):
        """World position of a (possibly fractional) lattice coordinate."""
        return self.offset + self.voxel_size * np.array([ix, iy, iz], dtype=np.float64)

    def copy(self):
        return ScalarField(
            self.values.copy(), self.shape, self.voxel_size, self.offset.copy(), self.iso_level
        )

    def __repr__(self):
        sx, sy, sz = self.shape
        ox, oy, oz = self.offset
        return (
            f"ScalarField(shape=({sx}, {sy}, {sz}), voxel_size={self.voxel_size}, "
            f"offset=({ox:.3f}, {oy:.3f}, {oz:.3f}), iso_level={self.iso_level})"
        )
