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
Molecular surface area and volume without keeping the mesh.

`SurfaceAreaAndVolumeCalculator` is a mesh sink that stores only the points (in
fixed size blocks) and adds up the triangle areas as triangles arrive. The
volume comes from the occupancy field, scaled by `VolumeCorrectionFactor`.
"""

import numpy as np

from pymolsurf.config.global_runtime import vprint
from pymolsurf.config.logging_config import DEBUG, get_effective_verbosity
from pymolsurf.constants import ConstSurfaceFloats, ConstSurfaceInts
from pymolsurf.foundation.enums import MeasureMode, SurfaceType
from pymolsurf.foundation.settings import SurfaceSettings
from pymolsurf.mesh.builders import MeshSink
from pymolsurf.space.surface import MolecularSurface
from pymolsurf.utils.utils import triangle_area

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)

POINT_BLOCK_SIZE = ConstSurfaceInts.PointBlockSize.value
VOLUME_CORRECTION_FACTOR = ConstSurfaceFloats.VolumeCorrectionFactor.value


class SurfaceAreaAndVolumeCalculator(MeshSink):
    """
    Computes the area and/or volume of a molecular surface.

    Args:
        settings (SurfaceSettings, optional): Defaults to a Connolly surface with
            voxel size 0.4 and probe 1.4 angstrom.
    """

    def __init__(self, settings=None):
        self._settings = settings if settings is not None else SurfaceSettings(
            surface_type=SurfaceType.CONNOLLY
        )
        self._blocks = []
        self._point_count = 0
        self._area = 0.0
        self._volume = 0.0

    @property
    def area(self):
        return self._area

    @property
    def volume(self):
        return self._volume

    @property
    def point_count(self):
        return self._point_count

    def add_point(self, x, y, z):
        block, row = divmod(self._point_count, POINT_BLOCK_SIZE)
        if block == len(self._blocks):
            self._blocks.append(np.empty((POINT_BLOCK_SIZE, 3), dtype=np.float64))
        points = self._blocks[block]
        points[row, 0] = x
        points[row, 1] = y
        points[row, 2] = z
        self._point_count += 1
        return self._point_count - 1

    def _point_row(self, index):
        if not 0 <= index < self._point_count:
            raise IndexError(f"Point index {index} out of range [0, {self._point_count}).")
        block, row = divmod(index, POINT_BLOCK_SIZE)
        return self._blocks[block][row]

    def get_point(self, index):
        p = self._point_row(index)
        return (p[0], p[1], p[2])

    def add_triangle(self, i1, i2, i3):
        self._area += triangle_area(self._point_row(i1), self._point_row(i2), self._point_row(i3))

    def calculate(self, atoms_data, mode=MeasureMode.AREA_AND_VOLUME):
        """
        Calculates the requested quantities of the surface of `atoms_data`.

        Args:
            atoms_data (np.ndarray): (N, LEN_ATOMFIELDS) atom array.
            mode (MeasureMode): What to compute.

        Returns:
            tuple: (area, volume); a quantity not requested by `mode` is 0.0.
        """
        self._blocks = []
        self._point_count = 0
        self._area = 0.0
        self._volume = 0.0

        surface = MolecularSurface(self._settings.clone())
        field = surface.calculate_grid(atoms_data)
        if mode.includes(MeasureMode.VOLUME):
            self._volume = VOLUME_CORRECTION_FACTOR * surface.calculate_volume(field)
        if mode.includes(MeasureMode.AREA):
            surface.polygonise(field, self)

        vprint(
            DEBUG,
            _VERBOSITY,
            f"surface measures ({mode.name}): area={self._area:.3f}, volume={self._volume:.3f}",
        )
        return self._area, self._volume
