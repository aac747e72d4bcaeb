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
Mesh sinks: the receivers of the points and triangles produced by the smooth
marching cubes.

- `MeshSink`: the interface. Points get consecutive indices from 0 in the order
  they are added; triangles refer to those indices.
- `TriangleMeshBuilder`: keeps the whole mesh in growable numpy arrays.
"""

import numpy as np

from pymolsurf.config.global_runtime import vprint
from pymolsurf.config.logging_config import DEBUG, get_effective_verbosity
from pymolsurf.constants import ConstSurfaceFloats, ConstSurfaceInts

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)

RESIZE_FACTOR = ConstSurfaceFloats.PointArrayResizeFactor.value
INITIAL_CAPACITY = ConstSurfaceInts.InitialMeshCapacity.value


class MeshSink:
    """Receiver of mesh points and triangles."""

    def add_point(self, x, y, z):
        """Appends a point and returns its index."""
        raise NotImplementedError

    def add_triangle(self, i1, i2, i3):
        """Appends the triangle (i1, i2, i3) of previously added points."""
        raise NotImplementedError

    def get_point(self, index):
        """Returns the (x, y, z) of a previously added point."""
        raise NotImplementedError


class TriangleMeshBuilder(MeshSink):
    """
    Collects the mesh into numpy arrays.

    The point and triangle arrays grow by `RESIZE_FACTOR` when full; `vertices`
    and `triangles` return views trimmed to the filled rows.
    """

    def __init__(self, initial_capacity=INITIAL_CAPACITY):
        self._points = np.empty((initial_capacity, 3), dtype=np.float64)
        self._faces = np.empty((initial_capacity, 3), dtype=np.int64)
        self._point_count = 0
        self._triangle_count = 0

    @staticmethod
    def _grown(array):
        new_rows = max(int(array.shape[0] * RESIZE_FACTOR), array.shape[0] + 1)
        grown = np.empty((new_rows, array.shape[1]), dtype=array.dtype)
        grown[: array.shape[0]] = array
        vprint(DEBUG, _VERBOSITY, f"mesh builder: array grown from {array.shape[0]} to {new_rows} rows")
        return grown

    def add_point(self, x, y, z):
        if self._point_count >= self._points.shape[0]:
            self._points = self._grown(self._points)
        index = self._point_count
        self._points[index, 0] = x
        self._points[index, 1] = y
        self._points[index, 2] = z
        self._point_count += 1
        return index

    def add_triangle(self, i1, i2, i3):
        if self._triangle_count >= self._faces.shape[0]:
            self._faces = self._grown(self._faces)
        row = self._faces[self._triangle_count]
        row[0] = i1
        row[1] = i2
        row[2] = i3
        self._triangle_count += 1

    def get_point(self, index):
        if not 0 <= index < self._point_count:
            raise IndexError(f"Point index {index} out of range [0, {self._point_count}).")
        p = self._points[index]
        return (p[0], p[1], p[2])

    @property
    def point_count(self):
        return self._point_count

    @property
    def triangle_count(self):
        return self._triangle_count

    @property
    def vertices(self):
        return self._points[: self._point_count]

    @property
    def triangles(self):
        return self._faces[: self._triangle_count]

    def clear(self):
        self._point_count = 0
        self._triangle_count = 0
