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
Smooth marching cubes over a scalar lattice.

The lattice is swept layer by layer along x. For every layer ix (1 .. sx - 1):

1. the corner joiner and the edge cache move on by one layer;
2. the interior corners of layer ix are joined (not on the last layer);
3. the cells between layers ix - 1 and ix are classified, and the crossed ones
   are triangulated in row-major (iy, iz) order.

Values below the iso-level are outside. Only two layers of joined vertices and
edge vertices are held at any time.
"""

import time
from dataclasses import dataclass

import numpy as np

from pymolsurf.config.global_runtime import vprint
from pymolsurf.config.logging_config import DEBUG, get_effective_verbosity
from pymolsurf.constants import ConstSurfaceFloats
from pymolsurf.mesh.classifier import active_cells, classify_layer
from pymolsurf.mesh.corner_joiner import CornerJoiner
from pymolsurf.mesh.edge_interpolator import EdgeInterpolator
from pymolsurf.mesh.triangulator import Triangulator

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)

MAX_JOINT_POSITION = ConstSurfaceFloats.MaxJointPosition.value


@dataclass
class PolygonisationStats:
    """Counters of one `polygonise` run."""

    crossed_cells: int = 0
    joined_vertices: int = 0
    edge_vertices: int = 0
    centroid_vertices: int = 0
    triangles: int = 0
    degenerate_triangles: int = 0
    degenerate_squares: int = 0
    elapsed_seconds: float = 0.0

    @property
    def vertices(self):
        return self.joined_vertices + self.edge_vertices + self.centroid_vertices


class SmoothMarchingCubes:
    """
    Meshes the iso-surface of a scalar lattice into a `MeshSink`.

    Args:
        sink (MeshSink): Receives points and triangles.
        voxel_size (float): Lattice spacing in world units.
        max_joint_position (float): Crossings closer than this fraction of an edge
            to a corner are candidates for joining; 0.0 gives plain marching cubes.
    """

    def __init__(self, sink, voxel_size=1.0, max_joint_position=MAX_JOINT_POSITION):
        if voxel_size <= 0.0:
            raise ValueError("`voxel_size` must be positive.")
        if not 0.0 <= max_joint_position <= 0.5:
            raise ValueError("`max_joint_position` must lie within [0.0, 0.5].")
        self._sink = sink
        self._voxel_size = float(voxel_size)
        self._max_joint_position = max_joint_position
        self._offset = np.zeros(3, dtype=np.float64)

    @property
    def sink(self):
        return self._sink

    @property
    def voxel_size(self):
        return self._voxel_size

    @property
    def offset(self):
        return self._offset.copy()

    def set_offset(self, x, y, z):
        """Sets the world position of lattice index (0, 0, 0); default is the origin."""
        self._offset = np.array([x, y, z], dtype=np.float64)

    def polygonise_field(self, field):
        """Meshes a `ScalarField` with its own voxel size, offset and iso-level."""
        self._voxel_size = field.voxel_size
        self.set_offset(*field.offset)
        return self.polygonise(field.values, field.shape, field.iso_level)

    def polygonise(self, grid_1d, shape, iso_level):
        """
        Meshes the iso-surface of `grid_1d`.

        Args:
            grid_1d (np.ndarray): sx * sy * sz values, z least significant.
            shape (tuple): (sx, sy, sz).
            iso_level (float): The surface threshold.

        Returns:
            PolygonisationStats: Counters of the run.

        Raises:
            ValueError: If `grid_1d` does not hold sx * sy * sz values.
        """
        sx, sy, sz = (int(s) for s in shape)
        values = np.ascontiguousarray(grid_1d).reshape(-1)
        if values.size != sx * sy * sz:
            raise ValueError(
                f"Grid of shape ({sx}, {sy}, {sz}) needs {sx * sy * sz} values, got {values.size}."
            )
        stats = PolygonisationStats()
        if min(sx, sy, sz) < 2:
            return stats

        tic = time.perf_counter()
        values_3d = values.reshape(sx, sy, sz)
        joiner = CornerJoiner(
            self._sink, self._voxel_size, self._offset, self._max_joint_position
        )
        interpolator = EdgeInterpolator(
            values,
            (sx, sy, sz),
            iso_level,
            self._sink,
            self._voxel_size,
            self._offset,
            joiner,
            self._max_joint_position,
        )
        triangulator = Triangulator(self._sink, interpolator)

        for ix in range(1, sx):
            joiner.advance()
            interpolator.advance(ix)
            if ix < sx - 1:
                joiner.join_layer(values_3d, ix, iso_level)

            codes = classify_layer(values_3d[ix - 1], values_3d[ix], iso_level)
            rows, cols, cell_codes = active_cells(codes)
            for row, col, code in zip(rows.tolist(), cols.tolist(), cell_codes.tolist()):
                triangulator.triangulate_cell(ix, row + 1, col + 1, code)
            stats.crossed_cells += len(cell_codes)

        stats.joined_vertices = joiner.joined_vertex_count
        stats.edge_vertices = interpolator.edge_vertex_count
        stats.centroid_vertices = triangulator.centroid_count
        stats.triangles = triangulator.triangle_count
        stats.degenerate_triangles = triangulator.degenerate_triangle_count
        stats.degenerate_squares = triangulator.degenerate_square_count
        stats.elapsed_seconds = time.perf_counter() - tic

        vprint(
            DEBUG,
            _VERBOSITY,
            f"smooth marching cubes: {stats.crossed_cells} crossed cells, "
            f"{stats.vertices} vertices ({stats.joined_vertices} joined), "
            f"{stats.triangles} triangles in {stats.elapsed_seconds:.3f} s",
        )
        return stats
