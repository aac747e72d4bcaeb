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
Edge interpolation: one mesh vertex per crossed lattice edge.

An edge is identified by its lower lattice endpoint and its direction, with key
`4 * linear_index + direction`, so both cells sharing an edge get the same vertex.
Crossings near an endpoint are redirected to the joined vertex of that corner,
if the corner joiner created one.

Edges are owned by the x-layer of their lower endpoint. While cells between
layers ix - 1 and ix are triangulated only edges of these two layers are asked
for, so the cache keeps two per-layer maps and drops the older one on `advance()`.
"""

import math

from pymolsurf.constants import (
    ConstSurfaceFloats,
    ConstSurfaceInts,
    EDGE_DIR_X,
    EDGE_DIR_Y,
    LAYER_EITHER,
    LAYER_CURRENT,
    LAYER_PREVIOUS,
)

MAX_JOINT_POSITION = ConstSurfaceFloats.MaxJointPosition.value
EDGE_KEY_STRIDE = ConstSurfaceInts.EdgeKeyStride.value


def crossing_position(val1, val2, iso_level):
    """
    Fraction along the edge from `val1` to `val2` where the linear interpolant
    equals `iso_level`, clamped into [0, 1]; 0.5 when both values are equal.
    """
    if val2 == val1:
        return 0.5
    pos = (iso_level - val1) / (val2 - val1)
    return min(1.0, max(0.0, pos))


def _nearest_lattice_index(coordinate):
    # round half up, independent of Python's round-half-even
    return int(math.floor(coordinate + 0.5))


class EdgeInterpolator:
    """
    Resolves crossed lattice edges to mesh vertex indices.

    Args:
        values (np.ndarray): Flat field values, z least significant.
        shape (tuple): (sx, sy, sz).
        iso_level (float): The surface threshold.
        sink (MeshSink): Receives the new vertices.
        voxel_size (float): Lattice spacing.
        offset (array-like): World position of lattice index (0, 0, 0).
        joiner (CornerJoiner): Source of joined corner vertices.
    """

    def __init__(
        self,
        values,
        shape,
        iso_level,
        sink,
        voxel_size,
        offset,
        joiner,
        max_joint_position=MAX_JOINT_POSITION,
    ):
        self._values = values
        self._sy = int(shape[1])
        self._sz = int(shape[2])
        self._strides = (self._sy * self._sz, self._sz, 1)
        self._iso_level = iso_level
        self._sink = sink
        self._voxel_size = float(voxel_size)
        self._offset = tuple(float(o) for o in offset)
        self._joiner = joiner
        self._near_low = max_joint_position
        self._near_high = 1.0 - max_joint_position
        self._layer = 0
        self._previous_edges = {}
        self._current_edges = {}
        self.edge_vertex_count = 0
        self.redirected_count = 0

    def advance(self, ix):
        """Starts the cells between layers ix - 1 and ix."""
        recycled = self._previous_edges
        recycled.clear()
        self._previous_edges = self._current_edges
        self._current_edges = recycled
        self._layer = ix

    def vertex_index(self, ix, iy, iz, direction, layer):
        """
        Returns the vertex of the edge starting at lattice (ix, iy, iz) along
        `direction`; `layer` tells which joined-vertex map serves its corners.
        """
        linear_index = ix * self._strides[0] + iy * self._sz + iz
        key = EDGE_KEY_STRIDE * linear_index + direction
        cache = self._current_edges if ix == self._layer else self._previous_edges
        cached = cache.get(key)
        if cached is not None:
            return cached

        val1 = self._values[linear_index]
        val2 = self._values[linear_index + self._strides[direction]]
        pos = crossing_position(val1, val2, self._iso_level)

        x = float(ix)
        y = float(iy)
        z = float(iz)
        if direction == EDGE_DIR_X:
            x += pos
        elif direction == EDGE_DIR_Y:
            y += pos
        else:
            z += pos

        if pos < self._near_low or pos > self._near_high:
            if layer == LAYER_EITHER:
                layer = LAYER_PREVIOUS if pos < 0.5 else LAYER_CURRENT
            joined = self._joiner.joined_vertex(
                layer, _nearest_lattice_index(y), _nearest_lattice_index(z)
            )
            if joined is not None:
                cache[key] = joined
                self.redirected_count += 1
                return joined

        voxel = self._voxel_size
        ox, oy, oz = self._offset
        index = self._sink.add_point(ox + voxel * x, oy + voxel * y, oz + voxel * z)
        cache[key] = index
        self.edge_vertex_count += 1
        return index
