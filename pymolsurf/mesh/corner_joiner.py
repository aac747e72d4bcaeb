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
Corner joining: merges surface crossings that crowd around one lattice corner.

Plain marching cubes places a vertex on every crossed edge. When the surface
passes very close to a lattice corner, the crossings on the edges around that
corner almost coincide and the triangles between them become slivers. Before the
cells of a layer are triangulated, every interior corner of the layer is examined:

- `n` counts the incident edges (of six) whose far end is on the other side of
  the surface, `c` those of them crossed closer than `max_joint_position` (in
  edge lengths) to the corner;
- with fewer than two close crossings there is nothing to join;
- a corner cut off on all six edges with at least one crossing not close is a
  small enclosed bubble, meshed as is;
- a corner crossed only on the two edges of one axis sits between two distinct
  surface sheets, which must not be welded together;
- otherwise a single vertex at the corner shifted by the mean offset of the close
  crossings replaces all of them.

Joined vertices are kept per layer, keyed by (iy, iz), in two maps: the one of
the layer being triangulated and the one of the layer before. `advance()` recycles
the older map, so only two layers are ever held.
"""

import numpy as np

from pymolsurf.config.global_runtime import vprint
from pymolsurf.config.logging_config import TRACE, get_effective_verbosity
from pymolsurf.constants import ConstSurfaceFloats, LAYER_PREVIOUS

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)

MAX_JOINT_POSITION = ConstSurfaceFloats.MaxJointPosition.value


def _close_crossings(center, neighbor, center_is_outside, iso_level, max_joint_position):
    """Sign-change mask, close-crossing mask and crossing positions along one edge family."""
    crossing = (neighbor < iso_level) != center_is_outside
    with np.errstate(divide="ignore", invalid="ignore"):
        pos = (iso_level - center) / (neighbor - center)
    close = crossing & (pos < max_joint_position)
    return crossing, close, np.where(close, pos, 0.0)


class CornerJoiner:
    """
    Per-layer corner joining over a lattice, emitting joined vertices to a sink.

    Args:
        sink (MeshSink): Receives the joined vertices.
        voxel_size (float): Lattice spacing.
        offset (array-like): World position of lattice index (0, 0, 0).
        max_joint_position (float): Close-crossing threshold in edge lengths.
    """

    def __init__(self, sink, voxel_size, offset, max_joint_position=MAX_JOINT_POSITION):
        self._sink = sink
        self._voxel_size = float(voxel_size)
        self._offset = np.asarray(offset, dtype=np.float64)
        self._max_joint_position = max_joint_position
        self._previous = {}
        self._current = {}
        self.joined_vertex_count = 0

    def advance(self):
        """Moves the sweep one layer on: current becomes previous, a cleared map becomes current."""
        recycled = self._previous
        recycled.clear()
        self._previous = self._current
        self._current = recycled

    def joined_vertex(self, layer, row, col):
        """Returns the joined vertex index at (row, col) of the chosen layer map, or None."""
        layer_map = self._previous if layer == LAYER_PREVIOUS else self._current
        return layer_map.get((row, col))

    def join_layer(self, values_3d, ix, iso_level):
        """
        Joins the interior corners of layer `ix` (1 <= ix <= sx - 2) into the
        current map.

        Args:
            values_3d (np.ndarray): (sx, sy, sz) field values.
            ix (int): The layer to examine.
            iso_level (float): The surface threshold.

        Returns:
            int: The number of joined vertices created for this layer.
        """
        center = values_3d[ix, 1:-1, 1:-1]
        if center.size == 0:
            return 0
        center_is_outside = center < iso_level
        args = (center_is_outside, iso_level, self._max_joint_position)

        nx_lo, cx_lo, px_lo = _close_crossings(center, values_3d[ix - 1, 1:-1, 1:-1], *args)
        nx_hi, cx_hi, px_hi = _close_crossings(center, values_3d[ix + 1, 1:-1, 1:-1], *args)
        ny_lo, cy_lo, py_lo = _close_crossings(center, values_3d[ix, :-2, 1:-1], *args)
        ny_hi, cy_hi, py_hi = _close_crossings(center, values_3d[ix, 2:, 1:-1], *args)
        nz_lo, cz_lo, pz_lo = _close_crossings(center, values_3d[ix, 1:-1, :-2], *args)
        nz_hi, cz_hi, pz_hi = _close_crossings(center, values_3d[ix, 1:-1, 2:], *args)

        n_x = nx_lo.astype(np.int32) + nx_hi
        n_y = ny_lo.astype(np.int32) + ny_hi
        n_z = nz_lo.astype(np.int32) + nz_hi
        close_count = (
            cx_lo.astype(np.int32) + cx_hi + cy_lo + cy_hi + cz_lo + cz_hi
        )

        joinable = close_count >= 2
        # enclosed bubble with at least one crossing not close
        joinable &= ~((n_x + n_y + n_z == 6) & (close_count != 6))
        # two sheets straddling the corner along one axis
        joinable &= ~((n_x == 2) & (n_y == 0) & (n_z == 0))
        joinable &= ~((n_x == 0) & (n_y == 2) & (n_z == 0))
        joinable &= ~((n_x == 0) & (n_y == 0) & (n_z == 2))

        rows, cols = np.nonzero(joinable)
        if rows.size == 0:
            return 0

        shift_x = (px_hi - px_lo)[rows, cols]
        shift_y = (py_hi - py_lo)[rows, cols]
        shift_z = (pz_hi - pz_lo)[rows, cols]
        counts = close_count[rows, cols]

        voxel = self._voxel_size
        ox, oy, oz = self._offset
        base_x = ox + voxel * ix
        for k in range(rows.size):
            iy = int(rows[k]) + 1
            iz = int(cols[k]) + 1
            c = counts[k]
            index = self._sink.add_point(
                base_x + voxel * shift_x[k] / c,
                oy + voxel * iy + voxel * shift_y[k] / c,
                oz + voxel * iz + voxel * shift_z[k] / c,
            )
            self._current[(iy, iz)] = index

        self.joined_vertex_count += int(rows.size)
        vprint(TRACE, _VERBOSITY, f"corner joiner: layer {ix}, {rows.size} joined vertices")
        return int(rows.size)
