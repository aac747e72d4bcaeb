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
Triangulation of one crossed cell from its cube code.

The crossed edges of the cell are resolved to vertices, the centroid vertex is
added for the codes that need one, and the triangles of `FACE_TABLE` followed by
the closing squares of `CLOSURE_TABLE` are emitted to the sink. Triangles that
repeat a vertex index, which happens once crossings have been joined, are dropped.
"""

import numpy as np

from pymolsurf.config.global_runtime import vprint
from pymolsurf.config.logging_config import DEBUG, TRACE, get_effective_verbosity
from pymolsurf.constants import (
    CENTROID_VERTEX,
    CLOSURE_TABLE,
    CUBE_EDGES,
    CUBE_HAS_CENTROID,
    EDGE_TABLE,
    FACE_TABLE,
)
from pymolsurf.utils.utils import triangle_size_measure

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)


def _active_edges(code):
    return tuple(edge for edge in range(12) if EDGE_TABLE[code] & (1 << edge))


_ACTIVE_EDGES = tuple(_active_edges(code) for code in range(256))
_FACE_TRIPLES = tuple(
    tuple(tuple(faces[j : j + 3]) for j in range(0, len(faces), 3)) for faces in FACE_TABLE
)
_CLOSURE_QUADS = tuple(
    tuple(tuple(squares[j : j + 4]) for j in range(0, len(squares), 4))
    for squares in CLOSURE_TABLE
)


class Triangulator:
    """
    Emits the triangles of crossed cells to a mesh sink.

    Args:
        sink (MeshSink): Receives centroid points and triangles.
        interpolator (EdgeInterpolator): Resolves crossed edges to vertex indices.

    Attributes:
        triangle_count (int): Triangles passed to the sink.
        degenerate_triangle_count (int): Triangles dropped for a repeated vertex.
        degenerate_square_count (int): Closing squares dropped because both
            splits contain a zero-area triangle.
        centroid_count (int): Centroid vertices added.
    """

    def __init__(self, sink, interpolator):
        self._sink = sink
        self._interpolator = interpolator
        self._vertex_index = [-1] * (CENTROID_VERTEX + 1)
        self._square_points = np.empty((4, 3), dtype=np.float64)
        self.triangle_count = 0
        self.degenerate_triangle_count = 0
        self.degenerate_square_count = 0
        self.centroid_count = 0

    def triangulate_cell(self, ix, iy, iz, code):
        """
        Triangulates the cell whose highest corner is lattice (ix, iy, iz).

        Args:
            ix, iy, iz (int): Highest corner of the cell, each >= 1.
            code (int): The cell's cube code.
        """
        active = _ACTIVE_EDGES[code]
        if not active:
            return
        vertex_index = self._vertex_index
        x0 = ix - 1
        y0 = iy - 1
        z0 = iz - 1
        for edge in active:
            dx, dy, dz, direction, layer = CUBE_EDGES[edge]
            vertex_index[edge] = self._interpolator.vertex_index(
                x0 + dx, y0 + dy, z0 + dz, direction, layer
            )

        if CUBE_HAS_CENTROID[code]:
            vertex_index[CENTROID_VERTEX] = self._add_centroid(active)

        for a, b, c in _FACE_TRIPLES[code]:
            self._add_triangle(vertex_index[a], vertex_index[b], vertex_index[c])

        for a, b, c, d in _CLOSURE_QUADS[code]:
            self._add_square(vertex_index[a], vertex_index[b], vertex_index[c], vertex_index[d])

    def _add_centroid(self, active):
        # mean over the crossed edges; joined edges repeat their vertex
        x = y = z = 0.0
        for edge in active:
            px, py, pz = self._sink.get_point(self._vertex_index[edge])
            x += px
            y += py
            z += pz
        count = len(active)
        self.centroid_count += 1
        return self._sink.add_point(x / count, y / count, z / count)

    def _add_triangle(self, v0, v1, v2):
        if v0 == v1 or v1 == v2 or v0 == v2:
            self.degenerate_triangle_count += 1
            return
        self._sink.add_triangle(v0, v1, v2)
        self.triangle_count += 1

    def _add_square(self, v0, v1, v2, v3):
        if v0 == v1:
            self._add_triangle(v0, v2, v3)
            return
        if v1 == v2:
            self._add_triangle(v0, v1, v3)
            return
        if v2 == v3 or v3 == v0:
            self._add_triangle(v0, v1, v2)
            return

        # split along the diagonal whose smaller triangle is the larger one
        p = self._square_points
        for row, v in enumerate((v0, v1, v2, v3)):
            p[row] = self._sink.get_point(v)
        size1 = min(triangle_size_measure(p[0], p[1], p[2]), triangle_size_measure(p[2], p[3], p[0]))
        size2 = min(triangle_size_measure(p[1], p[2], p[3]), triangle_size_measure(p[3], p[0], p[1]))
        if size1 == 0.0 and size2 == 0.0:
            self.degenerate_square_count += 1
            vprint(DEBUG, _VERBOSITY, f"triangulator: skipped flat square ({v0}, {v1}, {v2}, {v3})")
            vprint(TRACE, _VERBOSITY, f"triangulator: square points {p.tolist()}")
        elif size1 < size2:
            self._add_triangle(v1, v2, v3)
            self._add_triangle(v3, v0, v1)
        else:
            self._add_triangle(v0, v1, v2)
            self._add_triangle(v2, v3, v0)
