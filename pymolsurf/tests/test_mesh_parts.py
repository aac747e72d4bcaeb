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


import numpy as np
import pytest

from pymolsurf.constants import (
    CUBE_CORNER_OFFSETS,
    CUBE_HAS_CENTROID,
    CLOSURE_TABLE,
    EDGE_DIR_X,
    EDGE_DIR_Y,
    EDGE_DIR_Z,
    EDGE_TABLE,
    FACE_TABLE,
    LAYER_CURRENT,
    LAYER_EITHER,
    LAYER_PREVIOUS,
)
from pymolsurf.mesh.builders import MeshSink, TriangleMeshBuilder
from pymolsurf.mesh.classifier import active_cells, classify_cube, classify_layer
from pymolsurf.mesh.corner_joiner import CornerJoiner
from pymolsurf.mesh.edge_interpolator import EdgeInterpolator, crossing_position
from pymolsurf.mesh.triangulator import Triangulator
from pymolsurf.space.core.occupancy import build_all_cubes_field

ISO = 5.0
INSIDE = 6.0
CLOSE_OUTSIDE = 4.0  # crossing at 1/11 of the edge from a 5.1 corner


def test_tables_are_consistent():
    assert len(EDGE_TABLE) == len(FACE_TABLE) == len(CLOSURE_TABLE) == 256
    assert EDGE_TABLE[0] == EDGE_TABLE[255] == 0
    for code in range(256):
        faces = FACE_TABLE[code]
        assert len(faces) % 3 == 0
        assert len(CLOSURE_TABLE[code]) % 4 == 0
        for edge in faces + CLOSURE_TABLE[code]:
            if edge != 12:
                assert EDGE_TABLE[code] & (1 << edge)
        assert CUBE_HAS_CENTROID[code] == (12 in faces)
    assert sum(1 for squares in CLOSURE_TABLE if squares) == 44
    assert CLOSURE_TABLE[61] == (9, 5, 10, 1)


def test_classify_cube_bits():
    samples = [ISO + 1.0] * 8
    assert classify_cube(samples, ISO) == 0
    samples[0] = ISO - 1.0
    samples[6] = ISO - 1.0
    assert classify_cube(samples, ISO) == 1 | 64
    # exactly at the iso-level counts as inside
    assert classify_cube([ISO] * 8, ISO) == 0


def test_classify_layer_covers_all_cube_codes():
    field, cells = build_all_cubes_field(seed=7)
    values_3d = field.values_3d
    codes = classify_layer(values_3d[2], values_3d[3], field.iso_level)
    assert codes.shape == (49, 49)
    for code, (ix, iy, iz) in cells.items():
        assert codes[iy, iz] == code
        samples = [values_3d[ix + dx, iy + dy, iz + dz] for dx, dy, dz in CUBE_CORNER_OFFSETS]
        assert classify_cube(samples, field.iso_level) == code


def test_active_cells_row_major():
    codes = np.zeros((3, 4), dtype=np.int32)
    codes[2, 1] = 1
    codes[0, 3] = 255
    codes[1, 0] = 128
    rows, cols, active = active_cells(codes)
    assert rows.tolist() == [1, 2]
    assert cols.tolist() == [0, 1]
    assert active.tolist() == [128, 1]


def test_crossing_position():
    assert crossing_position(4.0, 6.0, ISO) == pytest.approx(0.5)
    assert crossing_position(6.0, 4.0, ISO) == pytest.approx(0.5)
    assert crossing_position(5.0, 5.0, ISO) == 0.5
    assert crossing_position(4.0, 4.5, ISO) == 1.0
    assert crossing_position(6.0, 5.5, ISO) == 1.0
    assert crossing_position(5.0, 7.0, ISO) == 0.0


def _corner_grid(*outside_neighbors):
    """3x3x3 inside grid, center at 5.1, the given neighbors of the center outside."""
    values = np.full((3, 3, 3), INSIDE)
    values[1, 1, 1] = ISO + 0.1
    for ix, iy, iz in outside_neighbors:
        values[ix, iy, iz] = CLOSE_OUTSIDE
    return values


def _joined_count(values):
    joiner = CornerJoiner(TriangleMeshBuilder(), 1.0, (0.0, 0.0, 0.0))
    joiner.advance()
    return joiner.join_layer(values, 1, ISO)


def test_corner_joiner_merges_two_close_crossings():
    sink = TriangleMeshBuilder()
    joiner = CornerJoiner(sink, 0.5, (10.0, 0.0, 0.0))
    joiner.advance()
    values = _corner_grid((0, 1, 1), (1, 2, 1))
    assert joiner.join_layer(values, 1, ISO) == 1
    pos = 0.1 / 1.1
    np.testing.assert_allclose(
        sink.get_point(0),
        (10.0 + 0.5 * (1.0 - pos / 2), 0.5 * (1.0 + pos / 2), 0.5),
    )
    assert joiner.joined_vertex(LAYER_CURRENT, 1, 1) == 0
    assert joiner.joined_vertex(LAYER_PREVIOUS, 1, 1) is None
    joiner.advance()
    assert joiner.joined_vertex(LAYER_PREVIOUS, 1, 1) == 0
    assert joiner.joined_vertex(LAYER_CURRENT, 1, 1) is None


def test_corner_joiner_needs_two_close_crossings():
    assert _joined_count(_corner_grid((0, 1, 1))) == 0


def test_corner_joiner_skips_opposite_crossings_on_one_axis():
    assert _joined_count(_corner_grid((1, 1, 0), (1, 1, 2))) == 0
    assert _joined_count(_corner_grid((1, 0, 1), (1, 2, 1))) == 0
    assert _joined_count(_corner_grid((0, 1, 1), (2, 1, 1))) == 0


def test_corner_joiner_bubble_rules():
    neighbors = [(0, 1, 1), (2, 1, 1), (1, 0, 1), (1, 2, 1), (1, 1, 0), (1, 1, 2)]
    # cut off on all six edges, all close: collapses to one vertex
    assert _joined_count(_corner_grid(*neighbors)) == 1
    # one of the six crossings not close: left alone
    values = _corner_grid(*neighbors)
    values[1, 1, 2] = ISO - 0.1
    assert _joined_count(values) == 0


def test_corner_joiner_outside_corner():
    values = np.full((3, 3, 3), ISO - 1.0)
    values[1, 1, 1] = ISO - 0.1
    values[0, 1, 1] = values[1, 1, 0] = ISO + 1.0
    assert _joined_count(values) == 1


def _interpolator(values, sink, joiner):
    return EdgeInterpolator(
        values.reshape(-1), values.shape, ISO, sink, 1.0, (0.0, 0.0, 0.0), joiner
    )


def test_edge_vertex_shared_between_cells():
    values = np.full((2, 2, 2), INSIDE)
    values[1, 0, 0] = CLOSE_OUTSIDE
    sink = TriangleMeshBuilder()
    joiner = CornerJoiner(sink, 1.0, (0.0, 0.0, 0.0))
    interpolator = _interpolator(values, sink, joiner)
    joiner.advance()
    interpolator.advance(1)
    first = interpolator.vertex_index(0, 0, 0, EDGE_DIR_X, LAYER_EITHER)
    assert interpolator.vertex_index(0, 0, 0, EDGE_DIR_X, LAYER_EITHER) == first
    assert interpolator.vertex_index(1, 0, 0, EDGE_DIR_Y, LAYER_CURRENT) != first
    assert sink.point_count == 2
    np.testing.assert_allclose(sink.get_point(first), (0.5, 0.0, 0.0))
    np.testing.assert_allclose(sink.get_point(1), (1.0, 0.5, 0.0))


def test_edge_vertices_redirect_to_joined_corner():
    values = _corner_grid((0, 1, 1), (1, 2, 1))
    sink = TriangleMeshBuilder()
    joiner = CornerJoiner(sink, 1.0, (0.0, 0.0, 0.0))
    interpolator = _interpolator(values, sink, joiner)
    joiner.advance()
    interpolator.advance(1)
    joiner.join_layer(values, 1, ISO)
    joined = joiner.joined_vertex(LAYER_CURRENT, 1, 1)

    # crossing near the high end of an x-edge: the current layer's corner
    assert interpolator.vertex_index(0, 1, 1, EDGE_DIR_X, LAYER_EITHER) == joined
    # crossing near the low end of a y-edge of the current layer
    assert interpolator.vertex_index(1, 1, 1, EDGE_DIR_Y, LAYER_CURRENT) == joined
    assert sink.point_count == 1
    assert interpolator.redirected_count == 2


def test_edge_vertex_near_unjoined_corner_is_new():
    values = _corner_grid((1, 1, 2))
    sink = TriangleMeshBuilder()
    joiner = CornerJoiner(sink, 1.0, (0.0, 0.0, 0.0))
    interpolator = _interpolator(values, sink, joiner)
    joiner.advance()
    interpolator.advance(1)
    assert joiner.join_layer(values, 1, ISO) == 0
    index = interpolator.vertex_index(1, 1, 1, EDGE_DIR_Z, LAYER_CURRENT)
    np.testing.assert_allclose(sink.get_point(index), (1.0, 1.0, 1.0 + 0.1 / 1.1))


def test_edge_cache_rolls_with_layers():
    values = np.full((3, 2, 2), INSIDE)
    values[:, 0, 0] = CLOSE_OUTSIDE
    sink = TriangleMeshBuilder()
    joiner = CornerJoiner(sink, 1.0, (0.0, 0.0, 0.0))
    interpolator = _interpolator(values, sink, joiner)
    interpolator.advance(1)
    a = interpolator.vertex_index(1, 0, 0, EDGE_DIR_Z, LAYER_CURRENT)
    interpolator.advance(2)
    assert interpolator.vertex_index(1, 0, 0, EDGE_DIR_Z, LAYER_PREVIOUS) == a
    b = interpolator.vertex_index(2, 0, 0, EDGE_DIR_Z, LAYER_CURRENT)
    assert b != a
    assert sink.point_count == 2


class _EdgePoints:
    """Hands out a new, distinct point for every edge it is asked for."""

    def __init__(self, sink):
        self._sink = sink
        self.indices = []

    def vertex_index(self, x, y, z, direction, layer):
        n = len(self.indices)
        index = self._sink.add_point(x + 0.1 * n, y + 0.2 * n * n, z - 0.3 * n)
        self.indices.append(index)
        return index


def _square_triangulator(points):
    sink = TriangleMeshBuilder()
    for point in points:
        sink.add_point(*point)
    return sink, Triangulator(sink, None)


@pytest.mark.parametrize(
    "points, expected",
    [
        # v3 close to the v0-v2 diagonal: split along v1-v3
        (
            [(0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (2.0, 2.0, 0.0), (0.9, 1.1, 0.0)],
            [[1, 2, 3], [3, 0, 1]],
        ),
        # v2 close to the v1-v3 diagonal: split along v0-v2
        (
            [(0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (1.1, 1.0, 0.0), (0.0, 2.0, 0.0)],
            [[0, 1, 2], [2, 3, 0]],
        ),
    ],
)
def test_square_split_avoids_sliver(points, expected):
    sink, triangulator = _square_triangulator(points)
    triangulator._add_square(0, 1, 2, 3)
    assert sink.triangles.tolist() == expected
    assert triangulator.degenerate_square_count == 0


def test_square_with_joined_corner_is_one_triangle():
    sink, triangulator = _square_triangulator(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0)]
    )
    triangulator._add_square(0, 0, 1, 2)
    assert sink.triangles.tolist() == [[0, 1, 2]]
    assert triangulator.triangle_count == 1


def test_flat_square_is_skipped():
    sink, triangulator = _square_triangulator(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0), (3.0, 0.0, 0.0)]
    )
    triangulator._add_square(0, 1, 2, 3)
    assert sink.triangle_count == 0
    assert triangulator.triangle_count == 0
    assert triangulator.degenerate_square_count == 1


def test_centroid_is_mean_of_crossed_edge_points():
    code = int(np.flatnonzero(CUBE_HAS_CENTROID)[0])
    sink = TriangleMeshBuilder()
    edges = _EdgePoints(sink)
    triangulator = Triangulator(sink, edges)
    triangulator.triangulate_cell(1, 1, 1, code)

    assert len(edges.indices) == bin(EDGE_TABLE[code]).count("1")
    assert triangulator.centroid_count == 1
    centroid = len(edges.indices)
    assert sink.point_count == centroid + 1
    np.testing.assert_allclose(
        sink.get_point(centroid), sink.vertices[edges.indices].mean(axis=0)
    )
    assert (sink.triangles == centroid).any()
    assert triangulator.degenerate_triangle_count == 0


def test_mesh_sink_interface_is_abstract():
    sink = MeshSink()
    with pytest.raises(NotImplementedError):
        sink.add_point(0.0, 0.0, 0.0)
    with pytest.raises(NotImplementedError):
        sink.add_triangle(0, 1, 2)
    with pytest.raises(NotImplementedError):
        sink.get_point(0)


def test_triangle_mesh_builder_grows():
    builder = TriangleMeshBuilder(initial_capacity=2)
    for i in range(10):
        assert builder.add_point(i, 2 * i, 3 * i) == i
    for i in range(7):
        builder.add_triangle(i, i + 1, i + 2)
    assert builder.point_count == 10
    assert builder.triangle_count == 7
    assert builder.vertices.shape == (10, 3)
    assert builder.triangles.shape == (7, 3)
    assert builder.get_point(9) == (9.0, 18.0, 27.0)
    assert builder.triangles[6].tolist() == [6, 7, 8]
    with pytest.raises(IndexError):
        builder.get_point(10)
    builder.clear()
    assert builder.point_count == builder.triangle_count == 0
