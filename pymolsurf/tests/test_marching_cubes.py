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

from pymolsurf.mesh.builders import TriangleMeshBuilder
from pymolsurf.mesh.marching_cubes import SmoothMarchingCubes
from pymolsurf.mesh.topology import (
    connected_components,
    edge_usage,
    euler_characteristic,
    is_watertight,
    signed_volume,
)
from pymolsurf.space.core.occupancy import build_all_cubes_field
from pymolsurf.space.core.rasterizer import rasterize_atoms
from pymolsurf.utils.utils import sphere_volume

ISO = 5.0


def _assert_no_degenerate_triangles(builder):
    triangles = builder.triangles
    assert np.all(triangles[:, 0] != triangles[:, 1])
    assert np.all(triangles[:, 1] != triangles[:, 2])
    assert np.all(triangles[:, 0] != triangles[:, 2])
    assert triangles.min() >= 0
    assert triangles.max() < builder.point_count


def test_single_cell_triangle():
    values = np.full((2, 2, 2), ISO + 1.0)
    values[0, 0, 0] = ISO - 1.0
    builder = TriangleMeshBuilder()
    mesher = SmoothMarchingCubes(builder, voxel_size=0.5)
    mesher.set_offset(1.0, 2.0, 3.0)
    stats = mesher.polygonise(values.reshape(-1), values.shape, ISO)

    assert stats.crossed_cells == 1
    assert stats.triangles == 1
    assert stats.vertices == builder.point_count == 3
    np.testing.assert_allclose(
        builder.vertices, [[1.25, 2.0, 3.0], [1.0, 2.0, 3.25], [1.0, 2.25, 3.0]]
    )
    assert builder.triangles.tolist() == [[0, 2, 1]]


def test_inverted_single_cell_triangle():
    values = np.full((2, 2, 2), ISO - 1.0)
    values[0, 0, 0] = ISO + 1.0
    builder = TriangleMeshBuilder()
    stats = SmoothMarchingCubes(builder).polygonise(values, values.shape, ISO)
    assert stats.triangles == 1
    assert builder.point_count == 3


@pytest.mark.parametrize("shape", [(1, 4, 4), (4, 1, 4), (4, 4, 1)])
def test_flat_grid_yields_nothing(shape):
    builder = TriangleMeshBuilder()
    values = np.zeros(shape)
    stats = SmoothMarchingCubes(builder).polygonise(values, shape, ISO)
    assert stats.triangles == 0
    assert builder.point_count == 0


def test_uniform_grid_yields_nothing():
    builder = TriangleMeshBuilder()
    stats = SmoothMarchingCubes(builder).polygonise(np.full(64, ISO), (4, 4, 4), ISO)
    assert stats.crossed_cells == 0
    assert builder.point_count == 0


def test_polygonise_rejects_mismatched_grid():
    with pytest.raises(ValueError):
        SmoothMarchingCubes(TriangleMeshBuilder()).polygonise(np.zeros(10), (2, 2, 2), ISO)
    with pytest.raises(ValueError):
        SmoothMarchingCubes(TriangleMeshBuilder(), voxel_size=0.0)
    with pytest.raises(ValueError):
        SmoothMarchingCubes(TriangleMeshBuilder(), max_joint_position=0.6)


def test_all_cube_codes_mesh_without_degenerate_triangles():
    field, _ = build_all_cubes_field(seed=3)
    builder = TriangleMeshBuilder()
    stats = SmoothMarchingCubes(builder).polygonise_field(field)
    assert stats.crossed_cells >= 254
    assert stats.triangles == builder.triangle_count > 0
    _assert_no_degenerate_triangles(builder)


def _sphere_field(radius, voxel_size):
    atoms_data = np.array([[0.3, -0.2, 0.1, radius, 0.0]])
    return rasterize_atoms(atoms_data, 0.0, voxel_size)


def test_sphere_mesh_is_closed_and_simply_connected():
    field = _sphere_field(1.5, 0.15)
    builder = TriangleMeshBuilder()
    stats = SmoothMarchingCubes(builder).polygonise_field(field)

    assert stats.joined_vertices > 0
    _assert_no_degenerate_triangles(builder)
    assert edge_usage(builder.triangles) == (0, 0)
    assert is_watertight(builder.triangles)
    assert euler_characteristic(builder.triangles) == 2
    assert connected_components(builder.triangles)[0] == 1
    volume = abs(signed_volume(builder.vertices, builder.triangles))
    assert volume == pytest.approx(sphere_volume(1.5), rel=0.05)


def test_joining_reduces_vertex_count():
    field = _sphere_field(1.5, 0.15)
    smooth = TriangleMeshBuilder()
    plain = TriangleMeshBuilder()
    smooth_stats = SmoothMarchingCubes(smooth).polygonise_field(field)
    plain_stats = SmoothMarchingCubes(plain, max_joint_position=0.0).polygonise_field(field)

    assert plain_stats.joined_vertices == 0
    assert smooth_stats.crossed_cells == plain_stats.crossed_cells
    assert smooth.point_count < plain.point_count
    assert is_watertight(plain.triangles)
    assert euler_characteristic(plain.triangles) == 2


def test_polygonise_is_repeatable():
    field = _sphere_field(1.2, 0.2)
    first = TriangleMeshBuilder()
    second = TriangleMeshBuilder()
    mesher = SmoothMarchingCubes(first)
    mesher.polygonise_field(field)
    SmoothMarchingCubes(second).polygonise_field(field)
    np.testing.assert_array_equal(first.vertices, second.vertices)
    np.testing.assert_array_equal(first.triangles, second.triangles)
