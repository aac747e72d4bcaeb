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

from pymolsurf.foundation.enums import SurfaceType
from pymolsurf.mesh.topology import (
    component_euler_characteristics,
    connected_components,
    euler_characteristic,
    is_watertight,
)


def _assert_valid_indices(builder):
    triangles = builder.triangles
    assert triangles.shape[0] > 0
    assert np.all(triangles[:, 0] != triangles[:, 1])
    assert np.all(triangles[:, 1] != triangles[:, 2])
    assert np.all(triangles[:, 0] != triangles[:, 2])
    assert triangles.max() < builder.point_count


def test_fused_atoms_give_one_closed_surface(atoms_factory, mesher):
    atoms_data = atoms_factory([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]], [1.5, 1.5])
    _, builder, surface = mesher(atoms_data, voxel_size=0.15)
    _assert_valid_indices(builder)
    assert connected_components(builder.triangles)[0] == 1
    assert is_watertight(builder.triangles)
    assert euler_characteristic(builder.triangles) == 2
    assert surface.last_stats.triangles == builder.triangle_count


def test_separated_atoms_give_two_surfaces(atoms_factory, mesher):
    atoms_data = atoms_factory([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]], [1.0, 1.0])
    _, builder, _ = mesher(atoms_data, voxel_size=0.1)
    _assert_valid_indices(builder)
    count, labels = connected_components(builder.triangles)
    assert count == 2
    assert component_euler_characteristics(builder.triangles) == [2, 2]
    assert euler_characteristic(builder.triangles) == 4
    # one sphere per side of the midplane
    centers = builder.vertices[builder.triangles[:, 0], 0]
    for label in range(count):
        side = centers[labels == label] > 5.0
        assert side.all() or not side.any()


def test_connolly_mesh_has_no_degenerate_triangles(small_cluster, mesher):
    field, builder, surface = mesher(small_cluster, voxel_size=0.3, probe_size=1.4)
    _assert_valid_indices(builder)
    assert set(surface.timings) == {
        "surface| grid",
        "surface| erosion",
        "surface| mesh",
    }
    assert field.shape[0] > 2


@pytest.mark.parametrize("probe_size", [0.0, 1.4])
def test_mesh_is_independent_of_atom_order(small_cluster, mesher, probe_size):
    permutation = [3, 0, 4, 2, 1]
    _, builder, _ = mesher(small_cluster, voxel_size=0.3, probe_size=probe_size)
    _, builder_permuted, _ = mesher(
        small_cluster[permutation].copy(), voxel_size=0.3, probe_size=probe_size
    )
    np.testing.assert_array_equal(builder.vertices, builder_permuted.vertices)
    np.testing.assert_array_equal(builder.triangles, builder_permuted.triangles)


def test_build_is_repeatable(small_cluster, mesher):
    field, builder, _ = mesher(
        small_cluster, voxel_size=0.4, probe_size=1.4, surface_type=SurfaceType.LEE_RICHARDS
    )
    field_again, builder_again, _ = mesher(
        small_cluster, voxel_size=0.4, probe_size=1.4, surface_type=SurfaceType.LEE_RICHARDS
    )
    np.testing.assert_array_equal(field.values, field_again.values)
    np.testing.assert_array_equal(builder.vertices, builder_again.vertices)
    np.testing.assert_array_equal(builder.triangles, builder_again.triangles)


def test_surfaces_nest(small_cluster, mesher):
    _, vdw, _ = mesher(small_cluster, voxel_size=0.4)
    _, accessible, _ = mesher(
        small_cluster, voxel_size=0.4, probe_size=1.4, surface_type=SurfaceType.LEE_RICHARDS
    )
    center = small_cluster[:, :3].mean(axis=0)
    vdw_extent = np.linalg.norm(vdw.vertices - center, axis=1).max()
    accessible_extent = np.linalg.norm(accessible.vertices - center, axis=1).max()
    assert accessible_extent == pytest.approx(vdw_extent + 1.4, abs=0.4)


@pytest.mark.parametrize(
    "coords, radii, expected_components",
    [
        ([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]], [1.5, 1.5], 1),
        ([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]], [1.0, 1.0], 2),
    ],
)
def test_component_count_at_default_voxel_size(atoms_factory, mesher, coords, radii, expected_components):
    _, builder, _ = mesher(atoms_factory(coords, radii), voxel_size=0.4)
    _assert_valid_indices(builder)
    assert connected_components(builder.triangles)[0] == expected_components
