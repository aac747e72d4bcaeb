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

from pymolsurf.constants import ConstSurfaceFloats
from pymolsurf.foundation.enums import SurfaceType
from pymolsurf.foundation.settings import SurfaceSettings
from pymolsurf.space.core.eroder import erode_field
from pymolsurf.space.core.occupancy import calculate_volume
from pymolsurf.space.core.rasterizer import calculate_grid_geometry, rasterize_atoms
from pymolsurf.space.field import ScalarField
from pymolsurf.space.surface import MolecularSurface
from pymolsurf.utils.utils import sphere_volume

ISO_LEVEL = ConstSurfaceFloats.IsoLevel.value
RADIUS_SURPLUS = ConstSurfaceFloats.RadiusSurplus.value


def test_scalar_field_validation():
    with pytest.raises(ValueError):
        ScalarField(np.zeros(8), (2, 2), 1.0, (0, 0, 0))
    with pytest.raises(ValueError):
        ScalarField(np.zeros(7), (2, 2, 2), 1.0, (0, 0, 0))
    with pytest.raises(ValueError):
        ScalarField(np.zeros(8), (2, 2, 2), 0.0, (0, 0, 0))


def test_scalar_field_indexing():
    field = ScalarField(np.arange(24.0), (2, 3, 4), 0.5, (1.0, 2.0, 3.0))
    assert field.x_stride == 12
    assert field.y_stride == 4
    assert field.linear_index(1, 2, 3) == 23
    assert field.values_3d[1, 2, 3] == 23.0
    np.testing.assert_allclose(field.world_coordinates(1, 2, 3), [1.5, 3.0, 4.5])


def test_grid_geometry_single_atom(single_atom):
    grid_shape, offset = calculate_grid_geometry(single_atom, 0.0, 0.5)
    np.testing.assert_array_equal(grid_shape, [9, 9, 9])
    np.testing.assert_allclose(offset, [-2.0, -2.0, -2.0])


def test_grid_geometry_centers_padded_box(small_cluster):
    probe, voxel = 1.4, 0.4
    grid_shape, offset = calculate_grid_geometry(small_cluster, probe, voxel)
    coords = small_cluster[:, :3]
    radii = small_cluster[:, 3]
    lo = np.min(coords - radii[:, None], axis=0) - probe
    hi = np.max(coords + radii[:, None], axis=0) + probe
    grid_end = offset + (grid_shape - 1) * voxel
    np.testing.assert_allclose(lo - offset, grid_end - hi, atol=1e-9)
    assert np.all(offset < lo)
    assert np.all(grid_end > hi)


def test_rasterized_single_atom_values(single_atom):
    field = rasterize_atoms(single_atom, 0.0, 0.5)
    assert field.shape == (9, 9, 9)
    # lattice (4, 4, 4) is the atom center; 1.5 A is 3 voxels
    assert field.values_3d[4, 4, 4] == pytest.approx(ISO_LEVEL + 3.0)
    assert field.values_3d[4, 4, 1] == pytest.approx(ISO_LEVEL)
    assert field.values_3d[0, 0, 0] < ISO_LEVEL


def test_rasterization_is_order_independent_below_saturation(small_cluster):
    reversed_atoms = small_cluster[::-1].copy()
    field = rasterize_atoms(small_cluster, 1.4, 0.4)
    field_reversed = rasterize_atoms(reversed_atoms, 1.4, 0.4)
    cap = ISO_LEVEL + RADIUS_SURPLUS
    np.testing.assert_array_equal(
        np.minimum(field.values, cap), np.minimum(field_reversed.values, cap)
    )


def test_erosion_never_raises_the_field(small_cluster):
    accessible = rasterize_atoms(small_cluster, 1.4, 0.4)
    excluded = erode_field(accessible, 1.4)
    assert np.all(excluded.values <= accessible.values)
    assert np.any(excluded.values < accessible.values)
    assert excluded.shape == accessible.shape
    np.testing.assert_array_equal(excluded.offset, accessible.offset)


def test_erosion_without_probe_is_a_copy(single_atom):
    field = rasterize_atoms(single_atom, 0.0, 0.5)
    eroded = erode_field(field, 0.0)
    assert eroded.values is not field.values
    np.testing.assert_array_equal(eroded.values, field.values)


def test_single_sphere_grid_volume():
    atoms_data = np.array([[0.0, 0.0, 0.0, 2.0, 0.0]])
    field = rasterize_atoms(atoms_data, 0.0, 0.2)
    assert calculate_volume(field) == pytest.approx(sphere_volume(2.0), rel=0.05)


def test_connolly_volume_between_vdw_and_accessible(small_cluster):
    def volume(surface_type, probe):
        settings = SurfaceSettings(voxel_size=0.4, probe_size=probe, surface_type=surface_type)
        surface = MolecularSurface(settings)
        return surface.calculate_volume(surface.calculate_grid(small_cluster))

    vdw = volume(SurfaceType.CONNOLLY, 0.0)
    connolly = volume(SurfaceType.CONNOLLY, 1.4)
    accessible = volume(SurfaceType.LEE_RICHARDS, 1.4)
    assert vdw < connolly < accessible


def test_surface_records_stage_timings(small_cluster):
    surface = MolecularSurface(SurfaceSettings(voxel_size=0.5))
    field = surface.calculate_grid(small_cluster)
    surface.calculate_volume(field)
    assert set(surface.timings) == {"surface| grid", "surface| erosion", "surface| volume"}
    assert all(float(elapsed) >= 0.0 for elapsed in surface.timings.values())


def test_surface_rejects_malformed_atoms():
    surface = MolecularSurface()
    with pytest.raises(ValueError):
        surface.calculate_grid(np.zeros((0, 5)))
