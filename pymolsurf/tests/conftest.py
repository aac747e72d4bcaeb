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

from pymolsurf.foundation.enums import Precision, SurfaceType, VerbosityLevel
from pymolsurf.config.global_runtime import set_precision, set_verbosity_level

set_precision(Precision.DOUBLE)
set_verbosity_level(VerbosityLevel.NOTICE)

from pymolsurf.foundation.settings import SurfaceSettings
from pymolsurf.mesh.builders import TriangleMeshBuilder
from pymolsurf.space.surface import MolecularSurface
from pymolsurf.utils.utils import build_atoms_data


def make_atoms(coords, radii):
    return build_atoms_data(np.asarray(coords, dtype=np.float64), radii=radii)


def mesh_atoms(atoms_data, voxel_size, probe_size=0.0, surface_type=SurfaceType.CONNOLLY):
    """Builds the surface of `atoms_data`; returns (field, builder, surface)."""
    settings = SurfaceSettings(
        voxel_size=voxel_size, probe_size=probe_size, surface_type=surface_type
    )
    surface = MolecularSurface(settings)
    builder = TriangleMeshBuilder()
    field = surface.build(atoms_data, builder)
    return field, builder, surface


@pytest.fixture
def single_atom():
    return make_atoms([[0.0, 0.0, 0.0]], [1.5])


@pytest.fixture
def small_cluster():
    coords = [
        [0.0, 0.0, 0.0],
        [1.4, 0.3, -0.2],
        [-0.6, 1.3, 0.5],
        [0.4, -0.9, 1.2],
        [2.2, 1.5, 0.9],
    ]
    radii = [1.7, 1.55, 1.52, 1.2, 1.8]
    return make_atoms(coords, radii)


@pytest.fixture
def atoms_factory():
    return make_atoms


@pytest.fixture
def mesher():
    return mesh_atoms
