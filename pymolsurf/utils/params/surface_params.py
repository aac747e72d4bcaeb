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

from pymolsurf.constants import ConstSurfaceFloats
from pymolsurf.foundation.enums import Precision, SurfaceType

from pymolsurf.utils.params.parameters import (
    ParameterGroup,
    ParamStatement,
)


def get_group_definition():
    """Defines and returns the 'surface' ParameterGroup with all its members."""
    group = ParameterGroup(
        "surface",
        "Parameters of the molecular surface grid and its triangulation.",
        "Parameters controlling the occupancy grid built from the atoms, the optional "
        "probe erosion and the smooth marching cubes triangulation of the surface.",
    )
    for statement in get_param_definitions().values():
        group.add_member(statement)
    return group


def get_param_definitions():
    """Defines and returns the surface-related ParamStatement objects."""
    params = {}

    params[("voxel_size", "voxelsize", "vox")] = ParamStatement(
        full_name="voxel_size",
        long_name="voxelsize",
        short_name="vox",
        units="Angstrom",
        dtype=float,
        default=ConstSurfaceFloats.DefaultVoxelSize.value,
        min_value=0.05,
        max_value=5.0,
        desc_short="Edge length of the cubic grid cells used to sample atom occupancy (default: 0.4)",
        desc_long="Edge length of the cubic grid cells used to sample atom occupancy. Smaller "
        "voxels give a finer mesh and a more accurate volume estimate; the grid size grows "
        "with the inverse cube of this value.",
        override=False,
        required=False,
    )

    params[("probe_size", "probesize", "prb")] = ParamStatement(
        full_name="probe_size",
        long_name="probesize",
        short_name="prb",
        units="Angstrom",
        dtype=float,
        default=ConstSurfaceFloats.DefaultProbeSize.value,
        min_value=0.0,
        max_value=10.0,
        desc_short="Radius of the spherical solvent probe; 0 gives the van der Waals hull (default: 1.4)",
        desc_long="Radius of the spherical solvent probe. The atom spheres are inflated by this "
        "radius; for the Connolly surface the probe is rolled back in afterwards. A value of "
        "0 disables both and yields the union of the van der Waals spheres.",
        override=False,
        required=False,
    )

    params[("surface_type", "surfacetype", "surftype")] = ParamStatement(
        full_name="surface_type",
        long_name="surfacetype",
        short_name="surftype",
        units="",
        dtype=SurfaceType,
        default=SurfaceType.CONNOLLY,
        min_value=None,
        max_value=None,
        desc_short='Molecular surface to mesh: choices {"CONNOLLY", "LEE_RICHARDS"}, (default: CONNOLLY)',
        desc_long='Molecular surface to mesh: choices {"CONNOLLY", "LEE_RICHARDS"}, (default: CONNOLLY)',
        override=False,
        required=False,
    )

    params[("precision", "precision", "prec")] = ParamStatement(
        full_name="precision",
        long_name="precision",
        short_name="prec",
        units="",
        dtype=Precision,
        default=Precision.DOUBLE,
        min_value=None,
        max_value=None,
        desc_short='Floating point precision of the occupancy grid: choices {"SINGLE", "DOUBLE"}, (default: DOUBLE)',
        desc_long='Floating point precision of the occupancy grid: choices {"SINGLE", "DOUBLE"}, (default: DOUBLE)',
        override=False,
        required=False,
    )

    return params
