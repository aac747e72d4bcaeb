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
This module defines constants and enumerations used throughout pymolsurf.

It includes:
- `AtomFields`: the columns of the atom data array consumed by the rasterizer.
- Derived constants (`ATOMFIELD_X`, `ATOMFIELD_RADIUS`, `LEN_ATOMFIELDS`, ...).
- `ConstSurfaceFloats`: the floating-point constants of grid construction and
  meshing (iso-level, radius surplus, joining threshold, defaults).
- `ConstSurfaceInts`: integer constants (grid margin, block sizes, edge directions).
- `CUBE_CORNER_OFFSETS` and `CUBE_EDGES`: the cube geometry the marching cubes
  tables are written against.
"""

from enum import Enum
from numpy import int32, array

from pymolsurf.foundation.enumbase import BaseInfoEnum


class AtomFields(BaseInfoEnum):
    """
    Enumerates fields available in the atoms_data array used by pymolsurf.

    Fields:
        CoordX (int): X-coordinate in angstrom.
        CoordY (int): Y-coordinate in angstrom.
        CoordZ (int): Z-coordinate in angstrom.
        Radius (int): Van der Waals radius in angstrom.
        AtomicNumber (int): Atomic number of the atom's element, 0 if unknown.
    """

    CoordX = 0, "X-coordinate in angstrom"
    CoordY = 1, "Y-coordinate in angstrom"
    CoordZ = 2, "Z-coordinate in angstrom"
    Radius = 3, "The van der Waals radius in angstrom"
    AtomicNumber = 4, "The atomic number of atom's chemical element"

    @property
    def id(self):
        return self.value


ATOMFIELD_X = AtomFields.CoordX.id
ATOMFIELD_Y = AtomFields.CoordY.id
ATOMFIELD_Z = AtomFields.CoordZ.id

# Index of the field after Z coordinate for use in range based coords access
ATOMFIELD_CRD_END = ATOMFIELD_Z + 1

ATOMFIELD_RADIUS = AtomFields.Radius.id
ATOMFIELD_ATOMIC_NUMBER = AtomFields.AtomicNumber.id
LEN_ATOMFIELDS = len(AtomFields)

NUM_DIMENSIONS = 3


class ConstSurfaceFloats(Enum):
    """
    Floating-point constants of the occupancy grid and the smooth marching cubes.

    - IsoLevel: surface threshold of the occupancy grid. Strictly positive so that
      zero-initialized cells are outside, and not an integer so that integer
      valued grids rarely hit it exactly.
    - RadiusSurplus: in voxel edge lengths. Grid cells above IsoLevel + RadiusSurplus
      are no longer raised by further atoms, cells below IsoLevel - RadiusSurplus
      are no longer lowered by the probe erosion.
    - MaxJointPosition: fraction of an edge length within which a crossing counts as
      close to a lattice corner (at most 0.5; 0.0 is plain marching cubes).
    - DefaultVoxelSize / DefaultProbeSize: in angstrom.
    - VolumeHalfIsoOffset: a cell contributes `clamp(v - (IsoLevel - 0.5), 0, 1)`
      voxels to the volume estimate.
    - VolumeCorrectionFactor: the grid volume estimate over-shoots by roughly
      0.5 % (voxel 0.2), 2 % (voxel 0.4) and 4 % (voxel 0.6); 0.98 calibrates the
      default voxel size.
    - PointArrayResizeFactor: growth factor of the mesh builder point/face arrays.
    """

    IsoLevel = 5.0
    RadiusSurplus = 1.0
    MaxJointPosition = 0.48
    DefaultVoxelSize = 0.4
    DefaultProbeSize = 1.4
    VolumeHalfIsoOffset = 0.5
    VolumeCorrectionFactor = 0.98
    PointArrayResizeFactor = 1.5


class ConstSurfaceInts(Enum):
    """
    Integer constants.

    - GridMarginVoxels: added to extent/voxel_size per axis when sizing the grid.
    - PointBlockSize: points per storage block of the area/volume calculator.
    - InitialMeshCapacity: initial row count of the mesh builder arrays.
    - EdgeKeyStride: edge cache keys are `EdgeKeyStride * linear_index + direction`.
    """

    GridMarginVoxels = 3
    PointBlockSize = 1024
    InitialMeshCapacity = 4096
    EdgeKeyStride = 4


EDGE_DIR_X = 0
EDGE_DIR_Y = 1
EDGE_DIR_Z = 2

# Which of the two joined-vertex layer maps an edge consults.
LAYER_PREVIOUS = 0
LAYER_EITHER = 1  # x-edge: nearest end decides
LAYER_CURRENT = 2

"""
Lattice offsets of the 8 cube corners relative to the cube's lowest corner
(ix - 1, iy - 1, iz - 1); row i is the corner encoded by bit i of the cube code.
"""
CUBE_CORNER_OFFSETS = array(
    [
        (0, 0, 0),
        (1, 0, 0),
        (1, 0, 1),
        (0, 0, 1),
        (0, 1, 0),
        (1, 1, 0),
        (1, 1, 1),
        (0, 1, 1),
    ],
    dtype=int32,
)
CUBE_CORNER_OFFSETS.setflags(write=False)

"""
The 12 cube edges: (dx, dy, dz) of the edge's lower endpoint relative to the
cube's lowest corner, the edge direction, and the joined-vertex layer to consult.
"""
CUBE_EDGES = (
    (0, 0, 0, EDGE_DIR_X, LAYER_EITHER),
    (1, 0, 0, EDGE_DIR_Z, LAYER_CURRENT),
    (0, 0, 1, EDGE_DIR_X, LAYER_EITHER),
    (0, 0, 0, EDGE_DIR_Z, LAYER_PREVIOUS),
    (0, 1, 0, EDGE_DIR_X, LAYER_EITHER),
    (1, 1, 0, EDGE_DIR_Z, LAYER_CURRENT),
    (0, 1, 1, EDGE_DIR_X, LAYER_EITHER),
    (0, 1, 0, EDGE_DIR_Z, LAYER_PREVIOUS),
    (0, 0, 0, EDGE_DIR_Y, LAYER_PREVIOUS),
    (1, 0, 0, EDGE_DIR_Y, LAYER_CURRENT),
    (1, 0, 1, EDGE_DIR_Y, LAYER_CURRENT),
    (0, 0, 1, EDGE_DIR_Y, LAYER_PREVIOUS),
)
