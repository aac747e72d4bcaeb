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
This module re-exports the constants used in pymolsurf.

    - AtomFields, ATOMFIELD_*, LEN_ATOMFIELDS: columns of the atoms_data array.
    - ConstSurfaceFloats, ConstSurfaceInts: grid and meshing constants.
    - EDGE_DIR_*, LAYER_*, CUBE_CORNER_OFFSETS, CUBE_EDGES: cube geometry.
    - EDGE_TABLE, FACE_TABLE, CLOSURE_TABLE, CUBE_HAS_CENTROID, CENTROID_VERTEX:
      the smooth marching cubes lookup tables.
    - ConstElementVdw and the van der Waals radius lookups.
"""

from .application import (
    AtomFields,
    ATOMFIELD_X,
    ATOMFIELD_Y,
    ATOMFIELD_Z,
    ATOMFIELD_CRD_END,
    ATOMFIELD_RADIUS,
    ATOMFIELD_ATOMIC_NUMBER,
    LEN_ATOMFIELDS,
    NUM_DIMENSIONS,
    ConstSurfaceFloats,
    ConstSurfaceInts,
    EDGE_DIR_X,
    EDGE_DIR_Y,
    EDGE_DIR_Z,
    LAYER_PREVIOUS,
    LAYER_EITHER,
    LAYER_CURRENT,
    CUBE_CORNER_OFFSETS,
    CUBE_EDGES,
)

from .marching_cubes import (
    CENTROID_VERTEX,
    EDGE_TABLE,
    FACE_TABLE,
    CLOSURE_TABLE,
    CUBE_HAS_CENTROID,
)

from .elements import (
    ConstElementVdw,
    AtomicNumToElement,
    get_vdw_radius_by_atomic_number,
    get_vdw_radius_by_symbol,
)
