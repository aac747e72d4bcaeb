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
MolecularSurface: the molecular surface pipeline.

The pipeline runs in two stages that can also be called separately:

1. `calculate_grid`: rasterizes the atoms into an occupancy field and, for a
   Connolly surface with a non-zero probe, erodes the probe accessible volume.
2. `polygonise`: meshes the ISO surface of a field into a `MeshSink` with the
   smooth marching cubes.

`build` runs both. Stage timings are collected in `timings`.
"""

import time

from pymolsurf.config.global_runtime import vprint
from pymolsurf.config.logging_config import DEBUG, INFO, get_effective_verbosity
from pymolsurf.foundation.settings import SurfaceSettings
from pymolsurf.mesh.marching_cubes import SmoothMarchingCubes
from pymolsurf.space.core.eroder import erode_field
from pymolsurf.space.core.occupancy import calculate_volume
from pymolsurf.space.core.rasterizer import rasterize_atoms
from pymolsurf.utils.utils import check_atoms_data

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)


class MolecularSurface:
    """
    Builds the occupancy field and the surface mesh of a molecule.

    Args:
        settings (SurfaceSettings, optional): The configuration; defaults are used
            when omitted. The instance is frozen on construction.

    Attributes:
        settings (SurfaceSettings): The frozen configuration.
        timings (dict): Elapsed seconds per stage, formatted to 3 decimals.
        last_stats (PolygonisationStats): Counters of the latest `polygonise`.
    """

    def __init__(self, settings=None):
        self.settings = (SurfaceSettings() if settings is None else settings).freeze()
        self.timings = {}
        self.last_stats = None

    def calculate_grid(self, atoms_data):
        """
        Returns the occupancy field of `atoms_data`.

        Raises:
            ValueError: If `atoms_data` is malformed (see `check_atoms_data`).
        """
        check_atoms_data(atoms_data)
        settings = self.settings

        tic_grid = time.perf_counter()
        field = rasterize_atoms(
            atoms_data,
            settings.probe_size,
            settings.voxel_size,
            dtype=settings.real_dtype,
        )
        toc_grid = time.perf_counter()
        self.timings["surface| grid"] = f"{toc_grid - tic_grid:.3f}"
        vprint(DEBUG, _VERBOSITY, f"occupancy field: {field}")

        if settings.erodes_probe:
            tic_erosion = time.perf_counter()
            field = erode_field(field, settings.probe_size)
            toc_erosion = time.perf_counter()
            self.timings["surface| erosion"] = f"{toc_erosion - tic_erosion:.3f}"
        return field

    def calculate_volume(self, field):
        """Returns the volume enclosed by the ISO surface of `field`, in cubic angstrom."""
        tic_volume = time.perf_counter()
        volume = calculate_volume(field)
        toc_volume = time.perf_counter()
        self.timings["surface| volume"] = f"{toc_volume - tic_volume:.3f}"
        return volume

    def polygonise(self, field, sink):
        """Meshes the ISO surface of `field` into `sink`; returns the run's counters."""
        tic_mesh = time.perf_counter()
        mesher = SmoothMarchingCubes(sink, field.voxel_size)
        self.last_stats = mesher.polygonise_field(field)
        toc_mesh = time.perf_counter()
        self.timings["surface| mesh"] = f"{toc_mesh - tic_mesh:.3f}"
        vprint(
            INFO,
            _VERBOSITY,
            f"{self.settings.surface_type.display_name} surface mesh: "
            f"{self.last_stats.vertices} vertices, {self.last_stats.triangles} triangles",
        )
        return self.last_stats

    def build(self, atoms_data, sink):
        """Builds the field of `atoms_data`, meshes it into `sink` and returns the field."""
        field = self.calculate_grid(atoms_data)
        self.polygonise(field, sink)
        self.report_timings()
        return field

    def report_timings(self):
        for stage, elapsed in self.timings.items():
            vprint(INFO, _VERBOSITY, f"{stage}: {elapsed} s")
