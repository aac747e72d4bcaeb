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
This module defines SurfaceSettings, the configuration of one molecular surface
calculation.

Instances are mutable until `freeze()` is called; freezing validates every field
against the `surface` parameter definitions, after which any assignment raises
TypeError. `MolecularSurface` freezes the settings it is given so that a
configuration cannot change while a grid or mesh is being built.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

import numpy as np

from pymolsurf.constants import ConstSurfaceFloats
from pymolsurf.foundation.enums import Precision, SurfaceType
from pymolsurf.utils.params.surface_params import get_group_definition

from pymolsurf.config.global_runtime import vprint
from pymolsurf.config.logging_config import DEBUG, get_effective_verbosity

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)


@dataclass
class SurfaceSettings:
    """
    Configuration settings of a molecular surface calculation.
    Instances are mutable until the 'freeze()' method is called.
    """

    voxel_size: float = ConstSurfaceFloats.DefaultVoxelSize.value
    probe_size: float = ConstSurfaceFloats.DefaultProbeSize.value
    surface_type: SurfaceType = SurfaceType.CONNOLLY
    precision: Precision = Precision.DOUBLE

    _frozen: bool = field(init=False, default=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_frozen") and self._frozen:
            raise TypeError(
                f"Cannot modify attribute '{name}' of a frozen SurfaceSettings instance."
            )
        super().__setattr__(name, value)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def erodes_probe(self) -> bool:
        """True when the probe erosion pass runs (Connolly surface with a probe)."""
        return self.surface_type == SurfaceType.CONNOLLY and self.probe_size != 0.0

    @property
    def real_dtype(self):
        return np.float32 if self.precision == Precision.SINGLE else np.float64

    def freeze(self) -> "SurfaceSettings":
        """
        Validates and freezes the configuration. Returns self for chaining.

        Raises:
            ValueError: If a field fails its parameter definition.
        """
        if self._frozen:
            return self
        self._validate_for_freeze()
        object.__setattr__(self, "_frozen", True)
        vprint(
            DEBUG,
            _VERBOSITY,
            f"SurfaceSettings frozen: voxel_size={self.voxel_size}, probe_size={self.probe_size}, "
            f"surface_type={self.surface_type.display_name}, precision={self.precision.name}",
        )
        return self

    def _validate_for_freeze(self):
        """Casts and range-checks every field against its ParamStatement."""
        group = get_group_definition()
        for settings_field in fields(self):
            if settings_field.name.startswith("_"):
                continue
            statement = group.find(settings_field.name)
            value = statement.validate(getattr(self, settings_field.name))
            object.__setattr__(self, settings_field.name, value)

        if self.voxel_size <= 0.0:
            raise ValueError("`voxel_size` must be positive.")

    def clone(self) -> "SurfaceSettings":
        """Returns a mutable copy of this configuration."""
        return replace(self)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SurfaceSettings":
        """
        Builds settings from a mapping keyed by any alias of the surface
        parameters (e.g. {"vox": 0.3, "probesize": 1.2, "surface_type": "lee-richards"}).

        Raises:
            ValueError: For unknown parameter names or invalid values.
        """
        group = get_group_definition()
        kwargs = {}
        for name, value in values.items():
            try:
                statement = group.find(name)
            except KeyError as exc:
                raise ValueError(str(exc.args[0])) from None
            kwargs[statement.full_name] = statement.validate(value)
        return cls(**kwargs)
