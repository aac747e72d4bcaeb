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
    ATOMFIELD_ATOMIC_NUMBER,
    ATOMFIELD_RADIUS,
    LEN_ATOMFIELDS,
    get_vdw_radius_by_atomic_number,
    get_vdw_radius_by_symbol,
)
from pymolsurf.utils.utils import build_atoms_data, check_atoms_data


def test_vdw_radius_lookup():
    assert get_vdw_radius_by_atomic_number(6) == pytest.approx(1.70)
    assert get_vdw_radius_by_symbol("c") == pytest.approx(1.70)
    assert get_vdw_radius_by_symbol("O") == pytest.approx(1.52)
    with pytest.raises(ValueError):
        get_vdw_radius_by_atomic_number(0)
    with pytest.raises(ValueError):
        get_vdw_radius_by_symbol("Xx")


def test_build_atoms_data_from_atomic_numbers():
    atoms_data = build_atoms_data([[0, 0, 0], [1.2, 0, 0]], atomic_numbers=[6, 8])
    assert atoms_data.shape == (2, LEN_ATOMFIELDS)
    np.testing.assert_allclose(atoms_data[:, ATOMFIELD_RADIUS], [1.70, 1.52])
    np.testing.assert_array_equal(atoms_data[:, ATOMFIELD_ATOMIC_NUMBER], [6, 8])
    check_atoms_data(atoms_data)


@pytest.mark.parametrize(
    "coords, radii, atomic_numbers",
    [
        (np.zeros((0, 3)), [], None),
        ([[0.0, 0.0]], [1.0], None),
        ([[0.0, np.nan, 0.0]], [1.0], None),
        ([[0.0, 0.0, 0.0]], [0.0], None),
        ([[0.0, 0.0, 0.0]], [1.0, 2.0], None),
        ([[0.0, 0.0, 0.0]], None, None),
        ([[0.0, 0.0, 0.0]], None, [200]),
    ],
)
def test_build_atoms_data_rejects_invalid_input(coords, radii, atomic_numbers):
    with pytest.raises(ValueError):
        build_atoms_data(coords, radii=radii, atomic_numbers=atomic_numbers)


def test_check_atoms_data_rejects_bad_radius():
    atoms_data = build_atoms_data([[0, 0, 0]], radii=[1.0])
    atoms_data[0, ATOMFIELD_RADIUS] = -1.0
    with pytest.raises(ValueError):
        check_atoms_data(atoms_data)
