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
This module defines the van der Waals radii of chemical elements and lookup
functions by atomic number and by element symbol.

It includes:
- `ConstElementVdw`: enumeration of elements with a tabulated van der Waals radius;
  each member's value is the pair (atomic number, radius in angstrom).
- `AtomicNumToElement`: reverse mapping from atomic number to member.
- `get_vdw_radius_by_atomic_number` and `get_vdw_radius_by_symbol`.

Radii are from Bondi (J. Phys. Chem. 1964, 68, 441), completed for the main group
elements Bondi does not list by Mantina et al. (J. Phys. Chem. A 2009, 113, 5806).
Elements with no radius in either source are deliberately absent.
"""

from enum import Enum


class ConstElementVdw(Enum):
    """Elements with a tabulated van der Waals radius: symbol -> (Z, radius)."""

    H = 1, 1.20
    He = 2, 1.40
    Li = 3, 1.82
    Be = 4, 1.53
    B = 5, 1.92
    C = 6, 1.70
    N = 7, 1.55
    O = 8, 1.52
    F = 9, 1.47
    Ne = 10, 1.54
    Na = 11, 2.27
    Mg = 12, 1.73
    Al = 13, 1.84
    Si = 14, 2.10
    P = 15, 1.80
    S = 16, 1.80
    Cl = 17, 1.75
    Ar = 18, 1.88
    K = 19, 2.75
    Ca = 20, 2.31
    Ni = 28, 1.63
    Cu = 29, 1.40
    Zn = 30, 1.39
    Ga = 31, 1.87
    Ge = 32, 2.11
    As = 33, 1.85
    Se = 34, 1.90
    Br = 35, 1.85
    Kr = 36, 2.02
    Rb = 37, 3.03
    Sr = 38, 2.49
    Pd = 46, 1.63
    Ag = 47, 1.72
    Cd = 48, 1.58
    In = 49, 1.93
    Sn = 50, 2.17
    Sb = 51, 2.06
    Te = 52, 2.06
    I = 53, 1.98
    Xe = 54, 2.16
    Cs = 55, 3.43
    Ba = 56, 2.68
    Pt = 78, 1.72
    Au = 79, 1.66
    Hg = 80, 1.55
    Tl = 81, 1.96
    Pb = 82, 2.02
    Bi = 83, 2.07
    Po = 84, 1.97
    At = 85, 2.02
    Rn = 86, 2.20
    Fr = 87, 3.48
    Ra = 88, 2.83
    U = 92, 1.86

    @property
    def atomic_number(self):
        return self.value[0]

    @property
    def radius(self):
        return self.value[1]


AtomicNumToElement = {elm.atomic_number: elm for elm in ConstElementVdw}


def get_vdw_radius_by_atomic_number(atomic_number) -> float:
    """
    Returns the van der Waals radius (angstrom) of the element with `atomic_number`.

    Raises:
        ValueError: If no radius is tabulated for this atomic number.
    """
    element = AtomicNumToElement.get(int(atomic_number))
    if element is None:
        raise ValueError(
            f"No van der Waals radius is tabulated for atomic number {atomic_number}."
        )
    return element.radius


def get_vdw_radius_by_symbol(symbol: str) -> float:
    """
    Returns the van der Waals radius (angstrom) of the element `symbol`, matched
    case-insensitively (e.g. 'CL', 'cl' and 'Cl' are chlorine).

    Raises:
        ValueError: If the symbol is unknown or has no tabulated radius.
    """
    key = symbol.strip().capitalize()
    if key not in ConstElementVdw.__members__:
        raise ValueError(f"No van der Waals radius is tabulated for element '{symbol}'.")
    return ConstElementVdw[key].radius
