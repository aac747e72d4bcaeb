#!/usr/bin/env python
# coding: utf-8

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
pyMolSurf: a Python/Numba implementation of smooth marching cubes molecular surfaces
(Connolly, Lee-Richards and van der Waals envelopes).
"""

__author__ = "The pyMolSurf Development Team"
__copyright__ = "Copyright 2025, The pyMolSurf Project"
__credits__ = []
__license__ = "AGPL-3.0-or-later"
__version__ = "0.1.0"

__maintainers__ = ["pyMolSurf Development Team"]
__contact__ = "https://github.com/pymolsurf/pymolsurf/issues"

__status__ = "Alpha"
