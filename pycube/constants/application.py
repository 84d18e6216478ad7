#!/usr/bin/env python
# coding: utf-8

# This file is part of pyCube.
# Copyright (C) 2025 The pyCube Project and contributors.
#
# pyCube is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# pyCube is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with pyCube. If not, see <https://www.gnu.org/licenses/>.


"""
This module defines various constants and enumerations used throughout pyCube.

It includes:
- `NUM_DIMENSIONS`: Dimensionality of the lattice.
- `MOLFIELD_*`: Column indices of a molecule array of shape (N, 3) or (N, 4),
  the fourth column holding the atom radius when present.
- `ConstCubeFloats`: Floating-point constants such as the lattice snapping
  tolerance used by the interpolation kernels.
- `ConstCubeInts`: Integer constants, such as sentinel return values of
  Numba kernels.
"""


from enum import Enum

NUM_DIMENSIONS = 3

MOLFIELD_X = 0
MOLFIELD_Y = 1
MOLFIELD_Z = 2
MOLFIELD_CRD_END = 3
MOLFIELD_RADIUS = 3


class ConstCubeFloats(Enum):
    """
    pyCube numerical constants (double precision).

    Constants:
        LatticeSnapTolerance (float): Continuous lattice coordinates closer than
            this to an integer are snapped onto the lattice node, so that
            interpolating at a node position returns the stored sample exactly.
    """

    LatticeSnapTolerance = 1.0e-6


class ConstCubeInts(Enum):
    """
    pyCube integer constants.

    Constants:
        ExitNjitReturnValue (int): Status returned by Numba kernels on failure.
    """

    ExitNjitReturnValue = -9999
