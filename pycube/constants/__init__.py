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
This module defines various constants used in pyCube.

It re-exports enumerations for:
    - ConstCubeFloats:  Numerical constants (double precision).
    - ConstCubeInts:    Integer constants.

It also re-exports:
    - NUM_DIMENSIONS: General grid constant.
    - MOLFIELD_*: Column layout of a molecule coordinate/radius array.
"""

from .application import (
    NUM_DIMENSIONS,
    MOLFIELD_X,
    MOLFIELD_Y,
    MOLFIELD_Z,
    MOLFIELD_CRD_END,
    MOLFIELD_RADIUS,
    ConstCubeFloats,
    ConstCubeInts,
)
