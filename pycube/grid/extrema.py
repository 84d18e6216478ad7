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
Extrema bookkeeping for cube samples (njit compatible).

Functions:
    scan_min_max: Single pass minimum and maximum of a flat sample array.
    accumulate_and_scan: In-place elementwise addition followed by a scan.
"""

import numpy as np
from numba import njit


@njit(nogil=True, cache=True)
def scan_min_max(data: np.ndarray):
    """
    Returns the (minimum, maximum) of `data` in one pass.

    An empty array yields (0.0, 0.0), the neutral baseline of a freshly
    allocated cube.
    """
    if data.size == 0:
        return 0.0, 0.0
    min_value = data[0]
    max_value = data[0]
    for n in range(1, data.size):
        v = data[n]
        if v < min_value:
            min_value = v
        elif v > max_value:
            max_value = v
    return min_value, max_value


@njit(nogil=True, cache=True)
def accumulate_and_scan(data: np.ndarray, values: np.ndarray):
    """
    Adds `values` to `data` elementwise in place and returns the new (min, max).

    Both arrays must be flat and of equal size; the caller checks the sizes.
    """
    for n in range(data.size):
        data[n] += values[n]
    return scan_min_max(data)
