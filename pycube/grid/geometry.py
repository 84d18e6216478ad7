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
Lattice geometry of a regularly spaced cube (njit compatible).

The linear encoding of a lattice point (i, j, k) in a grid of shape
(nx, ny, nz) is

    index = i * (ny * nz) + j * nz + k

i.e. x varies slowest and z fastest. This is NumPy C-order for an array of
shape (nx, ny, nz) and the data block order of Gaussian cube files, so
`data.reshape((nx, ny, nz))` addresses the same sample as the encoding.

Functions:
    encode_index: (i, j, k) -> linear index.
    decode_index: linear index -> (i, j, k).
    lattice_coordinates: continuous position -> continuous lattice coordinates.
    closest_index_vector: continuous position -> nearest, clamped (i, j, k).
    index_to_position: linear index -> continuous position.
    compute_spacing / compute_dimensions / compute_extent: the arithmetic
        behind the different ways of defining the lattice limits.
    as_vector3 / as_position / as_dimensions: argument normalization for the
        Python API.
"""

import numpy as np
from numba import njit

from pycube.constants import NUM_DIMENSIONS


@njit(nogil=True, cache=True)
def encode_index(grid_shape: np.ndarray, i: int, j: int, k: int) -> int:
    """Returns the linear index of lattice point (i, j, k); x slowest, z fastest."""
    return i * (grid_shape[1] * grid_shape[2]) + j * grid_shape[2] + k


@njit(nogil=True, cache=True)
def decode_index(grid_shape: np.ndarray, index: int):
    """Inverse of `encode_index`. Returns the tuple (i, j, k)."""
    plane = grid_shape[1] * grid_shape[2]
    i = index // plane
    remainder = index - i * plane
    j = remainder // grid_shape[2]
    k = remainder - j * grid_shape[2]
    return i, j, k


@njit(nogil=True, cache=True)
def lattice_coordinates(
    grid_shape: np.ndarray,
    origin: np.ndarray,
    spacing: np.ndarray,
    position: np.ndarray,
) -> np.ndarray:
    """
    Converts a continuous position into continuous (fractional) lattice coordinates.

    An axis holding a single point (or none) has no extent; every position maps
    to coordinate 0.0 along that axis.

    Args:
        grid_shape (np.ndarray): 1D array (nx, ny, nz).
        origin (np.ndarray): 1D array, position of lattice point (0, 0, 0).
        spacing (np.ndarray): 1D array of per-axis intervals.
        position (np.ndarray): 1D array (x, y, z).

    Returns:
        np.ndarray: 1D float64 array (cx, cy, cz).
    """
    coords = np.zeros(NUM_DIMENSIONS, dtype=np.float64)
    for axis in range(NUM_DIMENSIONS):
        if grid_shape[axis] > 1 and spacing[axis] > 0.0:
            coords[axis] = (position[axis] - origin[axis]) / spacing[axis]
    return coords


@njit(nogil=True, cache=True)
def closest_index_vector(
    grid_shape: np.ndarray,
    origin: np.ndarray,
    spacing: np.ndarray,
    position: np.ndarray,
) -> np.ndarray:
    """
    Returns the lattice point nearest to `position`.

    Each continuous lattice coordinate is rounded half up to an integer and
    clamped to [0, n - 1], so positions outside the box map to the nearest
    boundary point.

    Returns:
        np.ndarray: 1D int64 array (i, j, k).
    """
    coords = lattice_coordinates(grid_shape, origin, spacing, position)
    ijk = np.zeros(NUM_DIMENSIONS, dtype=np.int64)
    for axis in range(NUM_DIMENSIONS):
        last = grid_shape[axis] - 1
        # clamp while still a float; far, infinite or NaN coordinates do not fit int64
        nearest = np.floor(coords[axis] + 0.5)
        if nearest > last:
            nearest = float(last)
        elif not nearest >= 0.0:
            nearest = 0.0
        ijk[axis] = int(nearest)
    return ijk


@njit(nogil=True, cache=True)
def index_to_position(
    grid_shape: np.ndarray,
    origin: np.ndarray,
    spacing: np.ndarray,
    index: int,
) -> np.ndarray:
    """Returns origin + spacing * (i, j, k) for the decoded linear `index`."""
    i, j, k = decode_index(grid_shape, index)
    position = np.empty(NUM_DIMENSIONS, dtype=np.float64)
    position[0] = origin[0] + spacing[0] * i
    position[1] = origin[1] + spacing[1] * j
    position[2] = origin[2] + spacing[2] * k
    return position


def compute_spacing(origin, extent, dimensions):
    """Spacing of a lattice with `dimensions` points spanning [origin, extent].

    An axis with one point (or none) gets a spacing of 0.0.
    """
    intervals = np.maximum(dimensions - 1, 1).astype(np.float64)
    spacing = (extent - origin) / intervals
    spacing[dimensions <= 1] = 0.0
    return spacing


def compute_dimensions(origin, extent, spacing):
    """Number of points per axis needed to cover [origin, extent] at `spacing`."""
    # floor(x + 0.5) rounds half up like the closest-index lookup
    return (np.floor((extent - origin) / spacing + 0.5)).astype(np.int64) + 1


def compute_extent(origin, dimensions, spacing):
    """Position of the last lattice point: origin + spacing * (dimensions - 1)."""
    return origin + spacing * np.maximum(dimensions - 1, 0).astype(np.float64)


def as_vector3(value, name: str = "vector") -> np.ndarray:
    """
    Normalizes `value` to a float64 array of three components.

    A scalar is broadcast to all three axes, which lets isotropic spacings be
    given as a single number.

    Raises:
        ValueError: If `value` is neither a scalar nor has exactly three components.
    """
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim == 0:
        return np.full(NUM_DIMENSIONS, float(arr), dtype=np.float64)
    arr = arr.reshape(-1)
    if arr.size != NUM_DIMENSIONS:
        raise ValueError(
            f"{name} must have {NUM_DIMENSIONS} components, got {arr.size}: {value!r}"
        )
    return arr.copy()


def as_position(value, name: str = "position") -> np.ndarray:
    """
    Normalizes a query position like `as_vector3` and rejects NaN components.

    Infinite components are accepted; lookups clamp them onto the boundary.

    Raises:
        ValueError: If `value` does not have three components or holds NaN.
    """
    arr = as_vector3(value, name)
    if np.any(np.isnan(arr)):
        raise ValueError(f"{name} must not contain NaN, got {value!r}")
    return arr


def as_dimensions(value, name: str = "dimensions") -> np.ndarray:
    """
    Normalizes `value` to an int64 array of three point counts.

    The sign is not checked here; callers decide whether a negative count is a
    rejected geometry.

    Raises:
        ValueError: If `value` does not hold exactly three integral numbers.
    """
    arr = np.asarray(value)
    if arr.ndim != 1 or arr.size != NUM_DIMENSIONS:
        raise ValueError(
            f"{name} must have {NUM_DIMENSIONS} integer components, got {value!r}"
        )
    as_int = arr.astype(np.int64)
    if not np.array_equal(as_int, arr):
        raise ValueError(f"{name} must be integral, got {value!r}")
    return as_int
