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
pyCube Trilinear Interpolation (njit compatible).

The kernels evaluate the scalar field stored in a cube at arbitrary continuous
positions. Given a position p the continuous lattice coordinates are
c = (p - origin) / spacing, the lower corner is floor(c) and the fractional
offsets t = c - floor(c). The 8 corner samples are blended along x, then y,
then z.

Edge policy:
    - Coordinates are clamped to [0, n - 1] per axis, so positions outside the
      box evaluate to the value on the nearest face, edge or corner.
    - An upper corner index past the last lattice point is clamped to the last
      lattice point (equivalently its fractional offset is 0).
    - Coordinates within LatticeSnapTolerance of an integer are snapped onto
      the node, so evaluating at a lattice node returns the stored sample.

Error handling uses an explicit integer return status:
    - 0: Indicates successful execution.
    - EXIT_NJIT_FLAG: The cube holds no lattice points. An error message is
      printed using nprint_cpu at ERROR level.

Every kernel exists in double and single precision. Samples are stored in
float64. Both variants locate the cell and snap onto nodes in float64, so the
node lookup does not depend on the precision. The single precision kernels
then convert the weights and each corner sample and blend in float32.

Functions:
    trilinear_double / trilinear_single: Value at one position.
    trilinear_many_double / trilinear_many_single: Values at an (M, 3) array
        of positions, evaluated in parallel with numba.prange.
    get_trilinear_kernels: Selects the kernel pair for a Precision.
"""

import math

import numpy as np
from numba import njit, prange

from pycube.config.global_runtime import nprint_cpu_if_verbose as nprint_cpu
from pycube.config.logging_config import (
    ERROR,
    get_effective_verbosity,
)
from pycube.constants import ConstCubeFloats, ConstCubeInts, NUM_DIMENSIONS
from pycube.foundation.enums import Precision
from pycube.grid.geometry import encode_index

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)

EXIT_NJIT_FLAG = ConstCubeInts.ExitNjitReturnValue.value
SNAP_TOLERANCE = ConstCubeFloats.LatticeSnapTolerance.value


def _build_trilinear_kernel(real):
    """Returns the single-position trilinear kernel operating in `real` precision."""

    @njit(nogil=True, boundscheck=False)
    def trilinear(
        grid_shape: np.ndarray,
        data: np.ndarray,
        origin: np.ndarray,
        spacing: np.ndarray,
        position: np.ndarray,
    ):
        """
        Performs trilinear interpolation of the flat cube `data` at `position`.

        Args:
            grid_shape (np.ndarray): 1D array (nx, ny, nz) of the lattice shape.
            data (np.ndarray): Flat float64 samples, x slowest and z fastest.
            origin (np.ndarray): 1D array, position of lattice point (0, 0, 0).
            spacing (np.ndarray): 1D array of per-axis intervals.
            position (np.ndarray): 1D array (x, y, z).

        Returns:
            tuple[int, real]: (status, interpolated_value). Status is 0 on
                              success, EXIT_NJIT_FLAG on an empty cube.
        """
        zero = real(0.0)
        one = real(1.0)

        if grid_shape[0] <= 0 or grid_shape[1] <= 0 or grid_shape[2] <= 0:
            nprint_cpu(
                ERROR,
                _VERBOSITY,
                "ERROR: Cannot interpolate in a cube without lattice points: GRID SHAPE: (",
                grid_shape[0],
                ", ",
                grid_shape[1],
                ", ",
                grid_shape[2],
                ")",
            )
            return EXIT_NJIT_FLAG, zero

        floor_index = np.zeros(NUM_DIMENSIONS, dtype=np.int64)
        ceiling_index = np.zeros(NUM_DIMENSIONS, dtype=np.int64)
        weights = np.zeros(NUM_DIMENSIONS, dtype=real)

        for axis in range(NUM_DIMENSIONS):
            last = grid_shape[axis] - 1
            if last == 0 or spacing[axis] <= 0.0:
                continue

            # lattice coordinates stay float64 in both precisions; only the
            # weights and the blend use `real`
            coord = (position[axis] - origin[axis]) / spacing[axis]
            if not coord >= 0.0:
                coord = 0.0
            elif coord > last:
                coord = float(last)

            nearest = math.floor(coord + 0.5)
            if abs(coord - nearest) < SNAP_TOLERANCE:
                coord = float(nearest)

            lower = int(math.floor(coord))
            if lower >= last:
                floor_index[axis] = last
                ceiling_index[axis] = last
            else:
                floor_index[axis] = lower
                ceiling_index[axis] = lower + 1
                weights[axis] = real(coord - lower)

        x0 = floor_index[0]
        y0 = floor_index[1]
        z0 = floor_index[2]
        x1 = ceiling_index[0]
        y1 = ceiling_index[1]
        z1 = ceiling_index[2]

        v000 = real(data[encode_index(grid_shape, x0, y0, z0)])
        v100 = real(data[encode_index(grid_shape, x1, y0, z0)])
        v010 = real(data[encode_index(grid_shape, x0, y1, z0)])
        v110 = real(data[encode_index(grid_shape, x1, y1, z0)])
        v001 = real(data[encode_index(grid_shape, x0, y0, z1)])
        v101 = real(data[encode_index(grid_shape, x1, y0, z1)])
        v011 = real(data[encode_index(grid_shape, x0, y1, z1)])
        v111 = real(data[encode_index(grid_shape, x1, y1, z1)])

        tx = weights[0]
        ty = weights[1]
        tz = weights[2]

        # along x: 8 -> 4
        v_y0_z0 = v000 * (one - tx) + v100 * tx
        v_y1_z0 = v010 * (one - tx) + v110 * tx
        v_y0_z1 = v001 * (one - tx) + v101 * tx
        v_y1_z1 = v011 * (one - tx) + v111 * tx

        # along y: 4 -> 2
        v_z0 = v_y0_z0 * (one - ty) + v_y1_z0 * ty
        v_z1 = v_y0_z1 * (one - ty) + v_y1_z1 * ty

        # along z: 2 -> 1
        interpolated_value = v_z0 * (one - tz) + v_z1 * tz

        return 0, interpolated_value

    return trilinear


def _build_trilinear_many_kernel(real, point_kernel):
    """Returns the parallel batch kernel calling `point_kernel` once per position."""

    @njit(nogil=True, parallel=True)
    def trilinear_many(
        grid_shape: np.ndarray,
        data: np.ndarray,
        origin: np.ndarray,
        spacing: np.ndarray,
        positions: np.ndarray,
    ):
        """
        Performs trilinear interpolation at every row of `positions`.

        Args:
            positions (np.ndarray): 2D array of shape (M, 3).

        Returns:
            tuple[int, np.ndarray]: (status, values) with `values` of shape (M,).
        """
        num_positions = positions.shape[0]
        values = np.zeros(num_positions, dtype=real)
        if grid_shape[0] <= 0 or grid_shape[1] <= 0 or grid_shape[2] <= 0:
            nprint_cpu(
                ERROR,
                _VERBOSITY,
                "ERROR: Cannot interpolate in a cube without lattice points.",
            )
            return EXIT_NJIT_FLAG, values

        for p in prange(num_positions):
            _, value = point_kernel(grid_shape, data, origin, spacing, positions[p])
            values[p] = value
        return 0, values

    return trilinear_many


trilinear_double = _build_trilinear_kernel(np.float64)
trilinear_single = _build_trilinear_kernel(np.float32)

trilinear_many_double = _build_trilinear_many_kernel(np.float64, trilinear_double)
trilinear_many_single = _build_trilinear_many_kernel(np.float32, trilinear_single)


def get_trilinear_kernels(precision: Precision):
    """
    Returns the (single-position, batch) kernel pair for `precision`.

    Raises:
        ValueError: If `precision` is not a Precision member.
    """
    if precision == Precision.DOUBLE:
        return trilinear_double, trilinear_many_double
    elif precision == Precision.SINGLE:
        return trilinear_single, trilinear_many_single
    raise ValueError(f"Invalid precision: {precision}")
