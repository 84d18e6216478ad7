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
The Cube: a regularly spaced 3D grid of scalar samples.

A cube is defined by its origin (the position of lattice point (0, 0, 0)),
its extent (the position of the last lattice point), its per-axis spacing and
its point counts (nx, ny, nz). Samples are stored in a flat float64 array in
the order x slowest, z fastest (see `pycube.grid.geometry`).

Geometry is (re)defined through one of the `set_limits*` methods. Each of them
either succeeds, replacing the geometry and reallocating a zero-filled sample
store, or returns False and leaves the cube untouched.

Extrema are widened by every `set_value*` call and never shrink through it,
even when the extreme sample is later overwritten; `set_data`, `add_data`,
`writable_data` and `recompute_extrema` rescan all samples.

No method acquires `Cube.lock` implicitly except `writable_data`. Threads
filling disjoint index ranges may write concurrently without it; overlapping
writers and snapshot readers must coordinate through it.
"""

from contextlib import contextmanager
import operator

import numpy as np

import pycube.config.global_runtime as global_runtime
from pycube.config.global_runtime import vprint
from pycube.config.logging_config import (
    DEBUG,
    INFO,
    WARNING,
    get_effective_verbosity,
)
from pycube.constants import NUM_DIMENSIONS
from pycube.foundation.enums import CubeType, Precision, SoluteExtremaRule
from pycube.foundation.rwlock import ReadWriteLock
from pycube.grid.bounds import molecule_bounding_box
from pycube.grid.extrema import accumulate_and_scan, scan_min_max
from pycube.grid.geometry import (
    as_dimensions,
    as_position,
    as_vector3,
    closest_index_vector,
    compute_dimensions,
    compute_extent,
    compute_spacing,
    encode_index,
    index_to_position,
)
from pycube.grid.interpolation import (
    get_trilinear_kernels,
    trilinear_double,
    trilinear_single,
)
from pycube.utils.utils import crd3d_to_str, shape3d_to_str

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)


class Cube:
    """
    Regularly spaced 3D scalar grid.

    Attributes:
        origin (np.ndarray[float64]): Position of lattice point (0, 0, 0).
        extent (np.ndarray[float64]): Position of the last lattice point.
        spacing (np.ndarray[float64]): Interval between lattice points per axis.
        dimensions (tuple[int, int, int]): Point counts (nx, ny, nz).
        data (np.ndarray[float64]): Flat, mutable view of the samples.
        min_value (float): Smallest value seen (monotone-widening).
        max_value (float): Largest value seen (monotone-widening).
        name (str): Free-form label.
        cube_type (CubeType): Kind of field held by the cube.
        lock (ReadWriteLock): Guard for external coordination of fills and reads.
    """

    def __init__(self, name: str = "", cube_type: CubeType = CubeType.NONE) -> None:
        self._origin = np.zeros(NUM_DIMENSIONS, dtype=np.float64)
        self._extent = np.zeros(NUM_DIMENSIONS, dtype=np.float64)
        self._spacing = np.zeros(NUM_DIMENSIONS, dtype=np.float64)
        self._dimensions = np.zeros(NUM_DIMENSIONS, dtype=np.int64)
        self._data = np.zeros(0, dtype=np.float64)
        self._min_value = 0.0
        self._max_value = 0.0
        self._lock = ReadWriteLock()
        self.name = name
        self.cube_type = cube_type

    def __repr__(self) -> str:
        return (
            f"Cube(name={self._name!r}, type={self._cube_type.name}, "
            f"shape={shape3d_to_str(self._dimensions)}, "
            f"origin={crd3d_to_str(self._origin)}, spacing={crd3d_to_str(self._spacing)})"
        )

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = str(value)

    @property
    def cube_type(self) -> CubeType:
        return self._cube_type

    @cube_type.setter
    def cube_type(self, value: CubeType) -> None:
        if not isinstance(value, CubeType):
            raise ValueError(
                f"cube_type must be a CubeType member ({', '.join(CubeType.list())}), got {value!r}"
            )
        self._cube_type = value

    @property
    def lock(self) -> ReadWriteLock:
        """The reader/writer lock of this cube. Never acquired implicitly."""
        return self._lock

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def origin(self) -> np.ndarray:
        return self._origin.copy()

    @property
    def extent(self) -> np.ndarray:
        return self._extent.copy()

    @property
    def spacing(self) -> np.ndarray:
        return self._spacing.copy()

    @property
    def dimensions(self) -> tuple:
        return tuple(int(n) for n in self._dimensions)

    @property
    def size(self) -> int:
        """Number of lattice points, nx * ny * nz."""
        return int(self._data.size)

    def is_empty(self) -> bool:
        return self._data.size == 0

    def _assign_geometry(self, origin, extent, spacing, dimensions) -> None:
        """Replaces the geometry and reallocates a zero-filled sample store."""
        self._origin = np.array(origin, dtype=np.float64)
        self._extent = np.array(extent, dtype=np.float64)
        self._spacing = np.array(spacing, dtype=np.float64)
        self._dimensions = np.array(dimensions, dtype=np.int64)
        self._data = np.zeros(int(np.prod(self._dimensions)), dtype=np.float64)
        self._min_value = 0.0
        self._max_value = 0.0
        vprint(
            INFO,
            _VERBOSITY,
            f"cube> '{self._name}' allocated {shape3d_to_str(self._dimensions)} points",
        )
        vprint(
            DEBUG,
            _VERBOSITY,
            f"cube> origin> {crd3d_to_str(self._origin)} extent> {crd3d_to_str(self._extent)}"
            f" spacing> {crd3d_to_str(self._spacing)}",
        )

    def _reject(self, operation: str, reason: str) -> bool:
        vprint(WARNING, _VERBOSITY, f"WARNING: cube> {operation} rejected: {reason}")
        return False

    def set_limits(self, origin, extent, dimensions) -> bool:
        """
        Defines the lattice by its corners and the number of points per axis.

        The spacing is (extent - origin) / (dimensions - 1) per axis; an axis
        with a single point (or none) gets spacing 0.0.

        Args:
            origin: Position of the first lattice point (x, y, z).
            extent: Position of the last lattice point (x, y, z).
            dimensions: Point counts (nx, ny, nz), each >= 0.

        Returns:
            bool: False, with the cube unchanged, if a count is negative or
                  extent < origin on any axis.
        """
        origin = as_vector3(origin, "origin")
        extent = as_vector3(extent, "extent")
        dimensions = as_dimensions(dimensions)

        if not (np.all(np.isfinite(origin)) and np.all(np.isfinite(extent))):
            return self._reject("set_limits", "origin and extent must be finite")
        if np.any(dimensions < 0):
            return self._reject("set_limits", f"negative dimensions {tuple(dimensions)}")
        if np.any(extent < origin):
            return self._reject(
                "set_limits",
                f"extent {crd3d_to_str(extent)} below origin {crd3d_to_str(origin)}",
            )

        spacing = compute_spacing(origin, extent, dimensions)
        self._assign_geometry(origin, extent, spacing, dimensions)
        return True

    def set_limits_by_spacing(self, origin, extent, spacing) -> bool:
        """
        Defines the lattice by its corners and the interval between points.

        The point count per axis is round((extent - origin) / spacing) + 1. The
        stored extent is then adjusted to origin + spacing * (dimensions - 1),
        the last point of that lattice, so it may differ from the argument.
        The given spacing is stored as is, also on an axis that ends up with a
        single point; `set_limits` would report spacing 0.0 for such an axis.

        Args:
            origin: Position of the first lattice point (x, y, z).
            extent: Requested position of the last lattice point (x, y, z).
            spacing: Positive interval, a scalar or one value per axis.

        Returns:
            bool: False, with the cube unchanged, if a spacing is not positive
                  or extent < origin on any axis.
        """
        origin = as_vector3(origin, "origin")
        extent = as_vector3(extent, "extent")
        spacing = as_vector3(spacing, "spacing")

        if not (np.all(np.isfinite(origin)) and np.all(np.isfinite(extent))):
            return self._reject("set_limits_by_spacing", "origin and extent must be finite")
        if not np.all(np.isfinite(spacing)) or np.any(spacing <= 0.0):
            return self._reject(
                "set_limits_by_spacing", f"non-positive spacing {crd3d_to_str(spacing)}"
            )
        if np.any(extent < origin):
            return self._reject(
                "set_limits_by_spacing",
                f"extent {crd3d_to_str(extent)} below origin {crd3d_to_str(origin)}",
            )

        dimensions = compute_dimensions(origin, extent, spacing)
        adjusted_extent = compute_extent(origin, dimensions, spacing)
        self._assign_geometry(origin, adjusted_extent, spacing, dimensions)
        return True

    def set_limits_by_shape(self, origin, dimensions, spacing) -> bool:
        """
        Defines the lattice by its origin, point counts and spacing.

        The extent becomes origin + spacing * (dimensions - 1).

        Returns:
            bool: False, with the cube unchanged, if a count is negative or a
                  spacing is not positive.
        """
        origin = as_vector3(origin, "origin")
        dimensions = as_dimensions(dimensions)
        spacing = as_vector3(spacing, "spacing")

        if not np.all(np.isfinite(origin)):
            return self._reject("set_limits_by_shape", "origin must be finite")
        if np.any(dimensions < 0):
            return self._reject(
                "set_limits_by_shape", f"negative dimensions {tuple(dimensions)}"
            )
        if not np.all(np.isfinite(spacing)) or np.any(spacing <= 0.0):
            return self._reject(
                "set_limits_by_shape", f"non-positive spacing {crd3d_to_str(spacing)}"
            )

        extent = compute_extent(origin, dimensions, spacing)
        self._assign_geometry(origin, extent, spacing, dimensions)
        return True

    def set_limits_like(self, other: "Cube") -> bool:
        """
        Copies the geometry of `other`. Samples are not copied; the store is
        reallocated zero-filled at the matching size.
        """
        if not isinstance(other, Cube):
            raise ValueError(f"Expected a Cube, got {type(other).__name__}")
        self._assign_geometry(
            other._origin, other._extent, other._spacing, other._dimensions
        )
        return True

    def set_limits_around_molecule(
        self,
        molecule,
        spacing,
        padding: float,
        extremas_rule: SoluteExtremaRule = SoluteExtremaRule.COORDLIMITS,
    ) -> bool:
        """
        Defines a lattice of the given spacing enclosing a molecule.

        The axis-aligned bounding box of the atoms (extended by the atom radii
        under COORDLIMITS) is padded by `padding` on every side and handed to
        `set_limits_by_spacing`.

        Args:
            molecule: (N, 3) coordinates, (N, 4) coordinates plus radius, or an
                object exposing `positions` and optionally `radii`.
            spacing: Positive interval, a scalar or one value per axis.
            padding (float): Margin added on every side of the box.
            extremas_rule (SoluteExtremaRule): Whether atom radii widen the box.

        Returns:
            bool: False, with the cube unchanged, for a molecule without atoms
                  or when the resulting box is rejected.
        """
        box = molecule_bounding_box(molecule, float(padding), extremas_rule)
        if box is None:
            return self._reject("set_limits_around_molecule", "molecule has no atoms")
        box_min, box_max = box
        return self.set_limits_by_spacing(box_min, box_max, spacing)

    # ------------------------------------------------------------------
    # Index <-> position
    # ------------------------------------------------------------------

    def _require_points(self, operation: str) -> None:
        if self._data.size == 0:
            raise IndexError(f"{operation}: cube has no lattice points")

    def closest_index(self, position) -> int:
        """Linear index of the lattice point nearest to `position` (clamped into the box)."""
        self._require_points("closest_index")
        ijk = closest_index_vector(
            self._dimensions, self._origin, self._spacing, as_position(position)
        )
        return int(encode_index(self._dimensions, ijk[0], ijk[1], ijk[2]))

    def index_vector(self, position) -> tuple:
        """(i, j, k) of the lattice point nearest to `position` (clamped into the box)."""
        self._require_points("index_vector")
        ijk = closest_index_vector(
            self._dimensions, self._origin, self._spacing, as_position(position)
        )
        return int(ijk[0]), int(ijk[1]), int(ijk[2])

    def position(self, index: int) -> np.ndarray:
        """Position of the lattice point with linear `index`."""
        index = operator.index(index)
        if not 0 <= index < self._data.size:
            raise IndexError(
                f"Linear index {index} out of range for {self._data.size} lattice points"
            )
        return index_to_position(self._dimensions, self._origin, self._spacing, index)

    # ------------------------------------------------------------------
    # Data store
    # ------------------------------------------------------------------

    @property
    def data(self) -> np.ndarray:
        """
        The flat sample array itself, not a copy.

        The cube keeps ownership; the view is invalidated by the next
        `set_limits*` call. Writes through it do not update the extrema; call
        `recompute_extrema` afterwards or use `writable_data`.
        """
        return self._data

    def as_array(self) -> np.ndarray:
        """The samples as an (nx, ny, nz) C-order view sharing the flat buffer."""
        return self._data.reshape(self.dimensions)

    @contextmanager
    def writable_data(self):
        """
        Scoped mutable view of the samples.

        Holds `lock` in exclusive mode while the block runs, so at most one
        such view is outstanding and no reader holding the lock in shared mode
        observes a partial fill. The extrema are rescanned on exit.
        """
        with self._lock.write_locked():
            try:
                yield self._data
            finally:
                self.recompute_extrema()

    @property
    def min_value(self) -> float:
        return self._min_value

    @property
    def max_value(self) -> float:
        return self._max_value

    def recompute_extrema(self):
        """Rescans all samples for the exact (min, max); may shrink the extrema."""
        min_value, max_value = scan_min_max(self._data)
        self._min_value = float(min_value)
        self._max_value = float(max_value)
        vprint(
            DEBUG,
            _VERBOSITY,
            f"cube> extrema> min: {self._min_value} max: {self._max_value}",
        )
        return self._min_value, self._max_value

    def _lattice_index(self, i, j, k) -> int:
        """Linear index of (i, j, k), or -1 when any component is out of range."""
        ijk = (operator.index(i), operator.index(j), operator.index(k))
        for axis in range(NUM_DIMENSIONS):
            if not 0 <= ijk[axis] < self._dimensions[axis]:
                return -1
        return int(encode_index(self._dimensions, ijk[0], ijk[1], ijk[2]))

    def value(self, i: int, j: int, k: int) -> float:
        """Sample at lattice point (i, j, k). Raises IndexError when out of range."""
        index = self._lattice_index(i, j, k)
        if index < 0:
            raise IndexError(
                f"Lattice point ({i}, {j}, {k}) out of range for shape {self.dimensions}"
            )
        return float(self._data[index])

    def value_at_index_vector(self, ijk) -> float:
        """Sample at the integer index vector (i, j, k)."""
        i, j, k = ijk
        return self.value(i, j, k)

    def value_at_index(self, index: int) -> float:
        """Sample at linear `index`. Raises IndexError when out of range."""
        index = operator.index(index)
        if not 0 <= index < self._data.size:
            raise IndexError(
                f"Linear index {index} out of range for {self._data.size} lattice points"
            )
        return float(self._data[index])

    def _store(self, index: int, value: float) -> bool:
        if not 0 <= index < self._data.size:
            return False
        value = float(value)
        self._data[index] = value
        if value > self._max_value:
            self._max_value = value
        if value < self._min_value:
            self._min_value = value
        return True

    def set_value(self, i: int, j: int, k: int, value: float) -> bool:
        """
        Writes the sample at (i, j, k) and widens the extrema.

        Returns False, without mutation, when (i, j, k) is out of range.
        """
        return self._store(self._lattice_index(i, j, k), value)

    def set_value_at_index(self, index: int, value: float) -> bool:
        """
        Writes the sample at linear `index` and widens the extrema.

        Returns False, without mutation, when `index` is out of range.
        """
        return self._store(operator.index(index), value)

    def _as_samples(self, values) -> np.ndarray:
        return np.ascontiguousarray(np.asarray(values, dtype=np.float64).reshape(-1))

    def set_data(self, values) -> bool:
        """
        Replaces all samples with `values` (flat, x slowest and z fastest, or
        an (nx, ny, nz) array) and rescans the extrema.

        Returns False, without mutation, when the number of values differs
        from the number of lattice points.
        """
        samples = self._as_samples(values)
        if samples.size != self._data.size:
            return self._reject(
                "set_data", f"got {samples.size} values for {self._data.size} lattice points"
            )
        self._data[:] = samples
        self.recompute_extrema()
        return True

    def add_data(self, values) -> bool:
        """
        Adds `values` to the samples elementwise and rescans the extrema.

        Returns False, without mutation, when the number of values differs
        from the number of lattice points.
        """
        samples = self._as_samples(values)
        if samples.size != self._data.size:
            return self._reject(
                "add_data", f"got {samples.size} values for {self._data.size} lattice points"
            )
        min_value, max_value = accumulate_and_scan(self._data, samples)
        self._min_value = float(min_value)
        self._max_value = float(max_value)
        return True

    # ------------------------------------------------------------------
    # Interpolation
    # ------------------------------------------------------------------

    def value_at(self, position) -> float:
        """
        Trilinearly interpolated value at a continuous `position` (double precision).

        Positions outside the box, infinite ones included, evaluate to the value
        on the nearest face. Raises IndexError for a cube without lattice points
        and ValueError for a position holding NaN.
        """
        status, value = trilinear_double(
            self._dimensions,
            self._data,
            self._origin,
            self._spacing,
            as_position(position),
        )
        if status != 0:
            raise IndexError("value_at: cube has no lattice points")
        return float(value)

    def value_at_single(self, position) -> np.float32:
        """Single precision counterpart of `value_at`."""
        status, value = trilinear_single(
            self._dimensions,
            self._data,
            self._origin,
            self._spacing,
            as_position(position),
        )
        if status != 0:
            raise IndexError("value_at_single: cube has no lattice points")
        return np.float32(value)

    def interpolate(self, position):
        """Interpolated value at `position` in the configured global precision."""
        if global_runtime.PRECISION == Precision.SINGLE:
            return self.value_at_single(position)
        return self.value_at(position)

    def values_at(self, positions, precision: Precision = None) -> np.ndarray:
        """
        Interpolated values at every row of an (M, 3) array of positions.

        Args:
            positions: Array-like of shape (M, 3) (a single (3,) position is
                accepted as M = 1).
            precision (Precision): Arithmetic width; defaults to the configured
                global precision.

        Returns:
            np.ndarray: Values of shape (M,), float64 or float32.
        """
        points = np.ascontiguousarray(np.asarray(positions, dtype=np.float64))
        if points.ndim == 1:
            points = points.reshape(1, -1)
        if points.ndim != 2 or points.shape[1] != NUM_DIMENSIONS:
            raise ValueError(f"positions must have shape (M, 3), got {points.shape}")
        if np.any(np.isnan(points)):
            raise ValueError("positions must not contain NaN")

        if precision is None:
            precision = global_runtime.PRECISION
        _, kernel_many = get_trilinear_kernels(precision)
        status, values = kernel_many(
            self._dimensions, self._data, self._origin, self._spacing, points
        )
        if status != 0:
            raise IndexError("values_at: cube has no lattice points")
        return values
