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

import numpy as np
import pytest

from pycube.foundation.enums import Precision, VerbosityLevel
from pycube.config.global_runtime import set_precision, set_verbosity_level

set_precision(Precision.DOUBLE)
set_verbosity_level(VerbosityLevel.ERROR)

from pycube.grid.cube import Cube
from pycube.grid.geometry import decode_index, encode_index


def _assert_geometry(cube, origin, extent, spacing, dimensions):
    np.testing.assert_allclose(cube.origin, origin)
    np.testing.assert_allclose(cube.extent, extent)
    np.testing.assert_allclose(cube.spacing, spacing)
    assert cube.dimensions == dimensions


def test_new_cube_is_empty():
    cube = Cube()
    assert cube.dimensions == (0, 0, 0)
    assert cube.size == 0
    assert cube.is_empty()
    assert cube.data.size == 0
    assert cube.min_value == 0.0
    assert cube.max_value == 0.0


def test_set_limits_unit_cube_allocates_eight_points():
    cube = Cube()
    assert cube.set_limits((0, 0, 0), (1, 1, 1), (2, 2, 2))
    _assert_geometry(cube, (0, 0, 0), (1, 1, 1), (1, 1, 1), (2, 2, 2))
    assert cube.data.size == 8
    assert np.all(cube.data == 0.0)


def test_set_limits_anisotropic_spacing():
    cube = Cube()
    assert cube.set_limits((-1.0, 0.0, 2.0), (1.0, 3.0, 2.5), (5, 4, 6))
    _assert_geometry(cube, (-1, 0, 2), (1, 3, 2.5), (0.5, 1.0, 0.1), (5, 4, 6))
    assert cube.size == 5 * 4 * 6


def test_set_limits_single_point_axis_has_zero_spacing():
    cube = Cube()
    assert cube.set_limits((0, 0, 0), (2, 0, 4), (3, 1, 5))
    np.testing.assert_allclose(cube.spacing, (1.0, 0.0, 1.0))
    assert cube.size == 15


def test_set_limits_rejects_negative_dimensions_on_fresh_cube():
    cube = Cube()
    assert not cube.set_limits((0, 0, 0), (1, 1, 1), (-1, 2, 2))
    assert cube.dimensions == (0, 0, 0)
    assert cube.size == 0


def test_set_limits_failure_leaves_previous_geometry():
    cube = Cube()
    assert cube.set_limits((0, 0, 0), (1, 1, 1), (2, 2, 2))
    cube.set_value(1, 1, 1, 3.0)

    assert not cube.set_limits((0, 0, 0), (1, 1, 1), (-1, 2, 2))
    assert not cube.set_limits((0, 0, 0), (1, -1, 1), (2, 2, 2))

    _assert_geometry(cube, (0, 0, 0), (1, 1, 1), (1, 1, 1), (2, 2, 2))
    assert cube.value(1, 1, 1) == 3.0
    assert cube.max_value == 3.0


def test_set_limits_allows_zero_points():
    cube = Cube()
    assert cube.set_limits((0, 0, 0), (1, 1, 1), (0, 3, 3))
    assert cube.size == 0


def test_set_limits_rejects_malformed_arguments():
    cube = Cube()
    with pytest.raises(ValueError):
        cube.set_limits((0, 0), (1, 1, 1), (2, 2, 2))
    with pytest.raises(ValueError):
        cube.set_limits((0, 0, 0), (1, 1, 1), (2.5, 2, 2))


def test_set_limits_by_spacing_adjusts_extent():
    cube = Cube()
    assert cube.set_limits_by_spacing((0, 0, 0), (1.04, 2.0, 0.5), 0.25)
    # 1.04 / 0.25 = 4.16 -> 4 intervals -> 5 points, extent snapped to 1.0
    _assert_geometry(cube, (0, 0, 0), (1.0, 2.0, 0.5), (0.25, 0.25, 0.25), (5, 9, 3))


def test_set_limits_by_spacing_rounds_to_nearest_point_count():
    cube = Cube()
    assert cube.set_limits_by_spacing((0, 0, 0), (0.9, 0.9, 0.9), (0.5, 0.3, 1.0))
    assert cube.dimensions == (3, 4, 2)
    np.testing.assert_allclose(cube.extent, (1.0, 0.9, 1.0))


def test_set_limits_by_spacing_rejects_non_positive_spacing():
    cube = Cube()
    assert not cube.set_limits_by_spacing((0, 0, 0), (1, 1, 1), 0.0)
    assert not cube.set_limits_by_spacing((0, 0, 0), (1, 1, 1), (0.5, -0.5, 0.5))
    assert not cube.set_limits_by_spacing((0, 0, 0), (-1, 1, 1), 0.5)
    assert cube.dimensions == (0, 0, 0)


def test_set_limits_by_shape_computes_extent():
    cube = Cube()
    assert cube.set_limits_by_shape((1.0, 2.0, 3.0), (3, 4, 5), 0.5)
    _assert_geometry(cube, (1, 2, 3), (2.0, 3.5, 5.0), (0.5, 0.5, 0.5), (3, 4, 5))
    assert cube.size == 60


def test_set_limits_by_shape_rejects_invalid_input():
    cube = Cube()
    assert not cube.set_limits_by_shape((0, 0, 0), (3, -4, 5), 0.5)
    assert not cube.set_limits_by_shape((0, 0, 0), (3, 4, 5), -0.5)
    assert cube.dimensions == (0, 0, 0)


def test_set_limits_like_copies_geometry_not_values():
    source = Cube()
    source.set_limits_by_shape((0.5, 0.5, 0.5), (2, 3, 4), (0.1, 0.2, 0.3))
    source.set_data(np.arange(source.size, dtype=np.float64))

    cube = Cube()
    assert cube.set_limits_like(source)
    _assert_geometry(cube, source.origin, source.extent, source.spacing, source.dimensions)
    assert cube.size == source.size
    assert np.all(cube.data == 0.0)
    assert cube.max_value == 0.0


def test_geometry_change_resets_samples_and_extrema():
    cube = Cube()
    cube.set_limits_by_shape((0, 0, 0), (2, 2, 2), 1.0)
    cube.set_value(0, 0, 0, -4.0)
    cube.set_value(1, 1, 1, 9.0)

    assert cube.set_limits_by_shape((0, 0, 0), (3, 3, 3), 1.0)
    assert cube.size == 27
    assert np.all(cube.data == 0.0)
    assert (cube.min_value, cube.max_value) == (0.0, 0.0)


def test_linear_encoding_is_x_slowest_z_fastest():
    shape = np.array([3, 4, 5], dtype=np.int64)
    assert encode_index(shape, 0, 0, 1) == 1
    assert encode_index(shape, 0, 1, 0) == 5
    assert encode_index(shape, 1, 0, 0) == 20
    assert encode_index(shape, 2, 3, 4) == 59
    assert decode_index(shape, 59) == (2, 3, 4)


def test_linear_encoding_matches_c_order_reshape():
    cube = Cube()
    cube.set_limits_by_shape((0, 0, 0), (3, 4, 5), 1.0)
    cube.set_data(np.arange(cube.size, dtype=np.float64))
    grid = cube.as_array()
    assert grid.shape == (3, 4, 5)
    for i, j, k in [(0, 0, 0), (1, 2, 3), (2, 3, 4), (2, 0, 1)]:
        assert grid[i, j, k] == cube.value(i, j, k)
        assert cube.value(i, j, k) == i * 20 + j * 5 + k


def test_index_position_round_trip():
    cube = Cube()
    cube.set_limits_by_shape((-1.3, 0.7, 2.1), (4, 5, 6), (0.3, 0.17, 0.45))
    shape = np.array(cube.dimensions, dtype=np.int64)
    for i in range(4):
        for j in range(5):
            for k in range(6):
                index = encode_index(shape, i, j, k)
                position = cube.position(index)
                assert cube.index_vector(position) == (i, j, k)
                assert cube.closest_index(position) == index


def test_position_of_lattice_point():
    cube = Cube()
    cube.set_limits_by_shape((1.0, -2.0, 0.0), (3, 3, 3), 0.5)
    np.testing.assert_allclose(cube.position(0), (1.0, -2.0, 0.0))
    np.testing.assert_allclose(cube.position(cube.size - 1), (2.0, -1.0, 1.0))
    np.testing.assert_allclose(cube.position(9 + 3 + 1), (1.5, -1.5, 0.5))


def test_position_rejects_out_of_range_index():
    cube = Cube()
    cube.set_limits_by_shape((0, 0, 0), (2, 2, 2), 1.0)
    with pytest.raises(IndexError):
        cube.position(8)
    with pytest.raises(IndexError):
        cube.position(-1)


def test_closest_index_rounds_and_clamps():
    cube = Cube()
    cube.set_limits_by_shape((0, 0, 0), (4, 4, 4), 1.0)
    assert cube.index_vector((1.4, 1.6, 2.5)) == (1, 2, 3)
    assert cube.index_vector((-7.0, 1.0, 100.0)) == (0, 1, 3)
    assert cube.closest_index((3.2, 0.1, 0.0)) == 3 * 16


def test_closest_index_on_empty_cube_raises():
    with pytest.raises(IndexError):
        Cube().closest_index((0.0, 0.0, 0.0))


@pytest.mark.parametrize("far", [1.0e30, np.inf])
def test_closest_index_clamps_far_and_infinite_positions(far):
    cube = Cube()
    cube.set_limits_by_shape((0, 0, 0), (4, 4, 4), 1.0)
    assert cube.index_vector((far, 0.0, 0.0)) == (3, 0, 0)
    assert cube.index_vector((-far, 2.0, far)) == (0, 2, 3)
    assert cube.closest_index((far, far, far)) == cube.size - 1


def test_closest_index_rejects_nan_position():
    cube = Cube()
    cube.set_limits_by_shape((0, 0, 0), (4, 4, 4), 1.0)
    with pytest.raises(ValueError):
        cube.index_vector((np.nan, 0.0, 0.0))
    with pytest.raises(ValueError):
        cube.closest_index((0.0, 1.0, np.nan))


def test_set_limits_by_spacing_keeps_spacing_on_single_point_axis():
    cube = Cube()
    assert cube.set_limits_by_spacing((0, 0, 0), (1.0, 0.0, 1.0), 0.5)
    assert cube.dimensions == (3, 1, 3)
    np.testing.assert_allclose(cube.spacing, (0.5, 0.5, 0.5))
    np.testing.assert_allclose(cube.extent, (1.0, 0.0, 1.0))
