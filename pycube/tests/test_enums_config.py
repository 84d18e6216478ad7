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

import pytest

import pycube.config.global_runtime as global_runtime
import pycube.config.logging_config as logging_config
from pycube.foundation.enums import CubeType, Precision, VerbosityLevel


def test_cube_type_members():
    assert CubeType.list() == ["VDW", "ESP", "ELECTRON_DENSITY", "MO", "FROM_FILE", "NONE"]
    assert CubeType.ESP.int_value == 2
    assert CubeType(4) is CubeType.MO
    assert CubeType.help()[0] == f"VDW: {CubeType.VDW.info}"


def test_verbosity_levels_are_ordered():
    values = [level.int_value for level in VerbosityLevel]
    assert values == sorted(values, reverse=True)
    assert logging_config.TRACE < logging_config.DEBUG < logging_config.WARNING
    assert logging_config.WARNING < logging_config.NOTICE < logging_config.ERROR


def test_global_verbosity_rejects_unknown_levels():
    with pytest.raises(ValueError):
        logging_config.set_global_verbosity_level(15)
    with pytest.raises(ValueError):
        logging_config.set_module_verbosity("pycube.grid.cube", "DEBUG")


def test_effective_verbosity_takes_most_restrictive_level():
    previous = logging_config.get_global_verbosity_level()
    try:
        global_runtime.set_verbosity_level(VerbosityLevel.DEBUG)
        assert logging_config.get_effective_verbosity("pycube.grid.cube") == logging_config.WARNING
        assert logging_config.get_effective_verbosity("some.other.module") == logging_config.DEBUG

        global_runtime.set_verbosity_level(VerbosityLevel.CRITICAL)
        assert (
            logging_config.get_effective_verbosity("pycube.grid.cube")
            == logging_config.CRITICAL
        )
        assert logging_config.get_global_verbosity_level() == logging_config.CRITICAL
    finally:
        logging_config.set_global_verbosity_level(previous)


def test_vprint_filters_by_level(capsys):
    global_runtime.vprint(logging_config.DEBUG, logging_config.WARNING, "hidden")
    global_runtime.vprint(logging_config.ERROR, logging_config.WARNING, "shown")
    assert capsys.readouterr().out == "shown\n"


def test_set_precision_validates_member():
    previous = global_runtime.get_precision()
    try:
        global_runtime.set_precision(Precision.SINGLE)
        assert global_runtime.PRECISION is Precision.SINGLE
        with pytest.raises(ValueError):
            global_runtime.set_precision(2)
        assert global_runtime.get_precision() is Precision.SINGLE
    finally:
        global_runtime.set_precision(previous)
