#!/usr/bin/env python3
# -*- coding: utf-8 -*-

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
Process-wide runtime settings of pyCube.

- `PRECISION` selects the arithmetic width used by `Cube.interpolate` and by
  `Cube.values_at` when no precision is passed. Samples are stored in float64
  whatever the setting.
- `set_verbosity_level` forwards to `logging_config`.
- `vprint` and its Numba counterpart `nprint_cpu` print a message when its
  level reaches the caller's threshold.

Read `PRECISION` through the module (`global_runtime.PRECISION`) rather than
importing the name, so later `set_precision` calls are seen.
"""

from numba import njit

from pycube.foundation.enums import Precision, VerbosityLevel
import pycube.config.logging_config as logging_config
from pycube.config.logging_config import VerbosityLevelValue

PRECISION = Precision.DOUBLE


def set_precision(prec: Precision):
    """Selects single or double precision interpolation. Raises ValueError otherwise."""
    global PRECISION
    if not isinstance(prec, Precision):
        raise ValueError(f"Expected a Precision member ({', '.join(Precision.list())}), got {prec!r}")
    PRECISION = prec


def get_precision() -> Precision:
    return PRECISION


def set_verbosity_level(level: VerbosityLevel):
    """Sets the global verbosity threshold from a VerbosityLevel member."""
    logging_config.set_global_verbosity_level(level.int_value)
    vprint(
        logging_config.DEBUG,
        logging_config.get_effective_verbosity(__name__),
        f"runtime> verbosity: {level.name} ({level.int_value})",
    )


def print_if_verbose(
    message_level: VerbosityLevelValue,
    configured_verbosity_level: VerbosityLevelValue,
    *args,
):
    """Prints `args` when `message_level` >= `configured_verbosity_level`."""
    if message_level >= configured_verbosity_level:
        print(*args)


@njit(cache=True)
def nprint_cpu_if_verbose(
    message_level: VerbosityLevelValue,
    configured_verbosity_level: VerbosityLevelValue,
    *args,
):
    """`print_if_verbose` for use inside njit kernels."""
    if message_level >= configured_verbosity_level:
        print(*args)


vprint = print_if_verbose
nprint_cpu = nprint_cpu_if_verbose
