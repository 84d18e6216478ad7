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
Enumeration classes used across pyCube.

    - Calculation precision (Precision)
    - Verbosity levels (VerbosityLevel)
    - Kind of scalar field stored in a cube (CubeType)
    - Molecule bounding-box rules (SoluteExtremaRule)

This module is intentionally kept lightweight and has no dependencies beyond
the enum base class.
"""

from pycube.foundation.enumbase import BaseInfoEnum


class Precision(BaseInfoEnum):
    """Enumerates supported floating point precisions for interpolation kernels."""

    SINGLE = 1, "Interpolate in float32."
    DOUBLE = 2, "Interpolate in float64."


class VerbosityLevel(BaseInfoEnum):
    """Enumerates all supported verbosity levels for logging in pyCube."""

    CRITICAL = (
        50,
        "Log only critical failures (e.g., unrecoverable errors).",
    )
    ERROR = (
        40,
        "Log errors preventing an operation from completing (e.g., invalid input).",
    )
    NOTICE = (
        35,
        "Log final results, excluding warnings and progress details.",
    )
    WARNING = (
        30,
        "Log warnings for rejected operations (e.g., invalid geometry, shape mismatch).",
    )
    INFO = (
        20,
        "Log general progress such as grid (re)allocation.",
    )
    DEBUG = (
        10,
        "Enable all general debug messages, including geometry details and extrema scans.",
    )
    TRACE = (
        5,
        "Enable extremely fine-grained tracing, usually for deep debugging.",
    )


class CubeType(BaseInfoEnum):
    """Enumerates the kinds of scalar field a cube may hold.

    The tag carries no behavior of its own; it is consumed by writers and
    renderers that need to know what the samples mean.
    """

    VDW = 1, "Van der Waals surface field."
    ESP = 2, "Electrostatic potential."
    ELECTRON_DENSITY = 3, "Electron density."
    MO = 4, "Molecular orbital."
    FROM_FILE = 5, "Field read from a volumetric data file."
    NONE = 6, "Unspecified field."


class SoluteExtremaRule(BaseInfoEnum):
    """Enumerates methods to determine molecule box bounds from atoms."""

    COORDINATE = 1, "Box spans the atom centres only."
    COORDLIMITS = 2, "Extend min/max coordinates by each atom's radius."
