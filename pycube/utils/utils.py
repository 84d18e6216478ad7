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
Small formatting helpers shared by pyCube modules for log messages.
"""


def crd3d_to_str(crd3d):
    """Formats a position or spacing vector as "(x, y, z)"."""
    return f"({float(crd3d[0]):.6g}, {float(crd3d[1]):.6g}, {float(crd3d[2]):.6g})"


def shape3d_to_str(shape3d):
    """Formats a lattice shape (nx, ny, nz) as "nx x ny x nz"."""
    return f"{int(shape3d[0])} x {int(shape3d[1])} x {int(shape3d[2])}"
