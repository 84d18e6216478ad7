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
Axis-aligned bounding boxes of molecules.

The molecule itself is an external collaborator. It may be given as

    - an array of shape (N, 3) holding atom coordinates,
    - an array of shape (N, 4) whose fourth column (MOLFIELD_RADIUS) holds the
      atom radius,
    - any object with a `positions` attribute of shape (N, 3) and, optionally,
      a `radii` attribute of shape (N,). Either attribute may also be a method
      returning the array.
"""

import numpy as np
from numba import njit

from pycube.config.global_runtime import vprint
from pycube.config.logging_config import DEBUG, get_effective_verbosity
from pycube.constants import (
    MOLFIELD_CRD_END,
    MOLFIELD_RADIUS,
    MOLFIELD_X,
    NUM_DIMENSIONS,
)
from pycube.foundation.enums import SoluteExtremaRule
from pycube.utils.utils import crd3d_to_str

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)


def _attribute_array(molecule, name):
    attr = getattr(molecule, name, None)
    if callable(attr):
        attr = attr()
    return attr


def molecule_to_array(molecule) -> np.ndarray:
    """
    Packs a molecule into a float64 array of shape (N, 4): x, y, z, radius.

    Atoms without a known radius get radius 0.0.

    Raises:
        ValueError: If the coordinates do not form an (N, 3) array, or the radii
                    do not match the number of atoms.
    """
    if isinstance(molecule, np.ndarray) or isinstance(molecule, (list, tuple)):
        arr = np.asarray(molecule, dtype=np.float64)
        if arr.size == 0:
            return np.zeros((0, MOLFIELD_CRD_END + 1), dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] not in (MOLFIELD_CRD_END, MOLFIELD_CRD_END + 1):
            raise ValueError(
                f"Molecule array must have shape (N, 3) or (N, 4), got {arr.shape}"
            )
        positions = arr[:, MOLFIELD_X : MOLFIELD_CRD_END]
        radii = arr[:, MOLFIELD_RADIUS] if arr.shape[1] > MOLFIELD_CRD_END else None
    else:
        positions = _attribute_array(molecule, "positions")
        if positions is None:
            raise ValueError(
                f"Molecule of type {type(molecule).__name__} exposes no 'positions'"
            )
        positions = np.asarray(positions, dtype=np.float64)
        if positions.size == 0:
            return np.zeros((0, MOLFIELD_CRD_END + 1), dtype=np.float64)
        radii = _attribute_array(molecule, "radii")

    positions = np.asarray(positions, dtype=np.float64)
    if positions.ndim != 2 or positions.shape[1] != NUM_DIMENSIONS:
        raise ValueError(f"Atom positions must have shape (N, 3), got {positions.shape}")

    mol_data = np.zeros((positions.shape[0], MOLFIELD_CRD_END + 1), dtype=np.float64)
    mol_data[:, MOLFIELD_X:MOLFIELD_CRD_END] = positions
    if radii is not None:
        radii = np.asarray(radii, dtype=np.float64).reshape(-1)
        if radii.size != positions.shape[0]:
            raise ValueError(
                f"Got {radii.size} atom radii for {positions.shape[0]} atoms"
            )
        mol_data[:, MOLFIELD_RADIUS] = radii
    return mol_data


@njit(nogil=True, cache=True)
def _njit_molecule_extrema_loop(mol_data, use_radius):
    """Numba-jitted loop returning (boundary_min, boundary_max) of the atoms."""
    boundary_min = np.zeros(NUM_DIMENSIONS, dtype=np.float64)
    boundary_max = np.zeros(NUM_DIMENSIONS, dtype=np.float64)

    for ia in range(mol_data.shape[0]):
        atom = mol_data[ia]
        radius = atom[MOLFIELD_RADIUS] if use_radius else 0.0
        if radius < 0.0:
            radius = 0.0
        for axis in range(NUM_DIMENSIONS):
            low = atom[MOLFIELD_X + axis] - radius
            high = atom[MOLFIELD_X + axis] + radius
            if ia == 0 or low < boundary_min[axis]:
                boundary_min[axis] = low
            if ia == 0 or high > boundary_max[axis]:
                boundary_max[axis] = high

    return boundary_min, boundary_max


def molecule_bounding_box(
    molecule,
    padding: float = 0.0,
    extremas_rule: SoluteExtremaRule = SoluteExtremaRule.COORDLIMITS,
):
    """
    Computes the padded axis-aligned bounding box of a molecule.

    Args:
        molecule: Atom coordinates (and optional radii); see module docstring.
        padding (float): Distance added on every side of the box.
        extremas_rule (SoluteExtremaRule): COORDINATE uses atom centers only,
            COORDLIMITS extends each atom by its radius.

    Returns:
        tuple[np.ndarray, np.ndarray] | None: (box_min, box_max), or None when
        the molecule has no atoms.
    """
    mol_data = molecule_to_array(molecule)
    if mol_data.shape[0] == 0:
        return None

    use_radius = extremas_rule.value == SoluteExtremaRule.COORDLIMITS.value
    boundary_min, boundary_max = _njit_molecule_extrema_loop(mol_data, use_radius)

    box_min = boundary_min - padding
    box_max = boundary_max + padding
    vprint(
        DEBUG,
        _VERBOSITY,
        f"bnd> atoms: {mol_data.shape[0]} rule: {extremas_rule.name}"
        f" min> {crd3d_to_str(box_min)} max> {crd3d_to_str(box_max)}",
    )
    return box_min, box_max
