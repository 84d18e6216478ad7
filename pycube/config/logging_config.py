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
Verbosity thresholds for pyCube messages.

A message is emitted when its level is at least the threshold in effect for
the module printing it. That threshold is the larger of the global level and
the level registered for the module in `_MODULE_VERBOSITY_SETTINGS`, so a
module entry can silence a chatty module but never make it louder than the
global setting.

Modules read their threshold once at import:

    _VERBOSITY = get_effective_verbosity(__name__)
"""

from typing import TypeAlias

from pycube.foundation.enums import VerbosityLevel as _VL

# An int_value of a VerbosityLevel member.
VerbosityLevelValue: TypeAlias = int

CRITICAL = _VL.CRITICAL.int_value
ERROR = _VL.ERROR.int_value
NOTICE = _VL.NOTICE.int_value
WARNING = _VL.WARNING.int_value
INFO = _VL.INFO.int_value
DEBUG = _VL.DEBUG.int_value
TRACE = _VL.TRACE.int_value

_KNOWN_LEVELS = frozenset(member.int_value for member in _VL)

# Per-module thresholds, keyed by the module's __name__.
_MODULE_VERBOSITY_SETTINGS = {
    "pycube.config.global_runtime": NOTICE,
    "pycube.foundation.rwlock": NOTICE,
    "pycube.grid.bounds": NOTICE,
    "pycube.grid.cube": WARNING,
    "pycube.grid.interpolation": NOTICE,
}

_GLOBAL_VERBOSITY_LEVEL = INFO


def _check_level(level_value, target: str) -> None:
    if isinstance(level_value, bool) or not isinstance(level_value, int):
        raise ValueError(f"{target}: verbosity must be an int, got {level_value!r}")
    if level_value not in _KNOWN_LEVELS:
        raise ValueError(
            f"{target}: unknown verbosity {level_value}, expected one of {sorted(_KNOWN_LEVELS)}"
        )


def set_global_verbosity_level(level_value: VerbosityLevelValue):
    """Sets the global threshold. Raises ValueError for an unknown level."""
    global _GLOBAL_VERBOSITY_LEVEL
    _check_level(level_value, "global")
    _GLOBAL_VERBOSITY_LEVEL = level_value


def get_global_verbosity_level() -> VerbosityLevelValue:
    return _GLOBAL_VERBOSITY_LEVEL


def set_module_verbosity(module_name: str, level_value: VerbosityLevelValue):
    """
    Registers a threshold for `module_name`.

    Modules read their threshold at import, so this has to run before the
    module is first imported to take effect.
    """
    _check_level(level_value, module_name)
    _MODULE_VERBOSITY_SETTINGS[module_name] = level_value


def get_module_verbosity(module_name: str) -> VerbosityLevelValue:
    """Threshold registered for `module_name`, or the global one when none is."""
    return _MODULE_VERBOSITY_SETTINGS.get(module_name, _GLOBAL_VERBOSITY_LEVEL)


def get_effective_verbosity(module_name: str) -> VerbosityLevelValue:
    """Threshold in effect for `module_name`: the stricter of global and module level."""
    return max(get_global_verbosity_level(), get_module_verbosity(module_name))
