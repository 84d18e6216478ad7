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
from enum import Enum


class BaseInfoEnum(Enum):
    """
    Enum whose members are declared as ``NAME = int_value, "info text"``.

    The integer is the member's value and stays stable across releases, so it
    can be stored next to cube data. The info text feeds `help()`.
    """

    def __new__(cls, int_value, info):
        member = object.__new__(cls)
        member._value_ = int_value
        member._info = info
        return member

    @property
    def info(self):
        return self._info

    @property
    def int_value(self):
        return self.value

    @classmethod
    def _public_members(cls):
        return [member for member in cls if not member.name.startswith("_")]

    @classmethod
    def list(cls):
        """Names of the public members, in declaration order."""
        return [member.name for member in cls._public_members()]

    @classmethod
    def help(cls):
        """One ``'<NAME>: <info>'`` line per public member."""
        return [f"{member.name}: {member.info}" for member in cls._public_members()]
