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
Reader/writer lock associated with each Cube.

The lock grants either any number of simultaneous readers or a single
exclusive writer, never both. Waiting writers block new readers so that a
steady stream of readers cannot starve a bulk-filling phase. Acquisition
blocks the calling thread until the lock is available; there is no timeout
and no cancellation. The lock is not reentrant.

Typical use by orchestration code:

    with cube.lock.write_locked():
        ...  # fill the samples
    with cube.lock.read_locked():
        ...  # extract an isosurface from a stable snapshot
"""

import threading
from contextlib import contextmanager

from pycube.config.global_runtime import vprint
from pycube.config.logging_config import TRACE, get_effective_verbosity

_MODULE_NAME = __name__
_VERBOSITY = get_effective_verbosity(_MODULE_NAME)


class ReadWriteLock:
    """Shared/exclusive lock built on a single condition variable."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """Number of threads currently holding the lock in shared mode."""
        with self._cond:
            return self._readers

    @property
    def write_held(self) -> bool:
        """True while a writer holds the lock."""
        with self._cond:
            return self._writer

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting > 0:
                self._cond.wait()
            self._readers += 1
        vprint(TRACE, _VERBOSITY, "rwlock> read acquired")

    def release_read(self):
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()
        vprint(TRACE, _VERBOSITY, "rwlock> read released")

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers > 0:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        vprint(TRACE, _VERBOSITY, "rwlock> write acquired")

    def release_write(self):
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writer = False
            self._cond.notify_all()
        vprint(TRACE, _VERBOSITY, "rwlock> write released")

    @contextmanager
    def read_locked(self):
        """Holds the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield self
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        """Holds the lock in exclusive mode for the duration of the block."""
        self.acquire_write()
        try:
            yield self
        finally:
            self.release_write()
