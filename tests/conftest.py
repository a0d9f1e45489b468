# SPDX-FileCopyrightText: 2026-present The dameng-dialect Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dameng-dialect
# FILE:           tests/conftest.py
# DESCRIPTION:    Shared pytest fixtures
# CREATED:        19.10.2026
#
# The contents of this file are subject to the MIT License
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Copyright (c) 2026 The dameng-dialect Authors
# All Rights Reserved.
#
# Contributor(s): ______________________________________

"""dameng-dialect - Shared pytest fixtures

Provides scripted in-memory DB-API connection that stands for a live DM server.
Canned results are registered per SQL fragment with `FakeConnection.on()`; every
executed statement and cursor is recorded for inspection.
"""

import pytest
from dameng.dialect.core import Uri
from dameng.dialect.dm import DamengDialect

class FakeCursor:
    """DB-API cursor returning rows registered on parent `FakeConnection`."""
    def __init__(self, connection):
        self.connection = connection
        self.closed = False
        self._rows = []
    def execute(self, operation, parameters=()):
        self.connection.executed.append((operation, tuple(parameters)))
        for fragment, result in self.connection.results:
            if fragment in operation:
                if isinstance(result, Exception):
                    raise result
                self._rows = list(result)
                break
        else:
            self._rows = []
        return self
    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows
    def close(self):
        self.closed = True

class FakeConnection:
    """DB-API connection that serves canned results keyed by SQL fragment."""
    def __init__(self):
        self.results = []
        self.executed = []
        self.cursors = []
    def on(self, fragment, result):
        """Registers rows (or exception to raise) for statements containing `fragment`."""
        self.results.append((fragment, result))
        return self
    def cursor(self):
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur
    def all_closed(self):
        return all(cur.closed for cur in self.cursors)

class FakeLob:
    """LOB handle with dmPython-like interface."""
    def __init__(self, text):
        self.text = text
        self.reads = []
    def size(self):
        return len(self.text)
    def read(self, offset, length):
        self.reads.append((offset, length))
        return self.text[offset - 1:offset - 1 + length]

@pytest.fixture
def db_connection():
    return FakeConnection()

@pytest.fixture
def dm_uri():
    return Uri(db_type='dm', proto='dm', host='localhost', port='5236', db_name='APP',
               user='SYSDBA', passwd='secret', schema='APP')

@pytest.fixture
def dialect(db_connection, dm_uri):
    with DamengDialect().bind(db_connection, dm_uri) as d:
        yield d

@pytest.fixture
def unbound_dialect():
    return DamengDialect()

@pytest.fixture
def make_lob():
    return FakeLob
