# SPDX-FileCopyrightText: 2026-present The dameng-dialect Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dameng-dialect
# FILE:           dameng/dialect/lob.py
# DESCRIPTION:    Normalization of large text values fetched from DM
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

"""dameng.dialect.lob - Normalize nullable large text values.

Catalog columns like `DATA_DEFAULT` are large text columns. Depending on the
driver and server settings their values arrive as a LOB handle (for example
`dmPython.LOB`), as raw bytes, or as plain string. `ClobScanner` turns any of
them into a `(valid, data)` pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Self, runtime_checkable

from firebird.base.types import Error


@runtime_checkable
class LargeObject(Protocol):
    """Driver LOB handle with length and chunked read operations.
    """
    def size(self) -> int:
        """Returns LOB length in characters."""
    def read(self, offset: int, length: int) -> str:
        """Returns `length` characters starting at 1-based `offset`."""

@dataclass
class ClobScanner:
    """Scan target for nullable large text values.

    `valid` is False for SQL NULL. A zero-length LOB handle or empty byte string
    is valid with empty `data`, while an empty `str` is treated as NULL.
    """
    #: True if scanned value is not NULL
    valid: bool = False
    #: Text content
    data: str = ''
    @classmethod
    def from_value(cls, value: Any) -> Self:
        """Returns new scanner with `value` already scanned."""
        scanner = cls()
        scanner.scan(value)
        return scanner
    def scan(self, value: Any) -> None:
        """Normalizes `value` into `valid` and `data`.

        Arguments:
            value: `None`, a `LargeObject`, `bytes`-like object or `str`.

        Raises:
            Error: For values of any other type, or bytes that are not valid UTF-8.
        """
        if value is None:
            return
        if isinstance(value, bytes | bytearray | memoryview):
            try:
                self.data = bytes(value).decode('utf-8')
            except UnicodeDecodeError as exc:
                raise Error(f"cannot convert {type(value).__name__} as ClobScanner: {exc}",
                            type_name=type(value).__name__) from exc
            self.valid = True
        elif isinstance(value, str):
            if value:
                self.data = value
                self.valid = True
        elif isinstance(value, LargeObject):
            if (length := value.size()) > 0:
                self.data = value.read(1, length)
            self.valid = True
        else:
            raise Error(f"cannot convert {type(value).__name__} as ClobScanner",
                        type_name=type(value).__name__)
