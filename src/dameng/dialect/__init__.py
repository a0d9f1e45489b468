# SPDX-FileCopyrightText: 2026-present The dameng-dialect Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dameng-dialect
# FILE:           dameng/dialect/__init__.py
# DESCRIPTION:    Dameng dialect package
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

"""dameng-dialect - Dameng (DM) database dialect for ORM schema management.

Modules:

* `dameng.dialect.core` - database-agnostic schema model and dialect base class.
* `dameng.dialect.dm` - the DM dialect and data source parser.
* `dameng.dialect.lob` - normalization of large text values.
"""

__version__ = "1.0.0"
