# SPDX-FileCopyrightText: 2026-present The dameng-dialect Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dameng-dialect
# FILE:           tests/test_core.py
# DESCRIPTION:    Tests for dameng.dialect.core module
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

"""dameng-dialect - Tests for dameng.dialect.core module
"""

import pytest
from firebird.base.types import Error
from dameng.dialect import core
from dameng.dialect.core import *
from dameng.dialect.dm import DamengDialect

# --- Test Functions ---

def test_01_TypeRegistry():
    """Tests type registry content and category predicates."""
    assert SQL_TYPES['VARCHAR'] is TypeCategory.TEXT
    assert SQL_TYPES[TypeName.TIMESTAMPZ] is TypeCategory.TIME
    assert 'NUMBER' in SQL_TYPES
    assert 'ST_GEOMETRY' not in SQL_TYPES
    with pytest.raises(TypeError):
        SQL_TYPES['ST_GEOMETRY'] = TypeCategory.BLOB
    assert SQLType(TypeName.VARCHAR).is_text()
    assert SQLType(TypeName.BLOB).is_blob()
    assert SQLType(TypeName.DATETIME).is_time()
    assert SQLType(TypeName.NUMERIC, 10, 2).is_numeric()
    assert SQLType(TypeName.BOOL).is_bool()
    assert SQLType(TypeName.ARRAY).is_array()
    assert SQLType(TypeName.JSONB).is_json()
    assert SQLType('ST_GEOMETRY').category is TypeCategory.UNKNOWN
    assert not SQLType('ST_GEOMETRY').is_text()

def test_02_Column():
    """Tests column default handling."""
    col = Column('name', SQLType(TypeName.VARCHAR), 64)
    assert col.default_is_empty
    assert col.nullable
    assert col.indexes == {}
    col.default = ''
    assert not col.default_is_empty
    col.default = "'x'"
    assert not col.default_is_empty

def test_03_Index():
    """Tests index naming convention."""
    idx = Index('by_name', cols=['NAME'])
    assert idx.kind is IndexKind.INDEX
    assert idx.is_regular
    assert idx.xname('orders') == 'IDX_orders_by_name'
    assert idx.xname('"APP"."orders"') == 'IDX_orders_by_name'
    uq = Index('code', IndexKind.UNIQUE)
    assert uq.xname('orders') == 'UQE_orders_code'
    assert Index('IDX_orders_x').xname('orders') == 'IDX_orders_x'
    idx.add_column('CODE', 'PRICE')
    assert idx.cols == ['NAME', 'CODE', 'PRICE']

def test_04_Table():
    """Tests table columns and primary keys."""
    tbl = Table('orders', [Column('id', SQLType(TypeName.INTEGER), nullable=False,
                                  is_primary_key=True),
                           Column('name', SQLType(TypeName.TEXT))])
    assert tbl.columns_seq() == ['id', 'name']
    assert tbl.primary_keys == ['id']
    assert tbl.get_column('name').sql_type.name == 'TEXT'
    assert tbl.get_column('missing') is None
    assert tbl.columns.get('id').is_primary_key
    assert len(tbl.columns) == 2
    tbl.primary_keys = ['id', 'name']
    assert tbl.primary_keys == ['id', 'name']
    assert tbl.get_column('name').is_primary_key
    with pytest.raises(ValueError, match="Primary key column"):
        tbl.primary_keys = ['id', 'code']
    assert tbl.primary_keys == ['id', 'name']
    tbl.add_index(Index('by_name', cols=['name']))
    assert list(tbl.indexes) == ['by_name']
    assert repr(tbl) == "Table('orders', columns=['id', 'name'], primary_keys=['id', 'name'])"

def test_05_Quoter():
    """Tests identifier list quoting."""
    assert Quoter().join(['a', 'b']) == '"a","b"'
    assert Quoter('[', ']').join(['a', 'b'], ', ') == '[a], [b]'
    quoter = Quoter(is_reserved=lambda name: name.upper() == 'ORDER')
    assert quoter.join(['order', 'id']) == '"order",id'
    assert always_reserved('anything')

def test_06_AddSingleQuote():
    assert add_single_quote('2024-01-01') == "'2024-01-01'"
    assert add_single_quote("'2024-01-01'") == "'2024-01-01'"
    assert add_single_quote('1') == '1'
    assert add_single_quote('') == ''

def test_07_ColumnString():
    """Tests shared column rendering."""
    d = DamengDialect()
    col = Column('id', SQLType(TypeName.BIGINT), nullable=False, is_primary_key=True)
    assert column_string(d, col, False) == '"id" BIGINT NOT NULL'
    assert column_string(d, col, True) == '"id" BIGINT PRIMARY KEY NOT NULL'
    col.is_autoincrement = True
    assert column_string(d, col, True) == '"id" BIGINT PRIMARY KEY IDENTITY NOT NULL'
    # Auto-increment is rendered only with inline primary key
    assert column_string(d, col, False) == '"id" BIGINT NOT NULL'
    col.is_primary_key = False
    assert column_string(d, col, True) == '"id" BIGINT NOT NULL'
    col = Column('name', SQLType(TypeName.VARCHAR), 64, default="'n/a'")
    assert column_string(d, col, True) == '"name" VARCHAR2(64) DEFAULT \'n/a\' NULL'
    col = Column('note', SQLType(TypeName.TEXT), default='')
    assert column_string(d, col, False) == '"note" TEXT NULL'

def test_08_IdFilter():
    """Tests (id) placeholder replacement."""
    d = DamengDialect()
    tbl = Table('orders', [Column('ORDER_ID', SQLType(TypeName.INTEGER), is_primary_key=True)])
    flt = IdFilter()
    assert flt.do('SELECT * FROM t WHERE (id) = ?', d, tbl) == 'SELECT * FROM t WHERE "ORDER_ID" = ?'
    assert flt.do('SELECT * FROM t WHERE "(id)" = ?', d, tbl) == 'SELECT * FROM t WHERE "ORDER_ID" = ?'
    assert flt.do('SELECT * FROM t WHERE `(id)` = ?', d, tbl) == 'SELECT * FROM t WHERE "ORDER_ID" = ?'
    assert flt.do('SELECT * FROM t WHERE (id) = ?', d, None) == 'SELECT * FROM t WHERE (id) = ?'
    tbl.add_column(Column('LINE', SQLType(TypeName.INTEGER), is_primary_key=True))
    assert flt.do('SELECT * FROM t WHERE (id) = ?', d, tbl) == 'SELECT * FROM t WHERE (id) = ?'
    assert isinstance(d.filters()[0], IdFilter)

def test_09_Registry(db_connection):
    """Tests dialect and driver registry."""
    assert isinstance(query_dialect('dm'), DamengDialect)
    assert isinstance(query_dialect('DM'), DamengDialect)
    assert query_dialect('nosuchdb') is None
    assert query_driver('dm') is not None
    assert query_driver('nosuchdriver') is None
    d = open_dialect('dm', 'dm://SYSDBA:secret@localhost:5236?schema=APP', db_connection)
    assert isinstance(d, DamengDialect)
    assert not d.closed
    assert d.schema == 'APP'
    assert d.driver_name == 'dm'
    assert d.data_source_name == 'dm://SYSDBA:secret@localhost:5236?schema=APP'
    with pytest.raises(Error, match="Unsupported driver name 'nosuchdriver'"):
        open_dialect('nosuchdriver', 'dm://SYSDBA:secret@localhost', db_connection)

def test_10_BindClose(db_connection, dm_uri):
    """Tests binding and closing a dialect."""
    d = DamengDialect()
    assert d.closed
    assert d.schema == ''
    with pytest.raises(Error, match="Dialect is not bound to connection."):
        d.get_tables()
    with d.bind(db_connection, dm_uri):
        assert not d.closed
        assert d.uri is dm_uri
        assert d.schema == 'APP'
    assert d.closed

def test_11_BaseDialect():
    """Tests base dialect defaults."""
    d = core.Dialect()
    assert d.quote('x') == '"x"'
    assert d.filters() == []
    with pytest.raises(NotImplementedError):
        d.sql_type(Column('x', SQLType(TypeName.INTEGER)))
    with pytest.raises(NotImplementedError):
        Filter().do('', d, None)
