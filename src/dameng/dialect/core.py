# SPDX-FileCopyrightText: 2026-present The dameng-dialect Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dameng-dialect
# FILE:           dameng/dialect/core.py
# DESCRIPTION:    Generic ORM schema model used by database dialects
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

"""dameng.dialect.core - Database-agnostic schema model shared by dialects.

This module holds the abstract side of the dialect contract: the column type
vocabulary (`TypeName`) and its global registry (`SQL_TYPES`), descriptors for
columns, tables and indexes, the immutable connection descriptor (`Uri`), the
shared column-rendering routine (`column_string`) and the `Dialect` base class
that vendor dialects extend.

Dialect and driver classes are looked up by name through `register_dialect` /
`query_dialect` and `register_driver` / `query_driver`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from types import MappingProxyType
from typing import Any, ClassVar, Self

from firebird.base.collections import DataList
from firebird.base.logging import get_logger
from firebird.base.types import Error


class TypeName(StrEnum):
    """Abstract column type names understood by all dialects.
    """
    BIT = 'BIT'
    UNSIGNED_BIT = 'UNSIGNED BIT'
    TINYINT = 'TINYINT'
    UNSIGNED_TINYINT = 'UNSIGNED TINYINT'
    SMALLINT = 'SMALLINT'
    MEDIUMINT = 'MEDIUMINT'
    INT = 'INT'
    UNSIGNED_INT = 'UNSIGNED INT'
    INTEGER = 'INTEGER'
    BIGINT = 'BIGINT'
    UNSIGNED_BIGINT = 'UNSIGNED BIGINT'
    ENUM = 'ENUM'
    SET = 'SET'
    CHAR = 'CHAR'
    VARCHAR = 'VARCHAR'
    NCHAR = 'NCHAR'
    NVARCHAR = 'NVARCHAR'
    TINYTEXT = 'TINYTEXT'
    TEXT = 'TEXT'
    NTEXT = 'NTEXT'
    CLOB = 'CLOB'
    MEDIUMTEXT = 'MEDIUMTEXT'
    LONGTEXT = 'LONGTEXT'
    UUID = 'UUID'
    UNIQUEIDENTIFIER = 'UNIQUEIDENTIFIER'
    SYSNAME = 'SYSNAME'
    DATE = 'DATE'
    DATETIME = 'DATETIME'
    SMALLDATETIME = 'SMALLDATETIME'
    TIME = 'TIME'
    TIMESTAMP = 'TIMESTAMP'
    TIMESTAMPZ = 'TIMESTAMPZ'
    YEAR = 'YEAR'
    DECIMAL = 'DECIMAL'
    NUMERIC = 'NUMERIC'
    NUMBER = 'NUMBER'
    MONEY = 'MONEY'
    SMALLMONEY = 'SMALLMONEY'
    REAL = 'REAL'
    FLOAT = 'FLOAT'
    DOUBLE = 'DOUBLE'
    BINARY = 'BINARY'
    VARBINARY = 'VARBINARY'
    TINYBLOB = 'TINYBLOB'
    BLOB = 'BLOB'
    MEDIUMBLOB = 'MEDIUMBLOB'
    LONGBLOB = 'LONGBLOB'
    BYTEA = 'BYTEA'
    BOOL = 'BOOL'
    BOOLEAN = 'BOOLEAN'
    SERIAL = 'SERIAL'
    BIGSERIAL = 'BIGSERIAL'
    JSON = 'JSON'
    JSONB = 'JSONB'
    XML = 'XML'
    ARRAY = 'ARRAY'

class TypeCategory(IntEnum):
    """Broad classes of column types.
    """
    UNKNOWN = 0
    TEXT = 1
    BLOB = 2
    TIME = 3
    NUMERIC = 4
    ARRAY = 5
    BOOL = 6

class IndexKind(IntEnum):
    """Index kind codes.
    """
    INDEX = 1
    UNIQUE = 2

#: Global type registry. Names missing from it are rejected by schema introspection.
SQL_TYPES: MappingProxyType[str, TypeCategory] = MappingProxyType({
    TypeName.BIT: TypeCategory.NUMERIC,
    TypeName.UNSIGNED_BIT: TypeCategory.NUMERIC,
    TypeName.TINYINT: TypeCategory.NUMERIC,
    TypeName.UNSIGNED_TINYINT: TypeCategory.NUMERIC,
    TypeName.SMALLINT: TypeCategory.NUMERIC,
    TypeName.MEDIUMINT: TypeCategory.NUMERIC,
    TypeName.INT: TypeCategory.NUMERIC,
    TypeName.UNSIGNED_INT: TypeCategory.NUMERIC,
    TypeName.INTEGER: TypeCategory.NUMERIC,
    TypeName.BIGINT: TypeCategory.NUMERIC,
    TypeName.UNSIGNED_BIGINT: TypeCategory.NUMERIC,
    TypeName.ENUM: TypeCategory.TEXT,
    TypeName.SET: TypeCategory.TEXT,
    TypeName.JSON: TypeCategory.TEXT,
    TypeName.JSONB: TypeCategory.TEXT,
    TypeName.XML: TypeCategory.TEXT,
    TypeName.CHAR: TypeCategory.TEXT,
    TypeName.NCHAR: TypeCategory.TEXT,
    TypeName.VARCHAR: TypeCategory.TEXT,
    TypeName.NVARCHAR: TypeCategory.TEXT,
    TypeName.TINYTEXT: TypeCategory.TEXT,
    TypeName.TEXT: TypeCategory.TEXT,
    TypeName.NTEXT: TypeCategory.TEXT,
    TypeName.MEDIUMTEXT: TypeCategory.TEXT,
    TypeName.LONGTEXT: TypeCategory.TEXT,
    TypeName.UUID: TypeCategory.TEXT,
    TypeName.CLOB: TypeCategory.TEXT,
    TypeName.SYSNAME: TypeCategory.TEXT,
    TypeName.DATE: TypeCategory.TIME,
    TypeName.DATETIME: TypeCategory.TIME,
    TypeName.SMALLDATETIME: TypeCategory.TIME,
    TypeName.TIME: TypeCategory.TIME,
    TypeName.TIMESTAMP: TypeCategory.TIME,
    TypeName.TIMESTAMPZ: TypeCategory.TIME,
    TypeName.YEAR: TypeCategory.TIME,
    TypeName.DECIMAL: TypeCategory.NUMERIC,
    TypeName.NUMERIC: TypeCategory.NUMERIC,
    TypeName.NUMBER: TypeCategory.NUMERIC,
    TypeName.MONEY: TypeCategory.NUMERIC,
    TypeName.SMALLMONEY: TypeCategory.NUMERIC,
    TypeName.REAL: TypeCategory.NUMERIC,
    TypeName.FLOAT: TypeCategory.NUMERIC,
    TypeName.DOUBLE: TypeCategory.NUMERIC,
    TypeName.BINARY: TypeCategory.BLOB,
    TypeName.VARBINARY: TypeCategory.BLOB,
    TypeName.TINYBLOB: TypeCategory.BLOB,
    TypeName.BLOB: TypeCategory.BLOB,
    TypeName.MEDIUMBLOB: TypeCategory.BLOB,
    TypeName.LONGBLOB: TypeCategory.BLOB,
    TypeName.BYTEA: TypeCategory.BLOB,
    TypeName.UNIQUEIDENTIFIER: TypeCategory.BLOB,
    TypeName.BOOL: TypeCategory.BOOL,
    TypeName.BOOLEAN: TypeCategory.BOOL,
    TypeName.SERIAL: TypeCategory.NUMERIC,
    TypeName.BIGSERIAL: TypeCategory.NUMERIC,
    TypeName.ARRAY: TypeCategory.ARRAY,
    })

def always_reserved(name: str) -> bool: # noqa: ARG001
    """Reserved-word predicate that treats every identifier as reserved."""
    return True

def add_single_quote(value: str) -> str:
    """Returns `value` wrapped in single quotes, unless it's shorter than two characters
    or already quoted.
    """
    if len(value) < 2: # noqa: PLR2004
        return value
    if value[0] == "'" and value[-1] == "'":
        return value
    return f"'{value}'"

@dataclass(frozen=True)
class SQLType:
    """Abstract column type with optional default length parameters.
    """
    #: Abstract type name (usually a `TypeName` member)
    name: str
    #: Default first length parameter (length or precision)
    default_length: int = 0
    #: Default second length parameter (scale)
    default_length2: int = 0
    @property
    def category(self) -> TypeCategory:
        """Type category from `SQL_TYPES`, or `TypeCategory.UNKNOWN`."""
        return SQL_TYPES.get(self.name, TypeCategory.UNKNOWN)
    def is_type(self, category: TypeCategory) -> bool:
        return self.category is category
    def is_text(self) -> bool:
        return self.is_type(TypeCategory.TEXT)
    def is_blob(self) -> bool:
        return self.is_type(TypeCategory.BLOB)
    def is_time(self) -> bool:
        return self.is_type(TypeCategory.TIME)
    def is_numeric(self) -> bool:
        return self.is_type(TypeCategory.NUMERIC)
    def is_array(self) -> bool:
        return self.is_type(TypeCategory.ARRAY)
    def is_bool(self) -> bool:
        return self.is_type(TypeCategory.BOOL)
    def is_json(self) -> bool:
        return self.name in (TypeName.JSON, TypeName.JSONB)

@dataclass
class Column:
    """Column descriptor.

    A `default` of `None` means the column has no default. Any string, including
    an empty one, is a default value.
    """
    #: Column name
    name: str
    #: Abstract column type
    sql_type: SQLType
    #: First length parameter (length or precision)
    length: int = 0
    #: Second length parameter (scale)
    length2: int = 0
    #: True if column accepts NULL
    nullable: bool = True
    #: Default value as SQL literal, or None
    default: str | None = None
    #: True if column is part of the primary key
    is_primary_key: bool = False
    #: True if column values are generated by the database
    is_autoincrement: bool = False
    #: Free-text column comment
    comment: str = ''
    #: Index membership: index name -> `IndexKind`
    indexes: dict[str, IndexKind] = field(default_factory=dict)
    @property
    def default_is_empty(self) -> bool:
        """True if column has no default value."""
        return self.default is None

@dataclass
class Index:
    """Index descriptor.

    Regular indexes carry names produced by the `IDX_<table>_<name>` or
    `UQE_<table>_<name>` convention. Their `name` holds only the `<name>` part.
    """
    #: Index name (without convention prefix for regular indexes)
    name: str
    #: Index kind
    kind: IndexKind = IndexKind.INDEX
    #: True if index name follows the naming convention
    is_regular: bool = True
    #: Ordered list of member column names
    cols: list[str] = field(default_factory=list)
    def add_column(self, *cols: str) -> None:
        """Appends member column(s) to the index."""
        self.cols.extend(cols)
    def xname(self, table_name: str) -> str:
        """Returns the full index name for `table_name` according to the naming convention.

        Arguments:
            table_name: Table name, possibly quoted and/or schema-qualified.
        """
        if self.name.startswith(('IDX_', 'UQE_')):
            return self.name
        table_name = table_name.replace('"', '').split('.')[-1]
        prefix = 'UQE' if self.kind is IndexKind.UNIQUE else 'IDX'
        return f'{prefix}_{table_name}_{self.name}'

class Table:
    """Table descriptor holding ordered columns, primary key names and indexes.

    Arguments:
        name: Table name.
        columns: Optional initial columns, added in order with `add_column()`.
    """
    def __init__(self, name: str = '', columns: Iterable[Column] = ()):
        #: Table name
        self.name: str = name
        #: Free-text table comment
        self.comment: str = ''
        #: Indexes defined on table (name -> `Index`)
        self.indexes: dict[str, Index] = {}
        self.__columns: dict[str, Column] = {}
        self.__primary_keys: list[str] = []
        for col in columns:
            self.add_column(col)
    def __repr__(self):
        return f"Table('{self.name}', columns={self.columns_seq()}, primary_keys={self.primary_keys})"
    def add_column(self, col: Column) -> None:
        """Appends column to the table. Primary key columns are registered as
        primary keys as well.
        """
        self.__columns[col.name] = col
        if col.is_primary_key and col.name not in self.__primary_keys:
            self.__primary_keys.append(col.name)
    def add_index(self, index: Index) -> None:
        self.indexes[index.name] = index
    def get_column(self, name: str) -> Column | None:
        return self.__columns.get(name)
    def columns_seq(self) -> list[str]:
        """Returns column names in declaration order."""
        return list(self.__columns)
    @property
    def columns(self) -> DataList[Column]:
        """Columns in declaration order."""
        return DataList(self.__columns.values(), Column, 'item.name')
    @property
    def primary_keys(self) -> list[str]:
        """Ordered primary key column names.

        Raises:
            ValueError: When assigned names that are not columns of this table.
        """
        return list(self.__primary_keys)
    @primary_keys.setter
    def primary_keys(self, value: Iterable[str]) -> None:
        value = list(value)
        if missing := [name for name in value if name not in self.__columns]:
            raise ValueError(f"Primary key column(s) not in table '{self.name}': {', '.join(missing)}")
        self.__primary_keys = value
        for col in self.__columns.values():
            col.is_primary_key = col.name in value

@dataclass(frozen=True)
class Uri:
    """Parsed connection descriptor.
    """
    #: Database type code (e.g. 'dm')
    db_type: str
    #: URI scheme
    proto: str = ''
    #: Server host name
    host: str = ''
    #: Server port (as string, empty if not specified)
    port: str = ''
    #: Database name
    db_name: str = ''
    #: User name
    user: str = ''
    #: User password
    passwd: str = ''
    #: Schema used for catalog queries
    schema: str = ''

class Quoter:
    """Quotes identifiers and identifier lists.

    Arguments:
        prefix: Opening quote character.
        suffix: Closing quote character.
        is_reserved: Predicate deciding whether an identifier must be quoted.
    """
    def __init__(self, prefix: str = '"', suffix: str = '"',
                 is_reserved: Callable[[str], bool] = always_reserved):
        self.prefix: str = prefix
        self.suffix: str = suffix
        self.is_reserved: Callable[[str], bool] = is_reserved
    def quote(self, ident: str) -> str:
        """Returns `ident`, quoted if `is_reserved` says so."""
        return f'{self.prefix}{ident}{self.suffix}' if self.is_reserved(ident) else ident
    def join(self, idents: Iterable[str], sep: str = ',') -> str:
        """Returns identifiers quoted and joined with `sep`."""
        return sep.join(self.quote(ident) for ident in idents)

class Filter:
    """Base class for SQL filters applied by dialects to generated statements.
    """
    def do(self, sql: str, dialect: Dialect, table: Table | None) -> str:
        raise NotImplementedError

class IdFilter(Filter):
    """Replaces the `(id)` placeholder with the quoted name of the table's only
    primary key column.
    """
    def do(self, sql: str, dialect: Dialect, table: Table | None) -> str:
        if table is None or len(table.primary_keys) != 1:
            return sql
        q = dialect.quote_str()
        pk = f' {q}{table.primary_keys[0]}{q} '
        sql = sql.replace(' `(id)` ', pk)
        sql = sql.replace(f' {q}(id){q} ', pk)
        return sql.replace(' (id) ', pk)

def column_string(dialect: Dialect, col: Column, include_primary_key: bool) -> str: # noqa: FBT001
    """Returns column definition used in CREATE TABLE and ALTER TABLE statements.

    Arguments:
        dialect: Dialect used to quote the name and render the type.
        col: Column to render.
        include_primary_key: When True, primary key columns get inline `PRIMARY KEY`,
            followed by `auto_incr_str()` for auto-increment columns.
    """
    parts = [dialect.quote(col.name), dialect.sql_type(col)]
    if include_primary_key and col.is_primary_key:
        parts.append('PRIMARY KEY')
        if col.is_autoincrement:
            parts.append(dialect.auto_incr_str())
    if col.default:
        parts.append(f'DEFAULT {col.default}')
    parts.append('NULL' if col.nullable else 'NOT NULL')
    return ' '.join(parts)

class Dialect:
    """Base class for database dialects.

    A dialect instance is bound to a DB-API 2.0 connection (qmark parameter style)
    and a parsed `Uri`. Subclasses supply the identifier policy, type mapping,
    catalog introspection and DDL specific to the database.

    Instances could be used as context managers that unbind on exit.
    """
    #: Database type code served by this dialect
    db_type: ClassVar[str] = ''
    def __init__(self):
        #: Bound DB-API connection, or None
        self._con: Any = None
        #: Parsed connection descriptor, or None
        self.uri: Uri | None = None
        #: Name of driver used to open the connection
        self.driver_name: str = ''
        #: Original data source string
        self.data_source_name: str = ''
    def __enter__(self) -> Self:
        return self
    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
    def _fail_if_closed(self) -> None:
        if self.closed:
            raise Error("Dialect is not bound to connection.")
    @contextmanager
    def _query(self, cmd: str, params: list | tuple = ()) -> Iterator[Any]:
        """Executes `cmd` and yields the cursor. Cursor is closed on exit."""
        self._fail_if_closed()
        get_logger(self).debug(f"{cmd} {list(params)!r}")
        cur = self._con.cursor()
        try:
            cur.execute(cmd, params)
            yield cur
        finally:
            cur.close()
    def bind(self, connection: Any, uri: Uri, driver_name: str = '',
             data_source_name: str = '') -> Self:
        """Binds the dialect to a live database connection.

        Arguments:
            connection: DB-API 2.0 connection.
            uri: Parsed connection descriptor.
            driver_name: Name of driver used to open the connection.
            data_source_name: Original data source string.

        Returns:
            The bound dialect (`self`).
        """
        self._con = connection
        self.uri = uri
        self.driver_name = driver_name
        self.data_source_name = data_source_name
        get_logger(self).debug(f"Bound to schema '{uri.schema}' at '{uri.host}'")
        return self
    def close(self) -> None:
        """Releases the connection reference. The connection itself is not closed."""
        self._con = None
    def has_records(self, query: str, *args: Any) -> bool:
        """Returns True if `query` returns at least one row.
        """
        with self._query(query, args) as cur:
            return bool(cur.fetchall())
    def is_table_exist(self, table_name: str) -> bool:
        return self.has_records(*self._unpack(self.table_check_sql(table_name)))
    def is_index_exist(self, table_name: str, index_name: str) -> bool:
        return self.has_records(*self._unpack(self.index_check_sql(table_name, index_name)))
    def is_column_exist(self, table_name: str, col_name: str) -> bool:
        return self.has_records(*self._unpack(self.column_check_sql(table_name, col_name)))
    @staticmethod
    def _unpack(check: tuple[str, list]) -> list:
        return [check[0], *check[1]]
    def quote_str(self) -> str:
        return '"'
    def quote(self, name: str) -> str:
        q = self.quote_str()
        return f'{q}{name}{q}'
    def is_reserved(self, name: str) -> bool:
        raise NotImplementedError
    def sql_type(self, col: Column) -> str:
        raise NotImplementedError
    def auto_incr_str(self) -> str:
        raise NotImplementedError
    def table_check_sql(self, table_name: str) -> tuple[str, list]:
        raise NotImplementedError
    def index_check_sql(self, table_name: str, index_name: str) -> tuple[str, list]:
        raise NotImplementedError
    def column_check_sql(self, table_name: str, col_name: str) -> tuple[str, list]:
        raise NotImplementedError
    def create_index_sql(self, table_name: str, index: Index) -> str:
        """Returns CREATE [UNIQUE] INDEX statement for `index` on `table_name`."""
        unique = ' UNIQUE' if index.kind is IndexKind.UNIQUE else ''
        quoter = Quoter(self.quote_str(), self.quote_str())
        return f'CREATE{unique} INDEX {self.quote(index.xname(table_name))} ' \
               f'ON {self.quote(table_name)} ({quoter.join(index.cols)})'
    def drop_table_sql(self, table_name: str) -> str:
        return f'DROP TABLE {self.quote(table_name)}'
    def add_column_sql(self, table_name: str, col: Column) -> str:
        return f'ALTER TABLE {self.quote(table_name)} ADD {column_string(self, col, True)}'
    def modify_column_sql(self, table_name: str, col: Column) -> str:
        return f'ALTER TABLE {self.quote(table_name)} MODIFY {column_string(self, col, False)}'
    def filters(self) -> list[Filter]:
        return []
    @property
    def closed(self) -> bool:
        """True if dialect is not bound to a connection."""
        return self._con is None
    @property
    def schema(self) -> str:
        """Schema used by catalog queries (empty if unbound)."""
        return self.uri.schema if self.uri is not None else ''

class Driver:
    """Base class for data source string parsers.
    """
    def parse(self, driver_name: str, data_source_name: str) -> Uri:
        raise NotImplementedError

_dialects: dict[str, Callable[[], Dialect]] = {}
_drivers: dict[str, Driver] = {}

def register_dialect(db_type: str, factory: Callable[[], Dialect]) -> None:
    """Registers dialect factory (usually the dialect class) for `db_type`."""
    _dialects[db_type.lower()] = factory

def query_dialect(db_type: str) -> Dialect | None:
    """Returns new unbound dialect for `db_type`, or None if not registered."""
    if (factory := _dialects.get(db_type.lower())) is None:
        return None
    return factory()

def register_driver(driver_name: str, driver: Driver) -> None:
    """Registers data source parser for `driver_name`."""
    _drivers[driver_name] = driver

def query_driver(driver_name: str) -> Driver | None:
    return _drivers.get(driver_name)

def open_dialect(driver_name: str, data_source_name: str, connection: Any) -> Dialect:
    """Parses `data_source_name` with driver registered as `driver_name` and returns
    matching dialect bound to `connection`.

    Raises:
        Error: When driver or dialect is not registered, or data source is malformed.
    """
    if (driver := query_driver(driver_name)) is None:
        raise Error(f"Unsupported driver name '{driver_name}'", driver_name=driver_name)
    uri = driver.parse(driver_name, data_source_name)
    if (dialect := query_dialect(uri.db_type)) is None:
        raise Error(f"Unsupported dialect type '{uri.db_type}'", db_type=uri.db_type)
    return dialect.bind(connection, uri, driver_name, data_source_name)
