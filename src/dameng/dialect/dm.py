# SPDX-FileCopyrightText: 2026-present The dameng-dialect Authors
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: dameng-dialect
# FILE:           dameng/dialect/dm.py
# DESCRIPTION:    Dialect adapter for the Dameng (DM) database
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

"""dameng.dialect.dm - Dialect adapter for the Dameng (DM) database.

`DamengDialect` maps abstract column types to DM native types and back, quotes
identifiers, builds DDL and introspects existing schema through the DM catalog
views (`ALL_TABLES`, `ALL_TAB_COLS`, `USER_CONSTRAINTS`, `ALL_INDEXES`, ...).
`DamengDriver` parses `dm://user:password@host:port?schema=NAME` data source
strings.

Both are registered under the name `dm` on import::

   from dameng.dialect import core, dm

   dialect = core.open_dialect('dm', 'dm://SYSDBA:secret@localhost:5236', con)
   for table in dialect.get_metas():
       print(dialect.create_table_sql(table))
"""

from __future__ import annotations

import dataclasses
import io
import re
from typing import Any, ClassVar
from urllib.parse import parse_qs, unquote, urlsplit

from firebird.base.collections import DataList
from firebird.base.logging import get_logger
from firebird.base.types import Error

from .core import (
    SQL_TYPES,
    Column,
    Dialect,
    Driver,
    Filter,
    IdFilter,
    Index,
    IndexKind,
    Quoter,
    SQLType,
    Table,
    TypeName,
    Uri,
    add_single_quote,
    always_reserved,
    column_string,
    register_dialect,
    register_driver,
)
from .lob import ClobScanner

#: DM reserved words
RESERVED_WORDS: frozenset[str] = frozenset([
    'ACCESS', 'ACCOUNT', 'ACTIVATE', 'ADD', 'ADMIN', 'ADVISE', 'AFTER', 'ALL', 'ALL_ROWS',
    'ALLOCATE', 'ALTER', 'ANALYZE', 'AND', 'ANY', 'ARCHIVE', 'ARCHIVELOG', 'ARRAY', 'AS',
    'ASC', 'AT', 'AUDIT', 'AUTHENTICATED', 'AUTHORIZATION', 'AUTOEXTEND', 'AUTOMATIC',
    'BACKUP', 'BECOME', 'BEFORE', 'BEGIN', 'BETWEEN', 'BFILE', 'BITMAP', 'BLOB', 'BLOCK',
    'BODY', 'BY', 'CACHE', 'CACHE_INSTANCES', 'CANCEL', 'CASCADE', 'CAST', 'CFILE',
    'CHAINED', 'CHANGE', 'CHAR', 'CHAR_CS', 'CHARACTER', 'CHECK', 'CHECKPOINT', 'CHOOSE',
    'CHUNK', 'CLEAR', 'CLOB', 'CLONE', 'CLOSE', 'CLOSE_CACHED_OPEN_CURSORS', 'CLUSTER',
    'COALESCE', 'COLUMN', 'COLUMNS', 'COMMENT', 'COMMIT', 'COMMITTED', 'COMPATIBILITY',
    'COMPILE', 'COMPLETE', 'COMPOSITE_LIMIT', 'COMPRESS', 'COMPUTE', 'CONNECT',
    'CONNECT_TIME', 'CONSTRAINT', 'CONSTRAINTS', 'CONTENTS', 'CONTINUE', 'CONTROLFILE',
    'CONVERT', 'COST', 'CPU_PER_CALL', 'CPU_PER_SESSION', 'CREATE', 'CURRENT',
    'CURRENT_SCHEMA', 'CURREN_USER', 'CURSOR', 'CYCLE', 'DANGLING', 'DATABASE', 'DATAFILE',
    'DATAFILES', 'DATAOBJNO', 'DATE', 'DBA', 'DBHIGH', 'DBLOW', 'DBMAC', 'DEALLOCATE',
    'DEBUG', 'DEC', 'DECIMAL', 'DECLARE', 'DEFAULT', 'DEFERRABLE', 'DEFERRED', 'DEGREE',
    'DELETE', 'DEREF', 'DESC', 'DIRECTORY', 'DISABLE', 'DISCONNECT', 'DISMOUNT',
    'DISTINCT', 'DISTRIBUTED', 'DML', 'DOUBLE', 'DROP', 'DUMP', 'EACH', 'ELSE', 'ENABLE',
    'END', 'ENFORCE', 'ENTRY', 'ESCAPE', 'EXCEPT', 'EXCEPTIONS', 'EXCHANGE', 'EXCLUDING',
    'EXCLUSIVE', 'EXECUTE', 'EXISTS', 'EXPIRE', 'EXPLAIN', 'EXTENT', 'EXTENTS',
    'EXTERNALLY', 'FAILED_LOGIN_ATTEMPTS', 'FALSE', 'FAST', 'FILE', 'FIRST_ROWS',
    'FLAGGER', 'FLOAT', 'FLOB', 'FLUSH', 'FOR', 'FORCE', 'FOREIGN', 'FREELIST',
    'FREELISTS', 'FROM', 'FULL', 'FUNCTION', 'GLOBAL', 'GLOBALLY', 'GLOBAL_NAME', 'GRANT',
    'GROUP', 'GROUPS', 'HASH', 'HASHKEYS', 'HAVING', 'HEADER', 'HEAP', 'IDENTIFIED',
    'IDGENERATORS', 'IDLE_TIME', 'IF', 'IMMEDIATE', 'IN', 'INCLUDING', 'INCREMENT',
    'INDEX', 'INDEXED', 'INDEXES', 'INDICATOR', 'IND_PARTITION', 'INITIAL', 'INITIALLY',
    'INITRANS', 'INSERT', 'INSTANCE', 'INSTANCES', 'INSTEAD', 'INT', 'INTEGER',
    'INTERMEDIATE', 'INTERSECT', 'INTO', 'IS', 'ISOLATION', 'ISOLATION_LEVEL', 'KEEP',
    'KEY', 'KILL', 'LABEL', 'LAYER', 'LESS', 'LEVEL', 'LIBRARY', 'LIKE', 'LIMIT', 'LINK',
    'LIST', 'LOB', 'LOCAL', 'LOCK', 'LOCKED', 'LOG', 'LOGFILE', 'LOGGING',
    'LOGICAL_READS_PER_CALL', 'LOGICAL_READS_PER_SESSION', 'LONG', 'MANAGE', 'MASTER',
    'MAX', 'MAXARCHLOGS', 'MAXDATAFILES', 'MAXEXTENTS', 'MAXINSTANCES', 'MAXLOGFILES',
    'MAXLOGHISTORY', 'MAXLOGMEMBERS', 'MAXSIZE', 'MAXTRANS', 'MAXVALUE', 'MIN', 'MEMBER',
    'MINIMUM', 'MINEXTENTS', 'MINUS', 'MINVALUE', 'MLSLABEL', 'MLS_LABEL_FORMAT', 'MODE',
    'MODIFY', 'MOUNT', 'MOVE', 'MTS_DISPATCHERS', 'MULTISET', 'NATIONAL', 'NCHAR',
    'NCHAR_CS', 'NCLOB', 'NEEDED', 'NESTED', 'NETWORK', 'NEW', 'NEXT', 'NOARCHIVELOG',
    'NOAUDIT', 'NOCACHE', 'NOCOMPRESS', 'NOCYCLE', 'NOFORCE', 'NOLOGGING', 'NOMAXVALUE',
    'NOMINVALUE', 'NONE', 'NOORDER', 'NOOVERRIDE', 'NOPARALLEL', 'NOREVERSE', 'NORMAL',
    'NOSORT', 'NOT', 'NOTHING', 'NOWAIT', 'NULL', 'NUMBER', 'NUMERIC', 'NVARCHAR2',
    'OBJECT', 'OBJNO', 'OBJNO_REUSE', 'OF', 'OFF', 'OFFLINE', 'OID', 'OIDINDEX', 'OLD',
    'ON', 'ONLINE', 'ONLY', 'OPCODE', 'OPEN', 'OPTIMAL', 'OPTIMIZER_GOAL', 'OPTION', 'OR',
    'ORDER', 'ORGANIZATION', 'OSLABEL', 'OVERFLOW', 'OWN', 'PACKAGE', 'PARALLEL',
    'PARTITION', 'PASSWORD', 'PASSWORD_GRACE_TIME', 'PASSWORD_LIFE_TIME',
    'PASSWORD_LOCK_TIME', 'PASSWORD_REUSE_MAX', 'PASSWORD_REUSE_TIME',
    'PASSWORD_VERIFY_FUNCTION', 'PCTFREE', 'PCTINCREASE', 'PCTTHRESHOLD', 'PCTUSED',
    'PCTVERSION', 'PERCENT', 'PERMANENT', 'PLAN', 'PLSQL_DEBUG', 'POST_TRANSACTION',
    'PRECISION', 'PRESERVE', 'PRIMARY', 'PRIOR', 'PRIVATE', 'PRIVATE_SGA', 'PRIVILEGE',
    'PRIVILEGES', 'PROCEDURE', 'PROFILE', 'PUBLIC', 'PURGE', 'QUEUE', 'QUOTA', 'RANGE',
    'RAW', 'RBA', 'READ', 'READUP', 'REAL', 'REBUILD', 'RECOVER', 'RECOVERABLE',
    'RECOVERY', 'REF', 'REFERENCES', 'REFERENCING', 'REFRESH', 'RENAME', 'REPLACE',
    'RESET', 'RESETLOGS', 'RESIZE', 'RESOURCE', 'RESTRICTED', 'RETURN', 'RETURNING',
    'REUSE', 'REVERSE', 'REVOKE', 'ROLE', 'ROLES', 'ROLLBACK', 'ROW', 'ROWID', 'ROWNUM',
    'ROWS', 'RULE', 'SAMPLE', 'SAVEPOINT', 'SB4', 'SCAN_INSTANCES', 'SCHEMA', 'SCN',
    'SCOPE', 'SD_ALL', 'SD_INHIBIT', 'SD_SHOW', 'SEGMENT', 'SEG_BLOCK', 'SEG_FILE',
    'SELECT', 'SEQUENCE', 'SERIALIZABLE', 'SESSION', 'SESSION_CACHED_CURSORS',
    'SESSIONS_PER_USER', 'SET', 'SHARE', 'SHARED', 'SHARED_POOL', 'SHRINK', 'SIZE', 'SKIP',
    'SKIP_UNUSABLE_INDEXES', 'SMALLINT', 'SNAPSHOT', 'SOME', 'SORT', 'SPECIFICATION',
    'SPLIT', 'SQL_TRACE', 'STANDBY', 'START', 'STATEMENT_ID', 'STATISTICS', 'STOP',
    'STORAGE', 'STORE', 'STRUCTURE', 'SUCCESSFUL', 'SWITCH', 'SYS_OP_ENFORCE_NOT_NULL$',
    'SYS_OP_NTCIMG$', 'SYNONYM', 'SYSDATE', 'SYSDBA', 'SYSOPER', 'SYSTEM', 'TABLE',
    'TABLES', 'TABLESPACE', 'TABLESPACE_NO', 'TABNO', 'TEMPORARY', 'THAN', 'THE', 'THEN',
    'THREAD', 'TIMESTAMP', 'TIME', 'TO', 'TOPLEVEL', 'TRACE', 'TRACING', 'TRANSACTION',
    'TRANSITIONAL', 'TRIGGER', 'TRIGGERS', 'TRUE', 'TRUNCATE', 'TX', 'TYPE', 'UB2', 'UBA',
    'UID', 'UNARCHIVED', 'UNDO', 'UNION', 'UNIQUE', 'UNLIMITED', 'UNLOCK', 'UNRECOVERABLE',
    'UNTIL', 'UNUSABLE', 'UNUSED', 'UPDATABLE', 'UPDATE', 'USAGE', 'USE', 'USER', 'USING',
    'VALIDATE', 'VALIDATION', 'VALUE', 'VALUES', 'VARCHAR', 'VARCHAR2', 'VARYING', 'VIEW',
    'WHEN', 'WHENEVER', 'WHERE', 'WITH', 'WITHOUT', 'WORK', 'WRITE', 'WRITEDOWN',
    'WRITEUP', 'XID', 'YEAR', 'ZONE',
    ])

#: Native type (without length suffix) -> abstract type name, used by introspection
NATIVE_TYPES: dict[str, str] = {
    'VARCHAR': TypeName.VARCHAR,
    'VARCHAR2': TypeName.VARCHAR,
    'TIMESTAMP WITH TIME ZONE': TypeName.TIMESTAMPZ,
    'DATETIME WITH TIME ZONE': TypeName.TIMESTAMPZ,
    'NUMBER': TypeName.NUMBER,
    'LONG': TypeName.TEXT,
    'LONG RAW': TypeName.TEXT,
    'NCLOB': TypeName.TEXT,
    'CLOB': TypeName.TEXT,
    'TEXT': TypeName.TEXT,
    'LONGVARCHAR': TypeName.TEXT,
    'RAW': TypeName.BINARY,
    'IMAGE': TypeName.BLOB,
    'LONGVARBINARY': TypeName.BLOB,
    'DOUBLE PRECISION': TypeName.DOUBLE,
    'DEC': TypeName.DECIMAL,
    'BYTE': TypeName.TINYINT,
    'CHARACTER': TypeName.CHAR,
    }

# NAME[(len1[,len2])][ suffix], e.g. 'TIMESTAMP(6) WITH TIME ZONE'
_TYPE_PATTERN = re.compile(r'^\s*([^(]*)\s*(?:\(\s*(\w+)\s*(?:,\s*(\w+)\s*)?\))?\s*([^()]*?)\s*$')

def _to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    return int(value) if value is not None and str(value).isdigit() else 0

def split_native_type(data_type: str) -> tuple[str, int, int]:
    """Splits native type string into base type name and length parameters.

    Example::

       split_native_type('NUMBER(10,2)')                 # ('NUMBER', 10, 2)
       split_native_type('TIMESTAMP(6) WITH TIME ZONE')  # ('TIMESTAMP WITH TIME ZONE', 6, 0)

    Non-numeric parameters (like `MAX`) are returned as 0.
    """
    if (match := _TYPE_PATTERN.match(data_type)) is None:
        return data_type.strip(), 0, 0
    name, len1, len2, suffix = match.groups()
    name = name.strip()
    if suffix:
        name = f'{name} {suffix}'
    return name, _to_int(len1), _to_int(len2)

class DamengDialect(Dialect):
    """Dialect for the Dameng (DM) database.

    Catalog queries are limited to the schema selected by the bound `.Uri`.
    """
    db_type: ClassVar[str] = 'dm'
    #: Configuration option: Native types whose columns are skipped by `get_columns()`.
    opt_ignored_types: ClassVar[frozenset[str]] = frozenset(['AQ$_SUBSCRIBERS'])
    #: Configuration option: LIKE pattern of table names hidden by `get_tables()`.
    opt_system_table_pattern: ClassVar[str] = '%$%'
    #: Configuration option: Name prefix of auto-increment sequences.
    opt_sequence_prefix: ClassVar[str] = 'SEQ_'
    def __init__(self):
        super().__init__()
        self._agent_name_ = 'dialect.dm'
    # --- Identifier policy ---
    def is_reserved(self, name: str) -> bool:
        """Returns True if `name` is a DM reserved word (case-insensitive)."""
        return name.upper() in RESERVED_WORDS
    def quote(self, name: str) -> str:
        """Returns quoted identifier.

        The identifier `login` (any case) is enclosed in single quotes, all other
        identifiers in double quotes.
        """
        if name.lower() == 'login':
            return f"'{name}'"
        return f'"{name}"'
    # --- Capabilities ---
    def support_insert_many(self) -> bool:
        return True
    def support_engine(self) -> bool:
        return False
    def support_charset(self) -> bool:
        return True
    def index_on_table(self) -> bool:
        return True
    def auto_incr_str(self) -> str:
        return 'IDENTITY'
    def filters(self) -> list[Filter]:
        return [IdFilter()]
    def seq_name(self, table_name: str) -> str:
        """Returns name of the sequence that feeds auto-increment column of `table_name`."""
        return f'{self.opt_sequence_prefix}{table_name.upper()}'
    # --- Type mapping ---
    def sql_type(self, col: Column) -> str:
        """Returns DM native type for column.

        Unknown type names are passed through in upper case. The column is not
        modified.
        """
        length, length2 = col.length, col.length2
        t = col.sql_type.name
        if t in (TypeName.TINYINT, 'BYTE'):
            return 'TINYINT'
        if t in (TypeName.SMALLINT, TypeName.MEDIUMINT, TypeName.INT, TypeName.INTEGER,
                 TypeName.UNSIGNED_TINYINT):
            return 'INTEGER'
        if t in (TypeName.BIGINT, TypeName.UNSIGNED_BIGINT, TypeName.UNSIGNED_BIT,
                 TypeName.UNSIGNED_INT, TypeName.SERIAL, TypeName.BIGSERIAL):
            return 'BIGINT'
        if t in (TypeName.BIT, TypeName.BOOL, TypeName.BOOLEAN):
            return 'BIT'
        if t in (TypeName.VARBINARY, TypeName.BLOB, TypeName.TINYBLOB, TypeName.MEDIUMBLOB,
                 TypeName.LONGBLOB, TypeName.BYTEA):
            return 'VARBINARY'
        if t == TypeName.DATE:
            return 'DATE'
        if t == TypeName.TIME:
            return f'TIME({length})' if length > 0 else 'TIME'
        if t == TypeName.TIMESTAMPZ:
            return f'TIMESTAMP({length}) WITH TIME ZONE' if length > 0 else 'TIMESTAMP WITH TIME ZONE'
        if t in (TypeName.TEXT, TypeName.JSON):
            return 'TEXT'
        if t == TypeName.BINARY and length == 0:
            return 'BINARY(MAX)'
        if t == TypeName.UUID:
            res = 'VARCHAR'
            length, length2 = 40, 0
        elif t in (TypeName.DATETIME, TypeName.TIMESTAMP):
            res = 'TIMESTAMP'
        elif t in (TypeName.REAL, TypeName.DOUBLE):
            res = 'REAL'
        elif t in (TypeName.NUMERIC, TypeName.DECIMAL, TypeName.NUMBER):
            res = 'NUMERIC'
        elif t in (TypeName.MEDIUMTEXT, TypeName.LONGTEXT):
            res = 'CLOB'
        elif t in (TypeName.CHAR, TypeName.VARCHAR, TypeName.TINYTEXT):
            res = 'VARCHAR2'
        else:
            # FLOAT, BINARY(n) and names without explicit rule
            res = str(t).upper()
        if length2 > 0:
            res += f'({length},{length2})'
        elif length > 0:
            res += f'({length})'
        return res
    def parse_type(self, data_type: str) -> SQLType | None:
        """Maps native type string reported by the catalog to abstract `.SQLType`.

        Returns:
            `.SQLType` with default lengths taken from the type string, or `None`
            when the native type is listed in `opt_ignored_types`.
        """
        dt, len1, len2 = split_native_type(data_type)
        if dt in self.opt_ignored_types:
            return None
        if dt == 'ROWID':
            return SQLType(TypeName.VARCHAR, 18, 0)
        if (name := NATIVE_TYPES.get(dt)) is not None:
            if name in (TypeName.TEXT, TypeName.BINARY):
                return SQLType(name)
            return SQLType(name, len1, len2)
        return SQLType(dt.upper(), len1, len2)
    # --- Checks ---
    def index_check_sql(self, table_name: str, index_name: str) -> tuple[str, list]:
        return ('select index_name from user_indexes where table_owner = ? and table_name = ? '
                'and index_name = ?', [self.schema, table_name, index_name])
    def table_check_sql(self, table_name: str) -> tuple[str, list]:
        return ("select table_name from all_tables where temporary = 'N' and table_name = ? "
                "and owner = ?", [table_name, self.schema])
    def column_check_sql(self, table_name: str, col_name: str) -> tuple[str, list]:
        return ('select column_name from all_tab_columns where owner = ? and table_name = ? '
                'and column_name = ?', [self.schema, table_name, col_name])
    # --- DDL ---
    def drop_index_sql(self, table_name: str, index: Index) -> str:
        """Returns DROP INDEX statement.

        Regular indexes are dropped under their convention name, others under
        their stored name.
        """
        name = self.quote(index.xname(table_name) if index.is_regular else index.name)
        if self.schema:
            name = f'{self.quote(self.schema)}.{name}'
        return f'DROP INDEX {name}'
    def create_table_sql(self, table: Table, table_name: str = '', store_engine: str = '', # noqa: ARG002
                         charset: str = '') -> str: # noqa: ARG002
        """Returns CREATE TABLE statement for `table`.

        Primary key is emitted as named `CONSTRAINT PK_<table>` clause. Boolean
        defaults `true`/`false` are rendered as `1`/`0`.

        Arguments:
            table: Table descriptor.
            table_name: Table name to use instead of `table.name`.
            store_engine: Ignored, DM has no storage engines.
            charset: Ignored.

        Returns:
            The statement, or empty string when it could not be built.
        """
        table_name = table_name or table.name
        buf = io.StringIO()
        try:
            buf.write(f'create table {self.quote(table_name)} (')
            coldefs = []
            for col in table.columns:
                if col.sql_type.is_bool() and col.default in ('true', 'false'):
                    col = dataclasses.replace(col, default='1' if col.default == 'true' else '0') # noqa: PLW2901
                coldefs.append(column_string(self, col, False))
            buf.write(', '.join(coldefs))
            if pk_list := table.primary_keys:
                if coldefs:
                    buf.write(', ')
                buf.write(f'CONSTRAINT PK_{table_name} PRIMARY KEY (')
                buf.write(Quoter('"', '"', always_reserved).join(pk_list))
                buf.write(')')
            buf.write(')')
        except (OSError, TypeError, ValueError) as exc:
            get_logger(self).warning(f"Cannot build CREATE TABLE for '{table_name}': {exc}")
            return ''
        return buf.getvalue()
    # --- Introspection ---
    def get_tables(self) -> DataList[Table]:
        """Returns non-temporary user tables of the schema.

        Tables with names that match `opt_system_table_pattern` are not included.
        """
        with self._query("select table_name from all_tables where owner = ? and temporary = 'N' "
                         "AND table_name not like ?",
                         (self.schema, self.opt_system_table_pattern)) as cur:
            tables = DataList((Table(row[0]) for row in cur.fetchall()), Table, 'item.name')
        return tables
    def _get_primary_keys(self, table_name: str) -> list[str]:
        with self._query('select column_name from user_cons_columns where owner = ? and '
                         'constraint_name = (select constraint_name from user_constraints '
                         "where owner = ? and table_name = ? and constraint_type ='P')",
                         (self.schema, self.schema, table_name)) as cur:
            return [row[0].strip('" ') for row in cur.fetchall()]
    def get_columns(self, table_name: str) -> DataList[Column]:
        """Returns columns of table in catalog order.

        Raises:
            Error: When catalog reports NULL column name, or a native type that
                   maps to abstract type unknown to `.SQL_TYPES`.
        """
        pk_names = self._get_primary_keys(table_name)
        cols = DataList(type_spec=Column, key_expr='item.name')
        with self._query('select atc.column_name, atc.data_default, atc.data_type, atc.data_length, '
                         'atc.data_precision, atc.data_scale, atc.nullable, ucc.comments '
                         'from all_tab_cols as atc left join user_col_comments as ucc '
                         'on ucc.table_name=atc.table_name and ucc.column_name=atc.column_name '
                         'and atc.owner = ucc.owner where atc.table_name = ? and ucc.owner = ?',
                         (table_name, self.schema)) as cur:
            rows = cur.fetchall()
        for col_name, col_default, data_type, data_len, data_precision, data_scale, \
            nullable, comment in rows:
            if col_name is None:
                raise Error("Column name is NULL", table_name=table_name)
            if (sql_type := self.parse_type(data_type or '')) is None:
                continue
            if sql_type.name not in SQL_TYPES:
                raise Error(f"Unknown column type '{data_type}' ({sql_type.name}) "
                            f"in table '{table_name}'", type_name=sql_type.name,
                            table_name=table_name)
            default = ClobScanner.from_value(col_default)
            col = Column(col_name.strip('" '), sql_type, nullable=nullable == 'Y',
                         default=default.data if default.valid else None,
                         comment=comment if comment is not None else '')
            if sql_type.is_time() and sql_type.name != TypeName.DATE:
                # fractional seconds precision
                col.length = _to_int(data_scale)
            elif sql_type.name in (TypeName.NUMERIC, TypeName.DECIMAL, TypeName.NUMBER):
                col.length = sql_type.default_length or _to_int(data_precision)
                col.length2 = sql_type.default_length2 or _to_int(data_scale)
            elif sql_type.is_text() or sql_type.is_blob():
                col.length = sql_type.default_length or _to_int(data_len)
                col.length2 = sql_type.default_length2
            else:
                col.length = sql_type.default_length
                col.length2 = sql_type.default_length2
            if col.name in pk_names:
                col.is_primary_key = True
                col.is_autoincrement = self.has_records('SELECT * FROM ALL_SEQUENCES WHERE '
                                                        'SEQUENCE_OWNER = ? AND SEQUENCE_NAME = ?',
                                                        self.schema, self.seq_name(table_name))
            if sql_type.is_time() and not col.default_is_empty \
               and col.default.upper() != 'CURRENT_TIMESTAMP':
                col.default = add_single_quote(col.default)
            cols.append(col)
        return cols
    def get_indexes(self, table_name: str) -> dict[str, Index]:
        """Returns indexes of table that don't enforce the primary key.

        Convention prefixes (`IDX_<table>_`, `UQE_<table>_`) are stripped from
        names of regular indexes.
        """
        with self._query('select t.column_name, i.uniqueness, i.index_name FROM all_ind_columns t '
                         'left join all_indexes i on t.table_name = i.table_name and '
                         'i.table_owner = t.table_owner and t.index_name = i.index_name '
                         'WHERE t.table_name = ? and i.owner = ? and t.index_name not in '
                         "(select index_name from all_constraints where constraint_type='P' "
                         'and table_name = ? and owner = ?)',
                         (table_name, self.schema, table_name, self.schema)) as cur:
            rows = cur.fetchall()
        indexes: dict[str, Index] = {}
        prefixes = (f'IDX_{table_name}_', f'UQE_{table_name}_')
        for col_name, uniqueness, index_name in rows:
            index_name = index_name.strip('" ') # noqa: PLW2901
            if is_regular := index_name.startswith(prefixes):
                index_name = index_name[len(prefixes[0]):] # noqa: PLW2901
            if (index := indexes.get(index_name)) is None:
                index = Index(index_name,
                              IndexKind.UNIQUE if uniqueness == 'UNIQUE' else IndexKind.INDEX,
                              is_regular)
                indexes[index_name] = index
            index.add_column(col_name.strip('" '))
        return indexes
    def get_metas(self) -> DataList[Table]:
        """Returns all tables of the schema with their columns and indexes loaded.
        """
        tables = self.get_tables()
        for table in tables:
            for col in self.get_columns(table.name):
                table.add_column(col)
            for index in self.get_indexes(table.name).values():
                table.add_index(index)
                for col_name in index.cols:
                    if (col := table.get_column(col_name)) is not None:
                        col.indexes[index.name] = index.kind
        return tables

class DamengDriver(Driver):
    """Parser for DM data source strings.

    Format: `dm://user:password@host:port[?schema=NAME]`. Schema defaults to
    user name.
    """
    def __init__(self):
        self._agent_name_ = 'driver.dm'
    def parse(self, driver_name: str, data_source_name: str) -> Uri: # noqa: ARG002
        """Returns `.Uri` parsed from `data_source_name`.

        Raises:
            Error: When data source has no user information.
            ValueError: When data source is not a valid URI (e.g. non-numeric port).
        """
        u = urlsplit(data_source_name)
        if '@' not in u.netloc:
            raise Error("user/password needed")
        user = unquote(u.username or '')
        db_name = parse_qs(u.query).get('schema', [''])[0] or user
        port = u.port
        get_logger(self).debug(f"Parsed data source for user '{user}', schema '{db_name}'")
        return Uri(db_type=DamengDialect.db_type, proto=u.scheme, host=u.hostname or '',
                   port='' if port is None else str(port), db_name=db_name, user=user,
                   passwd=unquote(u.password or ''), schema=db_name)

register_dialect(DamengDialect.db_type, DamengDialect)
register_driver('dm', DamengDriver())
