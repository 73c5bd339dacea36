"""Table structure statements for the supported database dialects."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from phoenixerp.query import NoRowsError, execute, select, select_row
from phoenixerp.results import res_as_map_slice

logger = logging.getLogger(__name__)

_COLLATE = "COLLATE utf8mb4_general_ci"


def _is_id(column: str) -> bool:
    return column.casefold() == "id"


class DDLBase(ABC):
    """Structure operations on one table.

    ``cols`` gives the wanted column order and ``present`` the wanted type of
    each column; both are used by :meth:`create` and :meth:`alter`.
    """

    def __init__(
        self,
        tx: Any,
        table: str = "*",
        cols: Sequence[str] | None = None,
        present: Mapping[str, str] | None = None,
    ) -> None:
        self.tx = tx
        self.table = table
        self.cols: list[str] = list(cols or ())
        self.present: dict[str, str] = dict(present or {})

    def exists(self) -> bool:
        """Whether the table can be queried."""
        try:
            select_row(self.tx, f"SELECT TOP 1 'X' AS id FROM {self.table}")
        except NoRowsError:
            return True
        except Exception:  # any database error means the table is unusable
            return False
        return True

    @abstractmethod
    def is_support_sequence(self) -> bool:
        """Whether the dialect can place columns at a given position."""

    @abstractmethod
    def desc(self) -> tuple[list[str], dict[str, str]]:
        """The table's column names in order and their lower-cased types."""

    @abstractmethod
    def create(self) -> None:
        """Create the table from ``cols`` and ``present``."""

    @abstractmethod
    def alter(
        self,
        added: Mapping[str, str],
        changed: Mapping[str, str],
        removed: Mapping[str, str],
    ) -> None:
        """Add and retype columns; rename removed ones with a leading underscore."""

    @abstractmethod
    def drop(self) -> None:
        """Retire the table by renaming it with a leading underscore."""

    @abstractmethod
    def limit_offset(self, start: int, count: int) -> str:
        """The paging clause for ``count`` rows from ``start``."""

    def _rename_to_hidden(self) -> None:
        execute(self.tx, f"ALTER TABLE {self.table} RENAME TO  _{self.table} ;")


class MySqlDDL(DDLBase):
    """MySQL dialect."""

    def is_support_sequence(self) -> bool:
        return True

    def desc(self) -> tuple[list[str], dict[str, str]]:
        rows = select(self.tx, f"DESC {self.table}")
        present, cols = res_as_map_slice(rows, False, "field", "type")
        return cols, present

    def create(self) -> None:
        lines = [f"\n CREATE TABLE {self.table} ( \n"]
        for col in self.cols:
            null = "NOT NULL" if _is_id(col) else "DEFAULT NULL"
            lines.append(f"\t {col} {self.present.get(col, '')} {_COLLATE} {null}, \n")
        lines.append("\t PRIMARY KEY (`id`) \n")
        lines.append(" ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_general_ci;")
        execute(self.tx, "".join(lines))

    def alter(
        self,
        added: Mapping[str, str],
        changed: Mapping[str, str],
        removed: Mapping[str, str],
    ) -> None:
        clauses: list[str] = []
        last_col = ""
        for col in self.cols:
            position = f"AFTER {last_col}" if last_col else "FIRST"
            col_type = self.present.get(col, "")
            if col in added:
                clauses.append(
                    f"\n\t ADD COLUMN {col} {col_type} {_COLLATE} DEFAULT NULL {position}"
                )
            if col in changed:
                clauses.append(
                    f"\n\t CHANGE COLUMN {col} {col} {col_type} {_COLLATE} DEFAULT NULL {position}"
                )
            last_col = col

        for field, field_type in removed.items():
            if _is_id(field):
                continue
            clauses.append(
                f"\n\t CHANGE COLUMN {field} _{field} {field_type} {_COLLATE} DEFAULT NULL AFTER {last_col}"
            )

        execute(self.tx, f"\n ALTER TABLE {self.table} " + ",".join(clauses) + ";")

    def drop(self) -> None:
        self._rename_to_hidden()

    def limit_offset(self, start: int, count: int) -> str:
        return f"LIMIT {start},{count}"


class DmDDL(DDLBase):
    """DM dialect."""

    def is_support_sequence(self) -> bool:
        return False

    def desc(self) -> tuple[list[str], dict[str, str]]:
        query = """
		SELECT column_name AS column_name,
			CASE data_type 
				WHEN 'VARCHAR' THEN CONCAT('varchar','(',CAST(data_length AS varchar),')') 
				WHEN 'NUMERIC' THEN CONCAT('decimal','(',CAST(data_precision AS varchar),',',CAST(data_scale AS varchar),')') 
				ELSE lower(data_type)
			END AS data_type 
		FROM user_tab_columns 
		WHERE table_name = ?
	"""
        rows = select(self.tx, query, self.table)
        present, cols = res_as_map_slice(rows, False, "column_name", "data_type")
        return cols, present

    def create(self) -> None:
        lines = [f"\n CREATE TABLE {self.table} ( \n"]
        for col in self.cols:
            null = "NOT NULL" if _is_id(col) else "NULL"
            lines.append(f"\t {col} {self.present.get(col, '')} {null}, \n")
        lines.append(f"\t CONSTRAINT {self.table}_PK PRIMARY KEY (id) \n")
        lines.append(" );")
        execute(self.tx, "".join(lines))

    def alter(
        self,
        added: Mapping[str, str],
        changed: Mapping[str, str],
        removed: Mapping[str, str],
    ) -> None:
        for col in self.cols:
            col_type = self.present.get(col, "")
            if col in added:
                execute(self.tx, f"ALTER TABLE {self.table} ADD {col} {col_type} NULL;")
            if col in changed:
                execute(self.tx, f"ALTER TABLE {self.table} MODIFY {col} {col_type} NULL;")

        for field in removed:
            if _is_id(field):
                continue
            execute(self.tx, f"ALTER TABLE {self.table} RENAME COLUMN {field} TO _{field};")

    def drop(self) -> None:
        self._rename_to_hidden()

    def limit_offset(self, start: int, count: int) -> str:
        return f"LIMIT {start},{count}"


class MsSqlDDL(DDLBase):
    """SQL Server dialect."""

    def is_support_sequence(self) -> bool:
        return False

    def desc(self) -> tuple[list[str], dict[str, str]]:
        query = """
		SELECT X1.name AS column_name,
			CASE X2.name 
				WHEN 'varchar' THEN X2.name+'('+CONVERT(VARCHAR(10),X1.length)+')' 
				WHEN 'numeric' THEN X2.name+'('+CONVERT(VARCHAR(2),X1.xprec)+','+CONVERT(VARCHAR(2),X1.xscale)+')' 
				ELSE X2.name
			END AS data_type
		FROM dbo.sysobjects T 
			INNER JOIN dbo.syscolumns X1 ON X1.id = T.id
			INNER JOIN dbo.systypes X2 ON X2.xusertype = X1.xtype
		WHERE T.id = X1.id AND T.xtype = 'U' AND T.status >= 0 AND T.name = ?
		ORDER BY X1.colid ASC
	"""
        rows = select(self.tx, query, self.table)
        present, cols = res_as_map_slice(rows, False, "column_name", "data_type")
        return cols, present

    def create(self) -> None:
        lines = [f"\n CREATE TABLE {self.table} ( \n"]
        for col in self.cols:
            col_type = self.present.get(col, "")
            if _is_id(col):
                lines.append(f"\t {col} {col_type} NOT NULL, \n")
            else:
                lines.append(f"\t {col} {col_type}  DEFAULT NULL, \n")
        lines.append(f"\t CONSTRAINT {self.table}_PK PRIMARY KEY (id) \n")
        lines.append(" ) ;")
        execute(self.tx, "".join(lines))

    def alter(
        self,
        added: Mapping[str, str],
        changed: Mapping[str, str],
        removed: Mapping[str, str],
    ) -> None:
        for col in self.cols:
            col_type = self.present.get(col, "")
            if col in added:
                execute(self.tx, f"ALTER TABLE {self.table} ADD {col} {col_type} NULL;")
            if col in changed:
                logger.info("%s => %s :: %s", col, changed[col], col_type)
                execute(
                    self.tx, f"ALTER TABLE {self.table} ALTER COLUMN {col} {col_type} NULL;"
                )

        for field in removed:
            if _is_id(field):
                continue
            execute(
                self.tx,
                f"EXEC sp_rename '{self.table}.{field}', '_{field}', 'COLUMN';",
            )

    def drop(self) -> None:
        execute(self.tx, f"EXEC sp_rename {self.table},_{self.table} ;")

    def limit_offset(self, start: int, count: int) -> str:
        return f"OFFSET {start} ROWS FETCH NEXT {count} ROWS ONLY"


_DIALECTS: dict[str, type[DDLBase]] = {
    "mysql": MySqlDDL,
    "dm": DmDDL,
    "mssql": MsSqlDDL,
}


def new_ddl(
    tx: Any,
    driver: str,
    table: str = "*",
    cols: Sequence[str] | None = None,
    present: Mapping[str, str] | None = None,
) -> DDLBase:
    """The structure helper for database ``driver``."""
    try:
        dialect = _DIALECTS[driver]
    except KeyError:
        raise ValueError(f"unsupported database driver {driver!r}") from None
    return dialect(tx, table, cols, present)