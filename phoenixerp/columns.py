"""System columns that every managed table carries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SysColumn:
    """A column created automatically by the system."""

    save_ignore: bool
    code: str
    name: str
    type: str
    description: str


SYS_COLUMNS: tuple[SysColumn, ...] = (
    SysColumn(True, "id", "ID", "VARCHAR(32)", "Globally unique id of the record (system created)"),
    SysColumn(True, "parent_id_", "Parent ID", "VARCHAR(32)", "Parent id used by the tree service (system created)"),
    SysColumn(True, "order_", "Order", "BIGINT", "Ordering key used by drag-and-drop sorting (system created)"),
    SysColumn(True, "create_depart_id_", "Department ID", "VARCHAR(32)", "Department id of the record's creator (system created)"),
    SysColumn(True, "create_depart_code_", "Department code", "VARCHAR(32)", "Department code of the record's creator (system created)"),
    SysColumn(True, "create_depart_name_", "Department name", "VARCHAR(256)", "Department name of the record's creator (system created)"),
    SysColumn(True, "create_user_id_", "User ID", "VARCHAR(32)", "Id of the record's creator (system created)"),
    SysColumn(True, "create_user_code_", "User code", "VARCHAR(32)", "Staff code of the record's creator (system created)"),
    SysColumn(True, "create_user_name_", "User name", "VARCHAR(32)", "User name of the record's creator (system created)"),
    SysColumn(True, "create_at_", "Created at", "DATETIME", "Creation time of the record (system created)"),
    SysColumn(True, "update_at_", "Updated at", "DATETIME", "Last update time of the record (system created)"),
)

_SAVE_IGNORED = frozenset(column.code for column in SYS_COLUMNS if column.save_ignore)


def is_save_ignore(field: str) -> bool:
    """Whether ``field`` is a system column that client saves must not write."""
    return field in _SAVE_IGNORED