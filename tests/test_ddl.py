import pytest

from phoenixerp.ddl import DmDDL, MsSqlDDL, MySqlDDL, new_ddl


class FakeCursor:
    def __init__(self, tx):
        self.tx = tx
        self.description = None
        self.rows = []
        self.rowcount = 0

    def execute(self, query, args):
        self.tx.log.append((query, tuple(args)))
        result = self.tx.handler(query, args)
        if isinstance(result, Exception):
            raise result
        description, rows = result
        self.description = [(name,) for name in description] if description else None
        self.rows = list(rows)
        self.rowcount = len(self.rows)

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def close(self):
        pass


class FakeTx:
    def __init__(self, handler=None):
        self.log = []
        self.handler = handler or (lambda query, args: ((), ()))

    def cursor(self):
        return FakeCursor(self)

    @property
    def queries(self):
        return [query for query, _ in self.log]


COLS = ["id", "name", "qty"]
PRESENT = {"id": "VARCHAR(32)", "name": "VARCHAR(256)", "qty": "INT"}


@pytest.mark.parametrize(
    "driver, cls", [("mysql", MySqlDDL), ("dm", DmDDL), ("mssql", MsSqlDDL)]
)
def test_new_ddl_selects_dialect(driver, cls):
    ddl = new_ddl(FakeTx(), driver, "items", COLS, PRESENT)
    assert isinstance(ddl, cls)
    assert ddl.table == "items"
    assert ddl.cols == COLS


def test_new_ddl_rejects_unknown_driver():
    with pytest.raises(ValueError):
        new_ddl(FakeTx(), "oracle")


def test_new_ddl_defaults_to_any_table():
    ddl = new_ddl(FakeTx(), "mysql")
    assert ddl.table == "*"
    assert ddl.cols == []
    assert ddl.present == {}


def test_support_sequence():
    tx = FakeTx()
    assert MySqlDDL(tx).is_support_sequence() is True
    assert DmDDL(tx).is_support_sequence() is False
    assert MsSqlDDL(tx).is_support_sequence() is False


def test_limit_offset():
    tx = FakeTx()
    assert MySqlDDL(tx).limit_offset(10, 20) == "LIMIT 10,20"
    assert DmDDL(tx).limit_offset(0, 1) == "LIMIT 0,1"
    assert MsSqlDDL(tx).limit_offset(10, 20) == "OFFSET 10 ROWS FETCH NEXT 20 ROWS ONLY"


def test_exists_with_rows():
    tx = FakeTx(lambda q, a: (("id",), [("X",)]))
    assert MsSqlDDL(tx, "items").exists() is True
    assert tx.queries == ["SELECT TOP 1 'X' AS id FROM items"]


def test_exists_with_empty_table():
    tx = FakeTx(lambda q, a: (("id",), []))
    assert MsSqlDDL(tx, "items").exists() is True


def test_exists_when_query_fails():
    tx = FakeTx(lambda q, a: RuntimeError("no such table"))
    assert MySqlDDL(tx, "items").exists() is False


def test_mysql_desc_lowercases():
    tx = FakeTx(
        lambda q, a: (("Field", "Type"), [("ID", "VARCHAR(32)"), ("Name", "varchar(64)")])
    )
    cols, present = MySqlDDL(tx, "items").desc()
    assert cols == ["id", "name"]
    assert present == {"id": "varchar(32)", "name": "varchar(64)"}
    assert tx.queries == ["DESC items"]


@pytest.mark.parametrize("cls", [DmDDL, MsSqlDDL])
def test_desc_passes_table_and_reads_columns(cls):
    tx = FakeTx(
        lambda q, a: (("column_name", "data_type"), [("QTY", "INT"), ("id", "varchar(32)")])
    )
    cols, present = cls(tx, "items").desc()
    assert cols == ["qty", "id"]
    assert present == {"qty": "int", "id": "varchar(32)"}
    assert tx.log[0][1] == ("items",)


def test_mysql_create():
    tx = FakeTx()
    MySqlDDL(tx, "items", COLS, PRESENT).create()
    (query,) = tx.queries
    assert query.startswith("\n CREATE TABLE items ( \n")
    assert "\t id VARCHAR(32) COLLATE utf8mb4_general_ci NOT NULL, \n" in query
    assert "\t qty INT COLLATE utf8mb4_general_ci DEFAULT NULL, \n" in query
    assert "\t PRIMARY KEY (`id`) \n" in query
    assert query.endswith(" ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_general_ci;")
    assert query.index(" id ") < query.index(" name ") < query.index(" qty ")


def test_mysql_alter_builds_single_statement():
    tx = FakeTx()
    ddl = MySqlDDL(tx, "items", COLS, PRESENT)
    ddl.alter({"id": "x", "name": "x"}, {"qty": "x"}, {"old": "int", "ID": "x"})
    (query,) = tx.queries
    assert query.startswith("\n ALTER TABLE items ")
    assert query.endswith(";")
    assert "ADD COLUMN id VARCHAR(32) COLLATE utf8mb4_general_ci DEFAULT NULL FIRST" in query
    assert "ADD COLUMN name VARCHAR(256) COLLATE utf8mb4_general_ci DEFAULT NULL AFTER id" in query
    assert "CHANGE COLUMN qty qty INT COLLATE utf8mb4_general_ci DEFAULT NULL AFTER name" in query
    assert "CHANGE COLUMN old _old int COLLATE utf8mb4_general_ci DEFAULT NULL AFTER qty" in query
    assert "_ID" not in query
    assert query.count(",\n\t ") == 3


def test_mysql_drop():
    tx = FakeTx()
    MySqlDDL(tx, "items").drop()
    assert tx.queries == ["ALTER TABLE items RENAME TO  _items ;"]


def test_dm_create():
    tx = FakeTx()
    DmDDL(tx, "items", COLS, PRESENT).create()
    (query,) = tx.queries
    assert "\t id VARCHAR(32) NOT NULL, \n" in query
    assert "\t name VARCHAR(256) NULL, \n" in query
    assert "\t CONSTRAINT items_PK PRIMARY KEY (id) \n" in query
    assert query.endswith(" );")


def test_dm_alter_runs_one_statement_per_change():
    tx = FakeTx()
    DmDDL(tx, "items", COLS, PRESENT).alter({"name": "x"}, {"qty": "x"}, {"old": "int", "Id": "x"})
    assert tx.queries == [
        "ALTER TABLE items ADD name VARCHAR(256) NULL;",
        "ALTER TABLE items MODIFY qty INT NULL;",
        "ALTER TABLE items RENAME COLUMN old TO _old;",
    ]


def test_dm_drop():
    tx = FakeTx()
    DmDDL(tx, "items").drop()
    assert tx.queries == ["ALTER TABLE items RENAME TO  _items ;"]


def test_mssql_create():
    tx = FakeTx()
    MsSqlDDL(tx, "items", COLS, PRESENT).create()
    (query,) = tx.queries
    assert "\t id VARCHAR(32) NOT NULL, \n" in query
    assert "\t qty INT  DEFAULT NULL, \n" in query
    assert "\t CONSTRAINT items_PK PRIMARY KEY (id) \n" in query
    assert query.endswith(" ) ;")


def test_mssql_alter():
    tx = FakeTx()
    MsSqlDDL(tx, "items", COLS, PRESENT).alter({"name": "x"}, {"qty": "x"}, {"old": "int", "id": "x"})
    assert tx.queries == [
        "ALTER TABLE items ADD name VARCHAR(256) NULL;",
        "ALTER TABLE items ALTER COLUMN qty INT NULL;",
        "EXEC sp_rename 'items.old', '_old', 'COLUMN';",
    ]


def test_mssql_drop():
    tx = FakeTx()
    MsSqlDDL(tx, "items").drop()
    assert tx.queries == ["EXEC sp_rename items,_items ;"]


@pytest.mark.parametrize("cls", [MySqlDDL, DmDDL, MsSqlDDL])
def test_errors_propagate(cls):
    tx = FakeTx(lambda q, a: RuntimeError("boom"))
    ddl = cls(tx, "items", COLS, PRESENT)
    with pytest.raises(RuntimeError, match="boom"):
        ddl.create()
    with pytest.raises(RuntimeError, match="boom"):
        ddl.drop()


def test_alter_with_nothing_to_do_runs_no_statements_for_dm():
    tx = FakeTx()
    DmDDL(tx, "items", COLS, PRESENT).alter({}, {}, {})
    assert tx.queries == []