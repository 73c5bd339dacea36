# phoenixerp

The data-access and utility layer of a table-driven ERP back end. The query
helpers take a DB-API 2.0 connection (any object with a `cursor()` method)
whose driver uses `?` placeholders, such as `sqlite3`.

## Modules

- **`phoenixerp.results`**: reshape query rows (lists of `dict[str, str]`).
  - `res_as_map` and `res_as_map_slice` map one column to another. They
    lower-case keys and values unless `sensitive` is true. `res_as_map_slice`
    also returns the keys in row order.
  - `res_as_map_string_int` and `res_as_map_int` do the same with integer
    values or keys.
  - `res_as_map2` indexes whole rows and `res_as_slice_string` collects one
    column.
  - `slice_as_set` drops duplicates and keeps the first of each.
  - `string_slice_int` appends integers to a JSON array without repeats.
  - A missing column raises `KeyError`; text that is not an integer raises
    `ValueError`.
- **`phoenixerp.maps`**:
  - `compare_map(latest, present)` returns `(added, changed, removed)`.
  - `compare_map_changed` returns the entries of `present` that are missing
    from `latest` or differ from it, ignoring case.
  - `get_url_values` keeps the last value of each multi-valued form field.
  - `format_map` renders `{"k": "v", ...}` for logs.
- **`phoenixerp.ordered_set`**: `OrderedSet` keeps insertion order and
  offers `append`, `remove`, `reset`, `values`, `to_json`, `len`, `in` and
  iteration. `OrderedSet.from_json` builds it from a JSON integer array.
- **`phoenixerp.config`**:
  - `load_config(directory)` reads `config.json`, with the keys `level`,
    `aesKey`, `aesIv`, `host`, `port`, `dbDriver` and `dbDataSource`. It
    returns a `Config` and sets the package's log level.
  - `Config.aes_stream`, `aes_encode_string` and `aes_decode_string` apply
    AES-CTR with the configured hex key and IV.
  - `generate_token(config, ...)` builds a base64, AES-encrypted session
    token that expires after the given number of seconds.
- **`phoenixerp.binding`**: `from_row(cls, source)` fills a dataclass. It
  fills the fields whose metadata has a `"name"` key, taking each from that
  key of `source`. Field types may be `str`, `int`, `float` or `datetime`
  (`YYYY-MM-DD HH:MM:SS`).
- **`phoenixerp.tree`**: `RelationTree(rows, children).build()` returns each
  child's row followed by its ancestors' rows, linked through `parent_id_`,
  with no repeats.
- **`phoenixerp.cache`**: `DataServiceCache` is a thread-safe store of
  `DataServiceEntry(method, source, timeout)` items, keyed by table and
  service. It offers `set`, `get`, `delete` and `delete_by_table`.
- **`phoenixerp.idgen`**:
  - `generate_id` makes 32-character ids: a seconds prefix and a UUID,
    base32 encoded.
  - `generate_order_id` returns the time in nanoseconds.
  - `get_now` returns `YYYY-MM-DD HH:MM:SS`.
  - `format_args` describes a call site and its arguments for debug logs.
- **`phoenixerp.columns`**: `SysColumn`, the `SYS_COLUMNS` that every managed
  table carries, and `is_save_ignore(field)`.
- **`phoenixerp.query`**:
  - `select` returns rows as lower-cased column-to-text dictionaries. It
    leaves out NULLs and the `order_` column and normalises timestamps.
  - `select_row` returns the first row as raw values. It raises
    `NoRowsError` when there is none.
  - `select_columns` returns the column names.
  - `execute` returns the affected row count.
  - `insert`, `update` and `delete` run statements.
- **`phoenixerp.relation`**: `query_relation_children` and
  `query_relation_parents` walk the `parent_id_` links of a table.
- **`phoenixerp.ordering`**: `move_order` moves a row in front of another,
  or to the end of a level, by rewriting `order_` values.
- **`phoenixerp.autono`**:
  - `auto_no(tx, kind_code, num, values)` builds numbers from the rule items
    in `sys_auto_no_item`: `STRING`, `VALUES`, `DATETIME` and a zero-padded
    `SEQ` counter kept in `sys_auto_no`. It raises `AutoNoError` when it
    cannot build them.
  - `format_layout` formats a time with a reference layout such as
    `20060102`.
- **`phoenixerp.ddl`**: `new_ddl(tx, driver, ...)` returns `MySqlDDL`
  (`"mysql"`), `DmDDL` (`"dm"`) or `MsSqlDDL` (`"mssql"`). Each offers
  `exists`, `desc`, `create`, `alter`, `drop`, `limit_offset` and
  `is_support_sequence`. `alter` and `drop` rename columns and tables with a
  leading underscore rather than removing them.

## Example

```python
import sqlite3
from phoenixerp.query import select
from phoenixerp.tree import RelationTree

conn = sqlite3.connect(":memory:")
conn.execute("CREATE TABLE t (id TEXT, parent_id_ TEXT, order_ INTEGER)")
conn.execute("INSERT INTO t VALUES ('a', NULL, 1), ('b', 'a', 2)")

rows = select(conn, "SELECT * FROM t")
print(RelationTree(rows, ["b"]).build())
# [{'id': 'b', 'parent_id_': 'a'}, {'id': 'a'}]
```

## What it does not do

This is a library only.

- It has no HTTP server, request routing or handlers.
- It has no script runtime and no command-line program.
- It does not open database connections itself. The caller supplies the
  connection and manages its transactions.

## Tests

The test suite uses pytest, which is available through the `test` extra.