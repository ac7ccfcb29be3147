"""
SQLite-backed document store.

Records of every collection live as JSON bodies in one `documents` table.
Predicates compile to parameterized SQL over json_extract(); field paths,
values and the search needle are always bound as ? parameters, never
interpolated into the statement.
"""
from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, Generator, Iterable

import structlog

from .predicates import AnyOf, Clause, Condition, Predicate, Projection, SortDirection, SortSpec
from .store import isoformat_utc, json_default, prepare_record

logger = structlog.get_logger("marketplace.store")

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    collection TEXT NOT NULL,
    id TEXT NOT NULL,
    body TEXT NOT NULL,
    UNIQUE (collection, id)
);
CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents (collection);
"""

_COMPARISON_SQL = {"gt": ">", "gte": ">=", "lt": "<", "lte": "<="}

# LIMIT and OFFSET must fit a signed 64-bit SQLite integer
_MAX_SQL_INTEGER = 2**63 - 1


def _casefold(value: Any) -> str | None:
    return value.casefold() if isinstance(value, str) else None


def _bind(value: Any) -> Any:
    """Convert a filter value to what json_extract() would return for it."""
    if isinstance(value, (datetime, date)):
        return isoformat_utc(value)
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=json_default)
    return value


class SqlQuery:
    """Accumulates WHERE / ORDER BY / LIMIT pieces for one collection."""

    def __init__(self, collection: str):
        self._conditions: list[str] = ["collection = ?"]
        self._params: list[Any] = [collection]
        self._order_by: list[str] = []
        self._order_params: list[Any] = []
        self._limit: int | None = None
        self._offset: int | None = None

    def where(self, condition: str, *params: Any) -> SqlQuery:
        self._conditions.append(condition)
        self._params.extend(params)
        return self

    def filter(self, predicate: Predicate) -> SqlQuery:
        for clause in predicate.clauses:
            sql, params = compile_clause(clause)
            self.where(sql, *params)
        return self

    def sort(self, spec: SortSpec | None) -> SqlQuery:
        if spec is not None:
            expr, params = field_expression(spec.field)
            direction = "ASC" if spec.direction is SortDirection.ASC else "DESC"
            self._order_by.append(f"{expr} {direction}")
            self._order_params.extend(params)
        return self

    def paginate(self, skip: int, limit: int | None) -> SqlQuery:
        self._offset = min(max(0, int(skip)), _MAX_SQL_INTEGER)
        self._limit = None if limit is None else min(max(0, int(limit)), _MAX_SQL_INTEGER)
        return self

    def _build_where(self) -> str:
        return "WHERE " + " AND ".join(self._conditions)

    def _build_tail(self) -> str:
        # ties fall back to insertion order
        parts = [f"ORDER BY {', '.join(self._order_by + ['seq ASC'])}"]
        if self._limit is not None or self._offset:
            parts.append(f"LIMIT {self._limit if self._limit is not None else -1}")
            parts.append(f"OFFSET {self._offset or 0}")
        return " ".join(parts)

    def build_count(self) -> tuple[str, list[Any]]:
        sql = f"SELECT COUNT(*) FROM documents {self._build_where()}"
        return sql, list(self._params)

    def build_select(self) -> tuple[str, list[Any]]:
        sql = f"SELECT body FROM documents {self._build_where()} {self._build_tail()}"
        return sql, list(self._params) + list(self._order_params)


def field_expression(field: str) -> tuple[str, list[Any]]:
    """json_extract() expression for a dotted field path."""
    parts = field.split(".")
    if any('"' in p or not p for p in parts):
        # not addressable as a JSON path; behaves like a missing field
        return "NULL", []
    path = "$" + "".join(f'."{p}"' for p in parts)
    return "json_extract(body, ?)", [path]


def json_type_expression(params: list[Any]) -> str:
    """json_type() for the same path; 'text' only for JSON strings, never objects or arrays."""
    return "json_type(body, ?)" if params else "NULL"


def compile_condition(cond: Condition) -> tuple[str, list[Any]]:
    expr, params = field_expression(cond.field)
    if cond.op == "eq":
        return f"{expr} IS ?", params + [_bind(cond.value)]
    if cond.op == "ne":
        return f"{expr} IS NOT ?", params + [_bind(cond.value)]
    if cond.op == "in":
        values = [_bind(v) for v in cond.value if v is not None]
        if not values:
            return "0", []
        placeholders = ", ".join("?" for _ in values)
        return f"{expr} IN ({placeholders})", params + values
    if cond.op == "contains":
        return (
            f"({json_type_expression(params)} = 'text' AND instr(casefold({expr}), ?) > 0)",
            params + params + [cond.value.casefold()],
        )
    if cond.value is None or isinstance(cond.value, (list, tuple, dict)):
        return "0", []
    value = _bind(cond.value)
    # ordering only compares like with like, numbers with numbers, text with text
    if isinstance(value, (bool, int, float)):
        type_check = f"typeof({expr}) IN ('integer', 'real')"
    elif isinstance(value, str):
        # json_extract() returns objects and arrays as text too
        type_check = f"{json_type_expression(params)} = 'text'"
    else:
        return "0", []
    op = _COMPARISON_SQL[cond.op]
    return (
        f"({type_check} AND {expr} {op} ?)",
        params + params + [value],
    )


def compile_clause(clause: Clause) -> tuple[str, list[Any]]:
    if isinstance(clause, AnyOf):
        pieces = [compile_condition(c) for c in clause.conditions]
        sql = "(" + " OR ".join(p[0] for p in pieces) + ")"
        return sql, [param for p in pieces for param in p[1]]
    return compile_condition(clause)


class SQLiteCollection:
    """DocumentStore over one collection of a SQLiteDocumentDatabase."""

    def __init__(self, database: SQLiteDocumentDatabase, name: str):
        self.database = database
        self.name = name

    def find(
        self,
        predicate: Predicate,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
        projection: Projection | None = None,
    ) -> list[dict[str, Any]]:
        query = SqlQuery(self.name).filter(predicate).sort(sort)
        if skip or limit is not None:
            query.paginate(skip, limit)
        sql, params = query.build_select()
        with self.database.connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        records = [json.loads(row["body"]) for row in rows]
        if projection is not None:
            records = [projection.apply(r) for r in records]
        return records

    def count(self, predicate: Predicate) -> int:
        sql, params = SqlQuery(self.name).filter(predicate).build_count()
        with self.database.connection() as conn:
            return conn.execute(sql, params).fetchone()[0]

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        return self.insert_many([record])[0]

    def insert_many(self, records: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
        docs = [prepare_record(r) for r in records]
        with self.database.connection() as conn:
            conn.executemany(
                "INSERT INTO documents (collection, id, body) VALUES (?, ?, ?)",
                [(self.name, str(d["id"]), json.dumps(d, default=json_default)) for d in docs],
            )
            conn.commit()
        return docs


class SQLiteDocumentDatabase:
    """
    One SQLite file holding every collection.

    Each operation opens its own connection, so a fetch and a count issued
    from different threads never share a cursor.
    """

    def __init__(self, path: str | Path, timeout: int = 30):
        self.path = Path(path)
        self.timeout = timeout

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.path), timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute(f"PRAGMA busy_timeout = {self.timeout * 1000}")
        # WAL lets the count and the page fetch read concurrently
        conn.execute("PRAGMA journal_mode = WAL")
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        return conn

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        conn = self.connect()
        try:
            yield conn
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create the documents table if it does not exist yet."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)
            conn.commit()
        logger.info("document_store_ready", path=str(self.path))

    def collection(self, name: str) -> SQLiteCollection:
        return SQLiteCollection(self, name)

    def collection_sizes(self) -> dict[str, int]:
        with self.connection() as conn:
            rows = conn.execute(
                "SELECT collection, COUNT(*) AS n FROM documents GROUP BY collection ORDER BY collection"
            ).fetchall()
        return {row["collection"]: row["n"] for row in rows}
