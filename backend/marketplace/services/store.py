"""
Backing store contract for the pagination engine.

The engine only reads: find() for a page window and count() for the total.
insert() exists on the concrete stores so resource services and fixtures
can populate them.
"""
from __future__ import annotations

import copy
import json
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Any, Protocol, runtime_checkable

from .predicates import Predicate, Projection, SortDirection, SortSpec, resolve_field


@runtime_checkable
class DocumentStore(Protocol):
    """A single collection of schemaless records."""

    name: str

    def find(
        self,
        predicate: Predicate,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
        projection: Projection | None = None,
    ) -> list[dict[str, Any]]:
        ...

    def count(self, predicate: Predicate) -> int:
        ...


def isoformat_utc(value: date) -> str:
    """ISO-8601 text for a date or datetime. Datetimes are shifted to UTC; naive ones are taken as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    return value.isoformat()


def json_default(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return isoformat_utc(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def prepare_record(record: dict[str, Any]) -> dict[str, Any]:
    """
    Fill in id and createdAt and reduce the record to JSON types.

    Dates become ISO-8601 strings, so every store compares the same values.
    """
    doc = dict(record)
    doc.setdefault("id", uuid.uuid4().hex)
    doc.setdefault("createdAt", datetime.now(timezone.utc).isoformat())
    return json.loads(json.dumps(doc, default=json_default))


def sort_key(value: Any) -> tuple:
    """Order values like SQLite orders json_extract() results: NULL < numbers < text."""
    if value is None:
        return (0, 0)
    if isinstance(value, (bool, int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, repr(value))


class MemoryDocumentStore:
    """List-backed DocumentStore. Ties in sort order keep insertion order."""

    def __init__(self, name: str, records: list[dict[str, Any]] | None = None):
        self.name = name
        self._records: list[dict[str, Any]] = []
        self._lock = threading.Lock()
        for record in records or ():
            self.insert(record)

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        doc = prepare_record(record)
        with self._lock:
            self._records.append(copy.deepcopy(doc))
        return doc

    def find(
        self,
        predicate: Predicate,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
        projection: Projection | None = None,
    ) -> list[dict[str, Any]]:
        with self._lock:
            matched = [r for r in self._records if predicate.matches(r)]
        if sort is not None:
            matched.sort(
                key=lambda r: sort_key(resolve_field(r, sort.field)),
                reverse=sort.direction is SortDirection.DESC,
            )
        # slice bounds clamp; page numbers past sys.maxsize just give an empty window
        start = max(skip, 0)
        stop = None if limit is None else start + max(limit, 0)
        window = matched[start:stop]
        return [
            projection.apply(copy.deepcopy(r)) if projection else copy.deepcopy(r)
            for r in window
        ]

    def count(self, predicate: Predicate) -> int:
        with self._lock:
            return sum(1 for r in self._records if predicate.matches(r))
