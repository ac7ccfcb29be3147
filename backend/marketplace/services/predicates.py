"""
Typed filter predicates, projections and sort specs.

Every list query in the service layer is described with these values instead
of ad-hoc dicts, so the in-memory store and the SQLite store can both
evaluate the same predicate and produce the same rows.

A Predicate is a conjunction of clauses. A clause is either a single
Condition (field, op, value) or an AnyOf group of Conditions (OR).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Union

OPERATORS = frozenset({"eq", "ne", "gt", "gte", "lt", "lte", "in", "contains"})

_MISSING = object()


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def resolve_field(record: Mapping[str, Any], path: str) -> Any:
    """Walk a dotted path through nested mappings. Missing -> None."""
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part, _MISSING)
        if current is _MISSING:
            return None
    return current


def _compare(actual: Any, op: str, expected: Any) -> bool:
    try:
        if op == "gt":
            return actual > expected
        if op == "gte":
            return actual >= expected
        if op == "lt":
            return actual < expected
        return actual <= expected
    except TypeError:
        # mixed types never match an ordering condition
        return False


@dataclass(frozen=True)
class Condition:
    """A single field constraint."""

    field: str
    op: str = "eq"
    value: Any = None

    def __post_init__(self):
        if not self.field:
            raise ValueError("Condition field must be a non-empty name")
        if self.op not in OPERATORS:
            raise ValueError(f"Unknown operator '{self.op}'. Must be one of: {sorted(OPERATORS)}")
        if self.op == "in":
            object.__setattr__(self, "value", tuple(self.value or ()))
        elif self.op == "contains":
            object.__setattr__(self, "value", str(self.value))

    def matches(self, record: Mapping[str, Any]) -> bool:
        actual = resolve_field(record, self.field)
        if self.op == "eq":
            return actual == self.value
        if self.op == "ne":
            return actual != self.value
        if actual is None:
            return False
        if self.op == "in":
            return actual in self.value
        if self.op == "contains":
            return isinstance(actual, str) and self.value.casefold() in actual.casefold()
        if self.value is None:
            return False
        return _compare(actual, self.op, self.value)


@dataclass(frozen=True)
class AnyOf:
    """OR-group of conditions. Matches when any member matches."""

    conditions: tuple[Condition, ...]

    def __post_init__(self):
        if not self.conditions:
            raise ValueError("AnyOf requires at least one condition")
        object.__setattr__(self, "conditions", tuple(self.conditions))

    def matches(self, record: Mapping[str, Any]) -> bool:
        return any(c.matches(record) for c in self.conditions)


Clause = Union[Condition, AnyOf]


@dataclass(frozen=True)
class Predicate:
    """Conjunction (AND) of clauses. An empty predicate matches everything."""

    clauses: tuple[Clause, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "clauses", tuple(self.clauses))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> Predicate:
        """Equality constraints from a plain {field: value} map. None values are skipped."""
        if not mapping:
            return cls()
        return cls(tuple(Condition(k, "eq", v) for k, v in mapping.items() if v is not None))

    @property
    def is_empty(self) -> bool:
        return not self.clauses

    def where(self, field_name: str, op: str = "eq", value: Any = None) -> Predicate:
        return Predicate(self.clauses + (Condition(field_name, op, value),))

    def and_(self, other: Predicate | Clause | None) -> Predicate:
        if other is None:
            return self
        if isinstance(other, Predicate):
            return Predicate(self.clauses + other.clauses)
        return Predicate(self.clauses + (other,))

    def matches(self, record: Mapping[str, Any]) -> bool:
        return all(clause.matches(record) for clause in self.clauses)


def build_search_group(search: str | None, fields: Iterable[str] | None) -> AnyOf | None:
    """
    Case-insensitive substring OR-group across the search fields.

    Returns None when either the search text or the field list is empty, so
    a blank search can never turn into an always-true or always-false clause.
    This is the only place search matching is defined; the functional
    paginator and the QueryBuilder both call it.
    """
    text = (search or "").strip()
    names = [f for f in (fields or ()) if f]
    if not text or not names:
        return None
    return AnyOf(tuple(Condition(name, "contains", text) for name in names))


def combine_filters(extra: Predicate | Mapping[str, Any] | None, search_group: AnyOf | None) -> Predicate:
    """Structured filter AND search group (the AND is dropped when there is no group)."""
    base = extra if isinstance(extra, Predicate) else Predicate.from_mapping(extra)
    return base.and_(search_group)


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True)
class Projection:
    """
    Field inclusion or exclusion applied to every returned record.

    Include projections always keep the record id.
    """

    fields: frozenset[str] = field(default_factory=frozenset)
    exclude: bool = True

    @classmethod
    def excluding(cls, *names: str) -> Projection:
        return cls(frozenset(names), exclude=True)

    @classmethod
    def including(cls, *names: str) -> Projection:
        return cls(frozenset(names), exclude=False)

    @classmethod
    def parse(cls, spec: str | Iterable[str] | Projection | None) -> Projection | None:
        """
        Parse "-passwordHash -__v" (exclusion) or "fullName email" (inclusion).

        Returns None for an empty spec. Mixing both styles raises ValueError.
        """
        if spec is None or isinstance(spec, Projection):
            return spec
        tokens = spec.split() if isinstance(spec, str) else [t.strip() for t in spec]
        tokens = [t for t in tokens if t and t != "-"]
        if not tokens:
            return None
        negated = {t.startswith("-") for t in tokens}
        if len(negated) > 1:
            raise ValueError("Projection cannot mix included and excluded fields")
        if negated.pop():
            return cls.excluding(*(t[1:] for t in tokens))
        return cls.including(*tokens)

    def apply(self, record: Mapping[str, Any]) -> dict[str, Any]:
        if self.exclude:
            return {k: v for k, v in record.items() if k not in self.fields}
        return {k: v for k, v in record.items() if k in self.fields or k == "id"}
