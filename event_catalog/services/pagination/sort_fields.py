"""Closed registry of event fields that may be filtered and sorted on.

Every member of ``SortField`` maps to a typed accessor. The mapping is checked
for completeness at import time so a new member cannot silently fall through
to some default value when a cursor is built from a record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from event_catalog.db.types import as_utc


class SortField(str, Enum):
    ID = "id"
    CREATED_AT = "created_at"
    PRICE = "price"
    START_TIME = "start_time"
    END_TIME = "end_time"
    EVENT_NAME = "event_name"
    CITY = "city"
    TYPE = "type"


class ValueKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class FieldSpec:
    kind: ValueKind
    accessor: Callable[[Any], Any]


IDENTIFIER_FIELD = SortField.ID
DEFAULT_SORT_FIELD = SortField.CREATED_AT


def _text(attr: str) -> FieldSpec:
    return FieldSpec(ValueKind.TEXT, lambda record: str(getattr(record, attr) or ""))


def _number(attr: str) -> FieldSpec:
    return FieldSpec(ValueKind.NUMBER, lambda record: float(getattr(record, attr) or 0))


def _timestamp(attr: str) -> FieldSpec:
    return FieldSpec(ValueKind.TIMESTAMP, lambda record: as_utc(getattr(record, attr)))


FIELD_SPECS: dict[SortField, FieldSpec] = {
    SortField.ID: _text("id"),
    SortField.CREATED_AT: _timestamp("created_at"),
    SortField.PRICE: _number("price"),
    SortField.START_TIME: _timestamp("start_time"),
    SortField.END_TIME: _timestamp("end_time"),
    SortField.EVENT_NAME: _text("event_name"),
    SortField.CITY: _text("city"),
    SortField.TYPE: _text("type"),
}

_missing = [member.value for member in SortField if member not in FIELD_SPECS]
if _missing:
    raise RuntimeError(f"Sort fields without accessor: {', '.join(_missing)}")


def parse_sort_field(name: str | SortField | None) -> SortField | None:
    if isinstance(name, SortField):
        return name
    text = str(name or "").strip()
    if not text:
        return None
    try:
        return SortField(text)
    except ValueError:
        return None


def is_sortable(name: str | SortField | None) -> bool:
    return parse_sort_field(name) is not None


def sortable_field_names() -> list[str]:
    return [member.value for member in SortField]


def field_kind(field: SortField) -> ValueKind:
    return FIELD_SPECS[field].kind


def value_of(record: Any, field: SortField) -> Any:
    return FIELD_SPECS[field].accessor(record)
