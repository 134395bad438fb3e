"""Opaque continuation tokens for cursor pagination.

A token is the URL-safe base64 form of a JSON array with one ``[tag, value]``
pair per planned sort field, in plan order. Field names are not stored; the
plan the token is decoded against supplies them. Tags:

    s  text
    n  number
    t  timestamp (ISO 8601, UTC)

Example payload for the plan ``(price, created_at, id)``::

    [["n",50.0],["t","2026-03-01T10:00:00+00:00"],["s","4c1f..."]]
"""

from __future__ import annotations

import base64
import json
import math
from datetime import datetime
from typing import Any, Sequence

from event_catalog.db.types import as_utc
from event_catalog.services.pagination.planner import QueryPlan
from event_catalog.services.pagination.sort_fields import ValueKind, field_kind

TAG_TEXT = "s"
TAG_NUMBER = "n"
TAG_TIMESTAMP = "t"

_KIND_TAGS = {
    ValueKind.TEXT: TAG_TEXT,
    ValueKind.NUMBER: TAG_NUMBER,
    ValueKind.TIMESTAMP: TAG_TIMESTAMP,
}


class InvalidCursor(ValueError):
    """The page token cannot be decoded."""


class CursorPlanMismatch(ValueError):
    """The page token was issued for a different sort plan."""


def _tag_value(value: Any) -> list:
    if isinstance(value, datetime):
        return [TAG_TIMESTAMP, as_utc(value).isoformat()]
    if isinstance(value, bool):
        raise TypeError("boolean values cannot be used as cursor positions")
    if isinstance(value, (int, float)):
        return [TAG_NUMBER, value]
    if isinstance(value, str):
        return [TAG_TEXT, value]
    raise TypeError(f"unsupported cursor value type: {type(value).__name__}")


def _untag(tag: str, raw: Any) -> Any:
    if tag == TAG_TEXT and isinstance(raw, str):
        return raw
    if tag == TAG_NUMBER and isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            number = float(raw)
        except OverflowError:
            raise InvalidCursor("invalid page token")
        if not math.isfinite(number):
            raise InvalidCursor("invalid page token")
        return number
    if tag == TAG_TIMESTAMP and isinstance(raw, str):
        try:
            return as_utc(datetime.fromisoformat(raw))
        except ValueError:
            raise InvalidCursor("invalid page token")
    raise InvalidCursor("invalid page token")


def encode_cursor(values: Sequence[Any]) -> str:
    payload = [_tag_value(value) for value in values]
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def _load_payload(token: str) -> list[tuple[str, Any]]:
    try:
        raw = base64.b64decode(str(token).encode("ascii"), altchars=b"-_", validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (ValueError, TypeError):
        raise InvalidCursor("invalid page token")
    if not isinstance(payload, list) or not payload:
        raise InvalidCursor("invalid page token")
    entries: list[tuple[str, Any]] = []
    for entry in payload:
        if not isinstance(entry, list) or len(entry) != 2 or entry[0] not in _KIND_TAGS.values():
            raise InvalidCursor("invalid page token")
        entries.append((entry[0], entry[1]))
    return entries


def decode_cursor(token: str, plan: QueryPlan) -> tuple[Any, ...]:
    """Decode ``token`` into one typed value per entry of ``plan``.

    Raises ``InvalidCursor`` for anything that is not a well-formed token and
    ``CursorPlanMismatch`` when the token's arity or value kinds do not line up
    with ``plan``, which happens when filters or the sort key change between
    page requests.
    """
    if not token:
        raise InvalidCursor("invalid page token")
    entries = _load_payload(token)
    if len(entries) != len(plan):
        raise CursorPlanMismatch("cursor mismatch: sorting criteria changed")

    values = []
    for (tag, raw), field in zip(entries, plan):
        if tag != _KIND_TAGS[field_kind(field)]:
            raise CursorPlanMismatch("cursor mismatch: sorting criteria changed")
        values.append(_untag(tag, raw))
    return tuple(values)
