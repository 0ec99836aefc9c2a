"""Per-screen text search over a full in-memory collection."""

from __future__ import annotations

from typing import Iterable, List, Type, TypeVar

from vetria.shared.domain.catalog import collection_spec
from vetria.shared.domain.records import BaseRecord

R = TypeVar("R", bound=BaseRecord)


def filter_records(record_type: Type[R], records: Iterable[R], query: str) -> List[R]:
    """Keep records whose search fields contain ``query``, ignoring case.

    An empty query returns every record. Order is preserved.
    """
    records = list(records)
    if not query:
        return records

    needle = query.casefold()
    fields = collection_spec(record_type).search_fields
    return [
        record
        for record in records
        if any(needle in str(getattr(record, field)).casefold() for field in fields)
    ]
