"""Query matching over decoded records."""

from __future__ import annotations

from jinang.memory.record import MemoryRecord


def matches(record: MemoryRecord, query: str | None) -> bool:
    """Case-insensitive substring match on content, key or any tag.

    An empty query matches everything.
    """
    if not query:
        return True
    q = query.lower()
    if q in record.content.lower() or q in record.key.lower():
        return True
    return any(q in tag.lower() for tag in record.tags)
