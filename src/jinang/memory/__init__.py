"""Declarative memory — one append-only markdown file per working directory.

Layout:
    <workdir>/.jinang/
    └── memory/
        └── declarative.md             # Header + one "- <ts> <content> #tags" line per fact

Modules:
    record.py    line ⇄ MemoryRecord codec, key derivation
    tagging.py   content → category tags (ordered substring rules)
    matcher.py   record × query → bool
    store.py     MemoryStore: remember (append) / recall (query)
"""

from jinang.memory.record import MemoryRecord
from jinang.memory.store import AppendResult, MemoryStore

__all__ = ["AppendResult", "MemoryRecord", "MemoryStore"]
