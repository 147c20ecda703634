"""Declarative memory store — a single append-only markdown file.

The file is the source of truth. Nothing is cached between calls: every
recall re-reads and re-parses the whole file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Literal

from jinang.errors import IOFailure, ValidationFailure
from jinang.memory.matcher import matches
from jinang.memory.record import MemoryRecord, format_record_line, parse_record_line
from jinang.memory.tagging import RuleClassifier, TagClassifier

logger = logging.getLogger(__name__)

STORE_HEADER = "# 陈述性记忆\n\n## 高价值记忆（评分 ≥ 7）\n\n"


@dataclass
class AppendResult:
    """Outcome of a remember call."""

    content: str
    path: Path
    action: Literal["created"]
    timestamp: str
    line: str = ""
    tags: list[str] = field(default_factory=list)


class MemoryStore:
    """Read/append access to one declarative memory file."""

    def __init__(
        self,
        path: Path,
        classifier: TagClassifier | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.path = Path(path)
        self.classifier = classifier or RuleClassifier()
        self.clock = clock
        self.last_match_count = 0

    # ── Writer ────────────────────────────────────────────────

    def remember(self, content: str) -> AppendResult:
        """Append one fact. Creates the file (with header) on first write."""
        if not content or not content.strip():
            raise ValidationFailure("记忆内容不能为空")

        now = self.clock()
        tags = self.classifier.classify(content)
        line = format_record_line(content, tags, now=now)
        try:
            line.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationFailure(f"记忆内容包含无法编码为 UTF-8 的字符：{e.reason}") from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self._create(line):
                self._append(line)
        except OSError as e:
            raise IOFailure(self.path, e) from e

        logger.info("Remembered %s in %s", tags, self.path)
        return AppendResult(
            content=content,
            path=self.path,
            action="created",
            timestamp=now.isoformat(timespec="seconds"),
            line=line,
            tags=tags,
        )

    def _create(self, line: str) -> bool:
        """Write header + first record. False if the file already exists."""
        try:
            with self.path.open("x", encoding="utf-8") as f:
                f.write(f"{STORE_HEADER}{line}\n")
        except FileExistsError:
            return False
        logger.info("Created memory store: %s", self.path)
        return True

    def _append(self, line: str) -> None:
        """Single append-mode write: blank separator line, then the record."""
        last = self._last_byte()
        if last is None:
            # Empty file (e.g. touched by hand): it still gets the header.
            entry = f"{STORE_HEADER}{line}\n"
        elif last == b"\n":
            entry = f"\n{line}\n"
        else:
            entry = f"\n\n{line}\n"
        with self.path.open("a", encoding="utf-8") as f:
            f.write(entry)

    def _last_byte(self) -> bytes | None:
        with self.path.open("rb") as f:
            if f.seek(0, 2) == 0:
                return None
            f.seek(-1, 2)
            return f.read(1)

    # ── Reader ────────────────────────────────────────────────

    def recall(self, query: str | None = None) -> list[MemoryRecord]:
        """Return records matching ``query`` in file order. Empty query → all."""
        self.last_match_count = 0
        records = [r for r in self.records() if matches(r, query)]
        self.last_match_count = len(records)
        logger.debug("Recall %r: %d match(es) in %s", query, len(records), self.path)
        return records

    def records(self) -> list[MemoryRecord]:
        """Decode every record line in the store. Missing file → []."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailure(self.path, e) from e

        records: list[MemoryRecord] = []
        # The file is "\n"-delimited; splitlines() would also break on \x0c, \u2028 etc.
        for lineno, raw in enumerate(text.split("\n"), start=1):
            line = raw.rstrip("\r")
            record = parse_record_line(line)
            if record is not None:
                records.append(record)
            elif line.startswith("- "):
                logger.debug("Skipping malformed memory line %d in %s", lineno, self.path)
        return records
