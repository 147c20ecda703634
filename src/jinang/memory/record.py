"""Record codec: one markdown list line ⇄ one MemoryRecord.

Line format::

    - 2025/05/31 14:30 每个PR至少需要2个人review #流程管理 #评分:8 #有效期:长期

A ``#`` inside the content is written as ``\\#`` so the first `` #`` on the
line always starts the tag run. Lines written before escaping existed still
decode; a literal `` #word`` in their content truncates it there.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from jinang.memory.tagging import normalize_tag

RECORD_MARKER = "- "
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M"

RATING = 8
RETENTION = "长期"
RATING_TAG = f"#评分:{RATING}"
RETENTION_TAG = f"#有效期:{RETENTION}"

UNKNOWN_KEY = "unknown"

RESERVED_TAGS = frozenset(
    {
        "#敏捷开发",
        "#测试",
        "#部署",
        "#前端开发",
        "#后端开发",
        "#AI",
        "#最佳实践",
        "#流程管理",
        "#工具使用",
        "#其他",
    }
)

_LINE_RE = re.compile(r"^- (\d{4}/\d{2}/\d{2} \d{2}:\d{2}) (.*?) (#\S.*)$")
# Every separator str.splitlines() breaks on, so a record stays one line for any reader.
_WHITESPACE_RE = re.compile(r"\s*[\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029]+\s*")


def derive_key(tags: Iterable[str]) -> str:
    """First tag that is neither an annotation (``name:value``) nor reserved."""
    for tag in tags:
        if ":" in tag or tag in RESERVED_TAGS:
            continue
        return tag[1:]
    return UNKNOWN_KEY


@dataclass
class MemoryRecord:
    """One persisted fact."""

    timestamp: str
    content: str
    tags: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return derive_key(self.tags)


def normalize_content(content: str) -> str:
    """Strip and fold line breaks so the content fits on one record line."""
    return _WHITESPACE_RE.sub(" ", content.strip())


def escape_content(content: str) -> str:
    return content.replace("#", "\\#")


def unescape_content(content: str) -> str:
    return content.replace("\\#", "#")


def format_timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def format_record_line(
    content: str,
    tags: Iterable[str],
    now: datetime | None = None,
) -> str:
    """Encode a record line. Rating and retention tags are always appended."""
    tag_run = [normalize_tag(t) for t in tags] + [RATING_TAG, RETENTION_TAG]
    body = escape_content(normalize_content(content))
    return f"{RECORD_MARKER}{format_timestamp(now)} {body} {' '.join(tag_run)}"


def parse_record_line(line: str) -> MemoryRecord | None:
    """Decode a line, or return None if it is not a well-formed record."""
    if not line.startswith(RECORD_MARKER):
        return None
    match = _LINE_RE.match(line.rstrip())
    if not match:
        return None
    timestamp, content, tag_run = match.groups()
    tags = [t for t in tag_run.split() if t.startswith("#")]
    return MemoryRecord(timestamp=timestamp, content=unescape_content(content), tags=tags)
