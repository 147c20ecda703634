"""Content → category tags.

Tagging is an ordered list of substring rules. Swap in any object with a
``classify(content)`` method to replace the heuristic without touching the
record codec.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

FALLBACK_TAG = "#其他"


def normalize_tag(tag: str) -> str:
    tag = tag.strip()
    return tag if tag.startswith("#") else f"#{tag}"


@dataclass(frozen=True)
class TagRule:
    """Emit ``tag`` when any trigger occurs in the (lower-cased) content."""

    tag: str
    triggers: tuple[str, ...]

    def applies(self, lowered: str) -> bool:
        return any(t.lower() in lowered for t in self.triggers)


DEFAULT_RULES: tuple[TagRule, ...] = (
    TagRule("#最佳实践", ("最佳实践", "规则")),
    TagRule("#流程管理", ("流程", "步骤", "review", "评审")),
    TagRule("#工具使用", ("命令", "工具")),
)


@runtime_checkable
class TagClassifier(Protocol):
    """Anything that can derive tags from a memory's content."""

    def classify(self, content: str) -> list[str]: ...


class RuleClassifier:
    """Apply ``rules`` in order; fall back to a single tag when none match."""

    def __init__(
        self,
        rules: tuple[TagRule, ...] | list[TagRule] = DEFAULT_RULES,
        fallback: str = FALLBACK_TAG,
    ) -> None:
        self.rules = tuple(TagRule(normalize_tag(r.tag), r.triggers) for r in rules)
        self.fallback = normalize_tag(fallback)

    def classify(self, content: str) -> list[str]:
        lowered = content.lower()
        tags: list[str] = []
        for rule in self.rules:
            if rule.tag not in tags and rule.applies(lowered):
                tags.append(rule.tag)
        return tags or [self.fallback]
