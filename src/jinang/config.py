"""Configuration loading from environment variables and jinang.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from jinang.memory.tagging import DEFAULT_RULES, FALLBACK_TAG, RuleClassifier, TagRule

_DEFAULT_NAMESPACE = ".jinang"
_CONFIG_FILENAME = "jinang.toml"
_STORE_FILENAME = "declarative.md"


@dataclass
class TaggingConfig:
    """Ordered tag rules applied to new memories."""

    rules: list[TagRule] = field(default_factory=lambda: list(DEFAULT_RULES))
    fallback: str = FALLBACK_TAG


@dataclass
class JinangConfig:
    """Top-level configuration."""

    workdir: Path = field(default_factory=Path.cwd)
    namespace: str = _DEFAULT_NAMESPACE
    log_level: str = "INFO"
    tagging: TaggingConfig = field(default_factory=TaggingConfig)

    @property
    def store_path(self) -> Path:
        return self.workdir / self.namespace / "memory" / _STORE_FILENAME


def _parse_rules(raw: list[dict]) -> list[TagRule]:
    rules = []
    for entry in raw:
        triggers = entry.get("triggers", [])
        if isinstance(triggers, str):
            triggers = [triggers]
        rules.append(TagRule(tag=entry["tag"], triggers=tuple(triggers)))
    return rules


def load_config(config_path: Path | None = None) -> JinangConfig:
    """Load configuration from environment variables and optional jinang.toml.

    Priority: environment variables > jinang.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    else:
        # Search current dir and ~/.jinang/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / _DEFAULT_NAMESPACE / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text(encoding="utf-8"))
                break

    tagging_data = file_data.get("tagging", {})
    tagging = TaggingConfig(fallback=tagging_data.get("fallback", FALLBACK_TAG))
    if "rules" in tagging_data:
        tagging.rules = _parse_rules(tagging_data["rules"])

    workdir = os.getenv("JINANG_WORKDIR", file_data.get("workdir"))
    return JinangConfig(
        workdir=Path(workdir).expanduser() if workdir else Path.cwd(),
        namespace=os.getenv("JINANG_NAMESPACE", file_data.get("namespace", _DEFAULT_NAMESPACE)),
        log_level=os.getenv("JINANG_LOG_LEVEL", file_data.get("log_level", "INFO")),
        tagging=tagging,
    )


def build_classifier(config: JinangConfig) -> RuleClassifier:
    return RuleClassifier(config.tagging.rules, fallback=config.tagging.fallback)
