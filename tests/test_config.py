"""Tests for configuration loading."""

import pytest
from pathlib import Path

from jinang.config import build_classifier, load_config
from jinang.memory.tagging import DEFAULT_RULES, TagRule

_ENV_KEYS = ["JINANG_WORKDIR", "JINANG_NAMESPACE", "JINANG_LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfig:
    def test_defaults(self, tmp_path: Path):
        config = load_config()
        assert config.workdir == Path.cwd()
        assert config.namespace == ".jinang"
        assert config.log_level == "INFO"
        assert config.tagging.rules == list(DEFAULT_RULES)
        assert config.store_path == Path.cwd() / ".jinang" / "memory" / "declarative.md"

    def test_env_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("JINANG_WORKDIR", str(tmp_path / "proj"))
        monkeypatch.setenv("JINANG_NAMESPACE", ".promptx")
        monkeypatch.setenv("JINANG_LOG_LEVEL", "DEBUG")

        config = load_config()
        assert config.store_path == tmp_path / "proj" / ".promptx" / "memory" / "declarative.md"
        assert config.log_level == "DEBUG"

    def test_toml_file(self, tmp_path: Path):
        toml_path = tmp_path / "jinang.toml"
        toml_path.write_text(
            """
namespace = ".agent"
log_level = "WARNING"

[tagging]
fallback = "#杂项"

[[tagging.rules]]
tag = "#部署"
triggers = ["deploy", "上线"]

[[tagging.rules]]
tag = "测试"
triggers = "pytest"
""",
            encoding="utf-8",
        )
        config = load_config(toml_path)
        assert config.namespace == ".agent"
        assert config.log_level == "WARNING"
        assert config.tagging.rules == [
            TagRule("#部署", ("deploy", "上线")),
            TagRule("测试", ("pytest",)),
        ]

        classifier = build_classifier(config)
        assert classifier.classify("周五不上线") == ["#部署"]
        assert classifier.classify("用 pytest 跑") == ["#测试"]
        assert classifier.classify("随便") == ["#杂项"]

    def test_toml_in_cwd_discovered(self, tmp_path: Path):
        (tmp_path / "jinang.toml").write_text('namespace = ".found"\n', encoding="utf-8")
        assert load_config().namespace == ".found"

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("JINANG_NAMESPACE", ".env")
        toml_path = tmp_path / "jinang.toml"
        toml_path.write_text('namespace = ".file"\n', encoding="utf-8")
        config = load_config(toml_path)
        assert config.namespace == ".env"  # env wins
