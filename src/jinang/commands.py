"""remember / recall commands — turn store results into user-facing text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jinang.errors import JinangError, ValidationFailure

if TYPE_CHECKING:
    from jinang.memory.record import MemoryRecord
    from jinang.memory.store import AppendResult, MemoryStore

logger = logging.getLogger(__name__)

SAVE_PREVIEW_CHARS = 100
RECALL_PREVIEW_CHARS = 120
RECALL_MAX_TAGS = 5

REMEMBER_USAGE = """\
🧠 **Remember - AI记忆增强**

## 📖 基本用法
    jinang remember <知识内容>

## 💡 示例
    jinang remember "构建代码 → 运行测试 → 部署到staging → 验证功能 → 发布生产"
    jinang remember "React Hooks允许在函数组件中使用state和其他React特性"
    jinang remember "每个PR至少需要2个人review，必须包含测试用例"

## 🔍 检索
    jinang recall <关键词>"""

REMEMBER_FAILURE_HINTS = """\

💡 可能的原因：
- 记忆目录权限不足
- 磁盘空间不够
- 记忆内容格式问题

🔧 解决方案：
1. 检查 {directory} 目录权限
2. 确保磁盘空间充足
3. 检查记忆内容是否包含特殊字符"""

RECALL_EMPTY = """\
🧠 AI记忆体系中暂无内容。

💡 建议：
1. 使用 jinang remember 内化新知识
2. 开始构建AI的专业知识体系"""

RECALL_ADVICE = """\
💡 记忆运用建议：
1. 结合当前任务场景灵活运用
2. 根据实际情况调整和变通
3. 持续学习和增强记忆能力"""


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


class RememberCommand:
    """Save one fact: ``remember <content...>``."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def run(self, args: list[str]) -> str:
        content = " ".join(args).strip()
        if not content:
            return REMEMBER_USAGE
        try:
            result = self.store.remember(content)
        except ValidationFailure as e:
            return f"❌ 记忆内化失败：{e}"
        except JinangError as e:
            logger.error("remember failed: %s", e)
            hints = REMEMBER_FAILURE_HINTS.format(directory=self.store.path.parent)
            return f"❌ 记忆内化失败：{e}\n{hints}"
        return self.format_saved(result)

    def format_saved(self, result: AppendResult) -> str:
        labels = {"created": "✅ AI已内化新记忆"}
        return (
            f"{labels[result.action]}：{result.content}\n\n"
            f"## 📋 记忆详情\n"
            f"- **内化时间**: {result.timestamp.split('T')[0]}\n"
            f"- **知识内容**: {_truncate(result.content, SAVE_PREVIEW_CHARS)}\n"
            f"- **标签**: {' '.join(result.tags)}\n"
            f"- **存储位置**: {result.path}"
        )


class RecallCommand:
    """Retrieve facts: ``recall [query]``. No query lists everything."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def run(self, args: list[str]) -> str:
        query = args[0] if args else None
        try:
            records = self.store.recall(query)
        except JinangError as e:
            logger.error("recall failed: %s", e)
            return f"❌ 检索记忆时出错：{e}"

        if not records:
            return RECALL_EMPTY

        scope = f'检索"{query}"' if query else "全部记忆"
        return (
            f"🧠 AI记忆体系 {scope} ({self.store.last_match_count}条)：\n\n"
            f"{self.format_records(records)}\n\n"
            f"{RECALL_ADVICE}"
        )

    def format_records(self, records: list[MemoryRecord]) -> str:
        blocks = []
        for i, record in enumerate(records, start=1):
            blocks.append(
                f"📝 {i}. **{record.key}** ({record.timestamp})\n\n"
                f"{_truncate(record.content, RECALL_PREVIEW_CHARS)}\n\n"
                f"{' '.join(record.tags[:RECALL_MAX_TAGS])}\n\n"
                f"---"
            )
        return "\n\n".join(blocks)
