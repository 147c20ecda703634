"""Agent tools for declarative memory access.

These functions are designed to be exposed as tools to the AI agent,
allowing it to save and look up its own facts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from jinang.commands import RecallCommand, RememberCommand

if TYPE_CHECKING:
    from jinang.memory.store import MemoryStore


def get_memory_tools(store: MemoryStore) -> dict[str, Callable[..., str]]:
    """Return a dict of tool_name -> callable for memory operations.

    These can be registered as MCP tools or called directly.
    """
    remember_cmd = RememberCommand(store)
    recall_cmd = RecallCommand(store)

    def remember(content: str) -> str:
        """Save a short fact, best practice or lesson to long-term memory."""
        return remember_cmd.run([content])

    def recall(query: str | None = None) -> str:
        """Find remembered facts containing the query (all facts if omitted)."""
        return recall_cmd.run([query] if query else [])

    return {
        "remember": remember,
        "recall": recall,
    }
