"""Entry point: python -m jinang <remember|recall> [args...]

- remember <text...>: save one fact to the working directory's store
- recall [query]:     list facts matching the query (all if omitted)
"""

from __future__ import annotations

import logging
import sys

from jinang.config import build_classifier, load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _usage() -> None:
    print("Usage: python -m jinang [remember|recall] [args...]")
    print("  remember <text>  — Save a fact to declarative memory")
    print("  recall [query]   — Search facts (all if no query)")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    cmd = args[0] if args else ""

    if cmd not in ("remember", "recall"):
        _usage()
        return 1

    config = load_config()
    _setup_logging(config.log_level)

    from jinang.commands import RecallCommand, RememberCommand
    from jinang.memory.store import MemoryStore

    store = MemoryStore(config.store_path, classifier=build_classifier(config))
    command = RememberCommand(store) if cmd == "remember" else RecallCommand(store)
    print(command.run(args[1:]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
