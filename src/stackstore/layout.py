"""Checkpoint key schemes selected by the layout version."""

from __future__ import annotations

from enum import Enum

STACKS_DIR = ".stackstore/stacks"
HISTORY_DIR = ".stackstore/history"


class StoreLayout(str, Enum):
    """Key scheme for stack checkpoints."""

    LEGACY = "legacy"
    VERSIONED = "versioned"

    @classmethod
    def for_version(cls, version: int) -> StoreLayout:
        # Versions newer than the ones we know still use the versioned scheme.
        return cls.LEGACY if version == 0 else cls.VERSIONED


def _check_name(kind: str, value: str) -> None:
    if not value or "/" in value or value in (".", ".."):
        raise ValueError(f"Invalid {kind} name '{value}'")


def stack_key(layout: StoreLayout, project: str, stack: str) -> str:
    """Return the checkpoint key for ``project``/``stack``.

    The legacy layout has no project component, so ``project`` is ignored.
    """
    _check_name("stack", stack)
    if layout is StoreLayout.LEGACY:
        return f"{STACKS_DIR}/{stack}.json"
    _check_name("project", project)
    return f"{STACKS_DIR}/{project}/{stack}.json"


def history_prefix(layout: StoreLayout, project: str, stack: str) -> str:
    """Return the key prefix under which checkpoint history is kept."""
    _check_name("stack", stack)
    if layout is StoreLayout.LEGACY:
        return f"{HISTORY_DIR}/{stack}/"
    _check_name("project", project)
    return f"{HISTORY_DIR}/{project}/{stack}/"


__all__ = ["HISTORY_DIR", "STACKS_DIR", "StoreLayout", "history_prefix", "stack_key"]
