"""Environment override for the legacy key layout."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Optional

LEGACY_LAYOUT_ENV_VAR = "STACKSTORE_LEGACY_LAYOUT"

Getenv = Callable[[str], Optional[str]]


class EnvironmentSignal(Enum):
    """Layout intent carried by the environment."""

    UNSET = "unset"
    FORCE_LEGACY = "force_legacy"
    # Never produced by resolve_legacy_signal; carries no forcing effect.
    FORCE_VERSIONED = "force_versioned"


def os_getenv(name: str) -> str | None:
    """Look up ``name`` in the process environment."""
    return os.environ.get(name)


def map_getenv(values: Mapping[str, str] | None = None) -> Getenv:
    """Return a lookup over a fixed mapping instead of the process environment."""
    snapshot = dict(values or {})

    def _getenv(name: str) -> str | None:
        return snapshot.get(name)

    return _getenv


def resolve_legacy_signal(getenv: Getenv) -> EnvironmentSignal:
    """Interpret the legacy-layout variable.

    Only the exact literals ``"1"`` and ``"true"`` force the legacy layout.
    ``"false"``, any other value, and an unset variable all mean no override.
    """
    value = getenv(LEGACY_LAYOUT_ENV_VAR)
    if value in ("1", "true"):
        return EnvironmentSignal.FORCE_LEGACY
    return EnvironmentSignal.UNSET


__all__ = [
    "LEGACY_LAYOUT_ENV_VAR",
    "EnvironmentSignal",
    "Getenv",
    "map_getenv",
    "os_getenv",
    "resolve_legacy_signal",
]
