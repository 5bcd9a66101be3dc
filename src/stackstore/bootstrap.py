"""Layout-version bootstrap: decide which key layout a store uses.

Rules are evaluated in order and the first one that returns a document wins:

1. an explicit ``.stackstore/meta.yaml`` record, parsed as-is;
2. the legacy-layout environment override;
3. container emptiness: a brand-new container gets CURRENT_VERSION, a
   pre-existing one without a record stays on the legacy layout.

Resolution only reads. Persisting the result is a separate, explicit call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from stackstore.blob import BlobContainer
from stackstore.env import EnvironmentSignal, Getenv, resolve_legacy_signal
from stackstore.errors import BlobNotFoundError
from stackstore.meta import CURRENT_VERSION, META_KEY, MetadataDocument, parse_meta

logger = logging.getLogger(__name__)

_Rule = Callable[[BlobContainer, Getenv], Optional[MetadataDocument]]


def _explicit_record(container: BlobContainer, getenv: Getenv) -> MetadataDocument | None:
    try:
        body = container.read_all(META_KEY)
    except BlobNotFoundError:
        return None
    # Corruption propagates: a malformed record never falls through to a guess.
    return parse_meta(body, META_KEY)


def _environment_override(container: BlobContainer, getenv: Getenv) -> MetadataDocument | None:
    signal = resolve_legacy_signal(getenv)
    if signal is EnvironmentSignal.FORCE_LEGACY:
        return MetadataDocument(version=0)
    if signal is EnvironmentSignal.FORCE_VERSIONED or signal is EnvironmentSignal.UNSET:
        return None
    raise AssertionError(f"unhandled environment signal {signal!r}")


def _emptiness_heuristic(container: BlobContainer, getenv: Getenv) -> MetadataDocument:
    if container.list_keys("", limit=1):
        return MetadataDocument(version=0)
    return MetadataDocument(version=CURRENT_VERSION)


RULES: tuple[tuple[str, _Rule], ...] = (
    ("explicit_record", _explicit_record),
    ("environment_override", _environment_override),
    ("emptiness_heuristic", _emptiness_heuristic),
)


def ensure_meta(container: BlobContainer, getenv: Getenv) -> MetadataDocument:
    """Resolve the metadata document for ``container`` without writing to it.

    Raises:
        CorruptStoreError: The metadata record exists but is malformed.
        Exception: Container read/list failures propagate unchanged.
    """
    for name, rule in RULES:
        doc = rule(container, getenv)
        if doc is not None:
            logger.debug("Resolved layout version %d via %s", doc.version, name)
            return doc
    raise AssertionError("emptiness heuristic always resolves")


__all__ = ["RULES", "ensure_meta"]
