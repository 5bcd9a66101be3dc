"""Store metadata document persisted at ``.stackstore/meta.yaml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from stackstore.errors import CorruptReason, CorruptStoreError

if TYPE_CHECKING:
    from stackstore.blob import BlobContainer

logger = logging.getLogger(__name__)

META_KEY = ".stackstore/meta.yaml"

# Latest layout version understood by this package.
CURRENT_VERSION = 1


@dataclass(frozen=True)
class MetadataDocument:
    """Layout record for a store.

    Version 0 is the legacy layout and is never written to disk; a legacy
    store is recognised by the absence of the record.
    """

    version: int

    def dump(self) -> bytes:
        return yaml.safe_dump({"version": self.version}, default_flow_style=False).encode("utf-8")

    def write_to(self, container: BlobContainer) -> None:
        """Persist the document to ``META_KEY``, overwriting any existing record.

        Writing version 0 is a no-op so that touching a legacy store never
        makes it look managed by the versioned layout.
        """
        if self.version == 0:
            logger.debug("Skipping %s write for legacy layout", META_KEY)
            return
        container.write_all(META_KEY, self.dump())
        logger.debug("Wrote %s with version %d", META_KEY, self.version)


def parse_meta(body: bytes, key: str = META_KEY) -> MetadataDocument:
    """Parse a metadata record read from ``key``.

    Any non-negative integer version is returned as-is, including versions
    newer than CURRENT_VERSION. Unknown fields are ignored.

    Raises:
        CorruptStoreError: MISSING_VERSION for empty content or no ``version``
            field; UNMARSHAL_FAILURE for unparseable content or a version that
            is not a non-negative integer.
    """
    try:
        data: Any = yaml.safe_load(body)
    except yaml.YAMLError as e:
        raise CorruptStoreError(CorruptReason.UNMARSHAL_FAILURE, key, str(e)) from e

    if data is None:
        raise CorruptStoreError(CorruptReason.MISSING_VERSION, key)
    if not isinstance(data, dict):
        raise CorruptStoreError(
            CorruptReason.UNMARSHAL_FAILURE,
            key,
            f"expected a mapping, got {type(data).__name__}",
        )

    version = data.get("version")
    if version is None:
        raise CorruptStoreError(CorruptReason.MISSING_VERSION, key)
    # bool is an int subclass; YAML "true" is not a version.
    if isinstance(version, bool) or not isinstance(version, int):
        raise CorruptStoreError(
            CorruptReason.UNMARSHAL_FAILURE,
            key,
            f"version must be an integer, got {version!r}",
        )
    if version < 0:
        raise CorruptStoreError(
            CorruptReason.UNMARSHAL_FAILURE,
            key,
            f"version must be non-negative, got {version}",
        )
    return MetadataDocument(version=version)


__all__ = ["CURRENT_VERSION", "META_KEY", "MetadataDocument", "parse_meta"]
