"""stackstore: blob-backed stack state store with layout-version bootstrap."""

from stackstore.blob import BlobContainer, FileContainer, MemoryContainer, open_container
from stackstore.bootstrap import ensure_meta
from stackstore.config import StackstoreConfig
from stackstore.env import (
    LEGACY_LAYOUT_ENV_VAR,
    EnvironmentSignal,
    map_getenv,
    os_getenv,
    resolve_legacy_signal,
)
from stackstore.errors import (
    BlobNotFoundError,
    CorruptReason,
    CorruptStoreError,
    StackstoreError,
    StorageBackendError,
)
from stackstore.layout import StoreLayout
from stackstore.meta import CURRENT_VERSION, META_KEY, MetadataDocument, parse_meta
from stackstore.store import Store, open_store

__all__ = [
    "BlobContainer",
    "FileContainer",
    "MemoryContainer",
    "open_container",
    "ensure_meta",
    "StackstoreConfig",
    "LEGACY_LAYOUT_ENV_VAR",
    "EnvironmentSignal",
    "map_getenv",
    "os_getenv",
    "resolve_legacy_signal",
    "BlobNotFoundError",
    "CorruptReason",
    "CorruptStoreError",
    "StackstoreError",
    "StorageBackendError",
    "StoreLayout",
    "CURRENT_VERSION",
    "META_KEY",
    "MetadataDocument",
    "parse_meta",
    "Store",
    "open_store",
]
