"""Store handle: resolves the layout version once when opened."""

from __future__ import annotations

import logging

from stackstore.blob import BlobContainer, open_container
from stackstore.bootstrap import ensure_meta
from stackstore.config import StackstoreConfig
from stackstore.env import Getenv, os_getenv
from stackstore.layout import StoreLayout, history_prefix, stack_key
from stackstore.meta import META_KEY, MetadataDocument

logger = logging.getLogger(__name__)


class Store:
    """An opened store with a fixed layout version.

    The version is resolved exactly once in :meth:`open` and never changes for
    the lifetime of the handle. Opening never writes; call :meth:`persist_meta`
    to record the version explicitly.
    """

    def __init__(self, container: BlobContainer, meta: MetadataDocument) -> None:
        self._container = container
        self._meta = meta

    @classmethod
    def open(cls, container: BlobContainer, getenv: Getenv = os_getenv) -> Store:
        meta = ensure_meta(container, getenv)
        store = cls(container, meta)
        logger.info("Opened store with %s layout (version %d)", store.layout.value, meta.version)
        return store

    @property
    def meta(self) -> MetadataDocument:
        return self._meta

    @property
    def version(self) -> int:
        return self._meta.version

    @property
    def layout(self) -> StoreLayout:
        return StoreLayout.for_version(self._meta.version)

    def has_meta_record(self) -> bool:
        """Whether ``META_KEY`` currently exists in the container."""
        return self._container.exists(META_KEY)

    def persist_meta(self) -> bool:
        """Write the resolved document. Returns False when nothing was written.

        Legacy stores (version 0) are never tagged with a record.
        """
        self._meta.write_to(self._container)
        return self._meta.version != 0

    def stack_key(self, project: str, stack: str) -> str:
        return stack_key(self.layout, project, stack)

    def history_prefix(self, project: str, stack: str) -> str:
        return history_prefix(self.layout, project, stack)

    def close(self) -> None:
        self._container.close()

    def __enter__(self) -> Store:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def open_store(
    url: str,
    *,
    config: StackstoreConfig | None = None,
    getenv: Getenv = os_getenv,
) -> Store:
    """Open a container from ``url`` and resolve its layout version."""
    container = open_container(url, config=config)
    try:
        return Store.open(container, getenv)
    except BaseException:
        container.close()
        raise


__all__ = ["Store", "open_store"]
