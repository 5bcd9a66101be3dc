"""Key-addressed blob containers backing a store."""

from __future__ import annotations

import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import urlparse

from stackstore.config import StackstoreConfig
from stackstore.errors import BlobNotFoundError, StorageBackendError

# Suffix of in-flight FileContainer writes; such files are never listed as keys.
_TMP_SUFFIX = ".stackstore-tmp"


@runtime_checkable
class BlobContainer(Protocol):
    """Backend-agnostic blob contract used by the store bootstrap."""

    def exists(self, key: str) -> bool: ...

    def read_all(self, key: str) -> bytes: ...

    def write_all(self, key: str, body: bytes) -> None: ...

    def list_keys(self, prefix: str = "", *, limit: int | None = None) -> list[str]: ...

    def close(self) -> None: ...


class MemoryContainer:
    """In-process container, mostly useful for tests and ``mem://`` URLs."""

    def __init__(self, blobs: dict[str, bytes] | None = None) -> None:
        self._blobs: dict[str, bytes] = dict(blobs or {})
        self._lock = threading.Lock()

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._blobs

    def read_all(self, key: str) -> bytes:
        with self._lock:
            try:
                return self._blobs[key]
            except KeyError:
                raise BlobNotFoundError(key) from None

    def write_all(self, key: str, body: bytes) -> None:
        with self._lock:
            self._blobs[key] = bytes(body)

    def list_keys(self, prefix: str = "", *, limit: int | None = None) -> list[str]:
        with self._lock:
            keys = sorted(k for k in self._blobs if k.startswith(prefix))
        return keys if limit is None else keys[:limit]

    def close(self) -> None:
        pass


class FileContainer:
    """Container over a local directory; keys are ``/``-separated relative paths.

    A missing root directory behaves as an empty container. Nothing is created
    on disk until the first write.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        parts = key.split("/")
        if (
            not key
            or key.startswith("/")
            or key.endswith(_TMP_SUFFIX)
            or any(p in ("", ".", "..") for p in parts)
        ):
            raise StorageBackendError("resolve_key", f"Invalid blob key '{key}'")
        return self.root.joinpath(*parts)

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def read_all(self, key: str) -> bytes:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise BlobNotFoundError(key) from None

    def write_all(self, key: str, body: bytes) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=_TMP_SUFFIX)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(body)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def list_keys(self, prefix: str = "", *, limit: int | None = None) -> list[str]:
        if not self.root.is_dir():
            return []
        keys: list[str] = []
        for dirpath, _dirnames, filenames in os.walk(self.root):
            rel_dir = Path(dirpath).relative_to(self.root)
            for name in filenames:
                if name.endswith(_TMP_SUFFIX):
                    continue
                key = (rel_dir / name).as_posix()
                if key.startswith(prefix):
                    keys.append(key)
                    if limit is not None and len(keys) >= limit:
                        return sorted(keys)
        return sorted(keys)

    def close(self) -> None:
        pass


@dataclass(frozen=True)
class ContainerTarget:
    """Resolved container target from a store URL."""

    backend: str
    url: str
    path: str | None = None
    bucket: str | None = None
    prefix: str | None = None


def parse_container_url(url: str) -> ContainerTarget:
    """Resolve a ``file://``, ``mem://`` or ``s3://`` URL into a target."""
    parsed = urlparse(url)

    if parsed.scheme == "file":
        path = parsed.path
        if parsed.netloc:
            # file://relative/dir -> relative/dir
            path = f"{parsed.netloc}{path}"
        if not path:
            raise StorageBackendError("parse_container_url", f"Invalid file URL: {url}")
        return ContainerTarget(backend="file", url=url, path=path)

    if parsed.scheme == "mem":
        return ContainerTarget(backend="mem", url=url)

    if parsed.scheme == "s3":
        bucket = parsed.netloc
        prefix = parsed.path.strip("/")
        if not bucket:
            raise StorageBackendError("parse_container_url", f"Invalid s3 URL: {url}")
        return ContainerTarget(backend="s3", url=url, bucket=bucket, prefix=prefix)

    raise StorageBackendError(
        "parse_container_url",
        f"Unsupported container URL scheme '{parsed.scheme}' for '{url}'",
    )


def open_container(url: str, *, config: StackstoreConfig | None = None) -> BlobContainer:
    """Open a blob container from a store URL."""
    target = parse_container_url(url)
    if target.backend == "file":
        assert target.path is not None
        return FileContainer(target.path)
    if target.backend == "mem":
        return MemoryContainer()
    if target.backend == "s3":
        from stackstore.blob_s3 import S3Container

        assert target.bucket is not None
        return S3Container(
            bucket=target.bucket,
            prefix=target.prefix or "",
            config=config or StackstoreConfig(),
        )
    raise StorageBackendError("open_container", f"Unsupported backend '{target.backend}'")


__all__ = [
    "BlobContainer",
    "ContainerTarget",
    "FileContainer",
    "MemoryContainer",
    "open_container",
    "parse_container_url",
]
