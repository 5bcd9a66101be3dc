"""Tests for blob containers and container URL parsing."""

from __future__ import annotations

import os

import pytest

from stackstore.blob import (
    BlobContainer,
    FileContainer,
    MemoryContainer,
    open_container,
    parse_container_url,
)
from stackstore.bootstrap import ensure_meta
from stackstore.env import map_getenv
from stackstore.errors import BlobNotFoundError, StorageBackendError
from stackstore.meta import META_KEY, MetadataDocument


class TestMemoryContainer:
    def test_write_and_read(self, mem) -> None:
        mem.write_all("a/b.json", b"{}")
        assert mem.exists("a/b.json")
        assert mem.read_all("a/b.json") == b"{}"

    def test_read_missing(self, mem) -> None:
        with pytest.raises(BlobNotFoundError):
            mem.read_all("nope")

    def test_list_with_prefix_and_limit(self, mem) -> None:
        for key in ("x/1", "x/2", "y/1"):
            mem.write_all(key, b"")
        assert mem.list_keys("x/") == ["x/1", "x/2"]
        assert mem.list_keys() == ["x/1", "x/2", "y/1"]
        assert mem.list_keys(limit=1) == ["x/1"]

    def test_satisfies_protocol(self, mem) -> None:
        assert isinstance(mem, BlobContainer)


class TestFileContainer:
    def test_write_creates_parents(self, store_dir, files) -> None:
        files.write_all(".stackstore/stacks/dev.json", b"{}")
        assert (store_dir / ".stackstore" / "stacks" / "dev.json").read_bytes() == b"{}"
        assert files.exists(".stackstore/stacks/dev.json")

    def test_read_missing(self, files) -> None:
        with pytest.raises(BlobNotFoundError):
            files.read_all(".stackstore/meta.yaml")

    def test_list_keys_are_slash_separated(self, files) -> None:
        files.write_all("a/b/c.txt", b"1")
        files.write_all("d.txt", b"2")
        assert files.list_keys() == ["a/b/c.txt", "d.txt"]
        assert files.list_keys("a/") == ["a/b/c.txt"]
        assert len(files.list_keys(limit=1)) == 1

    def test_missing_root_is_empty_and_not_created(self, tmp_path) -> None:
        root = tmp_path / "does-not-exist"
        container = FileContainer(root)
        assert container.list_keys() == []
        assert not container.exists(".stackstore/meta.yaml")
        assert not root.exists()

    def test_rejects_escaping_keys(self, files) -> None:
        for key in ("../x", "/abs", "a//b", "a/./b", "", "meta.yaml.stackstore-tmp"):
            with pytest.raises(StorageBackendError):
                files.write_all(key, b"")

    def test_overwrite_replaces_content(self, files) -> None:
        files.write_all("k", b"old")
        files.write_all("k", b"new")
        assert files.read_all("k") == b"new"
        assert files.list_keys() == ["k"]

    def test_failed_write_leaves_no_key_behind(self, store_dir, files, monkeypatch) -> None:
        def _fail_replace(src, dst):
            raise OSError("no space left on device")

        monkeypatch.setattr(os, "replace", _fail_replace)
        with pytest.raises(OSError, match="no space left"):
            MetadataDocument(version=1).write_to(files)
        monkeypatch.undo()

        assert files.list_keys() == []
        assert list((store_dir / ".stackstore").iterdir()) == []
        assert ensure_meta(files, map_getenv(None)) == MetadataDocument(version=1)

    def test_in_flight_temp_files_are_not_listed(self, store_dir, files) -> None:
        (store_dir / ".stackstore").mkdir()
        (store_dir / ".stackstore" / ".meta.yaml.abc123.stackstore-tmp").write_bytes(b"v")
        assert files.list_keys() == []
        assert ensure_meta(files, map_getenv(None)) == MetadataDocument(version=1)

    def test_concurrent_writers_use_distinct_temp_files(self, files, monkeypatch) -> None:
        seen: list[str] = []
        real_replace = os.replace

        def _record_replace(src, dst):
            seen.append(str(src))
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", _record_replace)
        files.write_all(META_KEY, b"version: 1\n")
        files.write_all(META_KEY, b"version: 1\n")
        assert len(set(seen)) == 2
        assert files.list_keys() == [META_KEY]

    def test_satisfies_protocol(self, files) -> None:
        assert isinstance(files, BlobContainer)


class TestContainerUrl:
    def test_file_absolute(self) -> None:
        target = parse_container_url("file:///var/state")
        assert target.backend == "file"
        assert target.path == "/var/state"

    def test_file_relative(self) -> None:
        target = parse_container_url("file://.")
        assert target.backend == "file"
        assert target.path == "."

    def test_mem(self) -> None:
        assert parse_container_url("mem://").backend == "mem"

    def test_s3_with_prefix(self) -> None:
        target = parse_container_url("s3://bucket/some/prefix/")
        assert target.backend == "s3"
        assert target.bucket == "bucket"
        assert target.prefix == "some/prefix"

    def test_s3_without_bucket(self) -> None:
        with pytest.raises(StorageBackendError):
            parse_container_url("s3:///prefix")

    def test_unsupported_scheme(self) -> None:
        with pytest.raises(StorageBackendError, match="Unsupported container URL scheme"):
            parse_container_url("gs://bucket")

    def test_open_file_container(self, store_dir) -> None:
        container = open_container(f"file://{store_dir}")
        assert isinstance(container, FileContainer)
        assert container.root == store_dir

    def test_open_mem_container(self) -> None:
        assert isinstance(open_container("mem://"), MemoryContainer)
