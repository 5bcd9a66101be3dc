"""Structured error types for stackstore."""

from __future__ import annotations

from enum import Enum


class StackstoreError(Exception):
    """Base error for all stackstore errors."""


class CorruptReason(str, Enum):
    """Why a metadata record could not be trusted."""

    MISSING_VERSION = "missing_version"
    UNMARSHAL_FAILURE = "unmarshal_failure"


class CorruptStoreError(StackstoreError):
    """Raised when the store's metadata record is present but malformed.

    Corruption is operator-actionable: the record at ``key`` must be inspected
    and repaired by hand. The store is unusable until then.
    """

    def __init__(self, reason: CorruptReason, key: str, detail: str | None = None) -> None:
        self.reason = reason
        self.key = key
        self.detail = detail
        if reason is CorruptReason.MISSING_VERSION:
            message = f'corrupt store: missing version in "{key}"'
        else:
            message = f'corrupt store: unmarshal "{key}"'
            if detail:
                message = f"{message}: {detail}"
        super().__init__(message)


class BlobNotFoundError(StackstoreError):
    """Raised when a container key does not exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Blob not found: '{key}'")


class StorageBackendError(StackstoreError):
    """Raised when backend storage operations fail."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage backend error during {operation}: {detail}")
