"""Configuration for stackstore containers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StackstoreConfig:
    """Configuration for opening blob containers."""

    s3_region: str | None = None
    s3_endpoint_url: str | None = None
    s3_request_timeout_s: float = 10.0
    s3_max_attempts: int = 5
