"""S3 blob container."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from stackstore.config import StackstoreConfig
from stackstore.errors import BlobNotFoundError

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_not_found(err: Exception) -> bool:
    if isinstance(err, ClientError):
        code = err.response.get("Error", {}).get("Code", "")
        return code in _NOT_FOUND_CODES
    return False


class S3Container:
    """Blob container over an S3 bucket, scoped to an optional key prefix.

    Keys passed in and returned are relative to the prefix. Request deadlines
    come from the botocore connect/read timeouts in the config; timeouts and
    client errors other than not-found propagate unchanged.
    """

    def __init__(
        self,
        *,
        bucket: str,
        prefix: str = "",
        config: StackstoreConfig | None = None,
        client: Any | None = None,
    ) -> None:
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self._config = config or StackstoreConfig()
        if client is None:
            session = boto3.Session(region_name=self._config.s3_region)
            client = session.client(
                "s3",
                region_name=self._config.s3_region,
                endpoint_url=self._config.s3_endpoint_url,
                config=BotoConfig(
                    connect_timeout=self._config.s3_request_timeout_s,
                    read_timeout=self._config.s3_request_timeout_s,
                    retries={"max_attempts": self._config.s3_max_attempts, "mode": "standard"},
                ),
            )
        self._s3 = client

    def _k(self, key: str) -> str:
        return f"{self.prefix}/{key}" if self.prefix else key

    def _strip(self, full_key: str) -> str:
        if self.prefix and full_key.startswith(f"{self.prefix}/"):
            return full_key[len(self.prefix) + 1 :]
        return full_key

    def exists(self, key: str) -> bool:
        try:
            self._s3.head_object(Bucket=self.bucket, Key=self._k(key))
            return True
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise

    def read_all(self, key: str) -> bytes:
        try:
            resp = self._s3.get_object(Bucket=self.bucket, Key=self._k(key))
        except ClientError as e:
            if _is_not_found(e):
                raise BlobNotFoundError(key) from e
            raise
        return resp["Body"].read()

    def write_all(self, key: str, body: bytes) -> None:
        self._s3.put_object(Bucket=self.bucket, Key=self._k(key), Body=body)

    def list_keys(self, prefix: str = "", *, limit: int | None = None) -> list[str]:
        list_prefix = self._k(prefix) if prefix else (f"{self.prefix}/" if self.prefix else "")
        kwargs: dict[str, Any] = {"Bucket": self.bucket, "Prefix": list_prefix}
        keys: list[str] = []
        while True:
            if limit is not None:
                kwargs["MaxKeys"] = max(limit - len(keys), 1)
            resp = self._s3.list_objects_v2(**kwargs)
            for obj in resp.get("Contents", []):
                keys.append(self._strip(obj["Key"]))
                if limit is not None and len(keys) >= limit:
                    return keys
            if not resp.get("IsTruncated"):
                return keys
            kwargs["ContinuationToken"] = resp["NextContinuationToken"]

    def close(self) -> None:
        close = getattr(self._s3, "close", None)
        if callable(close):
            close()


__all__ = ["S3Container"]
