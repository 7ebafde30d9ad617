from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class S3Config:
    """Client wiring for S3 control-plane calls.

    The bucket itself is not configured here: it comes from each service's `params`.
    `endpoint_url` points the client at a local S3 emulator when set.
    """

    region_name: Optional[str] = None
    endpoint_url: Optional[str] = None

    @staticmethod
    def from_env() -> "S3Config":
        region_name = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        endpoint_url = os.getenv("S3_ENDPOINT_URL") or None

        return S3Config(region_name=region_name, endpoint_url=endpoint_url)
