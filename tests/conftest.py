"""
Shared pytest fixtures.

`fake_s3` is an in-memory stand-in for the aioboto3 S3 client. Like S3, it stores
one notification configuration per bucket and replaces it wholesale on every put.
"""

import copy
from typing import Any

import pytest

from s3_importer.services.config import S3Config
from s3_importer.services.s3_import_service import S3ImportService
from s3_importer.services.s3_service import S3Service


class FakeS3Client:
    def __init__(self, bucket_names: tuple[str, ...] = ()) -> None:
        self.buckets = [{"Name": name, "CreationDate": "2024-01-01T00:00:00Z"} for name in bucket_names]
        self.notification_configurations: dict[str, dict[str, Any]] = {}
        self.put_calls: list[dict[str, Any]] = []
        self.list_calls = 0

    async def __aenter__(self) -> "FakeS3Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False

    async def list_buckets(self) -> dict[str, Any]:
        self.list_calls += 1
        return {"Buckets": list(self.buckets), "Owner": {"ID": "owner"}}

    async def put_bucket_notification_configuration(self, *, Bucket: str, NotificationConfiguration: dict[str, Any]) -> dict[str, Any]:
        self.put_calls.append({"Bucket": Bucket, "NotificationConfiguration": copy.deepcopy(NotificationConfiguration)})
        self.notification_configurations[Bucket] = copy.deepcopy(NotificationConfiguration)
        return {}


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client(bucket_names=("b", "other-bucket", "logs-123456789012-us-east-1"))


@pytest.fixture
def s3_service(fake_s3: FakeS3Client, monkeypatch: pytest.MonkeyPatch) -> S3Service:
    service = S3Service(S3Config(region_name="us-east-1"))
    monkeypatch.setattr(service, "_client", lambda: fake_s3)
    return service


@pytest.fixture
def import_service(s3_service: S3Service) -> S3ImportService:
    return S3ImportService(s3=s3_service)
