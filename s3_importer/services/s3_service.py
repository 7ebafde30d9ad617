from __future__ import annotations

import logging
from typing import Any, Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from s3_importer.models.s3 import BucketDescriptor
from s3_importer.services.config import S3Config


logger = logging.getLogger(__name__)


class S3Service:
    """Thin async wrapper over the S3 control-plane calls this service type needs.

    Provider failures are logged and re-raised unchanged; retry policy belongs to
    the caller.
    """

    def __init__(self, config: S3Config) -> None:
        self._config = config
        self._session = aioboto3.Session()

    def _client(self) -> Any:
        return self._session.client(
            "s3",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    async def find_bucket(self, name: str) -> Optional[BucketDescriptor]:
        """Look up an existing bucket by exact name.

        Returns:
            The bucket descriptor, or None when no bucket with that name is visible
            to the current credentials.
        """

        try:
            s3_client: Any = self._client()
            async with s3_client as s3:
                response = await s3.list_buckets()
        except (ClientError, BotoCoreError):
            logger.exception("S3 list_buckets failed (looking for %s)", name)
            raise

        for bucket in response.get("Buckets", []):
            if bucket.get("Name") == name:
                return BucketDescriptor.from_s3_bucket(bucket)
        return None

    async def put_bucket_notification_configuration(
        self,
        *,
        bucket_name: str,
        notification_configuration: dict[str, Any],
    ) -> None:
        """Replace the bucket's notification configuration.

        The call is not additive: whatever the bucket held before is overwritten.
        """

        if not bucket_name:
            raise ValueError("'bucket_name' must be provided")

        try:
            s3_client: Any = self._client()
            async with s3_client as s3:
                await s3.put_bucket_notification_configuration(
                    Bucket=bucket_name,
                    NotificationConfiguration=notification_configuration,
                )
        except (ClientError, BotoCoreError):
            logger.exception("S3 put_bucket_notification_configuration failed (bucket=%s)", bucket_name)
            raise
