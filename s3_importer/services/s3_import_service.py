from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from s3_importer.models.events import EventSubscriptionRequest
from s3_importer.models.service import (
    DeployContext,
    DeployOutputType,
    ProduceEventsContext,
    ServiceContext,
    ServiceEventType,
    UnDeployContext,
)
from s3_importer.services.errors import BucketNotFoundError
from s3_importer.services.name_template import apply_name_template
from s3_importer.services.notifications import BucketNotificationService
from s3_importer.services.outputs import build_deploy_outputs
from s3_importer.services.s3_service import S3Service

SERVICE_NAME = "S3-importer"


class S3ImportService:
    """Lifecycle hooks for an `s3` service backed by a bucket that already exists.

    The bucket is looked up, never created or deleted. Deploy publishes env vars,
    IAM policies and event outputs; produce_events points the bucket's
    notifications at one consumer (lambda, sns or sqs).
    """

    consumed_deploy_output_types: list[DeployOutputType] = []
    produced_deploy_output_types = [
        DeployOutputType.ENVIRONMENT_VARIABLES,
        DeployOutputType.POLICIES,
    ]
    provided_event_type = ServiceEventType.S3
    produced_events_supported_types = [
        ServiceEventType.LAMBDA,
        ServiceEventType.SNS,
        ServiceEventType.SQS,
    ]
    supports_tagging = True

    def __init__(self, *, s3: S3Service, logger: Optional[logging.Logger] = None) -> None:
        self._s3 = s3
        self._logger = logger or logging.getLogger(__name__)
        self._notifications = BucketNotificationService(s3=s3, label=SERVICE_NAME)

    def check(
        self,
        service_context: ServiceContext,
        dependencies_service_contexts: Sequence[ServiceContext] = (),
    ) -> list[str]:
        errors: list[str] = []
        if not service_context.params.bucket_name:
            errors.append(f"{SERVICE_NAME} - must provide a bucket name")
        return errors

    async def deploy(
        self,
        service_context: ServiceContext,
        dependencies_deploy_contexts: Sequence[DeployContext] = (),
    ) -> DeployContext:
        provided_name = service_context.params.bucket_name or ""
        actual_name = apply_name_template(provided_name, service_context.account_config)

        self._logger.info(
            "%s - Looking up bucket %r for service '%s'",
            SERVICE_NAME,
            actual_name,
            service_context.service_name,
        )
        bucket = await self._s3.find_bucket(actual_name)
        if bucket is None:
            raise BucketNotFoundError(actual_name)

        outputs = build_deploy_outputs(bucket, region=service_context.account_config.region)

        deploy_context = DeployContext.for_service(service_context)
        deploy_context.add_environment_variables(outputs.environment_variables)
        deploy_context.policies.extend(outputs.policies)
        deploy_context.event_outputs = outputs.event_outputs

        self._logger.info("%s - Deployed bucket %s for service '%s'", SERVICE_NAME, bucket.arn, service_context.service_name)
        return deploy_context

    async def produce_events(
        self,
        service_context: ServiceContext,
        deploy_context: DeployContext,
        event_consumer_config: EventSubscriptionRequest,
        consumer_service_context: ServiceContext,
        consumer_deploy_context: DeployContext,
    ) -> ProduceEventsContext:
        self._logger.info(
            "%s - Producing events from '%s' for consumer '%s' (%s)",
            SERVICE_NAME,
            service_context.service_name,
            consumer_service_context.service_name,
            consumer_service_context.service_type,
        )

        await self._notifications.apply(
            producer_outputs=deploy_context.event_outputs,
            consumer_outputs=consumer_deploy_context.event_outputs,
            request=event_consumer_config,
            supported_types=self.produced_events_supported_types,
        )

        self._logger.info(
            "%s - Configured production of events from '%s' for consumer '%s'",
            SERVICE_NAME,
            service_context.service_name,
            consumer_service_context.service_name,
        )
        return ProduceEventsContext(
            producer_service_name=service_context.service_name,
            consumer_service_name=consumer_service_context.service_name,
        )

    async def un_deploy(self, service_context: ServiceContext) -> UnDeployContext:
        # The bucket is owned outside this deployment; nothing to tear down.
        return UnDeployContext.for_service(service_context)
