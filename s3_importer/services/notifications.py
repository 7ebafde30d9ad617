from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import Any, Optional

from s3_importer.models.events import EventFilter, EventSubscriptionRequest
from s3_importer.models.service import EventOutputs, ServiceEventType
from s3_importer.services.errors import (
    IncompleteEventOutputsError,
    MissingEventOutputsError,
    UnsupportedConsumerTypeError,
    UnsupportedNotificationTypeError,
)
from s3_importer.services.s3_service import S3Service


logger = logging.getLogger(__name__)


# event type -> (NotificationConfiguration list key, target ARN key)
_NOTIFICATION_TARGETS: dict[str, tuple[str, str]] = {
    ServiceEventType.LAMBDA.value: ("LambdaFunctionConfigurations", "LambdaFunctionArn"),
    ServiceEventType.SNS.value: ("TopicConfigurations", "TopicArn"),
    ServiceEventType.SQS.value: ("QueueConfigurations", "QueueArn"),
}


def _event_type_value(event_type: Any) -> str:
    return event_type.value if isinstance(event_type, ServiceEventType) else str(event_type)


def build_filter_rules(filters: Optional[Sequence[EventFilter]]) -> list[dict[str, str]]:
    if not filters:
        return []
    return [{"Name": item.name.value, "Value": item.value} for item in filters]


def build_filter_config(filters: Optional[Sequence[EventFilter]]) -> Optional[dict[str, Any]]:
    """Return the `Filter` block for a notification entry, or None for no filtering.

    S3 treats a missing `Filter` differently from one with an empty rule list, so an
    empty filter list yields None rather than `{"Key": {"FilterRules": []}}`.
    """

    rules = build_filter_rules(filters)
    if not rules:
        return None
    return {"Key": {"FilterRules": rules}}


def build_notification_configuration(
    *,
    event_type: Any,
    target_arn: str,
    events: Sequence[str],
    filters: Optional[Sequence[EventFilter]] = None,
) -> dict[str, Any]:
    """Build a `NotificationConfiguration` holding a single entry for one consumer."""

    event_type_value = _event_type_value(event_type)
    target = _NOTIFICATION_TARGETS.get(event_type_value)
    if target is None:
        raise UnsupportedNotificationTypeError(
            f"Invalid/unsupported notification type from S3 bucket specified: {event_type_value}",
            event_type=event_type_value,
        )

    list_key, arn_key = target
    entry: dict[str, Any] = {arn_key: target_arn, "Events": list(events)}

    filter_config = build_filter_config(filters)
    if filter_config is not None:
        entry["Filter"] = filter_config

    return {list_key: [entry]}


def validate_event_outputs(
    *,
    producer: Optional[EventOutputs],
    consumer: Optional[EventOutputs],
    supported_types: Collection[Any],
    label: str,
) -> tuple[str, str, str]:
    """Check both sides published usable event outputs.

    Returns:
        (bucket name, consumer ARN, consumer event type)
    """

    if producer is None or consumer is None:
        raise MissingEventOutputsError(
            f"{label} - Both the consumer and producer must return event outputs from their deploy"
        )

    if not (producer.resource_name and producer.resource_arn and consumer.resource_name and consumer.resource_arn):
        raise IncompleteEventOutputsError(f"{label} - Expected bucket name and consumer ARN in deploy outputs")

    consumer_type = consumer.service_event_type
    if consumer_type not in {_event_type_value(t) for t in supported_types}:
        raise UnsupportedConsumerTypeError(
            f"{label} - Unsupported event consumer type given: {consumer_type}",
            event_type=consumer_type,
        )

    return producer.resource_name, consumer.resource_arn, consumer_type


class BucketNotificationService:
    """Routes bucket events to a single consumer.

    Each `apply` issues one PutBucketNotificationConfiguration call containing only
    this consumer's entry. The call replaces the bucket's whole configuration, so
    for several consumers on one bucket the last call wins.
    """

    def __init__(self, *, s3: S3Service, label: str = "S3-importer") -> None:
        self._s3 = s3
        self._label = label

    async def apply(
        self,
        *,
        producer_outputs: Optional[EventOutputs],
        consumer_outputs: Optional[EventOutputs],
        request: EventSubscriptionRequest,
        supported_types: Collection[Any],
    ) -> dict[str, Any]:
        bucket_name, consumer_arn, consumer_type = validate_event_outputs(
            producer=producer_outputs,
            consumer=consumer_outputs,
            supported_types=supported_types,
            label=self._label,
        )

        notification_configuration = build_notification_configuration(
            event_type=consumer_type,
            target_arn=consumer_arn,
            events=request.bucket_events,
            filters=request.filters,
        )

        logger.debug(
            "Putting notification configuration on bucket %s: %s",
            bucket_name,
            notification_configuration,
        )
        await self._s3.put_bucket_notification_configuration(
            bucket_name=bucket_name,
            notification_configuration=notification_configuration,
        )
        return notification_configuration
