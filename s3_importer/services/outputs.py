from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from s3_importer.models.s3 import BucketDescriptor
from s3_importer.models.service import EventOutputs, ServiceEventType

S3_EVENT_PRINCIPAL = "s3.amazonaws.com"

_OBJECT_ACTIONS = [
    "s3:PutObject",
    "s3:GetObject",
    "s3:DeleteObject",
    "s3:GetObjectAcl",
    "s3:PutObjectAcl",
    "s3:DeleteObjectAcl",
]


@dataclass(frozen=True)
class DeployOutputs:
    environment_variables: dict[str, str]
    policies: list[dict[str, Any]]
    event_outputs: EventOutputs


def bucket_environment_variables(bucket: BucketDescriptor, *, region: str) -> dict[str, str]:
    return {
        "BUCKET_NAME": bucket.name,
        "BUCKET_ARN": bucket.arn,
        "BUCKET_URL": f"https://{bucket.name}.s3.amazonaws.com/",
        "REGION_ENDPOINT": f"s3-{region}.amazonaws.com",
    }


def bucket_policies(bucket: BucketDescriptor) -> list[dict[str, Any]]:
    """Bucket-level list access, then object-level read/write/ACL access."""

    return [
        {
            "Effect": "Allow",
            "Action": ["s3:ListBucket"],
            "Resource": [bucket.arn],
        },
        {
            "Effect": "Allow",
            "Action": list(_OBJECT_ACTIONS),
            "Resource": [f"{bucket.arn}/*"],
        },
    ]


def build_deploy_outputs(bucket: BucketDescriptor, *, region: str) -> DeployOutputs:
    return DeployOutputs(
        environment_variables=bucket_environment_variables(bucket, region=region),
        policies=bucket_policies(bucket),
        event_outputs=EventOutputs(
            resource_name=bucket.name,
            resource_arn=bucket.arn,
            resource_principal=S3_EVENT_PRINCIPAL,
            service_event_type=ServiceEventType.S3.value,
        ),
    )
