from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BucketDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="S3 bucket name")
    arn: str

    @staticmethod
    def arn_for(name: str) -> str:
        return f"arn:aws:s3:::{name}"

    @staticmethod
    def from_s3_bucket(obj: dict[str, Any]) -> "BucketDescriptor":
        name = str(obj.get("Name"))
        return BucketDescriptor(name=name, arn=BucketDescriptor.arn_for(name))
