from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ServiceEventType(str, Enum):
    LAMBDA = "lambda"
    SNS = "sns"
    SQS = "sqs"
    S3 = "s3"
    CLOUDWATCH_EVENTS = "cloudwatchEvent"
    IOT = "iot"
    DYNAMODB = "dynamodb"
    ALEXA_SKILL_KIT = "alexaSkillKit"


class DeployOutputType(str, Enum):
    ENVIRONMENT_VARIABLES = "environmentVariables"
    POLICIES = "policies"
    CREDENTIALS = "credentials"
    SECURITY_GROUPS = "securityGroups"
    SCRIPTS = "scripts"
    MANAGED_POLICIES = "managedPolicies"


class AccountConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    account_id: str
    region: str


class S3ImportConfig(BaseModel):
    """The `params` block of an `s3` service in the environment definition.

    `bucket_name` may be a template containing `<account_id>` and `<region>`.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str = "s3"
    bucket_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("bucket_name", "resource_name"),
    )


class ServiceContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_name: str
    environment_name: str
    service_name: str
    service_type: str = "s3"
    params: S3ImportConfig = Field(default_factory=S3ImportConfig)
    account_config: AccountConfig


class EventOutputs(BaseModel):
    """Event routing details a deployed service publishes for producers/consumers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    resource_name: Optional[str] = Field(default=None, alias="resourceName")
    resource_arn: Optional[str] = Field(default=None, alias="resourceArn")
    resource_principal: str = Field(alias="resourcePrincipal")
    service_event_type: str = Field(alias="serviceEventType")


class DeployContext(BaseModel):
    app_name: str
    environment_name: str
    service_name: str
    service_type: str
    environment_variables: dict[str, str] = Field(default_factory=dict)
    policies: list[dict[str, Any]] = Field(default_factory=list)
    event_outputs: Optional[EventOutputs] = None

    @staticmethod
    def for_service(service_context: ServiceContext) -> "DeployContext":
        return DeployContext(
            app_name=service_context.app_name,
            environment_name=service_context.environment_name,
            service_name=service_context.service_name,
            service_type=service_context.service_type,
        )

    def add_environment_variables(self, variables: dict[str, str]) -> None:
        self.environment_variables.update(variables)


class ProduceEventsContext(BaseModel):
    producer_service_name: str
    consumer_service_name: str


class UnDeployContext(BaseModel):
    app_name: str
    environment_name: str
    service_name: str
    service_type: str

    @staticmethod
    def for_service(service_context: ServiceContext) -> "UnDeployContext":
        return UnDeployContext(
            app_name=service_context.app_name,
            environment_name=service_context.environment_name,
            service_name=service_context.service_name,
            service_type=service_context.service_type,
        )
