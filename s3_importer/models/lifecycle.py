from __future__ import annotations

from pydantic import BaseModel, Field

from s3_importer.models.events import EventSubscriptionRequest
from s3_importer.models.service import DeployContext, DeployOutputType, ServiceContext


class ServiceMetadataResponse(BaseModel):
    service_type: str
    consumed_deploy_output_types: list[DeployOutputType]
    produced_deploy_output_types: list[DeployOutputType]
    provided_event_type: str
    produced_events_supported_types: list[str]
    supports_tagging: bool


class CheckRequest(BaseModel):
    service_context: ServiceContext
    dependencies_service_contexts: list[ServiceContext] = Field(default_factory=list)


class CheckResponse(BaseModel):
    errors: list[str]


class DeployRequest(BaseModel):
    service_context: ServiceContext
    dependencies_deploy_contexts: list[DeployContext] = Field(default_factory=list)


class ProduceEventsRequest(BaseModel):
    service_context: ServiceContext
    deploy_context: DeployContext
    event_consumer_config: EventSubscriptionRequest
    consumer_service_context: ServiceContext
    consumer_deploy_context: DeployContext


class UnDeployRequest(BaseModel):
    service_context: ServiceContext
