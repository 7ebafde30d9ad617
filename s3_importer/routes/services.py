from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from starlette import status

from s3_importer.extension import ExtensionContext
from s3_importer.models.lifecycle import (
    CheckRequest,
    CheckResponse,
    DeployRequest,
    ProduceEventsRequest,
    ServiceMetadataResponse,
    UnDeployRequest,
)
from s3_importer.models.service import DeployContext, ProduceEventsContext, UnDeployContext
from s3_importer.services.dependencies import get_extension_context
from s3_importer.services.s3_import_service import S3ImportService

router = APIRouter(prefix="/services", tags=["services"])


def _deployer(service_type: str, extensions: ExtensionContext) -> S3ImportService:
    try:
        return extensions.get(service_type)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown service type: {service_type}") from exc


@router.get("/{service_type}", response_model=ServiceMetadataResponse)
async def service_metadata(
    service_type: str = Path(..., description="Registered service type, e.g. 's3'"),
    extensions: ExtensionContext = Depends(get_extension_context),
) -> ServiceMetadataResponse:
    deployer = _deployer(service_type, extensions)
    return ServiceMetadataResponse(
        service_type=service_type,
        consumed_deploy_output_types=deployer.consumed_deploy_output_types,
        produced_deploy_output_types=deployer.produced_deploy_output_types,
        provided_event_type=deployer.provided_event_type.value,
        produced_events_supported_types=[t.value for t in deployer.produced_events_supported_types],
        supports_tagging=deployer.supports_tagging,
    )


@router.post("/{service_type}/check", response_model=CheckResponse)
async def check(
    payload: CheckRequest,
    service_type: str = Path(...),
    extensions: ExtensionContext = Depends(get_extension_context),
) -> CheckResponse:
    deployer = _deployer(service_type, extensions)
    errors = deployer.check(payload.service_context, payload.dependencies_service_contexts)
    return CheckResponse(errors=errors)


@router.post("/{service_type}/deploy", response_model=DeployContext)
async def deploy(
    payload: DeployRequest,
    service_type: str = Path(...),
    extensions: ExtensionContext = Depends(get_extension_context),
) -> DeployContext:
    deployer = _deployer(service_type, extensions)
    return await deployer.deploy(payload.service_context, payload.dependencies_deploy_contexts)


@router.post("/{service_type}/produce-events", response_model=ProduceEventsContext)
async def produce_events(
    payload: ProduceEventsRequest,
    service_type: str = Path(...),
    extensions: ExtensionContext = Depends(get_extension_context),
) -> ProduceEventsContext:
    deployer = _deployer(service_type, extensions)
    return await deployer.produce_events(
        payload.service_context,
        payload.deploy_context,
        payload.event_consumer_config,
        payload.consumer_service_context,
        payload.consumer_deploy_context,
    )


@router.post("/{service_type}/undeploy", response_model=UnDeployContext)
async def un_deploy(
    payload: UnDeployRequest,
    service_type: str = Path(...),
    extensions: ExtensionContext = Depends(get_extension_context),
) -> UnDeployContext:
    deployer = _deployer(service_type, extensions)
    return await deployer.un_deploy(payload.service_context)
