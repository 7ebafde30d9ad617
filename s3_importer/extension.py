from __future__ import annotations

from s3_importer.services.s3_import_service import S3ImportService
from s3_importer.services.s3_service import S3Service


class ExtensionContext:
    """Registry of the service deployers an extension contributes, keyed by service type."""

    def __init__(self) -> None:
        self._services: dict[str, S3ImportService] = {}

    def service(self, name: str, deployer: S3ImportService) -> None:
        if not name or not name.strip():
            raise ValueError("service type name must be provided")
        if name in self._services:
            raise ValueError(f"Service type already registered: {name}")
        self._services[name] = deployer

    def get(self, name: str) -> S3ImportService:
        try:
            return self._services[name]
        except KeyError:
            raise KeyError(f"Unknown service type: {name}") from None

    def service_types(self) -> list[str]:
        return sorted(self._services)


def load_extension(context: ExtensionContext, *, s3: S3Service) -> None:
    context.service("s3", S3ImportService(s3=s3))
