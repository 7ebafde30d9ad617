from __future__ import annotations

from s3_importer.extension import ExtensionContext, load_extension
from s3_importer.services.config import S3Config
from s3_importer.services.s3_service import S3Service


def get_s3_service() -> S3Service:
    """FastAPI dependency provider for an S3Service instance."""

    return S3Service(S3Config.from_env())


def get_extension_context() -> ExtensionContext:
    """Dependency provider for the registry of service types this process serves."""

    context = ExtensionContext()
    load_extension(context, s3=get_s3_service())
    return context
