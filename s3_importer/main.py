from contextlib import asynccontextmanager
from http import HTTPStatus
import logging
import os

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from s3_importer.routes.services import router as services_router
from s3_importer.services.errors import (
    BucketNotFoundError,
    EventOutputsError,
    UnsupportedEventTypeError,
)


def _ensure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(level)
        for handler in root.handlers:
            handler.setFormatter(formatter)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_logging()
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(services_router)


@app.exception_handler(BucketNotFoundError)
async def bucket_not_found_handler(request: Request, exc: BucketNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "bucket_name": exc.bucket_name},
    )


@app.exception_handler(EventOutputsError)
async def event_outputs_error_handler(request: Request, exc: EventOutputsError) -> JSONResponse:
    """A producer or consumer deployed without publishing usable event outputs.

    Returns:
        409 Conflict: the dependency graph or a collaborating service is broken.
    """
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(UnsupportedEventTypeError)
async def unsupported_event_type_handler(request: Request, exc: UnsupportedEventTypeError) -> JSONResponse:
    return JSONResponse(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "event_type": exc.event_type},
    )


@app.exception_handler(ClientError)
@app.exception_handler(BotoCoreError)
async def provider_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map AWS provider failures to a consistent HTTP response.

    Keeps provider error details out of the response body; they are already logged
    by the S3 service layer.

    Returns:
        502 Bad Gateway with a JSON body: {"detail": "..."}
    """
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "AWS provider call failed"},
    )


@app.get("/")
async def root():
    return {"message": "S3 importer service type is running."}
