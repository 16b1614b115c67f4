"""
REST front-end for the JSON Query Transformer.

Endpoints:
- POST /api/v1/transform -> transform data with a query
- GET  /api/v1/health    -> liveness
- GET  /api/v1/version   -> service name and version

Status codes: 200 whenever the transformer ran (its outcome is in the
envelope), 400 for invalid requests, 413 for oversized data, 500 for
unexpected errors. Every transform response body is a ResponseEnvelope.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ServiceConfig
from ..engines import create_engine
from ..envelope import ResponseEnvelope, build_envelope
from ..transformer import QueryTransformer
from ..types import ErrorType, TransformRequest
from .models import (
    HealthResponse,
    TransformationRequest,
    TransformationResponse,
    VersionResponse
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

TRANSFORM_RESPONSES = {
    200: {"model": TransformationResponse, "description": "Transformation ran; outcome in the envelope"},
    400: {"model": TransformationResponse, "description": "Invalid request"},
    413: {"model": TransformationResponse, "description": "JSON data exceeds the size limit"},
    500: {"model": TransformationResponse, "description": "Unexpected error"},
}


def _envelope_response(envelope: ResponseEnvelope, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_dict())


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(parts)


def create_app(config: Optional[ServiceConfig] = None,
               transformer: Optional[QueryTransformer] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Service configuration (defaults to the environment)
        transformer: Transformer to delegate to (built from config if omitted)

    Returns:
        Configured FastAPI application
    """
    config = config or ServiceConfig.from_env()
    transformer = transformer or QueryTransformer(engine=create_engine(config.engine))

    app = FastAPI(
        title=config.service_name,
        version=__version__,
        description="Transform JSON data with declarative queries",
    )
    app.state.config = config
    app.state.transformer = transformer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning(f"Rejected request to {request.url.path}: {message}")
        return _envelope_response(ResponseEnvelope.error(message), status_code=400)

    router = APIRouter(prefix=API_PREFIX)

    @router.post("/transform", responses=TRANSFORM_RESPONSES)
    def transform(body: TransformationRequest):
        """Transform JSON data with a query and return a response envelope."""
        request_id = str(uuid.uuid4())
        logger.info(f"Processing transformation request: {request_id} with query length: {len(body.query)}")

        try:
            data_is_text = isinstance(body.json_data, str)
            size_validation = transformer.error_handler.validate_payload_size(
                body.json_data, config.max_payload_bytes, data_is_text
            )
            if not size_validation.is_valid:
                status = 413 if size_validation.errors[0].type == ErrorType.SIZE else 400
                logger.warning(f"Request {request_id} rejected: {size_validation.message}")
                return _envelope_response(
                    ResponseEnvelope.error(size_validation.message, request_id=request_id),
                    status_code=status
                )

            request = TransformRequest(
                data=body.json_data,
                query=body.query,
                pretty_print=body.pretty_print,
                return_as_string=body.return_as_string,
                data_is_text=data_is_text
            )
            result = transformer.transform(request)
            envelope = build_envelope(transformer, request, result, request_id)
        except Exception as e:
            logger.exception(f"Unexpected error for request: {request_id}")
            return _envelope_response(
                ResponseEnvelope.error(f"Unexpected error during transformation: {e}", request_id=request_id),
                status_code=500
            )

        if envelope.success:
            logger.info(f"Transformation successful for request: {request_id} in {envelope.processing_time_ms}ms")
        else:
            logger.warning(f"Transformation failed for request: {request_id} - {envelope.error_message}")
        return _envelope_response(envelope)

    @router.get("/health", response_model=HealthResponse)
    def health():
        """Liveness check."""
        logger.debug("Health check requested")
        return HealthResponse(status="UP", timestamp=datetime.now(timezone.utc).isoformat())

    @router.get("/version", response_model=VersionResponse)
    def version():
        """Service name and version."""
        logger.debug("Version information requested")
        return VersionResponse(version=__version__, service_name=config.service_name)

    app.include_router(router)
    return app
