"""Response envelope shared by the REST and MCP front-ends."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from .types import TransformRequest, TransformResult


def _new_request_id() -> str:
    return str(uuid.uuid4())


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ResponseEnvelope:
    """
    Uniform success/error/timing wrapper returned to REST and MCP callers.

    ``request_id`` and ``timestamp`` are assigned when the envelope is built.
    """
    success: bool
    result: Any = None
    error_message: Optional[str] = None
    processing_time_ms: int = 0
    request_id: str = field(default_factory=_new_request_id)
    timestamp: str = field(default_factory=_utc_timestamp)

    def __post_init__(self):
        if self.success and self.error_message is not None:
            raise ValueError("successful envelope cannot carry an error message")
        if not self.success and not self.error_message:
            raise ValueError("failed envelope requires an error message")
        if self.processing_time_ms < 0:
            raise ValueError("processing_time_ms must be non-negative")

    @classmethod
    def from_result(cls, result: TransformResult, rendered_value: Any = None,
                    request_id: Optional[str] = None) -> 'ResponseEnvelope':
        """
        Wrap a transformation result.

        Args:
            result: Outcome from the transform invoker
            rendered_value: Value to expose as ``result`` on success
            request_id: Identifier to reuse instead of generating one

        Returns:
            ResponseEnvelope for the result
        """
        extra = {"request_id": request_id} if request_id else {}
        if result.success:
            return cls(success=True, result=rendered_value,
                       processing_time_ms=result.processing_time_ms, **extra)
        return cls(success=False, error_message=result.error_message,
                   processing_time_ms=result.processing_time_ms, **extra)

    @classmethod
    def error(cls, message: str, processing_time_ms: int = 0,
              request_id: Optional[str] = None) -> 'ResponseEnvelope':
        """Build a failure envelope for a request rejected before transformation."""
        extra = {"request_id": request_id} if request_id else {}
        return cls(success=False, error_message=message,
                   processing_time_ms=processing_time_ms, **extra)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used on the wire."""
        return {
            "success": self.success,
            "result": self.result,
            "errorMessage": self.error_message,
            "processingTimeMs": self.processing_time_ms,
            "requestId": self.request_id,
            "timestamp": self.timestamp,
        }


def build_envelope(transformer, request: TransformRequest,
                   result: TransformResult,
                   request_id: Optional[str] = None) -> ResponseEnvelope:
    """
    Wrap a result, rendering the value per the request's output flags.

    Args:
        transformer: QueryTransformer used for rendering
        request: Request the result belongs to
        result: Outcome from the transform invoker
        request_id: Optional identifier to reuse

    Returns:
        ResponseEnvelope ready to serialize
    """
    rendered: Union[Any, str] = None
    if result.success:
        rendered = transformer.render_result(result.value, request)
    return ResponseEnvelope.from_result(result, rendered, request_id)
