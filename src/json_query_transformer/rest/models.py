"""Request and response models for the REST API."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransformationRequest(CamelModel):
    """Body of ``POST /api/v1/transform``."""
    json_data: Any = Field(..., description="JSON data to transform, as a value or as JSON text")
    query: str = Field(..., description="Query applied to the data")
    pretty_print: bool = Field(False, description="Indent the result when returned as a string")
    return_as_string: bool = Field(False, description="Return the result as JSON text")

    @field_validator("json_data")
    @classmethod
    def json_data_required(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("JSON data is required")
        return value

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query cannot be blank")
        return value


class TransformationResponse(CamelModel):
    """Envelope returned by the transform endpoint."""
    success: bool
    result: Any = None
    error_message: Optional[str] = None
    processing_time_ms: int = 0
    request_id: str
    timestamp: str


class HealthResponse(CamelModel):
    status: str
    timestamp: str


class VersionResponse(CamelModel):
    version: str
    service_name: str
