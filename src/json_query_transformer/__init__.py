"""
JSON Query Transformer - transform JSON data with declarative queries.

Wraps an external query engine (jq by default) behind a command-line tool,
a REST API and a JSON-RPC (MCP) server that share one response envelope.
"""

__version__ = "1.0.0"

from .types import (
    ErrorType,
    TransformRequest,
    TransformResult,
    TransformSuccess,
    TransformFailure,
    TransformEngine,
    CompiledQuery,
    TransformerError,
    FileProcessingError,
    TransformationError,
    QueryCompilationError,
    QueryExecutionError,
)
from .envelope import ResponseEnvelope, build_envelope
from .transformer import QueryTransformer
from .config import ServiceConfig

__all__ = [
    "ErrorType",
    "TransformRequest",
    "TransformResult",
    "TransformSuccess",
    "TransformFailure",
    "TransformEngine",
    "CompiledQuery",
    "TransformerError",
    "FileProcessingError",
    "TransformationError",
    "QueryCompilationError",
    "QueryExecutionError",
    "ResponseEnvelope",
    "build_envelope",
    "QueryTransformer",
    "ServiceConfig",
]
