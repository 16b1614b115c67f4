"""Core type definitions for the JSON Query Transformer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union


class ErrorType(Enum):
    """Enumeration of error types."""
    INPUT = "input"
    COMPILATION = "compilation"
    RUNTIME = "runtime"
    VALIDATION = "validation"
    SIZE = "size"
    OUTPUT = "output"
    INTERNAL = "internal"


@dataclass(frozen=True)
class TransformRequest:
    """
    A single transformation request.

    ``data`` is either a structured JSON value or, when ``data_is_text`` is
    set, raw JSON text that still has to be parsed.
    """
    data: Any
    query: str
    pretty_print: bool = False
    return_as_string: bool = False
    data_is_text: bool = False

    def __post_init__(self):
        """Validate request after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.query, str):
            raise ValueError("query must be a string")
        if not self.query.strip():
            raise ValueError("query cannot be blank")

    @classmethod
    def from_text(cls, json_text: str, query: str, **flags) -> 'TransformRequest':
        """Build a request whose data is raw JSON text."""
        return cls(data=json_text, query=query, data_is_text=True, **flags)


@dataclass(frozen=True)
class TransformSuccess:
    """Successful transformation outcome."""
    value: Any
    processing_time_ms: int

    def __post_init__(self):
        if self.processing_time_ms < 0:
            raise ValueError("processing_time_ms must be non-negative")

    @property
    def success(self) -> bool:
        return True

    @property
    def error_message(self) -> None:
        return None


@dataclass(frozen=True)
class TransformFailure:
    """Failed transformation outcome."""
    error_message: str
    processing_time_ms: int
    error_type: ErrorType = ErrorType.INTERNAL
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.processing_time_ms < 0:
            raise ValueError("processing_time_ms must be non-negative")
        if not self.error_message:
            raise ValueError("error_message cannot be empty")

    @property
    def success(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None


TransformResult = Union[TransformSuccess, TransformFailure]


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        """All error messages joined into one line."""
        return "; ".join(error.message for error in self.errors)


class TransformerError(Exception):
    """Base exception for transformer errors."""

    error_type = ErrorType.INTERNAL

    def __init__(self, message: str, error_type: Optional[ErrorType] = None,
                 context: Optional[Any] = None):
        super().__init__(message)
        if error_type is not None:
            self.error_type = error_type
        self.context = context


class FileProcessingError(TransformerError):
    """Raised when an input or output file cannot be used."""

    error_type = ErrorType.INPUT


class TransformationError(TransformerError):
    """Raised when the engine cannot transform the data."""

    error_type = ErrorType.RUNTIME


class QueryCompilationError(TransformationError):
    """Raised when a query string does not compile."""

    error_type = ErrorType.COMPILATION


class QueryExecutionError(TransformationError):
    """Raised when a compiled query fails against the data."""

    error_type = ErrorType.RUNTIME


# Abstract base classes for interfaces

class CompiledQuery(ABC):
    """A query compiled by a transformation engine."""

    @abstractmethod
    def apply(self, data: Any) -> Any:
        """Apply the query to a JSON value and return the transformed value."""
        pass


class TransformEngine(ABC):
    """Abstract interface for an external transformation engine."""

    name: str = "abstract"

    @abstractmethod
    def compile(self, query: str) -> CompiledQuery:
        """Compile a query string into an executable expression."""
        pass


class QueryTransformerInterface(ABC):
    """Abstract interface for the transform invoker."""

    @abstractmethod
    def transform(self, request: TransformRequest) -> TransformResult:
        """Run a transformation request and normalize its outcome."""
        pass

    @abstractmethod
    def transform_value(self, data: Any, query: str) -> TransformResult:
        """Transform a structured JSON value."""
        pass

    @abstractmethod
    def transform_text(self, json_text: str, query: str) -> TransformResult:
        """Parse raw JSON text and transform it."""
        pass
