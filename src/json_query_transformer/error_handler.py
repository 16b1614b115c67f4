"""Error handling implementation for the JSON Query Transformer."""

import logging
from pathlib import Path
from typing import Any, Optional, Union
from .types import (
    ValidationResult,
    ValidationError,
    ErrorType,
    TransformerError,
    FileProcessingError
)
from .utils.size_calculator import SizeCalculator
from .utils.validation import ValidationUtils


class ErrorHandler:
    """
    Error handler for transformation requests.

    Validates what the front-ends receive before it reaches the engine and
    turns exceptions into the category and message reported to callers.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)
        self.size_calculator = SizeCalculator(self.logger)

    def require_readable_file(self, path: Optional[Union[str, Path]], label: str = "File") -> Path:
        """
        Ensure a path is an existing, readable file.

        Args:
            path: Path to validate
            label: Human-readable name used in messages

        Returns:
            The path as a Path object

        Raises:
            FileProcessingError: If the file cannot be used
        """
        result = ValidationUtils.validate_readable_file(path, label)
        if not result.is_valid:
            self.logger.error(f"File validation failed: {result.message}")
            raise FileProcessingError(result.message, context={"path": str(path)})
        return Path(path)

    def validate_query(self, query: Any) -> ValidationResult:
        """Validate a query string supplied by a caller."""
        return ValidationUtils.validate_query(query)

    def validate_payload_size(self, data: Any, max_bytes: int,
                              data_is_text: bool = False) -> ValidationResult:
        """
        Check a payload against a byte limit.

        Args:
            data: Raw JSON text or structured value
            max_bytes: Maximum allowed size in bytes
            data_is_text: Whether ``data`` is raw JSON text

        Returns:
            ValidationResult with validation details
        """
        try:
            size = self.size_calculator.calculate_payload_size(data, data_is_text)
        except ValueError as e:
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(type=ErrorType.VALIDATION, message=str(e), location="jsonData")]
            )

        if size > max_bytes:
            message = (f"JSON data size ({size} bytes) exceeds maximum allowed size "
                       f"({max_bytes} bytes)")
            self.logger.warning(message)
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(type=ErrorType.SIZE, message=message, location="jsonData")]
            )

        return ValidationResult(is_valid=True)

    def classify(self, error: BaseException) -> ErrorType:
        """
        Map an exception to an error category.

        Args:
            error: Exception raised while serving a request

        Returns:
            ErrorType of the exception
        """
        if isinstance(error, TransformerError):
            return error.error_type
        if isinstance(error, (OSError, UnicodeDecodeError)):
            return ErrorType.INPUT
        return ErrorType.INTERNAL

    def describe(self, error: BaseException) -> str:
        """
        Build the caller-facing message for an exception.

        Args:
            error: Exception raised while serving a request

        Returns:
            Non-empty error message
        """
        message = str(error).strip()
        if isinstance(error, TransformerError):
            return message or error.error_type.value
        if isinstance(error, OSError):
            return f"I/O error: {message or type(error).__name__}"
        return message or type(error).__name__
