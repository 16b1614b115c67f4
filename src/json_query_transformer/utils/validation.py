"""Validation utilities for request data, queries and file paths."""

import json
import os
from pathlib import Path
from typing import Any, Optional, Tuple, Union
from ..types import ValidationResult, ValidationError, ErrorType


class ValidationUtils:
    """Utility class for validating inputs before they reach the engine."""

    @staticmethod
    def parse_json_string(json_string: str) -> Tuple[Any, ValidationResult]:
        """
        Parse JSON text, reporting syntax problems as a ValidationResult.

        Args:
            json_string: JSON string to parse

        Returns:
            Tuple of (parsed value or None, ValidationResult)
        """
        if not isinstance(json_string, str) or not json_string.strip():
            return None, ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.INPUT,
                    message="JSON input is empty",
                    location="input"
                )]
            )

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            return None, ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.INPUT,
                    message=f"Invalid JSON input: {e.msg} at line {e.lineno}, column {e.colno}",
                    location=f"line {e.lineno}, column {e.colno}"
                )]
            )

        return data, ValidationResult(is_valid=True)

    @staticmethod
    def validate_query(query: Any) -> ValidationResult:
        """
        Validate a query string.

        Args:
            query: Query value supplied by the caller

        Returns:
            ValidationResult with validation details
        """
        if not isinstance(query, str):
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.VALIDATION,
                    message="query must be a string",
                    location="query"
                )]
            )
        if not query.strip():
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.VALIDATION,
                    message="query cannot be blank",
                    location="query"
                )]
            )
        return ValidationResult(is_valid=True)

    @staticmethod
    def validate_readable_file(path: Optional[Union[str, Path]], label: str = "File") -> ValidationResult:
        """
        Check that a path names an existing, readable regular file.

        Args:
            path: Path to check
            label: Human-readable name used in messages

        Returns:
            ValidationResult with validation details
        """
        def failure(message: str) -> ValidationResult:
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(type=ErrorType.INPUT, message=message, location=str(path))]
            )

        if path is None or str(path) == "":
            return failure(f"{label} path cannot be empty")

        file_path = Path(path)
        if not file_path.exists():
            return failure(f"{label} does not exist: {file_path}")
        if file_path.is_dir():
            return failure(f"Path is a directory, not a file: {file_path}")
        if not os.access(file_path, os.R_OK):
            return failure(f"{label} is not readable: {file_path}")

        return ValidationResult(is_valid=True)
