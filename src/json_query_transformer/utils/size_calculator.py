"""Size calculation utilities for JSON payloads."""

import json
import logging
from typing import Any, Optional


class SizeCalculator:
    """
    Utility class for calculating sizes of JSON data.

    Sizes are UTF-8 byte counts of the compact JSON serialization, which is
    what the payload limits of the front-ends are expressed in.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the size calculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def calculate_json_size(self, data: Any, ensure_ascii: bool = False) -> int:
        """
        Calculate the size of data when serialized to JSON in UTF-8 bytes.

        Args:
            data: Data to calculate size for
            ensure_ascii: Whether to ensure ASCII encoding

        Returns:
            Size in bytes

        Raises:
            ValueError: If data is not JSON serializable
        """
        try:
            # Fast path for primitives
            if isinstance(data, (str, int, float, bool)) or data is None:
                return self._calculate_primitive_size(data, ensure_ascii)

            json_string = json.dumps(data, ensure_ascii=ensure_ascii, separators=(',', ':'))
            return len(json_string.encode('utf-8'))
        except (TypeError, ValueError, RecursionError) as e:
            raise ValueError(f"Data is not JSON serializable: {str(e)}")

    def calculate_payload_size(self, data: Any, data_is_text: bool = False) -> int:
        """
        Calculate the size of a request payload.

        Raw JSON text is measured as-is; structured values are measured by
        their compact serialization.

        Args:
            data: Raw JSON text or structured value
            data_is_text: Whether ``data`` is raw JSON text

        Returns:
            Size in bytes
        """
        if data_is_text and isinstance(data, str):
            return len(data.encode('utf-8'))
        return self.calculate_json_size(data)

    def _calculate_primitive_size(self, data: Any, ensure_ascii: bool = False) -> int:
        """Fast size calculation for primitive types."""
        if data is None:
            return 4  # "null"
        elif isinstance(data, bool):
            return 4 if data else 5  # "true" or "false"
        elif isinstance(data, (int, float)):
            return len(json.dumps(data))
        elif isinstance(data, str):
            return len(json.dumps(data, ensure_ascii=ensure_ascii).encode('utf-8'))
        return 0
