"""File writer utilities for transformation output."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
from ..types import FileProcessingError, ErrorType
from ..utils.formatting import format_json


class FileWriter:
    """Writes transformed JSON to disk."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def write_json(self, data: Any, output_path: Union[str, Path],
                   pretty_print: bool = False) -> Dict[str, Any]:
        """
        Write a JSON value to a file, creating parent directories.

        Args:
            data: JSON value to write
            output_path: Destination file
            pretty_print: Whether to indent the output

        Returns:
            Dictionary with the written path and size in bytes

        Raises:
            FileProcessingError: If writing fails
        """
        file_path = Path(output_path)
        self.logger.debug(f"Writing JSON to file: {file_path} (pretty={pretty_print})")

        try:
            content = format_json(data, pretty_print) + "\n"
            self._ensure_directory_exists(file_path.parent)
            file_path.write_text(content, encoding='utf-8')
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to write JSON to file: {file_path}: {e}")
            raise FileProcessingError(
                f"Cannot write to file: {file_path}: {e}",
                ErrorType.OUTPUT,
                context={"path": str(file_path)}
            ) from e

        size = len(content.encode('utf-8'))
        self.logger.info(f"Successfully wrote JSON to file: {file_path}")
        return {"path": str(file_path.absolute()), "size": size}

    def _ensure_directory_exists(self, directory: Path) -> None:
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Created directory: {directory}")
