"""File reader utilities for transformation inputs."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union
from ..types import FileProcessingError


class FileReader:
    """Loads JSON input files and query files."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file reader.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def read_text(self, path: Union[str, Path]) -> str:
        """
        Read a UTF-8 text file.

        Args:
            path: File to read

        Returns:
            File content

        Raises:
            FileProcessingError: If the file cannot be read
        """
        file_path = Path(path)
        self.logger.debug(f"Loading text from file: {file_path}")
        try:
            return file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Failed to load text from file: {file_path}: {e}")
            raise FileProcessingError(f"Cannot read file: {file_path}: {e}",
                                      context={"path": str(file_path)}) from e

    def read_json(self, path: Union[str, Path]) -> Any:
        """
        Read and parse a JSON file.

        Args:
            path: File to read

        Returns:
            Parsed JSON value

        Raises:
            FileProcessingError: If the file cannot be read or is not valid JSON
        """
        file_path = Path(path)
        content = self.read_text(file_path)
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            self.logger.error(f"Failed to parse JSON from file: {file_path}: {e}")
            raise FileProcessingError(
                f"Cannot read JSON file: {file_path}: {e.msg} at line {e.lineno}, column {e.colno}",
                context={"path": str(file_path)}
            ) from e
