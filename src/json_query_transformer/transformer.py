"""Transform invoker delegating to an external query engine."""

import logging
import time
from pathlib import Path
from typing import Any, Optional, Union
from .types import (
    QueryTransformerInterface,
    TransformEngine,
    TransformRequest,
    TransformResult,
    TransformSuccess,
    TransformFailure,
    ErrorType,
    FileProcessingError
)
from .engines import create_engine
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler
from .io import FileReader, FileWriter
from .utils.formatting import format_json
from .utils.validation import ValidationUtils


class QueryTransformer(QueryTransformerInterface):
    """
    Main implementation of the transform invoker.

    Compiles a query with the configured engine, applies it to JSON data and
    normalizes every outcome into a TransformResult. Exceptions raised while
    loading input or running the engine never escape ``transform*`` methods.
    """

    def __init__(self, engine: Optional[TransformEngine] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the transformer.

        Args:
            engine: Transformation engine (defaults to jq)
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.engine = engine or create_engine("jq")
        self.error_handler = ErrorHandler(self.logger)
        self.profiler = PerformanceProfiler(self.logger)
        self.file_reader = FileReader(self.logger)
        self.file_writer = FileWriter(self.logger)

    def transform(self, request: TransformRequest) -> TransformResult:
        """
        Run a transformation request.

        Args:
            request: Validated TransformRequest

        Returns:
            TransformResult for the request
        """
        if request.data_is_text:
            return self.transform_text(request.data, request.query)
        return self.transform_value(request.data, request.query)

    def transform_value(self, data: Any, query: str) -> TransformResult:
        """
        Transform a structured JSON value.

        Args:
            data: Parsed JSON value
            query: Query string for the engine

        Returns:
            TransformResult with the transformed value or the failure
        """
        return self._run(lambda: data, query, "transform_value")

    def transform_text(self, json_text: str, query: str) -> TransformResult:
        """
        Parse raw JSON text and transform it.

        Args:
            json_text: JSON document as text
            query: Query string for the engine

        Returns:
            TransformResult with the transformed value or the failure
        """
        def load():
            data, validation = ValidationUtils.parse_json_string(json_text)
            if not validation.is_valid:
                raise FileProcessingError(validation.message)
            return data

        input_size = len(json_text.encode('utf-8')) if isinstance(json_text, str) else 0
        return self._run(load, query, "transform_text", input_size)

    def transform_files(self, input_path: Union[str, Path],
                        query_path: Union[str, Path]) -> TransformResult:
        """
        Transform a JSON file using a query stored in another file.

        Args:
            input_path: Path to the input JSON file
            query_path: Path to the query file

        Returns:
            TransformResult; unreadable or invalid files become failures
        """
        self.logger.info(f"Starting transformation from files: input={input_path}, query={query_path}")
        start = time.perf_counter()

        try:
            self.error_handler.require_readable_file(input_path, "Input file")
            self.error_handler.require_readable_file(query_path, "Query file")
            data = self.file_reader.read_json(input_path)
            query = self.file_reader.read_text(query_path)
        except Exception as e:
            return self._failure(e, start)

        self.logger.debug(f"Successfully loaded query: {len(query)} characters")
        return self._run(lambda: data, query, "transform_files", start=start)

    def format_json(self, value: Any, pretty_print: bool = False) -> str:
        """Render a JSON value as compact or indented text."""
        return format_json(value, pretty_print)

    def render_result(self, value: Any, request: TransformRequest) -> Any:
        """
        Shape a transformed value according to the request's output flags.

        Args:
            value: Transformed JSON value
            request: Request carrying ``pretty_print`` and ``return_as_string``

        Returns:
            The value itself, or its JSON text when ``return_as_string`` is set
        """
        if request.return_as_string:
            return self.format_json(value, request.pretty_print)
        return value

    def write_json(self, value: Any, output_path: Union[str, Path],
                   pretty_print: bool = False) -> None:
        """Write a JSON value to a file."""
        self.file_writer.write_json(value, output_path, pretty_print)

    def _run(self, load_data, query: str, operation: str,
             input_size: int = 0, start: Optional[float] = None) -> TransformResult:
        if start is None:
            start = time.perf_counter()

        try:
            with self.profiler.profile_operation(operation, input_size):
                query_validation = self.error_handler.validate_query(query)
                if not query_validation.is_valid:
                    return TransformFailure(
                        error_message=query_validation.message,
                        processing_time_ms=self.profiler.elapsed_ms(start),
                        error_type=ErrorType.VALIDATION
                    )

                data = load_data()

                self.logger.debug(f"Compiling query with engine '{self.engine.name}'")
                expression = self.engine.compile(query)

                self.logger.debug("Executing transformation")
                value = expression.apply(data)
        except Exception as e:
            return self._failure(e, start)

        processing_time = self.profiler.elapsed_ms(start)
        self.logger.info(f"Transformation completed successfully in {processing_time}ms")
        return TransformSuccess(value=value, processing_time_ms=processing_time)

    def _failure(self, error: Exception, start: float) -> TransformFailure:
        processing_time = self.profiler.elapsed_ms(start)
        error_type = self.error_handler.classify(error)
        message = self.error_handler.describe(error)
        self.logger.error(f"Transformation failed after {processing_time}ms ({error_type.value}): {message}")
        self.logger.debug("Transformation failure details", exc_info=error)
        return TransformFailure(
            error_message=message,
            processing_time_ms=processing_time,
            error_type=error_type,
            cause=error
        )
