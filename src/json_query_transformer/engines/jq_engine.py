"""Transformation engine backed by the jq library."""

import logging
from typing import Any, Optional

import jq

from ..types import (
    CompiledQuery,
    TransformEngine,
    QueryCompilationError,
    QueryExecutionError
)


class JqCompiledQuery(CompiledQuery):
    """A compiled jq program."""

    def __init__(self, program: Any, query: str,
                 logger: Optional[logging.Logger] = None):
        self._program = program
        self.query = query
        self.logger = logger or logging.getLogger(__name__)

    def apply(self, data: Any) -> Any:
        """
        Run the program against a JSON value.

        jq programs emit a stream of values: no output maps to None, a
        single output to itself, several outputs to a list.

        Args:
            data: Parsed JSON value

        Returns:
            Transformed JSON value

        Raises:
            QueryExecutionError: If jq fails at runtime
        """
        try:
            outputs = self._program.input_value(data).all()
        except (ValueError, TypeError, StopIteration) as e:
            raise QueryExecutionError(f"Query execution failed: {e}") from e

        self.logger.debug(f"jq program produced {len(outputs)} output(s)")

        if not outputs:
            return None
        if len(outputs) == 1:
            return outputs[0]
        return outputs


class JqEngine(TransformEngine):
    """Engine compiling queries with jq."""

    name = "jq"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def compile(self, query: str) -> JqCompiledQuery:
        """
        Compile a jq query.

        Args:
            query: jq program text

        Returns:
            JqCompiledQuery ready to apply

        Raises:
            QueryCompilationError: If the program has syntax errors
        """
        self.logger.debug(f"Compiling jq query ({len(query)} characters)")
        try:
            program = jq.compile(query)
        except ValueError as e:
            raise QueryCompilationError(f"Query compilation failed: {e}") from e
        return JqCompiledQuery(program, query, self.logger)
