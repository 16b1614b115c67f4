"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
import logging
from pathlib import Path
from typing import Any, List

from json_query_transformer.types import (
    CompiledQuery,
    TransformEngine,
    QueryCompilationError
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by entry points so they never outlive a test."""
    logger = logging.getLogger("json_query_transformer")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_users_json():
    """Sample nested JSON document."""
    return {
        "users": [
            {"id": 1, "name": "Alice", "email": "alice@example.com", "active": True},
            {"id": 2, "name": "Bob", "email": "bob@example.com", "active": False},
            {"id": 3, "name": "Carol", "email": "carol@example.com", "active": True},
        ],
        "settings": {
            "theme": "dark",
            "notifications": True
        }
    }


@pytest.fixture
def write_file(temp_dir):
    """Write text (or JSON for non-strings) to a file in the temp directory."""
    def _write(name: str, content: Any) -> Path:
        path = temp_dir / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class RecordingEngine(TransformEngine):
    """Engine double that records calls and echoes data back."""

    name = "recording"

    def __init__(self, fail_compile: bool = False):
        self.fail_compile = fail_compile
        self.compiled: List[str] = []
        self.applied: List[Any] = []

    def compile(self, query: str) -> CompiledQuery:
        self.compiled.append(query)
        if self.fail_compile:
            raise QueryCompilationError(f"Query compilation failed: cannot parse {query!r}")
        engine = self

        class _Echo(CompiledQuery):
            def apply(self, data: Any) -> Any:
                engine.applied.append(data)
                return {"echo": data}

        return _Echo()


@pytest.fixture
def recording_engine():
    """Engine double recording every compile/apply call."""
    return RecordingEngine()


@pytest.fixture
def failing_engine():
    """Engine double whose compile step always fails."""
    return RecordingEngine(fail_compile=True)
