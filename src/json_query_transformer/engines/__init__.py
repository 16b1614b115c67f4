"""Transformation engines."""

import logging
from typing import Dict, Optional, Type

from ..types import TransformEngine
from .jq_engine import JqEngine, JqCompiledQuery

ENGINES: Dict[str, Type[TransformEngine]] = {
    JqEngine.name: JqEngine,
}


def create_engine(name: str = "jq", logger: Optional[logging.Logger] = None) -> TransformEngine:
    """Instantiate a registered engine by name."""
    try:
        engine_cls = ENGINES[name]
    except KeyError:
        raise ValueError(
            f"Unknown engine '{name}'. Available engines: {', '.join(sorted(ENGINES))}"
        ) from None
    return engine_cls(logger=logger)


__all__ = ["ENGINES", "JqEngine", "JqCompiledQuery", "create_engine"]
