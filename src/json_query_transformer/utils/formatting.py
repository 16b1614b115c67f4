"""JSON rendering helpers."""

import json
from typing import Any


def format_json(data: Any, pretty_print: bool = False) -> str:
    """
    Render a JSON value as text.

    Args:
        data: JSON value to render
        pretty_print: Indent with two spaces instead of the compact form

    Returns:
        JSON text

    Raises:
        TypeError: If data is not JSON serializable
    """
    if pretty_print:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False, separators=(',', ':'))
