"""Utility functions for the JSON Query Transformer."""

from .formatting import format_json
from .size_calculator import SizeCalculator
from .validation import ValidationUtils

__all__ = ["format_json", "SizeCalculator", "ValidationUtils"]
