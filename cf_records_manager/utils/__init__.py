"""
Utility functions and helpers.

This package contains record validation, restricted subdomain matching,
the confirmation prompt and usage tips.
"""

from .prompt import confirm_prompt, fixed_answer
from .restricted import is_restricted, split_restricted
from .validators import record_warnings, validate_record

__all__ = [
    "confirm_prompt",
    "fixed_answer",
    "is_restricted",
    "split_restricted",
    "record_warnings",
    "validate_record",
]
