"""
Utility functions for the Government Scheme Finder
"""

from .validators import (
    validate_scheme_name,
    normalize_categories,
    normalize_states
)

__all__ = [
    "validate_scheme_name",
    "normalize_categories",
    "normalize_states"
]
