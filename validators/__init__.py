"""
Validators package initialization.
"""

from .rules import (
    FieldValidator,
    FieldResult,
    ValidationResult,
    ValidationIssue,
    validate_field,
    character_counter,
    REQUIRED_FIELDS,
    URL_FIELDS,
)
from .slug import slugify, slug_preview
from .files import (
    ImageAdvisory,
    accept_file,
    measure_dimensions,
    dimension_advisory,
    format_file_size,
)

__all__ = [
    "FieldValidator",
    "FieldResult",
    "ValidationResult",
    "ValidationIssue",
    "validate_field",
    "character_counter",
    "REQUIRED_FIELDS",
    "URL_FIELDS",
    "slugify",
    "slug_preview",
    "ImageAdvisory",
    "accept_file",
    "measure_dimensions",
    "dimension_advisory",
    "format_file_size",
]
