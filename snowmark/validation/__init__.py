"""Document validation."""

from .lib import ValidationIssue, is_valid, validate_document

__all__ = ["ValidationIssue", "is_valid", "validate_document"]
