from .errors import ValidationIssue, ValidationError
from .config_validation import validate_table_config

__all__ = ["ValidationIssue", "ValidationError", "validate_table_config"]
