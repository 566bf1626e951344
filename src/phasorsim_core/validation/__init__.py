from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import SemanticIssueCode
from .exceptions import SemanticValidationError
from .semantic_validator import SemanticValidator

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "SemanticIssueCode",
    "SemanticValidationError",
    "SemanticValidator",
]
