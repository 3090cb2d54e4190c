"""Validation result types for pluginctl."""

from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: True if validation passed, False otherwise.
        errors: List of specific error messages if validation failed.
        error_code: Optional exit code when validation fails.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    error_code: int | None = None
