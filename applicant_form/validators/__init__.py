from .rules import ValidationResult, Violation
from .form_validator import FormValidator

__all__ = ["FormValidator", "ValidationResult", "Violation"]
