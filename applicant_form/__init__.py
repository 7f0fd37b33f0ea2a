"""Validation rules for the job application form."""

from .models.models import ApplicantRecord, JobEntry, UploadedFile
from .validators import FormValidator, ValidationResult, Violation

__version__ = "1.0.0"

__all__ = [
    "ApplicantRecord",
    "FormValidator",
    "JobEntry",
    "UploadedFile",
    "ValidationResult",
    "Violation",
]
