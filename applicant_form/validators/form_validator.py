"""
Validates a complete job application form.

Synchronous field rules run first; the email plausibility lookup is the single
awaited step. Violations from both are merged back in form field order.
"""

from typing import Any, Dict, List, Mapping, Optional, Union
import logging

from ..core.config import Settings, get_settings
from ..models.models import ApplicantRecord
from ..services.email_checker import EmailChecker, HttpEmailChecker
from .email_validator import EmailValidator
from .file_validator import FileValidator
from .input_validator import ApplicantInputValidator
from .job_validator import JobValidator
from .rules import ValidationResult, Violation

logger = logging.getLogger(__name__)

# Form field order, used to order the reported violations
FIELD_ORDER = [
    "firstName",
    "lastName",
    "email",
    "phone",
    "country",
    "state",
    "city",
    "address",
    "zip",
    "timezone",
    "jobs",
    "github",
    "resume",
    "portfolio",
]

RECORD_ATTRIBUTES = {
    "firstName": "first_name",
    "lastName": "last_name",
}


class FormValidator:
    """
    Runs every rule of the application form and collects all violations.

    Args:
        email_checker: Plausibility collaborator; defaults to the HTTP checker
        settings: Validation settings; defaults to ``get_settings()``
    """

    def __init__(
        self,
        email_checker: Optional[EmailChecker] = None,
        settings: Optional[Settings] = None,
        file_validator: Optional[FileValidator] = None,
    ):
        settings = settings or get_settings()
        self.input_validator = ApplicantInputValidator(phone_region=settings.DEFAULT_PHONE_REGION)
        self.email_validator = EmailValidator(
            email_checker or HttpEmailChecker(settings),
            failure_policy=settings.EMAIL_CHECK_FAILURE_POLICY,
        )
        self.job_validator = JobValidator()
        self.file_validator = file_validator or FileValidator()

    @staticmethod
    def to_record(record: Union[ApplicantRecord, Mapping[str, Any]]) -> ApplicantRecord:
        if isinstance(record, ApplicantRecord):
            return record
        return ApplicantRecord.model_validate(dict(record))

    def _collect_sync(self, record: ApplicantRecord) -> Dict[str, List[Violation]]:
        """Every rule except the plausibility lookup, bucketed by top-level field."""
        buckets: Dict[str, List[Violation]] = {field: [] for field in FIELD_ORDER}

        for field in self.input_validator.field_rules:
            value = getattr(record, RECORD_ATTRIBUTES.get(field, field))
            buckets[field].extend(self.input_validator.validate_field(field, value))

        buckets["timezone"].extend(self.input_validator.validate_timezone(record.timezone))
        buckets["jobs"].extend(self.job_validator.validate_jobs(record.jobs))
        buckets["resume"].extend(self.file_validator.validate_files(record.resume))

        type_violation = self.email_validator.type_violation(record.email)
        if type_violation is not None:
            buckets["email"].append(type_violation)
        else:
            buckets["email"].extend(self.email_validator.validate_syntax(record.email))
            buckets["email"].extend(self.email_validator.validate_format(record.email))
        return buckets

    @staticmethod
    def _flatten(buckets: Dict[str, List[Violation]]) -> ValidationResult:
        return ValidationResult.from_violations(
            violation for field in FIELD_ORDER for violation in buckets[field]
        )

    def validate_sync_fields(
        self, record: Union[ApplicantRecord, Mapping[str, Any]]
    ) -> ValidationResult:
        """Validates the form without contacting the plausibility service."""
        return self._flatten(self._collect_sync(self.to_record(record)))

    async def validate(self, record: Union[ApplicantRecord, Mapping[str, Any]]) -> ValidationResult:
        """
        Validates the whole form.

        Returns:
            ValidationResult holding every violation; empty when the form is valid

        Raises:
            EmailCheckError: If the plausibility service fails and the
                configured policy is "raise"
        """
        record = self.to_record(record)
        buckets = self._collect_sync(record)

        if isinstance(record.email, str):
            buckets["email"] = await self.email_validator.validate(record.email)

        result = self._flatten(buckets)
        logger.info(
            f"Application form validated: {len(result.violations)} violation(s) "
            f"across {len(result.as_dict())} field(s)"
        )
        return result
