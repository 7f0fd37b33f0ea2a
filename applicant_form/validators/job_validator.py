"""
Validation of the job history entries attached to an application.
"""

from datetime import date, datetime, time, timezone
from typing import Any, List, Optional

from ..models.models import JobEntry
from .rules import (
    EXPECTED_ARRAY_MESSAGE,
    EXPECTED_OBJECT_MESSAGE,
    REQUIRED_MESSAGE,
    Violation,
    check_string_field,
    labelled_length_rule,
)

AT_LEAST_ONE_JOB_MESSAGE = "At least one job should be added"
DATE_ORDER_MESSAGE = "From date should be less than To date"
EXPECTED_DATE_MESSAGE = "Expected date"


def parse_date(value: Any) -> Optional[datetime]:
    """
    Accepts dates, datetimes and ISO-8601 strings.
    Returns a naive UTC datetime so any two results can be compared, or None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class JobValidator:
    """Validates every entry of the job history, collecting all violations."""

    TITLE_RULES = [labelled_length_rule("Title", 2, 70)]
    COMPANY_RULES = [labelled_length_rule("Company", 2, 90)]
    DESCRIPTION_RULES = [labelled_length_rule("Description", 2, 500)]

    def validate_jobs(self, jobs: Any) -> List[Violation]:
        if jobs is None or not isinstance(jobs, (list, tuple)):
            return [Violation("jobs", EXPECTED_ARRAY_MESSAGE)]
        if not jobs:
            return [Violation("jobs", AT_LEAST_ONE_JOB_MESSAGE)]

        violations = []
        for index, job in enumerate(jobs):
            violations.extend(self.validate_job(job, f"jobs[{index}]"))
        return violations

    def validate_job(self, job: Any, path: str) -> List[Violation]:
        if not isinstance(job, JobEntry):
            return [Violation(path, EXPECTED_OBJECT_MESSAGE)]

        violations = []
        violations.extend(check_string_field(f"{path}.title", job.title, self.TITLE_RULES))
        violations.extend(check_string_field(f"{path}.company", job.company, self.COMPANY_RULES))

        date_from = self._check_date(f"{path}.from", job.date_from, violations)
        date_to = self._check_date(f"{path}.to", job.date_to, violations)

        violations.extend(
            check_string_field(f"{path}.description", job.description, self.DESCRIPTION_RULES)
        )

        if date_from is not None and date_to is not None and date_from > date_to:
            violations.append(Violation(path, DATE_ORDER_MESSAGE))
        return violations

    @staticmethod
    def _check_date(path: str, value: Any, violations: List[Violation]) -> Optional[datetime]:
        if value is None:
            violations.append(Violation(path, REQUIRED_MESSAGE))
            return None
        parsed = parse_date(value)
        if parsed is None:
            violations.append(Violation(path, EXPECTED_DATE_MESSAGE))
        return parsed
