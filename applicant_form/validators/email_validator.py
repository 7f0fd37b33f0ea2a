"""
Email address rules: syntax, plus-addressing, subdomains and the external
plausibility lookup.
"""

from email_validator import EmailNotValidError, validate_email
from typing import Any, List, Optional
import logging

from ..core.exceptions import EmailCheckError
from ..services.email_checker import EmailChecker
from .rules import EXPECTED_STRING_MESSAGE, REQUIRED_MESSAGE, Violation

logger = logging.getLogger(__name__)

FIELD = "email"
INVALID_EMAIL_MESSAGE = "Invalid email"
NOT_PLAUSIBLE_MESSAGE = "Email is not valid"
PLUS_SIGN_MESSAGE = "Email should not contain '+' sign"
SUBDOMAIN_MESSAGE = "Email should not contain subdomains"


def is_valid_email_syntax(value: str) -> bool:
    """Bare address syntax only; display-name forms like "Jane <jane@example.com>" fail."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def has_plus_sign(value: str) -> bool:
    local_part = value.rsplit("@", 1)[0]
    return "+" in local_part


def has_subdomain(value: str) -> bool:
    """True when the domain has more than two labels, e.g. mail.example.com."""
    if "@" not in value:
        return False
    domain = value.rsplit("@", 1)[1]
    return len(domain.split(".")) > 2


class EmailValidator:
    """
    The synchronous checks live in ``validate_format``; ``check_plausibility``
    is the only step that suspends.
    """

    def __init__(self, checker: EmailChecker, failure_policy: str = "raise"):
        self.checker = checker
        self.failure_policy = failure_policy

    @staticmethod
    def type_violation(value: Any) -> Optional[Violation]:
        if value is None:
            return Violation(FIELD, REQUIRED_MESSAGE)
        if not isinstance(value, str):
            return Violation(FIELD, EXPECTED_STRING_MESSAGE)
        return None

    @staticmethod
    def validate_syntax(value: str) -> List[Violation]:
        if is_valid_email_syntax(value):
            return []
        return [Violation(FIELD, INVALID_EMAIL_MESSAGE)]

    @staticmethod
    def validate_format(value: str) -> List[Violation]:
        """Plus-addressing and subdomain checks, independent of each other."""
        if not value:
            return []

        violations = []
        if has_plus_sign(value):
            violations.append(Violation(FIELD, PLUS_SIGN_MESSAGE))
        if has_subdomain(value):
            violations.append(Violation(FIELD, SUBDOMAIN_MESSAGE))
        return violations

    async def check_plausibility(self, value: str) -> List[Violation]:
        """
        Asks the plausibility service about the address.

        Raises:
            EmailCheckError: If the service fails and the policy is "raise"
        """
        try:
            plausible = await self.checker.check_email(value)
        except EmailCheckError as e:
            if self.failure_policy != "violation":
                raise
            logger.error(f"Email check failed, reporting address as invalid: {e.message}")
            plausible = False

        if plausible:
            return []
        return [Violation(FIELD, NOT_PLAUSIBLE_MESSAGE)]

    async def validate(self, value: Any) -> List[Violation]:
        """All email violations, in form order: syntax, plausibility, format."""
        type_violation = self.type_violation(value)
        if type_violation is not None:
            return [type_violation]

        violations = self.validate_syntax(value)
        violations.extend(await self.check_plausibility(value))
        violations.extend(self.validate_format(value))
        return violations
