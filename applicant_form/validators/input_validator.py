"""
Handles validation of the applicant's personal fields: names, location,
phone number and profile links.
"""

from pydantic import AnyUrl, TypeAdapter, ValidationError
from typing import Any, Dict, List, Optional
import phonenumbers

from .rules import (
    EXPECTED_STRING_MESSAGE,
    PatternRule,
    PredicateRule,
    Rule,
    Violation,
    check_string_field,
    labelled_length_rule,
)

INVALID_URL_MESSAGE = "Invalid URL format"
INVALID_PHONE_MESSAGE = "Invalid phone number"

_url_adapter = TypeAdapter(AnyUrl)


def is_valid_url(value: str) -> bool:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def is_valid_phone_number(value: str, region: Optional[str] = None) -> bool:
    """
    Checks the number against libphonenumber metadata.
    Without a region only international numbers ("+44 ...") can be parsed.
    """
    try:
        number = phonenumbers.parse(value, region)
    except phonenumbers.NumberParseException:
        return False
    return phonenumbers.is_valid_number(number)


class ApplicantInputValidator:
    """
    Validates the flat fields of an application form.
    Every field is checked, and every failed rule is reported.
    """

    NAME_MAX_LENGTH = 70
    LOCATION_MAX_LENGTH = 70
    ADDRESS_MAX_LENGTH = 100
    ZIP_PATTERN = r"[0-9]{4,10}"

    def __init__(self, phone_region: Optional[str] = None):
        self.phone_region = phone_region
        self.field_rules: Dict[str, List[Rule]] = {
            "firstName": [labelled_length_rule("First name", 2, self.NAME_MAX_LENGTH, long_form=True)],
            "lastName": [labelled_length_rule("Last name", 2, self.NAME_MAX_LENGTH, long_form=True)],
            "phone": [
                PredicateRule(
                    lambda value: is_valid_phone_number(value, self.phone_region),
                    INVALID_PHONE_MESSAGE,
                )
            ],
            "country": [labelled_length_rule("Country", 2, self.LOCATION_MAX_LENGTH)],
            "state": [labelled_length_rule("State", 2, self.LOCATION_MAX_LENGTH)],
            "city": [labelled_length_rule("City", 2, self.LOCATION_MAX_LENGTH)],
            "address": [labelled_length_rule("Address", 2, self.ADDRESS_MAX_LENGTH)],
            "zip": [PatternRule(self.ZIP_PATTERN, "ZIP code must be between 4 and 10 digits")],
            "github": [
                PredicateRule(is_valid_url, INVALID_URL_MESSAGE),
                PredicateRule(lambda value: "github" in value, "URL should be a GitHub profile"),
            ],
            "portfolio": [PredicateRule(is_valid_url, INVALID_URL_MESSAGE)],
        }

    def validate_field(self, field: str, value: Any) -> List[Violation]:
        return check_string_field(field, value, self.field_rules[field])

    @staticmethod
    def validate_timezone(value: Any) -> List[Violation]:
        """Timezone is optional, but when present it must be text."""
        if value is None or isinstance(value, str):
            return []
        return [Violation("timezone", EXPECTED_STRING_MESSAGE)]
