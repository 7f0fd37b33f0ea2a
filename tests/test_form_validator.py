from datetime import date

import pytest

from applicant_form import ApplicantRecord, FormValidator
from applicant_form.core.config import Settings
from applicant_form.core.exceptions import EmailCheckError

from conftest import FailingEmailChecker, FakeEmailChecker, run


def build_validator(settings, verdict=True):
    return FormValidator(email_checker=FakeEmailChecker(verdict), settings=settings)


def test_valid_form_has_no_violations(settings, valid_form_data):
    """Test that a form passing every rule is reported as valid"""
    result = run(build_validator(settings).validate(valid_form_data))

    assert result.is_valid
    assert result.violations == ()


def test_accepts_record_instances(settings, valid_form_data):
    """Test that an ApplicantRecord is validated the same way as a mapping"""
    record = ApplicantRecord.model_validate(valid_form_data)

    assert run(build_validator(settings).validate(record)).is_valid


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("firstName", "J", "First name must be at least 2 characters long"),
        ("firstName", "J" * 71, "First name must be at most 70 characters long"),
        ("lastName", "D" * 71, "Last name must be at most 70 characters long"),
        ("country", "U", "Country must be at least 2 characters"),
        ("state", "S" * 71, "State must be at most 70 characters"),
        ("city", "", "City must be at least 2 characters"),
        ("address", "A" * 101, "Address must be at most 100 characters"),
    ],
)
def test_length_violation_is_reported_at_field_path(settings, valid_form_data, field, value, message):
    """Test that out-of-range lengths produce a violation for that exact field"""
    valid_form_data[field] = value

    result = run(build_validator(settings).validate(valid_form_data))

    assert result.as_dict() == {field: [message]}


def test_all_violations_are_collected_in_form_order(settings, valid_form_data):
    """Test that validation does not stop at the first failing field"""
    valid_form_data.update(
        {
            "firstName": "J",
            "email": "jane+jobs@mail.example.com",
            "zip": "12",
            "jobs": [],
            "portfolio": "not a url",
        }
    )

    result = run(build_validator(settings).validate(valid_form_data))

    assert [v.path for v in result.violations] == [
        "firstName",
        "email",
        "email",
        "zip",
        "jobs",
        "portfolio",
    ]
    assert result.messages_for("jobs") == ["At least one job should be added"]


def test_email_plausibility_failure_is_the_only_violation(settings, valid_form_data):
    """Test that an implausible but well-formed email yields exactly one violation"""
    result = run(build_validator(settings, verdict=False).validate(valid_form_data))

    assert result.as_dict() == {"email": ["Email is not valid"]}


def test_plus_sign_and_subdomain_are_reported_regardless_of_plausibility(settings, valid_form_data):
    """Test that format checks run whatever the plausibility service says"""
    valid_form_data["email"] = "user+tag@mail.example.com"

    for verdict in (True, False):
        messages = run(build_validator(settings, verdict).validate(valid_form_data)).messages_for("email")
        assert "Email should not contain '+' sign" in messages
        assert "Email should not contain subdomains" in messages


def test_job_date_order(settings, valid_form_data):
    """Test that a job ending before it starts is rejected, and the swap is accepted"""
    job = valid_form_data["jobs"][0]
    job["from"], job["to"] = date(2023, 6, 1), date(2023, 1, 1)

    result = run(build_validator(settings).validate(valid_form_data))
    assert result.as_dict() == {"jobs[0]": ["From date should be less than To date"]}

    job["from"], job["to"] = job["to"], job["from"]
    assert run(build_validator(settings).validate(valid_form_data)).is_valid


def test_second_job_violation_uses_nested_path(settings, valid_form_data):
    """Test that job violations are scoped to the entry and field"""
    second = dict(valid_form_data["jobs"][0], company="A")
    valid_form_data["jobs"].append(second)

    result = run(build_validator(settings).validate(valid_form_data))

    assert result.as_dict() == {"jobs[1].company": ["Company must be at least 2 characters"]}


@pytest.mark.parametrize(
    "uploaded,message",
    [
        ({"size": 0, "type": "application/pdf"}, "Cannot upload empty file"),
        ({"size": 11_000_000, "type": "application/pdf"}, "File size cannot be greater than 10 MB"),
        ({"size": 100, "type": "image/png"}, "Only .pdf type are allowed"),
    ],
)
def test_resume_file_violations(settings, valid_form_data, uploaded, message):
    """Test the empty, oversized and wrong-type résumé cases"""
    valid_form_data["resume"] = [uploaded]

    result = run(build_validator(settings).validate(valid_form_data))

    assert result.as_dict() == {"resume[0]": [message]}


def test_too_many_resume_files(settings, valid_form_data):
    """Test that more than two résumé files are rejected as a whole"""
    valid_form_data["resume"] = valid_form_data["resume"] * 3

    result = run(build_validator(settings).validate(valid_form_data))

    assert result.as_dict() == {"resume": ["You can upload at most 2 files"]}


def test_resume_may_be_empty(settings, valid_form_data):
    """Test that a form without résumé files is valid"""
    valid_form_data["resume"] = []

    assert run(build_validator(settings).validate(valid_form_data)).is_valid


def test_malformed_input_does_not_raise(settings):
    """Test that wrong types and missing fields become violations"""
    data = {
        "firstName": 42,
        "email": ["jane@example.com"],
        "jobs": "none",
        "resume": [None],
        "timezone": 3,
    }

    result = run(build_validator(settings).validate(data))
    grouped = result.as_dict()

    assert grouped["firstName"] == ["Expected string"]
    assert grouped["lastName"] == ["Required"]
    assert grouped["email"] == ["Expected string"]
    assert grouped["timezone"] == ["Expected string"]
    assert grouped["jobs"] == ["Expected array"]
    assert grouped["resume[0]"] == ["Expected object"]


def test_non_string_email_skips_plausibility_lookup(settings, valid_form_data):
    """Test that the plausibility service is only asked about text values"""
    checker = FakeEmailChecker()
    valid_form_data["email"] = None

    run(FormValidator(email_checker=checker, settings=settings).validate(valid_form_data))

    assert checker.calls == []


def test_validate_is_idempotent(settings, valid_form_data):
    """Test that validating the same form twice gives the same result"""
    valid_form_data.update({"zip": "12a4", "github": "https://gitlab.com/jane"})
    validator = build_validator(settings, verdict=False)

    assert run(validator.validate(valid_form_data)) == run(validator.validate(valid_form_data))


def test_checker_failure_propagates_by_default(settings, valid_form_data):
    """Test that a failing email service surfaces as EmailCheckError"""
    validator = FormValidator(email_checker=FailingEmailChecker(), settings=settings)

    with pytest.raises(EmailCheckError):
        run(validator.validate(valid_form_data))


def test_checker_failure_can_be_reported_as_violation(valid_form_data):
    """Test the "violation" failure policy"""
    settings = Settings(EMAIL_CHECK_FAILURE_POLICY="violation")
    validator = FormValidator(email_checker=FailingEmailChecker(), settings=settings)

    result = run(validator.validate(valid_form_data))

    assert result.as_dict() == {"email": ["Email is not valid"]}


def test_sync_fields_skip_plausibility_lookup(settings, valid_form_data):
    """Test that the synchronous core never calls the email service"""
    checker = FakeEmailChecker(verdict=False)
    valid_form_data["email"] = "user+tag@example.com"

    result = FormValidator(email_checker=checker, settings=settings).validate_sync_fields(valid_form_data)

    assert result.as_dict() == {"email": ["Email should not contain '+' sign"]}
    assert checker.calls == []


def test_default_phone_region_allows_national_numbers(valid_form_data):
    """Test that national numbers parse against the configured region"""
    valid_form_data["phone"] = "020 8366 1177"

    without_region = build_validator(Settings(DEFAULT_PHONE_REGION=None))
    with_region = build_validator(Settings(DEFAULT_PHONE_REGION="GB"))

    assert run(without_region.validate(valid_form_data)).as_dict() == {"phone": ["Invalid phone number"]}
    assert run(with_region.validate(valid_form_data)).is_valid


def test_display_name_email_is_rejected(settings, valid_form_data):
    """Test that "Name <address>" is not forwarded as a valid email"""
    valid_form_data["email"] = "Jane Doe <jane@example.com>"

    result = run(build_validator(settings).validate(valid_form_data))

    assert "Invalid email" in result.messages_for("email")
    assert not result.is_valid


@pytest.mark.parametrize(
    "field,max_length",
    [
        ("firstName", 70),
        ("lastName", 70),
        ("country", 70),
        ("state", 70),
        ("city", 70),
        ("address", 100),
    ],
)
def test_length_limits_are_inclusive(settings, valid_form_data, field, max_length):
    """Test that exactly the minimum and exactly the maximum length are accepted"""
    validator = build_validator(settings)

    for value in ("Jo", "x" * max_length):
        valid_form_data[field] = value
        assert run(validator.validate(valid_form_data)).is_valid, (field, len(value))
