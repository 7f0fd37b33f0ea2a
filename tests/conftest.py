import asyncio
from datetime import date

import pytest

from applicant_form.core.config import Settings
from applicant_form.core.exceptions import EmailCheckError


class FakeEmailChecker:
    """Plausibility checker answering from a fixed verdict, recording every call."""

    def __init__(self, verdict=True):
        self.verdict = verdict
        self.calls = []

    async def check_email(self, address):
        self.calls.append(address)
        return self.verdict


class FailingEmailChecker:
    """Plausibility checker whose service is always down."""

    async def check_email(self, address):
        raise EmailCheckError("Email check service timed out")


def run(coroutine):
    return asyncio.run(coroutine)


@pytest.fixture
def settings():
    """Settings with no email service configured and the default failure policy"""
    return Settings(EMAIL_CHECK_URL=None, DEFAULT_PHONE_REGION=None, EMAIL_CHECK_FAILURE_POLICY="raise")


@pytest.fixture
def valid_form_data():
    """A complete application form that passes every rule"""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "phone": "+442083661177",
        "country": "United Kingdom",
        "state": "Greater London",
        "city": "London",
        "address": "10 Downing Street",
        "zip": "12345",
        "timezone": "Europe/London",
        "github": "https://github.com/janedoe",
        "portfolio": "https://janedoe.dev",
        "jobs": [
            {
                "title": "Backend Engineer",
                "company": "Acme Ltd",
                "from": date(2020, 1, 1),
                "to": date(2022, 6, 30),
                "description": "Built and maintained payment APIs.",
            }
        ],
        "resume": [{"size": 2048, "type": "application/pdf", "name": "cv.pdf"}],
    }
