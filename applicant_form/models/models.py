"""
Value records submitted by the job application form.

Fields are loosely typed so a record built from raw form input never raises.
Type mismatches are reported by the validators as violations.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pathlib import Path
from typing import Any, Mapping, Optional
import mimetypes


class UploadedFile(BaseModel):
    """A file chosen in the résumé picker. Only its metadata is validated."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    size: Any = None
    content_type: Any = Field(default=None, alias="type")
    filename: Any = Field(default=None, alias="name")

    @property
    def extension(self) -> str:
        if not isinstance(self.filename, str):
            return ""
        return Path(self.filename).suffix.lower()

    @classmethod
    def from_bytes(
        cls, content: bytes, filename: str, content_type: Optional[str] = None
    ) -> "UploadedFile":
        """
        Builds the record for in-memory content, guessing the media type from
        the filename when the caller does not declare one.
        """
        if content_type is None:
            content_type, _ = mimetypes.guess_type(filename)
        return cls(size=len(content), content_type=content_type or "", filename=filename)


class JobEntry(BaseModel):
    """One job in the applicant's work history."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Any = None
    company: Any = None
    date_from: Any = Field(default=None, alias="from")
    date_to: Any = Field(default=None, alias="to")
    description: Any = None


def _coerce_items(value: Any, model: type) -> Any:
    """Turns mappings inside a list into records, leaving anything else untouched."""
    if not isinstance(value, (list, tuple)):
        return value
    return [model.model_validate(item) if isinstance(item, Mapping) else item for item in value]


class ApplicantRecord(BaseModel):
    """
    The whole application form.
    Attribute names are snake_case; the form's camelCase names are accepted as aliases.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: Any = Field(default=None, alias="firstName")
    last_name: Any = Field(default=None, alias="lastName")
    email: Any = None
    phone: Any = None
    country: Any = None
    state: Any = None
    city: Any = None
    address: Any = None
    zip: Any = None
    timezone: Any = None
    github: Any = None
    portfolio: Any = None
    jobs: Any = Field(default_factory=list)
    resume: Any = Field(default_factory=list)

    @field_validator("jobs", mode="before")
    @classmethod
    def build_jobs(cls, value):
        return _coerce_items(value, JobEntry)

    @field_validator("resume", mode="before")
    @classmethod
    def build_files(cls, value):
        return _coerce_items(value, UploadedFile)
