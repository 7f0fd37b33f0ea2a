"""
This module handles validation of the résumé files attached to an application:
emptiness, size limit, declared media type and the number of files.
"""

from typing import Any, List
import logging

from ..core.files import convert_metrics_to_bytes, get_formatted_file_size, get_mime_types
from ..models.models import UploadedFile
from .rules import EXPECTED_ARRAY_MESSAGE, EXPECTED_OBJECT_MESSAGE, Violation

# Configure logging
logger = logging.getLogger(__name__)

MAX_RESUME_SIZE_IN_BYTES = convert_metrics_to_bytes(10, "MB")
VALID_RESUME_FILE_EXTENSIONS = [".pdf"]
MAX_FILES = 2

EMPTY_FILE_MESSAGE = "Cannot upload empty file"
EXPECTED_NUMBER_MESSAGE = "Expected number"


class FileValidator:
    """
    Validates the metadata of uploaded résumé files.
    Each file reports every rule it breaks; nothing is raised.
    """

    def __init__(
        self,
        max_size: int = MAX_RESUME_SIZE_IN_BYTES,
        allowed_extensions: List[str] = VALID_RESUME_FILE_EXTENSIONS,
        max_files: int = MAX_FILES,
    ):
        self.max_size = max_size
        self.allowed_extensions = list(allowed_extensions)
        self.allowed_mime_types = get_mime_types(self.allowed_extensions)
        self.max_files = max_files

    @property
    def size_limit_message(self) -> str:
        return f"File size cannot be greater than {get_formatted_file_size(self.max_size)}"

    @property
    def type_message(self) -> str:
        return f"Only {', '.join(self.allowed_extensions)} type are allowed"

    def validate_files(self, files: Any) -> List[Violation]:
        """
        Validates every uploaded file, then the number of files.

        Args:
            files: The résumé files from the form

        Returns:
            Violations at ``resume[i]`` for per-file problems and at ``resume``
            for the file count
        """
        if files is None or not isinstance(files, (list, tuple)):
            return [Violation("resume", EXPECTED_ARRAY_MESSAGE)]

        violations = []
        for index, uploaded in enumerate(files):
            violations.extend(self.validate_file(uploaded, f"resume[{index}]"))

        if len(files) > self.max_files:
            violations.append(
                Violation("resume", f"You can upload at most {self.max_files} files")
            )
        return violations

    def validate_file(self, uploaded: Any, path: str) -> List[Violation]:
        if not isinstance(uploaded, UploadedFile):
            return [Violation(path, EXPECTED_OBJECT_MESSAGE)]

        violations = []
        size = uploaded.size
        if isinstance(size, bool) or not isinstance(size, (int, float)):
            violations.append(Violation(path, EXPECTED_NUMBER_MESSAGE))
        else:
            if size <= 0:
                violations.append(Violation(path, EMPTY_FILE_MESSAGE))
            if size >= self.max_size:
                violations.append(Violation(path, self.size_limit_message))

        if uploaded.content_type not in self.allowed_mime_types:
            violations.append(Violation(path, self.type_message))

        if violations:
            logger.info(f"{path} failed {len(violations)} file check(s)")
        return violations
