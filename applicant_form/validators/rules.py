"""
Building blocks shared by all field validators.

A rule looks at one value and returns the violation message, or None when the
value passes. Field validators evaluate every rule of a field and collect the
results instead of stopping at the first failure.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import re

REQUIRED_MESSAGE = "Required"
EXPECTED_STRING_MESSAGE = "Expected string"
EXPECTED_OBJECT_MESSAGE = "Expected object"
EXPECTED_ARRAY_MESSAGE = "Expected array"


@dataclass(frozen=True)
class Violation:
    """One failed rule, attached to the field path that produced it."""

    path: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    violations: Tuple[Violation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def messages_for(self, path: str) -> List[str]:
        return [v.message for v in self.violations if v.path == path]

    def as_dict(self) -> Dict[str, List[str]]:
        """Groups messages by path, keeping the order in which paths first failed."""
        grouped: Dict[str, List[str]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.path, []).append(violation.message)
        return grouped

    @classmethod
    def from_violations(cls, violations: Iterable[Violation]) -> "ValidationResult":
        return cls(tuple(violations))


class Rule:
    """Base class for a single predicate + message pair."""

    def check(self, value: Any) -> Optional[str]:
        raise NotImplementedError


class LengthRule(Rule):
    def __init__(self, min_length: int, max_length: int, min_message: str, max_message: str):
        self.min_length = min_length
        self.max_length = max_length
        self.min_message = min_message
        self.max_message = max_message

    def check(self, value: str) -> Optional[str]:
        if len(value) < self.min_length:
            return self.min_message
        if len(value) > self.max_length:
            return self.max_message
        return None


class PatternRule(Rule):
    def __init__(self, pattern: Union[str, "re.Pattern[str]"], message: str):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.message = message

    def check(self, value: str) -> Optional[str]:
        if self.pattern.fullmatch(value) is None:
            return self.message
        return None


class PredicateRule(Rule):
    def __init__(self, predicate: Callable[[Any], bool], message: str):
        self.predicate = predicate
        self.message = message

    def check(self, value: Any) -> Optional[str]:
        return None if self.predicate(value) else self.message


def labelled_length_rule(label: str, min_length: int, max_length: int, long_form: bool = False) -> LengthRule:
    """
    Length rule with the form's standard wording, e.g.
    "City must be at least 2 characters".
    """
    suffix = " long" if long_form else ""
    return LengthRule(
        min_length,
        max_length,
        f"{label} must be at least {min_length} characters{suffix}",
        f"{label} must be at most {max_length} characters{suffix}",
    )


def check_string_field(path: str, value: Any, rules: Sequence[Rule]) -> List[Violation]:
    """
    Runs every rule against a string value.
    A missing or non-string value yields a single type violation and skips the rules.
    """
    if value is None:
        return [Violation(path, REQUIRED_MESSAGE)]
    if not isinstance(value, str):
        return [Violation(path, EXPECTED_STRING_MESSAGE)]

    violations = []
    for rule in rules:
        message = rule.check(value)
        if message is not None:
            violations.append(Violation(path, message))
    return violations
