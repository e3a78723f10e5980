"""Validation result returned by actions.

A result maps field names to the ordered messages explaining why the
field was rejected. An empty mapping means the input is valid.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ValidationResult:
    """Accumulated field failures of one validation run.

    Attributes:
        failures (Dict[str, List[str]]): Messages per field, in the order added.

    Example:
        >>> result = ValidationResult.success()
        >>> result.add_field_failure("name", "Name is required.")
        >>> print(result.ok)
        False
    """

    failures: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @property
    def ok(self) -> bool:
        return not self.failures

    def add_field_failure(self, field_name: str, message: str) -> None:
        self.failures.setdefault(field_name, []).append(message)
