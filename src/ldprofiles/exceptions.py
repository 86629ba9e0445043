"""Profile-related exceptions.

Per-field problems in a candidate document are never raised; they are
reported as data in a ValidationResult. These exceptions cover broken
profile definitions and registry lookups only.
"""

from typing import Optional


class ProfileError(Exception):
    """Base exception for profile definition and registry problems."""


class ProfileDefinitionError(ProfileError):
    """Raised when a profile definition cannot be parsed.

    Covers malformed YAML, missing top-level keys and field constraints
    that do not map onto a known constraint variant.
    """

    def __init__(
        self,
        message: str,
        profile_type: Optional[str] = None,
        field_name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.profile_type = profile_type
        self.field_name = field_name


class ProfileConsistencyError(ProfileError):
    """Raised when a profile's scoring subsets name undeclared fields."""

    def __init__(self, message: str, profile_type: str, problems: list[str]) -> None:
        super().__init__(message)
        self.profile_type = profile_type
        self.problems = problems


class UnknownProfileError(ProfileError, KeyError):
    """Raised by the registry when no profile is registered for a type."""

    def __init__(self, profile_type: str) -> None:
        super().__init__(f"Unknown profile type: {profile_type}")
        self.profile_type = profile_type

    def __str__(self) -> str:
        return self.args[0]
