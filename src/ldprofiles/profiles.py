"""
Profile Definitions & Registry

A profile is a named, versioned schema for one Schema.org content type:
three field tiers (required / recommended / optional) plus two scoring
subsets (rich-results fields and LLM-optimized fields). Profiles are
loaded from YAML once at startup and are read-only afterwards.

The registry is an explicit lookup table handed to (or created by) the
validator. Registration runs a consistency check: every name in the two
scoring subsets must be declared in one of the three tiers.
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import yaml

from ldprofiles.constants import IMPORTANCE_ORDER
from ldprofiles.constraints import Constraint, PrimitiveConstraint, parse_constraint
from ldprofiles.exceptions import (
    ProfileConsistencyError,
    ProfileDefinitionError,
    UnknownProfileError,
)

logger = logging.getLogger(__name__)

BUILTIN_PROFILE_DIR = Path(__file__).parent / "definitions"
DATE_FORMATS = ("date", "date-time")


@dataclass(frozen=True)
class FieldDefinition:
    """A single declared field of a profile."""

    name: str
    constraint: Constraint
    description: Optional[str] = None
    examples: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProfileDefinition:
    """Declarative schema for one structured-data type."""

    type: str
    category: str = ""
    schema_type: str = ""
    description: str = ""
    profile_url: Optional[str] = None
    required: Mapping[str, FieldDefinition] = field(default_factory=dict)
    recommended: Mapping[str, FieldDefinition] = field(default_factory=dict)
    optional: Mapping[str, FieldDefinition] = field(default_factory=dict)
    rich_results_fields: Tuple[str, ...] = ()
    llm_optimized_fields: Tuple[str, ...] = ()

    def tier(self, importance: str) -> Mapping[str, FieldDefinition]:
        """Return the field map for an importance tier name."""
        if importance not in IMPORTANCE_ORDER:
            raise ValueError(f"Unknown importance tier: {importance}")
        return getattr(self, importance)

    def find_field(self, name: str) -> Optional[Tuple[str, FieldDefinition]]:
        """Find a field by name, searching required, recommended, then optional.

        Returns:
            (importance, definition) for the first tier declaring the field,
            or None
        """
        for importance in IMPORTANCE_ORDER:
            definition = self.tier(importance).get(name)
            if definition is not None:
                return importance, definition
        return None

    @property
    def declared_fields(self) -> List[str]:
        """All declared field names in tier order, without duplicates."""
        names: List[str] = []
        for importance in IMPORTANCE_ORDER:
            for name in self.tier(importance):
                if name not in names:
                    names.append(name)
        return names

    @property
    def date_formats(self) -> Dict[str, str]:
        """Declared date fields mapped to their format, "date" or "date-time"."""
        formats = {}
        for name in self.declared_fields:
            _, definition = self.find_field(name)
            constraint = definition.constraint
            if isinstance(constraint, PrimitiveConstraint) and constraint.format in DATE_FORMATS:
                formats[name] = constraint.format
        return formats

    def consistency_problems(self) -> List[str]:
        """List scoring-subset names that no tier declares."""
        declared = set(self.declared_fields)
        problems = []
        for name in self.rich_results_fields:
            if name not in declared:
                problems.append(f"rich-results field '{name}' is not declared in any tier")
        for name in self.llm_optimized_fields:
            if name not in declared:
                problems.append(f"LLM-optimized field '{name}' is not declared in any tier")
        return problems


def _parse_tier(
    raw_fields: Optional[Dict[str, Any]],
    profile_type: str,
) -> Mapping[str, FieldDefinition]:
    """Parse one tier of raw field definitions, preserving declared order."""
    if raw_fields is None:
        return MappingProxyType({})
    if not isinstance(raw_fields, dict):
        raise ProfileDefinitionError(
            f"Field tiers of profile '{profile_type}' must be mappings",
            profile_type=profile_type,
        )

    parsed: Dict[str, FieldDefinition] = {}
    for name, raw in raw_fields.items():
        try:
            constraint = parse_constraint(raw, name)
        except ProfileDefinitionError as e:
            raise ProfileDefinitionError(
                f"Profile '{profile_type}': {e}",
                profile_type=profile_type,
                field_name=name,
            ) from e

        examples = raw.get('examples') or ()
        parsed[name] = FieldDefinition(
            name=name,
            constraint=constraint,
            description=raw.get('description'),
            examples=tuple(str(example) for example in examples),
        )
    return MappingProxyType(parsed)


def profile_from_dict(data: Dict[str, Any]) -> ProfileDefinition:
    """
    Build a ProfileDefinition from its raw dict form.

    Args:
        data: Profile mapping with keys type, category, required,
            recommended, optional, richResultsFields, llmOptimizedFields

    Returns:
        Parsed, immutable profile definition

    Raises:
        ProfileDefinitionError: If the mapping is malformed
    """
    if not isinstance(data, dict):
        raise ProfileDefinitionError("Profile definition must be a mapping")

    profile_type = data.get('type')
    if not profile_type or not isinstance(profile_type, str):
        raise ProfileDefinitionError("Profile definition is missing a 'type' name")

    return ProfileDefinition(
        type=profile_type,
        category=data.get('category', ''),
        schema_type=data.get('schemaType', ''),
        description=data.get('description', ''),
        profile_url=data.get('profileUrl'),
        required=_parse_tier(data.get('required'), profile_type),
        recommended=_parse_tier(data.get('recommended'), profile_type),
        optional=_parse_tier(data.get('optional'), profile_type),
        rich_results_fields=tuple(data.get('richResultsFields') or ()),
        llm_optimized_fields=tuple(data.get('llmOptimizedFields') or ()),
    )


def load_profile_file(path: Union[str, Path]) -> ProfileDefinition:
    """Load a single profile from a YAML file."""
    file_path = Path(path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProfileDefinitionError(f"Invalid YAML in {file_path}: {e}") from e

    return profile_from_dict(data)


def load_profile_dir(directory: Union[str, Path]) -> List[ProfileDefinition]:
    """Load every *.yaml profile in a directory, sorted by file name."""
    dir_path = Path(directory)
    if not dir_path.is_dir():
        raise ProfileDefinitionError(f"Profile directory not found: {dir_path}")

    return [load_profile_file(path) for path in sorted(dir_path.glob('*.yaml'))]


class ProfileRegistry:
    """Lookup table of profile definitions keyed by type name.

    Registration is guarded by a lock; lookups are plain dict reads of
    immutable profiles and need no coordination.
    """

    def __init__(
        self,
        profiles: Optional[Iterable[ProfileDefinition]] = None,
        strict: bool = True,
    ):
        """
        Initialize the registry.

        Args:
            profiles: Profiles to register immediately
            strict: Raise ProfileConsistencyError for inconsistent profiles
                instead of logging a warning
        """
        self.strict = strict
        self._profiles: Dict[str, ProfileDefinition] = {}
        self._lock = threading.Lock()

        for profile in profiles or ():
            self.register(profile)

    def register(self, profile: ProfileDefinition) -> None:
        """Register a profile, replacing any earlier one of the same type."""
        problems = profile.consistency_problems()
        if problems:
            message = f"Profile '{profile.type}' is inconsistent: " + "; ".join(problems)
            if self.strict:
                raise ProfileConsistencyError(message, profile.type, problems)
            logger.warning(message)

        with self._lock:
            if profile.type in self._profiles:
                logger.info(f"Replacing registered profile: {profile.type}")
            self._profiles[profile.type] = profile

        logger.debug(
            f"Registered profile {profile.type} "
            f"({len(profile.required)} required, {len(profile.recommended)} recommended, "
            f"{len(profile.optional)} optional)"
        )

    def load_directory(self, directory: Union[str, Path]) -> List[str]:
        """Load and register every profile in a directory.

        Returns:
            Type names of the registered profiles
        """
        loaded = load_profile_dir(directory)
        for profile in loaded:
            self.register(profile)
        logger.info(f"Loaded {len(loaded)} profiles from {directory}")
        return [profile.type for profile in loaded]

    def get(self, profile_type: str) -> ProfileDefinition:
        """Return the profile for a type.

        Raises:
            UnknownProfileError: If no such profile is registered
        """
        profile = self._profiles.get(profile_type)
        if profile is None:
            raise UnknownProfileError(profile_type)
        return profile

    def find(self, profile_type: str) -> Optional[ProfileDefinition]:
        """Return the profile for a type, or None."""
        return self._profiles.get(profile_type)

    def list_types(self) -> List[str]:
        """Registered type names in registration order."""
        return list(self._profiles)

    def by_category(self, category: str) -> List[str]:
        """Registered type names belonging to a category."""
        return [
            profile_type for profile_type, profile in self._profiles.items()
            if profile.category == category
        ]

    def __contains__(self, profile_type: object) -> bool:
        return profile_type in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    @classmethod
    def builtin(
        cls,
        strict: bool = True,
        extra_dirs: Optional[Iterable[Union[str, Path]]] = None,
    ) -> "ProfileRegistry":
        """Create a registry holding the shipped profiles plus any extra directories."""
        registry = cls(strict=strict)
        registry.load_directory(BUILTIN_PROFILE_DIR)
        for directory in extra_dirs or ():
            registry.load_directory(directory)
        return registry
