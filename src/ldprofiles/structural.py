"""
Structural Validator

Compiles a profile's three field tiers into one permissive JSON Schema and
checks documents against it with jsonschema (Draft 7, with format
checking). Every violation is collected; nothing short-circuits.
"""

import logging
import threading
from typing import Any, Dict, List, Sequence, Tuple, Union

from jsonschema import Draft7Validator

from ldprofiles.constants import IMPORTANCE_ORDER, IMPORTANCE_REQUIRED
from ldprofiles.models import RawViolation
from ldprofiles.profiles import ProfileDefinition

logger = logging.getLogger(__name__)


def build_schema(profile: ProfileDefinition) -> Dict[str, Any]:
    """
    Merge a profile's field tiers into a single object schema.

    Only required-tier keys are mandatory and undeclared properties are
    allowed. When a name appears in several tiers, the earliest tier's
    definition is used.
    """
    properties: Dict[str, Any] = {}
    for importance in IMPORTANCE_ORDER:
        for name, definition in profile.tier(importance).items():
            properties.setdefault(name, definition.constraint.to_schema())

    return {
        'type': 'object',
        'properties': properties,
        'required': list(profile.tier(IMPORTANCE_REQUIRED)),
        'additionalProperties': True,
    }


def format_path(parts: Sequence[Union[str, int]]) -> str:
    """Render a jsonschema path as dot/bracket notation, e.g. 'mainEntity[0].name'."""
    rendered = ""
    for part in parts:
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered += str(part)
    return rendered


def _missing_property(error) -> str:
    """Name the property a 'required' error is about.

    jsonschema emits one error per missing property, with the property's
    repr leading the message.
    """
    instance = error.instance if isinstance(error.instance, dict) else {}
    for name in error.validator_value:
        if name not in instance and error.message.startswith(repr(name)):
            return name
    return ""


def to_raw_violation(error) -> RawViolation:
    """Convert a jsonschema error into a RawViolation."""
    keyword = str(error.validator)
    parts = list(error.absolute_path)

    if keyword == 'required':
        missing = _missing_property(error)
        if missing:
            parts.append(missing)
        return RawViolation(
            path=format_path(parts),
            keyword=keyword,
            message=error.message,
            value=None,
            constraint=list(error.validator_value),
        )

    return RawViolation(
        path=format_path(parts),
        keyword=keyword,
        message=error.message,
        value=error.instance,
        constraint=error.validator_value,
    )


class StructuralValidator:
    """Check documents against compiled profile schemas.

    Compiled validators are cached per profile type. The cache is filled
    under a lock and compiling the same profile twice only replaces an
    equivalent entry, so concurrent callers never see a partial state.
    """

    def __init__(self):
        """Initialize the structural validator."""
        self._cache: Dict[str, Tuple[ProfileDefinition, Draft7Validator]] = {}
        self._lock = threading.Lock()

    def compile(self, profile: ProfileDefinition) -> Draft7Validator:
        """Return the compiled validator for a profile, compiling on first use."""
        cached = self._cache.get(profile.type)
        if cached is not None and cached[0] is profile:
            return cached[1]

        schema = build_schema(profile)
        Draft7Validator.check_schema(schema)
        compiled = Draft7Validator(schema, format_checker=Draft7Validator.FORMAT_CHECKER)

        with self._lock:
            cached = self._cache.get(profile.type)
            if cached is not None and cached[0] is profile:
                return cached[1]
            self._cache[profile.type] = (profile, compiled)

        logger.debug(f"Compiled structural schema for {profile.type} ({len(schema['properties'])} properties)")
        return compiled

    def validate_structure(self, document: Any, profile: ProfileDefinition) -> List[RawViolation]:
        """
        Check a document against a profile's merged schema.

        Args:
            document: Candidate document (normally a dict)
            profile: Profile definition

        Returns:
            Every violation found, in schema evaluation order
        """
        compiled = self.compile(profile)
        return [to_raw_violation(error) for error in compiled.iter_errors(document)]

    def clear_cache(self) -> None:
        """Drop all compiled schemas."""
        with self._lock:
            self._cache.clear()

    @property
    def cached_types(self) -> List[str]:
        return list(self._cache)
