"""
Error/Warning Enricher

Attaches remediation guidance to structural violations and advisory
warnings: field metadata, a keyword-specific human-readable message and
suggestion lists (example values, type/format literals, field hints).
"""

import re
from dataclasses import replace
from typing import Any, List

from ldprofiles.constants import (
    FALLBACK_FORMAT_EXAMPLE,
    FALLBACK_TYPE_EXAMPLE,
    FIELD_HINTS,
    FORMAT_EXAMPLES,
    TYPE_EXAMPLES,
)
from ldprofiles.field_metadata import FieldMetadataResolver, default_resolver
from ldprofiles.models import (
    AdvisoryWarning,
    FieldMetadata,
    GuidanceSummary,
    RawViolation,
    Suggestion,
    ValidationIssue,
)
from ldprofiles.profiles import ProfileDefinition

ARRAY_INDEX_PATTERN = re.compile(r'\[\d+\]')

# Keyword used for advisory warnings when building messages and suggestions
RECOMMENDED_KEYWORD = 'recommended'


def extract_field_name(path: str) -> str:
    """Strip leading separators and array indices from a violation path."""
    if not path:
        return ''
    return ARRAY_INDEX_PATTERN.sub('', path).lstrip('./')


def _describe_type(expected: Any) -> str:
    if isinstance(expected, (list, tuple)):
        return ' or '.join(str(t) for t in expected)
    return str(expected)


def enhance_message(keyword: str, metadata: FieldMetadata, constraint: Any, raw_message: str) -> str:
    """Build the human-readable message for a keyword, falling back to the raw one."""
    name = metadata.name
    guidance = metadata.guidance.message

    if keyword == 'required':
        return f"Required field '{name}' is missing. {guidance}"
    elif keyword == RECOMMENDED_KEYWORD:
        return f"Recommended field '{name}' is missing. {guidance}"
    elif keyword == 'type':
        return f"Field '{name}' must be of type {_describe_type(constraint)}. {guidance}"
    elif keyword == 'format':
        return f"Field '{name}' has invalid format. Expected {constraint} format. {guidance}"
    elif keyword == 'minLength':
        return f"Field '{name}' is too short. Minimum length is {constraint} characters. {guidance}"
    elif keyword == 'maxLength':
        return f"Field '{name}' is too long. Maximum length is {constraint} characters. {guidance}"
    elif keyword == 'minimum':
        return f"Field '{name}' value is too small. Minimum value is {constraint}. {guidance}"
    elif keyword == 'maximum':
        return f"Field '{name}' value is too large. Maximum value is {constraint}. {guidance}"

    return raw_message


def type_examples(expected: Any) -> List[str]:
    if isinstance(expected, (list, tuple)):
        expected = expected[0] if expected else None
    return list(TYPE_EXAMPLES.get(expected, [FALLBACK_TYPE_EXAMPLE]))


def format_examples(fmt: Any) -> List[str]:
    return list(FORMAT_EXAMPLES.get(fmt, [FALLBACK_FORMAT_EXAMPLE]))


def build_suggestions(field_name: str, metadata: FieldMetadata, keyword: str, constraint: Any) -> List[Suggestion]:
    """
    Collect remediation suggestions for a field.

    Args:
        field_name: Field the problem is about
        metadata: Resolved field metadata
        keyword: Violation keyword, or 'recommended' for warnings
        constraint: Violated schema value (expected type, format, ...)

    Returns:
        Example values first, then type/format help, then field hints
    """
    suggestions = []

    if metadata.examples:
        suggestions.append(Suggestion(
            type='examples',
            title='Example values:',
            items=list(metadata.examples),
        ))

    if keyword == 'type':
        suggestions.append(Suggestion(
            type='type-help',
            title=f"Expected type: {_describe_type(constraint)}",
            items=type_examples(constraint),
        ))
    elif keyword == 'format':
        suggestions.append(Suggestion(
            type='format-help',
            title=f"Expected format: {constraint}",
            items=format_examples(constraint),
        ))

    hint = FIELD_HINTS.get(field_name)
    if hint is not None:
        hint_type, title, items = hint
        suggestions.append(Suggestion(type=hint_type, title=title, items=list(items)))

    return suggestions


class ErrorEnricher:
    """Enrich violations and warnings with field guidance."""

    def __init__(self, resolver: FieldMetadataResolver = default_resolver):
        self.resolver = resolver

    def enrich_violation(self, raw: RawViolation, profile: ProfileDefinition) -> ValidationIssue:
        """
        Turn a raw structural violation into a reported error.

        Violations on fields the profile does not declare at the top level
        (including nested paths) keep the raw message and get no guidance.
        """
        field_name = extract_field_name(raw.path)
        issue = ValidationIssue(
            field=field_name,
            message=raw.message,
            keyword=raw.keyword,
            path=raw.path,
            value=raw.value,
            constraint=raw.constraint,
        )

        metadata = self.resolver.resolve(profile, field_name) if field_name else None
        if metadata is None:
            return issue

        issue.guidance = GuidanceSummary.from_metadata(metadata)
        issue.enhanced_message = enhance_message(raw.keyword, metadata, raw.constraint, raw.message)
        issue.suggestions = build_suggestions(field_name, metadata, raw.keyword, raw.constraint)
        return issue

    def enrich_warning(self, warning: AdvisoryWarning, profile: ProfileDefinition) -> AdvisoryWarning:
        """Attach guidance to an advisory warning; returns a new warning."""
        metadata = self.resolver.resolve(profile, warning.field)
        if metadata is None:
            return warning

        return replace(
            warning,
            guidance=GuidanceSummary.from_metadata(metadata),
            enhanced_message=enhance_message(RECOMMENDED_KEYWORD, metadata, None, warning.message),
            suggestions=build_suggestions(warning.field, metadata, RECOMMENDED_KEYWORD, None),
        )
