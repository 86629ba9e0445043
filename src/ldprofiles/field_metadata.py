"""
Field Metadata Resolver

Classifies a profile field into an importance tier and attaches a
description, example values and tier-specific guidance. Everything here
is a pure function of (profile, field name).

Also provides field listings, missing-field suggestions and editor
completion hints built on the same metadata.
"""

from typing import Dict, List, Optional

from ldprofiles.constants import (
    CATEGORY_BASIC,
    DEFAULT_DESCRIPTIONS,
    FALLBACK_EXAMPLE,
    FIELD_CATEGORIES,
    FIELD_EXAMPLES,
    GUIDANCE,
    HEADER_FIELDS,
    IMPORTANCE_OPTIONAL,
    IMPORTANCE_ORDER,
    IMPORTANCE_RECOMMENDED,
    IMPORTANCE_REQUIRED,
    RECOMMENDED_GUIDANCE_EXTRAS,
    SUGGESTION_PRIORITY_CRITICAL,
    SUGGESTION_PRIORITY_HELPFUL,
    SUGGESTION_PRIORITY_IMPORTANT,
    SUGGESTION_PRIORITY_OPTIONAL,
    TYPE_SYNTHESIZED_EXAMPLES,
)
from ldprofiles.models import FieldGuidance, FieldMetadata
from ldprofiles.presence import is_present
from ldprofiles.profiles import FieldDefinition, ProfileDefinition


def field_category(field_name: str) -> str:
    """Static name -> category lookup; unknown names are 'basic'."""
    return FIELD_CATEGORIES.get(field_name, CATEGORY_BASIC)


def field_description(definition: FieldDefinition) -> str:
    """Declared description, else a per-name default, else a generic one."""
    if definition.description:
        return definition.description
    return DEFAULT_DESCRIPTIONS.get(definition.name, f"The {definition.name} field")


def field_examples(definition: FieldDefinition) -> List[str]:
    """Declared examples, else per-name examples, else examples for the field's type."""
    if definition.examples:
        return list(definition.examples)

    if definition.name in FIELD_EXAMPLES:
        return list(FIELD_EXAMPLES[definition.name])

    synthesized = TYPE_SYNTHESIZED_EXAMPLES.get(definition.constraint.json_type)
    if synthesized is None:
        return [FALLBACK_EXAMPLE]
    return [example.format(name=definition.name) for example in synthesized]


def field_guidance(field_name: str, importance: str) -> FieldGuidance:
    """Build the guidance message for a field in a given tier."""
    message, action, severity = GUIDANCE.get(importance, GUIDANCE[IMPORTANCE_OPTIONAL])

    if importance == IMPORTANCE_RECOMMENDED and field_name in RECOMMENDED_GUIDANCE_EXTRAS:
        message = f"{message}. {RECOMMENDED_GUIDANCE_EXTRAS[field_name]}"

    return FieldGuidance(message=message, action=action, severity=severity)


class FieldMetadataResolver:
    """Resolve field metadata from profile definitions."""

    def resolve(self, profile: ProfileDefinition, field_name: str) -> Optional[FieldMetadata]:
        """
        Look up a field and derive its metadata.

        Required beats recommended beats optional when a field is declared
        in more than one tier.

        Args:
            profile: Profile definition to search
            field_name: Field name, e.g. "headline"

        Returns:
            FieldMetadata, or None if the profile does not declare the field
        """
        found = profile.find_field(field_name)
        if found is None:
            return None

        importance, definition = found
        return FieldMetadata(
            name=field_name,
            type=definition.constraint.json_type,
            importance=importance,
            category=field_category(field_name),
            description=field_description(definition),
            examples=field_examples(definition),
            guidance=field_guidance(field_name, importance),
            rich_results=field_name in profile.rich_results_fields,
            llm_optimized=field_name in profile.llm_optimized_fields,
            constraint=definition.constraint,
        )

    def all_fields(self, profile: ProfileDefinition) -> Dict[str, List[FieldMetadata]]:
        """All field metadata grouped by tier, skipping JSON-LD header keys.

        A field declared in several tiers is listed once, under the tier
        that wins resolution.
        """
        grouped: Dict[str, List[FieldMetadata]] = {tier: [] for tier in IMPORTANCE_ORDER}
        seen = set()

        for importance in IMPORTANCE_ORDER:
            for field_name in profile.tier(importance):
                if field_name in HEADER_FIELDS or field_name in seen:
                    continue
                seen.add(field_name)
                metadata = self.resolve(profile, field_name)
                if metadata is not None:
                    grouped[metadata.importance].append(metadata)

        return grouped

    def suggestions(self, profile: ProfileDefinition, current_data: Optional[dict] = None) -> Dict[str, List[dict]]:
        """
        Suggest fields to fill in next, grouped by urgency.

        Args:
            profile: Profile definition
            current_data: Document built so far

        Returns:
            Dict with 'critical' (missing required), 'important' (missing
            recommended rich-results fields), 'helpful' (other missing
            recommended fields) and 'optional' (all optional fields) lists
        """
        current_data = current_data or {}
        grouped = self.all_fields(profile)
        result: Dict[str, List[dict]] = {'critical': [], 'important': [], 'helpful': [], 'optional': []}

        for metadata in grouped[IMPORTANCE_REQUIRED]:
            if not is_present(current_data, metadata.name):
                result['critical'].append({
                    **metadata.to_dict(),
                    'reason': 'Required field missing',
                    'priority': SUGGESTION_PRIORITY_CRITICAL,
                })

        for metadata in grouped[IMPORTANCE_RECOMMENDED]:
            if is_present(current_data, metadata.name):
                continue
            if metadata.rich_results:
                result['important'].append({
                    **metadata.to_dict(),
                    'reason': 'Recommended for rich results',
                    'priority': SUGGESTION_PRIORITY_IMPORTANT,
                })
            else:
                result['helpful'].append({
                    **metadata.to_dict(),
                    'reason': 'Recommended for better SEO',
                    'priority': SUGGESTION_PRIORITY_HELPFUL,
                })

        for metadata in grouped[IMPORTANCE_OPTIONAL]:
            result['optional'].append({
                **metadata.to_dict(),
                'reason': 'Optional enhancement',
                'priority': SUGGESTION_PRIORITY_OPTIONAL,
            })

        return result

    def completion_hints(self, profile: ProfileDefinition, partial: str = "") -> List[dict]:
        """
        Editor autocomplete entries for a profile's fields.

        Args:
            profile: Profile definition
            partial: Partially typed field name; matched case-insensitively
                anywhere in the name

        Returns:
            Hint dicts sorted required-first, then by name
        """
        grouped = self.all_fields(profile)
        needle = partial.lower()
        hints = []

        for rank, importance in enumerate(IMPORTANCE_ORDER):
            for metadata in grouped[importance]:
                if needle and needle not in metadata.name.lower():
                    continue
                hints.append({
                    'label': metadata.name,
                    'kind': 'property',
                    'detail': f"{metadata.importance} - {metadata.type}",
                    'documentation': metadata.description,
                    'insertText': metadata.name,
                    'sortText': f"{rank}_{metadata.name}",
                    'importance': metadata.importance,
                    'richResults': metadata.rich_results,
                    'llmOptimized': metadata.llm_optimized,
                })

        return sorted(hints, key=lambda hint: hint['sortText'])


# Stateless; safe to share between validators and threads
default_resolver = FieldMetadataResolver()
