"""
Advisory Engine

Emits soft warnings for recommended fields a document leaves out, ranked
by what the field is good for:

- high: the field gates rich-results eligibility
- medium: the field is flagged for LLM consumption
- low: general SEO value only

Rich-results membership wins when a field is in both subsets.
"""

from typing import Any, List, Tuple

from ldprofiles.constants import (
    IMPORTANCE_RECOMMENDED,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    REASON_GENERAL_SEO,
    REASON_LLM,
    REASON_RICH_RESULTS,
)
from ldprofiles.field_metadata import field_description
from ldprofiles.models import AdvisoryWarning
from ldprofiles.presence import is_present
from ldprofiles.profiles import ProfileDefinition


def classify_priority(profile: ProfileDefinition, field_name: str) -> Tuple[str, str]:
    """Return (priority, reason) for a missing recommended field."""
    if field_name in profile.rich_results_fields:
        return PRIORITY_HIGH, REASON_RICH_RESULTS
    elif field_name in profile.llm_optimized_fields:
        return PRIORITY_MEDIUM, REASON_LLM
    else:
        return PRIORITY_LOW, REASON_GENERAL_SEO


class AdvisoryEngine:
    """Check documents for missing recommended fields."""

    def check_recommended(self, document: Any, profile: ProfileDefinition) -> List[AdvisoryWarning]:
        """
        Warn about every recommended field the document does not populate.

        Args:
            document: Candidate document
            profile: Profile definition

        Returns:
            One warning per missing field, in the profile's declared order
        """
        warnings = []

        for field_name, definition in profile.recommended.items():
            if is_present(document, field_name):
                continue

            priority, reason = classify_priority(profile, field_name)
            warnings.append(AdvisoryWarning(
                field=field_name,
                message=f"Recommended field '{field_name}' is missing",
                description=field_description(definition),
                priority=priority,
                reason=reason,
                importance=IMPORTANCE_RECOMMENDED,
            ))

        return warnings
