"""
Compliance Scorer

Measures how much of a named field subset a document populates. The same
logic scores the rich-results subset and the LLM-optimized subset.
"""

from typing import Any, Iterable

from ldprofiles.models import ComplianceScore
from ldprofiles.presence import is_present
from ldprofiles.profiles import ProfileDefinition


def score(document: Any, field_subset: Iterable[str]) -> ComplianceScore:
    """
    Score a document's coverage of a field subset.

    An empty subset scores 100: there is nothing to be missing.

    Args:
        document: Candidate document
        field_subset: Field names to look for

    Returns:
        ComplianceScore with present/missing partitions and 0-100 coverage
    """
    fields = list(field_subset)
    present = [name for name in fields if is_present(document, name)]
    missing = [name for name in fields if not is_present(document, name)]

    coverage = (len(present) / len(fields)) * 100 if fields else 100.0

    return ComplianceScore(
        coverage=coverage,
        present=present,
        missing=missing,
        total=len(fields),
    )


class ComplianceScorer:
    """Score documents against a profile's two field subsets."""

    def rich_results(self, document: Any, profile: ProfileDefinition) -> ComplianceScore:
        return score(document, profile.rich_results_fields)

    def llm_optimization(self, document: Any, profile: ProfileDefinition) -> ComplianceScore:
        return score(document, profile.llm_optimized_fields)
