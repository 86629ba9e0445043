"""
Profile Validator

Validates candidate JSON-LD documents against registered profiles and
produces a ValidationResult:

- Structural errors (required fields, types, formats, bounds) decide validity
- Advisory warnings flag missing recommended fields by priority
- Rich-results and LLM-optimization coverage scores
- Optional sanitization with security warnings for removed content

Every call is self-contained; the validator holds only the read-only
registry and a compiled-schema cache, so one instance can be shared
across threads.
"""

import logging
import threading
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from ldprofiles.advisory import AdvisoryEngine
from ldprofiles.compliance import ComplianceScorer
from ldprofiles.config import ValidatorConfig
from ldprofiles.enricher import ErrorEnricher
from ldprofiles.exceptions import UnknownProfileError
from ldprofiles.field_metadata import FieldMetadataResolver, default_resolver
from ldprofiles.models import (
    BatchItem,
    BatchResult,
    BatchSummary,
    FieldCoverage,
    FieldMetadata,
    ValidationIssue,
    ValidationResult,
    ValidationStats,
)
from ldprofiles.presence import is_present
from ldprofiles.profiles import ProfileDefinition, ProfileRegistry
from ldprofiles.sanitizer import InputSanitizer
from ldprofiles.structural import StructuralValidator

logger = logging.getLogger(__name__)

UNKNOWN_PROFILE_KEYWORD = 'profile'


class ProfileValidator:
    """Validate documents against structured-data profiles."""

    def __init__(
        self,
        registry: Optional[ProfileRegistry] = None,
        config: Optional[ValidatorConfig] = None,
        sanitizer: Optional[InputSanitizer] = None,
        resolver: FieldMetadataResolver = default_resolver,
    ):
        """
        Initialize the validator.

        Args:
            registry: Profiles to validate against; the shipped profiles
                (plus config.profile_dirs) are loaded when omitted
            config: Validator configuration (defaults when omitted)
            sanitizer: Sanitizer used when config.sanitize_inputs is set
            resolver: Field metadata resolver used for enrichment
        """
        self.config = config or ValidatorConfig()
        if registry is None:
            registry = ProfileRegistry.builtin(
                strict=self.config.strict_profiles,
                extra_dirs=self.config.profile_dirs,
            )
        self.registry = registry
        self.sanitizer = sanitizer or InputSanitizer()
        self.resolver = resolver

        self.structural = StructuralValidator()
        self.advisory = AdvisoryEngine()
        self.scorer = ComplianceScorer()
        self.enricher = ErrorEnricher(resolver)

    def validate(
        self,
        document: Any,
        profile_type: str,
        sanitize: Optional[bool] = None,
    ) -> ValidationResult:
        """
        Validate one document against a profile.

        Args:
            document: Candidate document
            profile_type: Registered profile type, e.g. "Article"
            sanitize: Override config.sanitize_inputs for this call

        Returns:
            ValidationResult; an unknown profile type yields valid=False with
            a single error rather than an exception
        """
        try:
            profile = self.registry.get(profile_type)
        except UnknownProfileError as e:
            logger.warning(str(e))
            return ValidationResult(
                valid=False,
                errors=[ValidationIssue(
                    field='',
                    message=str(e),
                    keyword=UNKNOWN_PROFILE_KEYWORD,
                    value=profile_type,
                )],
                profile_type=profile_type,
            )

        if sanitize is None:
            sanitize = self.config.sanitize_inputs

        sanitized = None
        security_warnings = None
        target = document
        if sanitize and isinstance(document, dict):
            sanitized = self.sanitizer.sanitize_structured_data(document, profile.date_formats)
            security_warnings = self.sanitizer.check_security_issues(document, sanitized)
            target = sanitized

        return self._validate_profile(target, profile, sanitized, security_warnings)

    def _validate_profile(
        self,
        document: Any,
        profile: ProfileDefinition,
        sanitized: Optional[dict],
        security_warnings: Optional[list],
    ) -> ValidationResult:
        violations = self.structural.validate_structure(document, profile)
        errors = [self.enricher.enrich_violation(raw, profile) for raw in violations]

        warnings = [
            self.enricher.enrich_warning(warning, profile)
            for warning in self.advisory.check_recommended(document, profile)
        ]

        result = ValidationResult(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            rich_results_compliance=self.scorer.rich_results(document, profile),
            llm_optimization_compliance=self.scorer.llm_optimization(document, profile),
            sanitized=sanitized,
            security_warnings=security_warnings,
            profile_type=profile.type,
        )

        logger.debug(
            f"Validated {profile.type}: valid={result.valid}, "
            f"{len(errors)} errors, {len(warnings)} warnings, "
            f"rich results {result.rich_results_compliance.coverage:.0f}%, "
            f"LLM {result.llm_optimization_compliance.coverage:.0f}%"
        )
        return result

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def validate_batch(self, documents: Iterable[Any], profile_type: str) -> BatchResult:
        """
        Validate a list of documents against one profile.

        Returns:
            BatchResult with per-document results (indexed in input order)
            and summary counts
        """
        results = [
            BatchItem(index=index, result=self.validate(document, profile_type))
            for index, document in enumerate(documents)
        ]

        summary = BatchSummary(total=len(results))
        for item in results:
            result = item.result
            if result.valid:
                summary.valid += 1
            else:
                summary.invalid += 1
            if result.warnings:
                summary.with_warnings += 1
            if result.rich_results_compliance and result.rich_results_compliance.compliant:
                summary.rich_results_compliant += 1
            if result.llm_optimization_compliance and result.llm_optimization_compliance.optimized:
                summary.llm_optimized += 1

        logger.info(f"Batch validated {summary.total} {profile_type} documents: {summary.valid} valid, {summary.invalid} invalid")
        return BatchResult(summary=summary, results=results)

    def get_validation_stats(
        self,
        documents: Iterable[Any],
        profile_type: str,
        top_n: Optional[int] = None,
    ) -> ValidationStats:
        """
        Aggregate statistics over a batch of documents.

        Args:
            documents: Documents to validate
            profile_type: Profile to validate against
            top_n: How many common errors/warnings to keep
                (defaults to config.common_issue_limit)

        Returns:
            ValidationStats with average scores, per-field presence and the
            most frequent errors and warnings
        """
        documents = list(documents)
        batch = self.validate_batch(documents, profile_type)
        limit = self.config.common_issue_limit if top_n is None else top_n
        total = batch.summary.total

        rich_scores = [
            item.result.rich_results_compliance.coverage
            for item in batch.results if item.result.rich_results_compliance
        ]
        llm_scores = [
            item.result.llm_optimization_compliance.coverage
            for item in batch.results if item.result.llm_optimization_compliance
        ]

        field_coverage: Dict[str, FieldCoverage] = {}
        profile = self.registry.find(profile_type)
        if profile is not None:
            for field_name in profile.declared_fields:
                count = sum(
                    1 for document, item in zip(documents, batch.results)
                    if is_present(self._validated_document(document, item.result), field_name)
                )
                field_coverage[field_name] = FieldCoverage(
                    count=count,
                    percentage=(count / total) * 100 if total else 0.0,
                )

        error_counts: Counter = Counter()
        warning_counts: Counter = Counter()
        for item in batch.results:
            for error in item.result.errors:
                error_counts[f"{error.field}: {error.message}"] += 1
            for warning in item.result.warnings:
                warning_counts[warning.field] += 1

        return ValidationStats(
            summary=batch.summary,
            average_rich_results_coverage=sum(rich_scores) / len(rich_scores) if rich_scores else 0.0,
            average_llm_score=sum(llm_scores) / len(llm_scores) if llm_scores else 0.0,
            field_coverage=field_coverage,
            common_errors=error_counts.most_common(limit),
            common_warnings=warning_counts.most_common(limit),
        )

    @staticmethod
    def _validated_document(document: Any, result: ValidationResult) -> Any:
        return result.sanitized if result.sanitized is not None else document

    # ------------------------------------------------------------------
    # Field metadata
    # ------------------------------------------------------------------

    def get_field_metadata(self, profile_type: str, field_name: str) -> Optional[FieldMetadata]:
        """Metadata for one field, or None for unknown profiles or fields."""
        profile = self.registry.find(profile_type)
        if profile is None:
            return None
        return self.resolver.resolve(profile, field_name)

    def get_all_field_metadata(self, profile_type: str) -> Optional[Dict[str, List[FieldMetadata]]]:
        profile = self.registry.find(profile_type)
        if profile is None:
            return None
        return self.resolver.all_fields(profile)

    def get_field_suggestions(self, profile_type: str, current_data: Optional[dict] = None) -> Optional[Dict[str, List[dict]]]:
        profile = self.registry.find(profile_type)
        if profile is None:
            return None
        return self.resolver.suggestions(profile, current_data)

    def get_completion_hints(self, profile_type: str, partial: str = "") -> List[dict]:
        profile = self.registry.find(profile_type)
        if profile is None:
            return []
        return self.resolver.completion_hints(profile, partial)

    def list_profiles(self, category: Optional[str] = None) -> List[str]:
        """Registered profile types, optionally limited to one category."""
        if category:
            return self.registry.by_category(category)
        return self.registry.list_types()

    def get_profile(self, profile_type: str) -> Optional[ProfileDefinition]:
        return self.registry.find(profile_type)


_default_validator: Optional[ProfileValidator] = None
_default_validator_lock = threading.Lock()


def get_default_validator() -> ProfileValidator:
    """Shared validator over the shipped profiles, created on first use."""
    global _default_validator
    with _default_validator_lock:
        if _default_validator is None:
            _default_validator = ProfileValidator()
        return _default_validator


def validate_structured_data(document: Any, profile_type: str) -> ValidationResult:
    """Validate a document with the shared default validator."""
    return get_default_validator().validate(document, profile_type)
