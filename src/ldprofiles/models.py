"""Data models for profile validation results.

Every result type renders to plain JSON-serializable dicts through
``to_dict()``; keys follow the camelCase JSON-LD tooling convention.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ldprofiles.constraints import Constraint


@dataclass
class FieldGuidance:
    """Severity-tagged guidance for a field, keyed by its importance tier."""

    message: str
    action: str
    severity: str  # error/warning/info

    def to_dict(self) -> dict:
        return {"message": self.message, "action": self.action, "severity": self.severity}


@dataclass
class FieldMetadata:
    """Derived description of one profile field."""

    name: str
    type: str
    importance: str  # required/recommended/optional
    category: str
    description: str
    examples: list[str]
    guidance: FieldGuidance
    rich_results: bool = False
    llm_optimized: bool = False
    constraint: Optional[Constraint] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "importance": self.importance,
            "category": self.category,
            "description": self.description,
            "examples": list(self.examples),
            "guidance": self.guidance.to_dict(),
            "richResults": self.rich_results,
            "llmOptimized": self.llm_optimized,
        }


@dataclass
class GuidanceSummary:
    """Field metadata attached to an enriched error or warning."""

    description: str
    examples: list[str]
    importance: str
    category: str
    rich_results: bool
    llm_optimized: bool

    @classmethod
    def from_metadata(cls, metadata: FieldMetadata) -> "GuidanceSummary":
        return cls(
            description=metadata.description,
            examples=list(metadata.examples),
            importance=metadata.importance,
            category=metadata.category,
            rich_results=metadata.rich_results,
            llm_optimized=metadata.llm_optimized,
        )

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "examples": list(self.examples),
            "importance": self.importance,
            "category": self.category,
            "richResults": self.rich_results,
            "llmOptimized": self.llm_optimized,
        }


@dataclass
class Suggestion:
    """A remediation hint: a titled list of example values."""

    type: str  # examples/type-help/format-help/url-help/date-help/email-help
    title: str
    items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"type": self.type, "title": self.title, "items": list(self.items)}


@dataclass
class RawViolation:
    """One structural schema violation, before enrichment."""

    path: str  # Dot/bracket path into the document, e.g. "mainEntity[0].name"
    keyword: str  # required/type/format/minLength/...
    message: str
    value: Any = None
    constraint: Any = None  # The violated schema value (expected type, bound, ...)


@dataclass
class ValidationIssue:
    """A hard validation error, optionally enriched with guidance."""

    field: str
    message: str
    keyword: str
    path: str = ""
    value: Any = None
    constraint: Any = None
    guidance: Optional[GuidanceSummary] = None
    enhanced_message: Optional[str] = None
    suggestions: list[Suggestion] = field(default_factory=list)

    @property
    def enriched(self) -> bool:
        return self.guidance is not None

    def to_dict(self) -> dict:
        data = {
            "field": self.field,
            "message": self.message,
            "keyword": self.keyword,
            "path": self.path,
            "value": self.value,
        }
        if self.guidance is not None:
            data["guidance"] = self.guidance.to_dict()
            data["enhancedMessage"] = self.enhanced_message
            data["suggestions"] = [s.to_dict() for s in self.suggestions]
        return data


@dataclass
class AdvisoryWarning:
    """A soft notice that a recommended field is missing."""

    field: str
    message: str
    description: str
    priority: str  # high/medium/low
    reason: str
    importance: str = "recommended"
    guidance: Optional[GuidanceSummary] = None
    enhanced_message: Optional[str] = None
    suggestions: list[Suggestion] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {
            "field": self.field,
            "message": self.message,
            "description": self.description,
            "importance": self.importance,
            "priority": self.priority,
            "reason": self.reason,
        }
        if self.guidance is not None:
            data["guidance"] = self.guidance.to_dict()
            data["enhancedMessage"] = self.enhanced_message
            data["suggestions"] = [s.to_dict() for s in self.suggestions]
        return data


@dataclass
class SecurityWarning:
    """Informational notice that sanitization removed dangerous content."""

    field: str
    message: str
    severity: str  # high/medium

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "severity": self.severity}


@dataclass
class ComplianceScore:
    """Coverage of one named field subset in a document."""

    coverage: float  # 0-100
    present: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    total: int = 0

    @property
    def compliant(self) -> bool:
        return not self.missing

    # The LLM subset reports the same facts under different names
    @property
    def optimized(self) -> bool:
        return self.compliant

    @property
    def score(self) -> float:
        return self.coverage

    def to_rich_results_dict(self) -> dict:
        return {
            "compliant": self.compliant,
            "coverage": self.coverage,
            "missing": list(self.missing),
            "present": list(self.present),
            "totalRequired": self.total,
        }

    def to_llm_dict(self) -> dict:
        return {
            "optimized": self.optimized,
            "score": self.coverage,
            "missing": list(self.missing),
            "present": list(self.present),
            "totalOptimized": self.total,
        }


@dataclass
class ValidationResult:
    """Verdict for one document against one profile."""

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[AdvisoryWarning] = field(default_factory=list)
    rich_results_compliance: Optional[ComplianceScore] = None
    llm_optimization_compliance: Optional[ComplianceScore] = None
    sanitized: Optional[dict] = None
    security_warnings: Optional[list[SecurityWarning]] = None
    profile_type: str = ""

    def to_dict(self) -> dict:
        data = {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "richResultsCompliance": (
                self.rich_results_compliance.to_rich_results_dict()
                if self.rich_results_compliance else None
            ),
            "llmOptimizationCompliance": (
                self.llm_optimization_compliance.to_llm_dict()
                if self.llm_optimization_compliance else None
            ),
        }
        if self.sanitized is not None:
            data["sanitized"] = self.sanitized
        if self.security_warnings is not None:
            data["securityWarnings"] = [w.to_dict() for w in self.security_warnings]
        return data


# ============================================================================
# Batch Models
# ============================================================================

@dataclass
class BatchSummary:
    """Counts across a batch of validated documents."""

    total: int = 0
    valid: int = 0
    invalid: int = 0
    with_warnings: int = 0
    rich_results_compliant: int = 0
    llm_optimized: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "valid": self.valid,
            "invalid": self.invalid,
            "withWarnings": self.with_warnings,
            "richResultsCompliant": self.rich_results_compliant,
            "llmOptimized": self.llm_optimized,
        }


@dataclass
class BatchItem:
    """One document's result within a batch."""

    index: int
    result: ValidationResult

    def to_dict(self) -> dict:
        return {"index": self.index, **self.result.to_dict()}


@dataclass
class BatchResult:
    """Per-document results plus a summary."""

    summary: BatchSummary
    results: list[BatchItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "results": [item.to_dict() for item in self.results],
        }


@dataclass
class FieldCoverage:
    """How many documents in a batch populate a field."""

    count: int = 0
    percentage: float = 0.0


@dataclass
class ValidationStats:
    """Aggregate statistics for a batch of documents."""

    summary: BatchSummary
    average_rich_results_coverage: float = 0.0
    average_llm_score: float = 0.0
    field_coverage: dict[str, FieldCoverage] = field(default_factory=dict)
    common_errors: list[tuple[str, int]] = field(default_factory=list)
    common_warnings: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            **self.summary.to_dict(),
            "averageRichResultsCoverage": self.average_rich_results_coverage,
            "averageLLMOptimization": self.average_llm_score,
            "fieldCoverage": {
                name: {"count": cov.count, "percentage": cov.percentage}
                for name, cov in self.field_coverage.items()
            },
            "commonErrors": [{"error": key, "count": count} for key, count in self.common_errors],
            "commonWarnings": [{"field": key, "count": count} for key, count in self.common_warnings],
        }
