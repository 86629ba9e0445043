"""JSON-LD profile validation and compliance scoring."""

__version__ = "0.1.0"

from ldprofiles.validator import ProfileValidator, validate_structured_data
from ldprofiles.profiles import (
    FieldDefinition,
    ProfileDefinition,
    ProfileRegistry,
    load_profile_dir,
    load_profile_file,
    profile_from_dict,
)
from ldprofiles.sanitizer import InputSanitizer
from ldprofiles.field_metadata import FieldMetadataResolver
from ldprofiles.models import (
    AdvisoryWarning,
    BatchResult,
    ComplianceScore,
    FieldMetadata,
    SecurityWarning,
    Suggestion,
    ValidationIssue,
    ValidationResult,
    ValidationStats,
)
from ldprofiles.config import SanitizerConfig, ValidatorConfig, load_config
from ldprofiles.exceptions import (
    ProfileConsistencyError,
    ProfileDefinitionError,
    ProfileError,
    UnknownProfileError,
)

__all__ = [
    # Core
    "ProfileValidator",
    "validate_structured_data",
    "InputSanitizer",
    "FieldMetadataResolver",
    # Profiles
    "FieldDefinition",
    "ProfileDefinition",
    "ProfileRegistry",
    "load_profile_dir",
    "load_profile_file",
    "profile_from_dict",
    # Models
    "AdvisoryWarning",
    "BatchResult",
    "ComplianceScore",
    "FieldMetadata",
    "SecurityWarning",
    "Suggestion",
    "ValidationIssue",
    "ValidationResult",
    "ValidationStats",
    # Config
    "SanitizerConfig",
    "ValidatorConfig",
    "load_config",
    # Errors
    "ProfileConsistencyError",
    "ProfileDefinitionError",
    "ProfileError",
    "UnknownProfileError",
]
