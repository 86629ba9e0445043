from dotenv import load_dotenv
from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path
import json
import os

from pydantic import BaseModel, Field

load_dotenv()  # Loads variables from .env file


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class SanitizerConfig(BaseModel):
    """
    Limits and allow-lists applied by the InputSanitizer.

    All fields are validated by Pydantic so a bad override fails loudly.
    """

    max_string_length: int = Field(
        default=10000,
        description="Strings longer than this are truncated",
        ge=1,
    )

    max_url_length: int = Field(
        default=2048,
        description="URLs longer than this are truncated before parsing",
        ge=16,
    )

    max_email_length: int = Field(default=254, ge=6)
    max_phone_length: int = Field(default=50, ge=4)
    max_sku_length: int = Field(default=100, ge=1)
    max_language_code_length: int = Field(default=10, ge=2)

    max_array_items: int = Field(
        default=100,
        description="String arrays are cut to this many items",
        ge=1,
    )

    allowed_url_schemes: List[str] = Field(
        default_factory=lambda: ["http", "https", "mailto", "tel"],
        description="URL schemes kept by the sanitizer; everything else is rejected",
    )

    min_year: int = Field(
        default=1900,
        description="Dates before this year are rejected",
        ge=1,
    )

    max_years_ahead: int = Field(
        default=100,
        description="Dates more than this many years in the future are rejected",
        ge=0,
    )


@dataclass
class ValidatorConfig:
    """Configuration for ProfileValidator."""
    sanitize_inputs: bool = True
    strict_profiles: bool = True
    profile_dirs: List[str] = field(default_factory=list)  # Extra YAML profile directories
    common_issue_limit: int = 10  # Top-N errors/warnings in batch statistics
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Load configuration from environment variables.

        Returns:
            ValidatorConfig: Configuration instance with values from environment
        """
        profile_dirs = os.getenv("LDPROFILES_PROFILE_DIRS", "")
        return cls(
            sanitize_inputs=_env_bool("LDPROFILES_SANITIZE_INPUTS", True),
            strict_profiles=_env_bool("LDPROFILES_STRICT_PROFILES", True),
            profile_dirs=[d for d in profile_dirs.split(os.pathsep) if d],
            common_issue_limit=int(os.getenv("LDPROFILES_COMMON_ISSUE_LIMIT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @classmethod
    def from_file(cls, path: str) -> "ValidatorConfig":
        """Load configuration from a JSON file.

        Keys may sit at the top level or under a "validator" section.
        Missing files yield the defaults.

        Args:
            path: Path to JSON configuration file

        Returns:
            ValidatorConfig with values from file
        """
        config = cls()
        file_path = Path(path)

        if not file_path.exists():
            return config

        with open(file_path, 'r') as f:
            data = json.load(f)

        section = data.get('validator', data)

        for field_name in config.__dataclass_fields__:
            if field_name in section:
                setattr(config, field_name, section[field_name])

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }

    def save_to_file(self, path: str) -> None:
        """Save current configuration to a JSON file."""
        with open(path, 'w') as f:
            json.dump({'validator': self.to_dict()}, f, indent=2)


def load_config(path: Optional[str] = None) -> ValidatorConfig:
    """Load configuration from a JSON file when given, else from the environment."""
    if path:
        return ValidatorConfig.from_file(path)
    return ValidatorConfig.from_env()
