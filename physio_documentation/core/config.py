"""
Configuration for the Physiotherapy Documentation Assistant

This module defines the configuration dataclass used to assemble a clinical
workspace. Configuration is:
    1. Loaded from environment variables (with .env support)
    2. Validated at startup to fail fast on misconfiguration

Configuration Hierarchy:
    AssistantConfiguration
    ├── Storage Settings (patient list file)
    ├── Catalog Settings (ICD-10 catalog path, search limit)
    ├── Note Settings (language, default rating, diagnosis requirement)
    └── Logging Settings (log level)

Usage:
    from physio_documentation.core.config import AssistantConfiguration

    config = AssistantConfiguration.from_environment()
    workspace = ClinicalWorkspace.from_configuration(config)
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from physio_documentation.core.constants import DEFAULT_RATING, ICD10_SEARCH_LIMIT
from physio_documentation.core.enums import NoteLanguage
from physio_documentation.core.exceptions import ConfigurationError

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# STAGE 1: DEFAULT VALUES
# =============================================================================


class ConfigDefaults:
    """Default configuration values."""

    # -------------------------------------------------------------------------
    # 1.1 Storage Defaults
    # -------------------------------------------------------------------------
    DEFAULT_STORAGE_PATH = "physio_doc_pilot_v5.json"

    # -------------------------------------------------------------------------
    # 1.2 Catalog Defaults
    # -------------------------------------------------------------------------
    DEFAULT_ICD10_CATALOG_PATH = str(Path(__file__).parent.parent / "data" / "icd10_catalog.json")
    DEFAULT_ICD10_SEARCH_LIMIT = ICD10_SEARCH_LIMIT

    # -------------------------------------------------------------------------
    # 1.3 Note Defaults
    # -------------------------------------------------------------------------
    DEFAULT_LANGUAGE = NoteLanguage.ENGLISH
    DEFAULT_RATING = DEFAULT_RATING
    DEFAULT_REQUIRE_DIAGNOSIS = True

    # -------------------------------------------------------------------------
    # 1.4 Logging Defaults
    # -------------------------------------------------------------------------
    DEFAULT_LOG_LEVEL = "INFO"


# =============================================================================
# STAGE 2: CONFIGURATION DATACLASS
# =============================================================================


@dataclass
class AssistantConfiguration:
    """
    Configuration for the documentation workspace.

    What it does:
        Encapsulates the settings needed to assemble a ClinicalWorkspace:
        where the patient list lives, which ICD-10 catalog to search, and
        which language the composed notes use.

    Example:
        >>> config = AssistantConfiguration.from_environment()
        >>> config.language
        <NoteLanguage.ENGLISH: 'en'>
    """

    # -------------------------------------------------------------------------
    # 2.1 Storage Configuration
    # -------------------------------------------------------------------------
    storage_path: str = ConfigDefaults.DEFAULT_STORAGE_PATH
    """JSON file holding the serialized patient list."""

    # -------------------------------------------------------------------------
    # 2.2 Catalog Configuration
    # -------------------------------------------------------------------------
    icd10_catalog_path: str = ConfigDefaults.DEFAULT_ICD10_CATALOG_PATH
    """Path to the ICD-10 catalog JSON ({code, short, long} records)."""

    icd10_search_limit: int = ConfigDefaults.DEFAULT_ICD10_SEARCH_LIMIT
    """Maximum number of suggestions returned by a diagnosis search."""

    # -------------------------------------------------------------------------
    # 2.3 Note Configuration
    # -------------------------------------------------------------------------
    language: NoteLanguage = ConfigDefaults.DEFAULT_LANGUAGE
    """Label pack for notes, catalogs and severity bands."""

    default_rating: int = ConfigDefaults.DEFAULT_RATING
    """
    Pain/function rating seeded into newly created sessions. Stored ratings
    that are missing or non-numeric still read as 5, independent of this value.
    """

    require_diagnosis: bool = ConfigDefaults.DEFAULT_REQUIRE_DIAGNOSIS
    """Reject patient registration without a diagnosis entry."""

    # -------------------------------------------------------------------------
    # 2.4 Logging Configuration
    # -------------------------------------------------------------------------
    log_level: str = ConfigDefaults.DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            self.language = NoteLanguage(self.language)
        except ValueError:
            raise ConfigurationError(
                f"Unsupported note language: {self.language}",
                context={"setting": "PHYSIO_LANGUAGE", "value": self.language},
            )

        if not (1 <= self.icd10_search_limit <= 100):
            raise ConfigurationError(
                f"ICD-10 search limit must be 1-100, got {self.icd10_search_limit}",
                context={"setting": "PHYSIO_ICD10_SEARCH_LIMIT"},
            )

        if not (0 <= self.default_rating <= 10):
            raise ConfigurationError(
                f"Default rating must be 0-10, got {self.default_rating}",
                context={"setting": "PHYSIO_DEFAULT_RATING"},
            )

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.log_level}",
                context={"setting": "PHYSIO_LOG_LEVEL", "value": self.log_level},
            )

    @classmethod
    def from_environment(
        cls, env_file: Optional[str] = None, validate_on_load: bool = True
    ) -> "AssistantConfiguration":
        """
        Load configuration from environment variables.

        STAGE 1: Load .env file (if specified or found in the working directory)
        STAGE 2: Read and convert environment variables
        STAGE 3: Validate configuration (optional)

        Raises:
            ConfigurationError: If a value cannot be converted or is invalid
        """
        # STAGE 1: Load .env file
        if env_file:
            load_dotenv(env_file)
        elif (Path.cwd() / ".env").exists():
            load_dotenv(Path.cwd() / ".env")

        # STAGE 2: Read environment variables
        try:
            config = cls(
                storage_path=os.getenv("PHYSIO_STORAGE_PATH", ConfigDefaults.DEFAULT_STORAGE_PATH),
                icd10_catalog_path=os.getenv(
                    "PHYSIO_ICD10_CATALOG_PATH", ConfigDefaults.DEFAULT_ICD10_CATALOG_PATH
                ),
                icd10_search_limit=int(
                    os.getenv("PHYSIO_ICD10_SEARCH_LIMIT", ConfigDefaults.DEFAULT_ICD10_SEARCH_LIMIT)
                ),
                language=os.getenv("PHYSIO_LANGUAGE", ConfigDefaults.DEFAULT_LANGUAGE.value).lower(),
                default_rating=int(
                    os.getenv("PHYSIO_DEFAULT_RATING", ConfigDefaults.DEFAULT_RATING)
                ),
                require_diagnosis=os.getenv("PHYSIO_REQUIRE_DIAGNOSIS", "true").lower() == "true",
                log_level=os.getenv("PHYSIO_LOG_LEVEL", ConfigDefaults.DEFAULT_LOG_LEVEL).upper(),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}")

        # STAGE 3: Validate
        if validate_on_load:
            config.validate()

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary (for logging/debugging)."""
        return {
            "storage_path": self.storage_path,
            "icd10_catalog_path": self.icd10_catalog_path,
            "icd10_search_limit": self.icd10_search_limit,
            "language": NoteLanguage(self.language).value,
            "default_rating": self.default_rating,
            "require_diagnosis": self.require_diagnosis,
            "log_level": self.log_level,
        }


def configure_logging(level: str = ConfigDefaults.DEFAULT_LOG_LEVEL) -> None:
    """Replace loguru's sinks with a single stderr sink at the given level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
