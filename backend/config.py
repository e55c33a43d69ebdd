"""
Configuration settings for Chat-Log Expense Tracker.
Centralized configuration management for the application.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


# Category codes observed in the expense chat; display names for the dashboard.
DEFAULT_CATEGORY_NAMES: dict[str, str] = {
    "F": "Food",
    "Tng": "Transport",
    "Shp": "Shopping",
    "Passport": "Passport",
    "Mbl": "Mobile",
    "Coffee": "Coffee",
    "Sim": "SIM",
    "H": "Health",
}


class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "Chat-Log Expense Tracker"
    VERSION = "1.0.0"

    # File Upload Settings
    MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "5"))
    MAX_FILE_SIZE_BYTES: int = MAX_FILE_SIZE_MB * 1024 * 1024
    ALLOWED_FILE_TYPES: list[str] = [".txt"]

    # Output Settings
    OUTPUT_DIR: Path = Path(os.getenv("OUTPUT_DIR", "./output"))
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))

    # Parsing Settings
    FALLBACK_YEAR: int = int(os.getenv("FALLBACK_YEAR", "2026"))
    YEAR_POLICY: str = os.getenv("YEAR_POLICY", "fixed")
    CATEGORY_NAMES_FILE: Optional[str] = os.getenv("CATEGORY_NAMES_FILE") or None

    # Validation Settings
    STRICT_MODE: bool = os.getenv("STRICT_MODE", "false").lower() == "true"
    VALIDATE_DATES: bool = os.getenv("VALIDATE_DATES", "true").lower() == "true"

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE", "expense_tracker.log") or None

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Frontend Settings
    FRONTEND_HOST: str = os.getenv("FRONTEND_HOST", "0.0.0.0")
    FRONTEND_PORT: int = int(os.getenv("FRONTEND_PORT", "8501"))

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_output_path(cls, filename: str) -> Path:
        """Get full path for output file."""
        cls.ensure_directories()
        return cls.OUTPUT_DIR / filename

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def get_category_names(cls, path: Optional[str] = None) -> dict[str, str]:
        """
        Load the category code -> display name table.

        Uses the JSON file at ``path`` (or CATEGORY_NAMES_FILE) when given,
        otherwise the built-in table.

        Raises:
            ValueError: If the file cannot be read or is not a flat string mapping
        """
        path = path or cls.CATEGORY_NAMES_FILE
        if not path:
            return dict(DEFAULT_CATEGORY_NAMES)

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Cannot load category names from {path}: {e}")
            raise ValueError(f"Invalid category names file: {path}") from e

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise ValueError(f"Category names file must map strings to strings: {path}")

        logger.info(f"Loaded {len(data)} category names from {path}")
        return data

    @classmethod
    def validate_file(cls, filename: str, file_size: int) -> tuple[bool, Optional[str]]:
        """
        Validate uploaded file.

        Returns:
            tuple: (is_valid, error_message)
        """
        # Check file type
        if not any(filename.lower().endswith(ext) for ext in cls.ALLOWED_FILE_TYPES):
            return False, f"Invalid file type. Allowed types: {', '.join(cls.ALLOWED_FILE_TYPES)}"

        # Check file size
        if file_size > cls.MAX_FILE_SIZE_BYTES:
            size_mb = file_size / (1024 * 1024)
            return False, f"File too large ({size_mb:.2f} MB). Maximum: {cls.MAX_FILE_SIZE_MB} MB"

        # Check if empty
        if file_size == 0:
            return False, "File is empty"

        return True, None

    @classmethod
    def to_dict(cls) -> dict:
        """Convert configuration to dictionary."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.VERSION,
            "max_file_size_mb": cls.MAX_FILE_SIZE_MB,
            "output_dir": str(cls.OUTPUT_DIR),
            "log_dir": str(cls.LOG_DIR),
            "fallback_year": cls.FALLBACK_YEAR,
            "year_policy": cls.YEAR_POLICY,
            "category_names_file": cls.CATEGORY_NAMES_FILE,
            "strict_mode": cls.STRICT_MODE,
            "validate_dates": cls.VALIDATE_DATES,
            "log_level": cls.LOG_LEVEL,
        }


# Create a singleton instance
config = Config()
