# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for normalization, archive, export, scan and
logging settings. The archive strategy is selected once from these values.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nfcname.errors import NfcNameError


class ConfigurationError(NfcNameError):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Normalization ===
    normalization_form: Literal["NFC", "NFKC"] = "NFC"

    # === Archive ===
    archive_enabled: bool = True
    archive_compression: Literal["deflate", "store"] = "deflate"
    archive_compression_level: int = 6
    archive_extension: str = ".zip"

    # === Export ===
    collision_policy: Literal["suffix", "error"] = "suffix"
    export_delay_seconds: float = 0.1
    output_writer: Literal["local"] = "local"
    output_dir: Path = Path("./output")

    # === Batch ===
    progress_yield_seconds: float = 0.0
    scan_recursive: bool = True
    scan_include_hidden: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("archive_compression_level")
    @classmethod
    def validate_compression_level(cls, v: int) -> int:  # noqa: N805
        if not 0 <= v <= 9:
            raise ValueError("archive_compression_level must be between 0 and 9")
        return v

    @field_validator("export_delay_seconds", "progress_yield_seconds")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:  # noqa: N805
        if v < 0:
            raise ValueError("delays must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.archive_enabled:
            ext = self.archive_extension
            if not ext.startswith(".") or len(ext) < 2 or "/" in ext:
                errors.append(
                    "ARCHIVE_EXTENSION must look like '.zip' when archiving is enabled"
                )

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
