"""
Configuration for the address finder.
There are three levels of configuration in order of priority
1. cli options
2. yaml config file
3. environment variables
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PositioningProviderName(str, Enum):
    IP = "ip"
    STATIC = "static"
    NONE = "none"


class Settings(BaseSettings):
    """
    Application configuration with support for:
    - Environment variables (and a local ``.env`` file)
    - YAML configuration file
    - CLI argument overrides

    Precedence: CLI args > YAML config > Environment variables > Defaults
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ===== Inference service =====
    llm_api_key: Optional[str] = Field(
        default=None,
        description="API key for the generative-language service",
    )

    llm_api_base: Optional[str] = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        description="OpenAI-compatible base URL of the generative-language service",
    )

    llm_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for reverse geocoding",
    )

    # ===== Positioning =====
    positioning_provider: PositioningProviderName = Field(
        default=PositioningProviderName.IP,
        description="Source of the position fix: 'ip', 'static' or 'none'",
    )

    static_latitude: Optional[float] = Field(
        default=None,
        description="Latitude reported by the static positioning provider",
    )
    static_longitude: Optional[float] = Field(
        default=None,
        description="Longitude reported by the static positioning provider",
    )

    ip_geolocation_url: str = Field(
        default="http://ip-api.com/json/",
        description="JSON endpoint used by the IP positioning provider",
    )

    position_timeout_ms: int = Field(
        default=10_000,
        description="Bounded wait for a single position fix, in milliseconds",
    )

    position_high_accuracy: bool = Field(
        default=True,
        description="Request a high-accuracy fix from the positioning provider",
    )

    # ===== Output =====
    clipboard_command: Optional[str] = Field(
        default=None,
        description=(
            "Shell-style command receiving clipboard text on stdin "
            "(autodetected when unset)"
        ),
    )

    # ===== Logging =====
    data_root: Path = Field(
        default=Path("./data"),
        description="Root directory for run artefacts such as log files",
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output",
    )
    log_to_file: bool = Field(
        default=False,
        description="Persist logs to a file (defaults to <data_root>/logs/address_finder.log)",
    )
    log_to_console: bool = Field(
        default=True,
        description="Emit selected logs to the console",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional override for log file path",
    )

    @field_validator("position_timeout_ms")
    @classmethod
    def _positive_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("position_timeout_ms must be positive")
        return value

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> Settings:
        """
        Load settings from a YAML file.

        The YAML file values will override defaults but can still be
        overridden by CLI arguments.

        Parameters
        ----------
        yaml_path : Path
            Path to YAML configuration file

        Returns
        -------
        Settings
            Configured settings instance
        """
        if not yaml_path.exists():
            raise FileNotFoundError(f"Settings file not found: {yaml_path}")

        with yaml_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        if not isinstance(data, dict):
            raise ValueError("Settings YAML must contain a mapping at the root")

        return cls(**data)

    def merge_overrides(self, overrides: Dict[str, Any]) -> Settings:
        """
        Create a new Settings instance with specific values overridden.

        Overrides are validated, so CLI strings are coerced exactly as
        environment values would be.
        """
        overrides = overrides or {}
        if not overrides:
            return self

        merged = self.model_dump()
        merged.update(overrides)
        return type(self).model_validate(merged)

    def resolved_log_file(self) -> Path:
        return self.log_file or self.data_root / "logs" / "address_finder.log"

    def masked_dump(self) -> Dict[str, Any]:
        """Dump settings for display with secrets hidden."""
        payload = self.model_dump(mode="json")
        if payload.get("llm_api_key"):
            payload["llm_api_key"] = "***"
        return payload


def load_settings(
    yaml_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    env_file: Optional[Path] = None,
) -> Settings:
    """
    Load settings with proper precedence handling.

    Precedence order (highest to lowest):
    1. Overrides (typically from CLI args)
    2. YAML config file
    3. Environment variables
    4. Defaults

    Parameters
    ----------
    yaml_path : Path, optional
        Path to YAML configuration file
    overrides : dict, optional
        Dictionary of override values (typically from CLI)
    env_file : Path, optional
        Extra environment file loaded before reading environment variables.
        Variables already set in the process environment are kept.

    Returns
    -------
    Settings
        Configured settings instance
    """
    if env_file is not None:
        load_dotenv(env_file)

    settings = Settings()

    if yaml_path is not None:
        yaml_settings = Settings.from_yaml(yaml_path)
        settings = settings.merge_overrides(
            yaml_settings.model_dump(exclude_unset=True)
        )

    if overrides:
        settings = settings.merge_overrides(overrides)

    return settings


__all__ = ["PositioningProviderName", "Settings", "load_settings"]
