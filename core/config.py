"""
Configuration management for Veo Studio.

Centralizes all configuration including:
- Gemini API key
- Veo model selection
- Poll loop timing and bounds
- Input defaults and output location
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _first_env(*names: str, default: str = "") -> str:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


@dataclass
class APIConfig:
    """API configuration for the Gemini / Veo service."""

    # GEMINI_API_KEY first, API_KEY is what the AI Studio host injects
    google_api_key: str = field(
        default_factory=lambda: _first_env("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")
    )


@dataclass
class ModelConfig:
    """Model selection configuration."""

    # veo-3.0-generate-preview also works with the same request shape
    video_model: str = field(default_factory=lambda: os.getenv("VEO_MODEL", "veo-2.0-generate-001"))
    image_mime_type: str = "image/png"
    number_of_videos: int = 1


@dataclass
class PollingConfig:
    """Status poll loop settings. None means unbounded.

    timeout_seconds is measured from the first status check, so the wait
    before it adds one interval. A single status call that hangs is not
    interrupted by it.
    """

    interval_seconds: float = field(
        default_factory=lambda: float(os.getenv("VEO_POLL_INTERVAL", "1.0"))
    )
    max_polls: Optional[int] = field(default_factory=lambda: _optional_int("VEO_MAX_POLLS"))
    timeout_seconds: Optional[float] = field(
        default_factory=lambda: _optional_float("VEO_POLL_TIMEOUT")
    )


@dataclass
class InputDefaults:
    """Initial form values."""
    duration_seconds: int = 5
    aspect_ratio: str = "1:1"


@dataclass
class OutputConfig:
    """Where downloaded videos are written."""
    output_dir: str = field(default_factory=lambda: os.getenv("VEO_OUTPUT_DIR", "output"))


@dataclass
class DownloadConfig:
    timeout_seconds: float = 300.0


@dataclass
class Config:
    """Main configuration class."""

    api: APIConfig = field(default_factory=APIConfig)
    models: ModelConfig = field(default_factory=ModelConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    inputs: InputDefaults = field(default_factory=InputDefaults)
    output: OutputConfig = field(default_factory=OutputConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration and return list of issues."""
        issues = []

        if not self.api.google_api_key:
            issues.append("No Gemini API key configured (GEMINI_API_KEY or API_KEY required)")

        if self.polling.interval_seconds < 0:
            issues.append("VEO_POLL_INTERVAL must not be negative")

        if self.polling.max_polls is not None and self.polling.max_polls < 1:
            issues.append("VEO_MAX_POLLS must be at least 1 when set")

        if self.models.number_of_videos < 1:
            issues.append("number_of_videos must be at least 1")

        return issues


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reload_config():
    """Reload configuration from environment."""
    global _config
    _config = Config.from_env()
