"""Configuration management for react-no-manual-memo.

Loads environment variables (optionally from a .env file) and provides
centralized config access. Command line options take precedence.
"""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

__version__ = "1.0.0"

PACKAGE_NAME = "react-no-manual-memo"


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_path: Optional[Path] = None):
        """Load a .env file, by default from the current working directory."""
        load_dotenv(env_path or Path.cwd() / ".env")

    @property
    def preset(self) -> str:
        """Preset used when --preset is not given.

        Returns:
            'recommended' unless NO_MANUAL_MEMO_PRESET says otherwise
        """
        return os.getenv("NO_MANUAL_MEMO_PRESET", "recommended")

    @property
    def output_format(self) -> str:
        """Default report format ('text' or 'json')."""
        return os.getenv("NO_MANUAL_MEMO_FORMAT", "text")

    @property
    def max_fix_passes(self) -> int:
        """How many lint-and-fix rounds --fix may run.

        Raises:
            ValueError: If NO_MANUAL_MEMO_MAX_FIX_PASSES is not a positive integer
        """
        raw = os.getenv("NO_MANUAL_MEMO_MAX_FIX_PASSES", "10")
        try:
            passes = int(raw)
        except ValueError:
            raise ValueError(f"NO_MANUAL_MEMO_MAX_FIX_PASSES must be an integer, got {raw!r}") from None
        if passes < 1:
            raise ValueError(f"NO_MANUAL_MEMO_MAX_FIX_PASSES must be at least 1, got {passes}")
        return passes


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
