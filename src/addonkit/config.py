"""
Configuration - hook registry settings

Values come from the environment, optionally seeded from a .env file.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .hooks import DuplicatePolicy

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class HookSettings:
    """Hook registry settings"""
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.APPEND
    log_level: str = "INFO"
    log_file: str = ""
    configure_logging: bool = False

    @property
    def log_path(self) -> Optional[Path]:
        return Path(self.log_file) if self.log_file else None


def load_settings(env_file: Optional[Union[str, Path]] = None) -> HookSettings:
    """
    Load settings from the environment

    Args:
        env_file: .env file to load first; defaults to ./.env. Variables
            already present in the environment are not overridden; empty values
            count as unset.

    Returns:
        HookSettings: parsed settings
    """
    load_dotenv(env_file or Path.cwd() / ".env")

    return HookSettings(
        duplicate_policy=DuplicatePolicy.parse(os.getenv("ADDON_HOOK_POLICY") or "append"),
        log_level=(os.getenv("ADDON_LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("ADDON_LOG_FILE", ""),
        configure_logging=(os.getenv("ADDON_CONFIGURE_LOGGING") or "false").lower() in _TRUE_VALUES,
    )
