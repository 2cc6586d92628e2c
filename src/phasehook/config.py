"""Settings management.

- Path settings: get_*() methods (computed against the cwd at call time)
- Everything else: class attributes (evaluated at module import)
"""

import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when settings are missing or inconsistent."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        message = f"Invalid phasehook configuration: {'; '.join(problems)}"
        super().__init__(message)


def _get_path(env_var: str, default_subdir: str) -> str:
    """Return the env value, or a path under the current directory."""
    env_value = os.getenv(env_var)
    if env_value:
        return env_value
    return str(Path.cwd() / default_subdir)


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() == "true"


def _parse_list(value: str | None, default: List[str]) -> List[str]:
    """Split a comma separated value, dropping blanks."""
    if value is None or value.strip() == "":
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """phasehook settings

    Access:
    - paths: get_*() methods (resolved at runtime against the cwd)
    - everything else: class attributes (resolved at module import)
    """

    # ========================================
    # Logging
    # ========================================
    DEBUG = _parse_bool(os.getenv("PHASEHOOK_DEBUG"), False)
    LOG_LEVEL = os.getenv("PHASEHOOK_LOG_LEVEL", "INFO").upper()

    # ========================================
    # Dispatch
    # ========================================
    DEFAULT_PHASES = _parse_list(os.getenv("PHASEHOOK_DEFAULT_PHASES"), ["main*"])

    # ========================================
    # Paths (resolved against the cwd at runtime)
    # ========================================
    @staticmethod
    def get_log_path() -> str:
        """Log directory"""
        return _get_path("PHASEHOOK_LOG_PATH", "logs")

    @staticmethod
    def get_namespaces_path() -> str:
        """Namespace registry (namespaces.yaml)"""
        return _get_path("PHASEHOOK_NAMESPACES_PATH", "namespaces.yaml")

    @staticmethod
    def get_plugins_path() -> str:
        """Plugin registry (plugins.yaml)"""
        return _get_path("PHASEHOOK_PLUGINS_PATH", "plugins.yaml")

    # ========================================
    # Validation
    # ========================================
    @classmethod
    def validate(cls) -> None:
        """Check settings for consistency.

        Raises:
            ConfigurationError: Listing every problem found.
        """
        problems = []

        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            problems.append(f"PHASEHOOK_LOG_LEVEL is not a logging level: {cls.LOG_LEVEL!r}")

        if not cls.DEFAULT_PHASES:
            problems.append("PHASEHOOK_DEFAULT_PHASES declares no phases")
        else:
            marked = [p for p in cls.DEFAULT_PHASES if p.endswith("*")]
            if len(marked) > 1:
                problems.append(
                    f"PHASEHOOK_DEFAULT_PHASES marks more than one default phase: {marked}"
                )

        if problems:
            raise ConfigurationError(problems)
