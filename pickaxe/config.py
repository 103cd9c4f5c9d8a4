"""
pickaxe/config.py

Runtime settings read from the environment.

    PICKAXE_LOG_LEVEL   root log level name (default INFO)
    PICKAXE_LOG_FILE    optional path of an additional log file
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.INFO
    log_file: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Unknown level names fall back to INFO rather than failing start-up.
        """
        env = os.environ if environ is None else environ

        level_name = env.get("PICKAXE_LOG_LEVEL", "INFO").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO

        log_file = env.get("PICKAXE_LOG_FILE") or None
        return cls(log_level=level, log_file=Path(log_file) if log_file else None)
