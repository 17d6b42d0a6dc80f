"""
Backend configuration.

Values come from the process environment, optionally pre-loaded from
``backend/.env``. The kernel itself takes plain constructor arguments.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

_BACKEND_DIR = os.path.dirname(os.path.abspath(__file__))

env_path = os.path.join(_BACKEND_DIR, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)

DEFAULT_SEED_FILE = os.path.join(_BACKEND_DIR, "sample_org.json")


@dataclass(frozen=True)
class Settings:
    frontend_url: str
    seed_file: str
    max_history: Optional[int]
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment. 0 / empty max history = unbounded."""
    raw_max = os.environ.get("ORGCHART_MAX_HISTORY", "").strip()
    try:
        max_history = int(raw_max) if raw_max else 0
    except ValueError as exc:
        raise ValueError(
            f"ORGCHART_MAX_HISTORY must be an integer, got {raw_max!r}"
        ) from exc

    return Settings(
        frontend_url=os.environ.get("FRONTEND_URL", "http://localhost:3000"),
        seed_file=os.environ.get("ORGCHART_SEED_FILE", DEFAULT_SEED_FILE),
        max_history=max_history if max_history > 0 else None,
        log_level=os.environ.get("ORGCHART_LOG_LEVEL", "INFO").upper(),
    )
