"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DB_FILENAME = "database.json"
DEFAULT_OUTPUT_DIRNAME = "output"
DEFAULT_LOG_LEVEL = "WARNING"


def _log_level(raw: str | None) -> str:
    level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Invalid METRICS_EDITOR_LOG_LEVEL: {raw}")
    return level


@dataclass(frozen=True)
class Settings:
    db_path: Path
    output_dir: Path
    log_level: str


def load_settings(cwd: Path | None = None) -> Settings:
    base = cwd or Path.cwd()
    db_raw = os.getenv("METRICS_EDITOR_DB_PATH")
    output_raw = os.getenv("METRICS_EDITOR_OUTPUT_DIR")
    return Settings(
        db_path=Path(db_raw) if db_raw else base / DEFAULT_DB_FILENAME,
        output_dir=Path(output_raw) if output_raw else base / DEFAULT_OUTPUT_DIRNAME,
        log_level=_log_level(os.getenv("METRICS_EDITOR_LOG_LEVEL")),
    )
