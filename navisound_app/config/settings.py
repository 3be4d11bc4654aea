"""
Basic settings and logging configuration for the NaviSound sounding tools.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

DATA_DIR_ENV = "NAVISOUND_DATA_DIR"
LOG_LEVEL_ENV = "NAVISOUND_LOG_LEVEL"
CALIBRATION_FILENAME = "calibration.xlsx"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _get_resource_root() -> Path:

    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parents[2]


def _get_user_data_dir(resource_root: Path) -> Path:

    override = os.environ.get(DATA_DIR_ENV, "").strip()
    if override:
        return Path(override)
    if getattr(sys, "frozen", False):
        exe_path = Path(getattr(sys, "executable", resource_root))
        return exe_path.parent / "navisound_data"
    return resource_root / "navisound_data"


@dataclass(slots=True)
class Settings:
    """Application-level settings."""

    project_root: Path
    data_dir: Path
    log_path: Path
    calibration_path: Path | None = None
    log_level: int = logging.INFO

    @classmethod
    def default(cls) -> "Settings":
        resource_root = _get_resource_root()
        data_dir = _get_user_data_dir(resource_root)
        data_dir.mkdir(parents=True, exist_ok=True)

        # Calibration workbook is optional; the reference vessel ships without tables.
        calibration_path = data_dir / CALIBRATION_FILENAME
        if not calibration_path.exists():
            calibration_path = None

        level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            log_level = logging.INFO

        return cls(
            project_root=resource_root,
            data_dir=data_dir,
            log_path=data_dir / "navisound.log",
            calibration_path=calibration_path,
            log_level=log_level,
        )


def init_logging(settings: Settings, console: bool = False) -> None:
    """Configure logging to the data-directory log file and optionally stderr."""
    handlers: list[logging.Handler] = [
        logging.FileHandler(settings.log_path, encoding="utf-8"),
    ]
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    logging.getLogger(__name__).info("Logging initialized. Data dir at %s", settings.data_dir)
