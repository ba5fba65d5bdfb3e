"""Terminal and log file configuration for analysis runs.

Two separate settings:

- ``-v`` / ``--verbose`` sets the level of the **terminal** handler on
  stderr.  Default: WARNING.
- ``PROFILE_BIGRAMS_LOG_LEVEL`` sets the level of the **log file** at
  ``<output_dir>/.profile_bigrams/analysis.log``.  Default: INFO.

Neither affects the other, so a quiet run still leaves a full record of
row counts and skipped charts on disk.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Log directory and file, created under the output directory
_LOG_DIRNAME = ".profile_bigrams"
_LOG_FILENAME = "analysis.log"

# Rotate at 2 MB, keeping two old files
_MAX_BYTES = 2 * 1024 * 1024
_BACKUP_COUNT = 2

# matplotlib logs font discovery at DEBUG
_NOISY_LOGGERS = ("matplotlib", "PIL")


def _parse_log_level(level_str: str) -> int:
    """Turn a level name into a logging constant.

    Accepts DEBUG, INFO, WARNING, ERROR and CRITICAL in any case.
    Unknown names give INFO.
    """
    numeric = getattr(logging, level_str.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def setup_logging(*, output_dir: Path | None = None, verbose: bool = False) -> None:
    """Install the terminal handler and, optionally, the rotating log file.

    Safe to call more than once: handlers from an earlier call are closed
    and replaced.

    Args:
        output_dir: Directory the run writes its tables and charts to.  The
            log file goes in its ``.profile_bigrams/`` subdirectory.  With
            ``None`` only the terminal handler is installed.
        verbose: Show DEBUG messages on the terminal instead of only
            WARNING and above.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    # Handlers do the filtering
    root.setLevel(logging.DEBUG)

    # ── Terminal handler ───────────────────────────────────────────
    terminal = logging.StreamHandler()
    terminal.setLevel(logging.DEBUG if verbose else logging.WARNING)
    terminal.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
    root.addHandler(terminal)

    # ── Log file handler ───────────────────────────────────────────
    if output_dir is not None:
        log_dir = Path(output_dir) / _LOG_DIRNAME
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / _LOG_FILENAME,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(_parse_log_level(os.environ.get("PROFILE_BIGRAMS_LOG_LEVEL", "INFO")))
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(file_handler)

    # ── Quiet third-party loggers ──────────────────────────────────
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
