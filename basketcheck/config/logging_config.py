# basketcheck/config/logging_config.py

"""Logging for one basketcheck invocation.

Every command writes a ``logs/run_<timestamp>.log`` file at DEBUG; only
the newest ``Settings.LOG_KEEP_RUNS`` of those are kept. The terminal
gets warnings, or INFO and up with ``--verbose``.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from basketcheck.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | "
    "%(message)s"
)
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _prune_old_logs(logs_dir: Path, keep: int) -> int:
    """Delete all but the *keep* newest run logs; return how many went."""
    runs = sorted(logs_dir.glob("run_*.log"), reverse=True)
    removed = 0
    for stale in runs[keep:]:
        try:
            stale.unlink()
        except OSError:
            continue
        removed += 1
    return removed


def setup_logging(verbose: bool = False) -> Path:
    """Attach file and stderr handlers to the ``basketcheck`` logger.

    Calling it again only adjusts the console level, so tests and
    embedding code never stack handlers. Returns the run's log file.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger("basketcheck")
    root_logger.setLevel(logging.DEBUG)
    console_level = logging.INFO if verbose else logging.WARNING

    existing: Path | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            existing = Path(handler.baseFilename)
        elif isinstance(handler, logging.StreamHandler):
            handler.setLevel(console_level)
    if existing is not None:
        return existing

    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"
    # Prune before opening so the new file is never a candidate
    removed = _prune_old_logs(logs_dir, max(Settings.LOG_KEEP_RUNS - 1, 0))

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.debug(
        "Run log %s (pruned %d older run logs)", log_file, removed,
    )
    return log_file
