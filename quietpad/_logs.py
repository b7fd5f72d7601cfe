"""Every Quietpad process logs everything to a new file in the log directory.

Only warnings and errors are shown on stderr, unless ``--verbose`` or
``--verbose-logger`` is given.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import TextIO

import quietpad
from quietpad import dirs

log = logging.getLogger(__name__)

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"
_MAX_AGE = timedelta(days=7)


def _delete_old_log_files() -> None:
    for path in sorted(Path(dirs.user_log_dir).glob("*.txt")):
        # file names are <timestamp>.txt or <timestamp>_<number>.txt
        timestamp = path.stem.partition("_")[0]
        try:
            created = datetime.strptime(timestamp, _TIMESTAMP_FORMAT)
        except ValueError:
            log.info(f"not a log file, leaving it alone: {path}")
            continue

        if datetime.now() - created > _MAX_AGE:
            log.info(f"deleting old log file: {path}")
            path.unlink()


def _create_log_file() -> TextIO:
    log_dir = Path(dirs.user_log_dir)
    timestamp = datetime.now().strftime(_TIMESTAMP_FORMAT)

    # Many Quietpads can start during the same second
    number = 0
    while True:
        name = f"{timestamp}.txt" if number == 0 else f"{timestamp}_{number}.txt"
        try:
            return (log_dir / name).open("x", encoding="utf-8")
        except FileExistsError:
            number += 1


class _VerboseLoggersFilter(logging.Filter):
    """Let through warnings, errors and everything from the given loggers."""

    def __init__(self, logger_names: list[str]) -> None:
        super().__init__()
        self._logger_filters = [logging.Filter(name) for name in logger_names]

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.WARNING:
            return True
        return any(logger_filter.filter(record) for logger_filter in self._logger_filters)


def setup(verbose: bool, verbose_loggers: list[str]) -> None:
    log_file = _create_log_file()
    print(f"log file: {log_file.name}")

    file_handler = logging.StreamHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(name)s %(levelname)s: %(message)s")
    )
    handlers: list[logging.Handler] = [file_handler]

    # sys.stderr is None when running with pythonw.exe
    if sys.stderr is not None:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter("%(name)s %(levelname)s: %(message)s"))
        if verbose:
            stderr_handler.setLevel(logging.DEBUG)
        elif verbose_loggers:
            stderr_handler.setLevel(logging.DEBUG)
            stderr_handler.addFilter(_VerboseLoggersFilter(verbose_loggers))
        else:
            stderr_handler.setLevel(logging.WARNING)
        handlers.append(stderr_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers)

    log.debug(f"Quietpad {quietpad.__version__}, PID {os.getpid()}")
    log.debug(f"Python {sys.version.split()[0]} at {sys.executable!r}, platform {sys.platform!r}")

    try:
        _delete_old_log_files()
    except OSError:
        log.exception("deleting old log files failed")
