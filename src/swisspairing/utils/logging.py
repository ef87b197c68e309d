"""Logging utilities."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from swisspairing.constants import ENV_LOG_FILE, ENV_LOG_LEVEL

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"


def _resolve_level(level: Optional[str]) -> int:
    """Map a level name to a logging level, falling back to INFO."""
    if not level:
        return logging.INFO
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


# --- Logging Setup ---
def setup_logger(logger_name: str, level: Optional[str] = None) -> logging.Logger:
    """Set up logger for a python module.

    Sets up a console handler and, when ``SWISSPAIRING_LOG_FILE`` is set,
    a rotating file handler.

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic
    level : str, optional
        Level name overriding ``SWISSPAIRING_LOG_LEVEL``

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(_resolve_level(level or os.environ.get(ENV_LOG_LEVEL)))
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    file_handler = None
    log_path = os.environ.get(ENV_LOG_FILE)
    if log_path:
        log_folder = os.path.dirname(os.path.abspath(log_path))
        try:
            os.makedirs(log_folder, exist_ok=True)
            # Use RotatingFileHandler to prevent unbounded log growth
            file_handler = RotatingFileHandler(
                log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(log_formatter)
        except OSError as e:
            print(f"Warning: could not open log file {log_path}: {e}", file=sys.stderr)
            file_handler = None

    # Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    lgr.addHandler(console_handler)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr


def set_package_level(level: str) -> None:
    """Change the level of every logger already created under the package."""
    resolved = _resolve_level(level)
    for name, lgr in logging.root.manager.loggerDict.items():
        if name.startswith("swisspairing") and isinstance(lgr, logging.Logger):
            lgr.setLevel(resolved)
