"""Shared utilities for Swiss Pairing."""

from swisspairing.utils.logging import LOG_FMT, set_package_level, setup_logger

__all__ = ["LOG_FMT", "set_package_level", "setup_logger"]
