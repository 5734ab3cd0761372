# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Structured logging for the vault client.

Example:
    >>> from copilot_vault.log import create_logger
    >>> logger = create_logger(logger_type="stdout", level="DEBUG", name="vault")
    >>> logger.warning("request failed", address="https://vault-1:8200", status_code=503)
"""

from .factory import create_logger
from .logger import Logger
from .silent_logger import SilentLogger
from .stdout_logger import StdoutLogger

__all__ = [
    "Logger",
    "SilentLogger",
    "StdoutLogger",
    "create_logger",
]
