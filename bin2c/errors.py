"""
Exceptions raised by bin2c.

Library code raises these; only the command-line front end turns them into
messages and exit codes.
"""

import os
from typing import Optional


def printable_path(path: str) -> str:
    """Printable form of a path; undecodable file name bytes become \\xNN."""
    return os.fsencode(path).decode('utf-8', 'backslashreplace')


class Bin2CError(Exception):
    """Base class for all bin2c errors."""


class UsageError(Bin2CError):
    """Missing required argument or invalid flag value."""


class ConfigError(Bin2CError):
    """Invalid configuration value or combination of options."""

    INVALID_LINE_WIDTH = 'InvalidLineWidth'
    INCOMPATIBLE_OPTION = 'IncompatibleOption'
    INVALID_FORMAT = 'InvalidFormat'
    INVALID_NAME = 'InvalidName'
    INVALID_CONFIG_FILE = 'InvalidConfigFile'

    def __init__(self, message: str, kind: str = INVALID_CONFIG_FILE):
        super().__init__(message)
        self.kind = kind


class EncoderIOError(Bin2CError):
    """A file could not be opened for encoding."""

    action = 'accessing'

    def __init__(self, path: Optional[str], reason: str = ''):
        self.path = path
        self.reason = reason
        message = f"Failed to open file for {self.action}: {printable_path(path)}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ReadOpenFailed(EncoderIOError):
    action = 'reading'


class WriteOpenFailed(EncoderIOError):
    action = 'writing'
