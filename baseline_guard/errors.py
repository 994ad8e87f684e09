"""
Error taxonomy for the compliance engine.

DataLoadError and ConfigError are fatal and escape to the caller.
ParseError and ProcessingError are per-file and are absorbed by the scanners.
"""


class BaselineGuardError(Exception):
    """Base class for all Baseline Guard errors."""


class DataLoadError(BaselineGuardError):
    """Feature dataset is missing or malformed."""


class ConfigError(BaselineGuardError):
    """Policy or browser target cannot be interpreted."""


class ParseError(BaselineGuardError):
    """A script file could not be parsed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"{file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason


class ProcessingError(BaselineGuardError):
    """A stylesheet could not be analyzed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"{file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason
