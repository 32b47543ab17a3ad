"""Custom exceptions for script and definition loading."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when a JSON file is missing, unreadable or not valid JSON."""


class DataValidationError(DataError):
    """Raised when JSON content does not have the expected structure."""


class DataReferenceError(DataError):
    """Raised when a definition references data that does not exist."""
