from typing import Any, Dict, Optional


class AdmissionError(Exception):
    """Base exception for the admission rule engine."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(AdmissionError):
    """
    Invalid rule configuration: out-of-range percentages, unknown rounding
    method, a filter without assignments, ...
    Raised while a rule is built, never while it is checked.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class DivisionBoundaryError(AdmissionError, ZeroDivisionError):
    """A percent was requested against a zero (or missing) reference value."""

    def __init__(self, message: str = "Cannot compute a percent of zero", details: Optional[Dict[str, Any]] = None):
        super().__init__("DIVISION_BOUNDARY_ERROR", message, details)


class MissingDataWarning(UserWarning):
    pass
