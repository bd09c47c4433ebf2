"""
Custom exceptions for the Family Dashboard.
"""
from typing import Dict, Optional


class FamilyDashboardError(Exception):
    """Base exception class for all application-specific errors."""
    pass


class ValidationError(FamilyDashboardError):
    """Malformed input. ``errors`` maps each offending field to its message."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        super().__init__(message or "; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class AuthError(FamilyDashboardError):
    """Raised when the admin password does not match."""
    pass


class StorageParseError(FamilyDashboardError):
    """Raised when a persisted value is not valid JSON."""

    def __init__(self, key: str, detail: str = ""):
        self.key = key
        super().__init__(f"Corrupted value for key '{key}': {detail}" if detail else f"Corrupted value for key '{key}'")
