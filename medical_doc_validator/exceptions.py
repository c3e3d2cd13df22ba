"""
Custom exception hierarchy for medical document validation.

Each exception type maps to one failure category of a validation call.
None of them escape the public entry points: the client converts every
failure into a negative ValidationResult, using the message as the reason.
"""

from __future__ import annotations


class DocumentValidationError(Exception):
    """Base exception for all medical document validation failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DocumentValidationError):
    """The model credential is not configured."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("CONFIGURATION_MISSING", message, details)


class DocumentReadError(DocumentValidationError):
    """The uploaded document could not be read from disk."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("DOCUMENT_UNREADABLE", message, details)


class TransportError(DocumentValidationError):
    """The external model could not be reached or returned nothing."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("MODEL_TRANSPORT_FAILED", message, details)


class MalformedResponseError(DocumentValidationError):
    """The model's reply is not a parseable JSON object."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("MALFORMED_MODEL_RESPONSE", message, details)
