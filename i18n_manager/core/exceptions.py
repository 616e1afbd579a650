"""
Exception hierarchy for i18n Manager.

Batch precondition failures are fatal and raised before any network call.
Malformed documents are reported at ingestion and skipped there. Per-key
translation failures are never raised: providers return an Err result instead.
"""

from typing import Optional, Dict, Any


class I18nManagerError(Exception):
    """Base exception for all i18n Manager errors.

    Attributes:
        message: Human-readable error message
        context: Additional context about the error
        recoverable: Whether the error can potentially be recovered from
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}: {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base += f" (context: {context_str})"
        return base


# ============================================================================
# Document errors
# ============================================================================

class MalformedInputError(I18nManagerError):
    """Raised when a document cannot be parsed or exceeds the depth guard.

    Recovered at ingestion: the offending document is skipped.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context, recoverable=True)


# ============================================================================
# Batch precondition errors
# ============================================================================

class ValidationError(I18nManagerError):
    """Base exception for batch preconditions. The batch does not start."""
    pass


class MissingCredentialError(ValidationError):
    """Raised when no API key is available for the selected service."""

    def __init__(self, message: str = "API Key is required", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


class MissingSourceLanguageError(ValidationError):
    """Raised when the source language is unset or not loaded."""

    def __init__(self, message: str = "Source language is required", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


class MissingTargetLanguageError(ValidationError):
    """Raised when no target language is given, or one is not loaded."""

    def __init__(self, message: str = "Target language is required", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


class EmptyJobError(ValidationError):
    """Raised when a job has no string item to translate."""

    def __init__(self, message: str = "No missing translations found", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


# ============================================================================
# Provider configuration errors
# ============================================================================

class UnknownServiceError(I18nManagerError):
    """Raised when a service identifier names no known provider."""
    pass
