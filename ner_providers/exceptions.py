"""
Extraction Exception Hierarchy

Provides structured error classification for fallback decisions. Nothing
here is ever retried: every failure degrades to a simpler strategy.
"""
from enum import Enum
from typing import Optional


class ErrorSeverity(Enum):
    """Severity levels for extraction errors"""
    TRANSIENT = "transient"          # One document failed, next call may succeed
    CONFIGURATION = "configuration"  # Model artifacts missing or unloadable
    IO = "io"                        # Document could not be read


class ExtractionError(Exception):
    """
    Base class for extraction errors with fallback support

    Attributes:
        message: Human-readable error message
        severity: ErrorSeverity level
        provider_name: Name of the NER backend that failed, if any
        original_error: Original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.TRANSIENT,
        provider_name: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.provider_name = provider_name
        self.original_error = original_error

    def __str__(self):
        parts = [f"{self.severity.value.upper()}: {self.message}"]
        if self.provider_name:
            parts.append(f"(provider: {self.provider_name})")
        return " ".join(parts)


class ResourceUnavailableError(ExtractionError):
    """
    NER backend cannot be constructed; fallback for the extractor's lifetime

    Examples: model package not installed, corrupt weights, missing library
    """

    def __init__(self, message: str, provider_name: Optional[str] = None, original_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            severity=ErrorSeverity.CONFIGURATION,
            provider_name=provider_name,
            original_error=original_error
        )


class TransientExtractionError(ExtractionError):
    """
    NER backend raised while processing one document; fallback for that call only

    Examples: text longer than the model's max_length, tokenizer failure
    """

    def __init__(self, message: str, provider_name: Optional[str] = None, original_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            severity=ErrorSeverity.TRANSIENT,
            provider_name=provider_name,
            original_error=original_error
        )


class DocumentReadError(ExtractionError):
    """
    Document could not be read; the caller gets an empty result

    Examples: missing file, permission denied, undecodable bytes
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            severity=ErrorSeverity.IO,
            original_error=original_error
        )


def classify_error(error: Exception, provider_name: Optional[str] = None) -> ExtractionError:
    """
    Classify a backend exception into the appropriate ExtractionError subclass

    Args:
        error: Original exception to classify
        provider_name: Name of backend that raised the error

    Returns:
        ExtractionError subclass instance
    """
    if isinstance(error, ExtractionError):
        return error

    if isinstance(error, (ImportError, OSError)):
        return ResourceUnavailableError(
            f"Model resources unavailable: {error}",
            provider_name=provider_name,
            original_error=error
        )

    error_str = str(error).lower()
    resource_keywords = [
        "can't find model", "not a valid", "no such file",
        "does not appear to have", "not initialized", "not loaded"
    ]
    if any(keyword in error_str for keyword in resource_keywords):
        return ResourceUnavailableError(
            f"Model resources unavailable: {error}",
            provider_name=provider_name,
            original_error=error
        )

    return TransientExtractionError(
        f"NER processing failed: {error}",
        provider_name=provider_name,
        original_error=error
    )
