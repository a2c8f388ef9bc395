"""
Custom exception classes for the application.

Errors raised by the parsing engine never escape a parse call; these
types cover the adapters around it (uploads, PDF extraction, reference
data loading) and are rendered by the API error handler.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PDF_EXTRACTION_ERROR")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# UPLOAD ERRORS
# ===================

class UnsupportedFileError(ValidationError):
    """Uploaded file cannot be converted to a packing list document."""

    def __init__(self, filename: Optional[str], reason: str):
        super().__init__(
            code="UNSUPPORTED_FILE",
            message=f"Cannot read packing list: {reason}",
            details={"filename": filename}
        )


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            code="FILE_TOO_LARGE",
            message="Packing list exceeds the maximum upload size",
            details={"size": size, "limit": limit}
        )


# ===================
# PARSER ERRORS
# ===================

class PdfExtractionError(AppError):
    """PDF text extraction failed for the whole document."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="PDF_EXTRACTION_ERROR",
            message=message,
            status_code=422,
            details=details
        )


class ReferenceDataError(AppError):
    """Reference data (ISO codes, ineligible items) could not be loaded."""

    def __init__(
        self,
        source: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="REFERENCE_DATA_ERROR",
            message=f"Failed to load {source}: {message}",
            status_code=500,
            details={"source": source, **(details or {})}
        )
