"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # Uploads
    UnsupportedFileError,
    FileTooLargeError,

    # Parser
    PdfExtractionError,
    ReferenceDataError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # Uploads
    "UnsupportedFileError",
    "FileTooLargeError",

    # Parser
    "PdfExtractionError",
    "ReferenceDataError",
]
