"""
Custom Exceptions for PDF Loading.

This module defines a hierarchy of exceptions for precise error handling
when turning a PDF byte stream into per-page TextUnits.

Exception Hierarchy:
    LoaderError (base)
    ├── SourceReadError
    │   └── DocumentNotFoundError
    └── DocumentDecodeError
        ├── PasswordError
        │   └── CredentialReuseError
        └── PageDecodeError

Usage:
    from pdf_loader.exceptions import LoaderError, PageDecodeError

    try:
        pages = loader.load()
    except PageDecodeError as e:
        print(f"Page {e.page_number} could not be decoded: {e}")
    except LoaderError as e:
        print(f"Loading failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class LoaderError(Exception):
    """
    Base exception for all loading-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
        stage: Pipeline stage the error belongs to ("load")
    """

    stage = "load"

    def __init__(
        self,
        message: str = "A loading error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SourceReadError(LoaderError):
    """
    Raised when the byte stream cannot be fully read into memory.

    Attributes:
        original_error: The underlying I/O error (optional)
    """

    def __init__(
        self,
        message: str = "Failed to read document source",
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message, details)


class DocumentNotFoundError(SourceReadError):
    """
    Raised when the PDF file cannot be found.

    Attributes:
        path: Path to the missing file
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"PDF file not found: {path}")


# =============================================================================
# DECODE ERRORS
# =============================================================================


class DocumentDecodeError(LoaderError):
    """
    Raised when the document container cannot be parsed.

    Attributes:
        original_error: The underlying error from the PDF library
    """

    def __init__(
        self,
        message: str = "PDF data is corrupted or unreadable",
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message, details)


class PasswordError(DocumentDecodeError):
    """Raised when an encrypted PDF cannot be opened with the given password."""

    def __init__(self, message: str = "PDF is encrypted and the password was rejected"):
        super().__init__(message)


class CredentialReuseError(PasswordError):
    """
    Raised when a single-use password is requested a second time.

    A loader consumes its password on the first decode of an encrypted
    document; later decodes need a fresh loader.
    """

    def __init__(self) -> None:
        super().__init__("Password was already used; supply it again with a new loader")


class PageDecodeError(DocumentDecodeError):
    """
    Raised when the text of a single page cannot be extracted.

    Attributes:
        page_number: The page that failed (1-indexed)
    """

    def __init__(
        self,
        page_number: int,
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.page_number = page_number
        msg = message or f"Failed to extract text from page {page_number}"
        super().__init__(msg, original_error)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None):
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
