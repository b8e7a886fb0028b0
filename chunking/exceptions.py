"""
Custom Exceptions for the Token Chunking Pipeline.

Exception Hierarchy:
    ChunkingError (base)
    ├── ConfigurationError
    │   └── TokenizerNotFoundError
    └── TokenizationError

Usage:
    from chunking.exceptions import ChunkingError, ConfigurationError

    try:
        chunks = splitter.split_text(text)
    except ConfigurationError as e:
        print(f"Bad splitter config: {e}")
    except ChunkingError as e:
        print(f"Splitting failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class ChunkingError(Exception):
    """
    Base exception for all errors raised while splitting text.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
        stage: Pipeline stage the error belongs to ("split")
    """

    stage = "split"

    def __init__(
        self,
        message: str = "A chunking error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(ChunkingError, ValueError):
    """
    Raised when the splitter configuration cannot produce chunks.

    This covers an overlap that is not smaller than the chunk size and
    a config that names neither a model nor an encoding.
    """

    def __init__(
        self,
        message: str = "Invalid splitter configuration",
        details: Optional[str] = None,
    ):
        super().__init__(message, details)


class TokenizerNotFoundError(ConfigurationError):
    """
    Raised when a model or encoding name does not resolve to a tokenizer.

    Attributes:
        name: The model or encoding name that was looked up
        kind: "model" or "encoding"
        original_error: The underlying lookup error, if any
    """

    def __init__(
        self,
        name: str,
        kind: str,
        original_error: Optional[Exception] = None,
    ):
        self.name = name
        self.kind = kind
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(f"No tokenizer found for {kind} '{name}'", details)


# =============================================================================
# TOKENIZATION ERRORS
# =============================================================================


class TokenizationError(ChunkingError):
    """
    Raised when the tokenizer rejects the input text.

    The usual cause is a special token (e.g. "<|endoftext|>") that the
    config lists as disallowed.
    """

    def __init__(
        self,
        message: str = "Failed to encode text",
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message, details)
