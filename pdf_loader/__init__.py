"""
PDF Loader - Per-page plain-text extraction from PDF byte streams

Reads a (possibly password-protected) PDF and returns one TextUnit per page
with "page" and "total_pages" metadata. Pages can be handed straight to the
token splitter from the chunking package.

Quick Start:
    from pdf_loader import PDFLoader, LoaderConfig
    from chunking import TokenSplitter, TokenSplitterConfig

    with open("document.pdf", "rb") as fh:
        pages = PDFLoader(fh).load()

    loader = PDFLoader(pdf_bytes, config=LoaderConfig(password="secret"))
    chunks = loader.load_and_split(TokenSplitter(TokenSplitterConfig(chunk_size=256)))
"""

__version__ = "1.0.0"

# Main loader class
from .loader import PDFLoader
from .service import LoaderService
from .config import LoaderServiceConfig

# Data models
from .models import LoaderConfig, SingleUsePassword

# Collaborators
from .decoder import DocumentDecoder, PyMuPDFDecoder, ResolvedFont
from .source import BufferedReaderAt

# Exceptions
from .exceptions import (
    LoaderError,
    SourceReadError,
    DocumentNotFoundError,
    DocumentDecodeError,
    PasswordError,
    CredentialReuseError,
    PageDecodeError,
    format_error_chain,
)

__all__ = [
    # Version
    "__version__",
    # Main class
    "PDFLoader",
    "LoaderService",
    "LoaderServiceConfig",
    # Models
    "LoaderConfig",
    "SingleUsePassword",
    # Collaborators
    "DocumentDecoder",
    "PyMuPDFDecoder",
    "ResolvedFont",
    "BufferedReaderAt",
    # Exceptions
    "LoaderError",
    "SourceReadError",
    "DocumentNotFoundError",
    "DocumentDecodeError",
    "PasswordError",
    "CredentialReuseError",
    "PageDecodeError",
    "format_error_chain",
]
