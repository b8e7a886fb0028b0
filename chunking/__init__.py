"""
Chunking Module - Token-window splitting for LLM and retrieval pipelines

Splits text into overlapping chunks whose size is measured in tokens of a
subword tokenizer (tiktoken by default), not in characters.

Quick Start:
    from chunking import TokenSplitter, TokenSplitterConfig

    splitter = TokenSplitter(TokenSplitterConfig(chunk_size=512, chunk_overlap=100))
    chunks = splitter.split_text(long_text)
    units = splitter.split_documents(pages)
"""

__version__ = "1.0.0"

from .token_splitter import TokenSplitter
from .service import ChunkingService
from .config import ChunkingServiceConfig
from .models import (
    DEFAULT_ENCODING_NAME,
    DEFAULT_MODEL_NAME,
    TextUnit,
    TokenSplitterConfig,
)
from .tokenizer import TiktokenTokenizer, Tokenizer, TokenizerRegistry, count_tokens
from .exceptions import (
    ChunkingError,
    ConfigurationError,
    TokenizationError,
    TokenizerNotFoundError,
)

__all__ = [
    "__version__",
    "TokenSplitter",
    "ChunkingService",
    "ChunkingServiceConfig",
    "DEFAULT_ENCODING_NAME",
    "DEFAULT_MODEL_NAME",
    "TextUnit",
    "TokenSplitterConfig",
    "TiktokenTokenizer",
    "Tokenizer",
    "TokenizerRegistry",
    "count_tokens",
    "ChunkingError",
    "ConfigurationError",
    "TokenizationError",
    "TokenizerNotFoundError",
]
