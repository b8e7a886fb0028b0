"""
Data Models for the Token Chunking Pipeline

Defines:
1. TextUnit - A piece of text with scalar metadata (a page or a chunk)
2. TokenSplitterConfig - Chunk size, overlap and tokenizer selection
3. Request/response models for the HTTP service

Design Principles:
- Pydantic v2 for validation and serialization
- TextUnits are frozen; metadata only grows through with_metadata()
- Defaults match a gpt-3.5-turbo / cl100k_base tokenizer

Usage:
    config = TokenSplitterConfig(chunk_size=256, chunk_overlap=32)
    splitter = TokenSplitter(config)
    units = splitter.split_documents([TextUnit(content="...", metadata={"page": 1})])
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigurationError

DEFAULT_MODEL_NAME = "gpt-3.5-turbo"
DEFAULT_ENCODING_NAME = "cl100k_base"

MetadataValue = Union[bool, int, float, str, None]


class TextUnit(BaseModel):
    """
    A piece of extracted or chunked text with positional metadata.

    The loader creates one per page, the splitter one per token window.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(
        "",
        description="Extracted or chunked text (may be empty)",
    )
    metadata: dict[str, MetadataValue] = Field(
        default_factory=dict,
        description="Scalar annotations such as page and total_pages",
    )

    def with_metadata(self, **extra: MetadataValue) -> "TextUnit":
        """
        Return a copy with additional metadata keys.

        Existing keys may be repeated with the same value but never
        overwritten with a different one.
        """
        conflicts = [
            key for key, value in extra.items()
            if key in self.metadata and self.metadata[key] != value
        ]
        if conflicts:
            raise ValueError(
                f"Metadata keys already set with different values: {sorted(conflicts)}"
            )
        merged = dict(self.metadata)
        merged.update(extra)
        return TextUnit(content=self.content, metadata=merged)


class TokenSplitterConfig(BaseModel):
    """
    Configuration for the token splitter.

    The tokenizer is resolved from model_name when set, otherwise from
    encoding_name. The literal "all" in allowed_special/disallowed_special
    stands for every special token of the encoding.
    """
    chunk_size: int = Field(
        512,
        description="Maximum tokens per chunk",
        ge=1,
    )
    chunk_overlap: int = Field(
        100,
        description="Tokens shared by consecutive chunks",
        ge=0,
    )
    model_name: Optional[str] = Field(
        DEFAULT_MODEL_NAME,
        description="Model whose tokenizer is used (takes precedence)",
    )
    encoding_name: Optional[str] = Field(
        DEFAULT_ENCODING_NAME,
        description="Encoding used when no model name is given",
    )
    allowed_special: set[str] = Field(
        default_factory=set,
        description="Special tokens encoded as their token ids",
    )
    disallowed_special: set[str] = Field(
        default_factory=lambda: {"all"},
        description="Special tokens that make encoding fail when present",
    )

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        # Raised as-is so direct construction surfaces ConfigurationError.
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )

    @property
    def step(self) -> int:
        """Number of tokens the window advances per chunk."""
        return self.chunk_size - self.chunk_overlap


# =============================================================================
# HTTP MODELS
# =============================================================================


class SplitRequest(BaseModel):
    text: str
    config: Optional[TokenSplitterConfig] = None


class ChunkOut(BaseModel):
    text: str
    token_count: int


class SplitResponse(BaseModel):
    chunks: list[ChunkOut] = Field(default_factory=list)
    total_chunks: int = 0


class SplitDocumentsRequest(BaseModel):
    units: list[TextUnit] = Field(default_factory=list)
    config: Optional[TokenSplitterConfig] = None


class SplitDocumentsResponse(BaseModel):
    units: list[TextUnit] = Field(default_factory=list)
    total_units: int = 0
