"""
Tokenizer Registry for the Chunking Pipeline

Chunk sizes are measured in tokens of a subword tokenizer. The splitter
never talks to tiktoken directly; it asks a TokenizerRegistry for a
Tokenizer by model name or encoding name and only uses encode/decode.

Lookup order for both entry points:
1. Factories registered on the registry instance (e.g. custom or test
   tokenizers).
2. tiktoken's built-in model table / encodings.

Usage:
    from chunking.tokenizer import TokenizerRegistry, count_tokens

    registry = TokenizerRegistry()
    tokenizer = registry.resolve_by_encoding("cl100k_base")
    ids = tokenizer.encode("Hello world", set(), {"all"})
    text = tokenizer.decode(ids)
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Callable, Optional, Protocol, Sequence, Union

import tiktoken

from .exceptions import ConfigurationError, TokenizationError, TokenizerNotFoundError
from .models import DEFAULT_ENCODING_NAME, TokenSplitterConfig

logger = logging.getLogger(__name__)

ALL_SPECIAL = "all"


class Tokenizer(Protocol):
    """Encode text to token ids and decode token ids back to text."""

    def encode(
        self,
        text: str,
        allowed_special: AbstractSet[str],
        disallowed_special: AbstractSet[str],
    ) -> list[int]:
        ...

    def decode(self, ids: Sequence[int]) -> str:
        ...


TokenizerFactory = Callable[[], Tokenizer]


def _special_arg(tokens: AbstractSet[str]) -> Union[str, frozenset[str]]:
    """Translate a special-token set into tiktoken's argument form."""
    if ALL_SPECIAL in tokens:
        return ALL_SPECIAL
    return frozenset(tokens)


class TiktokenTokenizer:
    """Tokenizer backed by a tiktoken encoding."""

    def __init__(self, encoding: tiktoken.Encoding):
        self.encoding = encoding

    @property
    def name(self) -> str:
        return self.encoding.name

    def encode(
        self,
        text: str,
        allowed_special: AbstractSet[str] = frozenset(),
        disallowed_special: AbstractSet[str] = frozenset({ALL_SPECIAL}),
    ) -> list[int]:
        try:
            return self.encoding.encode(
                text,
                allowed_special=_special_arg(allowed_special),
                disallowed_special=_special_arg(disallowed_special),
            )
        except ValueError as e:
            raise TokenizationError(
                f"Encoding '{self.name}' rejected the input text", e
            ) from e

    def decode(self, ids: Sequence[int]) -> str:
        return self.encoding.decode(list(ids))

    def __repr__(self) -> str:
        return f"TiktokenTokenizer({self.name!r})"


class TokenizerRegistry:
    """
    Resolves tokenizers by model name or encoding name.

    Each registry keeps its own factory tables; there is no shared
    module-level registry.
    """

    def __init__(self) -> None:
        self._models: dict[str, TokenizerFactory] = {}
        self._encodings: dict[str, TokenizerFactory] = {}

    def register_model(self, name: str, factory: TokenizerFactory) -> None:
        self._models[name] = factory

    def register_encoding(self, name: str, factory: TokenizerFactory) -> None:
        self._encodings[name] = factory

    def resolve_by_model(self, name: str) -> Tokenizer:
        """
        Get the tokenizer used by a model.

        Raises:
            TokenizerNotFoundError: If the model is unknown
        """
        if name in self._models:
            return self._models[name]()
        try:
            encoding = tiktoken.encoding_for_model(name)
        except KeyError as e:
            raise TokenizerNotFoundError(name, "model", e) from e
        logger.debug(f"Model '{name}' uses encoding '{encoding.name}'")
        return TiktokenTokenizer(encoding)

    def resolve_by_encoding(self, name: str) -> Tokenizer:
        """
        Get a tokenizer by encoding name.

        Raises:
            TokenizerNotFoundError: If the encoding is unknown
        """
        if name in self._encodings:
            return self._encodings[name]()
        try:
            encoding = tiktoken.get_encoding(name)
        except ValueError as e:
            raise TokenizerNotFoundError(name, "encoding", e) from e
        return TiktokenTokenizer(encoding)

    def resolve(self, config: TokenSplitterConfig) -> Tokenizer:
        """
        Resolve the tokenizer a splitter config asks for.

        The model name wins when both names are set; a model name that does
        not resolve is an error, not a reason to fall back to the encoding.
        """
        if config.model_name:
            return self.resolve_by_model(config.model_name)
        if config.encoding_name:
            return self.resolve_by_encoding(config.encoding_name)
        raise ConfigurationError("Must have either a model name or an encoding name")


def count_tokens(
    text: str,
    tokenizer: Optional[Tokenizer] = None,
    allowed_special: AbstractSet[str] = frozenset(),
    disallowed_special: AbstractSet[str] = frozenset(),
) -> int:
    """
    Count the number of tokens in a text string.

    Args:
        text: The text to tokenize.
        tokenizer: Tokenizer to count with (default: cl100k_base).
        allowed_special: Special tokens counted as single tokens.
        disallowed_special: Special tokens that make counting fail.

    Returns:
        Number of tokens. With the default empty sets, special-token text
        is counted as plain text.
    """
    if not text:
        return 0
    if tokenizer is None:
        tokenizer = TokenizerRegistry().resolve_by_encoding(DEFAULT_ENCODING_NAME)
    return len(tokenizer.encode(text, allowed_special, disallowed_special))
