"""
Token Splitter - Core chunking logic

Splits text into overlapping windows measured in tokens. Sizes are exact:
every chunk decodes at most chunk_size tokens and consecutive chunks share
chunk_overlap tokens.

Algorithm:
1. Resolve the tokenizer from the config (model name, else encoding name).
2. Encode the text, forwarding the allowed/disallowed special-token sets.
3. Slide a window of chunk_size tokens over the ids, advancing by
   chunk_size - chunk_overlap, and decode each window.
4. Stop once a window reaches the last token.

Usage:
    from chunking import TokenSplitter, TokenSplitterConfig

    splitter = TokenSplitter(TokenSplitterConfig(chunk_size=512, chunk_overlap=100))
    chunks = splitter.split_text(text)
    units = splitter.split_documents(pages)
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from .exceptions import ConfigurationError
from .models import MetadataValue, TextUnit, TokenSplitterConfig
from .tokenizer import Tokenizer, TokenizerRegistry

logger = logging.getLogger(__name__)


class TokenSplitter:
    """
    Splits text into fixed-size, overlapping token windows.
    """

    def __init__(
        self,
        config: Optional[TokenSplitterConfig] = None,
        registry: Optional[TokenizerRegistry] = None,
    ):
        self.config = config or TokenSplitterConfig()
        self.registry = registry or TokenizerRegistry()

    def split_text(self, text: str) -> list[str]:
        """
        Split a text into chunks of at most chunk_size tokens.

        Args:
            text: The text to split.

        Returns:
            Decoded chunk texts in order. Empty input returns an empty list.

        Raises:
            ConfigurationError: If the overlap is not smaller than the chunk
                size or no tokenizer can be resolved
            TokenizationError: If the tokenizer rejects the text
        """
        self._validate_window()
        tokenizer = self.registry.resolve(self.config)
        input_ids = tokenizer.encode(
            text,
            self.config.allowed_special,
            self.config.disallowed_special,
        )
        return self._split_ids(input_ids, tokenizer)

    def create_text_units(
        self,
        texts: Sequence[str],
        metadatas: Optional[Sequence[dict[str, MetadataValue]]] = None,
    ) -> list[TextUnit]:
        """
        Split each text and wrap every chunk in a TextUnit.

        Args:
            texts: Texts to split.
            metadatas: One metadata mapping per text (default: empty).

        Returns:
            TextUnits in text order, then chunk order. Each chunk gets its
            own copy of the parent text's metadata.
        """
        if metadatas is None:
            metadatas = [{} for _ in texts]
        if len(metadatas) != len(texts):
            raise ValueError(
                f"Number of metadatas ({len(metadatas)}) does not match "
                f"number of texts ({len(texts)})"
            )

        units: list[TextUnit] = []
        for text, metadata in zip(texts, metadatas):
            for chunk in self.split_text(text):
                units.append(TextUnit(content=chunk, metadata=dict(metadata)))
        return units

    def split_documents(self, units: Iterable[TextUnit]) -> list[TextUnit]:
        """
        Split a batch of TextUnits (e.g. loaded PDF pages) into chunk units.

        No metadata keys are added; the chunk's position inside its parent
        is left to downstream indexers.
        """
        units = list(units)
        chunks = self.create_text_units(
            [unit.content for unit in units],
            [unit.metadata for unit in units],
        )
        logger.debug(f"Split {len(units)} units into {len(chunks)} chunks")
        return chunks

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _validate_window(self) -> None:
        # Configs built with model_construct() skip pydantic validation.
        if self.config.chunk_size < 1:
            raise ConfigurationError(
                f"chunk_size ({self.config.chunk_size}) must be positive"
            )
        if not 0 <= self.config.chunk_overlap < self.config.chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({self.config.chunk_overlap}) must be in "
                f"[0, chunk_size ({self.config.chunk_size}))"
            )

    def _split_ids(self, input_ids: Sequence[int], tokenizer: Tokenizer) -> list[str]:
        """Slide the token window over input_ids and decode every window."""
        splits: list[str] = []
        total = len(input_ids)
        chunk_size = self.config.chunk_size
        step = self.config.step

        start_idx = 0
        cur_idx = min(chunk_size, total)
        while start_idx < total:
            splits.append(tokenizer.decode(input_ids[start_idx:cur_idx]))
            if cur_idx == total:
                # The tail is covered; a further window would lie inside this one.
                break
            start_idx += step
            cur_idx = min(start_idx + chunk_size, total)

        return splits
