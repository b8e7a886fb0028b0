from typing import Iterable, Optional

from .config import ChunkingServiceConfig
from .models import ChunkOut, SplitResponse, TextUnit, TokenSplitterConfig
from .token_splitter import TokenSplitter
from .tokenizer import TokenizerRegistry, count_tokens


class ChunkingService:
    def __init__(
        self,
        config: ChunkingServiceConfig | None = None,
        registry: TokenizerRegistry | None = None,
    ):
        self.config = config or ChunkingServiceConfig()
        self.registry = registry or TokenizerRegistry()
        self.splitter = TokenSplitter(self.config.splitter, self.registry)

    def _splitter_for(self, config: Optional[TokenSplitterConfig]) -> TokenSplitter:
        if config is None:
            return self.splitter
        return TokenSplitter(config, self.registry)

    def split_text(
        self, text: str, config: Optional[TokenSplitterConfig] = None
    ) -> SplitResponse:
        splitter = self._splitter_for(config)
        chunks = splitter.split_text(text)
        tokenizer = self.registry.resolve(splitter.config)
        out = [
            ChunkOut(
                text=chunk,
                token_count=count_tokens(
                    chunk,
                    tokenizer,
                    splitter.config.allowed_special,
                    splitter.config.disallowed_special,
                ),
            )
            for chunk in chunks
        ]
        return SplitResponse(chunks=out, total_chunks=len(out))

    def split_documents(
        self,
        units: Iterable[TextUnit],
        config: Optional[TokenSplitterConfig] = None,
    ) -> list[TextUnit]:
        return self._splitter_for(config).split_documents(units)
