from dataclasses import dataclass, field
import os

from .models import DEFAULT_ENCODING_NAME, DEFAULT_MODEL_NAME, TokenSplitterConfig


@dataclass
class ChunkingServiceConfig:
    splitter: TokenSplitterConfig = field(default_factory=TokenSplitterConfig)

    @classmethod
    def from_env(cls) -> "ChunkingServiceConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _str(name: str, default: str) -> str:
            value = os.environ.get(name)
            return value if value is not None else default

        defaults = TokenSplitterConfig()
        return cls(
            splitter=TokenSplitterConfig(
                chunk_size=_int("CHUNK_SIZE", defaults.chunk_size),
                chunk_overlap=_int("CHUNK_OVERLAP", defaults.chunk_overlap),
                model_name=_str("TOKENIZER_MODEL", DEFAULT_MODEL_NAME) or None,
                encoding_name=_str("TOKENIZER_ENCODING", DEFAULT_ENCODING_NAME) or None,
            )
        )
