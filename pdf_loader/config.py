from dataclasses import dataclass, field

from chunking.config import ChunkingServiceConfig


@dataclass
class LoaderServiceConfig:
    chunking: ChunkingServiceConfig = field(default_factory=ChunkingServiceConfig)

    @classmethod
    def from_env(cls) -> "LoaderServiceConfig":
        return cls(chunking=ChunkingServiceConfig.from_env())
