from pathlib import Path
from typing import Optional

from pydantic import SecretStr

from chunking.models import TextUnit
from chunking.token_splitter import TokenSplitter
from chunking.tokenizer import TokenizerRegistry

from .config import LoaderServiceConfig
from .decoder import DocumentDecoder
from .exceptions import DocumentNotFoundError, SourceReadError
from .loader import PDFLoader
from .models import LoaderConfig


class LoaderService:
    def __init__(
        self,
        config: LoaderServiceConfig | None = None,
        decoder: DocumentDecoder | None = None,
        registry: TokenizerRegistry | None = None,
    ):
        self.config = config or LoaderServiceConfig()
        self.decoder = decoder
        self.splitter = TokenSplitter(self.config.chunking.splitter, registry)

    def _loader(self, source, password: Optional[str]) -> PDFLoader:
        # A fresh loader per request: the password is single-use.
        config = LoaderConfig(password=SecretStr(password) if password else None)
        return PDFLoader(source, config=config, decoder=self.decoder)

    def load_bytes(
        self, data: bytes, password: Optional[str] = None, split: bool = False
    ) -> list[TextUnit]:
        loader = self._loader(data, password)
        if split:
            return loader.load_and_split(self.splitter)
        return loader.load()

    def load_file(
        self, pdf_path: str, password: Optional[str] = None, split: bool = False
    ) -> list[TextUnit]:
        path = Path(pdf_path)
        if not path.exists():
            raise DocumentNotFoundError(str(path))
        try:
            with path.open("rb") as fh:
                loader = self._loader(fh, password)
                if split:
                    return loader.load_and_split(self.splitter)
                return loader.load()
        except OSError as e:
            raise SourceReadError(f"Failed to open {path}", e) from e
