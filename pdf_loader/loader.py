"""
PDF Loader - Turns a PDF byte stream into one TextUnit per page

Algorithm:
1. Buffer the byte stream into a random-access source (once per loader).
2. Open the document, handing the decoder a single-use password provider.
3. Walk pages 1..N, resolving each referenced font once per load and
   extracting the page's plain text with the resolved fonts.
4. Emit TextUnit(content, {"page": i, "total_pages": N}) per page.

Any failure aborts the whole load; no partial page list is returned.

Usage:
    from pdf_loader import PDFLoader
    from chunking import TokenSplitter

    with open("document.pdf", "rb") as fh:
        loader = PDFLoader(fh)
        pages = loader.load()

    chunks = PDFLoader(pdf_bytes).load_and_split(TokenSplitter())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, BinaryIO, Optional, Union

from chunking.models import TextUnit

from .decoder import DocumentDecoder, PyMuPDFDecoder, ResolvedFont
from .exceptions import SourceReadError
from .models import LoaderConfig, SingleUsePassword
from .source import BufferedReaderAt, BytesLike

if TYPE_CHECKING:
    from chunking.token_splitter import TokenSplitter

logger = logging.getLogger(__name__)


class PDFLoader:
    """
    Loads the pages of a (possibly encrypted) PDF as TextUnits.

    A password is consumed by the first load of an encrypted document;
    loading the same encrypted document again with this instance raises
    CredentialReuseError. Create a new loader to retry.
    """

    def __init__(
        self,
        source: Union[BinaryIO, BytesLike],
        size: Optional[int] = None,
        config: Optional[LoaderConfig] = None,
        decoder: Optional[DocumentDecoder] = None,
    ):
        self.config = config or LoaderConfig()
        self.decoder = decoder or PyMuPDFDecoder()
        self._source = source
        self._size = size
        self._buffer: Optional[BufferedReaderAt] = None
        self._password: Optional[SingleUsePassword] = None
        if self.config.password is not None:
            self._password = SingleUsePassword(self.config.password.get_secret_value())

    def load(self) -> list[TextUnit]:
        """
        Load every page of the document.

        Returns:
            One TextUnit per page in ascending page order, with metadata
            {"page": <1-based index>, "total_pages": <page count>}.

        Raises:
            SourceReadError: If the stream cannot be read, size is negative or
                the stream is shorter than size
            PasswordError: If the password is missing, wrong or already used
            DocumentDecodeError: If the PDF cannot be parsed
            PageDecodeError: If a page's text cannot be extracted
        """
        buffer = self._buffered_source()
        size = len(buffer) if self._size is None else self._size
        if size < 0:
            raise SourceReadError(f"Declared size {size} is negative")
        if size > len(buffer):
            raise SourceReadError(
                f"Declared size {size} exceeds the {len(buffer)} bytes read from the stream"
            )

        provider = self._password.consume if self._password is not None else None

        units: list[TextUnit] = []
        with self.decoder.open(buffer, size, provider) as document:
            total_pages = document.page_count
            logger.info(f"Document has {total_pages} pages")

            # Resolved once per load, shared by all pages.
            fonts: dict[str, ResolvedFont] = {}
            for page_number in range(1, total_pages + 1):
                page = document.page(page_number)
                for name in page.font_names():
                    if name not in fonts:
                        fonts[name] = page.resolve_font(name)

                text = page.extract_plain_text(fonts)
                logger.debug(f"Page {page_number}/{total_pages}: {len(text)} chars")

                units.append(TextUnit(
                    content=text,
                    metadata={
                        "page": page_number,
                        "total_pages": total_pages,
                    },
                ))

        return units

    def load_and_split(self, splitter: "TokenSplitter") -> list[TextUnit]:
        """
        Load the document and split every page with a token splitter.

        Chunk units keep the page's metadata.
        """
        return splitter.split_documents(self.load())

    def _buffered_source(self) -> BufferedReaderAt:
        if self._buffer is None:
            self._buffer = BufferedReaderAt.from_stream(self._source)
            logger.debug(f"Buffered {len(self._buffer)} bytes")
        return self._buffer
