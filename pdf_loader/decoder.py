"""
PDF decoding behind a small interface.

The loader only needs a page count, the fonts each page references and the
page's plain text. DocumentDecoder/DecodedDocument/DecodedPage describe that
surface; PyMuPDFDecoder implements it with PyMuPDF (fitz).
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Mapping, Optional, Protocol

import fitz  # PyMuPDF

from .exceptions import DocumentDecodeError, PageDecodeError, PasswordError
from .source import BufferedReaderAt

logger = logging.getLogger(__name__)

PasswordProvider = Callable[[], str]


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class ResolvedFont:
    """
    A font referenced from a page's resources.

    Attributes:
        name: Resource name used by the page content stream (e.g. "F1")
        xref: PDF object number of the font dictionary
        basefont: PostScript font name (e.g. "Helvetica")
        font_type: Font subtype (e.g. "Type1", "TrueType")
        encoding: Declared encoding (may be empty)
        ext: Embedded font file extension, "n/a" if not embedded
    """

    name: str
    xref: int
    basefont: str
    font_type: str
    encoding: str
    ext: str


# =============================================================================
# INTERFACES
# =============================================================================


class DecodedPage(Protocol):
    def font_names(self) -> list[str]:
        ...

    def resolve_font(self, name: str) -> ResolvedFont:
        ...

    def extract_plain_text(self, fonts: Mapping[str, ResolvedFont]) -> str:
        ...


class DecodedDocument(Protocol):
    @property
    def page_count(self) -> int:
        ...

    def page(self, page_number: int) -> DecodedPage:
        ...

    def close(self) -> None:
        ...

    def __enter__(self) -> "DecodedDocument":
        ...

    def __exit__(self, *exc) -> None:
        ...


class DocumentDecoder(Protocol):
    def open(
        self,
        source: BufferedReaderAt,
        size: int,
        password_provider: Optional[PasswordProvider] = None,
    ) -> DecodedDocument:
        ...


# =============================================================================
# PYMUPDF IMPLEMENTATION
# =============================================================================


class PyMuPDFPage:
    """A single PyMuPDF page (1-indexed page_number)."""

    def __init__(self, page: "fitz.Page", page_number: int):
        self._page = page
        self.page_number = page_number
        self._fonts: Optional[dict[str, ResolvedFont]] = None

    def _font_table(self) -> dict[str, ResolvedFont]:
        if self._fonts is None:
            try:
                entries = self._page.get_fonts()
            except Exception as e:
                raise PageDecodeError(
                    self.page_number, f"Failed to read fonts of page {self.page_number}", e
                ) from e
            fonts: dict[str, ResolvedFont] = {}
            for xref, ext, font_type, basefont, name, encoding, *_ in entries:
                if name in fonts:
                    continue
                fonts[name] = ResolvedFont(
                    name=name,
                    xref=xref,
                    basefont=basefont,
                    font_type=font_type,
                    encoding=encoding,
                    ext=ext,
                )
            self._fonts = fonts
        return self._fonts

    def font_names(self) -> list[str]:
        return list(self._font_table())

    def resolve_font(self, name: str) -> ResolvedFont:
        fonts = self._font_table()
        if name not in fonts:
            raise PageDecodeError(
                self.page_number,
                f"Font '{name}' is not referenced by page {self.page_number}",
            )
        return fonts[name]

    def extract_plain_text(self, fonts: Mapping[str, ResolvedFont]) -> str:
        missing = [name for name in self.font_names() if name not in fonts]
        if missing:
            raise PageDecodeError(
                self.page_number,
                f"Unresolved fonts on page {self.page_number}: {missing}",
            )
        try:
            return self._page.get_text("text")
        except Exception as e:
            raise PageDecodeError(self.page_number, original_error=e) from e


class PyMuPDFDocument:
    """An opened (and, if needed, authenticated) PyMuPDF document."""

    def __init__(self, doc: "fitz.Document"):
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def page(self, page_number: int) -> PyMuPDFPage:
        if page_number < 1 or page_number > self.page_count:
            raise PageDecodeError(
                page_number,
                f"Page {page_number} out of range (1-{self.page_count})",
            )
        try:
            page = self._doc.load_page(page_number - 1)
        except Exception as e:
            raise PageDecodeError(page_number, original_error=e) from e
        return PyMuPDFPage(page, page_number)

    def close(self) -> None:
        self._doc.close()

    def __enter__(self) -> "PyMuPDFDocument":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class PyMuPDFDecoder:
    """
    Opens PDF bytes with PyMuPDF.

    The password provider is only called when the document is encrypted.
    """

    def open(
        self,
        source: BufferedReaderAt,
        size: int,
        password_provider: Optional[PasswordProvider] = None,
    ) -> PyMuPDFDocument:
        data = source.read_at(size, 0)
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DocumentDecodeError(original_error=e) from e

        try:
            if doc.needs_pass:
                self._authenticate(doc, password_provider)
        except Exception:
            doc.close()
            raise

        return PyMuPDFDocument(doc)

    @staticmethod
    def _authenticate(
        doc: "fitz.Document", password_provider: Optional[PasswordProvider]
    ) -> None:
        if password_provider is None:
            raise PasswordError("PDF is encrypted and no password was given")
        password = password_provider()
        if not doc.authenticate(password):
            raise PasswordError()
        logger.debug("Encrypted PDF authenticated")
