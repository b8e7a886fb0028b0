"""
Pytest fixtures for the loader and splitter tests.
"""

from typing import AbstractSet, Optional, Sequence

import fitz  # PyMuPDF
import pytest

from chunking import TokenSplitter, TokenSplitterConfig, TokenizerRegistry
from chunking.exceptions import TokenizationError

END_OF_TEXT = "<|endoftext|>"
END_OF_TEXT_ID = 0x110000  # above the Unicode range, never a character id


class CharTokenizer:
    """
    One token per character, plus a single special token.

    Token ids are code points, so chunk lengths can be checked on the
    decoded text directly.
    """

    def encode(
        self,
        text: str,
        allowed_special: AbstractSet[str] = frozenset(),
        disallowed_special: AbstractSet[str] = frozenset({"all"}),
    ) -> list[int]:
        allowed = "all" in allowed_special or END_OF_TEXT in allowed_special
        disallowed = not allowed and (
            "all" in disallowed_special or END_OF_TEXT in disallowed_special
        )
        if END_OF_TEXT in text and disallowed:
            raise TokenizationError(f"Disallowed special token {END_OF_TEXT!r} in text")

        ids: list[int] = []
        parts = text.split(END_OF_TEXT) if allowed else [text]
        for i, part in enumerate(parts):
            if i > 0:
                ids.append(END_OF_TEXT_ID)
            ids.extend(ord(c) for c in part)
        return ids

    def decode(self, ids: Sequence[int]) -> str:
        return "".join(END_OF_TEXT if i == END_OF_TEXT_ID else chr(i) for i in ids)


@pytest.fixture
def char_registry():
    """Registry resolving 'char-model' and 'chars' to the CharTokenizer."""
    registry = TokenizerRegistry()
    registry.register_model("char-model", CharTokenizer)
    registry.register_encoding("chars", CharTokenizer)
    return registry


@pytest.fixture
def make_splitter(char_registry):
    """Build a character-token splitter with the given window."""

    def _make(chunk_size: int, chunk_overlap: int, **overrides) -> TokenSplitter:
        config = TokenSplitterConfig(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            model_name=overrides.pop("model_name", None),
            encoding_name=overrides.pop("encoding_name", "chars"),
            **overrides,
        )
        return TokenSplitter(config, registry=char_registry)

    return _make


def build_pdf(pages: list[str], user_pw: Optional[str] = None) -> bytes:
    """Create an in-memory PDF with one line of text per page."""
    doc = fitz.open()
    try:
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text, fontsize=11)
        if user_pw:
            return doc.tobytes(
                encryption=fitz.PDF_ENCRYPT_AES_256,
                owner_pw=f"owner-{user_pw}",
                user_pw=user_pw,
            )
        return doc.tobytes()
    finally:
        doc.close()


@pytest.fixture
def three_page_pdf() -> bytes:
    return build_pdf(["Erste Seite", "Zweite Seite", "Dritte Seite"])


@pytest.fixture
def encrypted_pdf() -> bytes:
    return build_pdf(["Geheimer Inhalt", "Noch mehr Inhalt"], user_pw="secret")


@pytest.fixture
def pdf_file(tmp_path, three_page_pdf):
    path = tmp_path / "three_pages.pdf"
    path.write_bytes(three_page_pdf)
    return path
