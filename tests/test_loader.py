"""Tests for pdf_loader.loader — PDFLoader."""

import io
from unittest.mock import MagicMock

import pytest

from chunking import TextUnit
from pdf_loader import LoaderConfig, PDFLoader, ResolvedFont
from pdf_loader.exceptions import (
    CredentialReuseError,
    DocumentDecodeError,
    PageDecodeError,
    PasswordError,
    SourceReadError,
)

from conftest import build_pdf


# ---------------------------------------------------------------------------
# Fake decoder
# ---------------------------------------------------------------------------

def _font(name: str) -> ResolvedFont:
    return ResolvedFont(name=name, xref=1, basefont=name, font_type="Type1", encoding="", ext="n/a")


def _fake_page(text: str, fonts: list[str]) -> MagicMock:
    page = MagicMock()
    page.font_names.return_value = fonts
    page.resolve_font.side_effect = _font
    page.extract_plain_text.return_value = text
    return page


def _fake_decoder(pages: list[MagicMock]) -> MagicMock:
    document = MagicMock()
    document.page_count = len(pages)
    document.page.side_effect = lambda number: pages[number - 1]
    document.__enter__.return_value = document
    document.__exit__.return_value = False
    decoder = MagicMock()
    decoder.open.return_value = document
    return decoder


# ---------------------------------------------------------------------------
# Real PDFs
# ---------------------------------------------------------------------------

class TestLoad:
    def test_one_unit_per_page(self, three_page_pdf):
        units = PDFLoader(io.BytesIO(three_page_pdf)).load()

        assert len(units) == 3
        assert [u.metadata["page"] for u in units] == [1, 2, 3]
        assert all(u.metadata["total_pages"] == 3 for u in units)
        assert "Erste Seite" in units[0].content
        assert "Zweite Seite" in units[1].content
        assert "Dritte Seite" in units[2].content

    def test_metadata_has_only_position_keys(self, three_page_pdf):
        units = PDFLoader(three_page_pdf).load()
        assert set(units[0].metadata) == {"page", "total_pages"}

    def test_returns_text_units(self, three_page_pdf):
        assert all(isinstance(u, TextUnit) for u in PDFLoader(three_page_pdf).load())

    def test_blank_page_gives_empty_unit(self):
        units = PDFLoader(build_pdf(["Text", ""])).load()
        assert len(units) == 2
        assert units[1].content.strip() == ""

    def test_explicit_size(self, three_page_pdf):
        units = PDFLoader(io.BytesIO(three_page_pdf), size=len(three_page_pdf)).load()
        assert len(units) == 3

    def test_size_larger_than_stream(self, three_page_pdf):
        loader = PDFLoader(io.BytesIO(three_page_pdf), size=len(three_page_pdf) + 10)
        with pytest.raises(SourceReadError, match="exceeds"):
            loader.load()

    def test_negative_size(self, three_page_pdf):
        decoder = _fake_decoder([])
        loader = PDFLoader(io.BytesIO(three_page_pdf), size=-1, decoder=decoder)
        with pytest.raises(SourceReadError, match="negative"):
            loader.load()
        decoder.open.assert_not_called()

    def test_corrupted_document(self):
        with pytest.raises(DocumentDecodeError) as exc_info:
            PDFLoader(b"%PDF-garbage").load()
        assert exc_info.value.stage == "load"

    def test_stream_read_once(self, three_page_pdf):
        stream = io.BytesIO(three_page_pdf)
        loader = PDFLoader(stream)
        first = loader.load()
        second = loader.load()
        assert first == second


class TestPassword:
    def test_correct_password_succeeds_once(self, encrypted_pdf):
        loader = PDFLoader(io.BytesIO(encrypted_pdf), config=LoaderConfig(password="secret"))

        units = loader.load()
        assert len(units) == 2
        assert "Geheimer Inhalt" in units[0].content

        with pytest.raises(CredentialReuseError):
            loader.load()

    def test_reuse_error_is_password_error(self, encrypted_pdf):
        loader = PDFLoader(encrypted_pdf, config=LoaderConfig(password="secret"))
        loader.load()
        with pytest.raises(PasswordError):
            loader.load()

    def test_new_loader_can_decrypt_again(self, encrypted_pdf):
        for _ in range(2):
            loader = PDFLoader(encrypted_pdf, config=LoaderConfig(password="secret"))
            assert len(loader.load()) == 2

    def test_wrong_password(self, encrypted_pdf):
        loader = PDFLoader(encrypted_pdf, config=LoaderConfig(password="wrong"))
        with pytest.raises(PasswordError):
            loader.load()

    def test_wrong_password_still_consumed(self, encrypted_pdf):
        loader = PDFLoader(encrypted_pdf, config=LoaderConfig(password="wrong"))
        with pytest.raises(PasswordError):
            loader.load()
        with pytest.raises(CredentialReuseError):
            loader.load()

    def test_no_password(self, encrypted_pdf):
        with pytest.raises(PasswordError):
            PDFLoader(encrypted_pdf).load()

    def test_unencrypted_pdf_keeps_working(self, three_page_pdf):
        loader = PDFLoader(three_page_pdf, config=LoaderConfig(password="unused"))
        assert len(loader.load()) == 3
        assert len(loader.load()) == 3


# ---------------------------------------------------------------------------
# Decoder interaction
# ---------------------------------------------------------------------------

class TestDecoderInteraction:
    def test_fonts_resolved_once_per_name(self):
        pages = [
            _fake_page("eins", ["F1", "F2"]),
            _fake_page("zwei", ["F2", "F3"]),
            _fake_page("drei", ["F1"]),
        ]
        units = PDFLoader(b"pdf", decoder=_fake_decoder(pages)).load()

        assert [u.content for u in units] == ["eins", "zwei", "drei"]
        pages[0].resolve_font.assert_any_call("F1")
        pages[0].resolve_font.assert_any_call("F2")
        pages[1].resolve_font.assert_called_once_with("F3")
        pages[2].resolve_font.assert_not_called()

    def test_pages_receive_accumulated_fonts(self):
        pages = [_fake_page("a", ["F1"]), _fake_page("b", ["F2"])]
        PDFLoader(b"pdf", decoder=_fake_decoder(pages)).load()

        fonts = pages[1].extract_plain_text.call_args.args[0]
        assert set(fonts) == {"F1", "F2"}

    def test_page_failure_aborts_load(self):
        failing = _fake_page("", [])
        failing.extract_plain_text.side_effect = PageDecodeError(2)
        pages = [_fake_page("a", []), failing, _fake_page("c", [])]

        with pytest.raises(PageDecodeError) as exc_info:
            PDFLoader(b"pdf", decoder=_fake_decoder(pages)).load()
        assert exc_info.value.page_number == 2
        pages[2].extract_plain_text.assert_not_called()

    def test_document_closed_after_failure(self):
        failing = _fake_page("", [])
        failing.extract_plain_text.side_effect = PageDecodeError(1)
        decoder = _fake_decoder([failing])

        with pytest.raises(PageDecodeError):
            PDFLoader(b"pdf", decoder=decoder).load()
        decoder.open.return_value.__exit__.assert_called_once()

    def test_open_receives_buffer_size_and_provider(self):
        decoder = _fake_decoder([])
        PDFLoader(b"12345", decoder=decoder, config=LoaderConfig(password="pw")).load()

        source, size, provider = decoder.open.call_args.args
        assert source.getvalue() == b"12345"
        assert size == 5
        assert provider() == "pw"

    def test_no_provider_without_password(self):
        decoder = _fake_decoder([])
        PDFLoader(b"12345", decoder=decoder).load()
        assert decoder.open.call_args.args[2] is None

    def test_empty_document(self):
        assert PDFLoader(b"pdf", decoder=_fake_decoder([])).load() == []


class TestLoadAndSplit:
    def test_chunks_keep_page_metadata(self, make_splitter):
        pages = [_fake_page("abcdefgh", []), _fake_page("ij", [])]
        loader = PDFLoader(b"pdf", decoder=_fake_decoder(pages))

        chunks = loader.load_and_split(make_splitter(4, 0))

        assert [c.content for c in chunks] == ["abcd", "efgh", "ij"]
        assert [c.metadata for c in chunks] == [
            {"page": 1, "total_pages": 2},
            {"page": 1, "total_pages": 2},
            {"page": 2, "total_pages": 2},
        ]

    def test_real_pdf(self, three_page_pdf, make_splitter):
        chunks = PDFLoader(three_page_pdf).load_and_split(make_splitter(5, 1))
        assert chunks
        assert all(len(c.content) <= 5 for c in chunks)
        assert [c.metadata["page"] for c in chunks] == sorted(c.metadata["page"] for c in chunks)
        assert {c.metadata["page"] for c in chunks} == {1, 2, 3}

    def test_load_error_propagates(self, make_splitter):
        with pytest.raises(DocumentDecodeError):
            PDFLoader(b"not a pdf").load_and_split(make_splitter(4, 0))
