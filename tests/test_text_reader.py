"""
Tests for reading documents with encoding detection.
"""

import codecs

import pytest

from paper_check.core.validation import EncodingDetectionError, FileValidationError
from paper_check.utils.text_reader import decode_bytes, detect_encoding, read_text_file

from .conftest import FULL_MATCH_TEXT


class TestDecodeBytes:

    def test_utf8(self):
        assert decode_bytes(FULL_MATCH_TEXT.encode("utf-8")) == (FULL_MATCH_TEXT, "utf-8")

    def test_gbk(self):
        text, encoding = decode_bytes(FULL_MATCH_TEXT.encode("gbk"))
        assert text == FULL_MATCH_TEXT
        assert encoding == "gbk"

    def test_empty(self):
        assert decode_bytes(b"") == ("", "utf-8")

    def test_utf8_bom_is_stripped(self):
        text, encoding = decode_bytes(codecs.BOM_UTF8 + "héllo".encode("utf-8"))
        assert text == "héllo"
        assert encoding == "utf-8-sig"

    def test_utf16_bom(self):
        text, encoding = decode_bytes("文本 text".encode("utf-16"))
        assert text == "文本 text"
        assert encoding == "utf-16"

    @pytest.mark.parametrize("data", [
        codecs.BOM_UTF16_LE + b"abc",
        codecs.BOM_UTF8 + b"\xff\xfe text",
    ])
    def test_data_contradicting_bom(self, data):
        with pytest.raises(EncodingDetectionError, match="byte order mark") as exc_info:
            decode_bytes(data)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_single_byte_fallback(self):
        # invalid as UTF-8 and as GBK
        data = b"caf\xe9 \xff"
        text, _ = decode_bytes(data, detect=False)
        assert text == data.decode("iso-8859-1")

    def test_no_candidate_decodes(self):
        with pytest.raises(EncodingDetectionError):
            decode_bytes(b"\xfe\xfd\x80", encodings=("utf-8",), detect=False)

    def test_unknown_encoding_is_skipped(self):
        assert decode_bytes(b"plain", encodings=("no-such-codec", "ascii"), detect=False) == ("plain", "ascii")


class TestDetectEncoding:

    def test_ascii(self):
        assert detect_encoding(b"plain ascii text, nothing else") == "ascii"

    def test_returns_none_without_data(self):
        assert detect_encoding(b"") is None


class TestReadTextFile:

    def test_reads_utf8(self, write_file):
        path = write_file("doc.txt", FULL_MATCH_TEXT)
        assert read_text_file(path) == FULL_MATCH_TEXT

    def test_reads_gbk(self, write_file):
        path = write_file("doc_gbk.txt", FULL_MATCH_TEXT, encoding="gbk")
        assert read_text_file(path) == FULL_MATCH_TEXT

    def test_empty_file(self, write_file):
        assert read_text_file(write_file("empty.txt", b"")) == ""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileValidationError, match="does not exist"):
            read_text_file(tmp_path / "nope.txt")

    def test_directory(self, tmp_path):
        with pytest.raises(FileValidationError, match="not a file"):
            read_text_file(tmp_path)

    def test_blank_path(self):
        with pytest.raises(FileValidationError, match="cannot be empty"):
            read_text_file("  ", field="original")

    def test_corrupt_bom_file_names_path(self, write_file):
        path = write_file("bom.txt", codecs.BOM_UTF8 + b"\xff")
        with pytest.raises(EncodingDetectionError, match="bom.txt"):
            read_text_file(path)

    def test_undecodable_file_names_path(self, write_file):
        path = write_file("bad.txt", b"\x80\x81")
        with pytest.raises(EncodingDetectionError, match="bad.txt"):
            read_text_file(path, encodings=("utf-8",), detect=False)
