"""
Tests for result record rendering and appending.
"""

from datetime import datetime

import pytest

from paper_check.core.checker import PlagiarismChecker
from paper_check.core.validation import FileValidationError
from paper_check.utils.result_writer import RECORD_SEPARATOR, append_result, render_record

from .conftest import FULL_MATCH_TEXT

STARTED = datetime(2024, 9, 1, 10, 0, 0)
FINISHED = datetime(2024, 9, 1, 10, 0, 1, 250000)


@pytest.fixture
def simhash_result():
    return PlagiarismChecker().compare(FULL_MATCH_TEXT, FULL_MATCH_TEXT)


class TestRenderRecord:

    def test_simhash_record(self, simhash_result):
        record = render_record(simhash_result, "orig.txt", "copy.txt", STARTED, FINISHED)
        lines = record.splitlines()
        assert lines[0] == "====== Text similarity check result ======"
        assert "Started: 2024-09-01 10:00:00" in lines
        assert "Finished: 2024-09-01 10:00:01" in lines
        assert "Elapsed: 1250 ms" in lines
        assert "  Original: orig.txt" in lines
        assert "  Suspect: copy.txt" in lines
        assert "Strategy: simhash" in lines
        assert "Hamming distance: 0" in lines
        assert "Similarity: 100.00%" in lines
        assert lines[-1] == "Verdict: High similarity, strong plagiarism suspicion"
        assert record.endswith("\n")

    def test_cosine_record_has_no_distance(self):
        result = PlagiarismChecker(strategy="cosine", cosine_unit="token").compare("alpha beta", "alpha gamma")
        record = render_record(result, "a.txt", "b.txt", STARTED, FINISHED)
        assert "Hamming distance" not in record
        assert "Similarity: 50.00%" in record
        assert "Strategy: cosine" in record
        assert "Cosine unit: token" in record


class TestAppendResult:

    def test_creates_file_and_parents(self, tmp_path, simhash_result):
        target = tmp_path / "results" / "nested" / "result.txt"
        path = append_result(target, simhash_result, "a.txt", "b.txt", STARTED, FINISHED)
        assert path == target
        content = target.read_text(encoding="utf-8")
        assert not content.startswith(RECORD_SEPARATOR)
        assert content.startswith("====== Text similarity check result ======")

    def test_appends_with_separator(self, tmp_path, simhash_result):
        target = tmp_path / "result.txt"
        append_result(target, simhash_result, "a.txt", "b.txt", STARTED, FINISHED)
        append_result(target, simhash_result, "c.txt", "d.txt", STARTED, FINISHED)
        content = target.read_text(encoding="utf-8")
        assert content.count("====== Text similarity check result ======") == 2
        assert content.count(RECORD_SEPARATOR) == 1
        assert content.index("a.txt") < content.index(RECORD_SEPARATOR) < content.index("c.txt")

    def test_empty_existing_file_gets_no_separator(self, tmp_path, simhash_result):
        target = tmp_path / "result.txt"
        target.write_text("")
        append_result(target, simhash_result, "a.txt", "b.txt", STARTED, FINISHED)
        assert RECORD_SEPARATOR not in target.read_text(encoding="utf-8")

    def test_keeps_unicode_paths(self, tmp_path, simhash_result):
        target = tmp_path / "结果.txt"
        append_result(target, simhash_result, "原文.txt", "抄袭.txt", STARTED, FINISHED)
        assert "原文.txt" in target.read_text(encoding="utf-8")

    def test_directory_target(self, tmp_path, simhash_result):
        with pytest.raises(FileValidationError):
            append_result(tmp_path, simhash_result, "a.txt", "b.txt", STARTED, FINISHED)
