"""
Shared fixtures for the paper-check test suite.
"""

import logging

import pytest

FULL_MATCH_TEXT = (
    "SimHash是一种用于文本相似度计算的哈希算法，"
    "它可以将高维的文本特征映射到低维的哈希值，适用于大规模文本查重场景。"
)
HIGH_SIMILAR_TEXT = (
    "SimHash是一种用于文本相似性计算的哈希方法，"
    "能够把高维的文本特征转换到低维的哈希值，适合大规模文本查重应用。"
)
SPECIAL_CHAR_TEXT = "SimHash!@#$%^&*()_+哈希123算法，test测试文本"

# DJB2 hashes of these two tokens differ in 48 of 64 bits
UNRELATED_TEXT_A = "Internationalization, internationalization!"
UNRELATED_TEXT_B = "imzdetection IMZDETECTION imzdetection"


@pytest.fixture
def write_file(tmp_path):
    """Write bytes or text to a file under tmp_path and return its path."""
    def _write(name, content, encoding="utf-8"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode(encoding))
        return path
    return _write


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI runs reconfigure the root logger; put the original handlers back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
