"""
Supporting I/O utilities.

- Document reading with encoding detection (text_reader)
- Appending human-readable result records (result_writer)
"""

from .text_reader import read_text_file, decode_bytes, detect_encoding, DEFAULT_ENCODINGS
from .result_writer import append_result, render_record

__all__ = [
    'read_text_file',
    'decode_bytes',
    'detect_encoding',
    'DEFAULT_ENCODINGS',
    'append_result',
    'render_record'
]
