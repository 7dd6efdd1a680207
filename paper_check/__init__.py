"""
paper-check

SimHash based document similarity checker for plagiarism screening.
"""

__version__ = "1.0.0"

from .core import *
from .utils import *
