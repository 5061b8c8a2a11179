"""
Latin - one-line helpers for everyday filesystem work.

Provides file and directory operations as flat, stateless functions.
"""

from . import directory, file
from .lines import LineReader, LineResult

__all__ = ['file', 'directory', 'LineReader', 'LineResult']

__version__ = "0.1.0"
