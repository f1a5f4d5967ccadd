"""Command-line interface module for htmlencode.

This module provides the ``htmlencode`` filter that encodes or decodes HTML
entities between standard input and standard output.
"""

from .main import main

__all__ = ["main"]
