"""Snippet module: capture marked regions from source files and render them."""

from snipsync.snippet.extractor import ExtractResult, extract_file, extract_snippets
from snipsync.snippet.formatter import render
from snipsync.snippet.model import FilePath, Origin, Snippet, determine_extension

__all__ = [
    "ExtractResult",
    "FilePath",
    "Origin",
    "Snippet",
    "determine_extension",
    "extract_file",
    "extract_snippets",
    "render",
]
