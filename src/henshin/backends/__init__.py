"""Backends for henshin output generation (source text, etc.)."""

from .source_printer import SourceMode, generate_source, save_source_file

__all__ = ["SourceMode", "generate_source", "save_source_file"]
