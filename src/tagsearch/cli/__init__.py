"""Command line interface for tagsearch."""

from .main import create_parser, main

__all__ = ["create_parser", "main"]
