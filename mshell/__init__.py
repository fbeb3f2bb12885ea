"""Parsing core of a small interactive shell: syntax checks, expansion, tokenizing and here-documents."""

__version__ = "0.1.0"