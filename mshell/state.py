"""Mutable state shared by the lexer, the expander and the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Mapping

from mshell.environment import Environment


class Quote(IntEnum):
    """Kind of quote most recently seen while scanning a word."""

    NONE = 0
    SINGLE = 1
    DOUBLE = 2


@dataclass
class ShellState:
    """Variables, quote tracking and the last exit status of the shell.

    ``delimiter`` holds the quote character that opened the current quoted
    section, or an empty string outside quotes.
    """

    environ: Environment = field(default_factory=Environment)
    export: Environment = field(default_factory=Environment)
    delimiter: str = ""
    quote: Quote = Quote.NONE
    expand: bool = False
    after_redirection: bool = False
    eof: bool = False
    empty_quotes: bool = False
    in_quotes: bool = False
    last_status: int = 0

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "ShellState":
        """Build a state whose environment holds ``mapping``.

        The export list is an independent copy of the environment without
        the ``_`` variable.
        """
        environ = Environment.from_mapping(mapping)
        export = environ.copy()
        export.remove("_")
        return cls(environ=environ, export=export)

    def reset_quote_state(self) -> None:
        """Forget all quote tracking before scanning a new piece of input."""
        self.delimiter = ""
        self.quote = Quote.NONE
        self.after_redirection = False
        self.empty_quotes = False
        self.in_quotes = False