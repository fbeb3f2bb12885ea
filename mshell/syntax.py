"""Checks run on a command line before it is split into tokens."""

from __future__ import annotations

from typing import Optional

from mshell.state import ShellState
from mshell.text import is_space

_BLANKS = " \t\n\v\f\r"
UNCLOSED_QUOTE_STATUS = 130


class ShellSyntaxError(ValueError):
    """A command line that the shell refuses to run."""

    def __init__(self, token: str, message: Optional[str] = None):
        self.token = token
        if message is None:
            message = f"Syntax error near unexpected token `{token}'"
        super().__init__(message)


class UnclosedQuoteError(ShellSyntaxError):
    """A quote opened on the command line is never closed."""

    def __init__(self, quote: str = ""):
        super().__init__(quote, "Syntax error: unclosed quotes")


def _skip_blanks(text: str, index: int) -> int:
    while index < len(text) and is_space(text[index]):
        index += 1
    return index


def _char_at(text: str, index: int) -> str:
    return text[index] if index < len(text) else ""


def _check_pipe(text: str, index: int) -> int:
    if _char_at(text, index) != "|":
        return index
    if _char_at(text, index + 1) in ("|", ""):
        raise ShellSyntaxError("|")
    if _char_at(text, _skip_blanks(text, index + 1)) == "|":
        raise ShellSyntaxError("|")
    return index + 1


def _check_redirection(text: str, index: int) -> None:
    redirection = text[index]
    after = index + 1
    if _char_at(text, after) == redirection:
        after += 1
    after = _skip_blanks(text, after)
    if _char_at(text, after) in ("", "|", "<", ">"):
        raise ShellSyntaxError(redirection)


def check_syntax(text: str) -> str:
    """Return ``text`` if its pipes and redirections are well placed.

    Raises ShellSyntaxError naming the offending operator otherwise.
    """
    index = _skip_blanks(text, 0)
    if _char_at(text, index) == "|":
        raise ShellSyntaxError("|")
    while index < len(text):
        index = _skip_blanks(text, index)
        if index >= len(text):
            break
        index = _check_pipe(text, index)
        if _char_at(text, index) in ("<", ">"):
            _check_redirection(text, index)
        index += 1
    return text


def trim_spaces(text: str) -> str:
    """Drop leading blanks."""
    return text.lstrip(_BLANKS)


def count_values(text: str) -> int:
    """Count the blank-separated words in ``text``."""
    count = 0
    in_word = False
    for char in text:
        if is_space(char):
            in_word = False
        elif not in_word:
            count += 1
            in_word = True
    return count


def remove_space(text: str) -> str:
    """Return ``text`` with every blank removed."""
    return "".join(char for char in text if not is_space(char))


def check_unclosed_quotes(text: str, state: Optional[ShellState] = None) -> str:
    """Return ``text`` if every quote in it is closed.

    Otherwise the last status of ``state`` becomes 130 and
    UnclosedQuoteError is raised.
    """
    open_quote = ""
    for char in text:
        if char in ("'", '"'):
            if not open_quote:
                open_quote = char
            elif char == open_quote:
                open_quote = ""
    if open_quote:
        if state is not None:
            state.last_status = UNCLOSED_QUOTE_STATUS
        raise UnclosedQuoteError(open_quote)
    return text


def token_error_message(token: str) -> str:
    """Return the message reported for an unexpected token while parsing."""
    return f"syntax error near unexpected token `{token}`"