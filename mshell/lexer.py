"""Split a command line into typed tokens, expanding variables on the way."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List

from mshell.expansion import QUOTES, expand_variable
from mshell.state import Quote, ShellState
from mshell.text import is_multi_operator, is_name_char, is_operator, is_space


class TokenType(IntEnum):
    """Role of a token on the command line."""

    COMMAND = 0
    ARGUMENT = 1
    PIPE = 2
    RED_IN = 3
    RED_OUT = 4
    APPEND = 5
    HEREDOC = 6


@dataclass(frozen=True)
class Token:
    """One word or operator of a command line."""

    type: TokenType
    value: str


_OPERATOR_TYPES = {
    "|": TokenType.PIPE,
    "<": TokenType.RED_IN,
    ">": TokenType.RED_OUT,
    "<<": TokenType.HEREDOC,
    ">>": TokenType.APPEND,
}


def _char_at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _is_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


class Lexer:
    """Turn command lines into tokens using a shared shell state.

    Quotes are removed from ordinary words and variables are expanded,
    except in the word that follows a redirection operator, which is kept
    raw for the parser to process.
    """

    def __init__(self, state: ShellState):
        self.state = state
        self._start("")

    def _start(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._buffer: List[str] = []
        self._tokens: List[Token] = []
        self._expected = TokenType.COMMAND
        self._literal = False

    def tokenize(self, text: str) -> List[Token]:
        """Return the tokens of ``text``."""
        self._start(text)
        self.state.reset_quote_state()
        while self._pos < len(text):
            self._step()
            self._pos += 1
        if self._buffer or self.state.empty_quotes:
            self._emit()
        tokens = self._tokens
        self._start("")
        return tokens

    def _classify(self, value: str) -> TokenType:
        if (
            value in _OPERATOR_TYPES
            and self.state.quote == Quote.NONE
            and not self._literal
        ):
            return _OPERATOR_TYPES[value]
        return self._expected

    def _emit(self) -> None:
        value = "".join(self._buffer)
        kind = self._classify(value)
        self._literal = False
        self._tokens.append(Token(kind, value))
        if kind == TokenType.PIPE:
            self._expected = TokenType.COMMAND
        elif kind == TokenType.COMMAND:
            self._expected = TokenType.ARGUMENT
        self._buffer.clear()

    def _step(self) -> None:
        state = self.state
        char = self._text[self._pos]
        following = _char_at(self._text, self._pos + 1)
        if (
            char in QUOTES
            and following == char
            and not state.in_quotes
            and not state.after_redirection
        ):
            self._empty_quotes()
        elif char in QUOTES and state.delimiter in ("", char):
            self._toggle_quote(char)
        elif is_space(char) and not state.delimiter:
            self._end_word()
        elif is_operator(char) and not state.delimiter:
            self._operator()
        elif is_operator(char):
            self._literal = True
            self._buffer.append(char)
        elif (
            char == "$"
            and state.delimiter != "'"
            and not state.after_redirection
        ):
            self._dollar()
        else:
            self._buffer.append(char)

    def _empty_quotes(self) -> None:
        if _char_at(self._text, self._pos + 2) == "":
            self._emit()
            self.state.after_redirection = False
        else:
            self._pos += 1
            self.state.empty_quotes = True

    def _toggle_quote(self, char: str) -> None:
        state = self.state
        state.quote = Quote.DOUBLE if char == '"' else Quote.SINGLE
        if not state.delimiter:
            state.delimiter = char
            state.in_quotes = True
        elif char == state.delimiter:
            state.delimiter = ""
            state.quote = Quote.NONE
            state.in_quotes = False
        if state.after_redirection:
            self._buffer.append(char)

    def _end_word(self) -> None:
        if self._buffer or self.state.empty_quotes:
            self._emit()
            self.state.after_redirection = False
            self.state.empty_quotes = False

    def _operator(self) -> None:
        if self._buffer:
            self._emit()
        text = self._text
        if is_multi_operator(text[self._pos :]):
            self._buffer.extend(text[self._pos : self._pos + 2])
            self._pos += 1
        else:
            self._buffer.append(text[self._pos])
        self._emit()
        if text[self._pos] != "|":
            self.state.after_redirection = True

    def _dollar(self) -> None:
        state = self.state
        if not state.delimiter and state.quote == Quote.SINGLE:
            state.quote = Quote.DOUBLE
        following = _char_at(self._text, self._pos + 1)
        if following == "" or is_space(following):
            self._buffer.append("$")
            return
        if _is_digit(following):
            self._pos += 1
            return
        if following in QUOTES and state.quote == Quote.NONE:
            return
        if following in QUOTES and state.quote == Quote.DOUBLE:
            self._buffer.append("$")
            return
        self._expand_reference()

    def _expand_reference(self) -> None:
        state = self.state
        text = self._text
        state.expand = False
        start = self._pos + 1
        char = _char_at(text, start)
        if char == "?":
            self._buffer.extend(str(state.last_status))
            self._pos = start
            return
        if not is_name_char(char):
            self._buffer.append("$")
            self._buffer.append(char)
            self._pos = start
            return
        end = start
        while end < len(text) and is_name_char(text[end]):
            end += 1
        value = expand_variable(text[start:end], state)
        if value is None:
            state.expand = True
            value = ""
        self._pos = self._apply_expansion(value, end) - 1

    def _apply_expansion(self, value: str, index: int) -> int:
        text = self._text
        after = _char_at(text, index + 1)
        if _char_at(text, index) == "$" and (
            after in ("", '"') or is_space(after)
        ):
            self._buffer.extend(value)
            self._buffer.append("$")
            self._emit()
            return index + 1
        if value:
            self._split_value(value)
        elif self.state.quote == Quote.DOUBLE:
            self.state.empty_quotes = True
        return index

    def _split_value(self, value: str) -> None:
        split = self.state.quote != Quote.DOUBLE
        for char in value:
            if split and is_space(char):
                if self._buffer:
                    self._literal = True
                    self._emit()
            else:
                self._buffer.append(char)


def tokenize(text: str, state: ShellState) -> List[Token]:
    """Return the tokens of ``text`` using ``state`` for variables and quotes."""
    return Lexer(state).tokenize(text)