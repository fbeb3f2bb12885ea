"""Variable expansion and quote removal for words, redirections and here-documents."""

from __future__ import annotations

from typing import List, Optional, Tuple

from mshell.state import Quote, ShellState
from mshell.syntax import count_values, remove_space
from mshell.text import is_name_char, is_space

QUOTES = ("'", '"')


def _char_at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def expand_variable(name: str, state: ShellState) -> Optional[str]:
    """Return the value of ``name`` as the current quote context sees it.

    Outside quotes and inside double quotes this is the variable's value,
    or None when it is not set.  Inside single quotes the name itself is
    returned unchanged.
    """
    if state.quote in (Quote.NONE, Quote.DOUBLE):
        return state.environ.get(name)
    return name


def expand_heredoc(line: str, state: ShellState) -> str:
    """Expand ``$`` references in one here-document line.

    Quotes are kept as ordinary characters.  ``$?`` gives the last status,
    ``$`` followed by a digit drops the digit, and any other reference is
    replaced by the variable's value or by nothing.
    """
    parts: List[str] = []
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char != "$":
            parts.append(char)
            index += 1
            continue
        following = _char_at(line, index + 1)
        if following == "?":
            parts.append(str(state.last_status))
            index += 2
        elif following.isascii() and following.isdigit():
            index += 2
            start = index
            while index < length and is_name_char(line[index]):
                index += 1
            parts.append(line[start:index])
        else:
            end = index + 1
            while end < length and is_name_char(line[end]):
                end += 1
            value = state.environ.get(line[index + 1 : end])
            if value:
                parts.append(value)
            index = end
    return "".join(parts)


def _toggle_quote(char: str, state: ShellState) -> None:
    state.quote = Quote.DOUBLE if char == '"' else Quote.SINGLE
    if not state.delimiter:
        state.delimiter = char
        state.in_quotes = True
    elif char == state.delimiter:
        state.delimiter = ""
        state.in_quotes = False
        state.quote = Quote.NONE


def _expand_dollar(text: str, index: int, state: ShellState, out: List[str]) -> int:
    index += 1
    char = _char_at(text, index)
    if char == "?":
        out.append(str(state.last_status))
        return index + 1
    if not is_name_char(char):
        out.append("$" + char)
        return index + 1
    start = index
    while index < len(text) and is_name_char(text[index]):
        index += 1
    value = expand_variable(text[start:index], state) or ""
    state.expand = state.quote != Quote.DOUBLE
    following = _char_at(text, index + 1)
    dollar_at_end = _char_at(text, index) == "$" and (
        following in ("", '"') or is_space(following)
    )
    if value:
        out.append(value)
        if dollar_at_end:
            out.append("$")
            index += 1
    elif state.quote == Quote.DOUBLE:
        state.empty_quotes = True
    return index


def _step(text: str, index: int, state: ShellState, out: List[str]) -> int:
    char = text[index]
    following = _char_at(text, index + 1)
    if char in QUOTES and following == char and not state.in_quotes:
        state.empty_quotes = True
        return index + 2
    if char in QUOTES and state.delimiter in ("", char):
        _toggle_quote(char, state)
        return index + 1
    if char == "$":
        if following == "":
            out.append("$")
            return index + 1
        if following in QUOTES:
            if state.quote == Quote.NONE:
                return index + 1
            if state.quote == Quote.DOUBLE:
                out.append("$")
                return index + 1
        if state.delimiter != "'":
            return _expand_dollar(text, index, state, out)
    out.append(char)
    return index + 1


def remove_quotes(text: str, state: ShellState) -> Optional[str]:
    """Expand variables in ``text`` and strip its quotes.

    Returns None when the word vanishes entirely or when an unquoted
    expansion splits it into several words (an ambiguous redirection).
    A word made only of empty quotes gives an empty string.
    """
    state.reset_quote_state()
    state.expand = False
    out: List[str] = []
    index = 0
    while index < len(text):
        index = _step(text, index, state, out)
    result = "".join(out)
    count = count_values(result)
    if count == 0:
        return "" if state.empty_quotes else None
    if not state.expand:
        return result
    if count == 1:
        return remove_space(result)
    return None


def strip_delimiter_quotes(delimiter: str) -> Tuple[str, bool]:
    """Remove every quote from a here-document delimiter.

    Returns the bare delimiter and whether the document's lines are to be
    expanded, which is the case unless the delimiter starts with a quote.
    """
    expand = not delimiter.startswith(QUOTES)
    bare = "".join(char for char in delimiter if char not in QUOTES)
    return bare, expand