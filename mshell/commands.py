"""Parsed commands, their redirections and here-document collection."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from mshell.expansion import expand_heredoc, remove_quotes, strip_delimiter_quotes
from mshell.state import ShellState

HEREDOC_LIMIT = 16
HEREDOC_LIMIT_STATUS = 2
INTERRUPTED_STATUS = 130
DEFAULT_HEREDOC_DIRECTORY = "/tmp"
HEREDOC_PROMPT = "> "


class HeredocLimitError(RuntimeError):
    """More here-documents were requested than the shell allows."""

    status = HEREDOC_LIMIT_STATUS

    def __init__(self, count: int):
        self.count = count
        super().__init__("maximum here-document count exceeded")


@dataclass
class Redirection:
    """One input or output redirection of a command.

    ``filename`` holds the expanded target, or the raw word when its
    expansion was ambiguous.  For here-documents ``delimiter`` is the
    bare delimiter and ``expand_delimiter`` tells whether the document's
    lines have variables expanded.
    """

    filename: Optional[str]
    output: bool = False
    append: bool = False
    heredoc: bool = False
    delimiter: Optional[str] = None
    expand_delimiter: bool = False
    ambiguous: bool = False
    heredoc_file: Optional[str] = None


@dataclass
class Command:
    """A simple command: its name, arguments and redirections."""

    command: Optional[str] = None
    arguments: List[str] = field(default_factory=list)
    redirections: List[Redirection] = field(default_factory=list)

    def add_redirection(
        self,
        filename: Optional[str],
        delimiter: Optional[str] = None,
        output: bool = False,
        append: bool = False,
        heredoc: bool = False,
        state: Optional[ShellState] = None,
    ) -> Redirection:
        """Expand ``filename``, process ``delimiter`` and append the redirection."""
        if state is None:
            state = ShellState()
        redirection = Redirection(
            filename=None, output=output, append=append, heredoc=heredoc
        )
        if filename is not None:
            processed = remove_quotes(filename, state)
            if processed is None:
                redirection.ambiguous = True
                redirection.filename = filename
            else:
                redirection.filename = processed
        if delimiter is not None:
            state.eof = True
            redirection.delimiter, redirection.expand_delimiter = (
                strip_delimiter_quotes(delimiter)
            )
        self.redirections.append(redirection)
        return redirection


def _show(value: Optional[str]) -> str:
    return "(null)" if value is None else value


def _format_redirection(redirection: Redirection) -> str:
    if not redirection.output:
        heredoc = "true" if redirection.heredoc else "false"
        delimiter = (
            f"{redirection.delimiter} "
            if redirection.delimiter is not None
            else "NULL "
        )
        line = (
            f"  - {_show(redirection.filename)}: Heredoc = {heredoc}"
            f", Delimiter = {delimiter}"
            f"expand_delimiter: {int(redirection.expand_delimiter)}\n"
        )
    else:
        mode = "(Append) \n" if redirection.append else "(Overwrite) \n"
        line = f"{_show(redirection.filename)} {mode}"
    return line + "NEXT \n"


def format_commands(commands: Sequence[Command]) -> str:
    """Describe a command list in the shell's debugging layout.

    Raises ValueError for an empty list.
    """
    if not commands:
        raise ValueError("INPUT EMPTY")
    parts: List[str] = []
    for command in commands:
        name = command.command if command.command is not None else "NULL"
        parts.append(f"Command: {name}\n")
        parts.append("Arguments: " + "".join(f"{arg} " for arg in command.arguments))
        parts.append("\nredirection: \n")
        parts.extend(_format_redirection(r) for r in command.redirections)
        parts.append("\n-----\n")
    return "".join(parts)


def count_heredocs(commands: Iterable[Command]) -> int:
    """Count the input here-documents of a command list."""
    return sum(
        1
        for command in commands
        for redirection in command.redirections
        if not redirection.output and redirection.heredoc
    )


def assign_heredoc_files(
    commands: Iterable[Command], directory: str = DEFAULT_HEREDOC_DIRECTORY
) -> List[str]:
    """Give every here-document a file in ``directory`` and return the paths.

    Numbering restarts at zero for each command.
    """
    paths: List[str] = []
    for command in commands:
        number = 0
        for redirection in command.redirections:
            if redirection.heredoc:
                redirection.heredoc_file = os.path.join(
                    str(directory), f"heredoc{number}"
                )
                paths.append(redirection.heredoc_file)
                number += 1
    return paths


def _remove_heredoc_files(commands: Iterable[Command]) -> None:
    for command in commands:
        for redirection in command.redirections:
            if redirection.heredoc and redirection.heredoc_file:
                try:
                    os.unlink(redirection.heredoc_file)
                except FileNotFoundError:
                    pass


def _write_document(
    redirection: Redirection,
    state: ShellState,
    read_line: Callable[[str], Optional[str]],
) -> None:
    delimiter = redirection.delimiter if redirection.delimiter is not None else ""
    with open(redirection.heredoc_file, "w", encoding="utf-8") as handle:
        os.chmod(redirection.heredoc_file, 0o644)
        while True:
            line = read_line(HEREDOC_PROMPT)
            if line is None or line == delimiter:
                break
            if redirection.expand_delimiter:
                line = expand_heredoc(line, state)
            handle.write(line + "\n")


def collect_heredocs(
    commands: Sequence[Command],
    state: ShellState,
    read_line: Callable[[str], Optional[str]],
) -> bool:
    """Read every here-document of ``commands`` into its file.

    ``read_line`` is called with the prompt and returns a line without its
    newline, or None at end of input.  Returns False when reading was
    interrupted; the files are then removed and the last status is 130.
    Raises HeredocLimitError when more than 16 documents are requested.
    """
    count = count_heredocs(commands)
    if count > HEREDOC_LIMIT:
        raise HeredocLimitError(count)
    if count == 0:
        return True
    if any(
        r.heredoc and not r.heredoc_file
        for command in commands
        for r in command.redirections
    ):
        assign_heredoc_files(commands)
    try:
        for command in commands:
            for redirection in command.redirections:
                if redirection.heredoc:
                    _write_document(redirection, state, read_line)
    except KeyboardInterrupt:
        state.last_status = INTERRUPTED_STATUS
        _remove_heredoc_files(commands)
        return False
    state.last_status = 0
    return True