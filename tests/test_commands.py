import os

import pytest

from mshell.commands import (
    Command,
    HeredocLimitError,
    Redirection,
    assign_heredoc_files,
    collect_heredocs,
    count_heredocs,
    format_commands,
)
from mshell.state import ShellState


def _state():
    return ShellState.from_mapping({"USER": "alice", "WORDS": "a b"})


def _feeder(lines):
    items = iter(lines)

    def read_line(prompt):
        assert prompt == "> "
        return next(items, None)

    return read_line


def test_add_redirection_strips_quotes():
    command = Command("cat")
    redirection = command.add_redirection('"out"file', None, True, False, False, _state())
    assert redirection.filename == "outfile"
    assert redirection.ambiguous is False
    assert command.redirections == [redirection]


def test_add_redirection_expands_variable():
    command = Command("cat")
    redirection = command.add_redirection("$USER", output=True, state=_state())
    assert redirection.filename == "alice"


def test_add_redirection_ambiguous_keeps_raw_word():
    command = Command("cat")
    redirection = command.add_redirection("$WORDS", output=True, state=_state())
    assert redirection.ambiguous is True
    assert redirection.filename == "$WORDS"


def test_add_redirection_quoted_delimiter_disables_expansion():
    state = _state()
    command = Command("cat")
    redirection = command.add_redirection("EOF", "'EOF'", heredoc=True, state=state)
    assert redirection.delimiter == "EOF"
    assert redirection.expand_delimiter is False
    assert state.eof is True


def test_add_redirection_plain_delimiter_expands():
    command = Command("cat")
    redirection = command.add_redirection("EOF", "EOF", heredoc=True, state=_state())
    assert redirection.expand_delimiter is True


def test_format_commands_layout():
    command = Command("ls", ["-l"])
    command.redirections.append(Redirection("out", output=True, append=True))
    command.redirections.append(
        Redirection("in", heredoc=True, delimiter="EOF", expand_delimiter=True)
    )
    expected = (
        "Command: ls\n"
        "Arguments: -l \n"
        "redirection: \n"
        "out (Append) \n"
        "NEXT \n"
        "  - in: Heredoc = true, Delimiter = EOF expand_delimiter: 1\n"
        "NEXT \n"
        "\n-----\n"
    )
    assert format_commands([command]) == expected


def test_format_commands_null_command():
    text = format_commands([Command()])
    assert text.startswith("Command: NULL\nArguments: \n")


def test_format_commands_empty_raises():
    with pytest.raises(ValueError):
        format_commands([])


def test_count_heredocs_ignores_outputs():
    command = Command("cat")
    command.redirections.append(Redirection("a", heredoc=True))
    command.redirections.append(Redirection("b", output=True, heredoc=True))
    command.redirections.append(Redirection("c"))
    assert count_heredocs([command, Command("x")]) == 1


def test_assign_heredoc_files_restarts_per_command(tmp_path):
    first = Command("a", redirections=[Redirection("x", heredoc=True)] * 1)
    second = Command("b", redirections=[Redirection("y", heredoc=True)])
    paths = assign_heredoc_files([first, second], str(tmp_path))
    assert paths[0] == paths[1]
    assert os.path.basename(paths[0]) == "heredoc0"
    assert first.redirections[0].heredoc_file == paths[0]


def test_collect_heredocs_writes_expanded_document(tmp_path):
    state = _state()
    state.last_status = 7
    command = Command("cat")
    command.add_redirection("EOF", "EOF", heredoc=True, state=state)
    assign_heredoc_files([command], str(tmp_path))
    done = collect_heredocs([command], state, _feeder(["hi $USER", "EOF", "never"]))
    assert done is True
    assert state.last_status == 0
    with open(command.redirections[0].heredoc_file, encoding="utf-8") as handle:
        assert handle.read() == "hi alice\n"


def test_collect_heredocs_quoted_delimiter_keeps_text(tmp_path):
    state = _state()
    command = Command("cat")
    command.add_redirection("EOF", '"EOF"', heredoc=True, state=state)
    assign_heredoc_files([command], str(tmp_path))
    collect_heredocs([command], state, _feeder(["$USER"]))
    with open(command.redirections[0].heredoc_file, encoding="utf-8") as handle:
        assert handle.read() == "$USER\n"


def test_collect_heredocs_interrupted_removes_files(tmp_path):
    state = _state()
    command = Command("cat")
    command.add_redirection("EOF", "EOF", heredoc=True, state=state)
    assign_heredoc_files([command], str(tmp_path))

    def read_line(prompt):
        raise KeyboardInterrupt

    assert collect_heredocs([command], state, read_line) is False
    assert state.last_status == 130
    assert not os.path.exists(command.redirections[0].heredoc_file)


def test_collect_heredocs_limit():
    command = Command("cat", redirections=[Redirection("x", heredoc=True) for _ in range(17)])
    with pytest.raises(HeredocLimitError) as info:
        collect_heredocs([command], _state(), _feeder([]))
    assert info.value.status == 2
    assert str(info.value) == "maximum here-document count exceeded"


def test_collect_heredocs_without_documents_is_noop():
    state = _state()
    state.last_status = 5
    assert collect_heredocs([Command("ls")], state, _feeder([])) is True
    assert state.last_status == 5