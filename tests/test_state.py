from mshell.state import Quote, ShellState


def test_from_mapping_fills_environment():
    state = ShellState.from_mapping({"HOME": "/home/user", "PATH": "/bin"})
    assert state.environ.get("HOME") == "/home/user"
    assert state.environ.get("PATH") == "/bin"
    assert [v.key for v in state.environ] == ["HOME", "PATH"]


def test_export_drops_underscore():
    state = ShellState.from_mapping({"A": "1", "_": "/usr/bin/env", "B": "2"})
    assert "_" in state.environ
    assert "_" not in state.export
    assert [v.key for v in state.export] == ["A", "B"]


def test_export_is_independent_copy():
    state = ShellState.from_mapping({"A": "1"})
    state.export.set("A", "changed")
    assert state.environ.get("A") == "1"
    assert state.export.get("A") == "changed"


def test_defaults():
    state = ShellState()
    assert state.last_status == 0
    assert state.quote is Quote.NONE
    assert state.delimiter == ""
    assert len(state.environ) == 0


def test_reset_quote_state_clears_tracking():
    state = ShellState.from_mapping({"X": "y"})
    state.delimiter = '"'
    state.quote = Quote.DOUBLE
    state.after_redirection = True
    state.empty_quotes = True
    state.in_quotes = True
    state.expand = True
    state.last_status = 2
    state.reset_quote_state()
    assert state.delimiter == ""
    assert state.quote is Quote.NONE
    assert state.after_redirection is False
    assert state.empty_quotes is False
    assert state.in_quotes is False
    assert state.expand is True
    assert state.last_status == 2
    assert state.environ.get("X") == "y"


def test_quote_values_through_state():
    state = ShellState()
    assert int(state.quote) == 0
    state.quote = Quote.SINGLE
    assert int(state.quote) == 1
    state.quote = Quote.DOUBLE
    assert int(state.quote) == 2
    state.reset_quote_state()
    assert int(state.quote) == 0