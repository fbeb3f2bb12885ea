# mshell

`mshell` is the front end of a small interactive shell, packaged as a Python
library. It does the following to an input line:

- checks it for misplaced pipes and redirections and for unclosed quotes;
- expands `$VAR` and `$?`;
- removes quotes;
- splits the line into typed tokens.

It also models commands with their redirections and reads here-documents into
files.

The package needs nothing outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `mshell.text`

Character helpers:

- `is_space` tests for a space or `\t` through `\r`.
- `is_name_char` tests for a letter, a digit or `_`.
- `is_operator` tests for `|`, `<` or `>`.
- `is_multi_operator` tests whether text starts with `<<` or `>>`.

Two string helpers follow the C library:

- `compare` works like strcmp.
- `fixed_copy` copies at most `n` characters and pads with NULs.

`LineReader` reads lines from a text or binary stream in chunks of a fixed
size, 42 by default. Each line keeps its newline. `read_line` returns `None`
at end of input. The reader can also be iterated over.

### `mshell.environment`

`Environment` is an ordered list of `Variable` entries, looked up by exact
key. It has these operations:

- `get`, `in` and `len`, and iteration over the entries;
- `set`, which removes any existing entry and appends the new one;
- `remove`;
- `copy`;
- `from_mapping`, which builds an environment from a mapping.

`parse_shell_level` reads a `SHLVL` value. A negative number, or one that
reaches the int limit, gives -1. Anything that is not a plain number gives 0.

`update_shlvl` adds one to `SHLVL`. When the result is 1000 or more it writes a
warning and resets the level to 1.

`update_last_argument` sets `_` to the last word of a command.

### `mshell.state`

`ShellState` holds:

- the environment and the export list;
- the last exit status;
- the quote-tracking flags that the lexer and the expander share.

`ShellState.from_mapping` builds the export list as a copy of the environment
without `_`. `reset_quote_state` clears the quote tracking.

### `mshell.syntax`

- `check_syntax` returns the line, or raises `ShellSyntaxError` when a pipe or
  redirection is misplaced.
- `check_unclosed_quotes` raises `UnclosedQuoteError` and sets the last status
  to 130.
- `trim_spaces` drops leading blanks.
- `count_values` counts the words in a string.
- `remove_space` removes every blank.
- `token_error_message` gives the message for an unexpected token.

### `mshell.expansion`

- `expand_variable` looks up a name. Inside single quotes it returns the name
  unchanged.
- `expand_heredoc` expands one here-document line and leaves quotes as
  ordinary characters.
- `remove_quotes` expands a word and strips its quotes. It returns `None` when
  the word vanishes or is ambiguous.
- `strip_delimiter_quotes` returns a bare here-document delimiter together with
  a flag that says whether the document is to be expanded.

### `mshell.lexer`

`tokenize` and the `Lexer` class turn a line into `Token` values. Each token
has a `TokenType`, one of:

- `COMMAND`
- `ARGUMENT`
- `PIPE`
- `RED_IN`
- `RED_OUT`
- `APPEND`
- `HEREDOC`

### `mshell.commands`

`Command` holds a name, its arguments and its `Redirection` entries.
`Command.add_redirection` expands the file name and processes a here-document
delimiter.

`format_commands` renders a command list in a debugging layout. It raises
`ValueError` for an empty list.

For here-documents:

- `count_heredocs` counts them.
- `assign_heredoc_files` names their files `heredoc0`, `heredoc1` and so on,
  in `/tmp` by default.
- `collect_heredocs` reads each document through a `read_line(prompt)`
  callback.
  - It raises `HeredocLimitError` when there are more than 16.
  - On `KeyboardInterrupt` it removes the files, sets the last status to 130
    and returns `False`.

## Example

```python
import os

from mshell.state import ShellState
from mshell.syntax import check_syntax, check_unclosed_quotes, trim_spaces
from mshell.lexer import tokenize

state = ShellState.from_mapping(os.environ)
line = trim_spaces('echo "$HOME" | wc -c > out.txt')
check_syntax(line)
check_unclosed_quotes(line, state)
for token in tokenize(line, state):
    print(token.type.name, token.value)
```

## What it does not do

The package only reads and parses input. It does not:

- run commands or pipelines;
- provide builtins such as `cd`, `echo` or `export`;
- open files for redirections;
- handle signals;
- offer an interactive prompt or a command-line program.

Turning a token list into a list of `Command` objects is also left to the
caller.