"""Ordered shell variable lists and the updates the shell applies to them."""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import IO, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

SHLVL_LIMIT = 1000
_INT_LIMIT = 2147483647


@dataclass
class Variable:
    """One shell variable."""

    key: str
    value: Optional[str]
    flag: int = 1


EntryLike = Union[Variable, Tuple[str, Optional[str]], Tuple[str, Optional[str], int]]


class Environment:
    """An ordered list of variables looked up by exact key."""

    def __init__(self, entries: Iterable[EntryLike] = ()):
        self._entries = [
            replace(entry) if isinstance(entry, Variable) else Variable(*entry)
            for entry in entries
        ]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Environment":
        """Build an environment from a mapping, keeping its order."""
        return cls((key, value) for key, value in mapping.items())

    def _find(self, name: str) -> Optional[Variable]:
        return next((entry for entry in self._entries if entry.key == name), None)

    def get(self, name: str) -> Optional[str]:
        """Return the value of the first variable called ``name``, or None."""
        entry = self._find(name)
        return entry.value if entry is not None else None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find(name) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._entries)

    def set(self, key: str, value: Optional[str], flag: int = 1) -> None:
        """Drop any variable called ``key`` and append the new one at the end."""
        self.remove(key)
        self._entries.append(Variable(key, value, flag))

    def remove(self, key: str) -> bool:
        """Remove the first variable called ``key``; return whether one existed."""
        for index, entry in enumerate(self._entries):
            if entry.key == key:
                del self._entries[index]
                return True
        return False

    def copy(self) -> "Environment":
        """Return an independent copy."""
        return Environment(self._entries)


def parse_shell_level(text: Optional[str]) -> int:
    """Read a shell level the way the shell does.

    Negative numbers and values reaching the int limit give -1; text that
    is not a plain number gives 0.
    """
    text = text or ""
    index = 0
    while index < len(text) and (text[index] == " " or "\t" <= text[index] <= "\r"):
        index += 1
    if index < len(text) and text[index] == "-":
        after = index + 1
        while after < len(text) and text[after].isdigit() and text[after].isascii():
            after += 1
        if after == len(text) or text[after] == " " or "\t" <= text[after] <= "\r":
            return -1
        return 0
    if index < len(text) and text[index] == "+":
        index += 1
    result = 0
    while index < len(text) and text[index].isascii() and text[index].isdigit():
        result = result * 10 + int(text[index])
        if result >= _INT_LIMIT:
            return -1
        index += 1
    if text[index:].strip(" \t\n\v\f\r"):
        return 0
    return result


def update_shlvl(environ: Environment, output: Optional[IO[str]] = None) -> None:
    """Raise every SHLVL variable by one, resetting it to 1 when too high."""
    out = output if output is not None else sys.stdout
    for entry in environ:
        if entry.key != "SHLVL":
            continue
        level = parse_shell_level(entry.value) + 1
        if level >= SHLVL_LIMIT:
            out.write(f"warning: shell level ({level}) too high, resetting to 1\n")
            level = 1
        entry.value = str(level)


def update_last_argument(
    environ: Environment,
    command: Optional[str],
    arguments: Optional[Sequence[str]],
) -> None:
    """Set ``_`` to the last word of a command line."""
    if command is None and arguments is None:
        value = ""
    elif not arguments:
        value = command if command is not None else ""
    else:
        value = arguments[-1]
    environ.set("_", value, 1)