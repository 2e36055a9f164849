"""A small command-line option parser with aligned, wrapped help output.

Each option has one or more flags (aliases) and a value kind: ``bool``,
``int``, ``float`` or ``str``.  Values follow the flag either after a space
or after ``=``.  Boolean options take no value; they become ``True`` when
given alone and accept an optional ``true``/``false``.  Options are applied
in order, so the last occurrence wins.
"""

from __future__ import annotations

import re
import sys
from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, TextIO

_MAX_LINE_WIDTH = 60
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_KINDS = (bool, int, float, str)


class CommandLineError(ValueError):
    """Raised when the command line cannot be parsed."""


@dataclass(frozen=True)
class _Argument:
    flags: tuple[str, ...]
    dest: str
    kind: type
    help: str
    default: Any


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    return min(max(int(match.group(1)), _INT32_MIN), _INT32_MAX)


def _to_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))


def _split_words(text: str) -> list[str]:
    """Cut the text before every space that is not its first character."""
    cuts = [pos for pos, char in enumerate(text) if char == " " and pos > 0]
    bounds = [0, *cuts, len(text)]
    return [text[start:end] for start, end in zip(bounds, bounds[1:])]


def _wrap(flags: str, text: str, width: int) -> list[str]:
    lines = []
    line = flags.ljust(width)
    used = 0
    chunks = _split_words(text)
    for number, chunk in enumerate(chunks, 1):
        line += chunk
        used += len(chunk)
        if number == len(chunks) or used > _MAX_LINE_WIDTH:
            lines.append(line)
            line = " ".ljust(width - 1)
            used = 0
    return lines


class CommandLine:
    """Collects option definitions and parses argument lists against them."""

    def __init__(self, description: str) -> None:
        self.description = description
        self._arguments: list[_Argument] = []

    def add_argument(
        self,
        flags: str | Iterable[str],
        dest: str,
        kind: type = bool,
        help: str = "",
        default: Any = None,
    ) -> None:
        """Register an option stored under ``dest`` when parsed."""
        if kind not in _KINDS:
            raise TypeError(f"unsupported argument kind: {kind!r}")
        flag_tuple = (flags,) if isinstance(flags, str) else tuple(flags)
        if default is None:
            default = kind()
        self._arguments.append(_Argument(flag_tuple, dest, kind, help, default))

    def format_help(self) -> str:
        """Return the description followed by one aligned block per option."""
        width = max(
            (sum(len(flag) + 2 for flag in arg.flags) for arg in self._arguments),
            default=0,
        )
        lines = [self.description]
        for argument in self._arguments:
            lines.extend(_wrap(", ".join(argument.flags), argument.help, width))
        return "".join(line + "\n" for line in lines)

    def print_help(self, stream: TextIO | None = None) -> None:
        """Write the help text to ``stream`` (standard output by default)."""
        (stream if stream is not None else sys.stdout).write(self.format_help())

    def _find(self, flag: str) -> _Argument | None:
        return next((arg for arg in self._arguments if flag in arg.flags), None)

    def parse(self, args: Sequence[str]) -> dict[str, Any]:
        """Parse ``args`` and return a mapping from destination to value.

        Options that are not given keep their defaults.  Unknown flags are
        reported on standard error and skipped.
        """
        values = {arg.dest: arg.default for arg in self._arguments}
        pending = deque(args)
        while pending:
            token = pending.popleft()
            flag, has_equals, value = token.partition("=")
            separate = False
            if not has_equals and pending:
                value = pending[0]
                separate = True

            argument = self._find(flag)
            if argument is None:
                print(
                    f'Ignoring unknown command line argument "{flag}".',
                    file=sys.stderr,
                )
                continue

            if argument.kind is bool:
                if value and value not in ("true", "false"):
                    separate = False
                values[argument.dest] = value != "false"
            elif not value:
                raise CommandLineError(
                    "Failed to parse command line arguments: "
                    f'Missing value for argument "{flag}"!'
                )
            elif argument.kind is str:
                values[argument.dest] = value
            elif argument.kind is int:
                values[argument.dest] = _to_int(value)
            else:
                values[argument.dest] = _to_float(value)

            if separate:
                pending.popleft()
        return values