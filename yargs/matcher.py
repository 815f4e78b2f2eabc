"""
Consuming matcher over a raw argument list.

Flags and values are looked up by alias, in any order and as many times as
needed. Every successful lookup removes the matched tokens from the working
set, so asking again for the same name returns the next occurrence, if any.
Tokens nobody asks for are simply left in `remaining`.
"""

import dataclasses as dt
import logging

from typing import Optional, Sequence
from .scan import Scan

_logger = logging.getLogger(__name__)


# --- Predicates ------------------------------------------------------------- #


@dt.dataclass
class OptionMatch:
    """
    Result of matching a token against an alias set in option form.

    Attributes:
        name: The alias that matched.
        value: The text after the `=` separator, or None when the value
            must be taken from the following token.
    """

    name: str
    value: Optional[str]


def _aliases(names: Sequence[str]) -> list[str]:
    return [name for name in names if name]


def _afterDashes(arg: str) -> list[Scan]:
    """
    Scanners positioned after one and, when present, after two leading
    dashes. Tokens with zero or three or more leading dashes yield none.
    """
    s = Scan(arg)
    if not s.skipStr("-") or s.isStr("--"):
        return []

    result = [Scan(arg, 1)]
    if s.isStr("-"):
        result.append(Scan(arg, 2))
    return result


def matchFlag(arg: str, names: Sequence[str]) -> bool:
    """Checks if `arg` is `-name` or `--name` for one of `names`, with nothing after it."""
    return any(s.rest() in names for s in _afterDashes(arg))


def matchOption(arg: str, names: Sequence[str]) -> Optional[OptionMatch]:
    """
    Matches `arg` against `names` in option form.

    The name must be followed by either the end of the token or a `=`. Only
    the first `=` after the name separates the value, which may itself
    contain more `=` characters or be empty.
    """
    for s in _afterDashes(arg):
        for name in names:
            s.save()
            if s.skipStr(name):
                if s.eof():
                    return OptionMatch(name, None)
                if s.skipStr("="):
                    return OptionMatch(name, s.rest())
            s.restore()

    return None


# --- Matcher ---------------------------------------------------------------- #


class ArgumentMatcher:
    _original: tuple[str, ...]
    _remaining: list[str]

    def __init__(self, argv: Sequence[str]):
        self._original = tuple(argv)
        self._remaining = list(self._original)

    @property
    def original(self) -> tuple[str, ...]:
        """The arguments as given at construction."""
        return self._original

    @property
    def remaining(self) -> tuple[str, ...]:
        """A snapshot of the arguments that have not been consumed yet."""
        return tuple(self._remaining)

    def __len__(self) -> int:
        return len(self._remaining)

    def __repr__(self) -> str:
        return f"ArgumentMatcher(remaining={self._remaining!r})"

    def queryFlag(self, *names: str) -> bool:
        """
        Was the flag (an option with no value) provided?

        Every occurrence of any of the aliases is consumed in a single sweep.
        """
        aliases = _aliases(names)
        if not aliases:
            _logger.debug("Flag query without any name, nothing to match")
            return False

        kept: list[str] = []
        found = False
        for arg in self._remaining:
            if matchFlag(arg, aliases):
                _logger.debug(f"Consumed flag '{arg}'")
                found = True
            else:
                kept.append(arg)

        self._remaining[:] = kept
        return found

    def queryValue(self, *names: str) -> Optional[str]:
        """
        What value was provided for this option?

        Returns the value of the leftmost occurrence and consumes it. An
        empty string means the option was given as `--name=`. None means the
        option is absent, or was given as the last token with nothing after
        it, in which case the token is left for `queryFlag`.
        """
        aliases = _aliases(names)
        if not aliases:
            _logger.debug("Value query without any name, nothing to match")
            return None

        for index, arg in enumerate(self._remaining):
            match = matchOption(arg, aliases)
            if match is None:
                continue

            if match.value is not None:
                del self._remaining[index]
                _logger.debug(f"Consumed option '{arg}'")
                return match.value

            if index + 1 < len(self._remaining):
                value = self._remaining[index + 1]
                del self._remaining[index : index + 2]
                _logger.debug(f"Consumed option '{arg}' with value '{value}'")
                return value

        return None

    def queryValues(self, *names: str) -> list[str]:
        """Consumes every value given for the option, from left to right."""
        result: list[str] = []
        while (value := self.queryValue(*names)) is not None:
            result.append(value)
        return result

    def truncateAfter(self, token: str) -> list[str]:
        """
        Cuts the remaining arguments at the first exact occurrence of `token`.

        The token and everything after it are consumed; the arguments that
        followed it are returned. Returns an empty list if `token` is absent.
        """
        if token not in self._remaining:
            return []

        index = self._remaining.index(token)
        result = self._remaining[index + 1 :]
        del self._remaining[index:]
        _logger.debug(f"Truncated {len(result)} argument(s) after '{token}'")
        return result
