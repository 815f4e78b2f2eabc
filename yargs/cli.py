from enum import Enum
import sys
import dataclasses as dt
import logging

from typing import Any, Callable, Optional
from . import vt100
from .matcher import ArgumentMatcher

_logger = logging.getLogger(__name__)

HELP_NAMES = ("h", "help")


class FieldKind(Enum):
    """
    Enum representing the kind of registered argument.
    """

    FLAG = 0
    VALUE = 1
    EXTRA = 2


@dt.dataclass
class Field:
    """
    A flag, value or extra registered on a `Parser`.

    Attributes:
        kind: What the field matches.
        names: The aliases of the field, or the separator token for extras.
        description: A description of the field, shown in the help.
        multiple: For values, invoke the callback once per occurrence.
        callback: Invoked with the matched result.
    """

    kind: FieldKind
    names: list[str]
    description: str = ""
    multiple: bool = False
    callback: Optional[Callable[..., Any]] = None

    def flags(self) -> str:
        """Formats the aliases the way they are written on the command line."""
        if self.kind == FieldKind.EXTRA:
            return self.names[0]
        return ", ".join(("-" if len(n) == 1 else "--") + n for n in self.names)

    def usage(self) -> str:
        if self.kind == FieldKind.EXTRA:
            return f"[{self.names[0]} args...]"
        if self.kind == FieldKind.VALUE:
            return f"[{self.flags()} <value>{'...' if self.multiple else ''}]"
        return f"[{self.flags()}]"

    def apply(self, matcher: ArgumentMatcher):
        """Queries the matcher and invokes the callback when something matched."""
        assert self.callback

        if self.kind == FieldKind.FLAG:
            if matcher.queryFlag(*self.names):
                self.callback()
        elif self.kind == FieldKind.VALUE:
            if self.multiple:
                for value in matcher.queryValues(*self.names):
                    self.callback(value)
            else:
                value = matcher.queryValue(*self.names)
                if value is not None:
                    self.callback(value)


class HelpRequested(Exception):
    pass


class Parser:
    """
    Registers flags, values and an extra separator with callbacks, then
    evaluates them against an argument list through an `ArgumentMatcher`.
    """

    name: str
    description: str
    epilog: Optional[str]
    addHelp: bool
    fields: list[Field]
    extras: Optional[Field]

    def __init__(
        self,
        name: str,
        description: str = "",
        epilog: Optional[str] = None,
        addHelp: bool = True,
    ):
        self.name = name
        self.description = description
        self.epilog = epilog
        self.addHelp = addHelp
        self.fields = []
        self.extras = None

    def _checkNames(self, names: tuple[str, ...]) -> list[str]:
        if len(names) == 0 or not all(names):
            raise ValueError("Expected at least one non-empty name")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate names in {names}")

        taken = set(HELP_NAMES) if self.addHelp else set()
        for field in self.fields:
            taken.update(field.names)

        for name in names:
            if name in taken:
                raise ValueError(f"Argument '{name}' is already defined")

        return list(names)

    def _register(self, field: Field) -> Callable:
        def wrap(fn: Callable):
            _logger.info(f"Registering {field.kind.name.lower()} '{field.flags()}'")
            field.callback = fn
            if field.kind == FieldKind.EXTRA:
                self.extras = field
            else:
                self.fields.append(field)
            return fn

        return wrap

    def flag(self, *names: str, description: str = "") -> Callable:
        """
        Decorator registering a callback invoked when the flag is present.

        Args:
            names: The aliases of the flag (e.g. "f", "fetch").
            description: A description of the flag.
        """
        return self._register(
            Field(FieldKind.FLAG, self._checkNames(names), description)
        )

    def value(
        self, *names: str, description: str = "", multiple: bool = False
    ) -> Callable:
        """
        Decorator registering a callback invoked with the value of an option.

        Args:
            names: The aliases of the option (e.g. "i", "interval").
            description: A description of the option.
            multiple: Invoke the callback for every occurrence instead of the first one.
        """
        return self._register(
            Field(FieldKind.VALUE, self._checkNames(names), description, multiple)
        )

    def extra(self, token: str = "--", description: str = "") -> Callable:
        """
        Decorator registering a callback invoked with the arguments following `token`.
        """
        if self.extras:
            raise ValueError("Only one extra argument is allowed")
        if not token:
            raise ValueError("Expected a non-empty separator")
        return self._register(Field(FieldKind.EXTRA, [token], description))

    def parse(self, argv: list[str]) -> ArgumentMatcher:
        """
        Evaluates the registered fields against `argv`.

        The extra separator is cut first so nothing after it is mistaken for
        a flag; its callback runs after every other field. Returns the matcher
        so leftovers can be inspected.
        """
        matcher = ArgumentMatcher(argv)

        rest: Optional[list[str]] = None
        if self.extras and self.extras.names[0] in matcher.remaining:
            rest = matcher.truncateAfter(self.extras.names[0])

        if self.addHelp and matcher.queryFlag(*HELP_NAMES):
            raise HelpRequested()

        for field in self.fields:
            field.apply(matcher)

        if rest is not None:
            assert self.extras and self.extras.callback
            self.extras.callback(rest)

        if len(matcher) > 0:
            _logger.debug(f"Unmatched arguments: {matcher.remaining}")

        return matcher

    def usage(self) -> str:
        """Returns a usage string built from the registered fields."""
        res = []
        if self.addHelp:
            res.append("[-h, --help]")
        res.extend(field.usage() for field in self.fields)
        if self.extras:
            res.append(self.extras.usage())
        return " ".join(res)

    def printUsage(self, status: int = 0) -> int:
        """
        Prints the usage line, to stdout when `status` is zero and to stderr
        otherwise, and returns `status` so it can be used as an exit code.
        """
        file = sys.stdout if status == 0 else sys.stderr
        print(f"Usage: {self.name} {self.usage()}", file=file)
        return status

    def help(self):
        """Prints the help message."""
        vt100.title(self.name)
        print()

        vt100.subtitle("Usage")
        print(vt100.indent(f"{self.name} {self.usage()}"))
        print()

        if self.description:
            vt100.subtitle("Description")
            print(vt100.indent(self.description))
            print()

        fields = self.fields + ([self.extras] if self.extras else [])
        if any(fields):
            vt100.subtitle("Options")
            for field in fields:
                line = field.flags()
                if field.description:
                    line += f" {field.description}"
                print(vt100.indent(line))
            print()

        if self.epilog:
            print(self.epilog)
            print()
