import os
import sys
import logging
import dataclasses as dt

from typing import Optional
from . import cli, const
from .matcher import ArgumentMatcher

_logger = logging.getLogger(__name__)


@dt.dataclass
class ProbeArgs:
    verbose: bool = False
    flags: list[list[str]] = dt.field(default_factory=list)
    values: list[list[str]] = dt.field(default_factory=list)
    multi: list[list[str]] = dt.field(default_factory=list)
    truncate: Optional[str] = None
    tokens: Optional[list[str]] = None


def _splitNames(names: str) -> list[str]:
    return [name for name in names.split(",") if name]


def probeParser(args: ProbeArgs) -> cli.Parser:
    parser = cli.Parser(
        const.ARGV0,
        const.DESCRIPTION,
        epilog="Aliases are separated by commas, e.g. 'yargs -f v,verbose -- -v'.",
    )

    @parser.flag("v", "verbose", description="Enable verbose logging")
    def _():
        args.verbose = True

    @parser.value("f", "flag", description="Query a flag", multiple=True)
    def _(names: str):
        args.flags.append(_splitNames(names))

    @parser.value("o", "option", description="Query the value of an option", multiple=True)
    def _(names: str):
        args.values.append(_splitNames(names))

    @parser.value("m", "multi", description="Query every value of an option", multiple=True)
    def _(names: str):
        args.multi.append(_splitNames(names))

    @parser.value("t", "truncate", description="Cut the arguments at this exact token")
    def _(token: str):
        args.truncate = token

    @parser.extra(const.DEFAULT_SEPARATOR, description="The arguments to match against")
    def _(tokens: list[str]):
        args.tokens = tokens

    return parser


def argv() -> list[str]:
    """Returns the process arguments, prefixed by the ones from the environment."""
    extra = os.environ.get(const.EXTRA_ARGS_ENV, None)
    return (extra.split(" ") if extra else []) + sys.argv[1:]


def _label(names: list[str]) -> str:
    return ",".join(names)


def run(args: ProbeArgs):
    """Runs the queries described by `args` and prints their outcome."""
    if args.tokens is None:
        raise RuntimeError(
            f"Expected '{const.DEFAULT_SEPARATOR}' followed by the arguments to match"
        )

    matcher = ArgumentMatcher(args.tokens)
    _logger.info(f"Probing {matcher}")

    for names in args.flags:
        found = matcher.queryFlag(*names)
        print(f"flag {_label(names)}: {'true' if found else 'false'}")

    for names in args.values:
        value = matcher.queryValue(*names)
        print(f"value {_label(names)}: {'(absent)' if value is None else repr(value)}")

    for names in args.multi:
        print(f"values {_label(names)}: {matcher.queryValues(*names)}")

    if args.truncate is not None:
        print(f"truncate {args.truncate}: {matcher.truncateAfter(args.truncate)}")

    print(f"remaining: {list(matcher.remaining)}")
