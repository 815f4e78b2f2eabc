import logging

from . import (
    cli,
    cmds,
    const,
    vt100,
)
from .matcher import ArgumentMatcher, OptionMatch, matchFlag, matchOption  # noqa: F401 re-exported
from .scan import Scan  # noqa: F401 re-exported


class logger:
    @staticmethod
    def setup(verbose: bool):
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format=f"{vt100.CYAN}%(asctime)s{vt100.RESET} {vt100.YELLOW}%(levelname)s{vt100.RESET} %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            logging.basicConfig(
                level=logging.WARNING,
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )


def main() -> int:
    args = cmds.ProbeArgs()
    parser = cmds.probeParser(args)

    try:
        parser.parse(cmds.argv())
        logger.setup(args.verbose)
        cmds.run(args)
        return 0

    except cli.HelpRequested:
        parser.help()
        return 0

    except RuntimeError as e:
        logging.debug(e, exc_info=True)
        vt100.error(str(e))
        return parser.printUsage(1)

    except KeyboardInterrupt:
        print()
        return 1
