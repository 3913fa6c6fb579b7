"""
Common code for command line utilities (see stategraph/bin/)
"""
import argparse
import logging
import sys

import stategraph

log = logging.getLogger("stategraph.commands")


class ExitCode:
    """Enumeration of exit status codes."""
    success = 0
    fail = 1


def build_option_parser(usage=None, epilog=None, description=None):
    parser = argparse.ArgumentParser(
        usage=usage,
        epilog=epilog,
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version="%s %s" % (parser.prog, stategraph.__version__),
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        help="Verbose logging",
        default=None,
    )

    return parser


def setup_logging(options):
    if options.verbose is None:
        level = logging.CRITICAL
    elif options.verbose == 1:
        level = logging.WARNING
    elif options.verbose == 2:
        level = logging.INFO
    else:
        level = logging.NOTSET

    logging.basicConfig(
        level=level,
        format='%(name)s %(levelname)s %(message)s',
        stream=sys.stderr,
    )
