#!/usr/bin/env python3
"""
 Create a graphviz state diagram from a state graph configuration.

 Usage:
    render_state_graph.py -c <config> [-o <output>] [--rankdir TB] [-v]

 You can create a diagram using:
    dot -Tpng -o machine.png machine.dot
"""
import logging
import sys

from stategraph.commands import cmd_utils
from stategraph.config import ConfigError
from stategraph.config import manager
from stategraph.core.stategraph import StateGraph
from stategraph.render import render
from stategraph.style.uml_dot import RANK_DIRECTIONS
from stategraph.style.uml_dot import UmlDotGraphStyle

log = logging.getLogger('render_state_graph')


def parse_args(args=None):
    parser = cmd_utils.build_option_parser(
        description="Render a state machine as a graphviz dot diagram.",
    )
    parser.add_argument(
        '-c', '--config',
        required=True,
        help="State graph configuration path.",
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help="File to write the dot graph to. Defaults to stdout.",
    )
    parser.add_argument(
        '--rankdir',
        choices=RANK_DIRECTIONS,
        default=None,
        help="Direction of the graph layout, overrides the config.",
    )
    return parser.parse_args(args)


def build_diagram(config, rankdir=None):
    state_graph = StateGraph.from_config(config)
    style = UmlDotGraphStyle(rankdir=rankdir or config.rankdir)
    return render(state_graph, style)


def write_diagram(diagram, output=None):
    if output is None:
        sys.stdout.write(diagram + "\n")
        return

    with open(output, 'w') as fh:
        fh.write(diagram + "\n")
    log.info("Wrote %s", output)


def main(args=None):
    opts = parse_args(args)
    cmd_utils.setup_logging(opts)

    try:
        config = manager.load(opts.config)
    except ConfigError as e:
        print("Error in configuration %s: %s" % (opts.config, e), file=sys.stderr)
        return cmd_utils.ExitCode.fail

    try:
        write_diagram(build_diagram(config, opts.rankdir), opts.output)
    except (IOError, OSError) as e:
        print("Failed to write %s: %s" % (opts.output, e), file=sys.stderr)
        return cmd_utils.ExitCode.fail
    return cmd_utils.ExitCode.success


if __name__ == '__main__':
    sys.exit(main())
