"""
 Generate graphviz dot graphs in basic UML style.

 Super states are drawn as clusters. Graphviz can only draw edges between
 nodes, so a transition to or from a super state is attached to one of its
 children and clipped at the cluster frame with the `lhead` and `ltail`
 attributes (which requires `compound=true`).
"""
import re
from typing import Optional
from typing import Sequence
from typing import Tuple

from stategraph.core.model import Node
from stategraph.core.model import State
from stategraph.core.model import SuperState
from stategraph.style import GraphStyle

RANK_DIRECTIONS = ('LR', 'RL', 'TB', 'BT')
DEFAULT_RANK_DIRECTION = 'LR'

# Line break inside a dot label
LINE_BREAK = "\\n"
CLUSTER_SEPARATOR = LINE_BREAK + "----------"

# Characters which split the label of a record shaped node into fields
RECORD_CHARS_RE = re.compile(r'([|{}<>])')


def escape_label(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')


def escape_record_label(text: str) -> str:
    return RECORD_CHARS_RE.sub(r'\\\1', escape_label(text))


def build_edge_label(trigger: Optional[str], actions: Sequence[str], guards: Sequence[str]) -> str:
    """Build a UML transition label: `trigger / action, action [guard] [guard]`"""
    label = escape_label(trigger or "")

    if actions:
        label += " / " + ", ".join(escape_label(action) for action in actions)

    for guard in guards:
        if label:
            label += " "
        label += "[" + escape_label(guard) + "]"

    return label


def action_lines(state: State, escape=escape_label) -> Sequence[str]:
    return (
        ["entry / " + escape(action) for action in state.entry_actions] +
        ["exit / " + escape(action) for action in state.exit_actions]
    )


def get_cluster_name(state: Node) -> str:
    return "cluster" + state.node_name


def resolve_endpoint(state: Node) -> Tuple[str, Optional[str]]:
    """Return the name of the node a transition should be drawn to, and the
    name of the cluster the edge should be clipped at.

    A super state is not a node in the graph, so edges go to its last child
    (or its own name when no child was recorded) and are clipped at its
    cluster. Any other node is connected directly and has no cluster.
    """
    if isinstance(state, SuperState):
        last_child = state.last_child_node
        node_name = last_child.node_name if last_child is not None else state.node_name
        return node_name, get_cluster_name(state)
    return state.node_name, None


class UmlDotGraphStyle(GraphStyle):

    def __init__(self, rankdir: str = DEFAULT_RANK_DIRECTION) -> None:
        if rankdir not in RANK_DIRECTIONS:
            raise ValueError("rankdir must be one of %s, got %s" % (', '.join(RANK_DIRECTIONS), rankdir))
        self.rankdir = rankdir

    def get_prefix(self) -> str:
        return (
            "digraph {\n"
            "compound=true;\n"
            "node [shape=Mrecord]\n"
            "rankdir=\"%s\"\n" % self.rankdir
        )

    def get_suffix(self) -> str:
        return "\n}"

    def format_one_cluster(self, super_state: SuperState) -> str:
        label = escape_label(super_state.state_name)
        if super_state.has_actions:
            label += CLUSTER_SEPARATOR
            label += "".join(LINE_BREAK + line for line in action_lines(super_state))

        text = (
            "\n"
            "subgraph %s\n"
            "\t{\n"
            "\tlabel = \"%s\"\n" % (get_cluster_name(super_state), label)
        )
        for sub_state in super_state.sub_states:
            text += self.format_state(sub_state)
        text += "}\n"
        return text

    def format_one_state(self, state: State) -> str:
        label = escape_record_label(state.state_name)
        if state.has_actions:
            label += "|" + LINE_BREAK.join(action_lines(state, escape_record_label))
        return "%s [label=\"%s\"];\n" % (state.node_name, label)

    def format_one_transition(
        self,
        source: Node,
        trigger: Optional[str],
        actions: Sequence[str],
        destination: Node,
        guards: Sequence[str],
    ) -> str:
        label = build_edge_label(trigger, actions, guards)
        source_name, tail_cluster = resolve_endpoint(source)
        destination_name, head_cluster = resolve_endpoint(destination)
        return self.format_one_line(source_name, destination_name, label, tail_cluster, head_cluster)

    def format_one_line(
        self,
        from_node_name: str,
        to_node_name: str,
        label: str,
        tail_cluster: Optional[str] = None,
        head_cluster: Optional[str] = None,
    ) -> str:
        tail = ", ltail=%s" % tail_cluster if tail_cluster is not None else ""
        head = ", lhead=%s" % head_cluster if head_cluster is not None else ""
        return "%s -> %s [style=\"solid\", label=\"%s\"%s%s];" % (
            from_node_name, to_node_name, label, tail, head,
        )

    def format_one_decision_node(self, node_name: str, label: str) -> str:
        return "%s [shape = \"diamond\", label = \"%s\"];\n" % (node_name, escape_label(label))

    def format_initial_state(self, state: Node) -> str:
        node_name, head_cluster = resolve_endpoint(state)
        head = ", lhead=%s" % head_cluster if head_cluster is not None else ""
        return (
            "\ninit [label=\"\", shape=point];"
            "\ninit -> %s [style=\"solid\"%s];" % (node_name, head)
        )
