"""
 Assemble a complete graph document from a StateGraph and a GraphStyle.
"""
import logging
from typing import Callable
from typing import Dict
from typing import Optional
from typing import Sequence

from stategraph.core.stategraph import StateGraph
from stategraph.style import GraphStyle
from stategraph.style.uml_dot import UmlDotGraphStyle

log = logging.getLogger(__name__)

STATES = 'states'
DECISIONS = 'decisions'
TRANSITIONS = 'transitions'
INITIAL = 'initial'

DEFAULT_ORDER = (STATES, DECISIONS, TRANSITIONS, INITIAL)


def render_states(state_graph: StateGraph, style: GraphStyle) -> str:
    return "".join(style.format_state(state) for state in state_graph.states)


def render_decisions(state_graph: StateGraph, style: GraphStyle) -> str:
    return "".join(
        style.format_one_decision_node(decision.node_name, decision.label)
        for decision in state_graph.decisions
    )


def render_transitions(state_graph: StateGraph, style: GraphStyle) -> str:
    return "".join("\n" + line for line in style.format_all_transitions(state_graph.transitions))


def render_initial(state_graph: StateGraph, style: GraphStyle) -> str:
    if state_graph.initial is None:
        return ""
    return style.format_initial_state(state_graph.initial)


SECTION_RENDERERS: Dict[str, Callable[[StateGraph, GraphStyle], str]] = {
    STATES: render_states,
    DECISIONS: render_decisions,
    TRANSITIONS: render_transitions,
    INITIAL: render_initial,
}


def render(
    state_graph: StateGraph,
    style: Optional[GraphStyle] = None,
    order: Sequence[str] = DEFAULT_ORDER,
) -> str:
    """Render `state_graph` into a single document. The style prefix always
    comes first and its suffix last, `order` chooses the sections in between.
    """
    unknown = [section for section in order if section not in SECTION_RENDERERS]
    if unknown:
        raise ValueError("Unknown sections: %s" % ', '.join(unknown))

    if style is None:
        style = UmlDotGraphStyle()

    log.debug("Rendering %r with %s", state_graph, type(style).__name__)
    fragments = [style.get_prefix()]
    fragments.extend(SECTION_RENDERERS[section](state_graph, style) for section in order)
    fragments.append(style.get_suffix())
    return "".join(fragments)
