import logging
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Tuple

from stategraph.core import GraphError
from stategraph.core import UnknownNodeError
from stategraph.core.model import Decision
from stategraph.core.model import make_node_name
from stategraph.core.model import Node
from stategraph.core.model import NODE_TYPES
from stategraph.core.model import State
from stategraph.core.model import SuperState
from stategraph.core.model import Transition

log = logging.getLogger(__name__)


def iter_tree(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every node and, for super states, all of their descendants,
    depth-first in declaration order.
    """
    for node in nodes:
        yield node
        if isinstance(node, SuperState):
            yield from iter_tree(node.sub_states)


def build_state(state_config, nodes: Dict[str, Node]) -> State:
    """Build a State or SuperState, recording every node created by name in
    `nodes`.
    """
    kwargs = dict(
        node_name=state_config.node_name or make_node_name(state_config.name),
        entry_actions=state_config.entry or (),
        exit_actions=state_config.exit or (),
    )
    if state_config.states is None:
        state = State.named(state_config.name, **kwargs)
    else:
        sub_states = [build_state(child, nodes) for child in state_config.states]
        last_child = None
        if state_config.last_child is not None:
            last_child = nodes[state_config.last_child].node_name
        state = SuperState.named(
            state_config.name,
            sub_states=sub_states,
            last_child=last_child,
            **kwargs
        )
    nodes[state_config.name] = state
    return state


class StateGraph:
    """The complete structure of a state machine, ready to be rendered.

    `states` are the top level states in the order they should be drawn,
    super states own their children. Every node must have a unique node_name
    across the whole tree, so a state can never contain itself.
    """

    def __init__(
        self,
        states: Iterable[State],
        transitions: Iterable[Transition] = (),
        decisions: Iterable[Decision] = (),
        initial: Optional[State] = None,
    ) -> None:
        self.states: Tuple[State, ...] = tuple(states)
        self.transitions: Tuple[Transition, ...] = tuple(transitions)
        self.decisions: Tuple[Decision, ...] = tuple(decisions)
        self.initial: Optional[State] = initial

        self._nodes: Dict[str, Node] = {}
        for node in self.iter_nodes():
            self._add_node(node)
        for decision in self.decisions:
            if not isinstance(decision, Decision):
                raise UnknownNodeError(decision)
            self._add_node(decision)

        for transition in self.transitions:
            self._check_member(transition.source, "Transition source")
            self._check_member(transition.destination, "Transition destination")

        if initial is not None:
            self._check_member(initial, "Initial state")

        log.debug(
            "Built state graph with %d nodes and %d transitions",
            len(self._nodes), len(self.transitions),
        )

    @classmethod
    def from_config(kls, config) -> "StateGraph":
        """Build a StateGraph from a validated ConfigStateGraph. Nodes are
        referred to by name in the config, and by value in the model.
        """
        nodes: Dict[str, Node] = {}
        states = [build_state(state_config, nodes) for state_config in config.states]
        decisions = []
        for decision_config in config.decisions or ():
            decision = Decision.named(decision_config.label, node_name=decision_config.name)
            nodes[decision_config.name] = decision
            decisions.append(decision)

        transitions = [
            Transition(
                source=nodes[transition_config.source],
                destination=nodes[transition_config.destination],
                trigger=transition_config.trigger,
                actions=transition_config.actions or (),
                guards=transition_config.guards or (),
            ) for transition_config in config.transitions or ()
        ]
        initial = nodes[config.initial] if config.initial is not None else None
        return kls(states, transitions=transitions, decisions=decisions, initial=initial)

    def _add_node(self, node: Node) -> None:
        if not isinstance(node, NODE_TYPES):
            raise UnknownNodeError(node)
        if node.node_name in self._nodes:
            raise GraphError("Duplicate node name %s" % node.node_name)
        self._nodes[node.node_name] = node

    def _check_member(self, node: Node, description: str) -> None:
        if self._nodes.get(node.node_name) != node:
            raise GraphError("%s %s is not part of this graph" % (description, node.node_name))

    def iter_nodes(self) -> Iterator[Node]:
        """Every node reachable from the top level states, depth-first."""
        return iter_tree(self.states)

    def find(self, node_name: str) -> Optional[Node]:
        return self._nodes.get(node_name)

    def __contains__(self, node_name: str) -> bool:
        return node_name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return "<StateGraph states=%d transitions=%d decisions=%d>" % (
            len(self.states), len(self.transitions), len(self.decisions),
        )
