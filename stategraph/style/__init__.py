"""
 Graph styles turn the nodes and transitions of a StateGraph into text for a
 particular graph description language. A new output dialect subclasses
 GraphStyle and implements the format_* methods.
"""
import abc
from typing import Iterable
from typing import List
from typing import Optional
from typing import Sequence

from stategraph.core import UnknownNodeError
from stategraph.core.model import Decision
from stategraph.core.model import Node
from stategraph.core.model import State
from stategraph.core.model import SuperState
from stategraph.core.model import Transition


class GraphStyle(abc.ABC):
    """Base class for output dialects. Styles only hold their formatting
    configuration and never modify the graph they format.
    """

    @abc.abstractmethod
    def get_prefix(self) -> str:
        """Text that starts a new graph."""

    def get_suffix(self) -> str:
        """Text that ends the graph."""
        return ""

    def format_state(self, node: Node) -> str:
        """Format any node of the graph, recursing into super states."""
        if isinstance(node, SuperState):
            return self.format_one_cluster(node)
        if isinstance(node, State):
            return self.format_one_state(node)
        if isinstance(node, Decision):
            return self.format_one_decision_node(node.node_name, node.label)
        raise UnknownNodeError(node)

    @abc.abstractmethod
    def format_one_state(self, state: State) -> str:
        pass

    @abc.abstractmethod
    def format_one_cluster(self, super_state: SuperState) -> str:
        pass

    @abc.abstractmethod
    def format_one_transition(
        self,
        source: Node,
        trigger: Optional[str],
        actions: Sequence[str],
        destination: Node,
        guards: Sequence[str],
    ) -> str:
        pass

    @abc.abstractmethod
    def format_one_decision_node(self, node_name: str, label: str) -> str:
        pass

    def format_initial_state(self, state: Node) -> str:
        """Text marking `state` as the initial state, empty if the dialect
        has no way to show it.
        """
        return ""

    def format_all_transitions(self, transitions: Iterable[Transition]) -> List[str]:
        return [
            self.format_one_transition(
                transition.source,
                transition.trigger,
                transition.actions,
                transition.destination,
                transition.guards,
            ) for transition in transitions
        ]
