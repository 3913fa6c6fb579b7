"""
 Immutable records describing the shape of a state machine: states, super
 states (which own their child states), decision nodes and transitions.

 Records are built once by whoever reflects the state machine and are never
 modified afterwards, so they can be rendered any number of times.
"""
import re

from pyrsistent import CheckedPVector
from pyrsistent import field
from pyrsistent import PClass

NODE_NAME_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
_INVALID_NODE_CHARS_RE = re.compile(r'[^A-Za-z0-9_]')

# dot matches keywords case insensitively
DOT_KEYWORDS = frozenset(('node', 'edge', 'graph', 'digraph', 'subgraph', 'strict'))


def is_node_name(name):
    """True if `name` can be used unquoted as a dot node id."""
    return bool(NODE_NAME_RE.match(name)) and name.lower() not in DOT_KEYWORDS


def make_node_name(state_name):
    """Build an identifier which is safe to use as a dot node id from a
    display name.
    """
    node_name = _INVALID_NODE_CHARS_RE.sub('_', state_name)
    if not is_node_name(node_name):
        node_name = '_' + node_name
    return node_name


def valid_node_name(name):
    return (
        is_node_name(name),
        "node name {!r} is not a valid identifier".format(name),
    )


class Labels(CheckedPVector):
    __type__ = str


def labels_field():
    return field(type=Labels, initial=Labels(), factory=Labels.create)


class Node(PClass):
    state_name = field(type=str, mandatory=True)
    node_name = field(type=str, mandatory=True, invariant=valid_node_name)

    @classmethod
    def named(kls, state_name, **kwargs):
        """Create a node, deriving node_name from state_name if it was not
        given.
        """
        kwargs.setdefault('node_name', make_node_name(state_name))
        return kls(state_name=state_name, **kwargs)


class State(Node):
    entry_actions = labels_field()
    exit_actions = labels_field()

    @property
    def has_actions(self):
        return bool(self.entry_actions or self.exit_actions)


class SubStates(CheckedPVector):
    # SuperState is a State, Decisions are never children
    __type__ = State


class SuperState(State):
    """A state which owns child states. `last_child` is the node_name of one
    of those children which is not itself a super state, and is the node that
    transitions to or from this state are attached to.
    """
    sub_states = field(type=SubStates, initial=SubStates(), factory=SubStates.create)
    last_child = field(type=(str, type(None)), initial=None)

    def __invariant__(self):
        if self.last_child is None:
            return (True, None)
        child = self.last_child_node
        if child is None:
            return (False, "last_child {} is not a sub state of {}".format(self.last_child, self.node_name))
        # clusters are not nodes, so edges can not attach to them
        return (
            not isinstance(child, SuperState),
            "last_child {} of {} is a super state".format(self.last_child, self.node_name),
        )

    @property
    def last_child_node(self):
        for child in self.sub_states:
            if child.node_name == self.last_child:
                return child
        return None


class Decision(Node):
    """A branch point which is not a real state."""

    @property
    def label(self):
        return self.state_name


NODE_TYPES = (SuperState, State, Decision)


class Transition(PClass):
    source = field(type=Node, mandatory=True)
    destination = field(type=Node, mandatory=True)
    trigger = field(type=(str, type(None)), initial=None)
    actions = labels_field()
    guards = labels_field()
