import pytest
from pyrsistent import InvariantException

from stategraph.core.model import Decision
from stategraph.core.model import is_node_name
from stategraph.core.model import make_node_name
from stategraph.core.model import Node
from stategraph.core.model import State
from stategraph.core.model import SuperState
from stategraph.core.model import Transition


class TestMakeNodeName:
    def test_valid_name_unchanged(self):
        assert make_node_name('Idle') == 'Idle'
        assert make_node_name('state_2') == 'state_2'

    def test_invalid_characters_replaced(self):
        assert make_node_name('Door Open!') == 'Door_Open_'
        assert make_node_name('a.b-c') == 'a_b_c'

    def test_leading_digit_prefixed(self):
        assert make_node_name('1st') == '_1st'
        assert make_node_name('2 go') == '_2_go'

    def test_dot_keywords_prefixed(self):
        for name in ['Edge', 'node', 'GRAPH', 'digraph', 'Subgraph', 'strict']:
            assert make_node_name(name) == '_' + name

    def test_keyword_as_part_of_name(self):
        assert make_node_name('Edge Case') == 'Edge_Case'

    def test_empty_name(self):
        assert make_node_name('') == '_'


class TestIsNodeName:
    def test_valid(self):
        for name in ['Idle', '_1st', 'state_2', 'Edges']:
            assert is_node_name(name)

    def test_invalid(self):
        for name in ['', '1st', 'has space', 'Edge', 'NODE', 'strict']:
            assert not is_node_name(name)


class TestState:
    def test_named_defaults(self):
        state = State.named('Door Open')
        assert state.state_name == 'Door Open'
        assert state.node_name == 'Door_Open'
        assert list(state.entry_actions) == []
        assert list(state.exit_actions) == []
        assert not state.has_actions

    def test_named_with_node_name(self):
        state = State.named('Door Open', node_name='open')
        assert state.node_name == 'open'

    def test_actions_keep_order(self):
        state = State.named('Open', entry_actions=['b', 'a'], exit_actions=['c'])
        assert list(state.entry_actions) == ['b', 'a']
        assert list(state.exit_actions) == ['c']
        assert state.has_actions

    def test_invalid_node_name(self):
        with pytest.raises(InvariantException):
            State(state_name='Open', node_name='not valid')

    def test_keyword_node_name(self):
        with pytest.raises(InvariantException):
            State(state_name='Edge', node_name='Edge')

    def test_named_keyword(self):
        state = State.named('Edge')
        assert state.state_name == 'Edge'
        assert state.node_name == '_Edge'

    def test_missing_node_name(self):
        with pytest.raises(InvariantException):
            State(state_name='Open')

    def test_actions_must_be_strings(self):
        with pytest.raises(TypeError):
            State.named('Open', entry_actions=[1])

    def test_immutable(self):
        state = State.named('Open')
        with pytest.raises(AttributeError):
            state.state_name = 'Closed'

    def test_equal_by_value(self):
        assert State.named('Open', entry_actions=['a']) == State.named('Open', entry_actions=['a'])
        assert State.named('Open') != State.named('Closed')


class TestSuperState:
    @pytest.fixture(autouse=True)
    def setup_children(self):
        self.running = State.named('Running')
        self.paused = State.named('Paused')

    def test_is_a_state(self):
        super_state = SuperState.named('Active', sub_states=[self.running])
        assert isinstance(super_state, State)
        assert list(super_state.sub_states) == [self.running]

    def test_last_child_node(self):
        super_state = SuperState.named(
            'Active',
            sub_states=[self.running, self.paused],
            last_child='Paused',
        )
        assert super_state.last_child_node == self.paused

    def test_last_child_unset(self):
        super_state = SuperState.named('Active', sub_states=[self.running])
        assert super_state.last_child is None
        assert super_state.last_child_node is None

    def test_no_children(self):
        super_state = SuperState.named('Empty')
        assert len(super_state.sub_states) == 0
        assert super_state.last_child_node is None

    def test_last_child_must_be_a_child(self):
        with pytest.raises(InvariantException):
            SuperState.named('Active', sub_states=[self.running], last_child='Paused')

    def test_nested_super_states(self):
        inner = SuperState.named('Inner', sub_states=[self.running], last_child='Running')
        outer = SuperState.named('Outer', sub_states=[inner, self.paused], last_child='Paused')
        assert list(outer.sub_states) == [inner, self.paused]
        assert outer.last_child_node == self.paused

    def test_last_child_can_not_be_a_super_state(self):
        inner = SuperState.named('Inner', sub_states=[self.running], last_child='Running')
        with pytest.raises(InvariantException):
            SuperState.named('Outer', sub_states=[inner, self.paused], last_child='Inner')

    def test_decision_is_not_a_sub_state(self):
        decision = Decision.named('isReady', node_name='Decision1')
        with pytest.raises(TypeError):
            SuperState.named('Active', sub_states=[decision])


class TestDecision:
    def test_label(self):
        decision = Decision.named('is ready?', node_name='Decision1')
        assert decision.label == 'is ready?'
        assert decision.node_name == 'Decision1'
        assert not isinstance(decision, State)


class TestTransition:
    @pytest.fixture(autouse=True)
    def setup_states(self):
        self.idle = State.named('Idle')
        self.running = State.named('Running')

    def test_defaults(self):
        transition = Transition(source=self.idle, destination=self.running)
        assert transition.trigger is None
        assert list(transition.actions) == []
        assert list(transition.guards) == []

    def test_self_transition(self):
        transition = Transition(source=self.idle, destination=self.idle, trigger='poll')
        assert transition.source == transition.destination

    def test_endpoints_must_be_nodes(self):
        with pytest.raises(TypeError):
            Transition(source='Idle', destination=self.running)

    def test_endpoints_required(self):
        with pytest.raises(InvariantException):
            Transition(source=self.idle)

    def test_node_base_is_accepted_as_endpoint(self):
        node = Node(state_name='x', node_name='x')
        transition = Transition(source=node, destination=self.idle)
        assert transition.source is node
