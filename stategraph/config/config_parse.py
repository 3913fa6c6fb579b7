"""
Parse and validate a state graph configuration.

A configuration describes the states (which may nest other states), the
decision nodes and the transitions of a state machine. Validating it returns
a ConfigStateGraph, which StateGraph.from_config turns into the model that
gets rendered.
"""
import logging

from stategraph.config import ConfigError
from stategraph.config import schema
from stategraph.config.config_utils import build_enum_validator
from stategraph.config.config_utils import build_list_of_type_validator
from stategraph.config.config_utils import ConfigContext
from stategraph.config.config_utils import UniqueNameDict
from stategraph.config.config_utils import valid_dict
from stategraph.config.config_utils import valid_name
from stategraph.config.config_utils import valid_node_name
from stategraph.config.config_utils import valid_string
from stategraph.config.config_utils import Validator
from stategraph.core.model import make_node_name
from stategraph.style.uml_dot import DEFAULT_RANK_DIRECTION
from stategraph.style.uml_dot import RANK_DIRECTIONS

log = logging.getLogger(__name__)

valid_labels = build_list_of_type_validator(valid_string, allow_empty=True)


def valid_sub_states(value, config_context):
    # An empty list is still a super state, just one without children
    if value is None:
        value = []
    return build_list_of_type_validator(valid_state, allow_empty=True)(value, config_context)


class ValidateState(Validator):
    config_class = schema.ConfigState
    validators = {
        'name': valid_name,
        'node_name': valid_node_name,
        'entry': valid_labels,
        'exit': valid_labels,
        'states': valid_sub_states,
        'last_child': valid_name,
    }
    defaults = {
        'entry': (),
        'exit': (),
    }

    def cast(self, state, _context):
        """States without actions or children can be given as a name."""
        if isinstance(state, str):
            state = dict(name=state)
        return state

    def post_validation(self, state, config_context):
        state.setdefault('node_name', make_node_name(state['name']))

        last_child = state.get('last_child')
        if last_child is None:
            return
        if state.get('states') is None:
            msg = "State %s has a last_child but no sub states"
            raise ConfigError(msg % state['name'])
        children = {child.name: child for child in state['states']}
        if last_child not in children:
            msg = "last_child %s of %s is not one of its sub states"
            raise ConfigError(msg % (last_child, state['name']))
        if children[last_child].states is not None:
            msg = "last_child %s of %s is a super state"
            raise ConfigError(msg % (last_child, state['name']))


valid_state = ValidateState()


class ValidateDecision(Validator):
    config_class = schema.ConfigDecision
    validators = {
        'name': valid_node_name,
        'label': valid_string,
    }


valid_decision = ValidateDecision()


class ValidateTransition(Validator):
    config_class = schema.ConfigTransition
    validators = {
        'source': valid_name,
        'destination': valid_name,
        'trigger': valid_string,
        'actions': valid_labels,
        'guards': valid_labels,
    }
    defaults = {
        'trigger': None,
        'actions': (),
        'guards': (),
    }

    def build_context(self, transition, config_context):
        path = '%s.%s->%s' % (
            self.type_name,
            transition.get('source'),
            transition.get('destination'),
        )
        return config_context.build_child_context(path)


valid_transition = ValidateTransition()


def valid_transitions(value, config_context):
    """Transitions are either a list of transition dicts, or a mapping of
    source -> {trigger: destination}.
    """
    if isinstance(value, dict):
        transitions = []
        for source, triggers in value.items():
            child_context = config_context.build_child_context(source)
            for trigger, destination in valid_dict(triggers or {}, child_context).items():
                transitions.append(
                    dict(source=source, trigger=trigger, destination=destination),
                )
        value = transitions

    validator = build_list_of_type_validator(valid_transition, allow_empty=True)
    return validator(value, config_context)


def iter_states(states):
    for state in states:
        yield state
        yield from iter_states(state.states or ())


class ValidateStateGraph(Validator):
    config_class = schema.ConfigStateGraph
    validators = {
        'rankdir': build_enum_validator(RANK_DIRECTIONS),
        'initial': valid_name,
        'states': build_list_of_type_validator(valid_state),
        'decisions': build_list_of_type_validator(valid_decision, allow_empty=True),
        'transitions': valid_transitions,
    }
    defaults = {
        'rankdir': DEFAULT_RANK_DIRECTION,
        'initial': None,
        'decisions': (),
        'transitions': (),
    }

    def post_validation(self, config, config_context):
        states = list(iter_states(config['states']))
        decisions = config.get('decisions') or ()

        names = UniqueNameDict("Duplicate state name %s at " + config_context.path)
        node_names = UniqueNameDict("Duplicate node name %s at " + config_context.path)
        for state in states:
            names[state.name] = state
            node_names[state.node_name] = state
        for decision in decisions:
            names[decision.name] = decision
            node_names[decision.name] = decision

        for transition in config.get('transitions') or ():
            for endpoint in (transition.source, transition.destination):
                if endpoint not in names:
                    msg = "Unknown state %s in transition at %s"
                    raise ConfigError(msg % (endpoint, config_context.path))

        initial = config.get('initial')
        if initial is not None and initial not in names:
            msg = "Unknown initial state %s at %s"
            raise ConfigError(msg % (initial, config_context.path))
        if initial in {decision.name for decision in decisions}:
            msg = "Initial state %s at %s can not be a decision"
            raise ConfigError(msg % (initial, config_context.path))

        log.debug(
            "Validated %d states, %d decisions at %s",
            len(states), len(decisions), config_context.path,
        )


valid_state_graph = ValidateStateGraph()


def valid_config(config, name=None):
    """Validate a state graph config. `name` is used as the root of the path
    in error messages, usually the file the config came from.
    """
    if name is None:
        return valid_state_graph(config)
    return valid_state_graph(config, ConfigContext(name))
