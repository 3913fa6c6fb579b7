"""
 Immutable config schema objects.
"""
from collections import namedtuple


def config_object_factory(name, required=None, optional=None):
    """
    Creates a namedtuple which has two additional attributes:
        required_keys:
            all keys required to be set on this configuration object
        optional keys:
            optional keys for this configuration object

    The tuple is created from required + optional
    """
    required = required or []
    optional = optional or []

    config_class = namedtuple(name, required + optional)

    # make last len(optional) args actually optional
    config_class.__new__.__defaults__ = (None, ) * len(optional)
    config_class.required_keys = required
    config_class.optional_keys = optional

    return config_class


ConfigStateGraph = config_object_factory(
    name="ConfigStateGraph",
    required=[
        "states",  # tuple of ConfigState
    ],
    optional=[
        "rankdir",  # str
        "initial",  # str
        "decisions",  # tuple of ConfigDecision
        "transitions",  # tuple of ConfigTransition
    ],
)

ConfigState = config_object_factory(
    name="ConfigState",
    required=["name"],
    optional=[
        "node_name",  # str
        "entry",  # tuple of str
        "exit",  # tuple of str
        "states",  # tuple of ConfigState, None unless this is a super state
        "last_child",  # str
    ],
)

ConfigDecision = config_object_factory(
    name="ConfigDecision",
    required=["name", "label"],
    optional=[],
)

ConfigTransition = config_object_factory(
    name="ConfigTransition",
    required=["source", "destination"],
    optional=[
        "trigger",  # str
        "actions",  # tuple of str
        "guards",  # tuple of str
    ],
)
