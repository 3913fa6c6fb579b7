class GraphError(Exception):
    """Generic exception class for an invalid state graph model"""
    pass


class UnknownNodeError(GraphError, TypeError):
    """A value which is not a State, SuperState or Decision was used where a
    node of the state graph was expected.
    """

    def __init__(self, node):
        super().__init__(
            "Expected a State, SuperState or Decision, got %s: %r" % (type(node).__name__, node),
        )
        self.node = node
