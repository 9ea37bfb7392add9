"""exceptions raised by yieldq. each one subclasses the built-in that covers the same concern."""


class QueryExhaustedError(LookupError):
    """an element was requested from a query that has no elements left."""
    pass


class EmptySequenceError(ValueError):
    """a terminal operation needs at least one element and the sequence had none."""
    pass


class UnsupportedTraversalError(NotImplementedError):
    """the query was built without an implementation for the requested traversal mode."""
    pass
