"""
'                 .__       .__       .___
'    ___.__. ____ |__| ____ |  |    __| _/______
'   <   |  |/ __ \|  |/ __ \|  |   / __ |/ ____/
'    \___  \  ___/|  \  ___/|  |__/ /_/ < <_|  |
'    / ____|\___  >__|\___  >____/\____ |\__   |
'    \/         \/        \/           \/   |__|
"""

# expose the main class
from .query import Query

# expose the factory functions
from .factories import (
    of,
    from_array,
    from_iterable,
    from_range,
    iterate,
    generate,
    empty,
    as_query,
    of_ints,
    of_longs,
    of_doubles,
    q,
    Q,
)

# expose element kinds
from .kinds import ElementKind, OBJECT, INT, LONG, DOUBLE

# expose the traversal contracts for custom sources and operators
from .traversal import Traverser, Advancer, Operator
from .types import Flow, CONTINUE, STOP, SummaryStatistics

# expose errors
from .errors import QueryExhaustedError, EmptySequenceError, UnsupportedTraversalError

# async subscriptions
from .aio import AsyncQuery

# define what `import *` does
__all__ = [
    "Query",
    "of",
    "from_array",
    "from_iterable",
    "from_range",
    "iterate",
    "generate",
    "empty",
    "as_query",
    "of_ints",
    "of_longs",
    "of_doubles",
    "q",
    "Q",
    "ElementKind",
    "OBJECT",
    "INT",
    "LONG",
    "DOUBLE",
    "Traverser",
    "Advancer",
    "Operator",
    "Flow",
    "CONTINUE",
    "STOP",
    "SummaryStatistics",
    "QueryExhaustedError",
    "EmptySequenceError",
    "UnsupportedTraversalError",
    "AsyncQuery",
]
