# rdexpr package
# Recursive-descent evaluator for numeric expressions with variables.
from .interpreter import evaluate, Parser
from .errors import ExprError, ParseError, ImmutableBindingError, ArityError

__all__ = [
    'evaluate',
    'Parser',
    'ExprError',
    'ParseError',
    'ImmutableBindingError',
    'ArityError',
]
