from typing import Optional


class ExprError(Exception):
    """Base class for errors raised while evaluating an expression."""


class ParseError(ExprError):
    """Raised when the expected token is not found at the current position."""
    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(message if pos is None else f"{message} @ {pos}")
        self.message = message
        self.pos = pos


class ImmutableBindingError(ExprError):
    """Raised on an attempt to write to a constant or a computed value."""
    def __init__(self, message: str = 'Cannot assign to an immutable binding'):
        super().__init__(message)


class ArityError(ExprError):
    """Internal consistency check on the operator table."""
    def __init__(self, symbol: str, arity: int):
        super().__init__(f"Operator {symbol} requires {arity} arguments. No idea what to do with it...")
        self.symbol = symbol
        self.arity = arity
