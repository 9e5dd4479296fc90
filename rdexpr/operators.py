"""Operator table and precedence levels.

`LEVELS` lists one compiled pattern per precedence level, lowest to highest.
The parser climbs from level 0 upward; whatever a level's pattern matches is
looked up in `OPERATORS` to find its arity, associativity and semantics.
The lookaheads in the patterns keep a level from claiming the first
characters of a longer operator owned by another level (`|` in `||` or `|=`,
`*` in `**`, `!` in `!=`, `>>` in `>>>=` and so on).

Prefix and postfix operators sit outside the level table and have their own
lookup tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List
import math
import re

from .types import Binding, Number, to_number, to_int32, to_uint32, is_truthy


@dataclass(frozen=True)
class Operator:
    symbol: str
    arity: int
    apply: Callable[..., Binding]
    right: bool = False
    writes: bool = False

    def __repr__(self) -> str:
        return f"<operator {self.symbol}>"


###############################################################################
# Numeric semantics
###############################################################################

def add(a: Number, b: Number) -> float:
    return to_number(a) + to_number(b)


def subtract(a: Number, b: Number) -> float:
    return to_number(a) - to_number(b)


def multiply(a: Number, b: Number) -> float:
    return to_number(a) * to_number(b)


def divide(a: Number, b: Number) -> float:
    x, y = to_number(a), to_number(b)
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def remainder(a: Number, b: Number) -> float:
    """Truncating remainder: the result takes the sign of the dividend."""
    x, y = to_number(a), to_number(b)
    if y == 0 or math.isnan(y) or math.isnan(x) or math.isinf(x):
        return math.nan
    if math.isinf(y):
        return x
    return math.fmod(x, y)


def power(a: Number, b: Number) -> float:
    x, y = to_number(a), to_number(b)
    if math.isnan(y) or (abs(x) == 1 and math.isinf(y)):
        return math.nan
    odd = y.is_integer() and y % 2 == 1
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0 and odd else math.inf
    except ValueError:
        # zero to a negative power, or a negative base to a fractional one
        if x == 0:
            return math.copysign(math.inf, x) if odd else math.inf
        return math.nan


def bit_or(a: Number, b: Number) -> float:
    return float(to_int32(a) | to_int32(b))


def bit_xor(a: Number, b: Number) -> float:
    return float(to_int32(a) ^ to_int32(b))


def bit_and(a: Number, b: Number) -> float:
    return float(to_int32(a) & to_int32(b))


def shift_left(a: Number, b: Number) -> float:
    return float(to_int32(to_int32(a) << (to_uint32(b) & 31)))


def shift_right(a: Number, b: Number) -> float:
    return float(to_int32(a) >> (to_uint32(b) & 31))


def shift_right_unsigned(a: Number, b: Number) -> float:
    return float(to_uint32(a) >> (to_uint32(b) & 31))


def loose_equal(a: Number, b: Number) -> bool:
    return to_number(a) == to_number(b)


def strict_equal(a: Number, b: Number) -> bool:
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return to_number(a) == to_number(b)


class Factorial:
    """Memoized factorial over 32-bit truncated arguments.

    The cache is a list indexed by n and only ever grows. It is filled
    iteratively, and stops growing once it reaches infinity since every
    larger factorial is infinite as well.
    """
    def __init__(self):
        self.cache: List[float] = [1.0]

    def __call__(self, value: Number) -> float:
        n = to_int32(value)
        if n < 1:
            return 1.0
        cache = self.cache
        while len(cache) <= n:
            if math.isinf(cache[-1]):
                return math.inf
            cache.append(len(cache) * cache[-1])
        return cache[n]


factorial = Factorial()


###############################################################################
# Binding-level wrappers
###############################################################################

def _binary(fn: Callable[[Number, Number], Number]) -> Callable[[Binding, Binding], Binding]:
    def apply(a: Binding, b: Binding) -> Binding:
        return Binding.fixed(fn(a.read(), b.read()))
    return apply


def _unary(fn: Callable[[Number], Number]) -> Callable[[Binding], Binding]:
    def apply(a: Binding) -> Binding:
        return Binding.fixed(fn(a.read()))
    return apply


def _assign(fn: Callable[[Number, Number], Number]) -> Callable[[Binding, Binding], Binding]:
    def apply(a: Binding, b: Binding) -> Binding:
        a.write(fn(a.read(), b.read()))
        return a
    return apply


def _prefix_step(delta: float) -> Callable[[Binding], Binding]:
    def apply(a: Binding) -> Binding:
        a.write(to_number(a.read()) + delta)
        return Binding.fixed(a.read())
    return apply


def _postfix_step(delta: float) -> Callable[[Binding], Binding]:
    def apply(a: Binding) -> Binding:
        old = to_number(a.read())
        a.write(old + delta)
        return Binding.fixed(old)
    return apply


def _comma(a: Binding, b: Binding) -> Binding:
    return b


def _logical_or(a: Number, b: Number) -> Number:
    return a if is_truthy(a) else b


def _logical_and(a: Number, b: Number) -> Number:
    return b if is_truthy(a) else a


def _binaries(table: Dict[str, Callable[[Number, Number], Number]], right: bool = False) -> List[Operator]:
    return [Operator(symbol, 2, _binary(fn), right=right) for symbol, fn in table.items()]


ASSIGNMENTS: Dict[str, Callable[[Number, Number], Number]] = {
    '=': lambda a, b: b,
    '+=': add,
    '-=': subtract,
    '*=': multiply,
    '/=': divide,
    '%=': remainder,
    '**=': power,
    '<<=': shift_left,
    '>>=': shift_right,
    '>>>=': shift_right_unsigned,
    '&=': bit_and,
    '^=': bit_xor,
    '|=': bit_or,
}

_TABLE: List[Operator] = [
    Operator(',', 2, _comma),
    *[Operator(symbol, 2, _assign(fn), right=True, writes=True) for symbol, fn in ASSIGNMENTS.items()],
    *_binaries({
        '||': _logical_or,
        '&&': _logical_and,
        '|': bit_or,
        '^': bit_xor,
        '&': bit_and,
        '==': loose_equal,
        '===': strict_equal,
        '!=': lambda a, b: not loose_equal(a, b),
        '!==': lambda a, b: not strict_equal(a, b),
        '<': lambda a, b: to_number(a) < to_number(b),
        '<=': lambda a, b: to_number(a) <= to_number(b),
        '>': lambda a, b: to_number(a) > to_number(b),
        '>=': lambda a, b: to_number(a) >= to_number(b),
        '<<': shift_left,
        '>>': shift_right,
        '>>>': shift_right_unsigned,
        '+': add,
        '-': subtract,
        '*': multiply,
        '/': divide,
        '%': remainder,
    }),
    *_binaries({'**': power}, right=True),
    Operator('!', 1, _unary(factorial)),
]

OPERATORS: Dict[str, Operator] = {op.symbol: op for op in _TABLE}

LEVELS: List[re.Pattern] = [
    re.compile(r','),
    re.compile(r'=(?!=)|\+=|-=|\*\*=|\*=|/=|%=|<<=|>>>=|>>=|&=|\^=|\|='),
    re.compile(r'\|\|'),
    re.compile(r'&&'),
    re.compile(r'\|(?![|=])'),
    re.compile(r'\^(?!=)'),
    re.compile(r'&(?![&=])'),
    re.compile(r'===|==|!==|!='),
    re.compile(r'<=|>=|<(?![<=])|>(?![>=])'),
    re.compile(r'(?:>>>|>>(?!>)|<<)(?!=)'),
    re.compile(r'(?:\+(?!\+)|-(?!-))(?!=)'),
    re.compile(r'(?:\*(?!\*)|/|%)(?!=)'),
    re.compile(r'\*\*(?!=)'),
    re.compile(r'!(?!=)'),
]

PREFIX_OPERATORS: Dict[str, Operator] = {
    '++': Operator('++', 1, _prefix_step(1.0), right=True, writes=True),
    '--': Operator('--', 1, _prefix_step(-1.0), right=True, writes=True),
    '+': Operator('+', 1, _unary(to_number), right=True),
    '-': Operator('-', 1, _unary(lambda a: -to_number(a)), right=True),
    '!': Operator('!', 1, _unary(lambda a: not is_truthy(a)), right=True),
    '~': Operator('~', 1, _unary(lambda a: float(~to_int32(a))), right=True),
}

POSTFIX_OPERATORS: Dict[str, Operator] = {
    '++': Operator('++', 1, _postfix_step(1.0), writes=True),
    '--': Operator('--', 1, _postfix_step(-1.0), writes=True),
}

PREFIX = re.compile(r'\+\+|--|\+|-|!|~')
POSTFIX = re.compile(r'\+\+|--')
NUMBER = re.compile(r'[0-9]+(?:\.[0-9]+)?(?:[eE][0-9]+)?')
IDENTIFIER = re.compile(r'[a-zA-Z_][a-zA-Z_0-9]*')
OPEN_PAREN = re.compile(r'\(')
CLOSE_PAREN = re.compile(r'\)')
END_OF_STATEMENT = re.compile(r'\s*;[;\s]*')
