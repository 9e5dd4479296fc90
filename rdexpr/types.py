"""Value model and numeric helpers for rdexpr.

Every value the evaluator handles lives in a `Binding`. Named variables are
mutable bindings held by the environment; literals, constants and the result
of every operator application are immutable bindings. Numbers are Python
floats and the language's booleans are Python bools, which take part in
arithmetic as 1 and 0.

The helpers below give the host numbers IEEE double behaviour throughout:
no exceptions on overflow or division by zero, and 32-bit integer coercion
for the bitwise operators.
"""

from __future__ import annotations

from typing import Optional, Union
import math

from .errors import ImmutableBindingError

Number = Union[float, bool]

INT32_MASK = 0xFFFFFFFF
INT32_SIGN = 0x80000000


class Binding:
    """A cell holding one value plus a mutability flag.

    Reads always succeed. Writes succeed only on mutable bindings and raise
    `ImmutableBindingError` otherwise, which is what keeps constants and
    computed values out of assignment targets.
    """
    def __init__(self, value: Number, mutable: bool = False, name: Optional[str] = None):
        self._value = value
        self.mutable = mutable
        self.name = name

    @staticmethod
    def fixed(value: Number, name: Optional[str] = None) -> 'Binding':
        return Binding(value, mutable=False, name=name)

    @staticmethod
    def cell(value: Number = 0.0, name: Optional[str] = None) -> 'Binding':
        return Binding(value, mutable=True, name=name)

    def read(self) -> Number:
        return self._value

    def write(self, value: Number) -> None:
        if not self.mutable:
            if self.name is not None:
                raise ImmutableBindingError(f"Cannot assign to constant {self.name}")
            raise ImmutableBindingError()
        self._value = value

    def __repr__(self) -> str:
        kind = 'cell' if self.mutable else 'fixed'
        if self.name is None:
            return f"<{kind} {self._value!r}>"
        return f"<{kind} {self.name}={self._value!r}>"


def to_number(value: Number) -> float:
    return float(value)


def is_truthy(value: Number) -> bool:
    # NaN is falsy
    return value == value and value != 0


def to_uint32(value: Number) -> int:
    """Coerce to an unsigned 32-bit integer.

    NaN and the infinities become 0; finite values are truncated toward zero
    and wrapped modulo 2**32.
    """
    x = to_number(value)
    if math.isnan(x) or math.isinf(x):
        return 0
    return int(x) & INT32_MASK


def to_int32(value: Number) -> int:
    """Coerce to a signed 32-bit integer (two's complement wrap)."""
    n = to_uint32(value)
    return n - (INT32_MASK + 1) if n & INT32_SIGN else n


def to_string(value: Number) -> str:
    """Render a result the way the command line prints it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    x = to_number(value)
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'Infinity' if x > 0 else '-Infinity'
    if x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    return repr(x)
