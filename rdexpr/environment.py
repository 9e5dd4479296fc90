import math
from typing import Dict, List, Iterator

from rdexpr.types import Binding, Number


CONSTANTS: Dict[str, Number] = {
    'true': True,
    'false': False,
    'Infinity': math.inf,
    'infinity': math.inf,
    'PI': math.pi,
    'pi': math.pi,
}


class Environment:
    """Maps identifiers to bindings for a single parser instance."""
    def __init__(self):
        self.values: Dict[str, Binding] = {
            name: Binding.fixed(value, name) for name, value in CONSTANTS.items()
        }

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def lookup(self, name: str) -> Binding:
        # Reading an unknown name declares it as a mutable zero.
        if name not in self.values:
            self.values[name] = Binding.cell(0.0, name)
        return self.values[name]

    def names(self) -> List[str]:
        return list(self)

    def snapshot(self, include_constants: bool = False) -> Dict[str, Number]:
        return {
            name: binding.read()
            for name, binding in self.values.items()
            if include_constants or binding.mutable
        }
