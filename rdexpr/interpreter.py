"""Parser and evaluator for rdexpr.

There is no separate syntax tree: the recursive-descent parser computes a
value for every rule as soon as the rule is recognised. Binary operators are
handled by precedence climbing over `operators.LEVELS`. Below the lowest
level sit, from loosest to tightest, prefix operators, parenthesised
sub-expressions and atoms (number literals and identifiers).

Because operands are evaluated while they are parsed, `||` and `&&` always
evaluate both sides. Assignments made before an error stay in the
environment.
"""

from __future__ import annotations

from typing import Optional, TextIO

from .environment import Environment
from .errors import ArityError, ParseError
from .operators import (
    LEVELS, OPERATORS, PREFIX_OPERATORS, POSTFIX_OPERATORS,
    PREFIX, POSTFIX, NUMBER, IDENTIFIER, OPEN_PAREN, CLOSE_PAREN, END_OF_STATEMENT,
    Operator,
)
from .scanner import Scanner
from .types import Binding, Number, to_string


class Parser:
    """Evaluates `;`-separated expressions against a persistent variable table.

    Variables assigned in one call to `evaluate` are visible in later calls on
    the same instance. A fresh instance starts with only the named constants.
    """
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None):
        self.variables = Environment()
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = None
        if debug_level > 0 and debug_file:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Atoms
    def number(self, scanner: Scanner) -> Optional[Binding]:
        text = scanner.accept(NUMBER)
        if text is None:
            return None
        return Binding.fixed(float(text))

    def identifier(self, scanner: Scanner) -> Optional[Binding]:
        name = scanner.accept(IDENTIFIER)
        if name is None:
            return None
        if self.debug_level >= 2 and name not in self.variables:
            self.debug(f"declare {name} = 0")
        return self.variables.lookup(name)

    def parse_atom(self, scanner: Scanner) -> Binding:
        binding = self.number(scanner)
        if binding is None:
            binding = self.identifier(scanner)
        if binding is None:
            raise ParseError('Expected number or identifier', scanner.pos)
        if binding.mutable:
            symbol = scanner.accept(POSTFIX)
            if symbol is not None:
                return self.apply(POSTFIX_OPERATORS[symbol], binding)
        return binding

    def parse_parenthesized(self, scanner: Scanner) -> Binding:
        if scanner.accept(OPEN_PAREN) is None:
            return self.parse_atom(scanner)
        value = self.parse_expression(scanner)
        if scanner.accept(CLOSE_PAREN) is None:
            raise ParseError('Expected closing parenthesis', scanner.pos)
        return value

    def parse_prefix(self, scanner: Scanner) -> Binding:
        symbol = scanner.accept(PREFIX)
        if symbol is None:
            return self.parse_parenthesized(scanner)
        return self.apply(PREFIX_OPERATORS[symbol], self.parse_prefix(scanner))

    # Precedence climbing
    def parse_operator(self, scanner: Scanner, level: int = 0) -> Binding:
        if level >= len(LEVELS):
            return self.parse_prefix(scanner)
        value = self.parse_operator(scanner, level + 1)
        while True:
            symbol = scanner.accept(LEVELS[level])
            if symbol is None:
                break
            op = OPERATORS[symbol]
            if op.arity == 0:
                value = self.apply(op)
            elif op.arity == 1:
                value = self.apply(op, value)
            elif op.arity == 2:
                right = self.parse_operator(scanner, level if op.right else level + 1)
                value = self.apply(op, value, right)
            else:
                raise ArityError(op.symbol, op.arity)
        return value

    def parse_expression(self, scanner: Scanner) -> Binding:
        return self.parse_operator(scanner)

    def apply(self, op: Operator, *operands: Binding) -> Binding:
        if self.debug_level >= 3:
            args = ', '.join(to_string(o.read()) for o in operands)
        result = op.apply(*operands)
        if self.debug_level >= 3:
            self.debug(f"apply {op.symbol}({args}) -> {to_string(result.read())}")
        if self.debug_level >= 2 and op.writes and operands[0].name is not None:
            self.debug(f"assign {operands[0].name} = {to_string(operands[0].read())}")
        return result

    # Public API
    def evaluate(self, text: str) -> Number:
        """Evaluate every statement in `text` and return the last value."""
        trace = self.debug if self.debug_level >= 4 else None
        scanner = Scanner(text, trace=trace)
        result = self.statement(scanner)
        while scanner.remaining():
            if scanner.accept(END_OF_STATEMENT) is None:
                raise ParseError('Unexpected character', scanner.pos)
            if scanner.remaining():
                result = self.statement(scanner)
        return result.read()

    def statement(self, scanner: Scanner) -> Binding:
        start = scanner.pos
        result = self.parse_expression(scanner)
        if self.debug_level >= 1:
            source = scanner.text[start:scanner.pos].strip()
            self.debug(f"eval {source} -> {to_string(result.read())}")
        return result


def evaluate(text: str, debug_level: int = 0) -> Number:
    """Convenience function to evaluate `text` on a fresh parser."""
    parser = Parser(debug_level=debug_level)
    return parser.evaluate(text)
