import math

import pytest

from rdexpr import Parser, evaluate


@pytest.mark.parametrize('literal', ['0', '42', '3.25', '1e10', '6E2', '2.5e3', '007'])
def test_number_literal_round_trip(literal):
    assert evaluate(literal) == float(literal)


@pytest.mark.parametrize('source, expected', [
    ('2+3*4', 14),
    ('(2+3)*4', 20),
    ('2**3**2', 512),
    ('10 - 4 - 3', 3),
    ('100 / 10 / 5', 2),
    ('2 ** -1', 0.5),
    ('-2 ** 2', 4),
    ('-7 % 3', -1),
    ('1 + 2 < 1 << 2', True),
    ('1 < 2 == true', True),
    ('2 * 3!', 12),
    ('1 | 6 ^ 3 & 5', 7),
    ('1 << 2 + 1', 8),
    ('((((1))))', 1),
])
def test_precedence_and_associativity(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize('source, expected', [
    ('1 < 2', True),
    ('2 <= 1', False),
    ('3 > 3', False),
    ('3 >= 3', True),
    ('1 == true', True),
    ('1 === true', False),
    ('1 !== true', True),
    ('2 != 2', False),
    ('!0', True),
    ('!5', False),
    ('!!5', True),
    ('~5', -6),
    ('- -3', 3),
    ('-(-3)', 3),
    ('+true', 1),
    ('1 << 4', 16),
    ('-16 >> 2', -4),
    ('-1 >>> 28', 15),
    ('5 & 3', 1),
    ('5 | 3', 7),
    ('5 ^ 3', 6),
    ('0 || 5', 5),
    ('3 || 5', 3),
    ('0 && 5', 0),
    ('2 && 5', 5),
    ('1, 2, 3', 3),
])
def test_operators(source, expected):
    assert evaluate(source) == expected


def test_comparisons_yield_booleans():
    assert evaluate('1 < 2') is True
    assert evaluate('false || 0 > 1') is False


def test_constants():
    assert evaluate('PI') == math.pi
    assert evaluate('pi * 2') == 2 * math.pi
    assert evaluate('Infinity') == math.inf
    assert evaluate('-infinity') == -math.inf
    assert evaluate('true') is True
    assert evaluate('false') is False


def test_division_by_zero_is_not_an_error():
    assert evaluate('1/0') == math.inf
    assert evaluate('-1/0') == -math.inf
    assert math.isnan(evaluate('0/0'))
    assert math.isnan(evaluate('1 % 0'))


@pytest.mark.parametrize('source, expected', [
    ('5!', 120),
    ('0!', 1),
    ('-1!', 1),
    ('3!!', 720),
    ('5! == 120', True),
    ('5!=120', True),
    ('4.7!', 24),
])
def test_factorial(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize('source, expected', [
    ('x = 2; x **= 3; x', 8),
    ('x = 5; x |= 2; x', 7),
    ('x = 5; x &= 4; x', 4),
    ('x = 6; x ^= 3; x', 5),
    ('x = 7; x %= 4; x', 3),
    ('x = 9; x /= 2; x', 4.5),
    ('x = 1; x <<= 4; x', 16),
    ('x = -16; x >>= 2; x', -4),
    ('x = -1; x >>>= 28; x', 15),
    ('x = 1; x += 2; x -= 4; x *= -3', 3),
    ('x = y = 4; x + y', 8),
    ('x = (y = 2) + 1; x * y', 6),
])
def test_assignment(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize('source, expected', [
    ('x = 3; x++', 3),
    ('x = 3; x++; x', 4),
    ('x = 3; ++x', 4),
    ('x = 3; x--; x', 2),
    ('x = 3; --x', 2),
    ('x = 3; - --x', -2),
    ('x = 3; x++ + x', 7),
])
def test_increment_and_decrement(source, expected):
    assert evaluate(source) == expected


def test_statement_list_returns_last_value():
    assert evaluate('a=1; b=2; a+b') == 3
    assert evaluate('1;;; 2 ;') == 2
    assert evaluate('1;\n\n2;\n') == 2


def test_environment_persists_on_same_parser():
    parser = Parser()
    assert parser.evaluate('x=5; x+1') == 6
    assert parser.evaluate('x') == 5
    assert parser.evaluate('x += 1') == 6
    assert parser.variables.snapshot() == {'x': 6}


def test_parsers_do_not_share_variables():
    first, second = Parser(), Parser()
    first.evaluate('x = 5')
    assert second.evaluate('x') == 0


def test_unset_variables_read_as_zero():
    parser = Parser()
    assert parser.evaluate('never_assigned') == 0
    assert 'never_assigned' in parser.variables


def test_pure_expressions_are_idempotent():
    parser = Parser()
    for _ in range(3):
        assert parser.evaluate('2 * (3 + 4) - 1') == 13
        assert parser.evaluate('6!') == 720


def test_logical_operators_evaluate_both_sides():
    parser = Parser()
    assert parser.evaluate('0 && (y = 1)') == 0
    assert parser.evaluate('y') == 1
    assert parser.evaluate('1 || (z = 2)') == 1
    assert parser.evaluate('z') == 2
