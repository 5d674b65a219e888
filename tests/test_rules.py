import pytest
from hypothesis import given, strategies as st

from pygrakmat import Numbers, Rules
from pygrakmat.Errors import UnexpectedTokenError

from conftest import eat, parse_error

# --- Predefined rules ---

def test_punctuation_names():
    assert Rules.SEMICOLON.expected_description == "';'"
    assert parse_error(Rules.HASH, "x").expected == "'#'"
    assert Rules.LEFT_BRACE.parse("{") == "{"

def test_digit():
    assert eat(Rules.DIGIT, "7a") == ("7", "a")
    error = parse_error(Rules.DIGIT, "a")
    assert error.expected == "DIGIT"
    assert error.named

def test_number_keeps_leading_zeros():
    assert Rules.NUMBER.parse("0123") == "0123"

def test_identifier():
    assert Rules.IDENTIFIER.parse("foo_Bar1") == "foo_Bar1"
    assert eat(Rules.IDENTIFIER, "rule = x") == ("rule", " = x")
    assert parse_error(Rules.IDENTIFIER, "-").expected == "IDENTIFIER"

# --- Numbers ---

@pytest.mark.parametrize("text, value", [
    ("0", 0),
    ("42", 42),
    ("-42", -42),
    ("-0", 0),
])
def test_integer(text, value):
    assert Numbers.INTEGER.parse(text) == value

def test_integer_does_not_take_leading_zero_digits():
    assert eat(Numbers.INTEGER, "007") == (0, "07")

@pytest.mark.parametrize("text, value", [
    ("3.14", 3.14),
    ("-0.5", -0.5),
    ("1.5e3", 1500.0),
    ("2.0E-2", 0.02),
    ("10.25e+1", 102.5),
])
def test_floating(text, value):
    assert Numbers.FLOATING.parse(text) == value

def test_floating_needs_fraction_digits():
    error = parse_error(Numbers.FLOATING, "1.")
    assert error.expected == "DIGIT"

def test_number():
    assert Numbers.NUMBER.parse("12") == 12
    assert isinstance(Numbers.NUMBER.parse("12"), int)
    assert Numbers.NUMBER.parse("12e2") == 1200.0
    assert isinstance(Numbers.NUMBER.parse("12e2"), float)
    assert Numbers.NUMBER.parse("-1.5") == -1.5

def test_number_failure():
    error = parse_error(Numbers.NUMBER, "x")
    assert isinstance(error, UnexpectedTokenError)
    assert error.expected == "FLOATING or INTEGER"

@given(st.integers())
def test_integer_property(n):
    assert Numbers.INTEGER.parse(str(n)) == n

@given(st.integers(min_value=-10**6, max_value=10**6), st.integers(min_value=0, max_value=999))
def test_floating_property(whole, fraction):
    text = f"{whole}.{fraction:03d}"
    assert Numbers.FLOATING.parse(text) == float(text)
