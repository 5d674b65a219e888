"""
Numeric literal rules.

    INTEGER  = '-'? ('0' | [1-9] DIGIT*)                   -> int
    FLOATING = '-'? ('0' | [1-9] DIGIT*) '.' DIGIT+ exp?   -> float
    NUMBER   = FLOATING | INTEGER exp?                     -> int, or float when there is an exponent
    exp      = [Ee] [+-]? ('0' | [1-9] DIGIT*)
"""
from typing import Optional, Tuple, Union

from .Char import any_of, char
from .Combinators import one_or_more, optional, zero_or_more
from .Parser import Parser
from .Rules import DIGIT, DOT


def _signed(minus: Optional[str], digits: str) -> str:
    return digits if minus is None else "-" + digits


# Digits are kept as text until the end so that "-0.5" keeps its sign
_zero = char('0')
_positive = (any_of("123456789") & zero_or_more(DIGIT)).map(lambda pair: pair[0] + "".join(pair[1]))
_unsigned_integer: Parser[str] = _zero | _positive

_exponent: Parser[str] = (
    any_of("Ee").then(optional(any_of("+-"))).and_(_unsigned_integer)
).map(lambda pair: "e" + (pair[0] or "+") + pair[1])

_fraction: Parser[str] = DOT.then(one_or_more(DIGIT)).map(lambda digits: "." + "".join(digits))


def _to_float(parts: Tuple[Optional[str], Tuple[Tuple[str, str], Optional[str]]]) -> float:
    minus, ((integer, fraction), exponent) = parts
    return float(_signed(minus, integer + fraction + (exponent or "")))


def _integer_with_exponent(pair: Tuple[int, Optional[str]]) -> Union[int, float]:
    integer, exponent = pair
    if exponent is None:
        return integer
    return float(f"{integer}{exponent}")


INTEGER: Parser[int] = (
    optional(char('-')).and_(_unsigned_integer)
    .map(lambda pair: int(_signed(*pair)))
    .with_name("INTEGER")
)

FLOATING: Parser[float] = (
    optional(char('-')).and_(_unsigned_integer.and_(_fraction).and_(optional(_exponent)))
    .map(_to_float)
    .with_name("FLOATING")
)

NUMBER: Parser[Union[int, float]] = (
    FLOATING | INTEGER.and_(optional(_exponent)).map(_integer_with_exponent)
).with_name("NUMBER")
