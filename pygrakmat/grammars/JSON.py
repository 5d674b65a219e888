"""
JSON grammar.

    json     = spaces? object spaces?
    object   = '{' pairs '}' | '{' '}'
    pairs    = pair (',' pair)*
    pair     = string ':' value
    array    = '[' values ']' | '[' ']'
    values   = value (',' value)*
    value    = string | number | object | array | 'true' | 'false' | 'null'
    number   = float | integer
    integer  = '-'? DIGIT{1,9}
    float    = integer '.' DIGIT+
    string   = '"' character* '"'

Whitespace is allowed between all tokens.

Each nesting level costs a few dozen interpreter frames, so with the default
recursion limit documents nested deeper than about 60 arrays or objects raise
RecursionDepthError. Raise the limit with sys.setrecursionlimit() for deeper
documents.
"""
from typing import Any, Dict, List, Tuple

from ..Char import any_of, char, except_, string
from ..Combinators import one_or_more, optional, ref, zero_or_more
from ..Parser import Parser
from ..Rules import DIGIT
from ..Spaced import OPTIONAL_SPACES, spaced_zero_or_more

_ESCAPES = {
    '"': '"',
    '\\': '\\',
    '/': '/',
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v',
}

# Forward references
_object_ref: Parser[Dict[str, Any]] = ref(lambda: _object)
_value_ref: Parser[Any] = ref(lambda: _value)

_left_bracket = char('[').with_name("'['")
_right_bracket = char(']').with_name("']'")
_left_brace = char('{').with_name("'{'")
_right_brace = char('}').with_name("'}'")
_comma = char(',').with_name("','")
_colon = char(':').with_name("':'")
_quote = char('"').with_name("'\"'")


def _head_and_tail(pair: Tuple[Any, Tuple[Any, ...]]) -> List[Any]:
    head, tail = pair
    return [head, *tail]


_values: Parser[List[Any]] = _value_ref.spaced_and(spaced_zero_or_more(_comma.spaced_then(_value_ref))).map(_head_and_tail)
_array: Parser[List[Any]] = (
    _left_bracket.spaced_then(_values).spaced_before(_right_bracket)
    | _left_bracket.spaced_and(_right_bracket).map(lambda _: [])
).with_name("array")

_integer: Parser[int] = (
    optional(char('-')).and_(DIGIT.in_range(1, 9))
    .map(lambda pair: int((pair[0] or "") + "".join(pair[1])))
)
_float: Parser[float] = (
    optional(char('-')).and_(DIGIT.in_range(1, 9)).before(char('.')).and_(one_or_more(DIGIT))
    .map(lambda parts: float(f"{parts[0][0] or ''}{''.join(parts[0][1])}.{''.join(parts[1])}"))
)
_number: Parser[Any] = (_float | _integer).with_name("number")

_escaped_character: Parser[str] = char('\\').then(any_of(_ESCAPES)).map(_ESCAPES.__getitem__)
_character: Parser[str] = (except_('"\\') | _escaped_character).with_name("character")
_string_literal: Parser[str] = (
    _quote.then(zero_or_more(_character)).before(_quote)
    .map("".join)
    .with_name("string literal")
)

_true = string("true").map(lambda _: True)
_false = string("false").map(lambda _: False)
_null = string("null").map(lambda _: None)

_value: Parser[Any] = (
    _string_literal | _number | _object_ref | _array | _true | _false | _null
).with_name("value")

_pair: Parser[Tuple[str, Any]] = _string_literal.spaced_before(_colon).spaced_and(_value).with_name("pair")
_pairs: Parser[List[Tuple[str, Any]]] = _pair.spaced_and(spaced_zero_or_more(_comma.spaced_then(_pair))).map(_head_and_tail)

_object: Parser[Dict[str, Any]] = (
    _left_brace.spaced_then(_pairs).spaced_before(_right_brace).map(dict)
    | _left_brace.spaced_and(_right_brace).map(lambda _: {})
).with_name("object")

_json: Parser[Dict[str, Any]] = OPTIONAL_SPACES.then(_object).before(OPTIONAL_SPACES)


def parse(text: str) -> Dict[str, Any]:
    """Parses a JSON document whose top-level value is an object."""
    return _json.parse(text)


def parse_file(path) -> Dict[str, Any]:
    return _json.parse_file(path)
