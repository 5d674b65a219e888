"""Ready-made parsers for punctuation, digits, numbers and identifiers."""
import string as _string

from .Char import any_of, char
from .Combinators import one_or_more
from .Parser import Parser


def _punctuation(c: str) -> Parser[str]:
    return char(c).with_name(f"'{c}'")


SEMICOLON = _punctuation(';')
COLON = _punctuation(':')
DOUBLE_QUOTE = _punctuation('"')
QUOTE = _punctuation("'")
ASTERISK = _punctuation('*')
LEFT_BRACKET = _punctuation('[')
RIGHT_BRACKET = _punctuation(']')
LEFT_BRACE = _punctuation('{')
RIGHT_BRACE = _punctuation('}')
CARET = _punctuation('^')
COMMA = _punctuation(',')
MINUS = _punctuation('-')
PLUS = _punctuation('+')
SLASH = _punctuation('/')
BACKSLASH = _punctuation('\\')
GREATER_THAN_SIGN = _punctuation('>')
LESS_THAN_SIGN = _punctuation('<')
LEFT_PAREN = _punctuation('(')
RIGHT_PAREN = _punctuation(')')
DOT = _punctuation('.')
UNDERSCORE = _punctuation('_')
VERTICAL_BAR = _punctuation('|')
AMPERSAND = _punctuation('&')
QUESTION_MARK = _punctuation('?')
EQUALS_SIGN = _punctuation('=')
EXCLAMATION_MARK = _punctuation('!')
AT_SIGN = _punctuation('@')
HASH = _punctuation('#')

DIGIT: Parser[str] = any_of(_string.digits).with_name("DIGIT")

NUMBER: Parser[str] = one_or_more(DIGIT).map("".join).with_name("NUMBER")

IDENTIFIER: Parser[str] = (
    one_or_more(any_of(_string.ascii_letters + _string.digits + "_"))
    .map("".join)
    .with_name("IDENTIFIER")
)
