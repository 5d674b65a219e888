# tests/conftest.py
import pytest

from pygrakmat.Errors import ParseError
from pygrakmat.Parser import Parser, Source


def eat(parser: Parser, text: str):
    """Runs `parser` on the start of `text`; returns (value, remainder)."""
    value, remainder = parser.eat(Source(text), text)
    return value, remainder


def parse_error(parser: Parser, text: str) -> ParseError:
    """Parses `text` expecting a failure, and returns it."""
    with pytest.raises(ParseError) as info:
        parser.parse(text)
    return info.value


@pytest.fixture
def source():
    def _make(text, name="test"):
        return Source(text, name)

    return _make
