from typing import Iterable, Optional, Tuple

from .Errors import UnexpectedEOFError, UnexpectedTokenError
from .Parser import Parser, Result, Source
from .Strings import PREVIEW_LENGTH, bound_length_to


def _unique(chars: Iterable[str]) -> Tuple[str, ...]:
    """Characters in first-seen order, without duplicates."""
    return tuple(dict.fromkeys(chars))


class EmptyParser(Parser[Optional[str]]):
    """Consumes nothing and returns None."""

    @property
    def expected_description(self) -> str:
        return "empty string"

    def eat(self, source: Source, text: str) -> Result[None]:
        return Result(None, text)


class EmptyStringParser(Parser[str]):
    """Consumes nothing and returns ""."""

    @property
    def expected_description(self) -> str:
        return "empty string"

    def eat(self, source: Source, text: str) -> Result[str]:
        return Result("", text)


class CharParser(Parser[str]):
    def __init__(self, expected: str):
        if len(expected) != 1:
            raise ValueError(f"Expected a single character, got {expected!r}")
        self.expected = expected

    @property
    def expected_description(self) -> str:
        return f"'{self.expected}'"

    def eat(self, source: Source, text: str) -> Result[str]:
        if not text:
            raise UnexpectedEOFError(self.expected_description, source, len(source.text))
        if text[0] != self.expected:
            raise UnexpectedTokenError(self.expected_description, source, source.index_of(text), got=text[0])
        return Result(self.expected, text[1:])


class StringParser(Parser[str]):
    def __init__(self, expected: str):
        self.expected = expected

    @property
    def expected_description(self) -> str:
        return f'"{self.expected}"'

    def eat(self, source: Source, text: str) -> Result[str]:
        size = len(self.expected)
        if size > len(text):
            raise UnexpectedEOFError(self.expected_description, source, len(source.text))
        if not text.startswith(self.expected):
            got = bound_length_to(text[:size], PREVIEW_LENGTH)
            raise UnexpectedTokenError(self.expected_description, source, source.index_of(text), got=got)
        return Result(self.expected, text[size:])


class IncludedCharParser(Parser[str]):
    """One character out of `included`."""

    def __init__(self, included: Iterable[str]):
        self.included = _unique(included)
        self._members = frozenset(self.included)

    @property
    def expected_description(self) -> str:
        return f"[{''.join(self.included)}]"

    def eat(self, source: Source, text: str) -> Result[str]:
        if not text:
            raise UnexpectedEOFError(self.expected_description, source, len(source.text))
        value = text[0]
        if value not in self._members:
            raise UnexpectedTokenError(self.expected_description, source, source.index_of(text), got=value)
        return Result(value, text[1:])


class ExcludedCharParser(Parser[str]):
    """One character that is not in `excluded`."""

    def __init__(self, excluded: Iterable[str]):
        self.excluded = _unique(excluded)
        self._members = frozenset(self.excluded)

    @property
    def expected_description(self) -> str:
        return f"[^{''.join(self.excluded)}]"

    def eat(self, source: Source, text: str) -> Result[str]:
        if not text:
            raise UnexpectedEOFError(self.expected_description, source, len(source.text))
        value = text[0]
        if value in self._members:
            raise UnexpectedTokenError(self.expected_description, source, source.index_of(text), got=value)
        return Result(value, text[1:])


class AnyCharParser(Parser[str]):
    @property
    def expected_description(self) -> str:
        return "any char"

    def eat(self, source: Source, text: str) -> Result[str]:
        if not text:
            raise UnexpectedEOFError(self.expected_description, source, len(source.text))
        return Result(text[0], text[1:])


# 1. char: Parses a single character
def char(expected: str) -> Parser[str]:
    """Parses the character `expected` and returns it."""
    return CharParser(expected)

# 2. string: Parses a specific string
def string(expected: str) -> Parser[str]:
    """Parses the exact string `expected` and returns it."""
    if not expected:
        return EmptyStringParser()
    if len(expected) == 1:
        return CharParser(expected)
    return StringParser(expected)

# 3. anyOf: Parses any character in the provided set
def any_of(included: Iterable[str]) -> Parser[str]:
    """Succeeds if the current character is in `included`. Returns the parsed character."""
    return IncludedCharParser(included)

# 4. except: Parses any character not in the provided set
def except_(excluded: Iterable[str]) -> Parser[str]:
    """Succeeds if the current character is not in `excluded`. Returns the parsed character."""
    return ExcludedCharParser(excluded)

# 5. anyChar: Parses any character
def any_char() -> Parser[str]:
    return AnyCharParser()

# 6. empty: Consumes nothing
def empty() -> Parser[None]:
    """Always succeeds with None without consuming input."""
    return EmptyParser()

def empty_string() -> Parser[str]:
    """Always succeeds with "" without consuming input."""
    return EmptyStringParser()
