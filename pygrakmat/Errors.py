from enum import Enum, auto
from functools import cached_property
from typing import Optional, TYPE_CHECKING

from .Strings import ErrorPosition

if TYPE_CHECKING:
    from .Parser import Source


class Tag(Enum):
    """Provenance of a failure's `expected` text."""
    NONE = auto()
    NAMED = auto()   # Set by a with_name() wrapper


class ParseError(Exception):
    """
    Base class for the two failure kinds a parser can raise.

    Every failure knows what was expected, what was found instead (if
    anything), and the index into the source text where it happened.
    The line/column position is computed the first time it's asked for.
    """

    def __init__(self,
                 expected: Optional[str],
                 source: 'Source',
                 index: int,
                 got: Optional[str] = None,
                 tag: Tag = Tag.NONE):
        self.expected = expected
        self.source = source
        self.index = index
        self.got = got
        self.tag = tag
        super().__init__(self.error_description)

    @property
    def error_description(self) -> str:
        raise NotImplementedError

    @property
    def named(self) -> bool:
        return self.tag is Tag.NAMED

    @cached_property
    def position(self) -> ErrorPosition:
        return self.source.error_position(self.index)

    @property
    def line_number(self) -> int:
        return self.position.line_number

    @property
    def line_index(self) -> int:
        return self.position.line_index

    @property
    def column_number(self) -> int:
        return self.position.column_number

    @property
    def column_index(self) -> int:
        return self.position.column_index

    @property
    def line_source(self) -> str:
        return self.position.line_source

    def __reduce__(self):
        return type(self), (self.expected, self.source, self.index, self.got, self.tag)

    def renamed(self, expected: str) -> 'ParseError':
        """Same failure, expecting `expected`, tagged as named."""
        return type(self)(expected, self.source, self.index, got=self.got, tag=Tag.NAMED)

    def __str__(self) -> str:
        return f"{self.source.name}:{self.line_number}: {self.error_description}\n{self.position}"


class UnexpectedEOFError(ParseError):
    """Input ended while `expected` was still wanted."""

    def __init__(self,
                 expected: Optional[str],
                 source: 'Source',
                 index: int,
                 got: Optional[str] = None,
                 tag: Tag = Tag.NONE):
        super().__init__(expected, source, index, None, tag)

    @property
    def error_description(self) -> str:
        return f"Expected {self.expected}, but got <EOF>"

    @cached_property
    def position(self) -> ErrorPosition:
        # The caret always points right after the end of the line
        raw = self.source.error_position(self.index)
        return ErrorPosition(raw.line_number, len(raw.line_source) + 1, raw.line_source)


class UnexpectedTokenError(ParseError):
    """Something other than `expected` was found."""

    @property
    def error_description(self) -> str:
        if self.got is None:
            return f"Expected {self.expected}"
        return f"Expected {self.expected}, but got '{self.got}'"


class GrammarError(Exception):
    """A defect in the grammar itself rather than in the parsed input."""


class RecursionDepthError(GrammarError):
    """Grammar recursion exhausted the interpreter stack."""

    def __init__(self, source_name: str):
        self.source_name = source_name
        super().__init__(f"{source_name}: grammar recursion too deep "
                         "(left recursion or a cyclic ref() without a base case?)")

    def __reduce__(self):
        return type(self), (self.source_name,)
