import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from .Errors import (
    ParseError, RecursionDepthError, Tag, UnexpectedEOFError, UnexpectedTokenError,
)
from .Strings import DEFAULT_SOURCE_NAME, PREVIEW_LENGTH, ErrorPosition, bound_length_to, error_position

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Source:
    """The complete text being parsed, and a name for it in error messages."""
    text: str
    name: str = DEFAULT_SOURCE_NAME

    def error_position(self, index: int) -> ErrorPosition:
        return error_position(self.text, index)

    def index_of(self, remainder: str) -> int:
        """Index in the text where `remainder` starts."""
        return len(self.text) - len(remainder)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Parsed value and the input that is left after it."""
    value: T
    remainder: str

    def __iter__(self) -> Iterator[Any]:
        # Allows `value, remainder = parser.eat(source, text)`
        return iter((self.value, self.remainder))


class Parser(Generic[T]):
    """
    Base class for all parsers.

    Subclasses provide `expected_description` (what this parser wants to see,
    used in error messages) and `eat`, which consumes a prefix of the input and
    returns a Result or raises a ParseError.

    Operators:
        a | b    ordered choice                     (or_)
        a & b    both, as a pair                    (and_)
        a > b    both, keep b's value               (then)
        a < b    both, keep a's value               (before)
        p >> f   transform the value                (map)

    Note that Python chains comparisons, so `a > b > c` means `a > b and b > c`.
    Parenthesize: `(a > b) > c`, or use the methods.
    """

    @property
    def expected_description(self) -> str:
        raise NotImplementedError

    def eat(self, source: Source, text: str) -> Result[T]:
        raise NotImplementedError

    def parse(self, text: str, source_name: str = DEFAULT_SOURCE_NAME) -> T:
        """Parses the whole text, which must be consumed completely."""
        source = Source(text, source_name)
        log.debug("parsing %s (%d chars)", source.name, len(text))
        try:
            value, remainder = self.eat(source, text)
        except RecursionError:
            log.warning("recursion limit hit while parsing %s", source.name)
            raise RecursionDepthError(source.name) from None

        if remainder:
            raise UnexpectedTokenError("<end of input>", source, source.index_of(remainder),
                                       got=bound_length_to(remainder, PREVIEW_LENGTH))
        log.debug("parsed %s", source.name)
        return value

    def parse_file(self, path, encoding: str = "utf-8") -> T:
        """Parses the whole content of the file at `path`, keeping its line endings."""
        with open(path, encoding=encoding, newline="") as f:
            text = f.read()
        return self.parse(text, str(path))

    # --- Combinators ---

    def or_(self, other: 'Parser[T]') -> 'Parser[T]':
        return OrParser(self, other)

    def and_(self, other: 'Parser[U]') -> 'Parser[Tuple[T, U]]':
        return AndParser(self, other)

    def then(self, other: 'Parser[U]') -> 'Parser[U]':
        return self.and_(other).map(lambda pair: pair[1])

    def before(self, other: 'Parser[Any]') -> 'Parser[T]':
        return self.and_(other).map(lambda pair: pair[0])

    def map(self, transform: Callable[[T], U]) -> 'Parser[U]':
        return MappedParser(self, transform)

    def with_name(self, name: str) -> 'Parser[T]':
        return NamedParser(self, name)

    def repeat(self, times: int) -> 'Parser[Tuple[T, ...]]':
        return RepeatParser(self, times)

    def at_least(self, times: int) -> 'Parser[Tuple[T, ...]]':
        return AtLeastParser(self, times)

    def in_range(self, min_times: int, max_times: int) -> 'Parser[Tuple[T, ...]]':
        return RangedParser(self, min_times, max_times)

    # --- Whitespace-skipping combinators (see Spaced.py) ---

    def spaced_and(self, other: 'Parser[U]') -> 'Parser[Tuple[T, U]]':
        from .Spaced import SpacedAndParser
        return SpacedAndParser(self, other)

    def spaced_then(self, other: 'Parser[U]') -> 'Parser[U]':
        return self.spaced_and(other).map(lambda pair: pair[1])

    def spaced_before(self, other: 'Parser[Any]') -> 'Parser[T]':
        return self.spaced_and(other).map(lambda pair: pair[0])

    def spaced_repeat(self, times: int) -> 'Parser[Tuple[T, ...]]':
        from .Spaced import SpacedRepeatParser
        return SpacedRepeatParser(self, times)

    def spaced_at_least(self, times: int) -> 'Parser[Tuple[T, ...]]':
        from .Spaced import SpacedAtLeastParser
        return SpacedAtLeastParser(self, times)

    def spaced_in_range(self, min_times: int, max_times: int) -> 'Parser[Tuple[T, ...]]':
        from .Spaced import SpacedRangedParser
        return SpacedRangedParser(self, min_times, max_times)

    # --- Operators ---

    def __or__(self, other: 'Parser[T]') -> 'Parser[T]':
        return self.or_(other)

    def __and__(self, other: 'Parser[U]') -> 'Parser[Tuple[T, U]]':
        return self.and_(other)

    def __gt__(self, other: 'Parser[U]') -> 'Parser[U]':
        return self.then(other)

    def __lt__(self, other: 'Parser[Any]') -> 'Parser[T]':
        return self.before(other)

    def __rshift__(self, transform: Callable[[T], U]) -> 'Parser[U]':
        return self.map(transform)

    def __str__(self) -> str:
        return self.expected_description

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.expected_description}>"


class InlineParser(Parser[T]):
    """Parser made from a plain function, see create_parser()."""

    def __init__(self, expected_description: str, eat_fn: Callable[[Source, str], Result[T]]):
        self._expected_description = expected_description
        self.eat_fn = eat_fn

    @property
    def expected_description(self) -> str:
        return self._expected_description

    def eat(self, source: Source, text: str) -> Result[T]:
        return self.eat_fn(source, text)


class OrParser(Parser[T]):
    """
    Ordered choice: the left parser's result if it succeeds, otherwise the
    right parser's result on the same input.

    When both fail, a single failure is raised:
      - expected: "<left> or <right>", or just one of them if they are equal;
      - position and `got`: from the left failure;
      - named only if both failures are named;
      - end-of-input only if both failures are end-of-input.
    """

    def __init__(self, left: Parser[T], right: Parser[T]):
        self.left = left
        self.right = right

    @property
    def expected_description(self) -> str:
        return f"{self.left.expected_description} or {self.right.expected_description}"

    def eat(self, source: Source, text: str) -> Result[T]:
        try:
            return self.left.eat(source, text)
        except ParseError as left_error:
            try:
                return self.right.eat(source, text)
            except ParseError as right_error:
                raise self._merge(left_error, right_error)

    def _merge(self, left_error: ParseError, right_error: ParseError) -> ParseError:
        expected = self._merge_expected(left_error, right_error)
        tag = Tag.NAMED if left_error.named and right_error.named else Tag.NONE

        if isinstance(left_error, UnexpectedEOFError) and isinstance(right_error, UnexpectedEOFError):
            return UnexpectedEOFError(expected, left_error.source, left_error.index, tag=tag)
        return UnexpectedTokenError(expected, left_error.source, left_error.index,
                                    got=left_error.got, tag=tag)

    def _merge_expected(self, left_error: ParseError, right_error: ParseError) -> str:
        left_expected = left_error.expected
        if left_expected is None:
            left_expected = self.left.expected_description
        right_expected = right_error.expected
        if right_expected is None:
            right_expected = self.right.expected_description

        if left_expected == right_expected:
            return left_expected
        return f"{left_expected} or {right_expected}"


class AndParser(Parser[Tuple[T, U]]):
    """Runs the left parser, then the right one on what's left; yields both values."""

    def __init__(self, left: Parser[T], right: Parser[U]):
        self.left = left
        self.right = right

    @property
    def expected_description(self) -> str:
        return f"{self.left.expected_description} and {self.right.expected_description}"

    def eat(self, source: Source, text: str) -> Result[Tuple[T, U]]:
        left_result = self.left.eat(source, text)
        right_result = self.right.eat(source, left_result.remainder)
        return Result((left_result.value, right_result.value), right_result.remainder)


class MappedParser(Parser[U]):
    """Applies `transform` to the target's value. Errors raised by `transform` are not caught."""

    def __init__(self, target: Parser[T], transform: Callable[[T], U]):
        self.target = target
        self.transform = transform

    @property
    def expected_description(self) -> str:
        return self.target.expected_description

    def eat(self, source: Source, text: str) -> Result[U]:
        raw = self.target.eat(source, text)
        return Result(self.transform(raw.value), raw.remainder)


class NamedParser(Parser[T]):
    """
    Reports failures of the target as expecting `name`.

    A failure that already comes from a named parser is left alone, so the
    innermost name wins.
    """

    def __init__(self, target: Parser[T], name: str):
        self.target = target
        self.name = name

    @property
    def expected_description(self) -> str:
        return self.name

    def eat(self, source: Source, text: str) -> Result[T]:
        try:
            return self.target.eat(source, text)
        except ParseError as e:
            if e.named:
                raise
            raise e.renamed(self.name) from e


def check_times(times: int) -> None:
    if times < 0:
        raise ValueError(f"Repetition count must not be negative, got {times}")


class RepeatParser(Parser[Tuple[T, ...]]):
    """Matches the target exactly `times` times."""

    def __init__(self, target: Parser[T], times: int):
        check_times(times)
        self.target = target
        self.times = times

    @property
    def expected_description(self) -> str:
        return f"{self.target.expected_description} exactly {self.times} times"

    def eat(self, source: Source, text: str) -> Result[Tuple[T, ...]]:
        values: List[T] = []
        remainder = text
        for _ in range(self.times):
            value, remainder = self.target.eat(source, remainder)
            values.append(value)
        return Result(tuple(values), remainder)


def eat_greedy(target: Parser[T], source: Source, text: str,
                values: List[T], limit: Optional[int] = None,
                skip: Optional[Parser[Any]] = None) -> str:
    """
    Appends matches of `target` to `values` until it fails or `limit` values
    are collected; `skip` runs after each match. Returns the remainder after
    the last successful match.
    """
    remainder = text
    while limit is None or len(values) < limit:
        try:
            value, after = target.eat(source, remainder)
        except ParseError:
            break
        if len(after) == len(remainder):
            # Matched nothing; repeating it would never end
            break
        values.append(value)
        if skip is not None:
            after = skip.eat(source, after).remainder
        remainder = after
    return remainder


class AtLeastParser(Parser[Tuple[T, ...]]):
    """Matches the target `times` times, then as many more times as possible."""

    def __init__(self, target: Parser[T], times: int):
        check_times(times)
        self.target = target
        self.times = times

    @property
    def expected_description(self) -> str:
        return f"{self.target.expected_description} at least {self.times} times"

    def eat(self, source: Source, text: str) -> Result[Tuple[T, ...]]:
        required, remainder = RepeatParser(self.target, self.times).eat(source, text)
        values = list(required)
        remainder = eat_greedy(self.target, source, remainder, values)
        return Result(tuple(values), remainder)


def check_bounds(min_times: int, max_times: int) -> None:
    check_times(min_times)
    if max_times < min_times:
        raise ValueError(f"Invalid repetition bounds {{{min_times},{max_times}}}")


class RangedParser(Parser[Tuple[T, ...]]):
    """Matches the target from `min_times` to `max_times` times (both inclusive)."""

    def __init__(self, target: Parser[T], min_times: int, max_times: int):
        check_bounds(min_times, max_times)
        self.target = target
        self.min_times = min_times
        self.max_times = max_times

    @property
    def expected_description(self) -> str:
        return f"{self.target.expected_description}{{{self.min_times},{self.max_times}}}"

    def eat(self, source: Source, text: str) -> Result[Tuple[T, ...]]:
        required, remainder = RepeatParser(self.target, self.min_times).eat(source, text)
        values = list(required)
        remainder = eat_greedy(self.target, source, remainder, values, limit=self.max_times)
        return Result(tuple(values), remainder)


class ReferencedParser(Parser[T]):
    """Delegates to whatever parser `target()` returns at the moment of use."""

    def __init__(self, target: Callable[[], Parser[T]]):
        self.target = target

    @property
    def expected_description(self) -> str:
        return self.target().expected_description

    def eat(self, source: Source, text: str) -> Result[T]:
        return self.target().eat(source, text)
