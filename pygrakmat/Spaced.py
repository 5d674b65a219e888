"""
Combinators that skip optional whitespace between the things they match.

    (char('a').spaced_and(char('b'))).parse("a \\n b")  ->  ('a', 'b')

Whitespace is never part of the produced values.
"""
from typing import List, Tuple

from .Char import any_of
from .Parser import AtLeastParser, Parser, Result, Source, T, U, check_bounds, check_times, eat_greedy

WHITESPACE = " \t\r\n"

SPACE: Parser[str] = any_of(WHITESPACE).with_name("space")
OPTIONAL_SPACES: Parser[str] = AtLeastParser(SPACE, 0).map("".join).with_name("spaces")
SPACES: Parser[str] = AtLeastParser(SPACE, 1).map("".join).with_name("spaces")


class SpacedAndParser(Parser[Tuple[T, U]]):
    def __init__(self, left: Parser[T], right: Parser[U]):
        self.left = left
        self.right = right

    @property
    def expected_description(self) -> str:
        return f"{self.left.expected_description} and {self.right.expected_description}"

    def eat(self, source: Source, text: str) -> Result[Tuple[T, U]]:
        left_result = self.left.eat(source, text)
        spaces_result = OPTIONAL_SPACES.eat(source, left_result.remainder)
        right_result = self.right.eat(source, spaces_result.remainder)
        return Result((left_result.value, right_result.value), right_result.remainder)


class SpacedRepeatParser(Parser[Tuple[T, ...]]):
    """Like RepeatParser, skipping whitespace after every match."""

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
            remainder = OPTIONAL_SPACES.eat(source, remainder).remainder
        return Result(tuple(values), remainder)


class SpacedAtLeastParser(Parser[Tuple[T, ...]]):
    """Like AtLeastParser, skipping whitespace after every match."""

    def __init__(self, target: Parser[T], times: int):
        check_times(times)
        self.target = target
        self.times = times

    @property
    def expected_description(self) -> str:
        return f"{self.target.expected_description} at least {self.times} times"

    def eat(self, source: Source, text: str) -> Result[Tuple[T, ...]]:
        required, remainder = SpacedRepeatParser(self.target, self.times).eat(source, text)
        values = list(required)
        remainder = eat_greedy(self.target, source, remainder, values, skip=OPTIONAL_SPACES)
        return Result(tuple(values), remainder)


class SpacedRangedParser(Parser[Tuple[T, ...]]):
    """Like RangedParser, skipping whitespace after every match."""

    def __init__(self, target: Parser[T], min_times: int, max_times: int):
        check_bounds(min_times, max_times)
        self.target = target
        self.min_times = min_times
        self.max_times = max_times

    @property
    def expected_description(self) -> str:
        return f"{self.target.expected_description}{{{self.min_times},{self.max_times}}}"

    def eat(self, source: Source, text: str) -> Result[Tuple[T, ...]]:
        required, remainder = SpacedRepeatParser(self.target, self.min_times).eat(source, text)
        values = list(required)
        remainder = eat_greedy(self.target, source, remainder, values,
                               limit=self.max_times, skip=OPTIONAL_SPACES)
        return Result(tuple(values), remainder)


def spaced_and(left: Parser[T], right: Parser[U]) -> Parser[Tuple[T, U]]:
    return SpacedAndParser(left, right)

def spaced_then(left: Parser[T], right: Parser[U]) -> Parser[U]:
    return left.spaced_then(right)

def spaced_before(left: Parser[T], right: Parser[U]) -> Parser[T]:
    return left.spaced_before(right)

def spaced_zero_or_more(target: Parser[T]) -> Parser[Tuple[T, ...]]:
    """Alias to `spaced_at_least(0)`."""
    return SpacedAtLeastParser(target, 0)

def spaced_one_or_more(target: Parser[T]) -> Parser[Tuple[T, ...]]:
    """Alias to `spaced_at_least(1)`."""
    return SpacedAtLeastParser(target, 1)
