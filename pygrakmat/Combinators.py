import logging
from typing import Any, Callable, List, Optional, Tuple

from .Char import empty
from .Errors import ParseError
from .Parser import (
    AtLeastParser, InlineParser, Parser, RangedParser, ReferencedParser, RepeatParser, Result, Source, T, U,
)

log = logging.getLogger(__name__)


# 1. createParser: Builds a parser from a function
def create_parser(expected_description: str, eat_fn: Callable[[Source, str], Result[T]]) -> Parser[T]:
    """
    Creates a parser from `eat_fn(source, text)`, which must return a Result
    or raise a ParseError.
    """
    return InlineParser(expected_description, eat_fn)

# 2. or: Ordered choice between two parsers
def or_(left: Parser[T], right: Parser[T]) -> Parser[T]:
    """Tries `left`; if it fails, tries `right` on the same input."""
    return left.or_(right)

# 3. and: Parses two parsers in sequence
def and_(left: Parser[T], right: Parser[U]) -> Parser[Tuple[T, U]]:
    """Parses `left` and then `right`, returning both results as a pair."""
    return left.and_(right)

# 4. then: Sequence, keeping the second result
def then(left: Parser[Any], right: Parser[U]) -> Parser[U]:
    return left.then(right)

# 5. before: Sequence, keeping the first result
def before(left: Parser[T], right: Parser[Any]) -> Parser[T]:
    return left.before(right)

# 6. map: Transforms the result of a parser
def map_(target: Parser[T], transform: Callable[[T], U]) -> Parser[U]:
    return target.map(transform)

# 7. withName: Names a parser for error messages
def with_name(target: Parser[T], name: str) -> Parser[T]:
    """Failures of `target` will report `name` as the expected token."""
    return target.with_name(name)

# 8. repeat: Exactly n occurrences
def repeat(target: Parser[T], times: int) -> Parser[Tuple[T, ...]]:
    return RepeatParser(target, times)

# 9. atLeast: n or more occurrences
def at_least(target: Parser[T], times: int) -> Parser[Tuple[T, ...]]:
    return AtLeastParser(target, times)

# 10. inRange: Between min and max occurrences (inclusive)
def in_range(target: Parser[T], min_times: int, max_times: int) -> Parser[Tuple[T, ...]]:
    return RangedParser(target, min_times, max_times)

# 11. zeroOrMore: Alias to atLeast(0)
def zero_or_more(target: Parser[T]) -> Parser[Tuple[T, ...]]:
    return AtLeastParser(target, 0)

# 12. oneOrMore: Alias to atLeast(1)
def one_or_more(target: Parser[T]) -> Parser[Tuple[T, ...]]:
    return AtLeastParser(target, 1)

# 13. optional: The target's result, or None
def optional(target: Parser[T]) -> Parser[Optional[T]]:
    """Tries `target`; returns None without consuming input if it fails."""
    return target.or_(empty())

# 14. ref: Lazy reference for recursive rules
def ref(target: Callable[[], Parser[T]]) -> Parser[T]:
    """
    Creates a parser that calls `target()` every time it's used. Useful when a
    rule refers to another one that is defined later:

        value_ref = ref(lambda: value)
        array = char('[').then(value_ref).before(char(']'))
        value = array | NUMBER
    """
    return ReferencedParser(target)

# 15. choice: Tries parsers in order until one succeeds
def choice(parsers: List[Parser[T]]) -> Parser[T]:
    """
    Applies a list of parsers in order until one succeeds.
    Returns the value of the succeeding parser, or fails with the merged failure of all of them.
    """
    if not parsers:
        raise ValueError("choice() needs at least one alternative")
    result = parsers[0]
    for p in parsers[1:]:
        result = result | p
    return result

# 16. between: Parses an opening parser, a main parser, and a closing parser
def between(open: Parser[Any], close: Parser[Any], p: Parser[T]) -> Parser[T]:
    """
    Parses 'open', then 'p', then 'close', returning the result of 'p'.
    """
    return open.then(p).before(close)

# 17. sepBy1: One or more occurrences separated by a separator
def sep_by1(p: Parser[T], sep: Parser[Any]) -> Parser[Tuple[T, ...]]:
    """
    Parses one or more occurrences of p separated by sep, returning a tuple of p's results.
    """
    return p.and_(zero_or_more(sep.then(p))).map(lambda pair: (pair[0],) + pair[1])

# 18. sepBy: Zero or more occurrences separated by a separator
def sep_by(p: Parser[T], sep: Parser[Any]) -> Parser[Tuple[T, ...]]:
    """
    Parses zero or more occurrences of p separated by sep, returning a tuple of p's results.
    """
    return sep_by1(p, sep) | empty().map(lambda _: ())

# 19. traced: Debugging parser that logs attempts, matches and failures
def traced(p: Parser[T], label: Optional[str] = None) -> Parser[T]:
    """
    Behaves exactly like `p`, logging each attempt at DEBUG level to the
    `pygrakmat.Combinators` logger.
    """
    name = label or p.expected_description

    def eat(source: Source, text: str) -> Result[T]:
        if not log.isEnabledFor(logging.DEBUG):
            return p.eat(source, text)

        position = source.error_position(source.index_of(text))
        log.debug("trying %s at %s:%d:%d", name, source.name, position.line_number, position.column_number)
        try:
            result = p.eat(source, text)
        except ParseError as e:
            log.debug("failed %s: %s", name, e.error_description)
            raise
        log.debug("matched %s, %d chars left", name, len(result.remainder))
        return result

    return create_parser(p.expected_description, eat)
