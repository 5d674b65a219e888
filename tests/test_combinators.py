import logging

import pytest
from hypothesis import given, strategies as st

from pygrakmat.Char import char, empty, string
from pygrakmat.Combinators import (
    at_least, between, choice, create_parser, in_range, map_, one_or_more, optional, or_, ref,
    repeat, sep_by, sep_by1, traced, with_name, zero_or_more,
)
from pygrakmat.Errors import UnexpectedEOFError, UnexpectedTokenError
from pygrakmat.Parser import Result
from pygrakmat.Rules import DIGIT

from conftest import eat, parse_error


# --- Scenarios ---

def test_or_failure_lists_both_alternatives():
    error = parse_error(string("foo") | string("bar"), "baz")
    assert isinstance(error, UnexpectedTokenError)
    assert error.expected == '"foo" or "bar"'
    assert error.got == "baz"

def test_at_least_collects_digits():
    assert eat(DIGIT.at_least(1), "123abc") == (('1', '2', '3'), "abc")

def test_trailing_input_is_an_error():
    error = parse_error(one_or_more(DIGIT), "123x")
    assert isinstance(error, UnexpectedTokenError)
    assert error.expected == "<end of input>"
    assert error.got == "x"
    assert error.index == 3

def test_trailing_input_preview_is_bounded():
    error = parse_error(char('a'), "a" + "b" * 30)
    assert error.got == "b" * 20 + "..."

def test_in_range_stops_at_max():
    assert eat(DIGIT.in_range(2, 4), "12345") == (('1', '2', '3', '4'), "5")

# --- Sequencing ---

def test_and_then_before():
    a, b = char('a'), char('b')
    assert a.and_(b).parse("ab") == ('a', 'b')
    assert a.then(b).parse("ab") == 'b'
    assert a.before(b).parse("ab") == 'a'

def test_operators():
    a, b = char('a'), char('b')
    assert (a & b).parse("ab") == ('a', 'b')
    assert (a > b).parse("ab") == 'b'
    assert (a < b).parse("ab") == 'a'
    assert (a | b).parse("b") == 'b'
    assert (a >> str.upper).parse("a") == 'A'

def test_and_fails_on_second():
    error = parse_error(char('a').and_(char('b')), "ac")
    assert error.expected == "'b'"
    assert error.index == 1

def test_descriptions():
    a, b = char('a'), char('b')
    assert a.and_(b).expected_description == "'a' and 'b'"
    assert a.or_(b).expected_description == "'a' or 'b'"
    assert str(a.then(b)) == "'a' and 'b'"
    assert a.map(str.upper).expected_description == "'a'"

# --- Alternation ---

def test_or_is_left_biased():
    assert eat(string("ab") | string("a"), "abc") == ("ab", "c")
    assert eat(string("a") | string("ab"), "abc") == ("a", "bc")

def test_or_same_expected_is_not_repeated():
    assert parse_error(char('a') | char('a'), "b").expected == "'a'"

def test_or_both_eof():
    error = parse_error(char('a') | string("bc"), "")
    assert isinstance(error, UnexpectedEOFError)
    assert error.expected == "'a' or \"bc\""

def test_or_eof_and_token_gives_token():
    error = parse_error(string("abc") | char('x'), "ab")
    assert isinstance(error, UnexpectedTokenError)
    assert error.expected == "\"abc\" or 'x'"

def test_or_named_only_if_both_named():
    named = char('a').with_name("A") | char('b').with_name("B")
    assert parse_error(named, "c").named
    assert parse_error(named, "c").expected == "A or B"
    half = char('a').with_name("A") | char('b')
    assert not parse_error(half, "c").named

def test_or_function():
    assert or_(char('a'), char('b')).parse("b") == 'b'

# --- Naming ---

def test_with_name_replaces_expected():
    error = parse_error(char('a').with_name("letter a"), "b")
    assert error.expected == "letter a"
    assert error.got == "b"
    assert error.named

def test_inner_name_wins():
    error = parse_error(char('a').with_name("inner").with_name("outer"), "b")
    assert error.expected == "inner"

def test_with_name_keeps_kind():
    assert isinstance(parse_error(with_name(char('a'), "A"), ""), UnexpectedEOFError)

def test_with_name_is_idempotent():
    once = char('a').with_name("A")
    twice = char('a').with_name("A").with_name("A")
    assert str(parse_error(once, "b")) == str(parse_error(twice, "b"))

def test_with_name_description():
    assert char('a').with_name("A").expected_description == "A"

# --- Mapping ---

def test_map():
    assert map_(DIGIT, int).parse("7") == 7

def test_map_errors_propagate():
    def boom(_):
        raise KeyError("boom")
    with pytest.raises(KeyError):
        char('a').map(boom).parse("a")

# --- Repetition ---

def test_repeat():
    assert repeat(char('a'), 3).parse("aaa") == ('a', 'a', 'a')
    assert repeat(char('a'), 0).parse("") == ()
    error = parse_error(repeat(char('a'), 3), "aab")
    assert error.index == 2

def test_at_least_not_enough():
    error = parse_error(at_least(DIGIT, 2), "1x")
    assert error.index == 1

def test_zero_or_more_on_no_match():
    assert eat(zero_or_more(char('a')), "bbb") == ((), "bbb")

def test_in_range_minimum():
    assert in_range(char('a'), 1, 3).parse("a") == ('a',)
    with pytest.raises(UnexpectedEOFError):
        in_range(char('a'), 2, 3).parse("a")

def test_invalid_counts():
    with pytest.raises(ValueError):
        repeat(char('a'), -1)
    with pytest.raises(ValueError):
        at_least(char('a'), -1)
    with pytest.raises(ValueError):
        in_range(char('a'), 3, 2)

def test_repeat_descriptions():
    assert char('a').repeat(2).expected_description == "'a' exactly 2 times"
    assert char('a').at_least(1).expected_description == "'a' at least 1 times"
    assert char('a').in_range(1, 3).expected_description == "'a'{1,3}"

def test_greedy_step_that_consumes_nothing_stops():
    assert zero_or_more(empty()).parse("") == ()
    assert eat(zero_or_more(optional(char('a'))), "aab") == (('a', 'a'), "b")

def test_none_values_are_collected():
    assert zero_or_more(char('a').map(lambda _: None)).parse("aa") == (None, None)

@given(st.integers(min_value=0, max_value=20), st.integers(min_value=0, max_value=20))
def test_at_least_counts(n, extra):
    text = "a" * (n + extra) + "b"
    value, remainder = eat(at_least(char('a'), n), text)
    assert len(value) == n + extra
    assert remainder == "b"

@given(st.integers(min_value=0, max_value=10), st.integers(min_value=0, max_value=10), st.integers(min_value=0, max_value=25))
def test_in_range_counts(low, span, available):
    high = low + span
    text = "a" * available
    if available < low:
        with pytest.raises(UnexpectedEOFError):
            in_range(char('a'), low, high).parse(text)
    else:
        value, remainder = eat(in_range(char('a'), low, high), text)
        assert len(value) == min(available, high)
        assert len(remainder) == available - len(value)

# --- optional / ref ---

def test_optional():
    assert eat(optional(char('a')), "ab") == ('a', "b")
    assert eat(optional(char('a')), "b") == (None, "b")

def test_ref_allows_recursion():
    nested = ref(lambda: parens)
    parens = char('(').then(optional(nested)).before(char(')')).map(lambda inner: (inner or 0) + 1)
    assert parens.parse("((()))") == 3

def test_ref_looks_up_target_on_every_use():
    targets = [char('a')]
    late = ref(lambda: targets[-1])
    assert late.parse("a") == 'a'
    targets.append(char('b'))
    assert late.parse("b") == 'b'

# --- Derived combinators ---

def test_choice():
    p = choice([char('a'), char('b'), char('c')])
    assert p.parse("b") == 'b'
    assert parse_error(p, "d").expected == "'a' or 'b' or 'c'"

def test_choice_empty():
    with pytest.raises(ValueError):
        choice([])

def test_between():
    assert between(char('('), char(')'), DIGIT).parse("(5)") == '5'

def test_sep_by():
    assert sep_by(DIGIT, char(',')).parse("1,2,3") == ('1', '2', '3')
    assert sep_by(DIGIT, char(',')).parse("") == ()
    assert eat(sep_by(DIGIT, char(',')), "1,x") == (('1',), ",x")

def test_sep_by1():
    assert sep_by1(DIGIT, char(',')).parse("7") == ('7',)
    assert isinstance(parse_error(sep_by1(DIGIT, char(',')), ""), UnexpectedEOFError)

def test_create_parser():
    def eat_two(source, text):
        return Result(text[:2], text[2:])
    p = create_parser("two chars", eat_two)
    assert p.expected_description == "two chars"
    assert p.and_(char('c')).parse("abc") == ("ab", 'c')

# --- Tracing ---

def test_traced_logs_match(caplog):
    caplog.set_level(logging.DEBUG, logger="pygrakmat")
    assert traced(char('a'), "letter a").parse("a") == 'a'
    messages = [r.getMessage() for r in caplog.records if r.name == "pygrakmat.Combinators"]
    assert messages == ["trying letter a at <inline>:1:1", "matched letter a, 0 chars left"]

def test_traced_logs_failure(caplog):
    caplog.set_level(logging.DEBUG, logger="pygrakmat")
    error = parse_error(traced(char('a')), "b")
    assert error.expected == "'a'"
    messages = [r.getMessage() for r in caplog.records if r.name == "pygrakmat.Combinators"]
    assert messages[-1] == "failed 'a': Expected 'a', but got 'b'"

def test_traced_is_silent_without_debug(caplog):
    caplog.set_level(logging.WARNING, logger="pygrakmat")
    assert traced(char('a')).parse("a") == 'a'
    assert not [r for r in caplog.records if r.name == "pygrakmat.Combinators"]
