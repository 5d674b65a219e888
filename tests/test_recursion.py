import sys

import pytest

from pygrakmat.Char import char
from pygrakmat.Combinators import at_least, one_or_more, optional, ref
from pygrakmat.Errors import GrammarError, ParseError, RecursionDepthError


def test_stack_safety():
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(1000)
    try:
        n = 5000
        result = at_least(char('a'), 1).parse("a" * n)
    finally:
        sys.setrecursionlimit(limit)
    assert len(result) == n

def test_nested_recursion():
    nested = ref(lambda: group)
    group = char('[').then(optional(nested)).before(char(']')).map(lambda inner: (inner or 0) + 1)
    depth = 20
    assert group.parse("[" * depth + "]" * depth) == depth

def test_left_recursion_is_reported():
    expression = ref(lambda: sum_)
    sum_ = expression.before(char('+')).and_(char('a')) | char('a')
    with pytest.raises(RecursionDepthError) as info:
        sum_.parse("a+a", source_name="sum.txt")
    assert isinstance(info.value, GrammarError)
    assert not isinstance(info.value, ParseError)
    assert info.value.source_name == "sum.txt"

def test_cyclic_ref_without_base_case():
    loop = ref(lambda: loop_)
    loop_ = one_or_more(loop)
    with pytest.raises(RecursionDepthError):
        loop_.parse("x")
