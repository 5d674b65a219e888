# Core
from .Parser import Parser, Source, Result
from .Errors import (
    ParseError, UnexpectedEOFError, UnexpectedTokenError, Tag,
    GrammarError, RecursionDepthError
)
from .Strings import ErrorPosition, error_position, lines_with_separators, bound_length_to

# Characters
from .Char import char, string, any_of, except_, any_char, empty, empty_string

# Combinators
from .Combinators import (
    create_parser, or_, and_, then, before, map_, with_name,
    repeat, at_least, in_range, zero_or_more, one_or_more, optional, ref,
    choice, between, sep_by, sep_by1, traced
)

# Whitespace-skipping combinators
from .Spaced import (
    SPACE, SPACES, OPTIONAL_SPACES,
    spaced_and, spaced_then, spaced_before, spaced_zero_or_more, spaced_one_or_more
)

# Predefined rules
from .Rules import DIGIT, NUMBER, IDENTIFIER

# Syntax trees
from .Node import Node, ast_node
