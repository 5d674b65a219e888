"""
Grammar of the grammar definition language, producing a Node tree.

    grammar       = grammarName ';' mainRule ';' (rule ';')*
    grammarName   = "grammar" SPACES IDENTIFIER
    mainRule      = IDENTIFIER (':' type)? '=' expression code?
    rule          = ("fragment" SPACES)? IDENTIFIER (':' type)? '=' expression code?
    type          = '(' [^)]+ ')'
    code          = '{' (nestedBlock | [^{}])* '}'

    expression    = base (operator expression | SPACES expression)?
    operator      = '|'    (or)
                  | ','    (_and_)
                  | '->'   (_then_)
                  | '>'    (then)
                  | '<-'   (_before_)
                  | '<'    (before)
    base          = '(' expression ')' countSuffix? | IDENTIFIER | literal | group | '*'
    countSuffix   = '!' | '?' | '*' | '-*' | '+' | '-+' | '{n}' | '-{n}' | '{n,}' | '-{n,}' | '{n,m}' | '-{n,m}'

A bare SPACES between two expressions is an and. A leading '-' in a count
suffix (and the '->' / '<-' / ',' forms) selects the whitespace-skipping
variant of the combinator.
"""
from typing import List, Optional, Tuple

from ..Char import any_of, char, except_, string
from ..Combinators import one_or_more, optional, ref, zero_or_more
from ..Node import Node, ast_node
from ..Parser import Parser
from ..Rules import (
    ASTERISK, CARET, COLON, COMMA, DOUBLE_QUOTE, EQUALS_SIGN, EXCLAMATION_MARK, GREATER_THAN_SIGN,
    IDENTIFIER, LEFT_BRACE, LEFT_BRACKET, LEFT_PAREN, LESS_THAN_SIGN, MINUS, NUMBER, PLUS,
    QUESTION_MARK, QUOTE, RIGHT_BRACE, RIGHT_BRACKET, RIGHT_PAREN, SEMICOLON, VERTICAL_BAR,
)
from ..Spaced import OPTIONAL_SPACES, SPACES, spaced_zero_or_more

_expression_ref: Parser[Node] = ref(lambda: _expression)

# '(' expression ')'
_parenthesized: Parser[Node] = LEFT_PAREN.spaced_then(_expression_ref).spaced_before(RIGHT_PAREN)


def _counted(parts: Tuple[str, Optional[Tuple[Optional[str]]]]) -> Tuple[str, List[Node]]:
    """'{n}', '{n,}' or '{n,m}'; the upper part is None when there is no comma."""
    times, upper = parts
    if upper is None:
        return "repeat", [ast_node("times", times)]
    if upper[0] is None:
        return "atLeast", [ast_node("times", times)]
    return "inRange", [ast_node("min", times), ast_node("max", upper[0])]


# '{' NUMBER (',' NUMBER?)? '}'
_braces: Parser[Tuple[str, List[Node]]] = (
    LEFT_BRACE.spaced_then(NUMBER)
    .spaced_and(optional(COMMA.spaced_then(optional(NUMBER)).map(lambda max_times: (max_times,))))
    .spaced_before(RIGHT_BRACE)
    .map(_counted)
)
_repetition: Parser[Tuple[str, List[Node]]] = (
    ASTERISK.map(lambda _: ("zeroOrMore", []))
    | PLUS.map(lambda _: ("oneOrMore", []))
    | _braces
)
_count_suffix: Parser[Tuple[str, List[Node]]] = (
    EXCLAMATION_MARK.map(lambda _: ("required", []))
    | QUESTION_MARK.map(lambda _: ("optional", []))
    | MINUS.spaced_then(_repetition).map(lambda suffix: (f"_{suffix[0]}_", suffix[1]))
    | _repetition
).with_name("count suffix")


def _to_counted(pair: Tuple[Node, Optional[Tuple[str, List[Node]]]]) -> Node:
    expression, suffix = pair
    if suffix is None:
        return ast_node("grouping", children=[expression])
    name, counts = suffix
    return ast_node(name, children=[*counts, ast_node("expression", children=[expression])])


# '(' expression ')' followed by at most one count suffix
_grouping: Parser[Node] = (
    _parenthesized.and_(optional(OPTIONAL_SPACES.then(_count_suffix)))
    .map(_to_counted)
    .with_name("grouping")
)

# --- Literals ---

_ESCAPES = {'"': '"', "'": "'", '\\': '\\', 'b': '\b', 'n': '\n', 'r': '\r', 't': '\t'}
_GROUP_ESCAPES = {'^': '^', ']': ']', '\\': '\\', '-': '-', 'b': '\b', 'n': '\n', 'r': '\r', 't': '\t'}

_escaped_character: Parser[str] = char('\\').then(any_of(_ESCAPES)).map(_ESCAPES.__getitem__)
_string_character: Parser[str] = except_('"\\') | _escaped_character
_quoted_character: Parser[str] = except_("'\\") | _escaped_character

_string_literal: Parser[Node] = (
    DOUBLE_QUOTE.then(zero_or_more(_string_character)).before(DOUBLE_QUOTE)
    .map(lambda chars: ast_node("string", "".join(chars)))
    .with_name("string literal")
)
_character_literal: Parser[Node] = (
    QUOTE.then(_quoted_character).before(QUOTE)
    .map(lambda c: ast_node("string", c))
    .with_name("character literal")
)

_group_escaped_character: Parser[str] = char('\\').then(any_of(_GROUP_ESCAPES)).map(_GROUP_ESCAPES.__getitem__)
_group_character: Parser[str] = (except_("]\\") | _group_escaped_character).with_name("character")
_group_character_node: Parser[Node] = _group_character.map(lambda c: ast_node("char", c))
_range_expression: Parser[Node] = (
    _group_character.before(MINUS).and_(_group_character)
    .map(lambda pair: ast_node("range", children=[
        ast_node("firstChar", pair[0]),
        ast_node("lastChar", pair[1]),
    ]))
    .with_name("range expression")
)
# ranges before single characters
_group_item: Parser[Node] = _range_expression | _group_character_node

_any_of: Parser[Node] = (
    LEFT_BRACKET.then(one_or_more(_group_item)).before(RIGHT_BRACKET)
    .map(lambda items: ast_node("anyOf", children=items))
    .with_name("including group")
)
_except: Parser[Node] = (
    LEFT_BRACKET.then(CARET).then(one_or_more(_group_item)).before(RIGHT_BRACKET)
    .map(lambda items: ast_node("except", children=items))
    .with_name("excluding group")
)
_any_char: Parser[Node] = ASTERISK.map(lambda _: ast_node("anyChar")).with_name("any character")

_parser_creator: Parser[Node] = (
    _string_literal | _character_literal | _except | _any_of | _any_char
).with_name("parser creator")
_rule_reference: Parser[Node] = (
    IDENTIFIER.map(lambda name: ast_node("ruleReference", name))
    .with_name("rule reference")
)
_base_expression: Parser[Node] = (
    _grouping | _rule_reference | _parser_creator
).with_name("base expression")


# --- Binary combinators ---

def _binary(name: str):
    def build(pair: Tuple[Node, Node]) -> Node:
        left, right = pair
        return ast_node(name, children=[
            ast_node("left", children=[left]),
            ast_node("right", children=[right]),
        ])
    return build


_operator: Parser[str] = (
    VERTICAL_BAR.map(lambda _: "or")
    | COMMA.map(lambda _: "_and_")
    | MINUS.before(GREATER_THAN_SIGN).map(lambda _: "_then_")
    | GREATER_THAN_SIGN.map(lambda _: "then")
    | LESS_THAN_SIGN.before(MINUS).map(lambda _: "_before_")
    | LESS_THAN_SIGN.map(lambda _: "before")
).with_name("combinator")

# operator expression, or SPACES expression for a plain and
_operator_tail: Parser[Tuple[str, Node]] = (
    OPTIONAL_SPACES.then(_operator).spaced_and(_expression_ref)
    | SPACES.then(_expression_ref).map(lambda right: ("and", right))
)


def _to_expression(pair: Tuple[Node, Optional[Tuple[str, Node]]]) -> Node:
    left, tail = pair
    if tail is None:
        return left
    name, right = tail
    return _binary(name)((left, right))


_expression: Parser[Node] = (
    _base_expression.and_(optional(_operator_tail)).map(_to_expression).with_name("expression")
)


# --- Rules ---

_nested_block_ref: Parser[str] = ref(lambda: _nested_block)
_code_char: Parser[str] = except_("{}")
_nested_block: Parser[str] = (
    LEFT_BRACE.then(zero_or_more(_nested_block_ref | _code_char)).before(RIGHT_BRACE)
    .map(lambda parts: "{" + "".join(parts) + "}")
)
_code: Parser[str] = (
    LEFT_BRACE.then(zero_or_more(_nested_block | _code_char)).before(RIGHT_BRACE)
    .map("".join)
    .with_name("code")
)

_rule_type: Parser[str] = (
    char('(').spaced_then(one_or_more(except_(")"))).spaced_before(char(')'))
    .map(lambda chars: "".join(chars).strip())
    .with_name("type")
)
_typed_name: Parser[Tuple[str, Optional[str]]] = IDENTIFIER.spaced_and(optional(COLON.spaced_then(_rule_type)))
_definition = _typed_name.spaced_before(EQUALS_SIGN).spaced_and(_expression).spaced_and(optional(_code))


def _rule_children(parts) -> list:
    ((name, type_), expression), code = parts
    children = [ast_node("name", name)]
    if type_ is not None:
        children.append(ast_node("type", type_))
    children.append(ast_node("expression", children=[expression]))
    if code is not None:
        children.append(ast_node("code", code))
    return children


def _to_rule(parts) -> Node:
    fragment, definition = parts
    children = _rule_children(definition)
    if fragment is not None:
        children.insert(0, ast_node("fragment"))
    return ast_node("rule", children=children)


_rule: Parser[Node] = (
    optional(string("fragment").before(SPACES)).and_(_definition)
    .map(_to_rule)
    .with_name("rule")
)
_main_rule: Parser[Node] = (
    _definition
    .map(lambda parts: ast_node("mainRule", children=_rule_children(parts)))
    .with_name("main rule")
)
_grammar_name: Parser[Node] = (
    string("grammar").before(SPACES).then(IDENTIFIER)
    .map(lambda name: ast_node("name", name))
    .with_name("grammar name")
)


def _to_grammar(parts) -> Node:
    (grammar_name, main_rule), rules = parts
    return ast_node("grammar", children=[grammar_name, main_rule, ast_node("rules", children=rules)])


_grammar: Parser[Node] = (
    OPTIONAL_SPACES.then(_grammar_name).spaced_before(SEMICOLON)
    .spaced_and(_main_rule).spaced_before(SEMICOLON)
    .spaced_and(spaced_zero_or_more(_rule.spaced_before(SEMICOLON)))
    .before(OPTIONAL_SPACES)
    .map(_to_grammar)
    .with_name("grammar")
)


def parse(text: str) -> Node:
    return _grammar.parse(text)


def parse_file(path) -> Node:
    return _grammar.parse_file(path)
