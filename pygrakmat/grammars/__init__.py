# Built-in grammars, each exposing parse(text) and parse_file(path)
from . import JSON, URL, GrammarDefinitionLanguage
