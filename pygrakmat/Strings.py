import re
from dataclasses import dataclass
from typing import List

PREVIEW_LENGTH = 20          # Max length of unexpected input shown in errors
ELLIPSIS = "..."
DEFAULT_SOURCE_NAME = "<inline>"

# A line is either a run of text ended by its own terminator, or the unterminated tail.
_LINE_PATTERN = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")


def bound_length_to(text: str, max_length: int, ellipsis: str = ELLIPSIS) -> str:
    """Appends `ellipsis` to the first `max_length` characters of `text` if it's longer."""
    if not text:
        raise ValueError("String is empty")
    if max_length < 1:
        raise ValueError("Max length is smaller than 1")
    if len(text) > max_length:
        return text[:max_length] + ellipsis
    return text


def lines_with_separators(text: str) -> List[str]:
    """
    Splits text into lines, keeping the separator of each line.

        "a\\nb\\nc"       -> ["a\\n", "b\\n", "c"]
        "a\\rb\\rc\\r"     -> ["a\\r", "b\\r", "c\\r"]
        "a\\r\\n\\r\\nb"    -> ["a\\r\\n", "\\r\\n", "b"]

    Unlike str.splitlines, only LF, CR and CRLF count as separators.
    """
    return _LINE_PATTERN.findall(text)


def strip_separator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\r") or line.endswith("\n"):
        return line[:-1]
    return line


@dataclass(frozen=True)
class ErrorPosition:
    """Line and column of an error, with the line's text (without separators)."""
    line_number: int
    column_number: int
    line_source: str

    @property
    def line_index(self) -> int:
        return self.line_number - 1

    @property
    def column_index(self) -> int:
        return self.column_number - 1

    def __str__(self) -> str:
        # 3: some line
        #         ^
        source_prefix = f"{self.line_number}: "
        column_pointer = " " * (len(source_prefix) + self.column_index) + "^"
        return f"{source_prefix}{self.line_source}\n{column_pointer}"


def error_position(text: str, index: int) -> ErrorPosition:
    """
    Converts a zero-based character index into an ErrorPosition.

    An index past the end of text points one column after the last line.
    """
    offset = 0  # Index of the first character of the current line
    lines = lines_with_separators(text)
    for line_number, line in enumerate(lines, start=1):
        if offset + len(line) > index:
            return ErrorPosition(line_number, index - offset + 1, strip_separator(line))
        offset += len(line)

    if not lines:
        return ErrorPosition(1, 1, "")
    last_line = strip_separator(lines[-1])
    return ErrorPosition(len(lines), len(last_line) + 1, last_line)
