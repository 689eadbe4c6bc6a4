"""Error types with formatted source context."""

from __future__ import annotations

from bozon.tokens import Position, position_at


class ParseError(Exception):
    """Raised on the first syntax error, with offset and expected alternatives."""

    def __init__(
        self,
        offset: int,
        expected: tuple[str, ...],
        source: str,
        message: str | None = None,
    ) -> None:
        self.offset = offset
        self.expected = expected
        self.source = source
        self.message = message if message is not None else self._describe()
        super().__init__(self.format())

    @property
    def found(self) -> str | None:
        """The character at the failing offset, or None at end of input."""
        if self.offset < len(self.source):
            return self.source[self.offset]
        return None

    @property
    def position(self) -> Position:
        return position_at(self.source, self.offset)

    def _describe(self) -> str:
        found = self.found
        what = "end of input" if found is None else repr(found)
        if not self.expected:
            return f"unexpected {what}"
        return f"unexpected {what}, expected one of: {', '.join(self.expected)}"

    def format(self, filename: str = "input.bz") -> str:
        return render_snippet(self.message, self.source, self.offset, 1, filename)


class NestingError(ParseError):
    """Raised when list nesting exceeds the parser's depth limit."""

    def __init__(self, offset: int, max_depth: int, source: str) -> None:
        self.max_depth = max_depth
        super().__init__(
            offset,
            (),
            source,
            f"list nesting exceeds maximum depth of {max_depth}",
        )


class SpanRangeError(Exception):
    """Raised when a span would be longer than a Span can represent."""

    def __init__(self, start: int, end: int, limit: int) -> None:
        self.start = start
        self.end = end
        self.limit = limit
        self.message = (
            f"span {start}..{end} is {end - start} characters long, "
            f"exceeding the maximum of {limit}"
        )
        super().__init__(self.message)

    @property
    def length(self) -> int:
        return self.end - self.start

    def format(self, source: str, filename: str = "input.bz") -> str:
        return render_snippet(self.message, source, self.start, self.length, filename)


def render_snippet(
    message: str, source: str, offset: int, length: int, filename: str
) -> str:
    """Render an error message with the offending source line and carets."""
    pos = position_at(source, offset)
    lines = source.splitlines(keepends=True)
    line_idx = pos.line - 1
    col = pos.column

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline at least one char, never past the end of the line
    underline_len = max(1, min(length, len(source_line) - col + 1))

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(pos.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{pos.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )
