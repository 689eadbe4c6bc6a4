"""Half-open source ranges with a bounded length."""

from __future__ import annotations

from dataclasses import dataclass

from bozon.errors import SpanRangeError

# Length is stored as an unsigned 16-bit quantity; no single atom may cover
# more than this many characters.
MAX_SPAN_LEN = 0xFFFF


@dataclass(frozen=True, slots=True)
class Span:
    """Source range [start, start + length).

    Offsets index into the parsed ``str``. Construction fails with
    SpanRangeError when the length does not fit in 16 bits.
    """

    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"span start must be non-negative, got {self.start}")
        if self.length < 0:
            raise ValueError(f"span length must be non-negative, got {self.length}")
        if self.length > MAX_SPAN_LEN:
            raise SpanRangeError(self.start, self.start + self.length, MAX_SPAN_LEN)

    @classmethod
    def from_bounds(cls, start: int, end: int) -> Span:
        if start > end:
            raise ValueError(f"span start {start} is after end {end}")
        return cls(start, end - start)

    @property
    def end(self) -> int:
        return self.start + self.length

    def merge(self, other: Span) -> Span:
        """Return the smallest span covering both spans."""
        return Span.from_bounds(min(self.start, other.start), max(self.end, other.end))

    def __add__(self, other: Span) -> Span:
        if not isinstance(other, Span):
            return NotImplemented
        return self.merge(other)

    def slice(self, source: str) -> str:
        """Return the text this span covers in *source*."""
        return source[self.start : self.end]

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"
