"""Memoizing source database.

Source texts are inputs keyed by any hashable source-unit id. Derived
queries (``parse``, ``line_starts``) are pure functions of those inputs;
their results, including syntax errors, are cached per ``(query, key)``
together with the inputs they read. Changing an input drops exactly the
cached results that read it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

from bozon.ast import Program
from bozon.errors import ParseError, SpanRangeError
from bozon.parser import DEFAULT_MAX_DEPTH, Parser
from bozon.tokens import Position, line_starts, position_at

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Memo:
    value: Any
    error: ParseError | SpanRangeError | None
    inputs: frozenset[Hashable]


class Database:
    """Per-source-unit cache of parse results."""

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._max_depth = max_depth
        self._sources: dict[Hashable, str] = {}
        self._memo: dict[tuple[str, Hashable], _Memo] = {}
        self._revision = 0
        self._lock = threading.RLock()
        # One set per query being computed; innermost last
        self._reads: list[set[Hashable]] = []

    @property
    def revision(self) -> int:
        """Incremented every time an input actually changes."""
        return self._revision

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def set_source(self, key: Hashable, text: str) -> bool:
        """Set the text of a source unit. Returns False if it was unchanged."""
        with self._lock:
            if self._sources.get(key) == text:
                return False
            self._sources[key] = text
            self._invalidate(key)
            return True

    def remove_source(self, key: Hashable) -> None:
        with self._lock:
            del self._sources[key]
            self._invalidate(key)

    def source(self, key: Hashable) -> str:
        with self._lock:
            text = self._sources[key]
            if self._reads:
                self._reads[-1].add(key)
            return text

    def keys(self) -> tuple[Hashable, ...]:
        with self._lock:
            return tuple(self._sources)

    def _invalidate(self, key: Hashable) -> None:
        self._revision += 1
        stale = [memo_key for memo_key, memo in self._memo.items() if key in memo.inputs]
        for memo_key in stale:
            del self._memo[memo_key]
        logger.debug(
            "source %r changed (revision %d), dropped %d cached results",
            key,
            self._revision,
            len(stale),
        )

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    def parse(self, key: Hashable) -> Program:
        """Top-level atoms of a source unit. Raises the unit's syntax error."""
        return self._query("parse", key, self._compute_parse)

    def line_starts(self, key: Hashable) -> tuple[int, ...]:
        return self._query("line_starts", key, lambda k: line_starts(self.source(k)))

    def position(self, key: Hashable, offset: int) -> Position:
        """Line/column of an offset inside a source unit."""
        return position_at(self.source(key), offset, self.line_starts(key))

    def _compute_parse(self, key: Hashable) -> Program:
        return Parser(self.source(key), self._max_depth).parse()

    def _query(self, name: str, key: Hashable, compute: Callable[[Hashable], Any]) -> Any:
        memo_key = (name, key)
        with self._lock:
            memo = self._memo.get(memo_key)
            if memo is None:
                logger.debug("%s(%r): computing at revision %d", name, key, self._revision)
                reads: set[Hashable] = set()
                self._reads.append(reads)
                error: ParseError | SpanRangeError | None = None
                try:
                    value = compute(key)
                except (ParseError, SpanRangeError) as exc:
                    value, error = None, exc
                finally:
                    self._reads.pop()
                memo = _Memo(value, error, frozenset(reads))
                self._memo[memo_key] = memo
            else:
                logger.debug("%s(%r): cached", name, key)
            if self._reads:
                self._reads[-1].update(memo.inputs)

        if memo.error is not None:
            # Drop frames left by earlier raises of the cached error
            raise memo.error.with_traceback(None)
        return memo.value
