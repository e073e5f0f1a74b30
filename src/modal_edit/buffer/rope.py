"""Chunked rope used as the storage layer of ``TextBuffer``.

Text is held as a list of bounded chunks. Two Fenwick trees (character
counts and line-break counts per chunk) turn char/line lookups into a tree
descent followed by a scan of a single chunk. A mutation re-splits only the
chunks around the edit; while the chunk count stays the same the trees are
updated in place, otherwise they are rebuilt. Chunks are split into
balanced pieces, so the count changes roughly once per ``MAX_CHUNK_CHARS / 2``
characters typed or deleted in one place.

Recognised line breaks are ``"\\n"``, ``"\\r\\n"`` and ``"\\r"``. A CRLF pair
always counts as one break and is never split across two chunks.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional

MAX_CHUNK_CHARS = 1024

_BREAK_RE = re.compile(r"\r\n|\r|\n")


def count_breaks(text: str) -> int:
    """Number of line breaks in ``text`` (a CRLF pair counts once)."""

    return text.count("\n") + text.count("\r") - text.count("\r\n")


def terminator_length(line: str) -> int:
    """Length of the line terminator at the end of ``line`` (0, 1 or 2)."""

    if line.endswith("\r\n"):
        return 2
    if line.endswith(("\n", "\r")):
        return 1
    return 0


def _split_chunks(text: str) -> List[str]:
    """Cut ``text`` into near-equal chunks of at most ``MAX_CHUNK_CHARS``."""

    if not text:
        return []
    pieces = -(-len(text) // MAX_CHUNK_CHARS)
    size = -(-len(text) // pieces)
    chunks: List[str] = []
    start = 0
    while start < len(text):
        end = min(start + size, len(text))
        # Keep "\r\n" inside one chunk.
        if end < len(text) and text[end - 1] == "\r" and text[end] == "\n":
            end += 1 if end - start < MAX_CHUNK_CHARS else -1
        chunks.append(text[start:end])
        start = end
    return chunks


class _PrefixTable:
    """Fenwick tree of per-chunk counts."""

    __slots__ = ("_tree", "_top", "total")

    def __init__(self, values: Iterable[int] = ()) -> None:
        tree = [0, *values]
        size = len(tree) - 1
        for i in range(1, size + 1):
            parent = i + (i & -i)
            if parent <= size:
                tree[parent] += tree[i]
        self._tree = tree
        self._top = 1 << (size.bit_length() - 1) if size else 0
        self.total = self.prefix(size)

    def add(self, index: int, delta: int) -> None:
        self.total += delta
        i = index + 1
        while i < len(self._tree):
            self._tree[i] += delta
            i += i & -i

    def prefix(self, count: int) -> int:
        """Sum of the first ``count`` values."""

        total = 0
        while count > 0:
            total += self._tree[count]
            count -= count & -count
        return total

    def search(self, target: int) -> int:
        """Largest ``k`` with ``prefix(k) <= target``."""

        pos = 0
        step = self._top
        while step:
            nxt = pos + step
            if nxt < len(self._tree) and self._tree[nxt] <= target:
                pos = nxt
                target -= self._tree[nxt]
            step >>= 1
        return pos


class Rope:
    """Mutable text with ``O(log n)`` char/line index conversion."""

    __slots__ = ("_chunks", "_chars", "_breaks")

    def __init__(self, text: str = "") -> None:
        self._chunks: List[str] = _split_chunks(text)
        self._reindex()

    # -- size ---------------------------------------------------------------

    def len_chars(self) -> int:
        return self._chars.total

    def len_lines(self) -> int:
        return self._breaks.total + 1

    def __len__(self) -> int:
        return self._chars.total

    def __str__(self) -> str:
        return "".join(self._chunks)

    def __repr__(self) -> str:
        return (
            f"Rope(chars={self.len_chars()}, lines={self.len_lines()}, "
            f"chunks={len(self._chunks)})"
        )

    def chunks(self) -> Iterator[str]:
        return iter(self._chunks)

    # -- index conversion ---------------------------------------------------

    def char_to_line(self, char_index: int) -> Optional[int]:
        """Line containing ``char_index``; ``None`` outside ``[0, len_chars]``."""

        if char_index < 0 or char_index > self.len_chars():
            return None
        if not self._chunks:
            return 0
        chunk_idx = self._chunk_for_char(char_index)
        local = char_index - self._chars.prefix(chunk_idx)
        chunk = self._chunks[chunk_idx]
        prefix = chunk[:local]
        breaks = count_breaks(prefix)
        # An index pointing at the "\n" of a CRLF pair belongs to the CR's line.
        if prefix.endswith("\r") and local < len(chunk) and chunk[local] == "\n":
            breaks -= 1
        return self._breaks.prefix(chunk_idx) + breaks

    def line_to_char(self, line_index: int) -> Optional[int]:
        """Offset of the first char of ``line_index``; ``None`` when out of range."""

        if line_index < 0 or line_index > self._breaks.total:
            return None
        if line_index == 0:
            return 0
        # Last chunk starting before break number ``line_index`` holds it.
        chunk_idx = self._breaks.search(line_index - 1)
        wanted = line_index - self._breaks.prefix(chunk_idx)
        for seen, match in enumerate(_BREAK_RE.finditer(self._chunks[chunk_idx]), 1):
            if seen == wanted:
                return self._chars.prefix(chunk_idx) + match.end()
        raise AssertionError("rope break index out of sync")  # pragma: no cover

    def line(self, line_index: int) -> Optional[str]:
        """Text of ``line_index`` including its terminator."""

        start = self.line_to_char(line_index)
        if start is None:
            return None
        end = self.line_to_char(line_index + 1)
        return self.slice(start, self.len_chars() if end is None else end)

    def slice(self, start: int, end: int) -> str:
        start = max(0, min(start, self.len_chars()))
        end = max(start, min(end, self.len_chars()))
        if start == end:
            return ""
        first = self._chunk_for_char(start)
        chunk_start = self._chars.prefix(first)
        parts: List[str] = []
        for chunk in self._chunks[first:]:
            if chunk_start >= end:
                break
            parts.append(chunk[max(0, start - chunk_start) : end - chunk_start])
            chunk_start += len(chunk)
        return "".join(parts)

    # -- mutation -----------------------------------------------------------

    def insert(self, char_index: int, text: str) -> None:
        if not text:
            return
        if not self._chunks:
            self._chunks = _split_chunks(text)
            self._reindex()
            return
        char_index = max(0, min(char_index, self.len_chars()))
        idx = self._chunk_for_char(char_index)
        local = char_index - self._chars.prefix(idx)
        chunk = self._chunks[idx]
        self._replace_chunks(idx, idx + 1, chunk[:local] + text + chunk[local:])

    def remove(self, start: int, end: int) -> str:
        """Delete ``[start, end)`` (clamped) and return the removed text."""

        start = max(0, min(start, self.len_chars()))
        end = max(start, min(end, self.len_chars()))
        if start == end:
            return ""
        removed = self.slice(start, end)
        first = self._chunk_for_char(start)
        last = self._chunk_for_char(end - 1)
        head = self._chunks[first][: start - self._chars.prefix(first)]
        tail = self._chunks[last][end - self._chars.prefix(last) :]
        self._replace_chunks(first, last + 1, head + tail)
        return removed

    # -- internals ----------------------------------------------------------

    def _chunk_for_char(self, char_index: int) -> int:
        return max(0, min(self._chars.search(char_index), len(self._chunks) - 1))

    def _replace_chunks(self, first: int, stop: int, text: str) -> None:
        """Swap ``chunks[first:stop]`` for ``text``.

        One neighbour on each side is re-split along with it, so a "\\r" and
        a following "\\n" always land in the same chunk.
        """

        lo = max(first - 1, 0)
        hi = min(stop + 1, len(self._chunks))
        old = self._chunks[lo:hi]
        new = _split_chunks(
            "".join(self._chunks[lo:first]) + text + "".join(self._chunks[stop:hi])
        )
        self._chunks[lo:hi] = new
        if len(new) != len(old):
            self._reindex()
            return
        for offset, (before, after) in enumerate(zip(old, new)):
            if len(after) != len(before):
                self._chars.add(lo + offset, len(after) - len(before))
            delta = count_breaks(after) - count_breaks(before)
            if delta:
                self._breaks.add(lo + offset, delta)

    def _reindex(self) -> None:
        self._chars = _PrefixTable(len(chunk) for chunk in self._chunks)
        self._breaks = _PrefixTable(count_breaks(chunk) for chunk in self._chunks)


__all__ = ["Rope", "MAX_CHUNK_CHARS", "count_breaks", "terminator_length"]
