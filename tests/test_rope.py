from __future__ import annotations

import random
import re
from bisect import bisect_right

from modal_edit.buffer.rope import (
    MAX_CHUNK_CHARS,
    Rope,
    count_breaks,
    terminator_length,
)

_BREAKS = ("\n", "\r\n", "\r")


def make_text(lines: int = 300) -> str:
    return "".join("x" * (i % 13) + _BREAKS[i % 3] for i in range(lines))


def line_starts(text: str) -> list[int]:
    return [0] + [m.end() for m in re.finditer(r"\r\n|\r|\n", text)]


def assert_matches(rope: Rope, text: str, samples: list[int]) -> None:
    starts = line_starts(text)
    assert str(rope) == text
    assert rope.len_chars() == len(text)
    assert rope.len_lines() == len(starts)
    for line, start in enumerate(starts):
        assert rope.line_to_char(line) == start
    for index in samples:
        assert rope.char_to_line(index) == bisect_right(starts, index) - 1


def assert_chunks_well_formed(rope: Rope) -> None:
    chunks = list(rope.chunks())
    assert all(0 < len(chunk) <= MAX_CHUNK_CHARS for chunk in chunks)
    for before, after in zip(chunks, chunks[1:]):
        assert not (before.endswith("\r") and after.startswith("\n"))


def test_count_breaks_treats_crlf_as_one() -> None:
    assert count_breaks("a\r\nb\nc\rd") == 3
    assert count_breaks("\r\r\n\n") == 3
    assert count_breaks("") == 0


def test_terminator_length() -> None:
    assert terminator_length("abc\r\n") == 2
    assert terminator_length("abc\n") == 1
    assert terminator_length("abc\r") == 1
    assert terminator_length("abc") == 0


def test_empty_rope_has_one_line() -> None:
    rope = Rope()

    assert rope.len_chars() == 0
    assert rope.len_lines() == 1
    assert rope.char_to_line(0) == 0
    assert rope.char_to_line(1) is None
    assert rope.line_to_char(0) == 0
    assert rope.line_to_char(1) is None
    assert rope.line(0) == ""


def test_index_conversion_matches_scan_across_chunks() -> None:
    text = make_text()
    rope = Rope(text)

    assert len(list(rope.chunks())) > 1
    assert_matches(rope, text, list(range(len(text) + 1)))


def test_crlf_is_not_split_at_chunk_boundary() -> None:
    text = "a" * (MAX_CHUNK_CHARS - 1) + "\r\n" + "b" * (MAX_CHUNK_CHARS - 1)
    rope = Rope(text)

    chunks = list(rope.chunks())
    assert chunks[0] == "a" * (MAX_CHUNK_CHARS - 1)
    assert chunks[1].startswith("\r\n")
    assert_chunks_well_formed(rope)
    assert rope.len_lines() == 2
    assert rope.char_to_line(MAX_CHUNK_CHARS) == 0
    assert rope.line(0) == "a" * (MAX_CHUNK_CHARS - 1) + "\r\n"


def test_char_to_line_on_lf_of_crlf_stays_on_line() -> None:
    rope = Rope("ab\r\ncd")

    assert rope.char_to_line(2) == 0
    assert rope.char_to_line(3) == 0
    assert rope.char_to_line(4) == 1


def test_out_of_range_queries_return_none() -> None:
    rope = Rope("ab\ncd")

    assert rope.char_to_line(-1) is None
    assert rope.char_to_line(6) is None
    assert rope.line_to_char(-1) is None
    assert rope.line_to_char(2) is None
    assert rope.line(2) is None


def test_line_includes_terminator() -> None:
    rope = Rope("one\r\ntwo\nthree")

    assert rope.line(0) == "one\r\n"
    assert rope.line(1) == "two\n"
    assert rope.line(2) == "three"


def test_slice_clamps_bounds() -> None:
    rope = Rope("hello")

    assert rope.slice(-3, 2) == "he"
    assert rope.slice(3, 99) == "lo"
    assert rope.slice(4, 2) == ""


def test_remove_returns_removed_text() -> None:
    rope = Rope("hello world")

    assert rope.remove(5, 11) == " world"
    assert str(rope) == "hello"
    assert rope.remove(3, 3) == ""


def test_inserting_lf_after_cr_in_previous_chunk_forms_one_break() -> None:
    text = "a" * (MAX_CHUNK_CHARS - 1) + "\r" + "b" * MAX_CHUNK_CHARS
    rope = Rope(text)
    assert next(rope.chunks()).endswith("\r")
    assert rope.len_lines() == 2

    rope.insert(MAX_CHUNK_CHARS, "\n")

    text = text[:MAX_CHUNK_CHARS] + "\n" + text[MAX_CHUNK_CHARS:]
    assert_matches(rope, text, [MAX_CHUNK_CHARS - 1, MAX_CHUNK_CHARS, len(text)])
    assert_chunks_well_formed(rope)
    assert rope.len_lines() == 2


def test_removing_between_cr_and_lf_joins_pair() -> None:
    text = "a" * (MAX_CHUNK_CHARS - 1) + "\rX\n" + "b" * (MAX_CHUNK_CHARS - 2)
    rope = Rope(text)
    assert list(rope.chunks())[1].startswith("X\n")
    assert rope.len_lines() == 3

    assert rope.remove(MAX_CHUNK_CHARS, MAX_CHUNK_CHARS + 1) == "X"

    assert rope.len_lines() == 2
    assert_chunks_well_formed(rope)


def test_typing_in_one_place_does_not_fragment_chunks() -> None:
    text = "a" * (MAX_CHUNK_CHARS * 4)
    rope = Rope(text)

    for step in range(300):
        index = MAX_CHUNK_CHARS + step
        rope.insert(index, "b")
        text = text[:index] + "b" + text[index:]

    assert_matches(rope, text, [0, MAX_CHUNK_CHARS, len(text) // 2, len(text)])
    assert_chunks_well_formed(rope)
    assert len(list(rope.chunks())) <= 2 * -(-len(text) // MAX_CHUNK_CHARS)


def test_deleting_back_to_empty() -> None:
    text = make_text(400)
    rope = Rope(text)

    while text:
        cut = min(len(text), 700)
        assert rope.remove(len(text) - cut, len(text)) == text[-cut:]
        text = text[:-cut]
        assert_matches(rope, text, [0, len(text)])

    assert list(rope.chunks()) == []
    rope.insert(0, "x\r\ny")
    assert_matches(rope, "x\r\ny", [0, 1, 2, 3, 4])


def test_random_edits_keep_indexes_consistent() -> None:
    rng = random.Random(20240611)
    text = make_text(200)
    rope = Rope(text)
    alphabet = ["a", "b", "\n", "\r", "\r\n", "xyz" * 200]

    for _ in range(200):
        if text and rng.random() < 0.4:
            start = rng.randrange(len(text))
            end = min(len(text), start + rng.randrange(1, 1500))
            assert rope.remove(start, end) == text[start:end]
            text = text[:start] + text[end:]
        else:
            index = rng.randrange(len(text) + 1)
            piece = rng.choice(alphabet)
            rope.insert(index, piece)
            text = text[:index] + piece + text[index:]
        samples = [rng.randrange(len(text) + 1) for _ in range(20)]
        assert_matches(rope, text, samples)
        assert_chunks_well_formed(rope)
