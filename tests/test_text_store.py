from __future__ import annotations

import random
from pathlib import Path
from typing import Tuple

import pytest

from vibevim.buffer import MissingPathError, TextStore


def make_store(text: str) -> TextStore:
    return TextStore.from_text(text)


def test_empty_store_has_one_empty_line() -> None:
    store = TextStore()

    assert store.line_count() == 1
    assert store.line_length(0) == 0
    assert store.is_empty()
    assert store.text == ""


def test_trailing_newline_produces_final_empty_line() -> None:
    store = make_store("a\n")

    assert store.line_count() == 2
    assert store.line(1) == ""
    assert not store.is_empty()


def test_line_length_excludes_terminator_and_out_of_range_is_zero() -> None:
    store = make_store("abc\nde")

    assert store.line_length(0) == 3
    assert store.line_length(1) == 2
    assert store.line_length(7) == 0
    assert store.line(7) is None


def test_insert_char_sets_modified() -> None:
    store = make_store("ac")

    store.insert_char(0, 1, "b")

    assert store.text == "abc"
    assert store.modified is True


def test_insert_newline_splits_line() -> None:
    store = make_store("hello world")

    store.insert_newline(0, 5)

    assert store.snapshot() == ("hello", " world")
    assert store.line_count() == 2


def test_insert_char_newline_splits_line() -> None:
    store = make_store("ab")

    store.insert_char(0, 1, "\n")

    assert store.snapshot() == ("a", "b")


def test_delete_char_at_line_end_joins_next_line() -> None:
    store = make_store("ab\ncd")

    store.delete_char(0, 2)

    assert store.text == "abcd"


def test_delete_char_past_end_is_noop() -> None:
    store = make_store("ab")

    store.delete_char(0, 2)
    store.delete_char(5, 0)

    assert store.text == "ab"
    assert store.modified is False


def test_delete_char_before_variants() -> None:
    store = make_store("ab\ncd")

    assert store.delete_char_before(1, 1) == (1, 0)
    assert store.text == "ab\nd"
    assert store.delete_char_before(1, 0) == (0, 2)
    assert store.text == "abd"
    assert store.delete_char_before(0, 0) is None
    assert store.text == "abd"


def _offset(text: str, line: int, col: int) -> int:
    lines = text.split("\n")
    return sum(len(part) + 1 for part in lines[:line]) + col


def _position(text: str, index: int) -> Tuple[int, int]:
    line = text.count("\n", 0, index)
    return (line, index - (text.rfind("\n", 0, index) + 1))


def _random_position(rng: random.Random, text: str) -> Tuple[int, int]:
    lines = text.split("\n")
    line = rng.randrange(len(lines))
    return (line, rng.randint(0, len(lines[line])))


@pytest.mark.parametrize("seed", range(5))
def test_line_structure_matches_plain_string_under_random_edits(seed: int) -> None:
    rng = random.Random(seed)
    reference = "one\ntwo\n\nthree"
    store = make_store(reference)

    for _ in range(200):
        line, col = _random_position(rng, reference)
        offset = _offset(reference, line, col)
        op = rng.choice(("insert", "newline", "delete", "backspace"))
        if op == "insert":
            ch = rng.choice("ab \n")
            store.insert_char(line, col, ch)
            reference = reference[:offset] + ch + reference[offset:]
        elif op == "newline":
            store.insert_newline(line, col)
            reference = reference[:offset] + "\n" + reference[offset:]
        elif op == "delete":
            store.delete_char(line, col)
            reference = reference[:offset] + reference[offset + 1 :]
        else:
            landed = store.delete_char_before(line, col)
            if offset == 0:
                assert landed is None
            else:
                reference = reference[: offset - 1] + reference[offset:]
                assert landed == _position(reference, offset - 1)

        expected = reference.split("\n")
        assert store.text == reference
        assert store.line_count() == len(expected)
        for index, text in enumerate(expected):
            assert store.line_length(index) == len(text)
        assert store.line_length(len(expected)) == 0


@pytest.mark.parametrize("seed", range(5))
def test_search_matches_brute_force_scan(seed: int) -> None:
    rng = random.Random(seed)

    for _ in range(100):
        text = "".join(rng.choice("ab \n") for _ in range(rng.randint(0, 30)))
        pattern = rng.choice(("a", "ab", "b a", "aa"))
        store = make_store(text)
        line, col = _random_position(rng, text)
        origin = _offset(text, line, col)
        starts = [i for i in range(len(text)) if text.startswith(pattern, i)]
        after = [s for s in starts if s > origin]
        before = [s for s in starts if s < origin]

        for wrap in (False, True):
            forward = after[0] if after else None
            if forward is None and wrap and starts and starts[0] <= origin:
                forward = starts[0]
            backward = before[-1] if before else None
            if backward is None and wrap and starts and starts[-1] >= origin:
                backward = starts[-1]

            assert store.find_forward(line, col, pattern, wrap) == (
                None if forward is None else _position(text, forward)
            )
            assert store.find_backward(line, col, pattern, wrap) == (
                None if backward is None else _position(text, backward)
            )

        found = store.find_forward(line, col, pattern, True)
        if after and any(s <= origin for s in starts):
            assert found is not None
            back = store.find_backward(*found, pattern, True)
            assert back is not None
            assert back <= (line, col)


def test_find_forward_skips_current_position_and_wraps() -> None:
    store = make_store("foo\nbar\nfoo\n")

    assert store.find_forward(0, 0, "foo", True) == (2, 0)
    assert store.find_forward(2, 0, "foo", False) is None
    assert store.find_forward(2, 0, "foo", True) == (0, 0)


def test_find_forward_wrap_can_land_on_start() -> None:
    store = make_store("only foo here")

    assert store.find_forward(0, 5, "foo", True) == (0, 5)


def test_find_backward_and_wrap() -> None:
    store = make_store("foo bar foo")

    assert store.find_backward(0, 8, "foo", True) == (0, 0)
    assert store.find_backward(0, 0, "foo", False) is None
    assert store.find_backward(0, 0, "foo", True) == (0, 8)


def test_empty_pattern_never_matches() -> None:
    store = make_store("abc")

    assert store.find_forward(0, 0, "", True) is None
    assert store.find_backward(0, 2, "", True) is None


def test_save_without_path_raises() -> None:
    store = make_store("x")

    with pytest.raises(MissingPathError):
        store.save()
    with pytest.raises(OSError):
        store.save()


def test_save_and_reload_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "note.txt"
    store = make_store("alpha\r\nbeta\n")
    store.insert_char(0, 0, ">")

    store.save_as(target)
    reloaded = TextStore.from_file(target)

    assert store.modified is False
    assert reloaded.text == ">alpha\r\nbeta\n"
    assert target.read_bytes() == b">alpha\r\nbeta\n"
    assert reloaded.filename() == "note.txt"


def test_open_missing_file_keeps_path(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"

    store = TextStore.open(target)

    assert store.is_empty()
    assert store.modified is False
    assert store.file_path == target
