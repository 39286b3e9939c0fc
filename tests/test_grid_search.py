"""
Tests for finding words and sentences in a finished grid.
"""

import pytest

from grid_search import Cell, first_match, search_sentence


class TestFirstMatch:
    def test_zero_index_word(self):
        assert first_match(["abcdefghijklmnop"], "abc", (0, 0)) == (0, 0)

    def test_nonzero_index_word(self):
        assert first_match(["abcdefghijklmnop"], "def", (0, 0)) == (0, 3)

    def test_start_at(self):
        assert first_match(["abcdefghijklmnop"], "fgh", (0, 3)) == (0, 5)

    def test_start_at_multi_row(self):
        assert first_match(["abcdefghijklmnop", "test"], "test", (0, 3)) == (1, 0)

    def test_not_found_after_start(self):
        assert first_match(["abcdefghijklmnop"], "abc", (0, 3)) is None

    def test_not_found(self):
        assert first_match(["abcdefghijklmnop"], "notfound", (0, 3)) is None

    def test_does_not_cross_rows(self):
        assert first_match(["abcd", "efgh"], "cdef") is None

    def test_match_at_row_end(self):
        assert first_match(["xxab", "ab"], "ab", (0, 1)) == (0, 2)

    def test_case(self):
        grid = ["HAPPY"]
        assert first_match(grid, "happy", case_insensitive=True) == (0, 0)
        assert first_match(grid, "happy", case_insensitive=False) is None
        assert grid == ["HAPPY"]

    def test_case_folding_keeps_columns(self):
        # "İ" lowercases to two code points; the match must still land on its own column
        assert first_match(["aİb"], "İb") == (0, 1)
        assert first_match(["aİbc"], "bc") == (0, 2)
        res = search_sentence(["xİSTANBUL"], "İstanbul")
        assert res.complete
        assert res.cells[0] == (0, 1)
        assert res.cells[-1] == (0, 8)

    def test_bad_start(self):
        assert first_match(["abc"], "a", (5, 0)) is None
        assert first_match(["abc"], "a", (0, 9)) is None
        assert first_match([], "a") is None
        assert first_match(["abc"], "") is None

    def test_returns_cell(self):
        hit = first_match(["abc"], "c")
        assert isinstance(hit, Cell)
        assert (hit.row, hit.col) == (0, 2)


class TestNonContiguous:
    def test_letters_across_rows(self):
        res = search_sentence(["abcd", "efgh", "ijkl", "mnop"], "ab cd e i", mode="non-contiguous")
        assert res.words == [[(0, 0), (0, 1)], [(0, 2), (0, 3)], [(1, 0)], [(2, 0)]]
        assert res.complete

    def test_happy_birthday(self):
        res = search_sentence(["HAPPY", "BIRTHDAY", "TO YOU"], "HAPPY", mode="non-contiguous")
        assert res.words == [[(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]]

    def test_happy_birthday_multi_line(self):
        res = search_sentence(["HAPPY", "BIRTHDAY", "TO YOU"], "HAPPY BIR", mode="non-contiguous")
        assert res.words == [
            [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)],
            [(1, 0), (1, 1), (1, 2)],
        ]

    def test_scattered_letters(self):
        res = search_sentence(["hxexlxlxo"], "hello", mode="non-contiguous")
        assert res.words == [[(0, 0), (0, 2), (0, 4), (0, 6), (0, 8)]]

    def test_miss_drops_partial_word(self):
        res = search_sentence(["abc"], "ab cz", mode="non-contiguous")
        assert res.words == [[(0, 0), (0, 1)]]
        assert not res.complete
        assert res.missing == "cz"


class TestContiguous:
    def test_words_share_rows(self):
        res = search_sentence(["IAMHAPPY", "TODAY"], "am happy today")
        assert res.words == [
            [(0, 1), (0, 2)],
            [(0, 3), (0, 4), (0, 5), (0, 6), (0, 7)],
            [(1, 0), (1, 1), (1, 2), (1, 3), (1, 4)],
        ]
        assert res.complete
        assert res.missing is None

    def test_miss_keeps_found_words(self):
        res = search_sentence(["IAMHAPPY"], "happy sad")
        assert res.words == [[(0, 3), (0, 4), (0, 5), (0, 6), (0, 7)]]
        assert not res.complete
        assert res.missing == "sad"

    def test_never_searches_backward(self):
        res = search_sentence(["todayhappy"], "happy today")
        assert not res.complete
        assert res.missing == "today"

    def test_repeated_word_moves_on(self):
        res = search_sentence(["lovelove"], "love love")
        assert res.words == [[(0, 0), (0, 1), (0, 2), (0, 3)], [(0, 4), (0, 5), (0, 6), (0, 7)]]

    def test_case_sensitive(self):
        res = search_sentence(["JTloves"], "jt loves", case_insensitive=False)
        assert not res.complete
        assert res.missing == "jt"

    def test_start_cursor(self):
        res = search_sentence(["abcabc"], "abc", start=(0, 1))
        assert res.words == [[(0, 3), (0, 4), (0, 5)]]

    def test_empty_sentence(self):
        res = search_sentence(["abc"], "   ")
        assert res.words == []
        assert res.complete

    def test_cells_flattened(self):
        res = search_sentence(["abcd"], "ab d")
        assert res.cells == [(0, 0), (0, 1), (0, 3)]


def test_unknown_mode():
    with pytest.raises(ValueError):
        search_sentence(["abc"], "a", mode="diagonal")
