from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, NamedTuple, Optional, Sequence, Tuple

# -----------------------------------------------------------------------------
# Word search over a finished wall
# -----------------------------------------------------------------------------
# The grid is a list of row strings. Nothing here mutates it, so the same
# grid can be searched by several callers at once.

MatchMode = Literal["contiguous", "non-contiguous"]


class Cell(NamedTuple):
    """One grid coordinate. Compares equal to a plain (row, col) tuple."""
    row: int
    col: int


@dataclass
class SearchResult:
    """
    Where a sentence was found.

    words holds one list of cells per token found, in sentence order.
    A miss never raises: complete is False and missing names the first
    token that could not be found. The cells found before it are kept,
    so the caller can decide whether a partial highlight is good enough.
    """
    sentence: str
    mode: MatchMode
    words: List[List[Cell]] = field(default_factory=list)
    complete: bool = True
    missing: Optional[str] = None

    @property
    def cells(self) -> List[Cell]:
        return [c for w in self.words for c in w]


def _norm(ch: str, case_insensitive: bool) -> str:
    # per character: casefold() may grow a letter ("İ", "ß"), which must not shift columns
    return ch.casefold() if case_insensitive else ch


def first_match(
    grid: Sequence[str],
    search: str,
    start: Tuple[int, int] = (0, 0),
    case_insensitive: bool = True,
) -> Optional[Cell]:
    """
    First place at or after `start` (row-major) where `search` is spelled
    left to right inside one row. Later rows are scanned from column 0.
    """
    if not grid or not search:
        return None
    row, col = start
    if row < 0 or row >= len(grid):
        return None
    if col < 0 or col > len(grid[row]):
        return None

    target = [_norm(ch, case_insensitive) for ch in search]
    n = len(target)
    for y in range(row, len(grid)):
        line = [_norm(ch, case_insensitive) for ch in grid[y]]
        x0 = col if y == row else 0
        # never cross the end of a row
        for x in range(x0, len(line) - n + 1):
            if line[x:x + n] == target:
                return Cell(y, x)
    return None


def _search_contiguous(grid, tokens, cursor, case_insensitive, result: SearchResult) -> None:
    for token in tokens:
        hit = first_match(grid, token, cursor, case_insensitive)
        if hit is None:
            result.complete = False
            result.missing = token
            return
        result.words.append([Cell(hit.row, hit.col + i) for i in range(len(token))])
        # keep going on the same row, right after the word
        cursor = (hit.row, hit.col + len(token))


def _search_letters(grid, tokens, cursor, case_insensitive, result: SearchResult) -> None:
    for token in tokens:
        word: List[Cell] = []
        for ch in token:
            hit = first_match(grid, ch, cursor, case_insensitive)
            if hit is None:
                # drop the half-found word, keep the finished ones
                result.complete = False
                result.missing = token
                return
            word.append(hit)
            cursor = (hit.row, hit.col + 1)
        result.words.append(word)


def search_sentence(
    grid: Sequence[str],
    sentence: str,
    mode: MatchMode = "contiguous",
    case_insensitive: bool = True,
    start: Tuple[int, int] = (0, 0),
) -> SearchResult:
    """
    Find every whitespace token of `sentence` in reading order.

    "contiguous": each token must appear whole inside one row.
    "non-contiguous": each letter is looked up on its own, anywhere after
    the previous letter (same row further right, or any later row).
    The search only moves forward, so tokens must appear in the grid in
    sentence order.
    """
    if mode not in ("contiguous", "non-contiguous"):
        raise ValueError(f"unknown match mode: {mode!r}")

    tokens = sentence.split()
    result = SearchResult(sentence=sentence, mode=mode)
    if mode == "contiguous":
        _search_contiguous(grid, tokens, start, case_insensitive, result)
    else:
        _search_letters(grid, tokens, start, case_insensitive, result)
    return result
