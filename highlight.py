from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from grid_search import SearchResult

# -----------------------------------------------------------------------------
# Highlight sink: colours per word, LED addressing, WLED payload
# -----------------------------------------------------------------------------
# Word i of a sentence gets PALETTE[i % len(PALETTE)].
PALETTE: List[Tuple[str, Tuple[int, int, int]]] = [
    ("red", (255, 100, 100)),
    ("blue", (100, 150, 255)),
    ("green", (100, 255, 150)),
    ("yellow", (255, 255, 100)),
    ("purple", (200, 100, 255)),
    ("pink", (255, 150, 200)),
    ("orange", (255, 180, 100)),
    ("teal", (100, 220, 200)),
]

OFF = (0, 0, 0)


def palette_hex(index: int) -> str:
    r, g, b = PALETTE[index % len(PALETTE)][1]
    return f"#{r:02X}{g:02X}{b:02X}"


def grid_from_text(text: str) -> List[str]:
    """
    Grid rows exactly as typed. Blank rows and leading spaces stay, since
    every character is one LED on the physical wall.
    """
    return text.splitlines()


def cell_colors(grid: Sequence[str], result: SearchResult) -> List[List[int]]:
    """Palette index per grid cell, -1 where nothing is lit."""
    colors = [[-1] * len(line) for line in grid]
    for word_idx, word in enumerate(result.words):
        for cell in word:
            colors[cell.row][cell.col] = word_idx % len(PALETTE)
    return colors


def led_indices(grid: Sequence[str], result: SearchResult) -> List[int]:
    """
    Serial LED number of every matched cell. LEDs run row after row,
    one per character, so a cell's number is its column plus the lengths
    of all earlier rows.
    """
    offsets = []
    total = 0
    for line in grid:
        offsets.append(total)
        total += len(line)
    return [offsets[c.row] + c.col for c in result.cells]


def wled_state(grid: Sequence[str], result: SearchResult, brightness: int = 128) -> Dict:
    """
    JSON body for a WLED controller's /json/state endpoint: one RGB triple
    per LED, unlit cells off. Sending it is up to the caller.
    """
    if not 0 <= brightness <= 255:
        raise ValueError(f"brightness must be in 0..255, got {brightness}")
    leds: List[int] = []
    for row in cell_colors(grid, result):
        for idx in row:
            leds.extend(PALETTE[idx][1] if idx >= 0 else OFF)
    return {"on": True, "bri": brightness, "seg": [{"i": leds}]}
