"""
Tests for mapping search results to colours and LEDs.
"""

import pytest

from grid_search import search_sentence
from highlight import PALETTE, cell_colors, grid_from_text, led_indices, palette_hex, wled_state


class TestHighlight:
    def setup_method(self):
        self.grid = ["ab", "cd"]
        self.res = search_sentence(self.grid, "a d", mode="non-contiguous")

    def test_cell_colors(self):
        assert cell_colors(self.grid, self.res) == [[0, -1], [-1, 1]]

    def test_led_indices(self):
        assert led_indices(self.grid, self.res) == [0, 3]

    def test_led_indices_uneven_rows(self):
        grid = ["HAPPY", "BIRTHDAY", "TO YOU"]
        res = search_sentence(grid, "BIR")
        assert led_indices(grid, res) == [5, 6, 7]

    def test_palette_wraps(self):
        grid = ["abcdefghij"]
        res = search_sentence(grid, "a b c d e f g h i j")
        colors = cell_colors(grid, res)[0]
        assert colors[8] == 0
        assert colors[9] == 1
        assert palette_hex(len(PALETTE)) == palette_hex(0)

    def test_palette_hex(self):
        assert palette_hex(0) == "#FF6464"

    def test_wled_state(self):
        state = wled_state(self.grid, self.res, brightness=200)
        assert state["on"] is True
        assert state["bri"] == 200
        leds = state["seg"][0]["i"]
        assert len(leds) == 3 * 4
        assert leds[0:3] == list(PALETTE[0][1])
        assert leds[3:6] == [0, 0, 0]
        assert leds[9:12] == list(PALETTE[1][1])

    def test_grid_text_keeps_rows_as_typed(self):
        grid = grid_from_text("HAPPY\n\n  TO YOU\r\n")
        assert grid == ["HAPPY", "", "  TO YOU"]
        res = search_sentence(grid, "TO")
        assert led_indices(grid, res) == [7, 8]
        assert len(wled_state(grid, res)["seg"][0]["i"]) == 3 * 13

    def test_wled_brightness_range(self):
        with pytest.raises(ValueError):
            wled_state(self.grid, self.res, brightness=300)
