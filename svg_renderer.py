from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from grid_search import SearchResult
from highlight import cell_colors, palette_hex

# -----------------------------------------------------------------------------
# Simple logger hook (optional; mirrors wordwall_engine)
# -----------------------------------------------------------------------------
_LOGGER = None  # type: Optional[callable]


def set_logger(fn) -> None:
    """Allow the UI to inject a logger callback: fn(text: str)."""
    global _LOGGER
    _LOGGER = fn


def _log(msg: str) -> None:
    if _LOGGER:
        try:
            _LOGGER(msg)
            return
        except Exception:
            pass
    print(msg)


@dataclass
class WallAppearance:
    """
    Physical layout of the wall. All sizes are in centimetres, because the
    SVG is meant to be cut or printed at real size.
    """
    x_space_cm: float = 1.0         # centre-to-centre distance between letters
    y_space_cm: float = 1.2         # distance between rows
    letter_size_cm: float = 0.8     # font size
    top_cm: float = 1.0             # baseline of the first row

    font_family: str = "Courier New"
    font_bold: bool = True
    font_color: str = "#000000"
    background_color: Optional[str] = None

    # Highlight view
    dim_color: str = "#BBBBBB"      # letters that are not part of the sentence
    mark_opacity: float = 0.35      # fill behind lit letters
    show_marks: bool = True


# -----------------------------------------------------------------------------
# Tiny helper to build safe SVG text (no external lib, very basic)
# -----------------------------------------------------------------------------
def _esc(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


CM_PX = 96 / 2.54


def _cm(v: float) -> str:
    return f"{v:.3f}cm"


def _size(lines: Sequence[str], app: WallAppearance):
    cols = max((len(line) for line in lines), default=0)
    width = cols * app.x_space_cm
    height = app.top_cm + len(lines) * app.y_space_cm
    return width, height


def _open_svg(lines: Sequence[str], app: WallAppearance) -> List[str]:
    w, h = _size(lines, app)
    weight = "bold" if app.font_bold else "normal"
    # viewBox in user units (96 dpi) so "cm" coordinates map 1:1 when scaled
    out = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_cm(w)}" height="{_cm(h)}" '
        f'viewBox="0 0 {w * CM_PX:.2f} {h * CM_PX:.2f}" '
        f'font-family="{_esc(app.font_family)}" font-weight="{weight}" '
        f'font-size="{_cm(app.letter_size_cm)}">'
    ]
    if app.background_color:
        out.append(f'<rect x="0" y="0" width="100%" height="100%" fill="{app.background_color}" stroke="none" />')
    return out


def _letter(ch: str, r: int, c: int, app: WallAppearance, fill: Optional[str] = None) -> str:
    x = (c + 0.5) * app.x_space_cm
    y = app.top_cm + r * app.y_space_cm
    color = f' fill="{fill}"' if fill else ""
    return f'<text x="{_cm(x)}" y="{_cm(y)}" text-anchor="middle"{color}>{_esc(ch)}</text>'


# -----------------------------------------------------------------------------
# Core renderers
# -----------------------------------------------------------------------------
def render_wall_svg(lines: Sequence[str], appearance: WallAppearance) -> str:
    """
    One <text> per letter on a regular grid, row after row.
    Spaces keep their cell but draw nothing.
    """
    out = _open_svg(lines, appearance)
    out.append(f'<g fill="{appearance.font_color}">')
    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            if ch.isspace():
                continue
            out.append(_letter(ch, r, c, appearance))
    out.append('</g>')
    out.append('</svg>')
    w, h = _size(lines, appearance)
    _log(f"svg: {len(lines)} rows, {w:.1f} x {h:.1f} cm")
    return "\n".join(out)


def render_highlight_svg(lines: Sequence[str], result: SearchResult, appearance: WallAppearance) -> str:
    """
    Highlight view:
      - letters of the found sentence drawn in their word's palette colour,
        with a soft cell-sized mark behind them
      - every other letter dimmed
    """
    colors = cell_colors(lines, result)
    app = appearance
    out = _open_svg(lines, app)

    if app.show_marks:
        for r, row in enumerate(colors):
            for c, idx in enumerate(row):
                if idx < 0:
                    continue
                x = c * app.x_space_cm
                # cell box around the baseline, roughly one font size tall
                y = app.top_cm + r * app.y_space_cm - app.letter_size_cm
                h = app.letter_size_cm * 1.25
                out.append(
                    f'<rect x="{_cm(x)}" y="{_cm(y)}" width="{_cm(app.x_space_cm)}" height="{_cm(h)}" '
                    f'fill="{palette_hex(idx)}" fill-opacity="{app.mark_opacity}" stroke="none" />'
                )

    out.append(f'<g fill="{app.dim_color}">')
    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            if ch.isspace():
                continue
            idx = colors[r][c]
            out.append(_letter(ch, r, c, app, palette_hex(idx) if idx >= 0 else None))
    out.append('</g>')
    out.append('</svg>')
    return "\n".join(out)


def save_svg(svg_text: str, path: str) -> None:
    """Write an SVG string to disk."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(svg_text)
