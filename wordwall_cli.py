from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import wordwall_engine as eng
import svg_renderer as svg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a word wall SVG from a list of sentences.")
    parser.add_argument("--sentences", nargs="+", required=True,
                        help="Files with one sentence per line. Every sentence stays readable in the wall")
    parser.add_argument("--svg", help="Where to write the SVG")
    parser.add_argument("--png", help="Also write a PNG (needs cairosvg)")
    parser.add_argument("--pdf", help="Also write a PDF (needs cairosvg)")

    parser.add_argument("--x-space", type=float, default=1.0, help="Centre-to-centre distance between letters, cm")
    parser.add_argument("--y-space", type=float, default=1.2, help="Distance between rows, cm")
    parser.add_argument("--letter-size", type=float, default=0.8, help="Font size, cm")
    parser.add_argument("--max-width", type=float, required=True, help="Maximum width of the wall, cm")
    parser.add_argument("--font-family", default="Courier New",
                        help="Installed font name. Monospaced fonts work best")

    parser.add_argument("--to-upper", action="store_true", help="Uppercase every letter (input becomes case insensitive)")
    parser.add_argument("--case-insensitive", action="store_true", help="Merge words that differ only in case")
    parser.add_argument("--no-fill", action="store_true", help="Do not pad short rows with filler words")
    parser.add_argument("--filler-words", help="File with one filler word per line (default: built-in list)")
    parser.add_argument("--seed", type=int, default=eng.DEFAULT_SEED, help="Seed for filler word choice")
    parser.add_argument("--clock", action="store_true", help="Add the spoken-time vocabulary (word clock)")
    parser.add_argument("--order", choices=["insertion", "longest-first"], default="insertion",
                        help="Order of words that become free in the same flatten pass")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cols = eng.columns_for_width(args.max_width, args.x_space)
        if args.y_space <= 0 or args.letter_size <= 0:
            raise ValueError("row spacing and letter size must be positive")
        sentences = eng.load_sentence_files(args.sentences)
        fillers = eng.load_filler_words(args.filler_words) if not args.no_fill else []
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if not sentences:
        print("error: no sentences found", file=sys.stderr)
        return 2

    spec = eng.WallSpec(
        sentences=sentences,
        max_width=cols,
        add_fill=not args.no_fill,
        filler_words=fillers,
        seed=args.seed,
        case_sensitive=not args.case_insensitive,
        to_upper=args.to_upper,
        include_clock=args.clock,
        flatten_order=args.order,
    )
    res = eng.generate_wall(spec)

    look = svg.WallAppearance(
        x_space_cm=args.x_space,
        y_space_cm=args.y_space,
        letter_size_cm=args.letter_size,
        font_family=args.font_family,
    )
    svg_text = svg.render_wall_svg(res.lines, look)
    if args.svg:
        svg.save_svg(svg_text, args.svg)
    if args.png or args.pdf:
        from cairosvg import svg2pdf, svg2png

        data = svg_text.encode("utf-8")
        if args.png:
            svg2png(bytestring=data, write_to=args.png)
        if args.pdf:
            svg2pdf(bytestring=data, write_to=args.pdf)

    print("\n".join(res.lines))
    print()
    print(f"Total letters: {res.letter_count}")

    if res.failures:
        for f in res.failures:
            print(f"not found: \"{f.sentence}\" (stopped at {f.missing})", file=sys.stderr)
        return 1
    print("Success")
    return 0


if __name__ == "__main__":
    sys.exit(main())
