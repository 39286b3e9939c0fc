from __future__ import annotations

import argparse
import sys
from typing import Iterator, List, Optional

from wordwall_engine import WordGraph, _log

# -----------------------------------------------------------------------------
# Spoken-time vocabulary for word clocks
# -----------------------------------------------------------------------------
HOURS = ["one", "two", "three", "four", "five", "six",
         "seven", "eight", "nine", "ten", "eleven", "twelve"]
DIGITS = ["one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
TEENS = ["ten", "eleven", "twelve", "thirteen", "fourteen",
         "fifteen", "sixteen", "seventeen", "eighteen", "nineteen"]
DECADES = ["twenty", "thirty", "forty", "fifty"]


def clock_sentences() -> Iterator[str]:
    """
    Every spoken time of a 12 hour clock, one sentence per minute pattern:
    "It is one on the clock", "It is one oh five", "It is one fifteen",
    "It is one twenty", "It is one twenty three", ...
    """
    for hour in HOURS:
        yield f"It is {hour} on the clock"
        for d in DIGITS:
            yield f"It is {hour} oh {d}"
        for t in TEENS:
            yield f"It is {hour} {t}"
        for dec in DECADES:
            yield f"It is {hour} {dec}"
            for d in DIGITS:
                yield f"It is {hour} {dec} {d}"


def clock_graph() -> WordGraph:
    """
    Hand-built graph of the same vocabulary, shaped like
    it is [quarter|half] [past|till] HOUR [oh DIGIT | TEEN | DECADE [DIGIT]].

    Minute words that also name hours get their own nodes (key + "2") so the
    minutes always sit after the hour in reading order. Meant to be merged
    into a sentence graph with WordGraph.merge().
    """
    g = WordGraph(case_sensitive=False)
    it = g.add_node("it", "it")
    is_ = g.add_node("is", "is")
    oh = g.add_node("oh", "oh")
    quarter = g.add_node("quarter", "quarter")
    half = g.add_node("half", "half")
    past = g.add_node("past", "past")
    till = g.add_node("till", "till")

    hours = [g.add_node(w, w) for w in HOURS]
    decades = [g.add_node(w, w) for w in DECADES]
    teens = [g.add_node(w + "2", w) for w in TEENS]
    digits = [g.add_node(w + "2", w) for w in DIGITS]

    g.add_root(it)
    g.link(it, is_)
    for part in (quarter, half):
        g.link(is_, part)
        g.link(part, past)
        g.link(part, till)

    for hour in hours:
        g.link(is_, hour)
        g.link(past, hour)
        g.link(till, hour)
        g.link(hour, oh)
        for teen in teens:
            g.link(hour, teen)
        for dec in decades:
            g.link(hour, dec)

    for d in digits:
        g.link(oh, d)
        for dec in decades:
            g.link(dec, d)

    _log(f"clock: {len(g)} nodes")
    return g


def main(argv: Optional[List[str]] = None) -> int:
    """Print (or write) the spoken-time sentences, ready to feed into word-wall --sentences."""
    parser = argparse.ArgumentParser(description="Print every spoken time of a 12 hour clock, one per line.")
    parser.add_argument("--out", help="Write the sentences to this file instead of stdout")
    args = parser.parse_args(argv)

    text = "\n".join(clock_sentences()) + "\n"
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text)
        _log(f"clock: wrote sentences to {args.out}")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
