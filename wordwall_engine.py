from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Literal, Optional, Sequence

import networkx as nx

from grid_search import SearchResult, search_sentence

# -----------------------------------------------------------------------------
# Simple logger hook
# -----------------------------------------------------------------------------
# The CLI / UI can call set_logger(my_logger). If you do nothing, we print().
_LOGGER = None  # type: Optional[callable]


def set_logger(fn) -> None:
    """Allow the UI to inject a logger callback: fn(text: str)."""
    global _LOGGER
    _LOGGER = fn


def _log(msg: str) -> None:
    """Log to UI if available; otherwise print. Keep messages simple."""
    if _LOGGER:
        try:
            _LOGGER(msg)
            return
        except Exception:
            pass
    print(msg)


# -----------------------------------------------------------------------------
# Data shapes used across the app
# -----------------------------------------------------------------------------
FlattenOrder = Literal["insertion", "longest-first"]

# Used when no filler file is given.
DEFAULT_FILLER_WORDS = ("a", "to", "and", "help", "tight", "output", "someone")
DEFAULT_SEED = 42


class GraphCycleError(RuntimeError):
    """Raised by flatten() when some node never reaches zero indegree."""


@dataclass(eq=False)
class WordNode:
    """
    One vertex of the word graph.

    Identity is the key (case-folded or not, depending on the build), the
    surface is what gets drawn. Edges hold node ids into the owning graph.
    """
    id: int
    key: str
    surface: str
    forward: List[int] = field(default_factory=list)
    back: List[int] = field(default_factory=list)
    filler: bool = False

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordNode):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.surface


def filler_node(word: str) -> WordNode:
    """Synthetic padding word; not part of any graph."""
    return WordNode(id=-1, key="", surface=word, filler=True)


class WordGraph:
    """
    Multi-root acyclic word graph stored as an arena.

    nodes[i].id == i. `index` maps identity keys to ids, `roots` keeps the
    first word of every sentence (in first-seen order) and `paths` records
    the node ids picked for every sentence that went through add_sentence().
    Edges live in `digraph` (a networkx DiGraph over the ids); each node's
    forward/back lists mirror it in edge insertion order.
    """

    def __init__(self, case_sensitive: bool = True):
        self.case_sensitive = case_sensitive
        self.nodes: List[WordNode] = []
        self.index: Dict[str, int] = {}
        self.roots: List[int] = []
        self.paths: List[List[int]] = []
        self.digraph: nx.DiGraph = nx.DiGraph()

    def __len__(self) -> int:
        return len(self.nodes)

    def key_for(self, token: str) -> str:
        return token if self.case_sensitive else token.lower()

    def get(self, key: str) -> Optional[WordNode]:
        i = self.index.get(key)
        return self.nodes[i] if i is not None else None

    def add_node(self, key: str, surface: str) -> WordNode:
        if key in self.index:
            raise KeyError(f"duplicate node key: {key!r}")
        node = WordNode(id=len(self.nodes), key=key, surface=surface)
        self.nodes.append(node)
        self.index[key] = node.id
        self.digraph.add_node(node.id)
        return node

    def resolve(self, token: str, suffix: str = "") -> WordNode:
        """Return the node for token(+suffix), creating it when unseen."""
        key = self.key_for(token) + suffix
        node = self.get(key)
        if node is None:
            node = self.add_node(key, token)
        return node

    def add_root(self, node: WordNode) -> None:
        if node.id not in self.roots:
            self.roots.append(node.id)

    def link(self, a: WordNode, b: WordNode) -> None:
        """Add the edge a -> b to the digraph and to both adjacency lists."""
        self.digraph.add_edge(a.id, b.id)
        if b.id not in a.forward:
            a.forward.append(b.id)
        if a.id not in b.back:
            b.back.append(a.id)

    def root_nodes(self) -> List[WordNode]:
        return [self.nodes[i] for i in self.roots]

    def successors(self, node: WordNode) -> List[WordNode]:
        return [self.nodes[i] for i in node.forward]

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    def is_in_path(self, start: WordNode, target: WordNode) -> bool:
        """
        True when target is start itself or one of its ancestors.
        Linking start -> target would close a cycle exactly in that case.
        """
        return nx.has_path(self.digraph, target.id, start.id)

    def add_sentence(self, tokens: Sequence[str]) -> List[int]:
        """
        Thread one tokenized sentence through the graph.
        Returns the ids of the nodes chosen for it (duplicates included).
        """
        tokens = [t for t in tokens if t]
        if not tokens:
            return []

        node = self.resolve(tokens[0])
        self.add_root(node)
        path = [node.id]

        for token in tokens[1:]:
            nxt = self.resolve(token)
            suffix = 2
            # Reusing nxt would create a cycle; try token2, token3, ...
            while self.is_in_path(node, nxt):
                nxt = self.resolve(token, str(suffix))
                suffix += 1
            self.link(node, nxt)
            path.append(nxt.id)
            node = nxt

        self.paths.append(path)
        return path

    def merge(self, other: "WordGraph") -> Dict[int, int]:
        """
        Copy another graph (e.g. the clock vocabulary) into this one.

        Colliding keys are re-suffixed with 2, 3, ... so no identity is shared.
        Roots of `other` become roots here. Returns old id -> new id.
        """
        mapping: Dict[int, int] = {}
        renamed = 0
        for node in other.nodes:
            key = node.key
            suffix = 2
            while key in self.index:
                key = f"{node.key}{suffix}"
                suffix += 1
            if key != node.key:
                renamed += 1
            mapping[node.id] = self.add_node(key, node.surface).id

        for node in other.nodes:
            a = self.nodes[mapping[node.id]]
            for j in node.forward:
                self.link(a, self.nodes[mapping[j]])

        for r in other.roots:
            self.add_root(self.nodes[mapping[r]])
        for p in other.paths:
            self.paths.append([mapping[i] for i in p])

        _log(f"graph: merged {len(other.nodes)} nodes ({renamed} renamed), {len(other.roots)} roots")
        return mapping

    # -------------------------------------------------------------------------
    # Checks (used by tests and by the CLI in debug runs)
    # -------------------------------------------------------------------------
    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def find_cycle(self) -> List[str]:
        """Keys along one cycle, or [] when the graph is acyclic."""
        try:
            edges = nx.find_cycle(self.digraph)
        except nx.NetworkXNoCycle:
            return []
        return [self.nodes[u].key for u, _ in edges]

    def edges_consistent(self) -> bool:
        """back must be exactly the transpose of forward, both matching the digraph."""
        fwd = {(n.id, j) for n in self.nodes for j in n.forward}
        bwd = {(j, n.id) for n in self.nodes for j in n.back}
        return fwd == bwd == set(self.digraph.edges)


# -----------------------------------------------------------------------------
# Text loading and tokenizing
# -----------------------------------------------------------------------------
def tokenize(line: str) -> List[str]:
    """Whitespace tokens of one sentence line."""
    return line.split()


def read_lines(path: str) -> List[str]:
    """Read a UTF-8 text file, dropping empty lines."""
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            lines = [ln.rstrip("\r\n") for ln in f]
    except Exception as e:
        _log(f"read error: cannot read {path}: {e}")
        raise
    lines = [ln for ln in lines if ln.strip()]
    _log(f"read: loaded {len(lines)} lines from {path}")
    return lines


def load_sentence_files(paths: Iterable[str]) -> List[str]:
    """Concatenate the sentences of several files, in order."""
    sentences: List[str] = []
    for p in paths:
        sentences.extend(read_lines(p))
    return sentences


def load_filler_words(path: Optional[str]) -> List[str]:
    """Filler words, one per line. No path means the built-in pool."""
    if not path:
        return list(DEFAULT_FILLER_WORDS)
    return [w.strip() for w in read_lines(path) if w.strip()]


# -----------------------------------------------------------------------------
# Graph building
# -----------------------------------------------------------------------------
def build_graph(sentences: Iterable[Sequence[str]], case_sensitive: bool = True) -> WordGraph:
    """
    Build the deduplicated acyclic word graph from tokenized sentences.
    Order matters: the same sentences in another order can split differently.
    """
    graph = WordGraph(case_sensitive=case_sensitive)
    count = 0
    for tokens in sentences:
        if graph.add_sentence(tokens):
            count += 1
    dupes = sum(1 for n in graph.nodes if n.key != graph.key_for(n.surface))
    _log(f"graph: {count} sentences -> {len(graph)} nodes, {len(graph.roots)} roots, {dupes} duplicates")
    return graph


# -----------------------------------------------------------------------------
# Flattening
# -----------------------------------------------------------------------------
def _reachable(graph: WordGraph) -> set:
    """Ids reachable from the roots, roots included."""
    seen = set(graph.roots)
    for r in graph.roots:
        seen |= nx.descendants(graph.digraph, r)
    return seen


def flatten(graph: WordGraph, order: FlattenOrder = "insertion") -> Iterator[WordNode]:
    """
    Topological reading order of the graph, pass by pass.

    Every pass (a networkx topological generation of the part reachable
    from the roots) holds the nodes whose remaining indegree is zero.
    Within a pass, "insertion" keeps creation order and "longest-first"
    sorts by surface length (longest first), then creation order.
    """
    sub = graph.digraph.subgraph(_reachable(graph))
    if order == "longest-first":
        rank = lambda i: (-len(graph.nodes[i].surface), i)
    else:
        rank = lambda i: i

    try:
        for generation in nx.topological_generations(sub):
            for i in sorted(generation, key=rank):
                yield graph.nodes[i]
    except nx.NetworkXUnfeasible as e:
        cycle = " -> ".join(graph.find_cycle())
        raise GraphCycleError(f"flatten: graph has a cycle ({cycle})") from e


# -----------------------------------------------------------------------------
# Line packing
# -----------------------------------------------------------------------------
def _fill_row(row: List[WordNode], width: int, words: Sequence[str], rng: random.Random) -> None:
    """Append random filler words until nothing fits the remaining slack."""
    diff = width - sum(len(n.surface) for n in row)
    while diff > 0:
        fits = [w for w in words if 0 < len(w) <= diff]
        if not fits:
            _log(f"fill: no words smaller than {diff} available to fill, skipping remaining line fill")
            break
        w = fits[rng.randrange(len(fits))]
        diff -= len(w)
        row.append(filler_node(w))


def pack_lines(
    nodes: Iterable[WordNode],
    width: int,
    add_fill: bool = True,
    filler_words: Optional[Sequence[str]] = None,
    seed: Optional[int] = DEFAULT_SEED,
) -> Iterator[List[WordNode]]:
    """
    Break the flattened words into rows of at most `width` letters.

    Words are never split and never separated. Short rows get filler words
    when add_fill is on. A word longer than `width` gets a row of its own.
    The RNG is local, so the same inputs always give the same rows.
    """
    words = list(filler_words or [])
    if add_fill and not words:
        words = list(DEFAULT_FILLER_WORDS)
    rng = random.Random(seed)

    row: List[WordNode] = []
    total = 0
    for node in nodes:
        size = len(node.surface)
        if row and total + size > width:
            if add_fill:
                _fill_row(row, width, words, rng)
            yield row
            row = []
            total = 0
        if not row and size > width:
            _log(f"fill: word '{node.surface}' ({size}) is wider than {width}, placing it alone")
        row.append(node)
        total += size

    # fill out last line
    if row:
        if add_fill:
            _fill_row(row, width, words, rng)
        yield row


# -----------------------------------------------------------------------------
# Grid assembly
# -----------------------------------------------------------------------------
def assemble_grid(rows: Iterable[Sequence[WordNode]], to_upper: bool = False) -> List[str]:
    """Concatenate each row's surfaces into one grid line."""
    lines = []
    for row in rows:
        text = "".join(n.surface for n in row)
        lines.append(text.upper() if to_upper else text)
    return lines


def render_preview_ascii(lines: Sequence[str]) -> str:
    """
    Simple ASCII for quick debugging.
    """
    return "\n".join(" ".join(ch for ch in line) for line in lines)


def columns_for_width(max_width_cm: float, x_space_cm: float) -> int:
    """How many letters fit on a row of the physical wall."""
    if x_space_cm <= 0:
        raise ValueError(f"letter spacing must be positive, got {x_space_cm}")
    cols = int(max_width_cm / x_space_cm)
    if cols < 1:
        raise ValueError(f"max width {max_width_cm} cm holds no letter at spacing {x_space_cm} cm")
    return cols


# -----------------------------------------------------------------------------
# High-level API
# -----------------------------------------------------------------------------
@dataclass
class WallSpec:
    """
    Everything needed to generate one word wall.
    The CLI and the UI both build one of these.
    """
    sentences: List[str]
    max_width: int                      # letters per row
    add_fill: bool = True
    filler_words: List[str] = field(default_factory=list)
    seed: Optional[int] = DEFAULT_SEED
    case_sensitive: bool = True
    to_upper: bool = False
    include_clock: bool = False
    flatten_order: FlattenOrder = "insertion"


@dataclass
class WallResult:
    """
    The outcome of the generator. This is what the renderer needs.
    """
    lines: List[str]                    # final grid text, one string per row
    rows: List[List[WordNode]]          # packed nodes per row (fillers included)
    graph: WordGraph
    letter_count: int
    checks: List[SearchResult] = field(default_factory=list)  # one per input sentence

    @property
    def failures(self) -> List[SearchResult]:
        return [c for c in self.checks if not c.complete]


def generate_wall(spec: WallSpec) -> WallResult:
    """
    Orchestrator:
      - tokenize and build the graph (keys case-folded unless case_sensitive)
      - optionally merge the clock vocabulary as extra roots
      - flatten, pack into rows, assemble the grid text
      - self-check: every input sentence must be found again in the grid
    """
    # Upper-cased output makes input case meaningless, so fold keys then.
    case_sensitive = spec.case_sensitive and not spec.to_upper
    if spec.seed is None:
        _log("seed: none (non-deterministic fill)")

    tokenized = [tokenize(s) for s in spec.sentences if s.strip()]
    graph = build_graph(tokenized, case_sensitive=case_sensitive)

    if spec.include_clock:
        from clock_words import clock_graph

        graph.merge(clock_graph())

    flat = flatten(graph, order=spec.flatten_order)
    rows = list(pack_lines(flat, spec.max_width, spec.add_fill, spec.filler_words, spec.seed))
    lines = assemble_grid(rows, to_upper=spec.to_upper)
    letter_count = sum(len(line) for line in lines)
    _log(f"wall: {len(lines)} rows x {spec.max_width} cols, {letter_count} letters")

    result = WallResult(lines=lines, rows=rows, graph=graph, letter_count=letter_count)
    result.checks = verify_wall(lines, spec.sentences, case_insensitive=not case_sensitive)
    return result


def verify_wall(lines: Sequence[str], sentences: Iterable[str], case_insensitive: bool = True) -> List[SearchResult]:
    """Search every sentence in the grid (contiguous mode) and log misses."""
    checks = []
    for s in sentences:
        if not s.strip():
            continue
        res = search_sentence(lines, s, mode="contiguous", case_insensitive=case_insensitive)
        if not res.complete:
            _log(f"verify: not all words could be found for sentence \"{s}\" at word {res.missing}")
        checks.append(res)
    bad = sum(1 for c in checks if not c.complete)
    _log(f"verify: {len(checks) - bad}/{len(checks)} sentences found")
    return checks
