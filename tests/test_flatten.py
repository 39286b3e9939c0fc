"""
Tests for flattening the word graph into one reading order.
"""

import pytest

from wordwall_engine import GraphCycleError, WordGraph, build_graph, flatten, tokenize

CORPUS = [
    "I love Kira",
    "we hate you",
    "I love you",
    "JT loves his awesome Kira",
    "what loves a really super awesome dude",
    "A B C D",
    "X Y C A",
    "H I C",
    "Kira loves JT",
    "love conquers all",
    "conquers her land",
]


def _graph(*sentences):
    return build_graph([tokenize(s) for s in sentences])


class TestFlatten:
    def test_cycle_example(self):
        g = _graph("JT loves Kira", "Kira loves JT")
        assert [n.key for n in flatten(g)] == ["JT", "loves", "Kira", "loves2", "JT2"]

    def test_cycle_example_reversed(self):
        g = _graph("Kira loves JT", "JT loves Kira")
        assert [n.key for n in flatten(g)] == ["Kira", "loves", "JT", "loves2", "Kira2"]

    def test_long_cycle(self):
        g = _graph("JT loves his Kira", "his Kira really wants to like JT")
        assert [n.key for n in flatten(g)] == [
            "JT", "loves", "his", "Kira", "really", "wants", "to", "like", "JT2",
        ]

    def test_contains_every_word(self):
        g = _graph("I love Kira", "we hate you", "I love you")
        surfaces = [n.surface for n in flatten(g)]
        for w in ["I", "we", "Kira", "hate", "love", "you"]:
            assert w in surfaces

    def test_each_node_once(self):
        g = _graph(*CORPUS)
        flat = list(flatten(g))
        assert len(flat) == len(g)
        assert len({n.id for n in flat}) == len(g)

    def test_predecessors_come_first(self):
        g = _graph(*CORPUS)
        pos = {n.id: i for i, n in enumerate(flatten(g))}
        for node in g.nodes:
            for p in node.back:
                assert pos[p] < pos[node.id]

    def test_sentences_keep_their_order(self):
        g = _graph(*CORPUS)
        pos = {n.id: i for i, n in enumerate(flatten(g))}
        for path in g.paths:
            positions = [pos[i] for i in path]
            assert positions == sorted(positions)
            assert len(set(positions)) == len(positions)

    def test_single_chain_is_contiguous(self):
        g = _graph("the quick brown fox")
        assert [n.surface for n in flatten(g)] == ["the", "quick", "brown", "fox"]

    def test_restartable(self):
        g = _graph(*CORPUS)
        assert [n.id for n in flatten(g)] == [n.id for n in flatten(g)]

    def test_longest_first_within_pass(self):
        g = _graph("a b", "ccc d")
        assert [n.key for n in flatten(g)] == ["a", "ccc", "b", "d"]
        assert [n.key for n in flatten(g, order="longest-first")] == ["ccc", "a", "b", "d"]

    def test_cycle_is_an_error(self):
        g = WordGraph()
        a = g.add_node("a", "a")
        b = g.add_node("b", "b")
        g.link(a, b)
        g.link(b, a)
        g.add_root(a)
        with pytest.raises(GraphCycleError, match="a -> b"):
            list(flatten(g))

    def test_unreachable_nodes_skipped(self):
        g = _graph("a b")
        stray = g.add_node("stray", "stray")
        g.link(stray, g.get("b"))
        assert [n.key for n in flatten(g)] == ["a", "b"]

    def test_empty_graph(self):
        assert list(flatten(WordGraph())) == []
