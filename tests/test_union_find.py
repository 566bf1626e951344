# tests/test_union_find.py
import pytest

from phasorsim_core.topology import DisjointSet
from phasorsim_core.schematic import ConnectionPoint


class TestDisjointSet:

    def test_singletons_are_disjoint(self):
        dsu = DisjointSet()
        for key in "abc":
            dsu.add(key)
        assert len(dsu) == 3
        assert dsu.find("a") != dsu.find("b")
        assert dsu.find("c") == 2

    def test_union_is_transitive(self):
        dsu = DisjointSet()
        dsu.union("a", "b")
        dsu.union("c", "d")
        assert dsu.find("a") != dsu.find("d")
        dsu.union("b", "c")
        assert dsu.find("a") == dsu.find("d")
        assert len({dsu.find(k) for k in "abcd"}) == 1

    def test_union_interns_unknown_keys(self):
        dsu = DisjointSet()
        dsu.union("x", "y")
        assert "x" in dsu and "y" in dsu
        assert "z" not in dsu

    def test_find_on_unknown_key_raises(self):
        dsu = DisjointSet()
        with pytest.raises(KeyError):
            dsu.find("missing")

    def test_rank_tie_keeps_first_interned_root(self):
        dsu = DisjointSet()
        dsu.add("first")
        dsu.add("second")
        dsu.union("second", "first")
        assert dsu.find("second") == dsu.find("first") == 0

    def test_connection_points_as_keys(self):
        dsu = DisjointSet()
        a = ConnectionPoint("R1", "left")
        b = ConnectionPoint("R1", "top")
        dsu.union(a, b)
        assert dsu.find(ConnectionPoint("R1", "left")) == dsu.find(ConnectionPoint("R1", "top"))

    def test_long_chain_is_compressed(self):
        dsu = DisjointSet()
        for i in range(1000):
            dsu.union(i, i + 1)
        root = dsu.find(1000)
        assert all(dsu.find(i) == root for i in range(1001))
