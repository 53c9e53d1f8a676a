"""
tests/test_lineage.py - category family graph
"""

from bug_zoo.sim.lineage import LineageTracker
from bug_zoo.sim.models import Tag

A, B, C = Tag.of("memory_leak"), Tag.of("null_pointer"), Tag.of("race_condition")
AB = Tag.hybrid(A, B)
ABC = Tag.hybrid(AB, C)


class TestRegistration:

    def test_nested_hybrid_registers_ancestors(self):
        lt = LineageTracker()
        lt.register(ABC, "deep", birth_tick=4)
        assert lt.get_creation_order() == [A, B, AB, C, ABC]
        assert lt.roots() == [A, B, C]
        assert lt.hybrids() == [AB, ABC]
        assert lt.children[A] == [AB]
        assert lt.nodes[ABC].parents == (AB, C)
        assert lt.nodes[A].name == "memory_leak"

    def test_register_is_idempotent(self):
        lt = LineageTracker()
        lt.register(A, "Glow Moth", 0)
        lt.register(A, "Other", 3)
        assert lt.nodes[A].name == "Glow Moth"
        assert lt.nodes[A].birth_tick == 0
        assert len(lt.get_creation_order()) == 1


class TestUpdates:

    def test_extinction_and_comeback(self, make_creature):
        lt = LineageTracker()
        moth = make_creature(name="Glow Moth", category="memory_leak")
        lt.update_from_population([moth, moth], 0)
        assert lt.nodes[A].current_count == 2
        assert lt.alive() == [A]

        lt.update_from_population([], 1)
        assert lt.nodes[A].extinct_tick == 1
        assert lt.alive() == []

        lt.update_from_population([], 2)
        assert lt.nodes[A].extinct_tick == 1

        lt.update_from_population([moth], 3)
        assert lt.nodes[A].extinct_tick is None

    def test_base_named_after_creature(self, make_creature):
        lt = LineageTracker()
        hybrid = make_creature(name="Glow Void (Hybrid)")
        hybrid.category = AB
        moth = make_creature(name="Glow Moth", category="memory_leak")
        lt.update_from_population([hybrid, moth], 0)
        assert lt.nodes[A].name == "Glow Moth"
        assert lt.nodes[AB].name == "Glow Void (Hybrid)"
        assert lt.nodes[B].current_count == 0
