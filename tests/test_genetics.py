"""
tests/test_genetics.py - mutation, offspring and hybrid helpers
"""

import random

from bug_zoo.sim.genetics import (
    clamp_rate,
    clamp_stat,
    cross_breed,
    hybrid_name,
    mutation_delta,
    new_creature_id,
    round_half_up,
    spawn_offspring,
)
from bug_zoo.sim.models import Status


class TestClamps:

    def test_stat_saturates(self):
        assert clamp_stat(-12) == 0
        assert clamp_stat(140) == 100
        assert clamp_stat(55) == 55

    def test_rate_saturates(self):
        assert clamp_rate(0.01) == 0.1
        assert clamp_rate(0.95) == 0.7
        assert clamp_rate(0.4) == 0.4

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-0.5) == 0


class TestMutation:

    def test_delta_magnitude(self):
        rng = random.Random(1)
        deltas = {mutation_delta(rng) for _ in range(2000)}
        assert deltas == set(range(-10, -4)) | set(range(5, 11))


class TestIds:

    def test_collision_gets_tail(self, zero_rng):
        taken = set()
        first = new_creature_id("creature", zero_rng, taken)
        second = new_creature_id("creature", zero_rng, taken)
        assert first != second
        assert first in taken and second in taken

    def test_format(self):
        cid = new_creature_id("creature-hybrid", random.Random(2), set())
        prefix, ms, suffix = cid.rsplit("-", 2)
        assert prefix == "creature-hybrid"
        assert ms.isdigit()
        assert len(suffix) == 9


class TestOffspring:

    def test_newly_spawned(self, make_creature, zero_rng):
        parent = make_creature(hp=98, aggression=3, speed=50)
        child = spawn_offspring(parent, zero_rng, set())
        assert child.status is Status.NEWLY_SPAWNED
        assert child.hp == 100
        assert child.aggression == 8
        assert child.description == parent.description

    def test_negative_mutation_clamps_to_zero(self, make_creature, oneish_rng):
        child = spawn_offspring(make_creature(hp=3, aggression=3, speed=3), oneish_rng, set())
        assert (child.hp, child.aggression, child.speed) == (0, 0, 0)


class TestHybrid:

    def test_name_uses_first_words(self, make_creature):
        a = make_creature(name="Ring Cicada")
        b = make_creature(name="Blink Firefly")
        assert hybrid_name(a, b) == "Ring Blink (Hybrid)"

    def test_hybrid_of_hybrid_keeps_lineage(self, make_creature, zero_rng):
        a = make_creature(name="Glow Moth", category="memory_leak")
        b = make_creature(name="Void Beetle", category="null_pointer")
        c = make_creature(name="Rune Spider", category="syntax_error")
        ab = cross_breed(a, b, zero_rng, set())
        abc = cross_breed(ab, c, zero_rng, set())
        assert abc.category.base_tags() == ("memory_leak", "null_pointer", "syntax_error")
        assert abc.category.parents[0] == ab.category
        assert abc.name == "Glow Rune (Hybrid)"
