"""
tests/test_engine.py - one-tick population rules
"""

import random

import pytest

from bug_zoo.sim.engine import breeding_pairs, enforce_cap, run_tick
from bug_zoo.sim.generator import generate_zoo
from bug_zoo.sim.models import Severity, Status

CAP = 25


def _names(n):
    return [f"Bug{i} Thing" for i in range(n)]


class TestDecayAndExtinction:

    def test_hp_stays_in_range_over_many_ticks(self, make_creature):
        rng = random.Random(11)
        pop = [make_creature(name=n, hp=100) for n in _names(6)]
        for _ in range(300):
            result = run_tick(pop, rng)
            for c in result.new_creatures:
                assert 0 < c.hp <= 100
                assert c.status is not Status.EXTINCT
            pop = result.new_creatures

    def test_decay_is_one_or_two(self, make_creature, oneish_rng):
        c = make_creature(hp=50, rate=0.0)
        out = run_tick([c], random.Random(3)).new_creatures
        assert out[0].hp in (48, 49)
        out = run_tick([make_creature(hp=50, rate=0.0)], oneish_rng).new_creatures
        assert out[0].hp == 48

    def test_extinction_removes_and_reports_once(self, make_creature):
        doomed = make_creature(name="Doomed Moth", hp=1)
        others = [make_creature(name=n, hp=90) for n in _names(3)]
        result = run_tick([doomed] + others, random.Random(5))
        assert doomed.id not in {c.id for c in result.new_creatures}
        extinct_events = [e for e in result.events if "extinct" in e.message]
        assert len(extinct_events) == 1
        assert "Doomed Moth" in extinct_events[0].message

    def test_already_extinct_is_skipped(self, make_creature):
        ghost = make_creature(name="Ghost", hp=50, status=Status.EXTINCT)
        result = run_tick([ghost], random.Random(1))
        assert result.new_creatures == []
        assert result.events == []

    def test_input_not_mutated(self, make_creature):
        pop = [make_creature(name=n, hp=70) for n in _names(4)]
        before = [(c.hp, c.status) for c in pop]
        run_tick(pop, random.Random(9))
        assert [(c.hp, c.status) for c in pop] == before

    def test_default_rng(self, make_creature):
        result = run_tick([make_creature(hp=60)])
        assert len(result.new_creatures) >= 1


class TestPopulationCap:

    def test_forty_healthy_trimmed_to_cap(self, make_creature):
        pop = [make_creature(name="Same Bug", hp=80) for _ in range(40)]
        result = run_tick(pop, random.Random(2))
        assert len(result.new_creatures) == CAP
        overcrowding = [e for e in result.events if "Overcrowding" in e.message]
        assert len(overcrowding) == 1

    def test_ascending_hp_weakest_evicted(self, make_creature):
        pop = [make_creature(name="Same Bug", hp=hp, rate=0.0) for hp in range(1, 31)]
        by_hp = {c.id: hp for c, hp in zip(pop, range(1, 31))}
        result = run_tick(pop, random.Random(7))
        kept = {by_hp[c.id] for c in result.new_creatures}
        assert len(result.new_creatures) == CAP
        assert kept == set(range(6, 31))

    @pytest.mark.parametrize("seed", range(20))
    def test_cap_holds_for_any_input(self, make_creature, seed):
        rng = random.Random(seed)
        pop = [make_creature(name=n, hp=rng.randint(1, 100), rate=0.7) for n in _names(rng.randint(0, 60))]
        result = run_tick(pop, rng)
        assert len(result.new_creatures) <= CAP

    def test_enforce_cap_noop_under_limit(self, make_creature):
        pop = [make_creature() for _ in range(3)]
        kept, removed = enforce_cap(pop)
        assert kept == pop and removed == 0


class TestReproduction:

    def test_at_most_two_new_per_tick_forced(self, make_creature, zero_rng):
        pop = [make_creature(name=n, hp=90, rate=0.7) for n in _names(24)]
        result = run_tick(pop, zero_rng)
        old = {c.id for c in pop}
        new = [c for c in result.new_creatures if c.id not in old]
        spawned = [e for e in result.events if "spawned an offspring" in e.message]
        assert len(spawned) == 2
        assert len(new) <= 2

    @pytest.mark.parametrize("seed", range(10))
    def test_at_most_two_new_per_tick_random(self, make_creature, seed):
        rng = random.Random(seed)
        pop = [make_creature(name=n, hp=95, rate=0.7) for n in _names(10)]
        for _ in range(40):
            old = {c.id for c in pop}
            result = run_tick(pop, rng)
            new = [c for c in result.new_creatures if c.id not in old]
            assert len(new) <= 2
            pop = result.new_creatures

    def test_offspring_copies_parent(self, make_creature, zero_rng):
        parent = make_creature(name="Glow Moth", hp=90, aggression=50, speed=40, rate=0.7)
        result = run_tick([parent], zero_rng)
        child, me = result.new_creatures
        assert (child.name, child.category, child.severity, child.reproduction_rate) == (
            me.name, me.category, me.severity, me.reproduction_rate)
        assert child.hp == me.hp + 5
        assert child.aggression == 55 and child.speed == 45
        assert child.id != me.id

    def test_no_reproduction_at_low_hp(self, make_creature, zero_rng):
        result = run_tick([make_creature(hp=41, rate=0.7)], zero_rng)
        assert len(result.new_creatures) == 1

    def test_no_reproduction_when_crowded(self, make_creature, zero_rng):
        pop = [make_creature(name="Same Bug", hp=90, rate=0.7) for _ in range(CAP)]
        result = run_tick(pop, zero_rng)
        assert not any("spawned" in e.message for e in result.events)

    def test_ids_unique_after_many_ticks(self):
        pop = generate_zoo("while (true) { x++; }").creatures
        rng = random.Random(4)
        for _ in range(200):
            pop = run_tick(pop, rng).new_creatures
            ids = [c.id for c in pop]
            assert len(ids) == len(set(ids))


class TestCrossBreeding:

    def test_identical_names_never_pair(self, make_creature):
        pop = [make_creature(name="Glow Moth", hp=90) for _ in range(5)]
        assert breeding_pairs(pop) == []

    def test_low_hp_never_pairs(self, make_creature):
        a = make_creature(name="Glow Moth", hp=30)
        b = make_creature(name="Flash Mantis", hp=90)
        assert breeding_pairs([a, b]) == []
        a.hp = 31
        assert breeding_pairs([a, b]) == [(a, b)]

    def test_hybrid_built_from_parents(self, make_creature, zero_rng):
        a = make_creature(name="Glow Moth", hp=80, aggression=50, speed=40, rate=0.0,
                          severity=Severity.HIGH, category="memory_leak", breed="memory")
        b = make_creature(name="Flash Mantis", hp=80, aggression=60, speed=20, rate=0.0,
                          severity=Severity.CRITICAL, category="race_condition", breed="concurrency")
        result = run_tick([a, b], zero_rng)
        assert len(result.new_creatures) == 3
        hybrid = result.new_creatures[2]
        assert hybrid.name == "Glow Flash (Hybrid)"
        assert hybrid.status is Status.HYBRID_OFFSPRING
        assert hybrid.severity is Severity.CRITICAL
        assert hybrid.category.is_hybrid
        assert hybrid.category.base_tags() == ("memory_leak", "race_condition")
        assert str(hybrid.breed_type) == "memory+concurrency"
        # decayed parents at 79, mean 79 + 5
        assert hybrid.hp == 84
        assert hybrid.aggression == 60
        assert hybrid.speed == 35
        assert hybrid.reproduction_rate == pytest.approx(0.1)
        assert any("cross-breed" in e.message and "Glow Moth" in e.message for e in result.events)

    def test_gate_closed_means_no_hybrid(self, make_creature, oneish_rng):
        a = make_creature(name="Glow Moth", hp=80, rate=0.0)
        b = make_creature(name="Flash Mantis", hp=80, rate=0.0)
        result = run_tick([a, b], oneish_rng)
        assert len(result.new_creatures) == 2
        assert result.events == []


class TestInteractions:

    def test_pair_gets_same_status(self, make_creature, zero_rng):
        pop = [make_creature(name="Same Bug", hp=80, rate=0.0) for _ in range(3)]
        result = run_tick(pop, zero_rng)
        statuses = [c.status for c in result.new_creatures]
        assert statuses[0] is Status.CLASHING
        assert statuses[1] is Status.CLASHING
        assert statuses[2] is Status.ROAMING
        assert len(result.events) == 1

    def test_single_creature_never_interacts(self, make_creature, zero_rng):
        result = run_tick([make_creature(hp=30, rate=0.0)], zero_rng)
        assert result.events == []

    def test_events_share_timestamp(self, make_creature, zero_rng):
        pop = [make_creature(name=n, hp=90, rate=0.7) for n in _names(5)]
        events = run_tick(pop, zero_rng).events
        assert len(events) > 1
        assert len({e.timestamp for e in events}) == 1
