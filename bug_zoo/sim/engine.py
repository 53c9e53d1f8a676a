# bug_zoo/sim/engine.py
from __future__ import annotations
from dataclasses import replace
import random
import time
from typing import List, Optional, Set, Tuple

from .config import POPULATION
from .genetics import RandomSource, clamp_stat, cross_breed, spawn_offspring
from .models import Creature, SimulationEvent, Status, TickResult


def _decay(rng: RandomSource) -> int:
    span = POPULATION.decay_max - POPULATION.decay_min + 1
    return int(rng.random() * span) + POPULATION.decay_min


def _reproduction_chance(c: Creature) -> float:
    return min(POPULATION.reproduction_cap, c.reproduction_rate * POPULATION.reproduction_scale)


def breeding_pairs(creatures: List[Creature]) -> List[Tuple[Creature, Creature]]:
    """Pairs (i < j) with different names where both parents are above the hp floor."""
    floor_hp = POPULATION.min_hp_for_cross_breeding
    pairs: List[Tuple[Creature, Creature]] = []
    for i, a in enumerate(creatures):
        for b in creatures[i + 1:]:
            if a.name != b.name and a.hp > floor_hp and b.hp > floor_hp:
                pairs.append((a, b))
    return pairs


def enforce_cap(creatures: List[Creature]) -> Tuple[List[Creature], int]:
    """Drop the lowest-hp entries (stable on ties) until the cap holds. Returns (kept, n_removed)."""
    excess = len(creatures) - POPULATION.max_creatures
    if excess <= 0:
        return creatures, 0
    weakest = sorted(range(len(creatures)), key=lambda i: creatures[i].hp)[:excess]
    drop = set(weakest)
    return [c for i, c in enumerate(creatures) if i not in drop], excess


def _interaction_message(a: Creature, b: Creature, rng: RandomSource) -> str:
    lines = [
        f"{a.name} clashes with {b.name} over scarce CPU cycles.",
        f"{a.name} competes with {b.name} for memory resources.",
        f"{b.name} challenges {a.name}'s dominance in the codebase.",
        f"A territorial dispute erupts between {a.name} and {b.name}.",
    ]
    return lines[int(rng.random() * len(lines))]


def run_tick(creatures: List[Creature], rng: Optional[RandomSource] = None) -> TickResult:
    """
    Advance the population by one tick.

    Order per tick:
      1) skip creatures already Extinct
      2) hp decay of 1..2, clamped to [0, 100]
      3) hp <= 0 -> Extinct, event, dropped
      4) asexual offspring (hp > 40, pre-tick living < cap, budget of 2 per tick)
      5) at most one hybrid (35% gate, distinct names, both hp > 30, same budget)
      6) cap at 25 by evicting the weakest, one overcrowding event
      7) 50% chance of one Clashing/Competing interaction

    `rng` only needs random(). Pass a seeded source to replay a run; the
    default is a fresh entropy-seeded random.Random. The input list and its
    creatures are never mutated; survivors are copies with the same id.
    """
    if rng is None:
        rng = random.Random()

    events: List[SimulationEvent] = []
    out: List[Creature] = []
    stamp = time.time()
    offspring = 0

    living_before = sum(1 for c in creatures if not c.is_extinct)
    taken: Set[str] = {c.id for c in creatures}

    for creature in creatures:
        if creature.is_extinct:
            continue

        me = replace(creature)
        me.hp = clamp_stat(me.hp - _decay(rng))

        if me.hp <= 0:
            me.status = Status.EXTINCT
            events.append(SimulationEvent(f"{me.name} has gone extinct as its energy faded away.", stamp))
            continue

        can_reproduce = (
            me.hp > POPULATION.min_hp_for_reproduction
            and living_before < POPULATION.max_creatures
            and offspring < POPULATION.max_offspring_per_tick
        )
        if can_reproduce and rng.random() < _reproduction_chance(me):
            out.append(spawn_offspring(me, rng, taken))
            offspring += 1
            events.append(SimulationEvent(f"{me.name} spawned an offspring.", stamp))

        out.append(me)

    living = [c for c in out if not c.is_extinct]
    can_cross = (
        len(living) >= 2
        and offspring < POPULATION.max_offspring_per_tick
        and len(out) < POPULATION.max_creatures
        and rng.random() < POPULATION.cross_breeding_chance
    )
    if can_cross:
        pairs = breeding_pairs(living)
        if pairs:
            a, b = pairs[int(rng.random() * len(pairs))]
            hybrid = cross_breed(a, b, rng, taken)
            out.append(hybrid)
            offspring += 1
            events.append(SimulationEvent(f"{a.name} and {b.name} cross-breed, spawning {hybrid.name}.", stamp))

    out, evicted = enforce_cap(out)
    if evicted:
        events.append(SimulationEvent(
            "Overcrowding event: weaker species were pushed out of the ecosystem.", stamp))

    living = [c for c in out if not c.is_extinct]
    if len(living) >= 2 and rng.random() < POPULATION.interaction_chance:
        i = int(rng.random() * len(living))
        j = int(rng.random() * (len(living) - 1))
        if j >= i:
            j += 1
        a, b = living[i], living[j]
        kind = Status.CLASHING if rng.random() < 0.5 else Status.COMPETING
        a.status = kind
        b.status = kind
        events.append(SimulationEvent(_interaction_message(a, b, rng), stamp))

    return TickResult(new_creatures=out, events=events)
