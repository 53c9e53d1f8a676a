# bug_zoo/sim/genetics.py
from __future__ import annotations
import math
import time
from typing import Protocol, Set

from .config import MUTATION
from .models import Creature, Status, Tag

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


class RandomSource(Protocol):
    def random(self) -> float: ...


def clamp_stat(value: float) -> int:
    return int(max(MUTATION.stat_min, min(MUTATION.stat_max, value)))


def clamp_rate(value: float) -> float:
    return max(MUTATION.rate_min, min(MUTATION.rate_max, value))


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def mutation_delta(rng: RandomSource) -> int:
    """Signed mutation of 5..10, sign chosen by coin flip."""
    span = MUTATION.mutation_max - MUTATION.mutation_min + 1
    magnitude = int(rng.random() * span) + MUTATION.mutation_min
    return magnitude if rng.random() < 0.5 else -magnitude


def new_creature_id(prefix: str, rng: RandomSource, taken: Set[str]) -> str:
    """
    Wall-clock ms plus a 9-char base36 suffix from rng. A collision with an
    id already in the population gets a numeric tail until it is unique.
    """
    suffix = "".join(_BASE36[int(rng.random() * 36)] for _ in range(9))
    base = f"{prefix}-{int(time.time() * 1000)}-{suffix}"
    candidate = base
    n = 1
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    taken.add(candidate)
    return candidate


def spawn_offspring(parent: Creature, rng: RandomSource, taken: Set[str]) -> Creature:
    """Asexual copy of parent with independent signed mutations on hp/aggression/speed."""
    d_hp, d_aggr, d_speed = mutation_delta(rng), mutation_delta(rng), mutation_delta(rng)
    return Creature(
        id=new_creature_id("creature", rng, taken),
        name=parent.name,
        label=parent.label,
        category=parent.category,
        breed_type=parent.breed_type,
        description=parent.description,
        severity=parent.severity,
        hp=clamp_stat(parent.hp + d_hp),
        aggression=clamp_stat(parent.aggression + d_aggr),
        speed=clamp_stat(parent.speed + d_speed),
        reproduction_rate=parent.reproduction_rate,
        status=Status.NEWLY_SPAWNED,
    )


def hybrid_name(a: Creature, b: Creature) -> str:
    return f"{a.name.split(' ')[0]} {b.name.split(' ')[0]} (Hybrid)"


def cross_breed(a: Creature, b: Creature, rng: RandomSource, taken: Set[str]) -> Creature:
    """
    Hybrid of two parents: averaged stats plus mutation, the more severe
    severity, and category/breed tags that keep both parents.
    """
    d_hp, d_aggr, d_speed = mutation_delta(rng), mutation_delta(rng), mutation_delta(rng)
    return Creature(
        id=new_creature_id("creature-hybrid", rng, taken),
        name=hybrid_name(a, b),
        label=f"{a.label} × {b.label}",
        category=Tag.hybrid(a.category, b.category),
        breed_type=Tag.hybrid(a.breed_type, b.breed_type),
        description=(f"Hybrid of {a.name} and {b.name}. "
                     f"A unique fusion combining {a.breed_type} and {b.breed_type} traits."),
        severity=max(a.severity, b.severity),
        hp=clamp_stat(round_half_up((a.hp + b.hp) / 2 + d_hp)),
        aggression=clamp_stat(round_half_up((a.aggression + b.aggression) / 2 + d_aggr)),
        speed=clamp_stat(round_half_up((a.speed + b.speed) / 2 + d_speed)),
        reproduction_rate=clamp_rate((a.reproduction_rate + b.reproduction_rate) / 2),
        status=Status.HYBRID_OFFSPRING,
    )
