# bug_zoo/sim/metrics.py
from __future__ import annotations
from typing import Dict, List

from .models import Creature, Severity
from .narration import chaos_score


def ecosystem_stats(population: List[Creature]) -> Dict[str, float]:
    """Summary panel numbers: totals, mean aggression and high/critical threats."""
    n = len(population)
    return dict(
        total_creatures=n,
        total_hp=sum(c.hp for c in population),
        average_aggression=sum(c.aggression for c in population) / n if n else 0.0,
        active_threats=sum(1 for c in population if c.severity >= Severity.HIGH),
    )


def summarize_tick(tick: int, population: List[Creature]) -> Dict[str, float]:
    living = [c for c in population if not c.is_extinct]
    n = len(living)
    stats = ecosystem_stats(living)
    return dict(
        tick=tick, n=n,
        hybrids=sum(1 for c in living if c.is_hybrid),
        total_hp=stats["total_hp"],
        avg_hp=stats["total_hp"] / max(n, 1),
        avg_aggression=stats["average_aggression"],
        avg_speed=sum(c.speed for c in living) / max(n, 1),
        active_threats=stats["active_threats"],
        chaos=chaos_score(living),
    )
