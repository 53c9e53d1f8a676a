# bug_zoo/sim/narration.py
from __future__ import annotations
import random
from typing import Iterable, List, Optional

from .config import CHAOS
from .genetics import RandomSource, round_half_up
from .models import Creature, Severity


def chaos_score(creatures: Iterable[Creature]) -> int:
    """
    0..100 summary of the population:
      count      up to 40 (living / 25)
      aggression up to 30 (mean * 0.3)
      severity   up to 30 (10 per critical, 4 per high)
    """
    living = [c for c in creatures if not c.is_extinct]
    if not living:
        return 0

    n = min(len(living), CHAOS.count_norm)
    count_chaos = min(CHAOS.count_weight, n / CHAOS.count_norm * CHAOS.count_weight)

    mean_aggr = sum(c.aggression for c in living) / len(living)
    aggression_chaos = min(CHAOS.aggression_cap, mean_aggr * CHAOS.aggression_weight)

    critical = sum(1 for c in living if c.severity is Severity.CRITICAL)
    high = sum(1 for c in living if c.severity is Severity.HIGH)
    severity_chaos = min(CHAOS.severity_cap, critical * CHAOS.critical_weight + high * CHAOS.high_weight)

    return min(100, round_half_up(count_chaos + aggression_chaos + severity_chaos))


def chaos_band(chaos: int) -> str:
    if chaos < CHAOS.calm_below:
        return "calm"
    if chaos < CHAOS.unstable_below:
        return "unstable"
    return "apocalyptic"


def _lines(band: str, n: int) -> List[str]:
    one = n == 1

    def w(single: str, plural: str) -> str:
        return single if one else plural

    if band == "calm":
        return [
            f"The ecosystem remains calm with {n} {w('creature', 'creatures')} peacefully coexisting.",
            f"A tranquil moment in the digital terrarium. {n} {w('lifeform', 'lifeforms')} {w('roams', 'roam')} quietly.",
            f"The codebase is stable. {n} {w('bug', 'bugs')} {w('exists', 'exist')} in harmony.",
        ]
    if band == "unstable":
        return [
            f"Tensions rise in the ecosystem. {n} {w('creature', 'creatures')} {w('shows', 'show')} signs of instability.",
            f"The digital terrarium grows unstable. {n} {w('entity', 'entities')} {w('struggles', 'struggle')} for survival.",
            f"Chaos begins to spread. {n} {w('bug', 'bugs')} {w('is', 'are')} adapting to the changing environment.",
        ]
    return [
        f"APOCALYPTIC CHAOS! The ecosystem has reached critical instability. "
        f"{n} {w('creature', 'creatures')} {w('threatens', 'threaten')} to consume everything.",
        f"The codebase trembles under apocalyptic pressure. "
        f"{n} {w('entity', 'entities')} {w('reigns', 'reign')} supreme in chaos.",
        f"EXTINCTION EVENT IMMINENT! {n} {w('bug', 'bugs')} {w('has', 'have')} pushed the ecosystem beyond its limits.",
    ]


def pick_narration(chaos: int, living_count: int, rng: Optional[RandomSource] = None) -> str:
    if rng is None:
        rng = random.Random()
    lines = _lines(chaos_band(chaos), living_count)
    return lines[int(rng.random() * len(lines))]
