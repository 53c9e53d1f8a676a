# bug_zoo/sim/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

# ------------------------------------------------------------
# POPULATION CONTROL (per tick)
# ------------------------------------------------------------
@dataclass(frozen=True)
class PopulationConfig:
    max_creatures: int = 25
    max_offspring_per_tick: int = 2
    min_hp_for_reproduction: int = 40
    reproduction_scale: float = 0.15   # chance = min(cap, rate * scale)
    reproduction_cap: float = 0.12
    cross_breeding_chance: float = 0.35
    min_hp_for_cross_breeding: int = 30
    interaction_chance: float = 0.5
    decay_min: int = 1
    decay_max: int = 2

# ------------------------------------------------------------
# MUTATION / CLAMPS
# ------------------------------------------------------------
@dataclass(frozen=True)
class MutationConfig:
    mutation_min: int = 5
    mutation_max: int = 10
    stat_min: int = 0
    stat_max: int = 100
    rate_min: float = 0.1
    rate_max: float = 0.7

# ------------------------------------------------------------
# INITIAL GENERATION
# ------------------------------------------------------------
@dataclass(frozen=True)
class GenerationConfig:
    # (exclusive upper length, lo, hi) -> floor(rand(lo, hi)) creatures
    size_breakpoints: Tuple[Tuple[int, int, int], ...] = (
        (500, 2, 4),
        (2000, 3, 5),
    )
    short_text_length: int = 100
    short_text_size: int = 2
    long_text_range: Tuple[int, int] = (4, 6)
    # draw ranges are [lo, hi) then floored
    hp_range: Tuple[float, float] = (40, 121)
    aggression_range: Tuple[float, float] = (10, 96)
    speed_range: Tuple[float, float] = (5, 91)
    rate_range: Tuple[float, float] = (0.1, 0.71)
    id_range: Tuple[float, float] = (1000000, 10000000)
    id_seed_stride: int = 1000

# ------------------------------------------------------------
# CHAOS SCORE
# ------------------------------------------------------------
@dataclass(frozen=True)
class ChaosConfig:
    count_norm: int = 25
    count_weight: float = 40.0
    aggression_weight: float = 0.3
    aggression_cap: float = 30.0
    critical_weight: float = 10.0
    high_weight: float = 4.0
    severity_cap: float = 30.0
    calm_below: int = 30
    unstable_below: int = 70

# ------------------------------------------------------------
# SESSION (mutable so a driver can tweak the interval at runtime)
# ------------------------------------------------------------
@dataclass(frozen=False)
class SessionConfig:
    tick_interval: float = 1.2     # seconds between periodic ticks
    narration_every: int = 3       # refresh narration every N ticks
    event_history: int = 50        # messages kept by a session

# ------------------------------------------------------------
# HEADLESS SETTINGS
# ------------------------------------------------------------
@dataclass(frozen=False)
class SimConfig:
    seed: int | None = None
    ticks: int = 50
    track_csv: str | None = "runs/zoo_ticks.csv"
    category_csv: str | None = "runs/zoo_category_ticks.csv"

# ------------------------------------------------------------
# EXPORT SINGLETONS
# ------------------------------------------------------------
POPULATION = PopulationConfig()
MUTATION = MutationConfig()
GENERATION = GenerationConfig()
CHAOS = ChaosConfig()
SESSION = SessionConfig()
SIM = SimConfig()
