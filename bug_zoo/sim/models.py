# bug_zoo/sim/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Tuple


class Severity(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return self.name.lower()


class Status(Enum):
    ROAMING = "Roaming"
    HUNTING = "Hunting"
    SLEEPING = "Sleeping"
    REPRODUCING = "Reproducing"
    EVOLVING = "Evolving"
    NEWLY_SPAWNED = "Newly spawned"
    CLASHING = "Clashing"
    COMPETING = "Competing"
    HYBRID_OFFSPRING = "Hybrid offspring"
    EXTINCT = "Extinct"


# statuses a freshly generated creature may start in
INITIAL_STATUSES: Tuple[Status, ...] = (
    Status.ROAMING, Status.HUNTING, Status.SLEEPING, Status.REPRODUCING, Status.EVOLVING,
)


@dataclass(frozen=True)
class Tag:
    """
    Either a single base tag ("memory_leak") or a hybrid of two tags.
    Hybrids nest, so a hybrid of hybrids keeps its full lineage.
    """
    base: Optional[str] = None
    parents: Tuple["Tag", ...] = ()

    @classmethod
    def of(cls, base: str) -> "Tag":
        return cls(base=base)

    @classmethod
    def hybrid(cls, a: "Tag", b: "Tag") -> "Tag":
        return cls(parents=(a, b))

    @property
    def is_hybrid(self) -> bool:
        return self.base is None

    def base_tags(self) -> Tuple[str, ...]:
        if not self.is_hybrid:
            return (self.base,)
        out: Tuple[str, ...] = ()
        for p in self.parents:
            out += p.base_tags()
        return out

    def __str__(self) -> str:
        if not self.is_hybrid:
            return self.base
        return "+".join(str(p) for p in self.parents)


@dataclass(frozen=True)
class Archetype:
    name: str
    label: str
    category: Tag
    description: str
    severity: Severity
    breed_type: Tag


@dataclass
class Creature:
    id: str
    name: str
    label: str
    category: Tag
    breed_type: Tag
    description: str
    severity: Severity
    hp: int
    aggression: int
    speed: int
    reproduction_rate: float
    status: Status

    @property
    def is_extinct(self) -> bool:
        return self.status is Status.EXTINCT

    @property
    def is_hybrid(self) -> bool:
        return self.category.is_hybrid


@dataclass(frozen=True)
class SimulationEvent:
    message: str
    timestamp: float


@dataclass
class ZooResult:
    creatures: List[Creature] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    narration: str = ""


@dataclass
class TickResult:
    new_creatures: List[Creature] = field(default_factory=list)
    events: List[SimulationEvent] = field(default_factory=list)
