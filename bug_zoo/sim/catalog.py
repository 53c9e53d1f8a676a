# bug_zoo/sim/catalog.py
from __future__ import annotations
from typing import List, Optional, Tuple

from .models import Archetype, Severity, Tag


def _arch(name, label, category, description, severity, breed_type) -> Archetype:
    return Archetype(
        name=name, label=label, category=Tag.of(category),
        description=description, severity=severity, breed_type=Tag.of(breed_type),
    )


# Order matters: generation fills empty slots by index into this table.
ARCHETYPES: Tuple[Archetype, ...] = (
    _arch("Glow Moth", "💧 Memory Leak", "memory_leak",
          "A luminous moth that drips stored data wherever it goes, slowly flooding the heap with glowing residue.",
          Severity.HIGH, "memory"),
    _arch("Tangled Worm", "🍝 Spaghetti Code", "spaghetti_code",
          "A rainbow worm made of twisted logic strands, impossible to straighten without breaking something else.",
          Severity.MEDIUM, "architecture"),
    _arch("Void Beetle", "⛔ Null Pointer", "null_pointer",
          "A hollow-shelled beetle that represents missing values and unchecked assumptions, crashing anything that touches its void.",
          Severity.HIGH, "safety"),
    _arch("Offset Ant", "➕1 Off-by-one", "off_by_one",
          "An over-eager ant that always overshoots or undershoots the target slot by one tiny step.",
          Severity.MEDIUM, "indexing"),
    _arch("Flash Mantis", "⚡ Race Condition", "race_condition",
          "A hyper-fast mantis that acts before the rest of the system is ready, causing unpredictable outcomes.",
          Severity.CRITICAL, "concurrency"),
    _arch("Ring Cicada", "∞ Infinite Loop", "infinite_loop",
          "A cicada that sings the same cycle forever, looping in a glowing ring without ever reaching a return.",
          Severity.CRITICAL, "control_flow"),
    _arch("Rune Spider", "{} Syntax Error", "syntax_error",
          "A spider that spins webs of broken symbols; one wrong rune and the whole structure collapses.",
          Severity.LOW, "syntax"),
    _arch("Blink Firefly", "📣 Log Spam", "log_spam",
          "An overexcited firefly that won't stop blinking, drowning the night (and your console) in noise.",
          Severity.LOW, "logging"),
)


def find_archetype(category: str) -> Optional[Archetype]:
    for arch in ARCHETYPES:
        if arch.category.base == category:
            return arch
    return None


def hybrid_archetype(a: Archetype, b: Archetype) -> Archetype:
    """Encyclopedia row for the fusion of two archetypes (display only)."""
    return Archetype(
        name=f"{a.name} × {b.name}",
        label=f"{a.label} × {b.label}",
        category=Tag.hybrid(a.category, b.category),
        description=(f"A hybrid fusion of {a.name} and {b.name}. "
                     f"Combines {a.label} and {b.label} into a unique chaotic entity."),
        severity=max(a.severity, b.severity),
        breed_type=Tag.hybrid(a.breed_type, b.breed_type),
    )


def encyclopedia() -> List[Archetype]:
    """Every base archetype, then one hybrid row per ordered pair of distinct archetypes."""
    rows = list(ARCHETYPES)
    for a in ARCHETYPES:
        for b in ARCHETYPES:
            if a is not b:
                rows.append(hybrid_archetype(a, b))
    return rows
