# bug_zoo/sim/generator.py
from __future__ import annotations
import math
from typing import List

from .catalog import ARCHETYPES, find_archetype
from .config import GENERATION
from .models import Archetype, Creature, INITIAL_STATUSES, Severity, ZooResult
from .patterns import detect_categories
from .rng import SeededRNG, hash_string_to_seed, utf16_code_units

EMPTY_EVENT = "No code detected. The terrarium remains empty."
EMPTY_NARRATION = "The digital terrarium awaits... Paste code to populate it with bug creatures."

# whitespace and line terminators stripped by String.prototype.trim
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def trim_text(code: str) -> str:
    """Trim the same characters a browser trims, so seeds match across front ends."""
    return code.strip(TRIM_CHARS)


LONELY_EVENTS = (
    "The ecosystem is too calm... too quiet.",
    "A single creature wanders alone in the digital void.",
)


def _floor_rand(rng: SeededRNG, lo: float, hi: float) -> int:
    return math.floor(rng.rand(lo, hi))


def _target_size(text_length: int, rng: SeededRNG) -> int:
    if text_length < GENERATION.short_text_length:
        return GENERATION.short_text_size
    for upper, lo, hi in GENERATION.size_breakpoints:
        if text_length < upper:
            return _floor_rand(rng, lo, hi)
    lo, hi = GENERATION.long_text_range
    return _floor_rand(rng, lo, hi)


def select_archetypes(code: str, rng: SeededRNG) -> List[Archetype]:
    """
    Detected archetypes first (analyzer order), then random fill without
    replacement up to the length-based target. Detected ones are never cut.
    """
    selected: List[Archetype] = []
    used = set()
    for category in detect_categories(code):
        arch = find_archetype(category)
        if arch is not None and category not in used:
            selected.append(arch)
            used.add(category)

    target = _target_size(len(utf16_code_units(code)), rng)

    available = [a for a in ARCHETYPES if a.category.base not in used]
    while len(selected) < target and available:
        idx = _floor_rand(rng, 0, len(available))
        arch = available.pop(idx)
        selected.append(arch)
        used.add(arch.category.base)
    return selected


def spawn_creature(arch: Archetype, index: int, seed: int, rng: SeededRNG) -> Creature:
    # separate stream so the id does not depend on the shared stream position
    id_rng = SeededRNG(seed + index * GENERATION.id_seed_stride)
    id_number = _floor_rand(id_rng, *GENERATION.id_range)

    hp = _floor_rand(rng, *GENERATION.hp_range)
    aggression = _floor_rand(rng, *GENERATION.aggression_range)
    speed = _floor_rand(rng, *GENERATION.speed_range)
    rate = rng.rand(*GENERATION.rate_range)
    status = rng.pick(INITIAL_STATUSES)

    return Creature(
        id=f"creature-{id_number}-{index}",
        name=arch.name,
        label=arch.label,
        category=arch.category,
        breed_type=arch.breed_type,
        description=arch.description,
        severity=arch.severity,
        hp=hp,
        aggression=aggression,
        speed=speed,
        reproduction_rate=rate,
        status=status,
    )


def _plural(n: int, one: str, many: str) -> str:
    return one if n == 1 else many


def opening_events(creatures: List[Creature], rng: SeededRNG) -> List[str]:
    if len(creatures) < 2:
        return list(LONELY_EVENTS)

    second = 1
    if len(creatures) > 2:
        second = _floor_rand(rng, 1, len(creatures))
    c1, c2 = creatures[0], creatures[second]

    intent = "malicious" if c2.severity is Severity.CRITICAL else "curious"
    templates = [
        f"{c1.name} eyes {c2.name} warily.",
        f"{c2.name} circles {c1.name} with {intent} intent.",
        f"{c1.name} {c1.status.value.lower()}s near {c2.name}.",
        f"{c2.name} detects {c1.name}'s {c1.breed_type} signature.",
        f"A tense standoff between {c1.name} and {c2.name}.",
        f"{c1.name} pretends nothing is wrong while {c2.name} watches.",
        f"The {c1.breed_type} energy of {c1.name} clashes with {c2.name}'s {c2.breed_type} aura.",
    ]

    wanted = _floor_rand(rng, 2, 4)
    events: List[str] = []
    seen = set()
    while len(events) < wanted and len(seen) < len(templates):
        idx = _floor_rand(rng, 0, len(templates))
        if idx not in seen:
            seen.add(idx)
            events.append(templates[idx])
    return events


def opening_narration(creatures: List[Creature], rng: SeededRNG) -> str:
    n = len(creatures)
    has_critical = any(c.severity is Severity.CRITICAL for c in creatures)
    has_high = any(c.severity is Severity.HIGH for c in creatures)

    lines = [
        f"In the shadowed depths of this repo, {n} species {_plural(n, 'clashes', 'clash')} for dominance...",
        f"The digital terrarium pulses with {n} {_plural(n, 'lifeform', 'lifeforms')}, "
        f"each a manifestation of code gone wrong.",
        f"An unstable ecosystem emerges: {n} bug creatures {_plural(n, 'roams', 'roam')} the codebase, "
        f"{'with critical threats lurking' if has_critical else 'seeking vulnerabilities'}.",
        f'Nature documentary voice: "Here we observe {n} {_plural(n, "specimen", "specimens")} '
        f'in their natural habitat—a repository of chaos."',
        f"The codebase trembles as {n} {_plural(n, 'entity', 'entities')} {_plural(n, 'awakens', 'awaken')}, "
        f"{'some more dangerous than others' if has_high else 'each with unique behaviors'}.",
    ]
    return rng.pick(lines)


def generate_zoo(code: str) -> ZooResult:
    """
    Turn pasted text into an opening population.

    Fully deterministic: the seed is the djb2 hash of the trimmed text and
    every draw comes from one SeededRNG in a fixed order (target size, fill,
    per-creature stats, events, narration).
    """
    trimmed = trim_text(code or "")
    if not trimmed:
        return ZooResult(creatures=[], events=[EMPTY_EVENT], narration=EMPTY_NARRATION)

    seed = hash_string_to_seed(trimmed)
    rng = SeededRNG(seed)

    archetypes = select_archetypes(code, rng)
    creatures = [spawn_creature(a, i, seed, rng) for i, a in enumerate(archetypes)]

    events = opening_events(creatures, rng)
    narration = opening_narration(creatures, rng)
    return ZooResult(creatures=creatures, events=events, narration=narration)
