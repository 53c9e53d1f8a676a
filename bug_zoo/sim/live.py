# bug_zoo/sim/live.py
from __future__ import annotations
import random
import time
from typing import Callable, Dict, List, Optional

from .config import SESSION
from .engine import run_tick
from .generator import EMPTY_NARRATION, generate_zoo
from .genetics import RandomSource
from .lineage import LineageTracker
from .metrics import ecosystem_stats
from .models import Creature, TickResult
from .narration import chaos_score, pick_narration


class ZooSession:
    """
    Step-by-step wrapper that owns the state a front end would otherwise keep
    as globals: creatures, event history, narration, chaos, tick counter and
    the running flag. Created from text, changed only via step()/reset().
    """
    def __init__(self, creatures: Optional[List[Creature]] = None, events: Optional[List[str]] = None,
                 narration: str = EMPTY_NARRATION, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else random.Random()
        self.creatures: List[Creature] = list(creatures or [])
        self.events: List[str] = list(events or [])[-SESSION.event_history:]
        self.intro_narration = narration
        self.narration = narration
        self.tick_count = 0
        self.running = False
        self.lineage = LineageTracker()
        self._in_tick = False

        self.chaos = chaos_score(self.creatures)
        if self.creatures:
            self.lineage.update_from_population(self.creatures, self.tick_count)
            self.narration = pick_narration(self.chaos, len(self.creatures), self.rng)

    @classmethod
    def from_text(cls, code: str, rng: Optional[RandomSource] = None) -> "ZooSession":
        result = generate_zoo(code)
        return cls(result.creatures, result.events, result.narration, rng=rng)

    # ---- controls ----
    def start(self) -> None:
        self.running = True

    def pause(self) -> None:
        self.running = False

    def toggle_running(self) -> None:
        self.running = not self.running

    def reset(self) -> None:
        self.creatures = []
        self.events = []
        self.narration = EMPTY_NARRATION
        self.intro_narration = EMPTY_NARRATION
        self.tick_count = 0
        self.chaos = 0
        self.running = False
        self.lineage = LineageTracker()

    # ---- stepping ----
    def step(self) -> Optional[TickResult]:
        """One tick. Returns None if a tick is already in flight."""
        if self._in_tick:
            return None
        self._in_tick = True
        try:
            result = run_tick(self.creatures, self.rng)
            self.creatures = result.new_creatures
            self.events = (self.events + [e.message for e in result.events])[-SESSION.event_history:]
            self.chaos = chaos_score(self.creatures)
            self.tick_count += 1
            self.lineage.update_from_population(self.creatures, self.tick_count)
            if self.tick_count % SESSION.narration_every == 0:
                self.narration = pick_narration(self.chaos, self.living_count(), self.rng)
            return result
        finally:
            self._in_tick = False

    # ---- helpers ----
    def living_count(self) -> int:
        return sum(1 for c in self.creatures if not c.is_extinct)

    def stats(self) -> Dict[str, float]:
        return ecosystem_stats(self.creatures)


def run_periodic(session: ZooSession, interval: Optional[float] = None, max_ticks: Optional[int] = None,
                 on_tick: Optional[Callable[[ZooSession, TickResult], None]] = None,
                 sleep: Callable[[float], None] = time.sleep) -> int:
    """
    Tick `session` every `interval` seconds until it is paused/reset or
    `max_ticks` is reached. Ticks run back to back on this thread, so they
    never overlap. Returns the number of ticks run.
    """
    if interval is None:
        interval = SESSION.tick_interval
    session.start()
    ticks = 0
    while session.running and (max_ticks is None or ticks < max_ticks):
        result = session.step()
        if result is not None:
            ticks += 1
            if on_tick is not None:
                on_tick(session, result)
        if session.running and (max_ticks is None or ticks < max_ticks):
            sleep(interval)
    session.pause()
    return ticks
