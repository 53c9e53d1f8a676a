# bug_zoo/recording/csv_writer.py
from __future__ import annotations
import csv
import os
import uuid
from typing import Dict, Iterable, List, Optional

from ..sim.models import Creature, Severity
from ..sim.metrics import summarize_tick


class TickCsvLogger:
    """
    Append tick-level stats to CSV files after every tick.
    - overall_path:   runs/zoo_ticks.csv
    - category_path:  runs/zoo_category_ticks.csv  (optional, one row per category)
    Each run gets its own session_id so logs from several runs can share a file.

    Usage from a driver loop:
        logger = TickCsvLogger()
        ...
        logger.append_tick(tick=session.tick_count, pop=session.creatures,
                           events=len(result.events))
    """
    def __init__(self,
                 overall_path: str = "runs/zoo_ticks.csv",
                 category_path: str = "runs/zoo_category_ticks.csv",
                 enable_categories: bool = True):
        self.overall_path = overall_path
        self.category_path = category_path
        self.enable_categories = enable_categories
        self.session_id = uuid.uuid4().hex[:8]

        if self.overall_path:
            os.makedirs(os.path.dirname(self.overall_path) or ".", exist_ok=True)
        if self.enable_categories and self.category_path:
            os.makedirs(os.path.dirname(self.category_path) or ".", exist_ok=True)

        self._overall_header = [
            "session_id", "tick", "n", "hybrids", "total_hp",
            "avg_hp", "avg_aggression", "avg_speed", "avg_reproduction_rate",
            "hp_min", "hp_median", "hp_max",
            "critical", "high", "chaos", "events", "notes",
        ]
        if self.overall_path and not os.path.exists(self.overall_path):
            with open(self.overall_path, "w", newline="") as f:
                csv.DictWriter(f, fieldnames=self._overall_header).writeheader()

        self._category_header = [
            "session_id", "tick", "category", "name", "hybrid",
            "n", "avg_hp", "avg_aggression", "avg_speed", "severity",
        ]
        if self.enable_categories and self.category_path and not os.path.exists(self.category_path):
            with open(self.category_path, "w", newline="") as f:
                csv.DictWriter(f, fieldnames=self._category_header).writeheader()

    # ---------------- internal helpers ----------------
    @staticmethod
    def _avg(xs: List[float]) -> float:
        return (sum(xs) / len(xs)) if xs else float("nan")

    @staticmethod
    def _median(xs: List[float]) -> float:
        if not xs:
            return float("nan")
        q = sorted(xs)
        return q[int(round(0.5 * (len(q) - 1)))]

    def _overall_row(self, tick: int, pop: Iterable[Creature], events: int, notes: Optional[str]) -> Dict:
        pop = [c for c in pop if not c.is_extinct]
        summary = summarize_tick(tick, pop)
        hps = [c.hp for c in pop]
        return dict(
            session_id=self.session_id,
            tick=tick,
            n=summary["n"],
            hybrids=summary["hybrids"],
            total_hp=summary["total_hp"],
            avg_hp=self._avg(hps),
            avg_aggression=self._avg([c.aggression for c in pop]),
            avg_speed=self._avg([c.speed for c in pop]),
            avg_reproduction_rate=self._avg([c.reproduction_rate for c in pop]),
            hp_min=min(hps) if hps else float("nan"),
            hp_median=self._median(hps),
            hp_max=max(hps) if hps else float("nan"),
            critical=sum(1 for c in pop if c.severity is Severity.CRITICAL),
            high=sum(1 for c in pop if c.severity is Severity.HIGH),
            chaos=summary["chaos"],
            events=int(events),
            notes=(notes or ""),
        )

    def _category_rows(self, tick: int, pop: Iterable[Creature]) -> Iterable[Dict]:
        by_cat: Dict[str, List[Creature]] = {}
        for c in pop:
            if c.is_extinct:
                continue
            by_cat.setdefault(str(c.category), []).append(c)

        for cat, members in by_cat.items():
            yield dict(
                session_id=self.session_id, tick=tick,
                category=cat,
                name=members[0].name,
                hybrid=int(members[0].is_hybrid),
                n=len(members),
                avg_hp=self._avg([c.hp for c in members]),
                avg_aggression=self._avg([c.aggression for c in members]),
                avg_speed=self._avg([c.speed for c in members]),
                severity=members[0].severity.label,
            )

    # ---------------- public API ----------------
    def append_tick(self, tick: int, pop: Iterable[Creature], events: int = 0, notes: Optional[str] = None):
        """Append one overall row and one row per category (if enabled)."""
        pop = list(pop)
        if self.overall_path:
            with open(self.overall_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=self._overall_header)
                w.writerow(self._overall_row(tick, pop, events, notes))

        if self.enable_categories and self.category_path:
            with open(self.category_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=self._category_header)
                for r in self._category_rows(tick, pop):
                    w.writerow(r)
