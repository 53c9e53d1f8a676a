# bug_zoo/sim/lineage.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Creature, Tag


@dataclass
class CategoryNode:
    tag: Tag
    name: str
    parents: Tuple[Tag, ...]
    birth_tick: int
    extinct_tick: Optional[int] = None
    current_count: int = 0


class LineageTracker:
    """
    Tracks creature categories as nodes in a family graph:
      - base categories are roots
      - hybrid categories point at both parent categories
      - birth_tick recorded on first appearance
      - extinct_tick set when the count drops to zero (cleared on a comeback)
    """
    def __init__(self):
        self.nodes: Dict[Tag, CategoryNode] = {}
        self.children: Dict[Tag, List[Tag]] = {}
        self._order: List[Tag] = []

    # ---- registration ----
    def register(self, tag: Tag, name: str, birth_tick: int) -> None:
        if tag in self.nodes:
            return
        for parent in tag.parents:
            if parent not in self.nodes:
                self.register(parent, str(parent), birth_tick)
        self.nodes[tag] = CategoryNode(tag=tag, name=name, parents=tag.parents, birth_tick=birth_tick)
        self.children.setdefault(tag, [])
        for parent in tag.parents:
            self.children.setdefault(parent, []).append(tag)
        self._order.append(tag)

    # ---- per-tick updates ----
    def update_from_population(self, creatures: Iterable[Creature], tick: int) -> None:
        for node in self.nodes.values():
            node.current_count = 0

        living = [c for c in creatures if not c.is_extinct]
        # base categories first so they are named after their creature
        for c in sorted(living, key=lambda c: c.is_hybrid):
            self.register(c.category, c.name, tick)
            self.nodes[c.category].current_count += 1

        for node in self.nodes.values():
            if node.current_count > 0:
                node.extinct_tick = None
            elif node.extinct_tick is None and node.birth_tick <= tick:
                node.extinct_tick = tick

    # ---- accessors ----
    def roots(self) -> List[Tag]:
        return [t for t in self._order if not self.nodes[t].parents]

    def hybrids(self) -> List[Tag]:
        return [t for t in self._order if self.nodes[t].parents]

    def alive(self) -> List[Tag]:
        return [t for t in self._order if self.nodes[t].current_count > 0]

    def get_creation_order(self) -> List[Tag]:
        return list(self._order)

    def has_data(self) -> bool:
        return len(self.nodes) > 0
