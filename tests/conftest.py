"""Shared fixtures for the bug zoo tests."""

import itertools

import pytest

from bug_zoo.sim.models import Creature, Severity, Status, Tag


class ZeroRNG:
    """random() always 0.0: every gate passes, every index is the first one."""

    def random(self):
        return 0.0


class OneishRNG:
    """random() just below 1.0: every probability gate fails."""

    def random(self):
        return 0.999999


_ids = itertools.count(1)


@pytest.fixture
def make_creature():
    def _make(name="Glow Moth", hp=80, aggression=50, speed=40, rate=0.4,
              severity=Severity.HIGH, category="memory_leak", breed="memory",
              status=Status.ROAMING, id=None):
        return Creature(
            id=id or f"test-{next(_ids)}",
            name=name,
            label="label",
            category=Tag.of(category),
            breed_type=Tag.of(breed),
            description="desc",
            severity=severity,
            hp=hp,
            aggression=aggression,
            speed=speed,
            reproduction_rate=rate,
            status=status,
        )
    return _make


@pytest.fixture
def zero_rng():
    return ZeroRNG()


@pytest.fixture
def oneish_rng():
    return OneishRNG()
