"""
tests/test_narration.py - chaos score and narration bands
"""

import random

import pytest

from bug_zoo.sim.models import Severity, Status
from bug_zoo.sim.narration import chaos_band, chaos_score, pick_narration


class TestChaosScore:

    def test_empty(self):
        assert chaos_score([]) == 0

    def test_only_extinct(self, make_creature):
        assert chaos_score([make_creature(status=Status.EXTINCT)]) == 0

    def test_single_low_creature(self, make_creature):
        # 1/25*40 = 1.6, 50*0.3 = 15, severity 0 -> 16.6
        c = make_creature(aggression=50, severity=Severity.LOW)
        assert chaos_score([c]) == 17

    def test_severity_weights(self, make_creature):
        pop = [make_creature(aggression=0, severity=Severity.CRITICAL),
               make_creature(aggression=0, severity=Severity.HIGH)]
        # 2/25*40 = 3.2 + 0 + 14
        assert chaos_score(pop) == 17

    def test_saturates_at_100(self, make_creature):
        pop = [make_creature(aggression=100, severity=Severity.CRITICAL) for _ in range(40)]
        assert chaos_score(pop) == 100

    def test_extinct_members_ignored(self, make_creature):
        live = make_creature(aggression=50, severity=Severity.LOW)
        dead = make_creature(aggression=100, severity=Severity.CRITICAL, status=Status.EXTINCT)
        assert chaos_score([live, dead]) == chaos_score([live])


class TestNarration:

    @pytest.mark.parametrize("chaos,band", [(0, "calm"), (29, "calm"), (30, "unstable"),
                                            (69, "unstable"), (70, "apocalyptic"), (100, "apocalyptic")])
    def test_bands(self, chaos, band):
        assert chaos_band(chaos) == band

    def test_mentions_count(self):
        for chaos in (10, 50, 90):
            assert "7" in pick_narration(chaos, 7, random.Random(chaos))

    def test_singular_agreement(self, zero_rng):
        line = pick_narration(10, 1, zero_rng)
        assert line == "The ecosystem remains calm with 1 creature peacefully coexisting."

    def test_plural_agreement(self, zero_rng):
        line = pick_narration(50, 4, zero_rng)
        assert line == "Tensions rise in the ecosystem. 4 creatures show signs of instability."

    def test_seeded_rng_repeats(self):
        a = [pick_narration(80, 5, random.Random(3)) for _ in range(3)]
        assert len(set(a)) == 1

    def test_default_rng(self):
        assert pick_narration(95, 2).strip()
