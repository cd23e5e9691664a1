"""Tests for dice rolling utilities."""

import random

import pytest

from engine.dice import DiceResult, choose, make_rng, roll, roll_d20, roll_die


class TestRoll:
    """Tests for the roll() function."""

    def test_basic_roll(self):
        """Roll 1d6 with a seeded RNG produces expected result."""
        rng = random.Random(42)
        result = roll("1d6", rng=rng)
        assert isinstance(result, DiceResult)
        assert len(result.rolls) == 1
        assert 1 <= result.rolls[0] <= 6
        assert result.modifier == 0
        assert result.total == result.rolls[0]

    def test_multiple_dice(self):
        """Roll 3d6 produces 3 individual rolls."""
        rng = random.Random(42)
        result = roll("3d6", rng=rng)
        assert len(result.rolls) == 3
        assert all(1 <= r <= 6 for r in result.rolls)
        assert result.total == sum(result.rolls)

    def test_modifiers(self):
        """Positive and negative modifiers shift the total."""
        rng = random.Random(42)
        plus = roll("1d8+3", rng=rng)
        minus = roll("1d8-2", rng=rng)
        assert plus.total == plus.rolls[0] + 3
        assert minus.total == minus.rolls[0] - 2

    def test_invalid_notation(self):
        """Invalid notation raises ValueError."""
        with pytest.raises(ValueError):
            roll("bad")
        with pytest.raises(ValueError):
            roll("d6")
        with pytest.raises(ValueError):
            roll("2d")

    def test_seeded_determinism(self):
        """Same seed produces same results."""
        result1 = roll("4d6", rng=random.Random(123))
        result2 = roll("4d6", rng=random.Random(123))
        assert result1.rolls == result2.rolls
        assert result1.total == result2.total


class TestSingleDie:
    """Tests for roll_die() and roll_d20()."""

    def test_roll_die_in_range(self):
        rng = random.Random(42)
        for sides in (4, 6, 8):
            results = [roll_die(sides, rng=rng) for _ in range(200)]
            assert min(results) >= 1
            assert max(results) <= sides

    def test_d20_covers_range(self):
        rng = random.Random(42)
        results = {roll_d20(rng=rng) for _ in range(1000)}
        assert results == set(range(1, 21))

    def test_uses_injected_source(self):
        """Any object with randint() can stand in for the RNG."""

        class Loaded:
            def randint(self, a, b):
                return b

        assert roll_d20(rng=Loaded()) == 20
        assert roll_die(4, rng=Loaded()) == 4


class TestChoose:
    """Tests for choose()."""

    def test_picks_member(self):
        rng = random.Random(1)
        options = ["a", "b", "c"]
        assert all(choose(options, rng=rng) in options for _ in range(50))

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            choose([])


class TestMakeRng:
    """Tests for make_rng()."""

    def test_explicit_seed_is_replayable(self):
        assert make_rng(99).random() == make_rng(99).random()

    def test_returns_random_instance(self):
        assert isinstance(make_rng(), random.Random)
