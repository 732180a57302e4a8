import threading
import unittest

import numpy as np

from rubik_scramble.checks import find_repeated_axis, find_repeated_layer
from rubik_scramble.generator import InvalidLength, ScrambleGenerator, generate, sample_moves
from rubik_scramble.moves import BASE_LAYERS, HALF, QUARTER, REVERSE, ROTATIONS, WIDE_LAYERS, Move
from rubik_scramble.notation import format_scramble


class _ScriptedRng:
    """Feeds a fixed list of raw draws: layer index, rotation index, layer index, ..."""

    def __init__(self, draws):
        self.draws = list(draws)

    def integers(self, high):
        if not self.draws:
            raise AssertionError("scripted draws exhausted")
        value = self.draws.pop(0)
        assert 0 <= value < high, (value, high)
        return value


def _draw(layer: str, turns: int) -> list[int]:
    return [BASE_LAYERS.index(layer), ROTATIONS.index(turns)]


class TestScriptedDraws(unittest.TestCase):
    def test_single_quarter_turn(self):
        rng = _ScriptedRng(_draw("R", QUARTER))
        moves = generate(1, rng=rng)
        self.assertEqual(moves, [Move("R", QUARTER)])
        self.assertEqual(format_scramble(moves), "R")

    def test_cancellation_restarts_from_empty_sequence(self):
        draws = _draw("R", QUARTER) + _draw("R", REVERSE) + _draw("U", QUARTER) + _draw("F", HALF)
        result = sample_moves(2, BASE_LAYERS, _ScriptedRng(draws))
        self.assertEqual(format_scramble(result.moves), "U F2")
        self.assertEqual(result.stats.cancelled, 1)
        self.assertEqual(result.stats.draws, 4)

    def test_cancellation_continues_against_previous_tail(self):
        draws = (
            _draw("R", QUARTER)
            + _draw("U", QUARTER)
            + _draw("U", REVERSE)  # cancels U, tail is R again
            + _draw("M", QUARTER)  # same axis as R: rejected
            + _draw("F", HALF)
            + _draw("D", QUARTER)
        )
        result = sample_moves(3, BASE_LAYERS, _ScriptedRng(draws))
        self.assertEqual(format_scramble(result.moves), "R F2 D")
        self.assertEqual(result.stats.cancelled, 1)
        self.assertEqual(result.stats.rejected, 1)

    def test_merge_replaces_tail_rotation(self):
        draws = _draw("R", QUARTER) + _draw("L", QUARTER) + _draw("R", QUARTER) + _draw("U", REVERSE)
        result = sample_moves(2, BASE_LAYERS, _ScriptedRng(draws))
        self.assertEqual(format_scramble(result.moves), "R2 U'")
        self.assertEqual(result.stats.rejected, 1)
        self.assertEqual(result.stats.merged, 1)

    def test_wide_layers_are_drawn_from_extended_alphabet(self):
        draws = [WIDE_LAYERS.index("r"), 0, WIDE_LAYERS.index("R"), 0, WIDE_LAYERS.index("u"), 2]
        result = sample_moves(2, WIDE_LAYERS, _ScriptedRng(draws))
        self.assertEqual(format_scramble(result.moves), "r u'")


class TestGenerate(unittest.TestCase):
    def test_zero_length_is_invalid(self):
        with self.assertRaises(InvalidLength):
            generate(0)

    def test_non_positive_or_non_integer_lengths_are_invalid(self):
        for bad in (-1, 2.5, "3", None, True):
            with self.assertRaises(InvalidLength, msg=repr(bad)):
                generate(bad)

    def test_numpy_integer_length_is_accepted(self):
        self.assertEqual(len(generate(np.int64(7), seed=1)), 7)

    def test_length_and_adjacency_invariants(self):
        for wide in (False, True):
            for seed in range(25):
                for length in (1, 2, 3, 25, 60):
                    moves = generate(length, wide_moves=wide, seed=seed)
                    self.assertEqual(len(moves), length)
                    self.assertIsNone(find_repeated_layer(moves))
                    self.assertIsNone(find_repeated_axis(moves))
                    for m in moves:
                        self.assertIn(m.turns, ROTATIONS)

    def test_long_scramble_uses_whole_alphabet(self):
        moves = generate(4000, wide_moves=True, seed=5)
        self.assertEqual({m.layer for m in moves}, set(WIDE_LAYERS))
        self.assertEqual({m.turns for m in moves}, set(ROTATIONS))

    def test_base_alphabet_excludes_wide_layers(self):
        moves = generate(2000, seed=11)
        self.assertTrue({m.layer for m in moves} <= set(BASE_LAYERS))

    def test_fixed_seed_is_deterministic(self):
        self.assertEqual(generate(30, seed=123), generate(30, seed=123))
        self.assertEqual(generate(30, wide_moves=True, seed=9), generate(30, wide_moves=True, seed=9))


class TestScrambleGenerator(unittest.TestCase):
    def test_seeded_generators_match(self):
        g1 = ScrambleGenerator(seed=42)
        g2 = ScrambleGenerator(seed=42)
        self.assertEqual(g1.generate(20), g2.generate(20))
        self.assertEqual(g1.generate(20), g2.generate(20))
        self.assertEqual(g1.generated_count, 2)

    def test_per_call_seed_overrides_internal_rng(self):
        g = ScrambleGenerator(wide_moves=True)
        self.assertEqual(g.generate(15, seed=3), generate(15, wide_moves=True, seed=3))

    def test_detailed_stats_count_every_draw(self):
        result = ScrambleGenerator(seed=8).generate_detailed(100)
        s = result.stats
        self.assertEqual(len(result.moves), 100)
        appended = s.draws - s.rejected - s.merged - s.cancelled
        self.assertEqual(appended - s.cancelled, 100)

    def test_invalid_length_does_not_count(self):
        g = ScrambleGenerator()
        with self.assertRaises(InvalidLength):
            g.generate(0)
        self.assertEqual(g.generated_count, 0)

    def test_shared_generator_across_threads(self):
        g = ScrambleGenerator(seed=1)
        out: list[list[Move]] = []

        def worker():
            for _ in range(20):
                out.append(g.generate(25))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(out), 80)
        self.assertEqual(g.generated_count, 80)
        for moves in out:
            self.assertEqual(len(moves), 25)
            self.assertIsNone(find_repeated_axis(moves))


if __name__ == "__main__":
    unittest.main()
