#!/usr/bin/env python
"""Tests for the search configuration."""
import unittest

from uct_mcts.mcts import DEFAULT_CONFIG
from uct_mcts.mcts.config import UCTConfig


class TestUCTConfig(unittest.TestCase):
    """Test case for UCTConfig."""

    def test_defaults(self):
        config = UCTConfig()
        self.assertEqual(config.iterations, 1000)
        self.assertEqual(config.simulations_per_iteration, 100)
        self.assertEqual(config.exploration_constant, 1.0)
        self.assertIsNone(config.time_limit)
        self.assertIsNone(config.seed)
        self.assertEqual(config, UCTConfig.default())
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_validation(self):
        invalid = [
            {"iterations": 0},
            {"simulations_per_iteration": -1},
            {"exploration_constant": -0.1},
            {"time_limit": 0},
        ]
        for params in invalid:
            with self.subTest(params=params):
                with self.assertRaises(ValueError):
                    UCTConfig(**params)

    def test_zero_simulations_and_exploration_are_allowed(self):
        config = UCTConfig(simulations_per_iteration=0, exploration_constant=0.0)
        self.assertEqual(config.simulations_per_iteration, 0)

    def test_presets(self):
        self.assertLess(UCTConfig.fast().iterations, UCTConfig.default().iterations)
        self.assertGreater(UCTConfig.deep().iterations, UCTConfig.default().iterations)

    def test_from_dict_accepts_aliases_and_ignores_unknown_keys(self):
        config = UCTConfig.from_dict({
            "iterations": 250,
            "simulationsPerIteration": 20,
            "explorationConstant": 0.5,
            "unknown": True,
        })
        self.assertEqual(config.iterations, 250)
        self.assertEqual(config.simulations_per_iteration, 20)
        self.assertEqual(config.exploration_constant, 0.5)

    def test_from_dict_validates(self):
        with self.assertRaises(ValueError):
            UCTConfig.from_dict({"iterations": -5})

    def test_to_dict(self):
        config = UCTConfig(iterations=10, seed=3)
        data = config.to_dict()
        self.assertEqual(set(data), {
            "iterations", "simulations_per_iteration", "exploration_constant",
            "time_limit", "seed",
        })
        self.assertEqual(UCTConfig.from_dict(data), config)

    def test_str(self):
        self.assertIn("iterations=10", str(UCTConfig(iterations=10)))


if __name__ == "__main__":
    unittest.main()
