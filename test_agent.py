#!/usr/bin/env python
"""Tests for the UCT agent."""
import io
import json
import os
import random
import tempfile
import unittest

from rich.console import Console

from uct_mcts.core.errors import NoMovesAvailableError
from uct_mcts.games.nim import NimMove, NimState
from uct_mcts.mcts.agent import UCTAgent
from uct_mcts.mcts.config import UCTConfig


class TestUCTAgent(unittest.TestCase):
    """Test case for UCTAgent."""

    def setUp(self):
        self.config = UCTConfig(iterations=300, simulations_per_iteration=50)
        self.agent = UCTAgent(config=self.config, rng=random.Random(42), name="Test Agent")

    def test_select_move_returns_legal_move(self):
        state = NimState(10)
        move = self.agent.select_move(state)
        self.assertIn(move, state.legal_moves())
        self.assertEqual(state, NimState(10))

        stats = self.agent.get_last_statistics()
        self.assertEqual(stats["iterations"], 300)
        self.assertIn("total_time", stats)
        self.assertIsNotNone(self.agent.last_tree)
        self.assertEqual(len(self.agent.move_history), 1)

    def test_forced_move_skips_search(self):
        move = self.agent.select_move(NimState(1))
        self.assertEqual(move, NimMove(1, 1))
        self.assertTrue(self.agent.last_stats["forced_move"])
        self.assertIsNone(self.agent.last_tree)
        self.assertEqual(self.agent.get_principal_variation(), [])
        self.assertEqual(self.agent.get_move_statistics(), {})

    def test_game_over_raises(self):
        with self.assertRaises(NoMovesAvailableError):
            self.agent.select_move(NimState(0))

    def test_seeded_agents_agree(self):
        other = UCTAgent(config=self.config, rng=random.Random(42))
        for chips in (13, 9, 6):
            self.assertEqual(self.agent.select_move(NimState(chips)),
                             other.select_move(NimState(chips)))

    def test_rng_defaults_to_config_seed(self):
        config = UCTConfig(iterations=200, seed=5)
        first = UCTAgent(config=config).select_move(NimState(11))
        second = UCTAgent(config=config).select_move(NimState(11))
        self.assertEqual(first, second)

    def test_analysis_after_search(self):
        move = self.agent.select_move(NimState(7))
        pv = self.agent.get_principal_variation()
        self.assertEqual(pv[0][0], move)

        stats = self.agent.get_move_statistics()
        self.assertIn(str(move), stats)
        self.assertEqual(sum(s["visits"] for s in stats.values()), 300)

    def test_reset_statistics(self):
        self.agent.select_move(NimState(7))
        self.agent.reset_statistics()
        self.assertEqual(self.agent.last_stats, {})
        self.assertEqual(self.agent.move_history, [])
        self.assertIsNone(self.agent.last_tree)

    def test_save_statistics(self):
        self.agent.select_move(NimState(9))
        self.agent.select_move(NimState(1))

        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "stats.json")
            self.agent.save_statistics(path)
            with open(path) as f:
                data = json.load(f)

        self.assertEqual(data["agent_name"], "Test Agent")
        self.assertEqual(data["total_moves"], 2)
        self.assertEqual(data["config"]["iterations"], 300)
        self.assertEqual(data["history"][1]["move"], "player 1 takes 1 chips")
        self.assertNotIn("move_visits", data["history"][0]["stats"])

    def test_verbose_output(self):
        buffer = io.StringIO()
        agent = UCTAgent(config=self.config, rng=random.Random(0), name="Loud Agent",
                         verbose=True, console=Console(file=buffer, width=120))
        agent.select_move(NimState(6))

        output = buffer.getvalue()
        self.assertIn("Loud Agent", output)
        self.assertIn("Top moves", output)

    def test_str(self):
        self.assertEqual(str(self.agent), "Test Agent (UCT, 300 iterations)")


if __name__ == "__main__":
    unittest.main()
