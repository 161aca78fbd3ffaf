#!/usr/bin/env python
"""Tests for the experiment helpers and the command-line runner."""
import random
import unittest

from uct_mcts.games.nim import NimState
from uct_mcts.experiments import move_distribution, play_game
from uct_mcts.mcts.agent import UCTAgent
from uct_mcts.mcts.config import UCTConfig
from uct_mcts.play import main, parse_args


class TestPlayGame(unittest.TestCase):
    """Test case for full self-play games."""

    def setUp(self):
        self.config = UCTConfig(iterations=1000, simulations_per_iteration=100)

    def test_plays_to_the_end(self):
        start = NimState(7)
        seen = []
        record = play_game(start, self.config, rng=random.Random(0),
                           on_move=lambda state, move: seen.append(state.chips))

        self.assertEqual(sum(move.chips for move in record.moves), 7)
        self.assertEqual(record.final_state.chips, 0)
        self.assertEqual(len(seen), record.num_moves)
        self.assertEqual(seen[-1], 0)
        self.assertEqual(start, NimState(7))

        # Players alternate, starting with player 1
        players = [move.player_id for move in record.moves]
        self.assertEqual(players, [1 + i % 2 for i in range(len(players))])

    def test_first_player_wins_from_winning_pile(self):
        record = play_game(NimState(7), self.config, rng=random.Random(1))
        self.assertEqual(record.winner, 1)
        self.assertEqual(record.moves[0].chips, 3)

    def test_second_player_wins_from_losing_pile(self):
        record = play_game(NimState(8), self.config, rng=random.Random(2))
        self.assertEqual(record.winner, 2)

    def test_with_agent(self):
        agent = UCTAgent(config=self.config, rng=random.Random(3))
        record = play_game(NimState(6), agent=agent)
        self.assertEqual(record.winner, 1)
        self.assertEqual(len(agent.move_history), record.num_moves)


class TestMoveDistribution(unittest.TestCase):
    """Test case for seeded move distributions."""

    def test_counts_one_move_per_seed(self):
        config = UCTConfig(iterations=1000, simulations_per_iteration=100)
        counts = move_distribution(lambda: NimState(6), config, seeds=range(5), progress=False)

        self.assertEqual(sum(counts.values()), 5)
        modal_move = counts.most_common(1)[0][0]
        self.assertEqual(modal_move.chips, 2)

    def test_same_seeds_same_distribution(self):
        config = UCTConfig(iterations=100, simulations_per_iteration=10)
        first = move_distribution(lambda: NimState(20), config, seeds=range(4), progress=False)
        second = move_distribution(lambda: NimState(20), config, seeds=range(4), progress=False)
        self.assertEqual(first, second)


class TestCommandLine(unittest.TestCase):
    """Smoke tests for the uct-nim runner."""

    def test_parse_defaults(self):
        args = parse_args([])
        self.assertEqual(args.chips, 100)
        self.assertEqual(args.ucbc, 1.0)
        self.assertEqual(args.iterations, 1000)
        self.assertEqual(args.simulations, 100)
        self.assertEqual(args.runs, 0)

    def test_play_game(self):
        argv = ["--chips", "6", "--iterations", "200", "--simulations", "20",
                "--seed", "3", "--show-tree", "--log-level", "WARNING"]
        self.assertEqual(main(argv), 0)

    def test_move_distribution(self):
        argv = ["--chips", "5", "--runs", "3", "--iterations", "200",
                "--seed", "1", "--log-level", "WARNING"]
        self.assertEqual(main(argv), 0)

    def test_invalid_configuration_fails(self):
        self.assertEqual(main(["--iterations", "0", "--log-level", "ERROR"]), 1)


if __name__ == "__main__":
    unittest.main()
