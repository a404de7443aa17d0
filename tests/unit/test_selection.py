#!/usr/bin/env python3
"""
Unit tests for tournament selection
"""

import random
import unittest
from unittest.mock import Mock

from rideshare_ga import SelectionOperator, Solution
from ga_test_utils import RideShareTestBase


class TestSelectionOperator(RideShareTestBase):
    """Test tournament selection and parent pairing"""

    def setUp(self):
        """Set up test fixtures"""
        super().setUp()
        self.population = []
        for index, score in enumerate([10.0, 50.0, 30.0, 50.0]):
            solution = self.make_solution({0: [index + 1]})
            solution.score = score
            self.population.append(solution)

    def test_empty_population_raises(self):
        with self.assertRaises(ValueError):
            SelectionOperator(rng=self.rng).tournament_selection([])

    def test_winner_is_best_of_draws(self):
        rng = Mock()
        rng.randrange.side_effect = [0, 2, 0]
        selector = SelectionOperator(tournament_size=3, rng=rng)

        index, winner = selector.tournament_selection_with_index(self.population)
        self.assertEqual(index, 2)
        self.assertEqual(winner.score, 30.0)

    def test_first_drawn_wins_ties(self):
        rng = Mock()
        rng.randrange.side_effect = [3, 1]
        selector = SelectionOperator(tournament_size=2, rng=rng)

        index, _ = selector.tournament_selection_with_index(self.population)
        self.assertEqual(index, 3)

    def test_draw_count_capped_by_population(self):
        rng = Mock()
        rng.randrange.side_effect = [0, 1, 2, 3]
        selector = SelectionOperator(tournament_size=10, rng=rng)

        selector.tournament_selection(self.population)
        self.assertEqual(rng.randrange.call_count, 4)

    def test_returns_clone(self):
        selector = SelectionOperator(tournament_size=5, rng=self.rng)
        index, winner = selector.tournament_selection_with_index(self.population)

        self.assertIsNot(winner, self.population[index])
        self.assertEqual(winner.assigned_passenger_ids(), self.population[index].assigned_passenger_ids())
        winner.vehicles[0].assigned_passengers.clear()
        self.assertEqual(len(self.population[index].vehicles[0].assigned_passengers), 1)

    def test_select_parents_redraws_same_member(self):
        rng = Mock()
        # Tournaments of one draw: member 1, member 1 again (redrawn), then member 2
        rng.randrange.side_effect = [1, 1, 2]
        selector = SelectionOperator(tournament_size=1, rng=rng)

        parent1, parent2 = selector.select_parents(self.population)
        self.assertEqual(parent1.score, 50.0)
        self.assertEqual(parent2.score, 30.0)
        self.assertEqual(rng.randrange.call_count, 3)

    def test_select_parents_single_member(self):
        solo = self.population[:1]
        parent1, parent2 = SelectionOperator(rng=self.rng).select_parents(solo)
        self.assertIsNot(parent1, parent2)
        self.assertEqual(parent1.score, parent2.score)

    def test_selection_favours_higher_scores(self):
        population = []
        for score in range(20):
            solution = Solution([])
            solution.score = float(score)
            population.append(solution)

        selector = SelectionOperator(tournament_size=5, rng=random.Random(1))
        picks = [selector.tournament_selection(population).score for _ in range(200)]
        self.assertGreater(sum(picks) / len(picks), 9.5)


if __name__ == '__main__':
    unittest.main()
