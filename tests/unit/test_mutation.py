#!/usr/bin/env python3
"""
Unit tests for mutation operators
"""

import random
import unittest
from collections import Counter
from unittest.mock import Mock

from rideshare_ga import MutationOperator, MutationType, PopulationManager
from ga_test_utils import RideShareTestBase


class TestMutationOperator(RideShareTestBase):
    """Test each mutation and the random dispatcher"""

    def setUp(self):
        """Set up test fixtures"""
        super().setUp()
        self.mutation = MutationOperator(self.calculator, self.evaluator, self.rng)
        self.manager = PopulationManager(self.problem, self.calculator, self.evaluator, self.rng)

    def _counts(self, solution):
        return [len(v.assigned_passengers) for v in solution.vehicles]

    def test_swap_preserves_vehicle_counts(self):
        for _ in range(20):
            solution = self.manager.create_random_solution()
            counts = self._counts(solution)
            self.mutation.swap_passengers(solution)
            self.assertEqual(self._counts(solution), counts)
            self.assert_each_passenger_once(solution)

    def test_swap_needs_two_non_empty_vehicles(self):
        solution = self.make_solution({0: [1, 2, 3]})
        self.assertFalse(self.mutation.swap_passengers(solution))
        self.assertEqual(solution.assigned_passenger_ids(), [1, 2, 3])

    def test_swap_exchanges_between_vehicles(self):
        solution = self.make_solution({0: [1], 2: [3]})
        self.assertTrue(self.mutation.swap_passengers(solution))
        self.assertEqual(solution.assigned_passenger_ids(), [3, 1])

    def test_reorder_keeps_passengers_in_vehicle(self):
        for _ in range(20):
            solution = self.make_solution({0: [1, 2, 4], 1: [5, 6]})
            self.mutation.reorder_passengers(solution)
            self.assertEqual(sorted(p.id for p in solution.vehicles[0].assigned_passengers), [1, 2, 4])
            self.assertEqual(sorted(p.id for p in solution.vehicles[1].assigned_passengers), [5, 6])

    def test_reorder_reverses_segment(self):
        rng = Mock()
        rng.choice.side_effect = lambda seq: seq[0]
        rng.randrange.side_effect = [3, 1]
        mutation = MutationOperator(self.calculator, self.evaluator, rng)

        solution = self.make_solution({0: [1, 2, 3, 4, 5]})
        solution.vehicles[0].capacity = 5
        self.assertTrue(mutation.reorder_passengers(solution))
        self.assertEqual(solution.assigned_passenger_ids(), [1, 4, 3, 2, 5])

    def test_reorder_same_positions_is_noop(self):
        rng = Mock()
        rng.choice.side_effect = lambda seq: seq[0]
        rng.randrange.side_effect = [2, 2]
        mutation = MutationOperator(self.calculator, self.evaluator, rng)

        solution = self.make_solution({0: [1, 2, 3]})
        self.assertFalse(mutation.reorder_passengers(solution))
        self.assertEqual(solution.assigned_passenger_ids(), [1, 2, 3])

    def test_reorder_two_passengers_swaps_half_the_time(self):
        rng = Mock()
        rng.choice.side_effect = lambda seq: seq[0]
        rng.random.side_effect = [0.2, 0.7]
        mutation = MutationOperator(self.calculator, self.evaluator, rng)

        solution = self.make_solution({0: [1, 2]})
        self.assertTrue(mutation.reorder_passengers(solution))
        self.assertEqual(solution.assigned_passenger_ids(), [2, 1])
        self.assertFalse(mutation.reorder_passengers(solution))
        self.assertEqual(solution.assigned_passenger_ids(), [2, 1])

    def test_move_changes_vehicle(self):
        solution = self.make_solution({0: [1]})
        self.assertTrue(self.mutation.move_passenger(solution))
        self.assertEqual(solution.vehicles[0].assigned_passengers, [])
        self.assertEqual(solution.passenger_count(), 1)

    def test_move_may_overload_by_default(self):
        overloads = 0
        for seed in range(40):
            mutation = MutationOperator(self.calculator, self.evaluator, random.Random(seed))
            solution = self.make_solution({0: [1], 1: [2, 3], 2: [4, 5]})
            mutation.move_passenger(solution)
            overloads += solution.has_capacity_overload()
        self.assertGreater(overloads, 0)

    def test_move_respects_capacity_when_disallowed(self):
        for seed in range(40):
            mutation = MutationOperator(self.calculator, self.evaluator, random.Random(seed),
                                        allow_capacity_increasing_moves=False)
            solution = self.make_solution({0: [1], 1: [2, 3], 2: [4, 5]})
            mutation.move_passenger(solution)
            self.assert_no_overload(solution)

    def test_move_skipped_when_no_target_has_room(self):
        mutation = MutationOperator(self.calculator, self.evaluator, self.rng,
                                    allow_capacity_increasing_moves=False)
        solution = self.make_solution({0: [1, 2, 3], 1: [4, 5], 2: [6]})
        solution.vehicles[2].capacity = 1
        self.assertFalse(mutation.move_passenger(solution))

    def test_optimize_routes_never_lengthens(self):
        for _ in range(20):
            solution = self.make_solution({0: [4, 1, 6, 2]})
            solution.vehicles[0].capacity = 4
            before = self.calculator.route_distance(solution.vehicles[0])
            changed = self.mutation.optimize_routes(solution)
            after = self.calculator.route_distance(solution.vehicles[0])

            self.assertLessEqual(after, before + 1e-9)
            if changed:
                self.assertLess(after, before)
            self.assertEqual(sorted(solution.assigned_passenger_ids()), [1, 2, 4, 6])

    def test_optimize_routes_needs_four_passengers(self):
        solution = self.make_solution({0: [4, 1, 6]})
        self.assertFalse(self.mutation.optimize_routes(solution))

    def test_optimize_capacity_resolves_overload(self):
        solution = self.make_solution({0: [1, 2, 3, 4, 5], 1: [6]})
        self.assertTrue(self.mutation.optimize_capacity(solution))
        self.assert_no_overload(solution)
        self.assert_each_passenger_once(solution)

    def test_optimize_capacity_never_overfills_targets(self):
        vehicles = [self.make_vehicle(1, 1, 32.14, 34.80), self.make_vehicle(2, 2, 32.06, 34.84)]
        problem = self.create_problem(self.passengers, vehicles)
        solution = self.make_solution({0: [1, 2, 3, 4], 1: [5]}, problem)
        mutation = MutationOperator(self.calculator, self.evaluator, self.rng)

        self.assertTrue(mutation.optimize_capacity(solution))
        self.assertEqual(len(solution.vehicles[1].assigned_passengers), 2)
        self.assertEqual(len(solution.vehicles[0].assigned_passengers), 3)

    def test_optimize_capacity_without_overload_is_noop(self):
        solution = self.make_solution({0: [1, 2], 1: [3]})
        self.assertFalse(self.mutation.optimize_capacity(solution))
        self.assertEqual(solution.assigned_passenger_ids(), [1, 2, 3])

    def test_mutate_rescores_and_counts(self):
        solution = self.manager.create_random_solution()
        chosen = self.mutation.mutate(solution)

        self.assertIsInstance(chosen, MutationType)
        self.assertEqual(solution.score, self.evaluator.evaluate(solution))
        self.assertEqual(self.mutation.stats[chosen.value]['applied'], 1)

    def test_mutations_preserve_passenger_set(self):
        solution = self.manager.create_random_solution()
        for _ in range(200):
            self.mutation.mutate(solution)
        self.assert_each_passenger_once(solution)

    def test_mutate_chooses_all_types(self):
        solution = self.manager.create_random_solution()
        chosen = Counter(self.mutation.mutate(solution) for _ in range(200))
        self.assertEqual(set(chosen), set(MutationType))


if __name__ == '__main__':
    unittest.main()
