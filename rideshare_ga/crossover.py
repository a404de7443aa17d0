#!/usr/bin/env python3
"""
Crossover Operator
Single-point vehicle crossover with repair so every passenger is placed exactly once
"""

import random
from typing import List, Optional, Set

from .fitness import SolutionEvaluator
from .models import ProblemData, Solution, Vehicle
from .route_calculator import RouteCalculator


class CrossoverOperator:
    """Combines two parent solutions into one child"""

    def __init__(self, problem_data: ProblemData, route_calculator: RouteCalculator,
                 evaluator: SolutionEvaluator, rng: Optional[random.Random] = None):
        self.problem_data = problem_data
        self.route_calculator = route_calculator
        self.evaluator = evaluator
        self.rng = rng if rng is not None else random.Random()

    def crossover(self, parent1: Solution, parent2: Solution) -> Solution:
        """Create a child from two parents

        Vehicles before a random split point inherit parent1's passengers at the
        same vehicle index, the rest inherit parent2's. Passengers already placed
        are skipped and inherited lists are cut at capacity. Passengers left over
        are then inserted by marginal cost.

        Args:
            parent1: First parent (not modified)
            parent2: Second parent (not modified)

        Returns:
            Scored child solution
        """
        vehicles = self.route_calculator.deep_copy_vehicles()
        vehicle_count = len(vehicles)
        split = self.rng.randint(1, vehicle_count - 1) if vehicle_count > 1 else 1

        placed: Set[int] = set()
        for index, vehicle in enumerate(vehicles):
            parent = parent1 if index < split else parent2
            if index >= len(parent.vehicles):
                continue
            self._inherit(vehicle, parent.vehicles[index], placed)

        self._repair(vehicles, placed)

        child = Solution(vehicles)
        child.creation_method = "crossover"
        child.generation = max(parent1.generation, parent2.generation) + 1
        child.score = self.evaluator.evaluate(child)
        return child

    def _inherit(self, vehicle: Vehicle, source: Vehicle, placed: Set[int]):
        for passenger in source.assigned_passengers:
            if len(vehicle.assigned_passengers) >= vehicle.capacity:
                break
            if passenger.id in placed:
                continue
            vehicle.assigned_passengers.append(passenger)
            placed.add(passenger.id)

    def _repair(self, vehicles: List[Vehicle], placed: Set[int]):
        """Insert every passenger not yet placed, preferring vehicles with room"""
        calc = self.route_calculator
        for passenger in self.problem_data.passengers:
            if passenger.id in placed:
                continue

            candidates = [v for v in vehicles if v.has_spare_capacity]
            if candidates:
                target = min(candidates, key=lambda v: calc.marginal_insertion_cost(v, passenger))
            else:
                # Fleet is full, accept an overload on the cheapest least-loaded vehicle
                target = min(vehicles, key=lambda v: (calc.marginal_insertion_cost(v, passenger),
                                                      len(v.assigned_passengers)))
            target.assigned_passengers.append(passenger)
            placed.add(passenger.id)
