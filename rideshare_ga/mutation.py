#!/usr/bin/env python3
"""
Mutation Operators
Five in-place mutations on passenger assignments and pickup order
"""

import random
from enum import Enum
from typing import Dict, Optional

from .fitness import SolutionEvaluator
from .models import Solution
from .route_calculator import RouteCalculator

MAX_ROUTE_OPTIMIZATION_ATTEMPTS = 10
MIN_PASSENGERS_FOR_ROUTE_OPTIMIZATION = 4


class MutationType(Enum):
    """Available mutation operations"""
    SWAP = "swap"
    REORDER = "reorder"
    MOVE = "move"
    OPTIMIZE_ROUTES = "optimize_routes"
    OPTIMIZE_CAPACITY = "optimize_capacity"


class MutationOperator:
    """Applies one random mutation to a solution and rescores it"""

    def __init__(self, route_calculator: RouteCalculator, evaluator: SolutionEvaluator,
                 rng: Optional[random.Random] = None,
                 allow_capacity_increasing_moves: bool = True):
        """Initialize mutation operator

        Args:
            route_calculator: Used to compare candidate pickup orders
            evaluator: Rescores the solution after mutation
            rng: Run random generator
            allow_capacity_increasing_moves: When False, Move only targets vehicles with room
        """
        self.route_calculator = route_calculator
        self.evaluator = evaluator
        self.rng = rng if rng is not None else random.Random()
        self.allow_capacity_increasing_moves = allow_capacity_increasing_moves

        self.stats: Dict[str, Dict[str, int]] = {
            mutation_type.value: {'applied': 0, 'changed': 0} for mutation_type in MutationType
        }

        self._operations = {
            MutationType.SWAP: self.swap_passengers,
            MutationType.REORDER: self.reorder_passengers,
            MutationType.MOVE: self.move_passenger,
            MutationType.OPTIMIZE_ROUTES: self.optimize_routes,
            MutationType.OPTIMIZE_CAPACITY: self.optimize_capacity,
        }

    def mutate(self, solution: Solution) -> MutationType:
        """Apply one uniformly chosen mutation in place and rescore

        Returns:
            The mutation type that was chosen
        """
        mutation_type = self.rng.choice(list(MutationType))
        changed = self._operations[mutation_type](solution)

        self.stats[mutation_type.value]['applied'] += 1
        if changed:
            self.stats[mutation_type.value]['changed'] += 1

        solution.score = self.evaluator.evaluate(solution)
        return mutation_type

    def swap_passengers(self, solution: Solution) -> bool:
        """Exchange one random passenger between two different non-empty vehicles"""
        non_empty = [v for v in solution.vehicles if v.assigned_passengers]
        if len(non_empty) < 2:
            return False

        vehicle1, vehicle2 = self.rng.sample(non_empty, 2)
        index1 = self.rng.randrange(len(vehicle1.assigned_passengers))
        index2 = self.rng.randrange(len(vehicle2.assigned_passengers))

        vehicle1.assigned_passengers[index1], vehicle2.assigned_passengers[index2] = \
            vehicle2.assigned_passengers[index2], vehicle1.assigned_passengers[index1]
        return True

    def reorder_passengers(self, solution: Solution) -> bool:
        """Reverse a random pickup segment inside one vehicle"""
        candidates = [v for v in solution.vehicles if len(v.assigned_passengers) >= 2]
        if not candidates:
            return False

        vehicle = self.rng.choice(candidates)
        passengers = vehicle.assigned_passengers

        if len(passengers) == 2:
            if self.rng.random() < 0.5:
                passengers[0], passengers[1] = passengers[1], passengers[0]
                return True
            return False

        pos1 = self.rng.randrange(len(passengers))
        pos2 = self.rng.randrange(len(passengers))
        if pos1 == pos2:
            return False

        start, end = min(pos1, pos2), max(pos1, pos2)
        passengers[start:end + 1] = reversed(passengers[start:end + 1])
        return True

    def move_passenger(self, solution: Solution) -> bool:
        """Move one random passenger to a different vehicle"""
        sources = [i for i, v in enumerate(solution.vehicles) if v.assigned_passengers]
        if not sources or len(solution.vehicles) < 2:
            return False

        source_index = self.rng.choice(sources)
        targets = [i for i, v in enumerate(solution.vehicles)
                   if i != source_index and (self.allow_capacity_increasing_moves or v.has_spare_capacity)]
        if not targets:
            return False

        source = solution.vehicles[source_index]
        passenger = source.assigned_passengers.pop(self.rng.randrange(len(source.assigned_passengers)))
        solution.vehicles[self.rng.choice(targets)].assigned_passengers.append(passenger)
        return True

    def optimize_routes(self, solution: Solution) -> bool:
        """Try a few segment reversals on one vehicle and keep the shortest order"""
        candidates = [v for v in solution.vehicles
                      if len(v.assigned_passengers) >= MIN_PASSENGERS_FOR_ROUTE_OPTIMIZATION]
        if not candidates:
            return False

        vehicle = self.rng.choice(candidates)
        original = list(vehicle.assigned_passengers)
        count = len(original)
        attempts = min(MAX_ROUTE_OPTIMIZATION_ATTEMPTS, count * (count - 1) // 2)

        best_order = original
        best_distance = self.route_calculator.order_distance(vehicle, original)

        for _ in range(attempts):
            i, j = sorted(self.rng.sample(range(count), 2))
            trial = original[:i] + original[i:j + 1][::-1] + original[j + 1:]
            distance = self.route_calculator.order_distance(vehicle, trial)
            if distance < best_distance:
                best_order = trial
                best_distance = distance

        if best_order is original:
            return False

        vehicle.assigned_passengers = best_order
        vehicle.total_distance = best_distance
        return True

    def optimize_capacity(self, solution: Solution) -> bool:
        """Drain overloaded vehicles into the least-loaded vehicles with room"""
        overloaded = sorted((v for v in solution.vehicles if v.is_overloaded),
                            key=lambda v: len(v.assigned_passengers) - v.capacity,
                            reverse=True)
        changed = False

        for vehicle in overloaded:
            while vehicle.is_overloaded:
                targets = [v for v in solution.vehicles if v.has_spare_capacity]
                if not targets:
                    return changed
                target = min(targets, key=lambda v: len(v.assigned_passengers))
                target.assigned_passengers.append(vehicle.assigned_passengers.pop())
                changed = True

        return changed
