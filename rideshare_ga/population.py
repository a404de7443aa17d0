#!/usr/bin/env python3
"""
GA Population Initialization
Seeds the first generation with a greedy, an even-distribution and random assignments
"""

import random
import logging
from typing import List, Optional

from .common import OptimizationError
from .fitness import SolutionEvaluator
from .geo import haversine_km
from .models import Passenger, ProblemData, Solution, Vehicle
from .route_calculator import RouteCalculator

logger = logging.getLogger(__name__)


class PopulationManager:
    """Creates initial populations of scored solutions"""

    def __init__(self, problem_data: ProblemData, route_calculator: RouteCalculator,
                 evaluator: SolutionEvaluator, rng: Optional[random.Random] = None):
        """Initialize population creator

        Args:
            problem_data: Problem snapshot (passengers and vehicle templates)
            route_calculator: Supplies fresh vehicles and insertion costs
            evaluator: Scores each seed before it joins the population
            rng: Run random generator; a fresh unseeded one when omitted
        """
        self.problem_data = problem_data
        self.route_calculator = route_calculator
        self.evaluator = evaluator
        self.rng = rng if rng is not None else random.Random()

    def generate_initial_population(self, size: int) -> List[Solution]:
        """Create initial population

        Args:
            size: Population size (at least 2)

        Returns:
            Greedy seed, even-distribution seed, then random seeds up to ``size``
        """
        if size < 2:
            raise ValueError(f"Population size must be at least 2, got {size}")

        population = [self.create_greedy_solution(), self.create_even_distribution_solution()]
        while len(population) < size:
            population.append(self.create_random_solution())

        logger.debug(f"Created initial population of {len(population)} solutions")
        return population

    def create_greedy_solution(self) -> Solution:
        """Farthest-from-destination passengers first, each to the nearest vehicle with room"""
        vehicles = self.route_calculator.deep_copy_vehicles()
        calc = self.route_calculator

        ordered = sorted(self.problem_data.passengers,
                         key=lambda p: calc.distance_to_destination(p.latitude, p.longitude),
                         reverse=True)

        for passenger in ordered:
            candidates = [v for v in vehicles if v.has_spare_capacity]
            if candidates:
                target = min(candidates, key=lambda v: self._start_distance(v, passenger))
            else:
                target = min(vehicles, key=lambda v: len(v.assigned_passengers))
            target.assigned_passengers.append(passenger)

        return self._finish(vehicles, "greedy")

    def create_even_distribution_solution(self) -> Solution:
        """Give each vehicle the same number of its nearest passengers, then place leftovers"""
        vehicles = self.route_calculator.deep_copy_vehicles()
        remaining = list(self.problem_data.passengers)
        vehicle_count = len(vehicles)
        if vehicle_count == 0:
            raise OptimizationError("Cannot distribute passengers without vehicles")

        per_vehicle = min(len(remaining) // vehicle_count,
                          self.problem_data.total_capacity // vehicle_count,
                          self.problem_data.min_capacity)

        for vehicle in vehicles:
            if not remaining:
                break
            nearest = sorted(remaining, key=lambda p: self._start_distance(vehicle, p))[:per_vehicle]
            for passenger in nearest:
                vehicle.assigned_passengers.append(passenger)
                remaining.remove(passenger)

        for passenger in remaining:
            candidates = [v for v in vehicles if v.has_spare_capacity]
            if candidates:
                target = min(candidates, key=lambda v: self._start_distance(v, passenger))
            else:
                target = min(vehicles, key=lambda v: len(v.assigned_passengers))
            target.assigned_passengers.append(passenger)

        return self._finish(vehicles, "even_distribution")

    def create_random_solution(self) -> Solution:
        """Shuffle passengers and deal a random number to each vehicle"""
        vehicles = self.route_calculator.deep_copy_vehicles()
        shuffled = list(self.problem_data.passengers)
        self.rng.shuffle(shuffled)

        for vehicle in vehicles:
            if not shuffled:
                break
            count = self.rng.randint(0, min(vehicle.capacity, len(shuffled)))
            vehicle.assigned_passengers.extend(shuffled[:count])
            shuffled = shuffled[count:]

        for passenger in shuffled:
            target = min(vehicles, key=lambda v: (
                len(v.assigned_passengers),
                self.route_calculator.marginal_insertion_cost(v, passenger)))
            target.assigned_passengers.append(passenger)

        return self._finish(vehicles, "random")

    def _start_distance(self, vehicle: Vehicle, passenger: Passenger) -> float:
        return haversine_km(vehicle.start_latitude, vehicle.start_longitude,
                            passenger.latitude, passenger.longitude)

    def _finish(self, vehicles: List[Vehicle], method: str) -> Solution:
        solution = Solution(vehicles)
        solution.creation_method = method
        solution.generation = 0
        solution.score = self.evaluator.evaluate(solution)
        return solution
