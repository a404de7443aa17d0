#!/usr/bin/env python3
"""
Solution Fitness Evaluation
Scores assignments from route distance, passengers served and capacity violations
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List

from .models import ProblemData, Solution
from .route_calculator import RouteCalculator

# Score weights
DISTANCE_NUMERATOR = 1500.0
ASSIGNMENT_REWARD = 100.0
VEHICLE_USAGE_PENALTY = -10.0
OVERLOAD_PENALTY = -200.0
CAPACITY_VIOLATION_PENALTY = -300.0
UNASSIGNED_PENALTY = -1000.0


@dataclass
class ScoreBreakdown:
    """Metrics and score terms of one evaluation"""
    total_distance: float = 0.0
    assigned_count: int = 0
    used_vehicles: int = 0
    overloaded_vehicles: int = 0
    total_capacity_violation: int = 0
    unassigned_count: int = 0

    distance_score: float = 0.0
    assignment_score: float = 0.0
    vehicle_utilization_score: float = 0.0
    overload_penalty: float = 0.0
    capacity_violation_penalty: float = 0.0
    unassigned_penalty: float = 0.0

    @property
    def score(self) -> float:
        return (self.distance_score + self.assignment_score + self.vehicle_utilization_score +
                self.overload_penalty + self.capacity_violation_penalty + self.unassigned_penalty)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['score'] = self.score
        return data


class SolutionEvaluator:
    """Fitness evaluation for ride-sharing solutions (higher is better)"""

    def __init__(self, problem_data: ProblemData, route_calculator: RouteCalculator):
        """Initialize fitness evaluator

        Args:
            problem_data: Problem snapshot (passenger count drives the unassigned penalty)
            route_calculator: Calculator used for per-vehicle route distances
        """
        self.problem_data = problem_data
        self.route_calculator = route_calculator

        # Performance tracking
        self.evaluations = 0

    def evaluate(self, solution: Solution) -> float:
        """Score a solution

        Refreshes each used vehicle's total distance as a side effect. The
        solution's ``score`` attribute is left for the caller to assign.
        """
        return self.breakdown(solution).score

    def evaluate_population(self, population: List[Solution]) -> List[float]:
        """Score and assign every solution in a population"""
        scores = []
        for solution in population:
            solution.score = self.evaluate(solution)
            scores.append(solution.score)
        return scores

    def breakdown(self, solution: Solution) -> ScoreBreakdown:
        """Compute all metrics and score terms in one pass over the vehicles"""
        self.evaluations += 1
        result = ScoreBreakdown()

        for vehicle in solution.vehicles:
            count = len(vehicle.assigned_passengers)
            if count == 0:
                vehicle.total_distance = 0.0
                continue

            result.used_vehicles += 1
            if count > vehicle.capacity:
                result.overloaded_vehicles += 1
                result.total_capacity_violation += count - vehicle.capacity

            vehicle.total_distance = self.route_calculator.route_distance(vehicle)
            result.total_distance += vehicle.total_distance
            result.assigned_count += count

        result.unassigned_count = len(self.problem_data.passengers) - result.assigned_count

        result.distance_score = (DISTANCE_NUMERATOR / result.total_distance
                                 if result.total_distance > 0 else 0)
        result.assignment_score = result.assigned_count * ASSIGNMENT_REWARD
        result.vehicle_utilization_score = result.used_vehicles * VEHICLE_USAGE_PENALTY
        result.overload_penalty = result.overloaded_vehicles * OVERLOAD_PENALTY
        result.capacity_violation_penalty = result.total_capacity_violation * CAPACITY_VIOLATION_PENALTY
        result.unassigned_penalty = result.unassigned_count * UNASSIGNED_PENALTY
        return result
